"""CLI module for ding."""
