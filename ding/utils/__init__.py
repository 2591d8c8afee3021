"""Utility helpers."""

from ding.utils.duration import format_duration

__all__ = ["format_duration"]
