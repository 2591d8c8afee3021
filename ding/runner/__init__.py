"""Child process execution."""

from ding.runner.command import CommandRunner, Completed, ExecutionOutcome, Failed, validate_command

__all__ = ["CommandRunner", "Completed", "ExecutionOutcome", "Failed", "validate_command"]
