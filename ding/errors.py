"""Error types raised by ding."""

from __future__ import annotations

import errno as _errno


class DingError(Exception):
    """Base class for all ding errors."""

    exit_code: int = 1


class ConfigurationError(DingError):
    """Invalid or missing configuration, detected before anything runs."""

    exit_code = 2


class SpawnError(DingError):
    """The OS could not create (or wait on) the child process."""

    def __init__(self, command: str, cause: OSError):
        self.command = command
        self.cause = cause
        self.exit_code = _spawn_exit_code(cause)
        super().__init__(f"failed to spawn '{command}': {cause.strerror or cause}")


def _spawn_exit_code(cause: OSError) -> int:
    # Same codes a POSIX shell uses
    if isinstance(cause, FileNotFoundError) or cause.errno == _errno.ENOENT:
        return 127
    if isinstance(cause, PermissionError) or cause.errno == _errno.EACCES:
        return 126
    return 1


class DeliveryError(DingError):
    """A notification could not be delivered to its provider."""

    exit_code = 3

    def __init__(
        self,
        provider: str,
        reason: str = "",
        *,
        phase: str | None = None,
        status_code: int | None = None,
    ):
        self.provider = provider
        self.reason = reason
        self.phase = phase
        self.status_code = status_code
        super().__init__(self._render())

    def _render(self) -> str:
        msg = f"failed to deliver to {self.provider}"
        if self.phase:
            msg += f" ({self.phase} event)"
        if self.reason:
            msg += f": {self.reason}"
        return msg

    def with_phase(self, phase: str) -> DeliveryError:
        """Return this error tagged with the lifecycle phase it happened in."""
        self.phase = phase
        self.args = (self._render(),)
        return self
