"""Lifecycle event types."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Union


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LifecycleState(str, Enum):
    """State of a monitored run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    CRASHED = "crashed"

    def is_terminal(self) -> bool:
        return self in (LifecycleState.COMPLETED, LifecycleState.CRASHED)


@dataclass(frozen=True)
class Started:
    """The command is about to be spawned."""

    command_text: str
    timestamp: datetime = field(default_factory=_utcnow)

    kind = "started"


@dataclass(frozen=True)
class Finished:
    """The command completed successfully."""

    elapsed: timedelta
    timestamp: datetime = field(default_factory=_utcnow)

    kind = "finished"


@dataclass(frozen=True)
class Crashed:
    """The command failed to spawn or exited with an error."""

    command_text: str
    error_text: str
    elapsed: timedelta
    timestamp: datetime = field(default_factory=_utcnow)

    kind = "crashed"


LifecycleEvent = Union[Started, Finished, Crashed]
