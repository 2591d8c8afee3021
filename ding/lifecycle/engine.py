"""Lifecycle engine: notify, run, notify again."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING

from loguru import logger

from ding.errors import DeliveryError
from ding.lifecycle.events import Crashed, Finished, LifecycleEvent, LifecycleState, Started
from ding.runner.command import CommandRunner, Completed, ExecutionOutcome, validate_command

if TYPE_CHECKING:
    from ding.senders.base import NotificationSender


def _elapsed_since(started_at: float) -> timedelta:
    return timedelta(seconds=max(time.monotonic() - started_at, 0.0))


@dataclass
class RunReport:
    """What happened during one monitored run."""

    state: LifecycleState
    outcome: ExecutionOutcome
    elapsed: timedelta
    events: list[LifecycleEvent] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state is LifecycleState.COMPLETED


class LifecycleEngine:
    """
    Drive a single command through ``NOT_STARTED -> RUNNING -> COMPLETED|CRASHED``.

    Exactly one delivery happens per transition. Delivery errors are never
    swallowed: a failed ``Started`` delivery aborts before the command is
    spawned, and a failed terminal delivery becomes the run's error.
    """

    def __init__(self, sender: NotificationSender, runner: CommandRunner | None = None):
        self.sender = sender
        self.runner = runner or CommandRunner()
        self.state = LifecycleState.NOT_STARTED

    async def start(self) -> RunReport:
        if self.state is not LifecycleState.NOT_STARTED:
            raise RuntimeError(f"Lifecycle already {self.state.value}")

        command = validate_command(self.sender.get_command_spec())
        command_text = " ".join(command)
        events: list[LifecycleEvent] = []

        started_at = time.monotonic()
        started = Started(command_text=command_text)
        await self._deliver(started)
        events.append(started)
        self.state = LifecycleState.RUNNING
        logger.info(f"Running: {command_text}")

        outcome = await self.runner.run(command)
        elapsed = _elapsed_since(started_at)

        if isinstance(outcome, Completed):
            terminal: LifecycleEvent = Finished(elapsed=elapsed)
            self.state = LifecycleState.COMPLETED
        else:
            terminal = Crashed(command_text=command_text, error_text=outcome.reason, elapsed=elapsed)
            self.state = LifecycleState.CRASHED
        logger.info(f"Run {self.state.value} after {elapsed.total_seconds():.2f}s")

        await self._deliver(terminal)
        events.append(terminal)
        return RunReport(state=self.state, outcome=outcome, elapsed=elapsed, events=events)

    async def _deliver(self, event: LifecycleEvent) -> None:
        try:
            await self.sender.deliver(event)
        except DeliveryError as e:
            e.with_phase(event.kind)
            logger.error(f"Notification failed: {e}")
            raise
        logger.debug(f"Delivered {event.kind} event via {self.sender.name}")
