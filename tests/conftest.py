"""Shared fixtures for ding tests."""

from __future__ import annotations

from typing import Sequence

import pytest

from ding.errors import DeliveryError
from ding.lifecycle.events import LifecycleEvent
from ding.senders.base import NotificationSender


class SpySender(NotificationSender):
    """Records every delivered event; can be told to fail on one kind."""

    name = "spy"

    def __init__(self, command: Sequence[str], fail_on: str | None = None):
        super().__init__(None, command)
        self.fail_on = fail_on
        self.events: list[LifecycleEvent] = []
        self.closed = False

    async def deliver(self, event: LifecycleEvent) -> None:
        if event.kind == self.fail_on:
            raise DeliveryError(self.name, "endpoint unreachable")
        self.events.append(event)

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def spy_sender():
    def factory(command: Sequence[str], fail_on: str | None = None) -> SpySender:
        return SpySender(command, fail_on=fail_on)

    return factory
