"""Base class for notification senders."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ding.lifecycle.events import LifecycleEvent


class NotificationSender(ABC):
    """
    Abstract notification provider.

    A sender owns its endpoint configuration and the command it reports on.
    The lifecycle engine only ever talks to this interface, so a new provider
    is added by subclassing without touching the engine.
    """

    name: str = "base"

    def __init__(self, config: Any, command: Sequence[str]):
        self.config = config
        self._command = list(command)

    def get_command_spec(self) -> list[str]:
        """Return a copy of the configured command tokens."""
        return list(self._command)

    @abstractmethod
    async def deliver(self, event: LifecycleEvent) -> None:
        """
        Render and transmit a single lifecycle event.

        Raises:
            DeliveryError: If the provider did not accept the event.
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the sender."""
        return None

    async def __aenter__(self) -> NotificationSender:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
