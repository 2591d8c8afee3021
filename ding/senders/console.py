"""Console sender: prints events instead of posting them."""

from __future__ import annotations

from typing import Any, Sequence

import typer

from ding.lifecycle.events import Crashed, Finished, LifecycleEvent, Started
from ding.senders.base import NotificationSender
from ding.utils.duration import format_duration


def render_line(event: LifecycleEvent) -> str:
    stamp = event.timestamp.isoformat(timespec="seconds")
    if isinstance(event, Started):
        return f"[{stamp}] 🚀 started: {event.command_text}"
    if isinstance(event, Finished):
        return f"[{stamp}] 🎉 finished in {format_duration(event.elapsed)}"
    if isinstance(event, Crashed):
        return f"[{stamp}] 💥 crashed after {format_duration(event.elapsed)}: {event.error_text}"
    raise TypeError(f"Unknown lifecycle event: {event!r}")


class ConsoleSender(NotificationSender):
    """Writes one line per event to stdout. Useful for trying ding out."""

    name = "console"

    def __init__(self, config: Any = None, command: Sequence[str] = ()):
        super().__init__(config, command)

    async def deliver(self, event: LifecycleEvent) -> None:
        typer.echo(render_line(event))
