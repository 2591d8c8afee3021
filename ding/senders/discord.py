"""Discord webhook sender.

Each lifecycle event becomes one embed message posted to the webhook with a
single ``POST``. There is no retry: a non-2xx answer or a transport error is
reported as a :class:`DeliveryError`.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

import httpx
from loguru import logger

from ding.config.schema import DiscordConfig
from ding.errors import DeliveryError
from ding.lifecycle.events import Crashed, Finished, LifecycleEvent, Started
from ding.senders.base import NotificationSender
from ding.utils.duration import format_duration

START_COLOR = 3917055
CRASH_COLOR = 14553618
FINISH_COLOR = 4452159

# Discord rejects embed descriptions longer than this
MAX_DESCRIPTION_LENGTH = 4096


def _code_block(text: str) -> str:
    block = f"```bash\n{text}\n```"
    overflow = len(block) - MAX_DESCRIPTION_LENGTH
    if overflow > 0:
        block = f"```bash\n...{text[overflow + 3:]}\n```"
    return block


def _elapsed_field(event: Finished | Crashed) -> dict[str, Any]:
    return {"name": "Elapsed time", "value": format_duration(event.elapsed), "inline": True}


def _embeds(event: LifecycleEvent) -> list[dict[str, Any]]:
    timestamp = event.timestamp.isoformat()

    if isinstance(event, Started):
        return [
            {
                "title": "🚀 Process started",
                "description": "Process has started with the following command 🧨",
                "color": START_COLOR,
                "fields": [],
                "timestamp": timestamp,
            },
            {
                "description": _code_block(event.command_text),
                "fields": [],
            },
        ]

    if isinstance(event, Crashed):
        return [
            {
                "title": "💥 Process crashed",
                "description": "Process has crashed for the following reason 😭",
                "timestamp": timestamp,
                "color": CRASH_COLOR,
                "fields": [_elapsed_field(event)],
            },
            {
                "title": "Crash log",
                "description": _code_block(event.error_text),
                "fields": [],
            },
        ]

    if isinstance(event, Finished):
        return [
            {
                "title": "🎉 Process finished!",
                "description": "Process has finished successfully ✅",
                "timestamp": timestamp,
                "color": FINISH_COLOR,
                "fields": [_elapsed_field(event)],
            },
        ]

    raise TypeError(f"Unknown lifecycle event: {event!r}")


def render_payload(event: LifecycleEvent, username: str = "ding") -> dict[str, Any]:
    """Build the webhook message for *event*."""
    return {
        "content": "",
        "tts": False,
        "embeds": _embeds(event),
        "components": [],
        "actions": {},
        "username": username,
    }


class DiscordSender(NotificationSender):
    """Posts lifecycle events to a Discord webhook."""

    name = "discord"

    def __init__(
        self,
        config: DiscordConfig,
        command: Sequence[str],
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(config, command)
        self.config: DiscordConfig = config
        self._client = httpx.AsyncClient(
            headers={
                "User-Agent": config.user_agent,
                "Content-Type": "application/json",
            },
            timeout=config.timeout,
            transport=transport,
        )

    async def deliver(self, event: LifecycleEvent) -> None:
        body = json.dumps(render_payload(event, self.config.username), ensure_ascii=False)
        logger.debug(f"Discord payload ({event.kind}): {body}")
        await self._post(body)

    async def _post(self, body: str) -> None:
        try:
            r = await self._client.post(self.config.webhook_url, content=body.encode("utf-8"))
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryError(self.name, f"{type(e).__name__}: {e}") from e

        if not r.is_success:
            logger.warning(f"Discord webhook answered {r.status_code}: {r.text[:200]}")
            raise DeliveryError(
                self.name,
                f"HTTP {r.status_code}",
                status_code=r.status_code,
            )

    async def aclose(self) -> None:
        await self._client.aclose()
