"""Tests for ding.senders.discord — payload rendering and webhook delivery."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from ding.config.schema import DiscordConfig
from ding.errors import DeliveryError
from ding.lifecycle.events import Crashed, Finished, Started
from ding.senders.discord import (
    CRASH_COLOR,
    FINISH_COLOR,
    MAX_DESCRIPTION_LENGTH,
    START_COLOR,
    DiscordSender,
    render_payload,
)

WEBHOOK = "https://discord.test/api/webhooks/1/abc"


def _sender(handler, command=("echo", "hi")) -> DiscordSender:
    return DiscordSender(
        DiscordConfig(webhook_url=WEBHOOK),
        list(command),
        transport=httpx.MockTransport(handler),
    )


# ---------------------------------------------------------------------------
# Payload rendering
# ---------------------------------------------------------------------------

class TestRenderPayload:
    def test_top_level_shape(self):
        payload = render_payload(Started(command_text="ls"))
        assert list(payload) == ["content", "tts", "embeds", "components", "actions", "username"]
        assert payload["content"] == ""
        assert payload["tts"] is False
        assert payload["components"] == []
        assert payload["actions"] == {}
        assert payload["username"] == "ding"

    def test_started(self):
        payload = render_payload(Started(command_text="make build"))
        head, body = payload["embeds"]
        assert head["title"] == "🚀 Process started"
        assert head["description"] == "Process has started with the following command 🧨"
        assert head["color"] == START_COLOR == 3917055
        assert head["fields"] == []
        assert body == {"description": "```bash\nmake build\n```", "fields": []}

    def test_finished(self):
        payload = render_payload(Finished(elapsed=timedelta(seconds=65)))
        (head,) = payload["embeds"]
        assert head["title"] == "🎉 Process finished!"
        assert head["description"] == "Process has finished successfully ✅"
        assert head["color"] == FINISH_COLOR == 4452159
        assert head["fields"] == [{"name": "Elapsed time", "value": "1m 5s", "inline": True}]

    def test_crashed(self):
        event = Crashed(command_text="false", error_text="Process exited with code 1", elapsed=timedelta(seconds=3661))
        head, log = render_payload(event)["embeds"]
        assert head["title"] == "💥 Process crashed"
        assert head["description"] == "Process has crashed for the following reason 😭"
        assert head["color"] == CRASH_COLOR == 14553618
        assert head["fields"] == [{"name": "Elapsed time", "value": "1h 1m 1s", "inline": True}]
        assert log["title"] == "Crash log"
        assert log["description"] == "```bash\nProcess exited with code 1\n```"

    def test_timestamp_is_rfc3339_utc(self):
        ts = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        payload = render_payload(Started(command_text="ls", timestamp=ts))
        assert payload["embeds"][0]["timestamp"] == "2024-05-01T12:30:00+00:00"

    def test_custom_username(self):
        assert render_payload(Started(command_text="ls"), username="ci")["username"] == "ci"

    def test_long_crash_log_truncated_keeping_tail(self):
        error = "x" * 9000 + "THE END"
        event = Crashed(command_text="job", error_text=error, elapsed=timedelta(0))
        description = render_payload(event)["embeds"][1]["description"]
        assert len(description) == MAX_DESCRIPTION_LENGTH
        assert description.startswith("```bash\n...")
        assert description.endswith("THE END\n```")

    def test_special_characters_survive_json(self):
        payload = render_payload(Started(command_text='echo "quoted" \\ back'))
        decoded = json.loads(json.dumps(payload))
        assert 'echo "quoted" \\ back' in decoded["embeds"][1]["description"]


# ---------------------------------------------------------------------------
# Delivery
# ---------------------------------------------------------------------------

class TestDeliver:
    async def test_posts_json_with_fixed_headers(self):
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        async with _sender(handler) as sender:
            await sender.deliver(Started(command_text="echo hi"))

        assert len(requests) == 1
        req = requests[0]
        assert req.method == "POST"
        assert str(req.url) == WEBHOOK
        assert req.headers["user-agent"] == "ding"
        assert req.headers["content-type"] == "application/json"
        body = req.content.decode("utf-8")
        assert "🚀 Process started" in body
        assert json.loads(body)["embeds"][1]["description"] == "```bash\necho hi\n```"

    async def test_non_success_status_raises(self):
        async with _sender(lambda request: httpx.Response(404, text="Unknown Webhook")) as sender:
            with pytest.raises(DeliveryError) as exc_info:
                await sender.deliver(Finished(elapsed=timedelta(seconds=1)))

        err = exc_info.value
        assert err.provider == "discord"
        assert err.status_code == 404
        assert str(err).startswith("failed to deliver to discord")

    async def test_redirect_is_not_success(self):
        async with _sender(lambda request: httpx.Response(302)) as sender:
            with pytest.raises(DeliveryError):
                await sender.deliver(Started(command_text="ls"))

    async def test_transport_error_raises_delivery_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _sender(handler) as sender:
            with pytest.raises(DeliveryError) as exc_info:
                await sender.deliver(Started(command_text="ls"))

        assert "ConnectError" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_each_event_kind_delivered_independently(self):
        titles = []

        def handler(request: httpx.Request) -> httpx.Response:
            titles.append(json.loads(request.content)["embeds"][0]["title"])
            return httpx.Response(200)

        async with _sender(handler) as sender:
            await sender.deliver(Started(command_text="ls"))
            await sender.deliver(Crashed(command_text="ls", error_text="e", elapsed=timedelta(0)))
            await sender.deliver(Finished(elapsed=timedelta(0)))

        assert titles == ["🚀 Process started", "💥 Process crashed", "🎉 Process finished!"]

    def test_command_spec_is_a_copy(self):
        sender = _sender(lambda request: httpx.Response(200), command=["echo", "hi"])
        spec = sender.get_command_spec()
        spec.append("extra")
        assert sender.get_command_spec() == ["echo", "hi"]

    async def test_invalid_url_raises_delivery_error(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(204)

        sender = DiscordSender(
            DiscordConfig(webhook_url="https://discord.test/api/webhooks/1/a\tb"),
            ["echo", "hi"],
            transport=httpx.MockTransport(handler),
        )
        async with sender:
            with pytest.raises(DeliveryError) as exc_info:
                await sender.deliver(Started(command_text="echo hi"))

        assert calls == []
        assert "InvalidURL" in str(exc_info.value)
