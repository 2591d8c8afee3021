"""Notification senders."""

from ding.senders.base import NotificationSender
from ding.senders.console import ConsoleSender
from ding.senders.discord import DiscordSender

__all__ = ["NotificationSender", "ConsoleSender", "DiscordSender"]
