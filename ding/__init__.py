"""ding - run a command and get notified when it starts, finishes or crashes."""

__version__ = "0.1.0"
__logo__ = "🔔"
