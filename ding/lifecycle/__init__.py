"""Notification lifecycle."""

from ding.lifecycle.engine import LifecycleEngine, RunReport
from ding.lifecycle.events import Crashed, Finished, LifecycleEvent, LifecycleState, Started

__all__ = [
    "LifecycleEngine",
    "RunReport",
    "LifecycleEvent",
    "LifecycleState",
    "Started",
    "Finished",
    "Crashed",
]
