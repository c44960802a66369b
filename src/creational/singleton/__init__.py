"""Thread-safe lazy singleton holder."""

from .enums import SlotState
from .slot import SingletonSlot, singleton

__all__ = [
    "SingletonSlot",
    "SlotState",
    "singleton",
]
