"""Enums for the singleton slot.

Kept in a separate module to avoid circular imports.
"""

from enum import StrEnum


class SlotState(StrEnum):
    """Lifecycle state of a singleton slot."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"  # terminal, except for the test-only reset
