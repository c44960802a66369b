"""Thread-safe lazy singletons and registry-based factories."""

from loguru import logger

from .exceptions import (
    ConcurrentWaitFailure,
    CreationalError,
    InitializationFailure,
    RegistrationError,
    SlotBusyError,
    UnknownKeyError,
)
from .factory import Factory
from .registry import RegistryEntry, TypeRegistry
from .settings import Settings, get_settings
from .singleton import SingletonSlot, SlotState, singleton

# Silent until setup_logging() enables it
logger.disable(__name__)

__all__ = [
    "ConcurrentWaitFailure",
    "CreationalError",
    "Factory",
    "InitializationFailure",
    "RegistrationError",
    "RegistryEntry",
    "Settings",
    "SingletonSlot",
    "SlotBusyError",
    "SlotState",
    "TypeRegistry",
    "UnknownKeyError",
    "get_settings",
    "singleton",
]
