"""Runtime-extensible registry of constructors."""

from .locks import ReadWriteLock
from .type_registry import Constructor, RegistryEntry, TypeRegistry

__all__ = [
    "Constructor",
    "ReadWriteLock",
    "RegistryEntry",
    "TypeRegistry",
]
