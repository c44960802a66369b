"""Key-based object creation."""

from .factory import Factory

__all__ = ["Factory"]
