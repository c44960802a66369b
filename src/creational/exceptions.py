"""Common exceptions for the creational core.

Every error raised by slots, registries and factories derives from
``CreationalError`` so callers can catch the whole family at once.
"""

from collections.abc import Hashable


class CreationalError(Exception):
    """Base exception for all creational core errors."""


class UnknownKeyError(CreationalError, KeyError):
    """Raised when a registry is asked for a key that has no constructor.

    Also a ``KeyError`` so code written against plain mappings keeps working.
    """

    def __init__(self, key: Hashable, registry_name: str | None = None):
        self.key = key
        self.registry_name = registry_name
        where = f" in registry '{registry_name}'" if registry_name else ""
        super().__init__(f"No constructor registered for key {key!r}{where}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return str(self.args[0])


class InitializationFailure(CreationalError):
    """Raised when a constructor invoked by a slot or a registry fails.

    The original exception is kept on ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, name: str, cause: BaseException):
        self.name = name
        self.cause = cause
        super().__init__(f"Construction of '{name}' failed: {type(cause).__name__}: {cause}")


class ConcurrentWaitFailure(InitializationFailure):
    """Raised to callers that waited on a singleton construction that failed.

    ``cause`` is the very exception object the constructing caller saw.
    """

    def __init__(self, name: str, cause: BaseException):
        super().__init__(name, cause)
        self.args = (f"Awaited construction of '{name}' failed: {type(cause).__name__}: {cause}",)


class RegistrationError(CreationalError, TypeError):
    """Raised when a registry entry cannot be created, e.g. a non-callable constructor."""

    def __init__(self, key: Hashable, message: str):
        self.key = key
        super().__init__(message)


class SlotBusyError(CreationalError):
    """Raised when a singleton slot is reset while its construction is in flight."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Cannot reset '{name}' while its construction is in progress")
