"""Type registry for key-based object creation."""

from collections.abc import Callable, Hashable
from dataclasses import dataclass

from loguru import logger

from creational.exceptions import InitializationFailure, RegistrationError, UnknownKeyError

from .locks import ReadWriteLock

type Constructor[T] = Callable[[], T]


@dataclass(frozen=True)
class RegistryEntry[K: Hashable, T]:
    """A key bound to the zero-argument constructor that produces its instances."""

    key: K
    constructor: Constructor[T]


class TypeRegistry[K: Hashable, T]:
    """Concurrent mapping from a key to a constructor for a common capability.

    Adding a producible type only takes a ``register`` call; the lookup
    logic never changes. Lookups share a read lock, registrations take the
    write lock, and constructors always run outside the lock.
    """

    def __init__(self, name: str = "registry"):
        """Initialize an empty type registry.

        Args:
            name: Registry name used in logs and errors
        """
        self.name = name
        self._entries: dict[K, RegistryEntry[K, T]] = {}
        self._lock = ReadWriteLock()

    def register(self, key: K, constructor: Constructor[T]) -> None:
        """Register a constructor for a key, replacing any existing entry.

        Args:
            key: The key callers will pass to ``create``
            constructor: Zero-argument callable producing a new instance

        Raises:
            RegistrationError: If constructor is not callable
        """
        entry = self._make_entry(key, constructor)
        with self._lock.write():
            replaced = key in self._entries
            self._entries[key] = entry

        if replaced:
            logger.debug(f"Replaced constructor for {key!r} in '{self.name}': {constructor}")
        else:
            logger.debug(f"Registered constructor for {key!r} in '{self.name}': {constructor}")

    def register_if_absent(self, key: K, constructor: Constructor[T]) -> bool:
        """Register a constructor only if the key is not registered yet.

        Returns:
            True if the entry was added, False if the key was already taken
        """
        entry = self._make_entry(key, constructor)
        with self._lock.write():
            if key in self._entries:
                return False
            self._entries[key] = entry

        logger.debug(f"Registered constructor for {key!r} in '{self.name}': {constructor}")
        return True

    def register_as(self, key: K) -> Callable[[Constructor[T]], Constructor[T]]:
        """Decorator form of ``register``.

        Example:
            ```python
            @shapes.register_as("hexagon")
            class Hexagon(Shape):
                ...
            ```
        """

        def decorator(constructor: Constructor[T]) -> Constructor[T]:
            self.register(key, constructor)
            return constructor

        return decorator

    def unregister(self, key: K) -> bool:
        """Remove the entry for a key.

        Returns:
            True if an entry was removed, False if the key was not registered
        """
        with self._lock.write():
            removed = self._entries.pop(key, None) is not None

        if removed:
            logger.debug(f"Unregistered {key!r} from '{self.name}'")
        return removed

    def lookup(self, key: K) -> RegistryEntry[K, T]:
        """Get the entry currently committed for a key.

        Raises:
            UnknownKeyError: If no constructor is registered for the key
        """
        with self._lock.read():
            entry = self._entries.get(key)

        if entry is None:
            logger.warning(f"Unknown key {key!r} requested from '{self.name}'")
            raise UnknownKeyError(key, self.name)
        return entry

    def create(self, key: K) -> T:
        """Create a new instance for a key.

        The constructor used is the one committed when the lookup ran; it is
        invoked after the lock is released.

        Args:
            key: The registered key

        Returns:
            A freshly constructed instance

        Raises:
            UnknownKeyError: If no constructor is registered for the key
            InitializationFailure: If the constructor raised
        """
        entry = self.lookup(key)

        try:
            return entry.constructor()
        except Exception as e:
            logger.error(f"Constructor for {key!r} in '{self.name}' failed: {e}")
            raise InitializationFailure(f"{self.name}:{key}", e) from e

    def keys(self) -> list[K]:
        """Get a snapshot of all registered keys."""
        with self._lock.read():
            return list(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock.read():
            return key in self._entries

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)

    def __repr__(self) -> str:
        return f"TypeRegistry({self.name!r}, keys={self.keys()!r})"

    @staticmethod
    def _make_entry(key: K, constructor: Constructor[T]) -> RegistryEntry[K, T]:
        if not callable(constructor):
            raise RegistrationError(key, f"Constructor for {key!r} must be callable, got: {constructor!r}")
        return RegistryEntry(key=key, constructor=constructor)
