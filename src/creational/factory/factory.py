"""Registry-backed factory."""

from collections.abc import Hashable, Mapping

from loguru import logger

from creational.registry import Constructor, TypeRegistry


class Factory[K: Hashable, T]:
    """Resolves a key to a freshly constructed instance through a ``TypeRegistry``.

    The factory holds no state of its own besides the registry it fronts.
    Built-ins passed at construction are seeded with ``register_if_absent``,
    so building several factories around one registry, even concurrently,
    leaves exactly one entry per built-in key and keeps any override a
    caller registered in the meantime.
    """

    def __init__(
        self,
        registry: TypeRegistry[K, T] | None = None,
        builtins: Mapping[K, Constructor[T]] | None = None,
    ):
        """Initialize the factory.

        Args:
            registry: Registry to resolve keys through (a new empty one if omitted)
            builtins: Constructors to seed the registry with
        """
        self._registry: TypeRegistry[K, T] = registry if registry is not None else TypeRegistry()
        if builtins:
            self._seed(builtins)

    def _seed(self, builtins: Mapping[K, Constructor[T]]) -> None:
        added = [key for key, constructor in builtins.items() if self._registry.register_if_absent(key, constructor)]
        logger.debug(f"Seeded {len(added)}/{len(builtins)} built-in constructors into '{self._registry.name}'")

    @property
    def registry(self) -> TypeRegistry[K, T]:
        """Get the registry this factory resolves keys through."""
        return self._registry

    def register(self, key: K, constructor: Constructor[T]) -> None:
        """Register (or replace) the constructor for a key."""
        self._registry.register(key, constructor)

    def create(self, key: K) -> T:
        """Create a new instance for a key.

        Raises:
            UnknownKeyError: If no constructor is registered for the key
            InitializationFailure: If the constructor raised
        """
        return self._registry.create(key)

    def available_keys(self) -> list[K]:
        """Get the keys this factory can currently create."""
        return self._registry.keys()

    def __repr__(self) -> str:
        return f"Factory(registry={self._registry.name!r})"
