"""Thread-safe lazy singleton slot.

A ``SingletonSlot`` holds at most one instance produced by a zero-argument
factory. The first caller that finds the slot uninitialized runs the
factory; concurrent callers wait for that single attempt instead of racing
to build their own instance.

```python
from creational.singleton import SingletonSlot, singleton

_cache_slot = SingletonSlot(build_cache, name="cache")
cache = _cache_slot.get_instance()

@singleton
def get_client() -> Client:
    return Client()

client = get_client()   # built once, shared afterwards
get_client.reset()      # test-only
```

A failed construction returns the slot to ``UNINITIALIZED`` so a later call
can retry. Callers that were waiting on the failed attempt receive a
``ConcurrentWaitFailure`` carrying the same cause.
"""

import functools
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from loguru import logger

from creational.exceptions import ConcurrentWaitFailure, InitializationFailure, SlotBusyError

from .enums import SlotState


@dataclass(slots=True)
class _Attempt:
    """Outcome of one construction attempt, shared with the callers waiting on it."""

    owner: int
    finished: bool = False
    value: Any = None
    error: BaseException | None = None


class SingletonSlot[T]:
    """Holds at most one lazily constructed instance of ``T``."""

    def __init__(self, factory: Callable[[], T], name: str | None = None):
        """Initialize an empty slot.

        Args:
            factory: Zero-argument callable producing the instance
            name: Name used in logs and errors (defaults to the factory's qualified name)
        """
        if not callable(factory):
            raise TypeError(f"Singleton factory must be callable: {factory!r}")
        self._factory = factory
        self._name = name or getattr(factory, "__qualname__", None) or repr(factory)
        self._condition = threading.Condition(threading.Lock())
        self._state = SlotState.UNINITIALIZED
        self._published: _Attempt | None = None
        self._attempt: _Attempt | None = None
        self._waiting = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> SlotState:
        """Get the current lifecycle state."""
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is SlotState.READY

    @property
    def waiting(self) -> int:
        """Number of callers blocked on the in-flight construction."""
        return self._waiting

    def get_instance(self) -> T:
        """Return the shared instance, constructing it on first use.

        Returns:
            The one instance held by this slot

        Raises:
            InitializationFailure: If this call ran the factory and it raised, or
                if the factory asked for its own slot while constructing
            ConcurrentWaitFailure: If this call waited on another caller's
                construction and that construction raised
        """
        # Fast path: a published attempt is complete and immutable
        published = self._published
        if published is not None:
            return published.value

        with self._condition:
            if self._published is not None:
                return self._published.value

            attempt = self._attempt
            if attempt is not None:
                if attempt.owner == threading.get_ident():
                    error = RecursionError(f"'{self._name}' was requested again while constructing itself")
                    logger.error(f"Recursive construction of singleton '{self._name}' detected")
                    raise InitializationFailure(self._name, error) from error

                logger.trace(f"Waiting for in-flight construction of '{self._name}'")
                self._waiting += 1
                try:
                    self._condition.wait_for(lambda: attempt.finished)
                finally:
                    self._waiting -= 1
                if attempt.error is not None:
                    logger.debug(f"Awaited construction of '{self._name}' failed, propagating to waiter")
                    raise ConcurrentWaitFailure(self._name, attempt.error) from attempt.error
                return attempt.value

            attempt = _Attempt(owner=threading.get_ident())
            self._attempt = attempt
            self._state = SlotState.INITIALIZING

        logger.debug(f"Constructing singleton '{self._name}'")
        try:
            value = self._factory()
        except BaseException as e:
            self._fail(attempt, e)
            if isinstance(e, Exception):
                raise InitializationFailure(self._name, e) from e
            raise

        with self._condition:
            attempt.value = value
            attempt.finished = True
            self._published = attempt
            self._state = SlotState.READY
            self._attempt = None
            self._condition.notify_all()

        logger.debug(f"Singleton '{self._name}' ready")
        return value

    def _fail(self, attempt: _Attempt, error: BaseException) -> None:
        """Revert the slot after a failed attempt and release its waiters."""
        logger.error(f"Construction of singleton '{self._name}' failed: {error}")
        with self._condition:
            self._state = SlotState.UNINITIALIZED
            self._attempt = None
            attempt.error = error
            attempt.finished = True
            self._condition.notify_all()

    def reset(self) -> None:
        """Return the slot to ``UNINITIALIZED`` (test-only).

        Callers already past the fast path keep the instance they read; the
        next call constructs a new one.

        Raises:
            SlotBusyError: If a construction is currently in progress
        """
        with self._condition:
            if self._state is SlotState.INITIALIZING:
                raise SlotBusyError(self._name)
            self._state = SlotState.UNINITIALIZED
            self._published = None
        logger.debug(f"Singleton '{self._name}' reset")

    def __call__(self) -> T:
        return self.get_instance()

    def __repr__(self) -> str:
        return f"SingletonSlot({self._name!r}, state={self._state.value})"


def singleton[T](factory: Callable[[], T]) -> SingletonSlot[T]:
    """Turn a zero-argument provider function into a shared-instance provider.

    The decorated name stays callable (``get_x()``) and gains ``get_x.reset()``
    for test isolation.

    Args:
        factory: The provider function to wrap

    Returns:
        A slot that behaves like the original function but constructs only once
    """
    slot = SingletonSlot(factory)
    functools.update_wrapper(slot, factory)
    return slot
