"""Tests for the singleton slot."""

import threading
import time

import pytest

from creational.exceptions import ConcurrentWaitFailure, InitializationFailure, SlotBusyError
from creational.singleton import SingletonSlot, SlotState, singleton

THREADS = 16


class SharedResource:
    """A payload object for testing."""

    def __init__(self, value: str = "default"):
        self.value = value


def run_concurrently(target, count: int = THREADS) -> list:
    """Start ``count`` threads on ``target`` behind a barrier and collect results or exceptions."""
    barrier = threading.Barrier(count)
    results: list = [None] * count

    def worker(index: int) -> None:
        barrier.wait()
        try:
            results[index] = target()
        except Exception as e:
            results[index] = e

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    return results


class TestSingletonSlot:
    """Test cases for SingletonSlot."""

    def test_initial_state(self):
        """A new slot starts uninitialized and constructs nothing."""
        calls = {"count": 0}

        def factory():
            calls["count"] += 1
            return SharedResource()

        slot = SingletonSlot(factory, name="resource")
        assert slot.state is SlotState.UNINITIALIZED
        assert slot.is_ready is False
        assert slot.name == "resource"
        assert calls["count"] == 0

    def test_factory_called_once(self):
        """Sequential calls return the same instance from a single construction."""
        calls = {"count": 0}

        def factory():
            calls["count"] += 1
            return SharedResource()

        slot = SingletonSlot(factory)
        a = slot.get_instance()
        b = slot.get_instance()

        assert a is b
        assert calls["count"] == 1
        assert slot.state is SlotState.READY

    def test_concurrent_first_callers_share_one_instance(self):
        """Concurrent first callers trigger exactly one construction."""
        calls = {"count": 0}
        lock = threading.Lock()

        def slow_factory():
            with lock:
                calls["count"] += 1
            time.sleep(0.05)
            return SharedResource("shared")

        slot = SingletonSlot(slow_factory)
        results = run_concurrently(slot.get_instance)

        assert calls["count"] == 1
        assert all(isinstance(r, SharedResource) for r in results)
        assert all(r is results[0] for r in results)
        assert slot.state is SlotState.READY

    def test_failure_reverts_to_uninitialized(self):
        """A failed construction leaves the slot retryable."""
        attempts = {"count": 0}

        def flaky_factory():
            attempts["count"] += 1
            if attempts["count"] == 1:
                raise ConnectionError("backend unavailable")
            return SharedResource("recovered")

        slot = SingletonSlot(flaky_factory, name="flaky")

        with pytest.raises(InitializationFailure) as exc_info:
            slot.get_instance()

        assert isinstance(exc_info.value.cause, ConnectionError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert exc_info.value.name == "flaky"
        assert not isinstance(exc_info.value, ConcurrentWaitFailure)
        assert slot.state is SlotState.UNINITIALIZED

        instance = slot.get_instance()
        assert instance.value == "recovered"
        assert slot.state is SlotState.READY
        assert attempts["count"] == 2

    def test_waiters_receive_same_cause(self):
        """Callers waiting on a failed attempt get the constructing caller's error."""
        started = threading.Event()
        release = threading.Event()
        cause = RuntimeError("boom")

        def failing_factory():
            started.set()
            release.wait(timeout=5)
            raise cause

        slot = SingletonSlot(failing_factory, name="failing")
        outcomes: dict[str, BaseException] = {}

        def constructor_thread():
            try:
                slot.get_instance()
            except InitializationFailure as e:
                outcomes["constructor"] = e

        def waiter_thread(key: str):
            try:
                slot.get_instance()
            except InitializationFailure as e:
                outcomes[key] = e

        builder = threading.Thread(target=constructor_thread)
        builder.start()
        assert started.wait(timeout=5)

        waiters = [threading.Thread(target=waiter_thread, args=(f"waiter-{i}",)) for i in range(3)]
        for waiter in waiters:
            waiter.start()
        # Give the waiters time to block on the in-flight attempt
        deadline = time.monotonic() + 5
        while time.monotonic() < deadline and slot.waiting < 3:
            time.sleep(0.01)
        release.set()

        builder.join(timeout=5)
        for waiter in waiters:
            waiter.join(timeout=5)

        assert type(outcomes["constructor"]) is InitializationFailure
        assert outcomes["constructor"].cause is cause
        for i in range(3):
            failure = outcomes[f"waiter-{i}"]
            assert isinstance(failure, ConcurrentWaitFailure)
            assert failure.cause is cause
        assert slot.state is SlotState.UNINITIALIZED

    def test_recursive_request_raises_instead_of_hanging(self):
        """A factory that asks for its own slot fails fast and leaves the slot retryable."""
        outcome: dict[str, BaseException] = {}
        reentrant = {"enabled": True}

        def factory():
            if reentrant["enabled"]:
                slot.get_instance()
            return SharedResource("built")

        slot = SingletonSlot(factory, name="reentrant")

        def call():
            try:
                slot.get_instance()
            except InitializationFailure as e:
                outcome["error"] = e

        caller = threading.Thread(target=call)
        caller.start()
        caller.join(timeout=5)

        assert not caller.is_alive()
        error = outcome["error"]
        assert isinstance(error.cause, InitializationFailure)
        assert isinstance(error.cause.cause, RecursionError)
        assert slot.state is SlotState.UNINITIALIZED

        reentrant["enabled"] = False
        assert slot.get_instance().value == "built"

    def test_reset_does_not_hand_out_none(self):
        """Readers racing a reset get an instance, never None."""
        slot = SingletonSlot(SharedResource)
        slot.get_instance()
        stop = threading.Event()
        seen: list = []

        def reader():
            while not stop.is_set():
                seen.append(slot.get_instance())

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for thread in threads:
            thread.start()
        for _ in range(200):
            try:
                slot.reset()
            except SlotBusyError:
                pass  # a reader is rebuilding it
        stop.set()
        for thread in threads:
            thread.join(timeout=5)

        assert seen
        assert all(isinstance(instance, SharedResource) for instance in seen)

    def test_base_exception_releases_slot(self):
        """Non-Exception errors propagate unwrapped and leave the slot retryable."""
        attempts = {"count": 0}

        def factory():
            attempts["count"] += 1
            if attempts["count"] == 1:
                raise KeyboardInterrupt
            return SharedResource()

        slot = SingletonSlot(factory)
        with pytest.raises(KeyboardInterrupt):
            slot.get_instance()

        assert slot.state is SlotState.UNINITIALIZED
        assert isinstance(slot.get_instance(), SharedResource)

    def test_reset(self):
        """Reset returns a ready slot to uninitialized and constructs again on next use."""
        slot = SingletonSlot(SharedResource)
        first = slot.get_instance()

        slot.reset()
        assert slot.state is SlotState.UNINITIALIZED

        second = slot.get_instance()
        assert second is not first

    def test_reset_while_initializing_is_refused(self):
        """Reset during an in-flight construction raises SlotBusyError."""
        started = threading.Event()
        release = threading.Event()

        def slow_factory():
            started.set()
            release.wait(timeout=5)
            return SharedResource()

        slot = SingletonSlot(slow_factory, name="slow")
        builder = threading.Thread(target=slot.get_instance)
        builder.start()
        assert started.wait(timeout=5)

        with pytest.raises(SlotBusyError, match="slow"):
            slot.reset()

        release.set()
        builder.join(timeout=5)
        assert slot.state is SlotState.READY

    def test_non_callable_factory(self):
        """A slot requires a callable factory."""
        with pytest.raises(TypeError):
            SingletonSlot("not callable")  # type: ignore[arg-type]

    def test_default_name_from_factory(self):
        """The slot name defaults to the factory's qualified name."""

        def build_cache():
            return {}

        slot = SingletonSlot(build_cache)
        assert slot.name.endswith("build_cache")
        assert "uninitialized" in repr(slot)


class TestSingletonDecorator:
    """Test cases for the singleton decorator."""

    def test_decorated_provider_returns_shared_instance(self):
        """Calling the decorated provider returns one instance."""
        calls = {"count": 0}

        @singleton
        def get_resource() -> SharedResource:
            """Provide the shared resource."""
            calls["count"] += 1
            return SharedResource("decorated")

        assert get_resource() is get_resource()
        assert calls["count"] == 1
        assert get_resource.__name__ == "get_resource"
        assert get_resource.__doc__ == "Provide the shared resource."

    def test_decorated_provider_reset(self):
        """reset() on the decorated provider discards the shared instance."""

        @singleton
        def get_resource() -> SharedResource:
            return SharedResource()

        first = get_resource()
        get_resource.reset()
        assert get_resource() is not first

    def test_decorated_provider_concurrent(self):
        """The decorated provider keeps the exactly-once guarantee under concurrency."""
        calls = {"count": 0}
        lock = threading.Lock()

        @singleton
        def get_resource() -> SharedResource:
            with lock:
                calls["count"] += 1
            time.sleep(0.02)
            return SharedResource()

        results = run_concurrently(get_resource)
        assert calls["count"] == 1
        assert all(r is results[0] for r in results)
