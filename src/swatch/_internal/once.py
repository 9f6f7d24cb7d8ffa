"""Single-flight memo for lazily loaded values.

The first caller runs the factory; callers arriving while it is still
running wait on the same lock and then read the stored value, so a value
is produced at most once even under concurrent fan-out.  A failing
factory stores nothing and the next caller tries again.
"""

from collections.abc import Awaitable, Callable

import anyio


class AsyncOnce[T]:
    """Memoise the result of an async factory."""

    __slots__ = ("_done", "_lock", "_value")

    def __init__(self) -> None:
        self._lock: anyio.Lock | None = None
        self._done = False
        self._value: T | None = None

    @property
    def done(self) -> bool:
        return self._done

    @property
    def value(self) -> T | None:
        return self._value

    def set(self, value: T) -> None:
        """Store *value* without running a factory (e.g. preset content)."""
        self._value = value
        self._done = True

    async def get(self, factory: Callable[[], Awaitable[T]]) -> T:
        if self._done:
            return self._value  # type: ignore[return-value]
        # Created on first use so the memo can be built outside an event loop
        if self._lock is None:
            self._lock = anyio.Lock()
        async with self._lock:
            if not self._done:
                self._value = await factory()
                self._done = True
        return self._value  # type: ignore[return-value]
