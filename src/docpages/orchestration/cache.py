"""Per-build cache of computed page data."""

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

logger = logging.getLogger("docpages.orchestration.cache")

T = TypeVar("T")


class PageCache(Generic[T]):
    """Maps slug keys to page data computed earlier in the same build.

    Entries are never evicted; create one cache per build run. Concurrent
    requests for a key that is still being computed wait for that
    computation instead of starting another one. Failed computations are
    not stored.
    """

    def __init__(self):
        self._entries: dict[str, T] = {}
        self._pending: dict[str, asyncio.Future] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def get(self, key: str) -> T:
        """Return a stored value.

        Raises:
            KeyError: If the key has not been computed.
        """
        return self._entries[key]

    async def get_or_compute(
        self,
        key: str,
        factory: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the value for `key`, computing it with `factory` on a miss.

        Args:
            key: Joined slug.
            factory: Coroutine function producing the value.

        Returns:
            The stored or newly computed value.
        """
        if key in self._entries:
            self.hits += 1
            logger.debug(f"Cache hit: {key}")
            return self._entries[key]

        pending = self._pending.get(key)
        if pending is not None:
            self.hits += 1
            logger.debug(f"Waiting for in-flight computation: {key}")
            return await asyncio.shield(pending)

        self.misses += 1
        future = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        try:
            value = await factory()
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unawaited future does not log it again
            future.exception()
            raise
        else:
            self._entries[key] = value
            future.set_result(value)
            return value
        finally:
            del self._pending[key]

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0
