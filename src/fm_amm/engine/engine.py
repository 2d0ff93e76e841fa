"""AmmEngine - process-wide serialisation of per-market mutation.

Every operation that reads-modifies-writes a market row runs under that
market's asyncio.Lock. Operations touching two markets (finalization) take
both locks in sorted id order.
"""
import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class AmmEngine:
    def __init__(self) -> None:
        self._market_locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _get_or_create_lock(self, market_id: str) -> asyncio.Lock:
        return self._market_locks[market_id]

    def is_locked(self, market_id: str) -> bool:
        return market_id in self._market_locks and self._market_locks[market_id].locked()

    @asynccontextmanager
    async def lock_market(self, market_id: str) -> AsyncIterator[None]:
        async with self._get_or_create_lock(market_id):
            yield

    @asynccontextmanager
    async def lock_markets(self, *market_ids: str) -> AsyncIterator[None]:
        ordered = sorted(set(market_ids))
        acquired: list[asyncio.Lock] = []
        try:
            for market_id in ordered:
                lock = self._get_or_create_lock(market_id)
                await lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


_engine: AmmEngine | None = None


def get_amm_engine() -> AmmEngine:
    global _engine  # noqa: PLW0603
    if _engine is None:
        _engine = AmmEngine()
    return _engine
