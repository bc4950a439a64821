"""Fixed-capacity admission gate for wallet pipelines.

At most ``limit`` holders run at once; further callers wait in arrival
order and are admitted as slots free up.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)

class ConcurrencyGate:
    """Async context manager around an asyncio.Semaphore with in-flight tracking."""

    def __init__(self, limit: int):
        """Initializes the gate.

        Args:
            limit: Number of slots, must be at least 1.
        """
        if limit < 1:
            raise ValueError(f"Concurrency limit must be >= 1, got {limit}")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self._in_flight = 0
        self.peak_in_flight = 0
        logger.debug(f"ConcurrencyGate initialized with {limit} slot(s)")

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def __aenter__(self) -> "ConcurrencyGate":
        await self._semaphore.acquire()
        self._in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self._in_flight)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self._in_flight -= 1
        self._semaphore.release()
