"""Admission control in front of the provider calls."""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from loguru import logger


class AdmissionRejected(Exception):
    """No generation slot freed up in time."""


class AdmissionLimiter:
    """
    Bounds how many answers are generated at once.

    A request waits up to ``wait_timeout`` seconds for a slot and is
    rejected afterwards. ``max_concurrent`` of 0 admits everything.
    """

    def __init__(self, max_concurrent: int = 16, wait_timeout: float = 10.0):
        """
        Initialize the limiter.

        :param max_concurrent: Generations allowed in parallel, 0 for no limit
        :param wait_timeout: Seconds a request may wait for a slot
        """
        self.max_concurrent = max_concurrent
        self.wait_timeout = wait_timeout
        self._semaphore: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(max_concurrent) if max_concurrent > 0 else None
        )
        self.in_flight = 0
        self.rejected = 0

    @property
    def enabled(self) -> bool:
        return self._semaphore is not None

    def get_metrics(self) -> Dict[str, Any]:
        """
        Get admission counters.

        :return: Dictionary of limiter settings and counters
        """
        return {
            "enabled": self.enabled,
            "max_concurrent": self.max_concurrent,
            "in_flight": self.in_flight,
            "rejected": self.rejected,
        }

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """
        Hold a generation slot for the duration of the block.

        :raises AdmissionRejected: if no slot frees up within the wait timeout
        """
        if self._semaphore is None:
            yield
            return

        try:
            await asyncio.wait_for(self._semaphore.acquire(), timeout=self.wait_timeout)
        except asyncio.TimeoutError:
            self.rejected += 1
            logger.warning(
                f"Admission rejected after {self.wait_timeout}s, "
                f"{self.in_flight}/{self.max_concurrent} generations in flight"
            )
            raise AdmissionRejected("Too many requests, please try again later")

        self.in_flight += 1
        try:
            yield
        finally:
            self.in_flight -= 1
            self._semaphore.release()
