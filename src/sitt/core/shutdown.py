"""In-flight request tracking for graceful shutdown.

A tracking operation writes a time track and its project separately, so the
engine is only disposed once running requests have finished or the grace
period has passed.
"""

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from src.sitt.core.logging import get_logger

logger = get_logger(__name__)


class RequestTracker:
    """Counts in-flight requests and signals when they have drained."""

    def __init__(self) -> None:
        self._in_flight = 0
        self._shutting_down = False
        self._drained = asyncio.Event()

    @property
    def is_shutting_down(self) -> bool:
        return self._shutting_down

    @property
    def in_flight_count(self) -> int:
        return self._in_flight

    @asynccontextmanager
    async def track_request(self) -> AsyncGenerator[None]:
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1
            if self._in_flight == 0 and self._shutting_down:
                self._drained.set()

    async def start_shutdown(self) -> None:
        """Enter shutdown mode; drained immediately if nothing is running."""
        self._shutting_down = True
        logger.info("Shutdown started", in_flight=self._in_flight)
        if self._in_flight == 0:
            self._drained.set()

    async def wait_for_drain(self, timeout: float) -> bool:
        """
        Wait for all in-flight requests to complete.

        Returns:
            True if all requests completed within timeout, False otherwise
        """
        try:
            await asyncio.wait_for(self._drained.wait(), timeout=timeout)
        except TimeoutError:
            logger.warning(
                "Shutdown grace period elapsed with requests in flight",
                timeout=timeout,
                in_flight=self._in_flight,
            )
            return False
        logger.info("All requests drained")
        return True

    def reset(self) -> None:
        """Reset tracker state. For testing only."""
        self._in_flight = 0
        self._shutting_down = False
        self._drained = asyncio.Event()


request_tracker = RequestTracker()
