#!/usr/bin/env python3
"""Lazy, retryable initialization of the chain height.

The gate fetches the chain height once, shares that single in-flight fetch
with every caller that arrives while it runs, and caches the outcome. A
failed or cancelled fetch leaves the gate uninitialized so the next caller
tries again.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from .errors import InitializationError

logger = logging.getLogger(__name__)


class ReadinessState(Enum):
    """Lifecycle of a ReadinessGate."""
    UNINITIALIZED = "uninitialized"
    PENDING = "pending"
    READY = "ready"



class ReadinessGate:
    """Memoized one-shot initializer guarding height-dependent operations.

    State transitions:
        UNINITIALIZED -> PENDING   first ensure_ready() starts the fetch
        PENDING -> READY           fetch succeeded
        PENDING -> UNINITIALIZED   fetch failed or was cancelled, next call retries
    """

    def __init__(
        self,
        fetch_height: Callable[[], Awaitable[int]],
        on_ready: Callable[[int], int] | None = None
    ) -> None:
        """
        Initialize the gate.

        Args:
            fetch_height: Coroutine function returning the current chain height
            on_ready: Called once with the fetched height; its return value
                becomes the gate's height (lets the owner merge it with
                heights it has already seen)
        """
        self._fetch_height = fetch_height
        self._on_ready = on_ready

        self.state: ReadinessState = ReadinessState.UNINITIALIZED
        self.height: int | None = None
        self.attempts: int = 0

        self._pending: asyncio.Task[int] | None = None

    @property
    def is_ready(self) -> bool:
        return self.state is ReadinessState.READY

    async def ensure_ready(self) -> int:
        """Wait until the chain height is known.

        Returns:
            The chain height recorded when the gate became ready

        Raises:
            InitializationError: If the height fetch failed
        """
        if self.state is ReadinessState.PENDING and self._pending_is_stale():
            logger.debug("Discarding abandoned chain height fetch")
            self._reset()

        match self.state:
            case ReadinessState.READY:
                return self.height
            case ReadinessState.UNINITIALIZED:
                self.state = ReadinessState.PENDING
                self._pending = asyncio.create_task(self._initialize())

        # Shield so one impatient caller cannot cancel the fetch for everyone
        return await asyncio.shield(self._pending)

    def _pending_is_stale(self) -> bool:
        # A task cancelled before it ran, or one left behind by a finished event loop
        if self._pending is None or self._pending.done():
            return True
        return self._pending.get_loop() is not asyncio.get_running_loop()

    def _reset(self) -> None:
        self.state = ReadinessState.UNINITIALIZED
        self._pending = None

    async def _initialize(self) -> int:
        self.attempts += 1
        logger.debug(f"Fetching initial chain height (attempt {self.attempts})")

        try:
            try:
                height = await self._fetch_height()
            except Exception as e:
                logger.error(f"Chain height initialization failed: {e}")
                raise InitializationError(f"Failed to fetch initial chain height: {e}") from e

            if self._on_ready is not None:
                height = self._on_ready(height)

            self.height = height
            self.state = ReadinessState.READY
            logger.info(f"Adapter ready at chain height {height}")
            return height
        finally:
            # A fetch that was discarded as stale must not clobber its replacement
            if self._pending is asyncio.current_task():
                if self.state is ReadinessState.READY:
                    self._pending = None
                else:
                    self._reset()
