#!/usr/bin/env python3
"""Bounded-concurrency batch execution.

Rate-limited explorer APIs cap both how many requests may be in flight and how
many may be sent per second. The executor caps the first by running at most
``concurrency`` workers at once, and the second by not starting a batch until
the previous one has fully settled.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from .errors import InvalidArgument

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def partition(items: Sequence[T], size: int | None) -> list[Sequence[T]]:
    """Split items into consecutive slices of at most size elements.

    A size of None puts everything in one batch.
    """
    if not items:
        return []
    if size is None:
        return [items]
    return [items[start:start + size] for start in range(0, len(items), size)]


def require_sequence(items: Any, what: str = "items") -> None:
    """Raise InvalidArgument unless items is a list or tuple."""
    if not isinstance(items, (list, tuple)):
        raise InvalidArgument(f"expected a sequence of {what}, got {type(items).__name__}")


class BoundedBatchExecutor:
    """Runs an async worker over a sequence in sequential, concurrent batches.

    Per-item failures are isolated: a failing item is left out of the result
    and the remaining items and batches still run. Results keep input order.
    """

    def __init__(self, concurrency: int | None = None) -> None:
        """
        Args:
            concurrency: Default batch size (None for a single unbounded batch)
        """
        self._check_concurrency(concurrency)
        self.concurrency = concurrency

        # Metrics tracking
        self.batches_run = 0
        self.items_failed = 0

    @staticmethod
    def _check_concurrency(concurrency: int | None) -> None:
        if concurrency is not None and concurrency < 1:
            raise InvalidArgument(f"concurrency must be at least 1, got {concurrency}")

    async def run(
        self,
        items: Sequence[T],
        worker: Callable[[T], Awaitable[R]],
        concurrency: int | None = None,
        errors: list[tuple[T, Exception]] | None = None
    ) -> list[R]:
        """Apply worker to every item, batch by batch.

        Args:
            items: Input sequence (list or tuple)
            worker: Coroutine function called once per item
            concurrency: Batch size for this run, overriding the default
            errors: If given, receives an (item, exception) pair per failed item

        Returns:
            Successful outcomes, in input order. Failed items leave no
            placeholder, so the result may be shorter than items.

        Raises:
            InvalidArgument: If items is not a sequence or concurrency < 1
        """
        require_sequence(items)
        if concurrency is None:
            concurrency = self.concurrency
        self._check_concurrency(concurrency)

        results: list[R] = []
        for batch in partition(items, concurrency):
            self.batches_run += 1
            outcomes = await asyncio.gather(
                *(worker(item) for item in batch),
                return_exceptions=True
            )

            for item, outcome in zip(batch, outcomes):
                if not isinstance(outcome, BaseException):
                    results.append(outcome)
                    continue

                # Only ordinary failures are isolated; cancellation propagates
                if not isinstance(outcome, Exception):
                    raise outcome

                self.items_failed += 1
                logger.warning(f"Dropping failed batch item {item!r}: {outcome}")
                if errors is not None:
                    errors.append((item, outcome))

        return results
