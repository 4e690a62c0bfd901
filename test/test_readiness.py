#!/usr/bin/env python3
"""Tests for the ReadinessGate state machine."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from etherscan_adapter.errors import InitializationError
from etherscan_adapter.models import ChainHeight
from etherscan_adapter.readiness import ReadinessGate, ReadinessState


async def slow_height():
    await asyncio.sleep(0.01)
    return 100


class TestReadinessGate:
    """Test suite for ReadinessGate."""

    @pytest.mark.asyncio
    async def test_initial_state(self):
        gate = ReadinessGate(AsyncMock(return_value=1))

        assert gate.state is ReadinessState.UNINITIALIZED
        assert gate.height is None
        assert not gate.is_ready

    @pytest.mark.asyncio
    async def test_ready_after_fetch(self):
        fetch = AsyncMock(return_value=42)
        gate = ReadinessGate(fetch)

        assert await gate.ensure_ready() == 42
        assert gate.state is ReadinessState.READY
        assert gate.height == 42

        # Cached: no further fetches
        assert await gate.ensure_ready() == 42
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_fetch(self):
        """Test that callers arriving during the fetch do not trigger another one."""
        fetch = AsyncMock(side_effect=slow_height)
        gate = ReadinessGate(fetch)

        results = await asyncio.gather(*(gate.ensure_ready() for _ in range(5)))

        assert results == [100] * 5
        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_pending_state_while_fetching(self):
        gate = ReadinessGate(AsyncMock(side_effect=slow_height))

        task = asyncio.create_task(gate.ensure_ready())
        await asyncio.sleep(0)
        assert gate.state is ReadinessState.PENDING

        await task
        assert gate.state is ReadinessState.READY

    @pytest.mark.asyncio
    async def test_failure_raises_and_resets(self):
        fetch = AsyncMock(side_effect=RuntimeError("explorer down"))
        gate = ReadinessGate(fetch)

        with pytest.raises(InitializationError, match="explorer down") as exc_info:
            await gate.ensure_ready()

        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert gate.state is ReadinessState.UNINITIALIZED
        assert gate.height is None

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        """Test that a failed initialization is not permanent."""
        fetch = AsyncMock(side_effect=[RuntimeError("explorer down"), 7])
        gate = ReadinessGate(fetch)

        with pytest.raises(InitializationError):
            await gate.ensure_ready()

        assert await gate.ensure_ready() == 7
        assert fetch.call_count == 2
        assert gate.attempts == 2

    @pytest.mark.asyncio
    async def test_concurrent_callers_all_see_failure(self):
        async def failing():
            await asyncio.sleep(0.01)
            raise RuntimeError("rate limited")

        fetch = AsyncMock(side_effect=failing)
        gate = ReadinessGate(fetch)

        results = await asyncio.gather(
            *(gate.ensure_ready() for _ in range(3)),
            return_exceptions=True
        )

        assert all(isinstance(result, InitializationError) for result in results)
        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_on_ready_does_not_lower_height(self):
        """Test that the initializing write keeps a higher height seen meanwhile."""
        chain_height = ChainHeight(120)
        gate = ReadinessGate(AsyncMock(return_value=100), on_ready=chain_height.advance)

        assert await gate.ensure_ready() == 120
        assert chain_height.value == 120

    @pytest.mark.asyncio
    async def test_on_ready_sets_height(self):
        chain_height = ChainHeight()
        gate = ReadinessGate(AsyncMock(return_value=100), on_ready=chain_height.advance)

        await gate.ensure_ready()

        assert chain_height.value == 100

    @pytest.mark.asyncio
    async def test_timed_out_caller_does_not_cancel_shared_fetch(self):
        fetch = AsyncMock(side_effect=slow_height)
        gate = ReadinessGate(fetch)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(gate.ensure_ready(), 0.001)

        assert await gate.ensure_ready() == 100
        assert fetch.call_count == 1

    @pytest.mark.asyncio
    async def test_cancelled_fetch_resets_and_retries(self):
        """Test that cancelling the in-flight fetch leaves the gate retryable."""
        calls = 0

        async def stalls_once():
            nonlocal calls
            calls += 1
            if calls == 1:
                await asyncio.sleep(10)
            return 7

        gate = ReadinessGate(stalls_once)

        caller = asyncio.create_task(gate.ensure_ready())
        await asyncio.sleep(0.01)
        gate._pending.cancel()

        with pytest.raises(asyncio.CancelledError):
            await caller

        assert gate.state is ReadinessState.UNINITIALIZED
        assert await gate.ensure_ready() == 7
        assert gate.is_ready
        assert calls == 2

    @pytest.mark.asyncio
    async def test_fetch_cancelled_before_start_is_discarded(self):
        fetch = AsyncMock(return_value=9)
        gate = ReadinessGate(fetch)

        caller = asyncio.create_task(gate.ensure_ready())
        await asyncio.sleep(0)
        gate._pending.cancel()
        with pytest.raises(asyncio.CancelledError):
            await caller

        assert await gate.ensure_ready() == 9
        assert gate.is_ready


def test_gate_recovers_after_event_loop_shutdown():
    """Test a gate whose fetch was cut off when its event loop ended."""
    calls = 0

    async def slow_then_fast():
        nonlocal calls
        calls += 1
        if calls == 1:
            await asyncio.sleep(0.2)
        return 7

    gate = ReadinessGate(slow_then_fast)

    with pytest.raises(asyncio.TimeoutError):
        asyncio.run(asyncio.wait_for(gate.ensure_ready(), 0.01))

    assert gate.state is ReadinessState.UNINITIALIZED

    assert asyncio.run(gate.ensure_ready()) == 7
    assert gate.is_ready
    assert calls == 2
