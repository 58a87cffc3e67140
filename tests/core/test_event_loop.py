"""Tests for the event loop scheduling."""

import asyncio
from collections.abc import Awaitable, Callable
from unittest.mock import AsyncMock, patch

import pytest

from src.core.event_loop import start_main_loop, wait_for_stop
from src.core.status import LastCycleStatus
from src.ports.settings import SettingsPort

__all__ = []


def make_settings(interval_sec: float = 0.01) -> SettingsPort:
    return SettingsPort(
        source_url="http://test/metrics",
        push_url="http://test/push",
        interval_sec=interval_sec,
    )


def make_n_shot_cycle(
    stop: asyncio.Event, outcomes: list[bool], seen: list[bool], status: LastCycleStatus
) -> Callable[[], Awaitable[bool]]:
    """Create cycle function that returns each outcome in turn, then sets stop.

    Before each run it also snapshots the status left by the previous cycle.
    """
    remaining = list(outcomes)

    async def cycle() -> bool:
        seen.append(status.is_ok())
        ok = remaining.pop(0)
        if not remaining:
            stop.set()
        return ok

    return cycle


@pytest.mark.asyncio
async def test_event_loop_runs_one_cycle_then_stops() -> None:
    """Loop should run the cycle once and record its outcome."""
    stop = asyncio.Event()
    status = LastCycleStatus()
    seen: list[bool] = []

    await start_main_loop(
        settings=make_settings(),
        stop=stop,
        cycle_fn=make_n_shot_cycle(stop, [True], seen, status),
        status=status,
    )

    assert seen == [False]
    assert status.is_ok() is True


@pytest.mark.asyncio
async def test_event_loop_records_each_outcome() -> None:
    """Status should reflect the latest cycle after every tick."""
    stop = asyncio.Event()
    status = LastCycleStatus()
    seen: list[bool] = []

    await start_main_loop(
        settings=make_settings(),
        stop=stop,
        cycle_fn=make_n_shot_cycle(stop, [True, False, False, True], seen, status),
        status=status,
    )

    # seen[i] is the status left by cycle i-1
    assert seen == [False, True, False, False]
    assert status.is_ok() is True


@pytest.mark.asyncio
async def test_event_loop_continues_after_consecutive_failures() -> None:
    """Two failed cycles should leave the loop running and not ready."""
    stop = asyncio.Event()
    status = LastCycleStatus(True)
    seen: list[bool] = []

    await start_main_loop(
        settings=make_settings(),
        stop=stop,
        cycle_fn=make_n_shot_cycle(stop, [False, False, True], seen, status),
        status=status,
    )

    assert seen == [True, False, False]


@pytest.mark.asyncio
async def test_event_loop_handles_cycle_exceptions() -> None:
    """An unexpected exception should count as failure, not crash the loop."""
    stop = asyncio.Event()
    status = LastCycleStatus(True)
    calls = 0

    async def cycle() -> bool:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise RuntimeError("boom")
        stop.set()
        assert status.is_ok() is False
        return True

    await start_main_loop(settings=make_settings(), stop=stop, cycle_fn=cycle, status=status)

    assert calls == 2
    assert status.is_ok() is True


@pytest.mark.asyncio
async def test_event_loop_does_not_run_when_already_stopped() -> None:
    """A stop set before start should prevent any cycle."""
    stop = asyncio.Event()
    stop.set()
    cycle = AsyncMock(return_value=True)

    await start_main_loop(
        settings=make_settings(), stop=stop, cycle_fn=cycle, status=LastCycleStatus()
    )

    cycle.assert_not_called()


@pytest.mark.asyncio
async def test_event_loop_exits_when_stopped_mid_wait() -> None:
    """A stop during a long wait should end the loop without another cycle."""
    stop = asyncio.Event()
    cycle = AsyncMock(return_value=True)

    loop_task = asyncio.create_task(
        start_main_loop(
            settings=make_settings(interval_sec=60),
            stop=stop,
            cycle_fn=cycle,
            status=LastCycleStatus(),
        )
    )
    await asyncio.sleep(0.05)
    stop.set()
    await asyncio.wait_for(loop_task, timeout=1)

    cycle.assert_awaited_once()


@pytest.mark.asyncio
async def test_event_loop_waits_for_interval() -> None:
    """Loop should wait roughly one interval between cycles."""
    stop = asyncio.Event()
    status = LastCycleStatus()
    seen: list[bool] = []
    period = 5.0

    with patch("src.core.event_loop.wait_for_stop", new_callable=AsyncMock) as mock_wait:
        mock_wait.return_value = False
        await start_main_loop(
            settings=make_settings(interval_sec=period),
            stop=stop,
            cycle_fn=make_n_shot_cycle(stop, [True, True], seen, status),
            status=status,
        )

    assert mock_wait.await_count == 2
    timeout = mock_wait.call_args_list[0][0][1]
    assert 0 < timeout <= period


@pytest.mark.asyncio
async def test_wait_for_stop_times_out() -> None:
    """wait_for_stop should return False when nothing happens."""
    assert await wait_for_stop(asyncio.Event(), 0.01) is False


@pytest.mark.asyncio
async def test_wait_for_stop_returns_when_set() -> None:
    """wait_for_stop should return True immediately once stop is set."""
    stop = asyncio.Event()
    stop.set()

    assert await wait_for_stop(stop, 10) is True
