"""Main loop that runs one scrape-push cycle per tick."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

from src.core.status import LastCycleStatus
from src.ports.settings import SettingsPort

__all__ = ["start_main_loop", "get_now_time", "wait_for_stop"]

logger = logging.getLogger(__name__)


def get_now_time() -> float:
    """Get current monotonic time in seconds.

    Uses event loop's monotonic clock for accurate scheduling
    without wall-clock drift.

    Returns:
        Current time in seconds (monotonic).
    """
    return asyncio.get_running_loop().time()


async def wait_for_stop(stop: asyncio.Event, timeout: float) -> bool:
    """Wait until the stop event is set or the timeout elapses.

    Args:
        stop: Event set on shutdown.
        timeout: Seconds to wait at most.

    Returns:
        True if stop was requested.
    """
    if stop.is_set():
        return True
    try:
        await asyncio.wait_for(stop.wait(), timeout=max(0.0, timeout))
    except asyncio.TimeoutError:
        return False
    return True


async def start_main_loop(
    settings: SettingsPort,
    stop: asyncio.Event,
    cycle_fn: Callable[[], Awaitable[bool]],
    status: LastCycleStatus,
) -> None:
    """Run the scheduling loop until stop is set.

    Each tick:
    1. Run one cycle to completion (cycles never overlap).
    2. Record its outcome for the health endpoint.
    3. Wait for the next tick or for the stop event, whichever is first.

    Args:
        settings: Runtime configuration (interval).
        stop: Event set by the signal handlers.
        cycle_fn: Async function running one cycle, returning success.
        status: Shared last-cycle outcome.

    Notes:
        - Ticks follow the loop's monotonic clock; a cycle that overruns
          its slot skips the missed ticks instead of replaying them.
        - Stop is only observed between cycles, never mid-request.
    """
    interval = settings.interval_sec
    next_tick: float = get_now_time()

    while not stop.is_set():
        try:
            ok = await cycle_fn()
        except Exception as e:  # noqa: BLE001
            logger.error(f"Unexpected error in cycle: {e}", exc_info=True)
            ok = False
        status.record(ok)

        next_tick += interval
        now = get_now_time()
        if next_tick <= now and interval > 0:
            missed = int((now - next_tick) // interval) + 1
            logger.debug(f"Cycle overran its slot, skipping {missed} tick(s)")
            next_tick += missed * interval

        if await wait_for_stop(stop, next_tick - now):
            logger.info("Shutdown requested during wait, exiting loop...")
            break
