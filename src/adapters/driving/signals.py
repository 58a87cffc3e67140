"""Signal handling for graceful shutdown."""

import asyncio
import logging
import signal

__all__ = ["make_stop_event"]

logger = logging.getLogger(__name__)


def make_stop_event() -> asyncio.Event:
    """Create the shutdown event for the running loop.

    Registers SIGTERM and SIGINT handlers that set an asyncio.Event.
    The scheduler waits on it between ticks, so a signal cuts the
    wait short without interrupting an in-flight cycle.

    On Docker/Kubernetes, SIGTERM is sent 30s before SIGKILL,
    allowing graceful shutdown.

    Returns:
        Event set once a termination signal has been received.
    """
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()

    def handle_signal() -> None:
        """Signal handler that sets the stop event on SIGTERM/SIGINT."""
        logger.info("Termination signal received, initiating graceful shutdown...")
        stop.set()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, handle_signal)

    return stop
