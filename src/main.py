"""Application entrypoint."""

import asyncio
import logging
from functools import partial

from src.adapters.driven.config.settings import Settings, load_settings
from src.adapters.driven.health.server import HealthServer
from src.adapters.driven.http.client import HttpClient
from src.adapters.driven.logging.logging_config import configure_logs
from src.adapters.driven.metrics.selector import select_custom_metrics
from src.adapters.driving.signals import make_stop_event
from src.build_info import REVISION, VERSION
from src.core.cycle import run_cycle
from src.core.event_loop import start_main_loop
from src.core.status import LastCycleStatus
from src.ports.settings import SettingsPort

__all__ = ["main", "run", "to_settings_port"]

logger = logging.getLogger(__name__)


def to_settings_port(config: Settings) -> SettingsPort:
    """Wrap config into the port so core depends on the interface (hexagonal)."""
    return SettingsPort(
        source_url=config.source_url,
        push_url=config.push_url,
        push_user=config.push_user,
        push_pass=config.push_pass,
        interval_sec=config.interval_sec,
        scrape_timeout_sec=config.scrape_timeout_sec,
        push_timeout_sec=config.push_timeout_sec,
    )


async def main() -> None:
    """Start the metrics forwarder.

    Startup sequence:
    1. Configure logging and report build identifiers.
    2. Resolve configuration from the environment.
    3. Select the custom metrics strategy.
    4. Start the /healthz listener (failure is logged, not fatal).
    5. Run the scrape-push loop until SIGTERM/SIGINT.
    6. Stop the listener within its grace window.
    """
    configure_logs()
    logger.info(f"Start prom2pushgateway version={VERSION} revision={REVISION}")

    config = load_settings()
    settings_port = to_settings_port(config)
    custom_metrics = select_custom_metrics(config)

    status = LastCycleStatus()
    stop = make_stop_event()
    health = HealthServer(config.health_addr, status)
    await health.start()

    try:
        async with HttpClient() as http:
            await start_main_loop(
                settings=settings_port,
                stop=stop,
                cycle_fn=partial(run_cycle, http, settings_port, custom_metrics),
                status=status,
            )
    except Exception as e:
        logger.error(f"Unhandled exception in main loop: {e}", exc_info=True)
    finally:
        await health.stop()

    logger.info("Forwarder stopped.")


def run() -> None:
    """Console-script entrypoint."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutdown requested by user (Ctrl+C).")


if __name__ == "__main__":
    run()
