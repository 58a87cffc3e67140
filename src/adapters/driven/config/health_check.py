"""Healthcheck probe for container orchestration."""

import asyncio
import logging

from src.adapters.driven.config.settings import load_settings
from src.adapters.driven.health.server import HEALTH_PATH, parse_listen_address
from src.adapters.driven.http.client import HttpClient
from src.adapters.driven.logging.logging_config import configure_logs

__all__ = ["main", "healthz_url"]

logger = logging.getLogger(__name__)


def healthz_url(health_addr: str) -> str:
    """Build the local /healthz URL for a listen address.

    Args:
        health_addr: HEALTH_ADDR value, e.g. ":8081".

    Returns:
        URL reachable from inside the container.

    Raises:
        ValueError: If the address cannot be parsed.
    """
    host, port = parse_listen_address(health_addr)
    if host is None or host in ("0.0.0.0", "::"):
        host = "127.0.0.1"
    if ":" in host:
        host = f"[{host}]"
    return f"http://{host}:{port}{HEALTH_PATH}"


async def _probe(url: str) -> bool:
    async with HttpClient() as http:
        return await http.probe(url)


def main() -> int:
    """Run health check for container orchestration.

    Probes the forwarder's own /healthz endpoint, which answers 200
    only after a cycle has completed both legs.

    Returns:
        0 if healthy, 1 if unhealthy.
    """
    configure_logs()

    try:
        url = healthz_url(load_settings().health_addr)
    except ValueError as exc:
        logger.error(f"Forwarder healthcheck FAILED: {exc}")
        return 1

    if not asyncio.run(_probe(url)):
        logger.error(f"Forwarder healthcheck FAILED: {url} not ready")
        return 1

    logger.info("Forwarder healthcheck OK")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
