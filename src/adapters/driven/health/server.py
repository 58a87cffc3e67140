"""Liveness endpoint reflecting the outcome of the last cycle."""

import logging

from aiohttp import web

from src.core.status import LastCycleStatus

__all__ = ["HealthServer", "parse_listen_address", "SHUTDOWN_GRACE_SEC"]

logger = logging.getLogger(__name__)

HEALTH_PATH = "/healthz"
SHUTDOWN_GRACE_SEC = 3.0


def parse_listen_address(address: str) -> tuple[str | None, int]:
    """Split a ``host:port`` listen address.

    Accepts ``:8081`` (all interfaces), ``127.0.0.1:8081`` and
    ``[::1]:8081``.

    Args:
        address: Listen address.

    Returns:
        Tuple of (host or None for all interfaces, port).

    Raises:
        ValueError: If the port is missing or not a valid number.
    """
    host, sep, port_raw = address.rpartition(":")
    if not sep:
        raise ValueError(f"Missing port in listen address {address!r}")
    port = int(port_raw)
    if not 0 <= port <= 65535:
        raise ValueError(f"Port out of range in listen address {address!r}")
    host = host.strip("[]")
    return (host or None), port


class HealthServer:
    """aiohttp server exposing GET /healthz.

    Returns 200 "ok" when the last cycle succeeded, 503 "not ready"
    otherwise. Startup failures are logged and never stop the
    scheduler.
    """

    def __init__(
        self,
        address: str,
        status: LastCycleStatus,
        *,
        shutdown_grace_sec: float = SHUTDOWN_GRACE_SEC,
    ) -> None:
        self.address = address
        self.status = status
        self.shutdown_grace_sec = shutdown_grace_sec
        self._runner: web.AppRunner | None = None

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get(HEALTH_PATH, self.handle_healthz)
        return app

    async def handle_healthz(self, request: web.Request) -> web.Response:
        if self.status.is_ok():
            return web.Response(status=200, text="ok")
        return web.Response(status=503, text="not ready")

    @property
    def is_running(self) -> bool:
        return self._runner is not None

    async def start(self) -> bool:
        """Bind and start serving in the background of the running loop.

        Returns:
            True if listening, False if the address was invalid or the bind failed.
        """
        try:
            host, port = parse_listen_address(self.address)
        except ValueError as e:
            logger.error(f"health server error: {e}")
            return False

        runner = web.AppRunner(
            self.make_app(), access_log=None, shutdown_timeout=self.shutdown_grace_sec
        )
        await runner.setup()
        try:
            await web.TCPSite(runner, host, port).start()
        except OSError as e:
            logger.error(f"health server error: {e}")
            await runner.cleanup()
            return False

        self._runner = runner
        logger.info(f"health endpoint listening on {self.address}")
        return True

    async def stop(self) -> None:
        """Shut down, giving in-flight requests the grace window to finish."""
        if self._runner is None:
            return
        runner, self._runner = self._runner, None
        await runner.cleanup()
        logger.info("health endpoint stopped")
