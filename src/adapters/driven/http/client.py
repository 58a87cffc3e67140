"""HTTP client adapter for the scrape and push legs."""

import base64
import logging
from types import TracebackType

import aiohttp
from aiohttp import ClientTimeout

from src.ports.http import PushRequest

__all__ = ["HttpClient", "PUSH_CONTENT_TYPE", "basic_auth_header"]

logger = logging.getLogger(__name__)

PROBE_TIMEOUT = 5
PUSH_CONTENT_TYPE = "text/plain"


def basic_auth_header(username: str, password: str) -> str:
    """Return `Basic base64(user:pass)` with the credentials encoded as UTF-8."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class HttpClient:
    """HTTP client sharing one session across cycles.

    Features:
    - Scrape (GET) and push (POST) legs, each with its own timeout.
    - Optional basic auth on the push leg.
    - Context manager for proper resource cleanup.
    - Health check/probe functionality.

    No request is retried; transport errors propagate to the caller.
    """

    def __init__(self) -> None:
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    def _require_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            raise RuntimeError("Session not initialized; use 'async with' context manager")
        return self.session

    async def scrape(self, url: str, timeout_sec: float) -> bytes:
        """Fetch the full body of the source endpoint.

        The status code is not inspected.

        Args:
            url: Source URL.
            timeout_sec: Bound for connect, request and body read together.

        Returns:
            Raw response body.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Invalid URL, network or payload errors.
            asyncio.TimeoutError: If the leg exceeds its timeout.
        """
        session = self._require_session()
        async with session.get(url, timeout=ClientTimeout(total=timeout_sec)) as resp:
            body = await resp.read()
            logger.debug(f"Scraped {len(body)} bytes from {url} (status {resp.status})")
            return body

    async def push(self, req: PushRequest) -> int:
        """POST the payload to the push target and drain the response.

        Args:
            req: Push request with URL, body, timeout and credentials.

        Returns:
            HTTP status code of the push target, for logging only.

        Raises:
            RuntimeError: If session not initialized.
            aiohttp exceptions: Invalid URL or network errors.
            asyncio.TimeoutError: If the leg exceeds its timeout.
        """
        session = self._require_session()
        headers = {"Content-Type": PUSH_CONTENT_TYPE}
        if req.uses_auth:
            headers["Authorization"] = basic_auth_header(req.username, req.password)

        async with session.post(
            req.url,
            data=req.body,
            headers=headers,
            timeout=ClientTimeout(total=req.timeout_sec),
        ) as resp:
            await resp.read()
            return resp.status

    async def probe(self, url: str, timeout: float = PROBE_TIMEOUT) -> bool:
        """Check if HTTP endpoint answers with a 2xx status.

        Args:
            url: URL to probe.
            timeout: Timeout in seconds.

        Returns:
            True if reachable (200 <= status < 300), False otherwise.
        """
        logger.info(f"Probing endpoint {url}...")
        try:
            session = self._require_session()
            async with session.get(url, timeout=ClientTimeout(total=timeout)) as resp:
                logger.info(f"Probe for {url} returned status {resp.status}")
                return 200 <= resp.status < 300
        except Exception as e:
            logger.warning(f"Probe failed for {url}: {e}")
            return False
