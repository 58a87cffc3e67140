"""One scrape-then-push cycle."""

import asyncio
import logging
from typing import Protocol

import aiohttp

from src.ports.http import PushRequest
from src.ports.metrics import CustomMetricsPort
from src.ports.settings import SettingsPort

__all__ = ["run_cycle", "build_push_payload", "CycleHttpPort"]

logger = logging.getLogger(__name__)

FIRST_FAILING_HTTP_CODE = 400

# Request construction (bad URL), transport, timeout and body-read errors.
LEG_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, ValueError)


class CycleHttpPort(Protocol):
    """HTTP operations a cycle needs."""

    async def scrape(self, url: str, timeout_sec: float) -> bytes: ...

    async def push(self, req: PushRequest) -> int: ...


def build_push_payload(body: bytes, fragment: bytes) -> bytes:
    """Append the custom fragment to the scraped body, separated by a newline."""
    if not fragment:
        return body
    return body + b"\n" + fragment


async def run_cycle(
    http: CycleHttpPort,
    settings: SettingsPort,
    custom_metrics: CustomMetricsPort,
) -> bool:
    """Scrape the source once and forward the payload to the push target.

    Status codes of either peer are not treated as failures: any
    response that completes the round trip counts as success. A non-2xx
    push status is only logged as a warning.

    Args:
        http: Client performing the GET and POST.
        settings: Runtime settings (URLs, credentials, timeouts).
        custom_metrics: Provider of the appended fragment.

    Returns:
        True when both legs completed without a transport error.
    """
    fragment = custom_metrics.render()

    try:
        body = await http.scrape(settings.source_url, settings.scrape_timeout_sec)
    except LEG_ERRORS as e:
        logger.warning(f"scrape: {settings.source_url}: {e!r}")
        return False

    req = PushRequest(
        url=settings.push_url,
        body=build_push_payload(body, fragment),
        timeout_sec=settings.push_timeout_sec,
        username=settings.push_user,
        password=settings.push_pass,
    )

    try:
        status = await http.push(req)
    except LEG_ERRORS as e:
        logger.warning(f"push: {settings.push_url}: {e!r}")
        return False

    if status >= FIRST_FAILING_HTTP_CODE:
        logger.warning(f"push: {settings.push_url} answered {status}")

    logger.info(
        f"pushed -> {settings.push_url} "
        f"(auth={req.uses_auth}, {custom_metrics.describe(fragment)})"
    )
    return True
