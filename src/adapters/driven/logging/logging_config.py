"""Structured logging setup for the forwarder."""

import logging
import os

__all__ = ["configure_logs"]


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at LOG_LEVEL (default INFO).
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (src) at DEBUG level.
    - Structured format with timestamp, level, module, and line number.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%Y-%m-%dT%H:%M:%S%z"

    formatter = logging.Formatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    # Root logger
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("src").setLevel(logging.DEBUG)
