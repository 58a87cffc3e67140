"""Configuration loading from environment variables."""

import logging
import math
import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

__all__ = ["Settings", "load_settings", "DEFAULTS"]

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULTS: dict[str, str] = {
    "SOURCE_URL": "http://app:8080/metrics",
    "PUSHGATEWAY_URL": "http://pushgateway:9091/metrics/job/example",
    "PUSHGATEWAY_USER": "",
    "PUSHGATEWAY_PASS": "",
    "CUSTOM_METRICS_FILE": "/etc/custom-metrics.txt",
    "CUSTOM_METRIC_NAME": "",
    "HEALTH_ADDR": ":8081",
}

DEFAULT_INTERVAL_SEC = 15.0
DEFAULT_SCRAPE_TIMEOUT_SEC = 5.0
DEFAULT_PUSH_TIMEOUT_SEC = 5.0
DEFAULT_CUSTOM_METRIC_VALUE = 0.0


class Settings(BaseModel):
    """Runtime configuration for the forwarder.

    Built once at startup and read-only afterwards.

    Attributes:
        source_url: Endpoint scraped on every tick.
        push_url: Push target receiving the scraped payload.
        push_user: Basic-auth username (optional).
        push_pass: Basic-auth password (optional).
        interval_sec: Seconds between ticks.
        scrape_timeout_sec: Timeout of the GET leg.
        push_timeout_sec: Timeout of the POST leg.
        health_addr: Listen address of the /healthz endpoint.
        custom_metrics_file: Template file rendered into extra metric lines.
        custom_metric_name: Name of a single literal metric (selects the literal strategy).
        custom_metric_value: Value of the literal metric.
    """

    model_config = ConfigDict(frozen=True)

    source_url: str = Field(DEFAULTS["SOURCE_URL"], description="Metrics endpoint to scrape.")
    push_url: str = Field(DEFAULTS["PUSHGATEWAY_URL"], description="Push target URL.")
    push_user: str = ""
    push_pass: str = Field("", repr=False)
    interval_sec: float = Field(DEFAULT_INTERVAL_SEC, gt=0)
    scrape_timeout_sec: float = Field(DEFAULT_SCRAPE_TIMEOUT_SEC, gt=0)
    push_timeout_sec: float = Field(DEFAULT_PUSH_TIMEOUT_SEC, gt=0)
    health_addr: str = DEFAULTS["HEALTH_ADDR"]
    custom_metrics_file: str = DEFAULTS["CUSTOM_METRICS_FILE"]
    custom_metric_name: str = ""
    custom_metric_value: float = DEFAULT_CUSTOM_METRIC_VALUE

    @property
    def uses_auth(self) -> bool:
        """Return True when both push credentials are configured."""
        return bool(self.push_user and self.push_pass)


def _getenv(environ: Mapping[str, str], key: str) -> str:
    """Return the variable if set and non-empty, else its default."""
    value = environ.get(key, "")
    return value if value else DEFAULTS[key]


def _getenv_seconds(environ: Mapping[str, str], key: str, default: float) -> float:
    """Parse a positive number of seconds, falling back to default on anything else."""
    raw = environ.get(key, "")
    if not raw:
        return default
    try:
        seconds = float(raw)
    except ValueError:
        logger.debug(f"Ignoring unparsable {key}={raw!r}, using {default}s")
        return default
    if not math.isfinite(seconds) or seconds <= 0:
        logger.debug(f"Ignoring non-positive {key}={raw!r}, using {default}s")
        return default
    return seconds


def _getenv_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key, "")
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.debug(f"Ignoring unparsable {key}={raw!r}, using {default}")
        return default


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve settings from the environment.

    Every option is optional: a variable that is unset, empty or
    unparsable silently takes its default, so this never fails.

    Recognized variables:
    - SOURCE_URL, PUSHGATEWAY_URL, PUSHGATEWAY_USER, PUSHGATEWAY_PASS.
    - INTERVAL, SCRAPE_TIMEOUT, PUSH_TIMEOUT: seconds.
    - HEALTH_ADDR: listen address of /healthz, e.g. ":8081".
    - CUSTOM_METRICS_FILE: template file with extra metric lines.
    - CUSTOM_METRIC_NAME, CUSTOM_METRIC_VALUE: single literal metric.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Returns:
        Frozen Settings object.
    """
    env = os.environ if environ is None else environ

    settings = Settings(
        source_url=_getenv(env, "SOURCE_URL"),
        push_url=_getenv(env, "PUSHGATEWAY_URL"),
        push_user=_getenv(env, "PUSHGATEWAY_USER"),
        push_pass=_getenv(env, "PUSHGATEWAY_PASS"),
        interval_sec=_getenv_seconds(env, "INTERVAL", DEFAULT_INTERVAL_SEC),
        scrape_timeout_sec=_getenv_seconds(env, "SCRAPE_TIMEOUT", DEFAULT_SCRAPE_TIMEOUT_SEC),
        push_timeout_sec=_getenv_seconds(env, "PUSH_TIMEOUT", DEFAULT_PUSH_TIMEOUT_SEC),
        health_addr=_getenv(env, "HEALTH_ADDR"),
        custom_metrics_file=_getenv(env, "CUSTOM_METRICS_FILE"),
        custom_metric_name=_getenv(env, "CUSTOM_METRIC_NAME"),
        custom_metric_value=_getenv_float(
            env, "CUSTOM_METRIC_VALUE", DEFAULT_CUSTOM_METRIC_VALUE
        ),
    )

    logger.info(
        f"Forwarder configured: source={settings.source_url}, "
        f"push={settings.push_url}, auth={settings.uses_auth}, "
        f"interval={settings.interval_sec}s, "
        f"timeouts=scrape:{settings.scrape_timeout_sec}s/push:{settings.push_timeout_sec}s, "
        f"health={settings.health_addr}"
    )

    return settings
