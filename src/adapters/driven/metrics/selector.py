"""Startup selection of the custom metrics strategy."""

import logging

from src.adapters.driven.config.settings import Settings
from src.adapters.driven.metrics.literal import LiteralMetric
from src.adapters.driven.metrics.template_file import TemplateFileMetrics
from src.ports.metrics import CustomMetricsPort

__all__ = ["select_custom_metrics"]

logger = logging.getLogger(__name__)


def select_custom_metrics(settings: Settings) -> CustomMetricsPort:
    """Pick the literal strategy when a metric name is set, else the template file.

    Args:
        settings: Resolved configuration.

    Returns:
        Provider used by every cycle.
    """
    if settings.custom_metric_name:
        logger.info(
            f"Custom metrics: literal {settings.custom_metric_name}={settings.custom_metric_value}"
        )
        return LiteralMetric(settings.custom_metric_name, settings.custom_metric_value)

    logger.info(f"Custom metrics: template file {settings.custom_metrics_file or '<disabled>'}")
    return TemplateFileMetrics(settings.custom_metrics_file)
