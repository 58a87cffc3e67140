"""Single custom metric line from a configured name and value."""

from __future__ import annotations

import math

from src.ports.metrics import CustomMetricsPort

__all__ = ["LiteralMetric", "format_metric_value"]


def format_metric_value(value: float) -> str:
    """Format a sample value the way the text exposition format expects.

    Integral values below 1e21 print as plain integers (``1000000``, not
    ``1e+06``); both spellings parse as the same sample value. Special
    values are spelled ``NaN``, ``+Inf`` and ``-Inf``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


class LiteralMetric(CustomMetricsPort):
    """Fixed ``<name> <value>`` line computed once at startup.

    An empty name means no fragment for the lifetime of the process.
    """

    def __init__(self, name: str, value: float) -> None:
        self.name = name
        self.value = value
        self._fragment = f"{name} {format_metric_value(value)}\n".encode() if name else b""

    def render(self) -> bytes:
        return self._fragment

    def describe(self, fragment: bytes) -> str:
        if not fragment:
            return "custom metric=<none>"
        return f"custom metric {self.name}={format_metric_value(self.value)}"
