"""Custom metric lines rendered from a Jinja2 template file."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType

from jinja2 import TemplateError
from jinja2.sandbox import SandboxedEnvironment

from src.ports.metrics import CustomMetricsPort

__all__ = ["TemplateFileMetrics", "clean_metric_lines", "environment_snapshot"]

logger = logging.getLogger(__name__)

COMMENT_PREFIX = "#"

EnvFn = Callable[[], Mapping[str, str]]


def environment_snapshot() -> Mapping[str, str]:
    """Return a read-only copy of the current process environment."""
    return MappingProxyType(dict(os.environ))


def clean_metric_lines(text: str) -> str:
    """Drop blank and comment lines, newline-terminate the rest.

    Surrounding whitespace is trimmed from every line and the order of
    surviving lines is preserved.

    Args:
        text: Rendered template output.

    Returns:
        Cleaned fragment text (empty string when nothing survives).
    """
    lines = (line.strip() for line in text.split("\n"))
    return "".join(f"{line}\n" for line in lines if line and not line.startswith(COMMENT_PREFIX))


class TemplateFileMetrics(CustomMetricsPort):
    """Re-reads and renders a template file on every cycle.

    The template sees a single variable, ``Env``, holding the process
    environment, e.g. ``build_info{host="{{ Env.HOSTNAME }}"} 1``.
    A missing file yields an empty fragment silently; read or template
    errors are logged and also yield an empty fragment.
    """

    def __init__(self, path: str, env_fn: EnvFn = environment_snapshot) -> None:
        """Initialize the provider.

        Args:
            path: Template file path; empty disables the provider.
            env_fn: Returns the mapping exposed to templates as ``Env``.
        """
        self.path = path
        self._env_fn = env_fn
        self._jinja = SandboxedEnvironment(autoescape=False, keep_trailing_newline=True)

    def render(self) -> bytes:
        if not self.path:
            return b""
        path = Path(self.path)
        if not path.exists():
            return b""

        try:
            source = path.read_text(encoding="utf-8")
            template = self._jinja.from_string(source)
        except (OSError, UnicodeDecodeError, TemplateError) as e:
            logger.warning(f"Custom metrics template {self.path} unavailable: {e}")
            return b""

        # Expressions in the template may raise arbitrary errors (1 / 0, "a" + 1).
        try:
            rendered = template.render(Env=self._env_fn())
        except Exception as e:  # noqa: BLE001
            logger.warning(f"Custom metrics template {self.path} failed to render: {e!r}")
            return b""

        return clean_metric_lines(rendered).encode("utf-8")

    def describe(self, fragment: bytes) -> str:
        return f"template metrics={len(fragment)} bytes"
