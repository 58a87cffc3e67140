"""Custom metrics port definition (interface)."""

from __future__ import annotations

from typing import Protocol

__all__ = ["CustomMetricsPort"]


class CustomMetricsPort(Protocol):
    """Source of the fragment appended to every pushed payload.

    Implementations must never raise from render(): an unavailable
    fragment is reported as empty bytes so the cycle carries on.
    """

    def render(self) -> bytes:
        """Return newline-terminated metric lines, or b"" when there are none.

        Returns:
            Fragment bytes.
        """
        ...

    def describe(self, fragment: bytes, /) -> str:
        """Return a short indicator of what was appended, for the push log line.

        Args:
            fragment: Bytes previously returned by render().

        Returns:
            Human-readable summary.
        """
        ...
