"""Outcome of the most recent cycle, shared with the health endpoint."""

__all__ = ["LastCycleStatus"]


class LastCycleStatus:
    """Single boolean cell written by the scheduler and read by /healthz.

    Both sides run on the same event loop, so plain attribute access is
    atomic. Starts as not ready until the first cycle completes.
    """

    def __init__(self, ok: bool = False) -> None:
        self._ok = ok

    def record(self, ok: bool) -> None:
        self._ok = ok

    def is_ok(self) -> bool:
        return self._ok
