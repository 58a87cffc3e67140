"""Settings port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["SettingsPort"]


@dataclass(frozen=True)
class SettingsPort:
    """Runtime settings for the scrape-push loop.

    Decouples core from concrete configuration sources, enabling
    easy testing and implementation swapping.

    Attributes:
        source_url: Metrics endpoint scraped with GET on every tick.
        push_url: Push target receiving the POST.
        push_user: Basic-auth username (empty disables auth).
        push_pass: Basic-auth password (empty disables auth).
        interval_sec: Seconds between ticks.
        scrape_timeout_sec: Upper bound for the scrape leg.
        push_timeout_sec: Upper bound for the push leg.
    """

    source_url: str
    push_url: str
    push_user: str = ""
    push_pass: str = ""
    interval_sec: float = 15.0
    scrape_timeout_sec: float = 5.0
    push_timeout_sec: float = 5.0
