"""HTTP port definition (DTO)."""

from dataclasses import dataclass

__all__ = ["PushRequest"]


@dataclass(frozen=True)
class PushRequest:
    """Push leg of one cycle.

    Decouples core cycle logic from HTTP implementation details.

    Attributes:
        url: Push target URL.
        body: Scraped payload, possibly followed by custom metric lines.
        timeout_sec: Upper bound for the whole round trip.
        username: Basic-auth username.
        password: Basic-auth password.
    """

    url: str
    body: bytes
    timeout_sec: float
    username: str = ""
    password: str = ""

    @property
    def uses_auth(self) -> bool:
        """Basic auth is sent only when both credentials are set."""
        return bool(self.username and self.password)
