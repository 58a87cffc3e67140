"""Build identifiers reported at startup."""

import os

__all__ = ["VERSION", "REVISION"]

VERSION = os.getenv("BUILD_VERSION", "dev")
REVISION = os.getenv("BUILD_REVISION", "0" * 30)
