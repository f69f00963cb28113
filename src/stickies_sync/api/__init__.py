"""Remote stickies API access."""

from .client import StickiesApiClient

__all__ = ["StickiesApiClient"]
