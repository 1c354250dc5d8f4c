"""Common utility functions for bookdedupe."""

from bookdedupe.utils.timestamps import get_iso_timestamp

__all__ = ["get_iso_timestamp"]
