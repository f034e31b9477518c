"""High-level client API."""

from .client import MusicClient

__all__ = ["MusicClient"]
