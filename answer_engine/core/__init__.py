"""Core configuration for the answer engine."""

from .config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
