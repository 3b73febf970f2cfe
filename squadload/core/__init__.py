"""Configuration and entropy shared by the analytics core."""

from squadload.core.config import Settings, settings
from squadload.core.entropy import EntropySource

__all__ = ["EntropySource", "Settings", "settings"]
