"""Configuration module using Pydantic Settings.

Usage:
    from adminflow.config import StoreSettings

    settings = StoreSettings(latency=0.8)
"""

from adminflow.config.settings import StoreSettings

__all__ = [
    "StoreSettings",
]
