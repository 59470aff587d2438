"""Configuration module for etsy-access.

Usage:
    from etsy_access.core.config import settings, Environment

    if settings.ENVIRONMENT == Environment.PRD:
        ...
"""

from etsy_access.core.config.enums import Environment
from etsy_access.core.config.settings import Settings

__all__ = [
    "Settings",
    "Environment",
    "settings",
]

# Singleton settings instance
settings = Settings()
