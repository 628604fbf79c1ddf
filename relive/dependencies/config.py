"""
FastAPI dependency utilities for injecting configuration.
"""

from fastapi import Depends

from relive.core.config import AppSettings, get_settings


def get_app_settings() -> AppSettings:
    """FastAPI dependency returning application settings.

    ``get_settings`` already caches the instance; tests override this
    dependency to run a route against hand-built settings.
    """
    return get_settings()


SettingsDependency = Depends(get_app_settings)

__all__ = ["SettingsDependency", "get_app_settings"]
