"""Expose dependency helpers for FastAPI routers."""

from .clients import (
    ServiceFactory,
    build_provider_client,
    build_regret_analysis_service,
    get_regret_analysis_service,
    get_service_factory,
)
from .config import SettingsDependency, get_app_settings

__all__ = [
    "ServiceFactory",
    "SettingsDependency",
    "build_provider_client",
    "build_regret_analysis_service",
    "get_app_settings",
    "get_regret_analysis_service",
    "get_service_factory",
]
