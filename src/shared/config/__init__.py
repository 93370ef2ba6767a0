"""Configuration management module.

This module provides:
- Environment-based process settings with validation
- The typed application config tree (providers, cluster locators)
- Cached settings access via get_settings()
"""

from .app_config import (
    CatalogConfig,
    CatalogProvidersConfig,
    ClusterLocatorEntry,
    ClusterLocatorMethod,
    KubernetesConfig,
    RootConfig,
    load_app_config,
    parse_app_config,
)
from .settings import (
    CAPIProviderSettings,
    Environment,
    LogFormat,
    LogLevel,
    Settings,
    get_settings,
)

__all__ = [
    # Main settings
    "Settings",
    "get_settings",
    # Enums
    "Environment",
    "LogLevel",
    "LogFormat",
    # Service-specific settings
    "CAPIProviderSettings",
    # Application config tree
    "RootConfig",
    "CatalogConfig",
    "CatalogProvidersConfig",
    "KubernetesConfig",
    "ClusterLocatorMethod",
    "ClusterLocatorEntry",
    "load_app_config",
    "parse_app_config",
]
