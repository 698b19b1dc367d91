"""Module de configuration."""

from dhcp_scope_sync.config.loader import ConfigLoader, FileConfigLoader
from dhcp_scope_sync.config.settings import (
    GatewaySettings,
    LoggingSettings,
    SyncSettings,
    load_settings,
)

__all__ = [
    "ConfigLoader",
    "FileConfigLoader",
    "GatewaySettings",
    "LoggingSettings",
    "SyncSettings",
    "load_settings",
]
