# ============================================================================
# FUNCTION APP CONFIGURATION
# ============================================================================
# STATUS: Gateway - Configuration management
# PURPOSE: Environment-based configuration for the function app
# CREATED: 18 OCT 2026
# ============================================================================
"""
Function App Configuration

Loads configuration from environment variables with sensible defaults.

Table Storage:
- TABLES_CONNECTION_STRING or AzureWebJobsStorage -> connection string auth
- Otherwise TABLES_ACCOUNT_URL -> managed identity (AZURE_CLIENT_ID optional)

Service Bus:
- SERVICE_BUS_CONNECTION_STRING or ServiceBusConnection -> connection string
- Otherwise SERVICE_BUS_NAMESPACE -> managed identity
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from __version__ import __version__
from infrastructure.service_bus import ServiceBusConfig
from infrastructure.table_storage import TableStorageConfig


@dataclass
class FunctionConfig:
    """Configuration for the function app."""

    tables: TableStorageConfig = field(default_factory=TableStorageConfig)
    service_bus: ServiceBusConfig = field(default_factory=ServiceBusConfig)

    # App Info
    version: str = __version__
    service_name: str = "product-orders-functions"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "FunctionConfig":
        """Load configuration from environment variables."""
        return cls(
            tables=TableStorageConfig.from_env(),
            service_bus=ServiceBusConfig.from_env(),
            version=os.environ.get("APP_VERSION", __version__),
            service_name=os.environ.get("SERVICE_NAME", "product-orders-functions"),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
        )

    @property
    def has_table_config(self) -> bool:
        """Check if Table Storage is configured."""
        return self.tables.is_configured

    @property
    def has_service_bus_config(self) -> bool:
        """Check if Service Bus is configured (for /products/queue)."""
        return self.service_bus.is_configured


# Global config singleton
_config: Optional[FunctionConfig] = None


def get_config() -> FunctionConfig:
    """Get the global configuration singleton."""
    global _config
    if _config is None:
        _config = FunctionConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration (tests, settings reload)."""
    global _config
    _config = None


__all__ = ["FunctionConfig", "get_config", "reset_config"]
