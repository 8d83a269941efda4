# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized names for tables, queues, containers and schedules
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Names that trigger decorators need at import time (queues, containers,
schedules) plus tunables that can be overridden via environment variables.

Design:
- Str enums for resource names (usable directly in decorator arguments)
- Immutable dataclasses for tunables
- Environment variable overrides
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class TableName(str, Enum):
    """Table Storage tables (one partition each)."""
    PRODUCTS = "Products"
    ORDERS = "Orders"


class QueueName(str, Enum):
    """Service Bus queues."""
    PRODUCTS = "product-queue"
    ORDERS = "orders-queue"


class BlobContainer(str, Enum):
    """Blob containers watched by triggers."""
    UPLOADS = "uploads"


# Connection app-setting names used by trigger/output bindings
STORAGE_CONNECTION_SETTING = "AzureWebJobsStorage"
SERVICE_BUS_CONNECTION_SETTING = "ServiceBusConnection"

# CRON: every 5 minutes (Functions NCRONTAB, seconds field first)
ORDER_REPORT_SCHEDULE = "0 */5 * * * *"


@dataclass(frozen=True)
class ReconcileDefaults:
    """
    Defaults for the product-queue reconciler.

    A queued update carries no version tag, so a lost race is resolved by
    re-reading and re-applying. The attempt count is capped to avoid livelock.
    """
    max_update_attempts: int = 3

    @classmethod
    def from_env(cls) -> "ReconcileDefaults":
        """Create from environment variables."""
        return cls(
            max_update_attempts=max(1, int(os.getenv("PRODUCT_UPDATE_MAX_ATTEMPTS", "3"))),
        )


@dataclass(frozen=True)
class PreviewDefaults:
    """Defaults for blob upload logging."""
    preview_chars: int = 100


@dataclass(frozen=True)
class Defaults:
    """All defaults, grouped."""
    reconcile: ReconcileDefaults = field(default_factory=ReconcileDefaults)
    preview: PreviewDefaults = field(default_factory=PreviewDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        return cls(reconcile=ReconcileDefaults.from_env())


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TableName",
    "QueueName",
    "BlobContainer",
    "STORAGE_CONNECTION_SETTING",
    "SERVICE_BUS_CONNECTION_SETTING",
    "ORDER_REPORT_SCHEDULE",
    "ReconcileDefaults",
    "PreviewDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
