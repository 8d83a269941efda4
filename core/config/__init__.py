# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Resource names and tunable defaults shared by triggers, services and tests.
"""

from core.config.defaults import (
    TableName,
    QueueName,
    BlobContainer,
    STORAGE_CONNECTION_SETTING,
    SERVICE_BUS_CONNECTION_SETTING,
    ORDER_REPORT_SCHEDULE,
    ReconcileDefaults,
    PreviewDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

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
