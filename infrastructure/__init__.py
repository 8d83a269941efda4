# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Table storage and messaging
# PURPOSE: Azure Table Storage clients and Service Bus publishing
# CREATED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for the product/order function app.

Provides:
- open_table: Per-invocation async TableClient (connection string or MI)
- ServiceBusPublisher: Async queue publisher with retry and error categorization
- BaseRepository / RepositoryError: Shared repository error handling

Usage:
    from infrastructure import open_table, ServiceBusPublisher

    async with open_table("Products") as table:
        ...

    async with ServiceBusPublisher() as publisher:
        await publisher.send_message("product-queue", message)
"""

from infrastructure.base_repository import (
    BaseRepository,
    RepositoryError,
)
from infrastructure.table_storage import (
    TableStorageConfig,
    ensure_table,
    open_table,
)
from infrastructure.service_bus import (
    ServiceBusConfig,
    ServiceBusPublisher,
)

__all__ = [
    # Repository base
    'BaseRepository',
    'RepositoryError',
    # Table Storage
    'TableStorageConfig',
    'ensure_table',
    'open_table',
    # Service Bus
    'ServiceBusConfig',
    'ServiceBusPublisher',
]
