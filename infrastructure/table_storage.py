# ============================================================================
# TABLE STORAGE INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - Azure Table Storage clients
# PURPOSE: Per-invocation async TableClient factory with dual auth
# CREATED: 18 OCT 2026
# ============================================================================
"""
Table Storage Infrastructure

Opens async Azure Table Storage clients for repositories.

Key Design Decisions:
    - Client per invocation (function app pattern, no process-wide clients)
    - Dual auth: connection string OR managed identity
    - Tables created on first use (create-if-not-exists)

Usage:
    async with open_table(TableName.PRODUCTS) as table:
        repo = ProductRepository(table)
        product = await repo.get_by_id("abc")
"""

import logging
import os
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional

from azure.core.exceptions import ResourceExistsError
from azure.data.tables.aio import TableClient

from core.config import STORAGE_CONNECTION_SETTING

logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class TableStorageConfig:
    """Table Storage configuration from environment."""

    connection_string: Optional[str] = None
    account_url: str = ""
    managed_identity_client_id: Optional[str] = None

    @classmethod
    def from_env(cls) -> "TableStorageConfig":
        """Load configuration from environment variables."""
        return cls(
            connection_string=os.environ.get(
                "TABLES_CONNECTION_STRING",
                os.environ.get(STORAGE_CONNECTION_SETTING),
            ),
            account_url=os.environ.get("TABLES_ACCOUNT_URL", ""),
            managed_identity_client_id=os.environ.get("AZURE_CLIENT_ID"),
        )

    @property
    def use_connection_string(self) -> bool:
        """Check if connection string auth should be used."""
        return bool(self.connection_string)

    @property
    def is_configured(self) -> bool:
        return bool(self.connection_string or self.account_url)


def _build_credential(config: TableStorageConfig):
    """Managed identity credential (user-assigned when a client id is set)."""
    if config.managed_identity_client_id:
        from azure.identity.aio import ManagedIdentityCredential
        logger.debug("ManagedIdentityCredential initialized with client_id")
        return ManagedIdentityCredential(client_id=config.managed_identity_client_id)

    from azure.identity.aio import DefaultAzureCredential
    logger.debug("DefaultAzureCredential initialized")
    return DefaultAzureCredential()


async def ensure_table(client: TableClient) -> None:
    """Create the table if it does not exist yet."""
    try:
        await client.create_table()
        logger.info(f"Created table: {client.table_name}")
    except ResourceExistsError:
        pass


@asynccontextmanager
async def open_table(
    table_name: str,
    config: Optional[TableStorageConfig] = None,
    create_if_missing: bool = True,
) -> AsyncIterator[TableClient]:
    """
    Open an async TableClient for one invocation.

    Args:
        table_name: Table to open
        config: Optional configuration (defaults to from_env())
        create_if_missing: Create the table before yielding

    Yields:
        azure.data.tables.aio.TableClient

    Raises:
        ValueError: If neither a connection string nor an account URL is set
    """
    config = config or TableStorageConfig.from_env()
    table_name = getattr(table_name, "value", table_name)
    credential = None

    if config.use_connection_string:
        client = TableClient.from_connection_string(
            config.connection_string,
            table_name=table_name,
        )
    else:
        if not config.account_url:
            raise ValueError(
                "TABLES_ACCOUNT_URL environment variable not set. "
                "Required for managed identity authentication."
            )
        logger.debug(f"Using managed identity for tables: {config.account_url}")
        credential = _build_credential(config)
        client = TableClient(
            endpoint=config.account_url,
            table_name=table_name,
            credential=credential,
        )

    try:
        async with client:
            if create_if_missing:
                await ensure_table(client)
            yield client
    finally:
        if credential is not None:
            await credential.close()


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "TableStorageConfig",
    "ensure_table",
    "open_table",
]
