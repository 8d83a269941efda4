# ============================================================================
# SERVICE BUS INFRASTRUCTURE
# ============================================================================
# STATUS: Infrastructure - Azure Service Bus messaging
# PURPOSE: Publisher for product-queue messages
# CREATED: 18 OCT 2026
# ============================================================================
"""
Service Bus Infrastructure

Publisher for Azure Service Bus queues. Consumption is handled by the
Functions host through service_bus_queue_trigger bindings, so there is
no receiver here.

Key Design Decisions:
    - Publisher per invocation, closed on exit (no process-wide clients)
    - Async client: sends and retry backoff are awaited
    - Dual auth: connection string OR managed identity
    - Error categorization: permanent vs transient
    - Pydantic model serialization

Usage:
    async with ServiceBusPublisher(ServiceBusConfig.from_env()) as publisher:
        await publisher.send_message("product-queue", message)
"""

import asyncio
import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from azure.identity.aio import DefaultAzureCredential
from azure.servicebus import ServiceBusMessage
from azure.servicebus.aio import ServiceBusClient, ServiceBusSender
from azure.servicebus.exceptions import (
    MessageSizeExceededError,
    MessagingEntityNotFoundError,
    OperationTimeoutError,
    ServiceBusAuthenticationError,
    ServiceBusAuthorizationError,
    ServiceBusConnectionError,
    ServiceBusCommunicationError,
    ServiceBusError,
    ServiceBusQuotaExceededError,
    ServiceBusServerBusyError,
)
from pydantic import BaseModel

from core.config import SERVICE_BUS_CONNECTION_SETTING

logger = logging.getLogger(__name__)

# SDK-level link retries, kept short; send_message retries on top of these
SDK_RETRY_TOTAL = 3
SDK_RETRY_BACKOFF_MAX = 10


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class ServiceBusConfig:
    """Service Bus configuration from environment."""

    fully_qualified_namespace: str = ""
    connection_string: Optional[str] = None
    retry_count: int = 3
    retry_delay_seconds: float = 1.0
    message_ttl_hours: int = 24

    @classmethod
    def from_env(cls) -> "ServiceBusConfig":
        """Load configuration from environment variables."""
        return cls(
            fully_qualified_namespace=os.environ.get(
                "SERVICE_BUS_NAMESPACE",
                os.environ.get(f"{SERVICE_BUS_CONNECTION_SETTING}__fullyQualifiedNamespace", ""),
            ),
            connection_string=os.environ.get(
                "SERVICE_BUS_CONNECTION_STRING",
                os.environ.get(SERVICE_BUS_CONNECTION_SETTING),
            ),
            retry_count=int(os.environ.get("SERVICE_BUS_RETRY_COUNT", "3")),
            retry_delay_seconds=float(os.environ.get("SERVICE_BUS_RETRY_DELAY", "1.0")),
            message_ttl_hours=int(os.environ.get("SERVICE_BUS_MESSAGE_TTL_HOURS", "24")),
        )

    @property
    def use_connection_string(self) -> bool:
        """Check if connection string auth should be used."""
        return bool(self.connection_string)

    @property
    def is_configured(self) -> bool:
        return bool(self.fully_qualified_namespace or self.connection_string)


# ============================================================================
# SERVICE BUS PUBLISHER
# ============================================================================

class ServiceBusPublisher:
    """
    Async Service Bus message publisher with sender caching.

    One publisher per invocation; senders are cached per queue for the
    publisher's lifetime and closed with it. Every network call is awaited,
    including retry backoff.

    Key Features:
        - Automatic retry with exponential backoff on transient errors
        - Permanent errors fail fast as RuntimeError
    """

    def __init__(self, config: Optional[ServiceBusConfig] = None):
        """Initialize Service Bus publisher (no network I/O until the first send)."""
        self.config = config or ServiceBusConfig.from_env()
        self._client: Optional[ServiceBusClient] = None
        self._senders: Dict[str, ServiceBusSender] = {}
        self._credential = None

        self._connect()

        logger.debug(
            f"ServiceBusPublisher initialized "
            f"(namespace={self.config.fully_qualified_namespace or 'connection_string'})"
        )

    async def __aenter__(self) -> "ServiceBusPublisher":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _connect(self) -> None:
        """Build the Service Bus client; AMQP links open lazily on first send."""
        if self.config.use_connection_string:
            logger.debug("Using connection string authentication")
            self._client = ServiceBusClient.from_connection_string(
                self.config.connection_string,
                retry_total=SDK_RETRY_TOTAL,
                retry_backoff_factor=0.5,
                retry_backoff_max=SDK_RETRY_BACKOFF_MAX,
                retry_mode="exponential",
            )
        else:
            if not self.config.fully_qualified_namespace:
                raise ValueError(
                    "SERVICE_BUS_NAMESPACE environment variable not set. "
                    "Required for managed identity authentication."
                )

            logger.debug(f"Using managed identity for namespace: {self.config.fully_qualified_namespace}")
            self._credential = DefaultAzureCredential()
            self._client = ServiceBusClient(
                fully_qualified_namespace=self.config.fully_qualified_namespace,
                credential=self._credential,
                retry_total=SDK_RETRY_TOTAL,
                retry_backoff_factor=0.5,
                retry_backoff_max=SDK_RETRY_BACKOFF_MAX,
                retry_mode="exponential",
            )

    def _get_sender(self, queue_name: str) -> ServiceBusSender:
        """Get or create the cached sender for a queue."""
        if queue_name not in self._senders:
            logger.debug(f"Creating new sender for queue: {queue_name}")
            self._senders[queue_name] = self._client.get_queue_sender(queue_name)
        return self._senders[queue_name]

    @staticmethod
    def _serialize(message: BaseModel) -> str:
        """Use the model's own wire format when it defines one."""
        to_body = getattr(message, "to_service_bus_body", None)
        if callable(to_body):
            return to_body()
        return message.model_dump_json()

    async def send_message(
        self,
        queue_name: str,
        message: BaseModel,
        ttl_hours: Optional[int] = None,
    ) -> str:
        """
        Send a single message to Service Bus.

        Args:
            queue_name: Target queue name
            message: Pydantic model to send
            ttl_hours: Message time-to-live in hours

        Returns:
            Message ID

        Raises:
            RuntimeError: If send fails permanently or after retries
        """
        sender = self._get_sender(queue_name)

        sb_message = ServiceBusMessage(
            body=self._serialize(message),
            content_type="application/json",
            time_to_live=timedelta(hours=ttl_hours or self.config.message_ttl_hours),
        )

        # Application properties for tracing
        sb_message.application_properties = {}
        for attr in ("product_id", "action", "order_id"):
            value = getattr(message, attr, None)
            if value:
                sb_message.application_properties[attr] = str(value)

        for attempt in range(self.config.retry_count):
            try:
                await sender.send_messages(sb_message)
                message_id = sb_message.message_id or f"sb_{datetime.now(timezone.utc).timestamp()}"

                logger.info(
                    f"Message sent to {queue_name}: {message_id}",
                    extra={
                        "queue": queue_name,
                        "message_id": message_id,
                        "message_type": type(message).__name__,
                    },
                )
                return message_id

            except (ServiceBusAuthenticationError, ServiceBusAuthorizationError) as e:
                # Permanent: Auth failures won't resolve with retry
                logger.error(f"Auth failed for {queue_name}: {e}")
                raise RuntimeError(f"Service Bus auth failed: {e}") from e

            except MessageSizeExceededError as e:
                logger.error(f"Message too large for {queue_name}: {e}")
                raise RuntimeError(f"Message exceeds size limit: {e}") from e

            except MessagingEntityNotFoundError as e:
                logger.error(f"Queue '{queue_name}' not found: {e}")
                raise RuntimeError(f"Queue '{queue_name}' does not exist: {e}") from e

            except ServiceBusQuotaExceededError as e:
                logger.error(f"Service Bus quota exceeded: {e}")
                raise RuntimeError(f"Service Bus quota exceeded: {e}") from e

            except (OperationTimeoutError, ServiceBusServerBusyError,
                    ServiceBusConnectionError, ServiceBusCommunicationError) as e:
                # Transient: Retry with backoff
                logger.warning(
                    f"Transient error on attempt {attempt + 1}/{self.config.retry_count}: "
                    f"{type(e).__name__}"
                )
                if attempt == self.config.retry_count - 1:
                    raise RuntimeError(
                        f"Failed to send after {self.config.retry_count} attempts: {e}"
                    ) from e
                await asyncio.sleep(self.config.retry_delay_seconds * (2 ** attempt))

            except ServiceBusError as e:
                logger.warning(f"ServiceBusError on attempt {attempt + 1}: {type(e).__name__}")
                if attempt == self.config.retry_count - 1:
                    raise RuntimeError(f"Failed to send to {queue_name}: {e}") from e
                await asyncio.sleep(self.config.retry_delay_seconds * (2 ** attempt))

        raise RuntimeError(f"Failed to send to {queue_name}: no attempts made")

    async def close(self) -> None:
        """Close all connections."""
        for queue_name, sender in self._senders.items():
            try:
                await sender.close()
            except ServiceBusError as e:
                logger.warning(f"Error closing sender for {queue_name}: {e}")
        self._senders.clear()

        if self._client:
            try:
                await self._client.close()
            except ServiceBusError as e:
                logger.warning(f"Error closing client: {e}")
            self._client = None

        if self._credential:
            await self._credential.close()
            self._credential = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ServiceBusConfig",
    "ServiceBusPublisher",
]
