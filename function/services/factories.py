# ============================================================================
# PER-INVOCATION SERVICE FACTORIES
# ============================================================================
# STATUS: Gateway - Wiring of clients, repositories and services
# PURPOSE: Build the object graph each trigger invocation needs
# CREATED: 18 OCT 2026
# ============================================================================
"""
Per-invocation Service Factories

Every trigger opens its own clients and closes them before returning;
nothing is cached across invocations. Handlers receive ready-made
services, so tests can hand them fakes instead.

Usage:
    async with product_service() as service:
        product = await service.get_product(product_id)
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from core.config import TableName
from infrastructure.service_bus import ServiceBusPublisher
from infrastructure.table_storage import open_table
from repositories import OrderRepository, ProductRepository
from services import OrderService, ProductService

from function.config import FunctionConfig, get_config


@asynccontextmanager
async def product_service(
    config: Optional[FunctionConfig] = None,
) -> AsyncIterator[ProductService]:
    """ProductService over a freshly opened Products table client."""
    config = config or get_config()
    async with open_table(TableName.PRODUCTS, config.tables) as table:
        yield ProductService(ProductRepository(table))


@asynccontextmanager
async def order_service(
    config: Optional[FunctionConfig] = None,
    create_if_missing: bool = True,
) -> AsyncIterator[OrderService]:
    """OrderService over a freshly opened Orders table client."""
    config = config or get_config()
    async with open_table(TableName.ORDERS, config.tables, create_if_missing=create_if_missing) as table:
        yield OrderService(OrderRepository(table))


def product_publisher(config: Optional[FunctionConfig] = None) -> ServiceBusPublisher:
    """Service Bus publisher for product-queue; use as an async context manager."""
    config = config or get_config()
    return ServiceBusPublisher(config.service_bus)


__all__ = ["product_service", "order_service", "product_publisher"]
