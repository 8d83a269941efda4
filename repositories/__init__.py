# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# STATUS: Core - Table Storage access layer
# PURPOSE: CRUD operations for products and orders
# CREATED: 18 OCT 2026
# ============================================================================
"""
Repositories Module

Provides Table Storage access for products and orders.
Uses azure-data-tables async clients, one per invocation.

Usage:
    from repositories import ProductRepository

    async with open_table(TableName.PRODUCTS) as table:
        product_repo = ProductRepository(table)
        product = await product_repo.get_by_id(product_id)
"""

from .product_repo import ProductRepository
from .order_repo import OrderRepository

__all__ = [
    "ProductRepository",
    "OrderRepository",
]
