# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for all Pydantic models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Pydantic models for products, orders and the product-queue message.
Table row mapping lives in the repositories, not on the models.
"""

from core.models.product import Product, UpdateResult
from core.models.order import Order, OrderReport
from core.models.product_queue_message import ProductQueueMessage

__all__ = [
    # Product
    "Product",
    "UpdateResult",
    # Order
    "Order",
    "OrderReport",
    # Queue
    "ProductQueueMessage",
]
