# ============================================================================
# SERVICES MODULE
# ============================================================================
# STATUS: Core - Business logic layer
# PURPOSE: Product, reconciliation and order services
# CREATED: 18 OCT 2026
# ============================================================================
"""
Services Module

Business logic for the function app.
Services sit between the triggers and the repositories.

Usage:
    from services import ProductService, ProductQueueReconciler

    product_service = ProductService(ProductRepository(table))
    outcome = await ProductQueueReconciler(product_service).apply(message)
"""

from .product_service import ProductService
from .product_reconciler import ProductQueueReconciler, ProductConflictError
from .order_service import OrderService

__all__ = [
    "ProductService",
    "ProductQueueReconciler",
    "ProductConflictError",
    "OrderService",
]
