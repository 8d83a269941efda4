# ============================================================================
# FUNCTION APP SERVICES
# ============================================================================
# STATUS: Gateway - Service wiring
# PURPOSE: Per-invocation factories for domain services
# CREATED: 18 OCT 2026
# ============================================================================
"""
Function App Services

Factories that open clients and build domain services for one invocation.
"""

from function.services.factories import (
    product_service,
    order_service,
    product_publisher,
)

__all__ = [
    "product_service",
    "order_service",
    "product_publisher",
]
