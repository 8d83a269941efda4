# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts and models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import OrderStatus, ProductAction, ReconcileOutcome, UpdateOutcome
from core.models import (
    Order,
    OrderReport,
    Product,
    ProductQueueMessage,
    UpdateResult,
)

__all__ = [
    # Enums
    "OrderStatus",
    "ProductAction",
    "ReconcileOutcome",
    "UpdateOutcome",
    # Models
    "Order",
    "OrderReport",
    "Product",
    "ProductQueueMessage",
    "UpdateResult",
]
