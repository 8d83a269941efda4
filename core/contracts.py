# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums shared across triggers
# PURPOSE: Define action, status and outcome enums for products and orders
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ProductAction, OrderStatus, UpdateOutcome, ReconcileOutcome
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the product/order function app.

These enums cross boundaries:
- Table Storage (persisted status strings)
- Queue (Azure Service Bus message actions)
- Python (internal outcomes returned by repositories and reconcilers)
"""

from enum import Enum
from typing import Optional


# ============================================================================
# PRODUCT ENUMS
# ============================================================================

class ProductAction(str, Enum):
    """
    Mutation actions carried by product-queue messages.

    Matching is case-insensitive: "Create", "CREATE" and "create" are the
    same action.
    """
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProductAction"]:
        """Resolve a raw action string, or None if unrecognized."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class UpdateOutcome(str, Enum):
    """
    Result of a conditional product update.

    UPDATED   -> write applied, new version tag issued
    NOT_FOUND -> no row for the id
    CONFLICT  -> row changed since it was read; caller must refresh and retry
    """
    UPDATED = "updated"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


class ReconcileOutcome(str, Enum):
    """What the queue reconciler did with one product-queue message."""
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    SKIPPED_NOT_FOUND = "skipped_not_found"
    SKIPPED_UNKNOWN_ACTION = "skipped_unknown_action"

    def is_skipped(self) -> bool:
        """Check if the message was consumed without touching the store."""
        return self in (
            ReconcileOutcome.SKIPPED_NOT_FOUND,
            ReconcileOutcome.SKIPPED_UNKNOWN_ACTION,
        )


# ============================================================================
# ORDER ENUMS
# ============================================================================

class OrderStatus(str, Enum):
    """
    Order lifecycle states.

    State transitions:
        RECEIVED (placed via HTTP, queued) -> COMPLETED (persisted by consumer)
    """
    RECEIVED = "Received"
    COMPLETED = "Completed"


__all__ = [
    "ProductAction",
    "UpdateOutcome",
    "ReconcileOutcome",
    "OrderStatus",
]
