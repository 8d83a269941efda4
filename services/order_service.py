# ============================================================================
# ORDER SERVICE
# ============================================================================
# STATUS: Domain service - Order placement, recording and reporting
# PURPOSE: Business rules for the order workflow
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
OrderService

Order placement is split across two triggers:
    POST /orders        -> place_order()  (id + Received, then queued)
    orders-queue        -> record_order() (persisted as Completed)

The order report timer uses summarize_orders().
"""

import uuid
from typing import List, Optional

from core.contracts import OrderStatus
from core.logging import ComponentType, get_logger, log_checkpoint
from core.models.order import Order, OrderReport
from repositories.order_repo import OrderRepository

logger = get_logger(__name__, ComponentType.SERVICE)


class OrderService:
    """Order workflow rules."""

    def __init__(self, repository: Optional[OrderRepository] = None):
        self.repository = repository

    @staticmethod
    def place_order(order: Order) -> Order:
        """Assign a fresh order id and mark the order Received."""
        placed = order.model_copy(
            update={"order_id": str(uuid.uuid4()), "status": OrderStatus.RECEIVED}
        )
        log_checkpoint("order_received", {"order_id": placed.order_id})
        return placed

    async def record_order(self, order: Order) -> Order:
        """
        Persist a queued order with status Completed.

        Raises:
            ValueError: Order has no id (was not placed through place_order)
            RepositoryError: Table Storage transport failure
        """
        if not order.order_id:
            raise ValueError("Order has no order_id")

        completed = order.model_copy(update={"status": OrderStatus.COMPLETED})
        inserted = await self._repo().add(completed)

        if inserted:
            log_checkpoint("order_persisted", {"order_id": completed.order_id})
        else:
            logger.info(f"Order {completed.order_id} already recorded")
        return completed

    async def list_orders(self) -> List[Order]:
        return await self._repo().list_all()

    async def summarize_orders(self) -> OrderReport:
        """Order count and total sales across all recorded orders."""
        orders = await self.list_orders()
        return OrderReport(
            order_count=len(orders),
            total_sales=round(sum(float(o.total_amount) for o in orders), 2),
        )

    def _repo(self) -> OrderRepository:
        if self.repository is None:
            raise RuntimeError("OrderService was created without an OrderRepository")
        return self.repository


__all__ = ["OrderService"]
