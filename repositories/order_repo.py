# ============================================================================
# ORDER REPOSITORY
# ============================================================================
# STATUS: Domain - Order persistence
# PURPOSE: Table Storage access for the Orders partition
# CREATED: 18 OCT 2026
# ============================================================================
"""
Order Repository

Append-only storage for orders written by the orders-queue consumer.
No update or delete is exposed.
"""

from decimal import Decimal
from typing import Any, List, Mapping

from azure.core.exceptions import ResourceExistsError, ResourceNotFoundError

from core.config import TableName
from core.models.order import Order
from infrastructure.base_repository import BaseRepository

PARTITION_KEY = TableName.ORDERS.value


class OrderRepository(BaseRepository):
    """Repository for Order entities."""

    def __init__(self, table):
        super().__init__()
        self.table = table

    async def add(self, order: Order) -> bool:
        """
        Insert an order row.

        The order id is assigned before the order is queued, so a
        redelivered message maps onto the row that is already there.

        Returns:
            True if inserted, False if a row with this order id already existed.
        """
        with self._error_context("order insert", order.order_id):
            try:
                await self.table.create_entity(entity=self._model_to_row(order))
            except ResourceExistsError:
                self._log_operation(False, "Insert order", order.order_id, {"reason": "already exists"})
                return False

        self._log_operation(True, "Inserted order", order.order_id, {"total": float(order.total_amount)})
        return True

    async def list_all(self) -> List[Order]:
        """All orders. A table that does not exist yet reads as empty."""
        orders: List[Order] = []
        with self._error_context("order listing"):
            try:
                entities = self.table.query_entities(
                    "PartitionKey eq @pk",
                    parameters={"pk": PARTITION_KEY},
                )
                async for entity in entities:
                    orders.append(self._row_to_model(entity))
            except ResourceNotFoundError:
                self.logger.warning(f"Table {PARTITION_KEY} not found, no orders yet")
                return []
        return orders

    @staticmethod
    def _model_to_row(order: Order) -> dict:
        """Orders row; money stored as double (no decimal type in Table Storage)."""
        return {
            "PartitionKey": PARTITION_KEY,
            "RowKey": order.order_id,
            "CustomerEmail": order.customer_email,
            "ProductName": order.product_name,
            "Quantity": int(order.quantity),
            "UnitPrice": float(order.unit_price),
            "TotalAmount": float(order.total_amount),
            "Status": str(getattr(order.status, "value", order.status)),
        }

    @staticmethod
    def _row_to_model(entity: Mapping[str, Any]) -> Order:
        """Convert a table entity to an Order instance."""
        return Order(
            order_id=entity["RowKey"],
            customer_email=entity.get("CustomerEmail", ""),
            product_name=entity.get("ProductName", ""),
            quantity=int(entity.get("Quantity", 0)),
            unit_price=Decimal(str(entity.get("UnitPrice", 0))),
            status=entity.get("Status", "Received"),
        )


__all__ = ["OrderRepository"]
