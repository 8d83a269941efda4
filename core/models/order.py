# ============================================================================
# ORDER MODEL
# ============================================================================
# STATUS: Domain model - Purchase request placed through the orders queue
# PURPOSE: Pydantic models for orders and the periodic order report
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Order, OrderReport
# DEPENDENCIES: pydantic
# ============================================================================
"""
Order Model

Orders are append-only: placed over HTTP, carried on the orders queue,
then persisted by the queue consumer. No update or delete is exposed.

Lifecycle:
    1. POST /orders assigns order_id, status = Received
    2. Serialized order is written to orders-queue
    3. Queue consumer persists the row with status = Completed
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer
from pydantic.alias_generators import to_camel

from core.contracts import OrderStatus


class Order(BaseModel):
    """
    A purchase request.

    Maps to: Orders table, PartitionKey "Orders", RowKey = order_id
    JSON uses camelCase keys (orderId, customerEmail, ...).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "customerEmail": "a@b.com",
                "productName": "Widget",
                "quantity": 2,
                "unitPrice": 9.99,
            }
        },
    )

    order_id: str = Field(default="", max_length=64)
    customer_email: str = Field(default="", max_length=256)
    product_name: str = Field(default="", max_length=256)
    quantity: int = Field(default=0)
    unit_price: Decimal = Field(default=Decimal("0"))
    status: OrderStatus = Field(default=OrderStatus.RECEIVED)

    @computed_field(alias="totalAmount")
    @property
    def total_amount(self) -> Decimal:
        """Derived: quantity x unit price."""
        return self.quantity * self.unit_price

    @field_serializer("unit_price", "total_amount", when_used="json")
    def _money_as_number(self, value: Decimal) -> float:
        return float(value)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_queue_body(self) -> str:
        """Serialize to the JSON body written to orders-queue."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_queue_body(cls, body: str) -> "Order":
        """
        Deserialize an orders-queue message body.

        Raises:
            ValidationError: If JSON is invalid
        """
        return cls.model_validate_json(body)


class OrderReport(BaseModel):
    """Aggregate produced by the order report timer."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    order_count: int = 0
    total_sales: float = 0.0


__all__ = ["Order", "OrderReport"]
