# ============================================================================
# PRODUCT QUEUE MESSAGE MODEL
# ============================================================================
# STATUS: Core model - Service Bus message for asynchronous product mutations
# PURPOSE: Pydantic model for product-queue messages
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: ProductQueueMessage
# DEPENDENCIES: pydantic
# ============================================================================
"""
Product Queue Message Model

Pydantic model for messages on the product-queue Service Bus queue.
This is a mutation instruction, not a Product: it carries no version tag,
so the reconciler always re-reads current state before updating.

Key Design:
- Wire format uses PascalCase keys: ProductId, Action, ProductName, Price, Quantity
- The HTTP enqueue body uses camelCase (productId, action, ...); both are accepted
- Explicit serialization via to_service_bus_body() / from_service_bus_body()
"""

from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer

from core.contracts import ProductAction
from core.models.product import QUANTITY_MAX, QUANTITY_MIN


class ProductQueueMessage(BaseModel):
    """
    Message format for the product-queue Service Bus queue.

    Lifecycle:
        1. POST /products/queue receives the instruction
        2. Gateway publishes ProductQueueMessage to product-queue
        3. Queue trigger hands the message to ProductQueueReconciler
        4. Reconciler applies it in one step; the message is then consumed
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ProductId": "3f2b8c1e-8a4d-4c55-9f0e-2b7f0a6d9e11",
                "Action": "update",
                "ProductName": "Widget",
                "Price": 9.99,
                "Quantity": 10,
            }
        },
    )

    product_id: str = Field(
        default="",
        validation_alias=AliasChoices("ProductId", "productId", "product_id"),
        serialization_alias="ProductId",
        description="Target product id (ignored for create)",
    )
    action: str = Field(
        default="",
        validation_alias=AliasChoices("Action", "action"),
        serialization_alias="Action",
        description="create | update | delete (case-insensitive)",
    )
    product_name: str = Field(
        default="",
        validation_alias=AliasChoices("ProductName", "productName", "product_name"),
        serialization_alias="ProductName",
    )
    price: Decimal = Field(
        default=Decimal("0"),
        validation_alias=AliasChoices("Price", "price"),
        serialization_alias="Price",
    )
    quantity: int = Field(
        default=0,
        ge=QUANTITY_MIN,
        le=QUANTITY_MAX,
        validation_alias=AliasChoices("Quantity", "quantity"),
        serialization_alias="Quantity",
    )

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)

    @property
    def parsed_action(self) -> Optional[ProductAction]:
        """Recognized action, or None."""
        return ProductAction.parse(self.action)

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_service_bus_body(self) -> str:
        """Serialize to JSON string for the Service Bus message body."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_service_bus_body(cls, body: str) -> "ProductQueueMessage":
        """
        Deserialize from a Service Bus message body.

        Raises:
            ValidationError: If JSON is invalid or fields have the wrong type
        """
        return cls.model_validate_json(body)


__all__ = ["ProductQueueMessage"]
