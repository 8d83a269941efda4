# ============================================================================
# API REQUEST MODELS
# ============================================================================
# STATUS: Gateway - Request schemas
# PURPOSE: Pydantic V2 models for incoming API requests
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Request Models

Pydantic V2 models for incoming API requests.
All models use V2 patterns: ConfigDict, model_validate, model_dump.

The enqueue body for POST /products/queue is ProductQueueMessage itself
(core.models), since it is forwarded to the queue unchanged.
"""

from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from core.models.order import Order
from core.models.product import QUANTITY_MAX, QUANTITY_MIN, Product


class ProductCreateRequest(BaseModel):
    """Body of POST /products. Any id or etag in the body is ignored."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Widget",
                "price": 9.99,
                "quantity": 10,
            }
        },
    )

    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "Name"),
        description="Display name",
    )
    price: Decimal = Field(
        ...,
        validation_alias=AliasChoices("price", "Price"),
        description="Unit price",
    )
    quantity: int = Field(
        ...,
        ge=QUANTITY_MIN,
        le=QUANTITY_MAX,
        validation_alias=AliasChoices("quantity", "Quantity"),
        description="Quantity on hand",
    )

    def to_product(self, product_id: Optional[str] = None, etag: Optional[str] = None) -> Product:
        return Product(
            id=product_id,
            name=self.name,
            price=self.price,
            quantity=self.quantity,
            etag=etag,
        )


class ProductUpdateRequest(ProductCreateRequest):
    """
    Body of PUT /products/{id}.

    The id always comes from the route. A version tag may be echoed back in
    the body or in an If-Match header (header wins); without one the update
    is checked against the tag current at the time of the write.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Widget",
                "price": 12.5,
                "quantity": 8,
                "etag": "W/\"datetime'2026-10-18T10%3A30%3A00.000Z'\"",
            }
        },
    )

    etag: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("etag", "eTag", "ETag"),
        description="Version tag last seen by the caller",
    )


class PlaceOrderRequest(BaseModel):
    """Body of POST /orders. Keys are camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "customerEmail": "a@b.com",
                "productName": "Widget",
                "quantity": 2,
                "unitPrice": 9.99,
            }
        },
    )

    customer_email: str = Field(default="", max_length=256)
    product_name: str = Field(default="", max_length=256)
    quantity: int = Field(default=0, ge=QUANTITY_MIN, le=QUANTITY_MAX, description="Units ordered")
    unit_price: Decimal = Field(default=Decimal("0"), description="Price per unit")

    def to_order(self) -> Order:
        return Order(
            customer_email=self.customer_email,
            product_name=self.product_name,
            quantity=self.quantity,
            unit_price=self.unit_price,
        )


__all__ = [
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "PlaceOrderRequest",
]
