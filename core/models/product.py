# ============================================================================
# PRODUCT MODEL
# ============================================================================
# STATUS: Domain model - Sellable item persisted in the Products partition
# PURPOSE: Pydantic model for products plus the conditional-update result
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: Product, UpdateResult
# DEPENDENCIES: pydantic
# ============================================================================
"""
Product Model

A sellable item stored as one row in the Products partition of the table
store.

Lifecycle:
    1. Created with a fresh id; the store issues the first version tag
    2. Replaced in place (name/price/quantity); every write issues a new tag
    3. Deleted - the row is removed entirely (no soft delete, no history)

The version tag (etag) is owned by the table store. Callers may echo back a
tag they were given, but never invent or compare tags themselves.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer

from core.contracts import UpdateOutcome

# Table Storage stores Quantity as Edm.Int32
QUANTITY_MIN = -(2 ** 31)
QUANTITY_MAX = 2 ** 31 - 1


class Product(BaseModel):
    """
    A sellable item.

    Maps to: Products table, PartitionKey "Products", RowKey = id
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "3f2b8c1e-8a4d-4c55-9f0e-2b7f0a6d9e11",
                "name": "Widget",
                "price": 9.99,
                "quantity": 10,
                "etag": "W/\"datetime'2026-10-18T10%3A30%3A00.000Z'\"",
            }
        },
    )

    # Identity (assigned by the repository on create, immutable afterwards)
    id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("id", "rowKey", "RowKey"),
        description="Opaque unique product id",
    )

    # Attributes
    name: str = Field(
        ...,
        validation_alias=AliasChoices("name", "Name"),
        description="Display name",
    )
    price: Decimal = Field(
        ...,
        validation_alias=AliasChoices("price", "Price"),
        description="Unit price (non-negative expected, not enforced)",
    )
    quantity: int = Field(
        ...,
        validation_alias=AliasChoices("quantity", "Quantity"),
        description="Quantity on hand",
    )

    # Store-managed
    etag: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("etag", "eTag", "ETag"),
        description="Version tag issued by the table store on every write",
    )
    timestamp: Optional[datetime] = Field(
        default=None,
        description="Last write time reported by the table store",
    )

    @field_serializer("price", when_used="json")
    def _price_as_number(self, price: Decimal) -> float:
        return float(price)


@dataclass
class UpdateResult:
    """
    Outcome of ProductRepository.update().

    Expected business outcomes (not found, lost race) are values, not
    exceptions. Only UPDATED carries a product.
    """

    outcome: UpdateOutcome
    product: Optional[Product] = None

    @classmethod
    def updated(cls, product: Product) -> "UpdateResult":
        return cls(outcome=UpdateOutcome.UPDATED, product=product)

    @classmethod
    def not_found(cls) -> "UpdateResult":
        return cls(outcome=UpdateOutcome.NOT_FOUND)

    @classmethod
    def conflict(cls) -> "UpdateResult":
        return cls(outcome=UpdateOutcome.CONFLICT)

    @property
    def ok(self) -> bool:
        return self.outcome == UpdateOutcome.UPDATED


__all__ = ["Product", "UpdateResult", "QUANTITY_MIN", "QUANTITY_MAX"]
