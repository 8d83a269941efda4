# ============================================================================
# PRODUCT REPOSITORY
# ============================================================================
# STATUS: Domain - Product CRUD operations
# PURPOSE: Table Storage access for the Products partition
# CREATED: 18 OCT 2026
# ============================================================================
"""
Product Repository

CRUD operations for the Product entity.
Hard delete (no history). Optimistic concurrency via the table ETag.

Update protocol:
    1. Read the live row to learn whether it exists and its current ETag
    2. Missing row -> NOT_FOUND
    3. Replace the row with If-Match on the caller's ETag (when it presents
       one it was given earlier) or on the ETag just read
    4. 412 Precondition Failed -> CONFLICT; never retried here

The repository is the only code that reads or writes row ETags.
"""

import uuid
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from azure.core import MatchConditions
from azure.core.exceptions import (
    HttpResponseError,
    ResourceModifiedError,
    ResourceNotFoundError,
)
from azure.data.tables import UpdateMode

from core.config import TableName
from core.models.product import Product, UpdateResult
from infrastructure.base_repository import BaseRepository

PARTITION_KEY = TableName.PRODUCTS.value

# Re-reads allowed when the row changes between the read and the delete
DELETE_ATTEMPTS = 3


class ProductRepository(BaseRepository):
    """Repository for Product entities."""

    def __init__(self, table):
        """
        Args:
            table: azure.data.tables.aio.TableClient for the Products table
        """
        super().__init__()
        self.table = table

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get a product by id, or None."""
        with self._error_context("product lookup", product_id):
            entity = await self._get_entity(product_id)
        return self._row_to_model(entity) if entity is not None else None

    async def get_all(self) -> List[Product]:
        """Unordered snapshot of every product in the partition."""
        products: List[Product] = []
        with self._error_context("product listing"):
            entities = self.table.query_entities(
                "PartitionKey eq @pk",
                parameters={"pk": PARTITION_KEY},
            )
            async for entity in entities:
                products.append(self._row_to_model(entity))
        return products

    async def create(self, product: Product) -> Product:
        """
        Insert a new product under a freshly generated id.

        Any id the caller supplied is ignored.

        Raises:
            RepositoryError: On id collision (ResourceExistsError) or transport failure
        """
        product_id = str(uuid.uuid4())

        with self._error_context("product creation", product_id):
            metadata = await self.table.create_entity(
                entity=self._model_to_row(product_id, product)
            )

        created = product.model_copy(
            update={"id": product_id, "etag": (metadata or {}).get("etag"), "timestamp": None}
        )
        self._log_operation(True, "Created product", product_id, {"name": product.name})
        return created

    async def update(self, product: Product) -> UpdateResult:
        """
        Replace name/price/quantity with an ETag precondition.

        Returns:
            UpdateResult - UPDATED with the new ETag, NOT_FOUND, or CONFLICT.

        Raises:
            RepositoryError: On transport failure
        """
        product_id = product.id
        if not product_id:
            return UpdateResult.not_found()

        with self._error_context("product update", product_id):
            existing = await self._get_entity(product_id)
            if existing is None:
                self._log_operation(False, "Update product", product_id, {"reason": "not found"})
                return UpdateResult.not_found()

            expected_etag = product.etag or _metadata(existing).get("etag")

            try:
                metadata = await self.table.update_entity(
                    entity=self._model_to_row(product_id, product),
                    mode=UpdateMode.REPLACE,
                    etag=expected_etag,
                    match_condition=MatchConditions.IfNotModified,
                )
            except ResourceNotFoundError:
                # Deleted between the read and the write
                self._log_operation(False, "Update product", product_id, {"reason": "deleted"})
                return UpdateResult.not_found()
            except ResourceModifiedError:
                return self._conflict(product_id, expected_etag)
            except HttpResponseError as e:
                if e.status_code == 412:
                    return self._conflict(product_id, expected_etag)
                raise

        updated = product.model_copy(
            update={"etag": (metadata or {}).get("etag"), "timestamp": None}
        )
        self._log_operation(True, "Updated product", product_id)
        return UpdateResult.updated(updated)

    async def delete(self, product_id: str) -> bool:
        """
        Hard delete a product.

        The delete is conditioned on the ETag just read. A row replaced in
        between is read again and deleted under its new ETag. Two deletes
        racing on the same row may both return True: the service reports a
        missing row on delete as success.

        Returns:
            True if a row existed and was removed, False if nothing matched.
        """
        with self._error_context("product delete", product_id):
            for attempt in range(1, DELETE_ATTEMPTS + 1):
                existing = await self._get_entity(product_id)
                if existing is None:
                    return False
                try:
                    await self.table.delete_entity(
                        partition_key=PARTITION_KEY,
                        row_key=product_id,
                        etag=_metadata(existing).get("etag"),
                        match_condition=MatchConditions.IfNotModified,
                    )
                except ResourceModifiedError:
                    if attempt == DELETE_ATTEMPTS:
                        raise
                    self.logger.info(f"Product {product_id} changed before delete, re-reading")
                    continue
                break

        self._log_operation(True, "Deleted product", product_id)
        return True

    # ------------------------------------------------------------------------
    # Row mapping
    # ------------------------------------------------------------------------

    async def _get_entity(self, product_id: str):
        try:
            return await self.table.get_entity(partition_key=PARTITION_KEY, row_key=product_id)
        except ResourceNotFoundError:
            return None

    def _conflict(self, product_id: str, expected_etag: Optional[str]) -> UpdateResult:
        self.logger.warning(
            f"Version conflict updating product {product_id} (expected etag {expected_etag})"
        )
        return UpdateResult.conflict()

    @staticmethod
    def _model_to_row(product_id: str, product: Product) -> dict:
        """Products row: Name, Price (decimal string, exact), Quantity (int32)."""
        return {
            "PartitionKey": PARTITION_KEY,
            "RowKey": product_id,
            "Name": product.name,
            "Price": str(product.price),
            "Quantity": int(product.quantity),
        }

    @staticmethod
    def _row_to_model(entity: Mapping[str, Any]) -> Product:
        """
        Convert a table entity to a Product instance.

        Price is read through str() so rows written as a double still load.
        """
        metadata = _metadata(entity)
        return Product(
            id=entity["RowKey"],
            name=entity.get("Name", ""),
            price=Decimal(str(entity.get("Price", 0))),
            quantity=int(entity.get("Quantity", 0)),
            etag=metadata.get("etag"),
            timestamp=metadata.get("timestamp"),
        )


def _metadata(entity: Any) -> Mapping[str, Any]:
    """Service metadata (etag, timestamp) attached to a TableEntity."""
    return getattr(entity, "metadata", None) or {}


__all__ = ["ProductRepository", "PARTITION_KEY"]
