# ============================================================================
# PRODUCT SERVICE
# ============================================================================
# STATUS: Domain service - Product operations for HTTP and queue triggers
# PURPOSE: Decouple transports from the concrete product repository
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
ProductService

Pass-through layer between the transports (HTTP blueprint, product-queue
reconciler) and ProductRepository. Adds no validation, retries or caching.

Pattern: Constructor injection of the repository, async methods.
"""

from typing import List, Optional

from core.models.product import Product, UpdateResult
from repositories.product_repo import ProductRepository


class ProductService:
    """Product operations, delegated to the repository unchanged."""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    async def get_product(self, product_id: str) -> Optional[Product]:
        return await self.repository.get_by_id(product_id)

    async def get_all_products(self) -> List[Product]:
        return await self.repository.get_all()

    async def create_product(self, product: Product) -> Product:
        return await self.repository.create(product)

    async def update_product(self, product: Product) -> UpdateResult:
        return await self.repository.update(product)

    async def delete_product(self, product_id: str) -> bool:
        return await self.repository.delete(product_id)
