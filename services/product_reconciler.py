# ============================================================================
# PRODUCT QUEUE RECONCILER
# ============================================================================
# STATUS: Domain service - Applies product-queue instructions
# PURPOSE: Dispatch create/update/delete messages onto ProductService
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
ProductQueueReconciler

Applies one ProductQueueMessage against the authoritative store, in one
terminal step. Nothing about an in-flight message is persisted.

    create  -> build a Product from the message fields, create it
    update  -> re-read the product, overwrite name/price/quantity, update
    delete  -> delete
    other   -> log and skip

Business conditions (target missing, unknown action) are logged and the
message counts as consumed. Transport and deserialization errors propagate
so Service Bus can redeliver or dead-letter.

Queued updates carry no version tag. A lost race is resolved by re-reading
and re-applying, at most max_update_attempts times; past that,
ProductConflictError is raised and redelivery takes over.

Known gap: there is no idempotency key, so a redelivered create message
creates a second product.
"""

from core.config import get_defaults
from core.contracts import ProductAction, ReconcileOutcome, UpdateOutcome
from core.logging import ComponentType, get_logger, log_context
from core.models.product import Product
from core.models.product_queue_message import ProductQueueMessage
from services.product_service import ProductService

logger = get_logger(__name__, ComponentType.QUEUE)


class ProductConflictError(Exception):
    """Queued update kept losing the race for the same product."""

    def __init__(self, product_id: str, attempts: int):
        self.product_id = product_id
        self.attempts = attempts
        super().__init__(
            f"Product {product_id} was modified concurrently on each of {attempts} attempts"
        )


class ProductQueueReconciler:
    """Applies product-queue messages via ProductService."""

    def __init__(self, product_service: ProductService, max_update_attempts: int = None):
        self.product_service = product_service
        if max_update_attempts is None:
            max_update_attempts = get_defaults().reconcile.max_update_attempts
        self.max_update_attempts = max(1, max_update_attempts)

    async def apply(self, message: ProductQueueMessage) -> ReconcileOutcome:
        """
        Apply one message.

        Returns:
            ReconcileOutcome describing what happened.

        Raises:
            ProductConflictError: Update lost every attempt
            RepositoryError: Table Storage transport failure
        """
        action = message.parsed_action

        with log_context(product_id=message.product_id or None, action=message.action):
            logger.info(
                f"Processing queue message for product: {message.product_id or '<new>'}, "
                f"Action: {message.action}"
            )

            if action is ProductAction.CREATE:
                return await self._create(message)
            if action is ProductAction.UPDATE:
                return await self._update(message)
            if action is ProductAction.DELETE:
                return await self._delete(message)

            logger.warning(f"Unknown action: {message.action!r}")
            return ReconcileOutcome.SKIPPED_UNKNOWN_ACTION

    async def _create(self, message: ProductQueueMessage) -> ReconcileOutcome:
        created = await self.product_service.create_product(
            Product(
                name=message.product_name,
                price=message.price,
                quantity=message.quantity,
            )
        )
        logger.info(f"Product created via queue: {created.id}")
        return ReconcileOutcome.CREATED

    async def _update(self, message: ProductQueueMessage) -> ReconcileOutcome:
        product_id = message.product_id
        if not product_id:
            logger.warning("Product not found for update: no ProductId on message")
            return ReconcileOutcome.SKIPPED_NOT_FOUND

        for attempt in range(1, self.max_update_attempts + 1):
            existing = await self.product_service.get_product(product_id)
            if existing is None:
                logger.warning(f"Product not found for update: {product_id}")
                return ReconcileOutcome.SKIPPED_NOT_FOUND

            # existing.etag is the tag just read; the write is conditioned on it
            changed = existing.model_copy(
                update={
                    "name": message.product_name,
                    "price": message.price,
                    "quantity": message.quantity,
                }
            )
            result = await self.product_service.update_product(changed)

            if result.ok:
                logger.info(f"Product updated via queue: {product_id}")
                return ReconcileOutcome.UPDATED

            if result.outcome == UpdateOutcome.NOT_FOUND:
                logger.warning(f"Product not found for update: {product_id}")
                return ReconcileOutcome.SKIPPED_NOT_FOUND

            logger.warning(
                f"Concurrency conflict updating {product_id} "
                f"(attempt {attempt}/{self.max_update_attempts})"
            )

        raise ProductConflictError(product_id, self.max_update_attempts)

    async def _delete(self, message: ProductQueueMessage) -> ReconcileOutcome:
        product_id = message.product_id
        deleted = bool(product_id) and await self.product_service.delete_product(product_id)

        if deleted:
            logger.info(f"Product deleted via queue: {product_id}")
            return ReconcileOutcome.DELETED

        logger.warning(f"Product not found for delete: {product_id}")
        return ReconcileOutcome.SKIPPED_NOT_FOUND


__all__ = ["ProductQueueReconciler", "ProductConflictError"]
