# ============================================================================
# PRODUCT QUEUE BLUEPRINT
# ============================================================================
# STATUS: Gateway - Asynchronous product mutations
# PURPOSE: Enqueue product instructions; consume product-queue
# CREATED: 18 OCT 2026
# ============================================================================
"""
Product Queue Blueprint

- POST /api/products/queue   - Publish a ProductQueueMessage (202)
- product-queue trigger      - Apply each message via ProductQueueReconciler

The enqueue endpoint only validates the JSON shape. The action is checked
by the consumer; unknown actions are logged and skipped there.

Consumer errors (bad JSON, storage failure, repeated version conflicts)
propagate so Service Bus redelivers and eventually dead-letters.
"""

import logging
from typing import AsyncContextManager, Callable

import azure.functions as func

from core.config import QueueName, SERVICE_BUS_CONNECTION_SETTING
from core.contracts import ReconcileOutcome
from core.logging import log_context
from core.models import ProductQueueMessage
from function.blueprints.http import bad_request, error_response, json_response, parse_body
from function.models.responses import EnqueueResponse
from function.services import product_publisher, product_service
from infrastructure.service_bus import ServiceBusPublisher
from services import ProductQueueReconciler, ProductService

logger = logging.getLogger(__name__)
product_queue_bp = func.Blueprint()


async def handle_enqueue_product(
    req: func.HttpRequest,
    open_publisher: Callable[[], ServiceBusPublisher] = product_publisher,
) -> func.HttpResponse:
    try:
        message = parse_body(req, ProductQueueMessage)
    except ValueError as e:
        return bad_request(e)

    try:
        async with open_publisher() as publisher:
            message_id = await publisher.send_message(QueueName.PRODUCTS.value, message)
    except RuntimeError as e:
        logger.error(f"Failed to enqueue product message: {e}")
        return error_response("Failed to queue message", 503, details=str(e))
    except Exception as e:
        logger.exception(f"Unexpected error enqueuing product message: {e}")
        return error_response("Internal error", 500, details=str(e))

    logger.info(f"Product message {message_id} enqueued, action={message.action}")
    return json_response(
        EnqueueResponse(action=message.action).model_dump(by_alias=True),
        status_code=202,
    )


async def reconcile_product_message(
    body: str,
    open_service: Callable[[], AsyncContextManager[ProductService]] = product_service,
) -> ReconcileOutcome:
    """
    Deserialize one product-queue body and apply it.

    Raises:
        ValidationError: Body is not a valid ProductQueueMessage
        ProductConflictError: Update lost every retry
        RepositoryError: Table Storage failure
    """
    message = ProductQueueMessage.from_service_bus_body(body)
    async with open_service() as service:
        outcome = await ProductQueueReconciler(service).apply(message)

    if outcome.is_skipped():
        logger.warning(
            f"product-queue message consumed without changes: {outcome.value} "
            f"(action={message.action!r}, product_id={message.product_id!r})"
        )
    return outcome


@product_queue_bp.route(route="products/queue", methods=["POST"])
async def products_enqueue(req: func.HttpRequest) -> func.HttpResponse:
    """
    POST /api/products/queue

    Body:
    {
        "productId": "<id>",      (ignored for create)
        "action": "create|update|delete",
        "productName": "Widget",
        "price": 9.99,
        "quantity": 10
    }
    """
    return await handle_enqueue_product(req)


@product_queue_bp.service_bus_queue_trigger(
    arg_name="msg",
    queue_name=QueueName.PRODUCTS.value,
    connection=SERVICE_BUS_CONNECTION_SETTING,
)
async def process_product_queue(msg: func.ServiceBusMessage) -> None:
    with log_context(queue=QueueName.PRODUCTS.value):
        logger.info(
            f"product-queue message {msg.message_id} "
            f"(delivery {msg.delivery_count})"
        )
        outcome = await reconcile_product_message(msg.get_body().decode("utf-8"))
        logger.info(f"product-queue message {msg.message_id}: {outcome.value}")


__all__ = [
    "product_queue_bp",
    "handle_enqueue_product",
    "reconcile_product_message",
]
