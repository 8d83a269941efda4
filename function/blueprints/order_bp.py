# ============================================================================
# ORDER BLUEPRINT
# ============================================================================
# STATUS: Gateway - Order placement and persistence
# PURPOSE: HTTP intake to orders-queue; queue consumer to the Orders table
# CREATED: 18 OCT 2026
# ============================================================================
"""
Order Blueprint

- POST /api/orders    - Assign an order id, write the order to orders-queue (202)
- GET  /api/orders    - List recorded orders
- orders-queue        - Persist each order with status Completed

The HTTP side writes through a Service Bus output binding, so it holds no
client of its own.
"""

import logging
from typing import AsyncContextManager, Callable

import azure.functions as func

from core.config import QueueName, SERVICE_BUS_CONNECTION_SETTING
from core.logging import log_context
from core.models import Order
from function.blueprints.http import bad_request, error_response, json_response, parse_body
from function.models.requests import PlaceOrderRequest
from function.models.responses import OrderAcceptedResponse
from function.services import order_service
from services import OrderService

logger = logging.getLogger(__name__)
order_bp = func.Blueprint()

OrderServiceFactory = Callable[[], AsyncContextManager[OrderService]]


def handle_place_order(req: func.HttpRequest, outmsg: func.Out[str]) -> func.HttpResponse:
    try:
        request = parse_body(req, PlaceOrderRequest)
    except ValueError as e:
        return bad_request(e)

    order = OrderService.place_order(request.to_order())
    outmsg.set(order.to_queue_body())

    logger.info(f"Order {order.order_id} queued for {order.customer_email}")
    return json_response(
        OrderAcceptedResponse(order_id=order.order_id).model_dump(by_alias=True),
        status_code=202,
    )


async def handle_list_orders(
    req: func.HttpRequest,
    open_service: OrderServiceFactory = order_service,
) -> func.HttpResponse:
    try:
        async with open_service() as service:
            orders = await service.list_orders()
    except Exception as e:
        logger.exception(f"Error listing orders: {e}")
        return error_response("Storage error", 500, details=str(e))

    return json_response([o.model_dump(mode="json", by_alias=True) for o in orders])


async def record_order_message(
    body: str,
    open_service: OrderServiceFactory = order_service,
) -> Order:
    """
    Deserialize one orders-queue body and persist it.

    Raises:
        ValidationError: Body is not a valid Order
        ValueError: Order has no id
        RepositoryError: Table Storage failure
    """
    order = Order.from_queue_body(body)
    with log_context(order_id=order.order_id or None):
        async with open_service() as service:
            return await service.record_order(order)


@order_bp.route(route="orders", methods=["POST"])
@order_bp.service_bus_queue_output(
    arg_name="outmsg",
    queue_name=QueueName.ORDERS.value,
    connection=SERVICE_BUS_CONNECTION_SETTING,
)
def orders_place(req: func.HttpRequest, outmsg: func.Out[str]) -> func.HttpResponse:
    """
    POST /api/orders

    Body:
    {
        "customerEmail": "a@b.com",
        "productName": "Widget",
        "quantity": 2,
        "unitPrice": 9.99
    }
    """
    return handle_place_order(req, outmsg)


@order_bp.route(route="orders", methods=["GET"])
async def orders_list(req: func.HttpRequest) -> func.HttpResponse:
    """GET /api/orders"""
    return await handle_list_orders(req)


@order_bp.service_bus_queue_trigger(
    arg_name="msg",
    queue_name=QueueName.ORDERS.value,
    connection=SERVICE_BUS_CONNECTION_SETTING,
)
async def process_order_queue(msg: func.ServiceBusMessage) -> None:
    with log_context(queue=QueueName.ORDERS.value):
        order = await record_order_message(msg.get_body().decode("utf-8"))
        logger.info(
            f"Order {order.order_id} completed: "
            f"{order.quantity} x {order.product_name} = {order.total_amount}"
        )


__all__ = [
    "order_bp",
    "handle_place_order",
    "handle_list_orders",
    "record_order_message",
]
