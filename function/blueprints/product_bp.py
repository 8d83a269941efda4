# ============================================================================
# PRODUCT BLUEPRINT
# ============================================================================
# STATUS: Gateway - Product CRUD endpoints
# PURPOSE: HTTP endpoints over ProductService
# CREATED: 18 OCT 2026
# ============================================================================
"""
Product Blueprint

Product CRUD endpoints:
- GET    /api/products        - List all products
- GET    /api/products/{id}   - Get product by ID
- POST   /api/products        - Create product (201)
- PUT    /api/products/{id}   - Replace product, version-checked (200/404/409)
- DELETE /api/products/{id}   - Delete product (204/404)

Each handler takes an `open_service` factory yielding a ProductService;
the routes use the per-invocation Table Storage factory.
"""

import logging
from typing import AsyncContextManager, Callable, Optional

import azure.functions as func

from core.contracts import UpdateOutcome
from function.blueprints.http import bad_request, error_response, json_response, parse_body
from function.models.requests import ProductCreateRequest, ProductUpdateRequest
from function.models.responses import CONFLICT_MESSAGE
from function.services import product_service
from services import ProductService

logger = logging.getLogger(__name__)
product_bp = func.Blueprint()

ServiceFactory = Callable[[], AsyncContextManager[ProductService]]


def _not_found(product_id: str) -> func.HttpResponse:
    return error_response(
        "Product not found",
        404,
        code="NOT_FOUND",
        details=f"No product with ID '{product_id}' exists",
    )


def _storage_error(operation: str, exc: Exception) -> func.HttpResponse:
    logger.exception(f"Error during {operation}: {exc}")
    return error_response("Storage error", 500, details=str(exc))


def _if_match(req: func.HttpRequest) -> Optional[str]:
    """Version tag from the If-Match header; '*' means no precondition."""
    value = (req.headers.get("If-Match") or "").strip()
    if not value or value == "*":
        return None
    return value


# ============================================================================
# HANDLERS
# ============================================================================

async def handle_list_products(
    req: func.HttpRequest,
    open_service: ServiceFactory = product_service,
) -> func.HttpResponse:
    try:
        async with open_service() as service:
            products = await service.get_all_products()
        return json_response([p.model_dump(mode="json") for p in products])
    except Exception as e:
        return _storage_error("product listing", e)


async def handle_get_product(
    req: func.HttpRequest,
    open_service: ServiceFactory = product_service,
) -> func.HttpResponse:
    product_id = req.route_params.get("id")
    try:
        async with open_service() as service:
            product = await service.get_product(product_id)
    except Exception as e:
        return _storage_error(f"product fetch {product_id}", e)

    if product is None:
        return _not_found(product_id)
    return json_response(product.model_dump(mode="json"))


async def handle_create_product(
    req: func.HttpRequest,
    open_service: ServiceFactory = product_service,
) -> func.HttpResponse:
    try:
        request = parse_body(req, ProductCreateRequest)
    except ValueError as e:
        return bad_request(e)

    try:
        async with open_service() as service:
            created = await service.create_product(request.to_product())
    except Exception as e:
        return _storage_error("product create", e)

    logger.info(f"Product created: {created.id}")
    return json_response(created.model_dump(mode="json"), status_code=201)


async def handle_update_product(
    req: func.HttpRequest,
    open_service: ServiceFactory = product_service,
) -> func.HttpResponse:
    """
    Replace name/price/quantity of a product.

    The version tag comes from If-Match, else from the body; without either
    the write is checked against the tag current when it is issued.
    """
    product_id = req.route_params.get("id")
    try:
        request = parse_body(req, ProductUpdateRequest)
    except ValueError as e:
        return bad_request(e)

    product = request.to_product(product_id=product_id, etag=_if_match(req) or request.etag)

    try:
        async with open_service() as service:
            result = await service.update_product(product)
    except Exception as e:
        return _storage_error(f"product update {product_id}", e)

    if result.outcome == UpdateOutcome.NOT_FOUND:
        return _not_found(product_id)
    if result.outcome == UpdateOutcome.CONFLICT:
        logger.warning(f"Concurrency conflict updating product {product_id}")
        return error_response(CONFLICT_MESSAGE, 409, code="CONFLICT")

    return json_response(result.product.model_dump(mode="json"))


async def handle_delete_product(
    req: func.HttpRequest,
    open_service: ServiceFactory = product_service,
) -> func.HttpResponse:
    product_id = req.route_params.get("id")
    try:
        async with open_service() as service:
            deleted = await service.delete_product(product_id)
    except Exception as e:
        return _storage_error(f"product delete {product_id}", e)

    if not deleted:
        return _not_found(product_id)
    return func.HttpResponse(status_code=204)


# ============================================================================
# ROUTES
# ============================================================================

@product_bp.route(route="products", methods=["GET"])
async def products_list(req: func.HttpRequest) -> func.HttpResponse:
    """GET /api/products"""
    return await handle_list_products(req)


@product_bp.route(route="products/{id}", methods=["GET"])
async def products_get(req: func.HttpRequest) -> func.HttpResponse:
    """GET /api/products/{id}"""
    return await handle_get_product(req)


@product_bp.route(route="products", methods=["POST"])
async def products_create(req: func.HttpRequest) -> func.HttpResponse:
    """
    POST /api/products

    Body:
    {
        "name": "Widget",
        "price": 9.99,
        "quantity": 10
    }
    """
    return await handle_create_product(req)


@product_bp.route(route="products/{id}", methods=["PUT"])
async def products_update(req: func.HttpRequest) -> func.HttpResponse:
    """
    PUT /api/products/{id}

    Headers (optional): If-Match: <etag>
    Body:
    {
        "name": "Widget",
        "price": 12.5,
        "quantity": 8,
        "etag": "<etag>"      (optional)
    }
    """
    return await handle_update_product(req)


@product_bp.route(route="products/{id}", methods=["DELETE"])
async def products_delete(req: func.HttpRequest) -> func.HttpResponse:
    """DELETE /api/products/{id}"""
    return await handle_delete_product(req)


__all__ = [
    "product_bp",
    "handle_list_products",
    "handle_get_product",
    "handle_create_product",
    "handle_update_product",
    "handle_delete_product",
]
