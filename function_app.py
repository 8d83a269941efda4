# ============================================================================
# PRODUCT ORDERS - Azure Function App
# ============================================================================
# STATUS: Gateway - Products, orders and demo workflows
# PURPOSE: Azure Functions V2 entry point
# CREATED: 18 OCT 2026
# ============================================================================
"""
Product Orders Function App

Azure Functions V2 entry point providing:
- Product CRUD over Table Storage with optimistic concurrency
- Asynchronous product mutations via the product-queue Service Bus queue
- Order intake via orders-queue, persisted by a queue consumer
- Scheduled order report, upload logging, Durable Functions demo workflows

Endpoints:
- /api/livez - Liveness probe (always available)
- /api/readyz - Readiness probe (checks startup validation)
- /api/health - Service health summary
- /api/products/* - Product CRUD and product-queue intake
- /api/orders - Order intake and listing
- /api/start-workflow, /api/start-fanout, /api/status/{instanceId} - Durable demo
"""

import azure.durable_functions as df
import azure.functions as func
import json
import logging

# ============================================================================
# CREATE APP FIRST (before any imports that might fail)
# ============================================================================

app = df.DFApp(http_auth_level=func.AuthLevel.ANONYMOUS)

SERVICE_NAME = "product-orders-functions"

logger = logging.getLogger(__name__)
logger.info("=" * 60)
logger.info("Product Orders Function App Starting")
logger.info("=" * 60)

# ============================================================================
# EARLY PROBES (Before validation - always available)
# ============================================================================
# These endpoints must be available even if startup validation fails.


@app.route(route="livez", methods=["GET"])
def liveness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Liveness probe - always returns 200 if function is running.

    GET /api/livez
    """
    return func.HttpResponse(
        json.dumps({"alive": True, "service": SERVICE_NAME}),
        status_code=200,
        headers={"Content-Type": "application/json"},
    )


@app.route(route="readyz", methods=["GET"])
def readiness_probe(req: func.HttpRequest) -> func.HttpResponse:
    """
    Readiness probe - returns 200 if startup validation passed.

    GET /api/readyz

    Returns 503 with the failed checks otherwise.
    """
    from function.startup import STARTUP_STATE

    if STARTUP_STATE.all_passed:
        return func.HttpResponse(
            json.dumps({"ready": True, "service": SERVICE_NAME}),
            status_code=200,
            headers={"Content-Type": "application/json"},
        )

    return func.HttpResponse(
        json.dumps({
            "ready": False,
            "service": SERVICE_NAME,
            "failed_checks": STARTUP_STATE.failed_check_names(),
            "details": STARTUP_STATE.to_dict(),
        }),
        status_code=503,
        headers={"Content-Type": "application/json"},
    )


@app.route(route="health", methods=["GET"])
def health_check(req: func.HttpRequest) -> func.HttpResponse:
    """
    Health summary from the startup checks.

    GET /api/health
    """
    from function.config import get_config
    from function.models.responses import HealthResponse
    from function.startup import STARTUP_STATE

    config = get_config()
    response = HealthResponse(
        status="healthy" if STARTUP_STATE.all_passed else "degraded",
        service=config.service_name,
        version=config.version,
        checks={c.name: c.passed for c in STARTUP_STATE.checks()},
    )
    return func.HttpResponse(
        response.model_dump_json(),
        status_code=200,
        headers={"Content-Type": "application/json"},
    )


# ============================================================================
# STARTUP VALIDATION
# ============================================================================
# Validate environment before registering blueprints.
# If validation fails, only /livez, /readyz and /health are available.

logger.info("Running startup validation...")

from function.config import get_config
from core.logging import configure_logging
from function.startup import validate_startup, STARTUP_STATE

configure_logging(get_config().log_level)

_startup_result = validate_startup()

if not STARTUP_STATE.all_passed:
    logger.error("=" * 60)
    logger.error("STARTUP VALIDATION FAILED")
    logger.error("=" * 60)
    logger.error("Only /api/livez, /api/readyz and /api/health endpoints available")
    for check in STARTUP_STATE.failed_checks():
        logger.error(f"  FAILED: {check.name} - {check.error_message}")
    logger.error("=" * 60)
else:
    logger.info("Startup validation PASSED")


# ============================================================================
# BLUEPRINT REGISTRATION (Conditional on startup success)
# ============================================================================

if STARTUP_STATE.all_passed:
    logger.info("Registering blueprints...")

    from function.blueprints.product_bp import product_bp
    app.register_functions(product_bp)
    logger.info("  Registered: product_bp (product CRUD)")

    from function.blueprints.product_queue_bp import product_queue_bp
    app.register_functions(product_queue_bp)
    logger.info("  Registered: product_queue_bp (product-queue intake and consumer)")

    from function.blueprints.order_bp import order_bp
    app.register_functions(order_bp)
    logger.info("  Registered: order_bp (orders-queue intake and consumer)")

    from function.blueprints.timer_bp import timer_bp
    app.register_functions(timer_bp)
    logger.info("  Registered: timer_bp (order report)")

    from function.blueprints.blob_bp import blob_bp
    app.register_functions(blob_bp)
    logger.info("  Registered: blob_bp (upload logging)")

    from function.blueprints.workflow_bp import workflow_bp
    app.register_functions(workflow_bp)
    logger.info("  Registered: workflow_bp (durable workflows)")

    logger.info("=" * 60)
    logger.info("Product Orders Function App Ready")
    logger.info("=" * 60)
else:
    logger.warning("=" * 60)
    logger.warning("SKIPPING blueprint registration - startup validation failed")
    logger.warning("=" * 60)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ["app"]
