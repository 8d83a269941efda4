# ============================================================================
# FUNCTION APP BLUEPRINTS
# ============================================================================
# STATUS: Gateway - Trigger blueprints
# PURPOSE: Azure Functions V2 blueprints for HTTP, queue, timer, blob and durable triggers
# CREATED: 18 OCT 2026
# ============================================================================
"""
Function App Blueprints

Azure Functions V2 blueprints grouped by concern.
Each blueprint is conditionally registered based on startup validation.
"""

from function.blueprints.product_bp import product_bp
from function.blueprints.product_queue_bp import product_queue_bp
from function.blueprints.order_bp import order_bp
from function.blueprints.timer_bp import timer_bp
from function.blueprints.blob_bp import blob_bp
from function.blueprints.workflow_bp import workflow_bp

__all__ = [
    "product_bp",
    "product_queue_bp",
    "order_bp",
    "timer_bp",
    "blob_bp",
    "workflow_bp",
]
