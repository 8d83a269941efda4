# ============================================================================
# FUNCTION APP MODELS
# ============================================================================
# STATUS: Gateway - Pydantic models for API
# PURPOSE: Request and response models for function app endpoints
# CREATED: 18 OCT 2026
# ============================================================================
"""
Function App Models

Pydantic V2 models for API requests and responses.
"""

from function.models.requests import (
    ProductCreateRequest,
    ProductUpdateRequest,
    PlaceOrderRequest,
)
from function.models.responses import (
    CONFLICT_MESSAGE,
    EnqueueResponse,
    OrderAcceptedResponse,
    WorkflowStartedResponse,
    WorkflowStatusResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    # Requests
    "ProductCreateRequest",
    "ProductUpdateRequest",
    "PlaceOrderRequest",
    # Responses
    "CONFLICT_MESSAGE",
    "EnqueueResponse",
    "OrderAcceptedResponse",
    "WorkflowStartedResponse",
    "WorkflowStatusResponse",
    "HealthResponse",
    "ErrorResponse",
]
