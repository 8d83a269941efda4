# ============================================================================
# API RESPONSE MODELS
# ============================================================================
# STATUS: Gateway - Response schemas
# PURPOSE: Pydantic V2 models for API responses
# CREATED: 18 OCT 2026
# ============================================================================
"""
API Response Models

Pydantic V2 models for API responses.
Acknowledgement bodies use camelCase keys; dump with by_alias=True.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from __version__ import __version__

CONFLICT_MESSAGE = "The product was modified by another request. Please refresh and try again."


class EnqueueResponse(BaseModel):
    """202 acknowledgement for POST /products/queue."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str = Field(default="Message enqueued for processing")
    action: str = Field(..., description="Action as submitted")


class OrderAcceptedResponse(BaseModel):
    """202 acknowledgement for POST /orders."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "orderId": "a1b2c3d4-e5f6-7890-abcd-ef1234567890",
                "status": "Order received",
            }
        },
    )

    order_id: str = Field(..., description="Id assigned to the order")
    status: str = Field(default="Order received")


class WorkflowStartedResponse(BaseModel):
    """202 acknowledgement for the durable workflow starters."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    instance_id: str
    status: str = "Workflow started"


class WorkflowStatusResponse(BaseModel):
    """Runtime status of a durable orchestration instance."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    instance_id: str
    status: Optional[str] = None
    output: Any = None


class HealthResponse(BaseModel):
    """Health check response."""

    model_config = ConfigDict()

    status: str = Field(default="healthy", description="Overall health status")
    service: str = Field(default="product-orders-functions", description="Service name")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Check timestamp",
    )
    version: str = Field(default=__version__, description="Service version")
    checks: Dict[str, bool] = Field(
        default_factory=dict,
        description="Individual health check results",
    )


class ErrorResponse(BaseModel):
    """Standard error response."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Product not found",
                "details": "No product with ID 'abc123' exists",
                "code": "NOT_FOUND",
            }
        }
    )

    error: str = Field(..., description="Error message")
    details: Optional[str] = Field(default=None, description="Additional details")
    code: Optional[str] = Field(default=None, description="Error code for programmatic handling")


__all__ = [
    "CONFLICT_MESSAGE",
    "EnqueueResponse",
    "OrderAcceptedResponse",
    "WorkflowStartedResponse",
    "WorkflowStatusResponse",
    "HealthResponse",
    "ErrorResponse",
]
