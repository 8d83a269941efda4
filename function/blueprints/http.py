# ============================================================================
# HTTP RESPONSE HELPERS
# ============================================================================
# STATUS: Gateway - Shared by all HTTP blueprints
# PURPOSE: JSON responses, error bodies and request body parsing
# CREATED: 18 OCT 2026
# ============================================================================
"""
HTTP helpers shared by the blueprints.

Error bodies always use ErrorResponse: {"error", "details", "code"}.
"""

import json
from typing import Any, Optional, Type, TypeVar

import azure.functions as func
from pydantic import BaseModel

from function.models.responses import ErrorResponse

ModelT = TypeVar("ModelT", bound=BaseModel)


def json_response(data: Any, status_code: int = 200) -> func.HttpResponse:
    """Create JSON HTTP response."""
    return func.HttpResponse(
        json.dumps(data, default=str),
        status_code=status_code,
        headers={"Content-Type": "application/json"},
    )


def error_response(
    error: str,
    status_code: int,
    code: Optional[str] = None,
    details: Optional[str] = None,
) -> func.HttpResponse:
    return json_response(
        ErrorResponse(error=error, details=details, code=code).model_dump(),
        status_code=status_code,
    )


def bad_request(exc: Exception) -> func.HttpResponse:
    return error_response("Invalid request", 400, code="INVALID_REQUEST", details=str(exc))


def parse_body(req: func.HttpRequest, model: Type[ModelT]) -> ModelT:
    """
    Validate the JSON request body against a pydantic model.

    Raises:
        ValueError: Body missing, not JSON, or not valid for the model
            (pydantic's ValidationError is a ValueError)
    """
    body = req.get_json()
    if body is None:
        raise ValueError("Request body is required")
    return model.model_validate(body)


__all__ = ["json_response", "error_response", "bad_request", "parse_body"]
