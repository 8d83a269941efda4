# ============================================================================
# FUNCTION APP MODULE
# ============================================================================
# STATUS: Gateway - Azure Function App components
# PURPOSE: Triggers, bindings and wiring for the product/order function app
# CREATED: 18 OCT 2026
# ============================================================================
"""
Function App Module

Contains all components specific to the Azure Function App deployment:
- Blueprints (HTTP, Service Bus, timer, blob and durable triggers)
- Models (request/response schemas)
- Services (per-invocation wiring of repositories and services)
- Startup validation
"""

__all__ = []
