# ============================================================================
# WORKFLOW BLUEPRINT
# ============================================================================
# STATUS: Gateway - Durable Functions demo workflows
# PURPOSE: Sequential order workflow, fan-out/fan-in, instance status
# CREATED: 18 OCT 2026
# ============================================================================
"""
Workflow Blueprint (Durable Functions)

- POST /api/start-workflow?name=John  - Start order_workflow (202)
- POST /api/start-fanout              - Start fan_out_workflow (202)
- GET  /api/status/{instanceId}       - Runtime status and output

order_workflow chains three activities:
    validate_order -> process_payment -> send_confirmation

fan_out_workflow runs process_item for five items in parallel and sums
the results.

These workflows do not touch products or orders. The orchestration steps
are plain generators so they can be driven without the Durable runtime.
"""

import logging
from typing import Any, Generator, List

import azure.durable_functions as df
import azure.functions as func

from function.blueprints.http import error_response, json_response
from function.models.responses import WorkflowStartedResponse, WorkflowStatusResponse

logger = logging.getLogger(__name__)
workflow_bp = df.Blueprint()

FAN_OUT_ITEMS: List[str] = ["Item1", "Item2", "Item3", "Item4", "Item5"]


# ============================================================================
# ORCHESTRATION STEPS
# ============================================================================

def order_workflow_steps(context: df.DurableOrchestrationContext) -> Generator[Any, Any, str]:
    name = context.get_input() or "Customer"

    validation = yield context.call_activity("validate_order", name)
    payment = yield context.call_activity("process_payment", name)
    confirmation = yield context.call_activity("send_confirmation", name)

    return f"Workflow completed for {name}: {validation} -> {payment} -> {confirmation}"


def fan_out_steps(context: df.DurableOrchestrationContext) -> Generator[Any, Any, int]:
    # Fan out: schedule every item before waiting on any of them
    tasks = [context.call_activity("process_item", item) for item in FAN_OUT_ITEMS]
    results = yield context.task_all(tasks)
    return sum(results)


# ============================================================================
# HTTP STARTERS AND STATUS
# ============================================================================

@workflow_bp.route(route="start-workflow", methods=["POST"])
@workflow_bp.durable_client_input(client_name="client")
async def start_workflow(req: func.HttpRequest, client: df.DurableOrchestrationClient) -> func.HttpResponse:
    name = req.params.get("name") or "World"
    instance_id = await client.start_new("order_workflow", client_input=name)

    logger.info(f"Started workflow with ID: {instance_id}")
    return json_response(
        WorkflowStartedResponse(instance_id=instance_id).model_dump(by_alias=True),
        status_code=202,
    )


@workflow_bp.route(route="start-fanout", methods=["POST"])
@workflow_bp.durable_client_input(client_name="client")
async def start_fanout(req: func.HttpRequest, client: df.DurableOrchestrationClient) -> func.HttpResponse:
    instance_id = await client.start_new("fan_out_workflow")

    logger.info(f"Started Fan-Out workflow: {instance_id}")
    return json_response(
        WorkflowStartedResponse(instance_id=instance_id, status="Fan-Out started").model_dump(by_alias=True),
        status_code=202,
    )


@workflow_bp.route(route="status/{instanceId}", methods=["GET"])
@workflow_bp.durable_client_input(client_name="client")
async def workflow_status(req: func.HttpRequest, client: df.DurableOrchestrationClient) -> func.HttpResponse:
    instance_id = req.route_params.get("instanceId")
    status = await client.get_status(instance_id, show_input=True)

    if status is None or not status.instance_id:
        return error_response(
            "Workflow instance not found",
            404,
            code="NOT_FOUND",
            details=f"No orchestration with ID '{instance_id}' exists",
        )

    runtime_status = status.runtime_status.name if status.runtime_status else None
    return json_response(
        WorkflowStatusResponse(
            instance_id=status.instance_id,
            status=runtime_status,
            output=status.output,
        ).model_dump(by_alias=True)
    )


# ============================================================================
# ORCHESTRATORS
# ============================================================================

@workflow_bp.orchestration_trigger(context_name="context")
def order_workflow(context: df.DurableOrchestrationContext):
    result = yield from order_workflow_steps(context)
    return result


@workflow_bp.orchestration_trigger(context_name="context")
def fan_out_workflow(context: df.DurableOrchestrationContext):
    result = yield from fan_out_steps(context)
    return result


# ============================================================================
# ACTIVITIES
# ============================================================================

@workflow_bp.activity_trigger(input_name="name")
def validate_order(name: str) -> str:
    logger.info(f"Validating order for: {name}")
    return "Validated"


@workflow_bp.activity_trigger(input_name="name")
def process_payment(name: str) -> str:
    logger.info(f"Processing payment for: {name}")
    return "PaymentDone"


@workflow_bp.activity_trigger(input_name="name")
def send_confirmation(name: str) -> str:
    logger.info(f"Sending confirmation to: {name}")
    return "EmailSent"


@workflow_bp.activity_trigger(input_name="item")
def process_item(item: str) -> int:
    logger.info(f"Processing: {item}")
    return len(item)


__all__ = [
    "workflow_bp",
    "FAN_OUT_ITEMS",
    "order_workflow_steps",
    "fan_out_steps",
]
