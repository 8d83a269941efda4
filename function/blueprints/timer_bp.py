# ============================================================================
# TIMER BLUEPRINT
# ============================================================================
# STATUS: Gateway - Scheduled order report
# PURPOSE: Log order count and total sales every five minutes
# CREATED: 18 OCT 2026
# ============================================================================
"""
Timer Blueprint

Order report on ORDER_REPORT_SCHEDULE (every 5 minutes, also on startup).
The report is read-only; a storage failure is logged as a warning and the
next tick tries again.
"""

import logging
from typing import AsyncContextManager, Callable, Optional

import azure.functions as func

from core.config import ORDER_REPORT_SCHEDULE
from core.models import OrderReport
from function.services import order_service
from infrastructure.base_repository import RepositoryError
from services import OrderService

logger = logging.getLogger(__name__)
timer_bp = func.Blueprint()


def _existing_orders() -> AsyncContextManager[OrderService]:
    return order_service(create_if_missing=False)


async def run_order_report(
    open_service: Callable[[], AsyncContextManager[OrderService]] = _existing_orders,
) -> Optional[OrderReport]:
    """Build and log the order report; None if storage was unavailable."""
    try:
        async with open_service() as service:
            report = await service.summarize_orders()
    except (RepositoryError, ValueError) as e:
        logger.warning(f"Could not generate report: {e}")
        return None

    logger.info("=== ORDER REPORT ===")
    logger.info(f"Total Orders: {report.order_count}")
    logger.info(f"Total Sales: ${report.total_sales:.2f}")
    return report


@timer_bp.timer_trigger(
    schedule=ORDER_REPORT_SCHEDULE,
    arg_name="timer",
    run_on_startup=True,
    use_monitor=False,
)
async def order_report_timer(timer: func.TimerRequest) -> None:
    if timer.past_due:
        logger.warning("Order report timer is past due")
    await run_order_report()


__all__ = ["timer_bp", "run_order_report"]
