import logging
from typing import Awaitable, Callable, TypeVar

from fastapi import APIRouter, Depends

from ...core.exceptions import ReportGenerationError
from ..auth.security import get_current_active_admin_user
from .schemas import (
    CustomerOrderResponse, DailySalesResponse, ErrorResponse, MonthlySalesResponse,
    OrderStatusResponse, ProductSalesResponse,
)
from . import service as report_service

logger = logging.getLogger(__name__)

T = TypeVar("T")

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    # Admin check runs once here, before any report touches the store
    dependencies=[Depends(get_current_active_admin_user)],
    responses={
        403: {"model": ErrorResponse, "description": "Caller is not an admin"},
        500: {"model": ErrorResponse, "description": "Report could not be generated"},
    },
)


async def _run_report(generate: Callable[[], Awaitable[T]], failure_message: str) -> T:
    try:
        return await generate()
    except Exception as e:
        logger.error(f"{getattr(generate, '__name__', 'report')} failed: {e}", exc_info=True)
        raise ReportGenerationError(failure_message) from e


@router.get("/daily-sales", response_model=DailySalesResponse)
async def get_daily_sales_report():
    report = await _run_report(report_service.generate_daily_sales_report, "Report error")
    return DailySalesResponse(report=report)


@router.get("/monthly-sales", response_model=MonthlySalesResponse)
async def get_monthly_sales_report():
    report = await _run_report(
        report_service.generate_monthly_sales_report, "Failed to generate monthly sales report"
    )
    return MonthlySalesResponse(report=report)


@router.get("/order-status", response_model=OrderStatusResponse)
async def get_order_status_report():
    report = await _run_report(
        report_service.generate_order_status_report, "Failed to generate order status report"
    )
    return OrderStatusResponse(report=report)


@router.get("/customer", response_model=CustomerOrderResponse)
async def get_customer_order_report():
    report = await _run_report(
        report_service.generate_customer_order_report, "Failed to generate customer order report"
    )
    return CustomerOrderResponse(report=report)


@router.get("/product", response_model=ProductSalesResponse)
async def get_product_sales_report():
    report = await _run_report(
        report_service.generate_product_sales_report, "Failed to generate product sales report"
    )
    return ProductSalesResponse(report=report)
