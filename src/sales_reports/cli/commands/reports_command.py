"""`reports` sub-commands: print any admin report as the API's JSON envelope."""
import asyncio
import json
from enum import Enum

import typer

from ...features.reports import service as report_service
from ...features.reports.schemas import (
    CustomerOrderResponse, DailySalesResponse, MonthlySalesResponse,
    OrderStatusResponse, ProductSalesResponse,
)
from ..db import DBConnection

command_app = typer.Typer(name="reports", help="Generate admin reports from the command line.")


class ReportName(str, Enum):
    DAILY_SALES = "daily-sales"
    MONTHLY_SALES = "monthly-sales"
    ORDER_STATUS = "order-status"
    CUSTOMER = "customer"
    PRODUCT = "product"


REPORTS = {
    ReportName.DAILY_SALES: (report_service.generate_daily_sales_report, DailySalesResponse),
    ReportName.MONTHLY_SALES: (report_service.generate_monthly_sales_report, MonthlySalesResponse),
    ReportName.ORDER_STATUS: (report_service.generate_order_status_report, OrderStatusResponse),
    ReportName.CUSTOMER: (report_service.generate_customer_order_report, CustomerOrderResponse),
    ReportName.PRODUCT: (report_service.generate_product_sales_report, ProductSalesResponse),
}


async def render_report(name: ReportName) -> dict:
    generate, envelope = REPORTS[name]
    report = await generate()
    return envelope(report=report).model_dump(mode="json", by_alias=True)


@command_app.command("run")
def run_report_command(
    name: ReportName = typer.Argument(..., help="Which report to generate."),
    indent: int = typer.Option(2, help="JSON indentation, 0 for compact output."),
):
    """Generates a report against the configured database and prints it as JSON."""
    asyncio.run(_run_report(name, indent))


async def _run_report(name: ReportName, indent: int):
    async with DBConnection():
        try:
            payload = await render_report(name)
        except Exception as e:
            typer.secho(f"Error generating {name.value} report: {e}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    typer.echo(json.dumps(payload, indent=indent or None))
