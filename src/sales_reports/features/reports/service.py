"""
Reports Service Module

Builds the admin reports from order, order item and customer records. Each
report has two halves:

- ``build_*``: a pure function over record collections, written as a
  match -> join -> group -> project -> sort chain of pipeline primitives.
- ``generate_*_report``: reads the current snapshot through the report store
  and hands it to the builder. Nothing is cached; every call recomputes.
"""

import logging
from typing import Dict, List, Sequence

from ..orders.models import OrderStatus
from . import store
from .pipeline import (
    Count, First, Max, Push, Sum,
    day_bucket, group_by, inner_join_one, join_many, join_many_by_refs,
    join_one, match, month_bucket, sort_by, unwind,
)
from .records import CustomerRecord, OrderItemRecord, OrderRecord
from .schemas import (
    CustomerOrderSummary, DailySales, DailySalesOrder, MonthlySales,
    OrderItemLine, ProductSales,
)

logger = logging.getLogger(__name__)

# Sales reports cover every known status, cancelled included.
SALES_STATUSES = (
    OrderStatus.COMPLETED, OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.CANCELLED,
)
# Customer and product reports only count orders that went through.
FULFILLED_STATUSES = (OrderStatus.COMPLETED, OrderStatus.CONFIRMED)


def _has_status(statuses: Sequence[OrderStatus]):
    allowed = {status.value for status in statuses}
    return lambda order: order.status in allowed


def _item_line(item: OrderItemRecord) -> OrderItemLine:
    return OrderItemLine(
        id=item.public_id, product_id=item.product_id, name=item.name, category=item.category,
        quantity=item.quantity, unit_price=item.unit_price, total_price=item.total_price,
    )


def _customer_summary(group, customer: CustomerRecord) -> CustomerOrderSummary:
    return CustomerOrderSummary(
        customer_id=customer.public_id,
        full_name=customer.full_name,
        email=customer.email,
        phone=customer.phone,
        total_orders=group["total_orders"],
        total_items=group["total_items"],
        total_spent=group["total_spent"],
        last_order_date=group["last_order_date"],
    )


def _per_customer_accumulators() -> dict:
    # Rows are (order, [items]) pairs
    return dict(
        total_orders=Count(),
        total_items=Sum(lambda row: sum(item.quantity for item in row[1])),
        total_spent=Sum(lambda row: row[0].total_price),
        last_order_date=Max(lambda row: row[0].created_at),
    )


def build_daily_sales(
    orders: Sequence[OrderRecord],
    items: Sequence[OrderItemRecord],
    customers: Sequence[CustomerRecord],
) -> List[DailySales]:
    """
    Groups orders by the UTC day they were created on.

    Each day carries the order count, the summed ``total_price`` and every
    order with its customer's name, status, items and total. An order whose
    customer cannot be found is still counted, with a null customer name.

    Returns:
        List[DailySales]: One row per day, most recent day first.
    """
    with_items = join_many(
        match(orders, _has_status(SALES_STATUSES)), items,
        left_key=lambda order: order.id, right_key=lambda item: item.order_id,
    )
    rows = [
        (order, order_items, customer)
        for (order, order_items), customer in join_one(
            with_items, customers,
            left_key=lambda pair: pair[0].customer_id, right_key=lambda customer: customer.id,
        )
    ]
    days = group_by(
        rows,
        key=lambda row: day_bucket(row[0].created_at),
        total_orders=Count(),
        total_sales=Sum(lambda row: row[0].total_price),
        orders=Push(lambda row: DailySalesOrder(
            customer=row[2].full_name if row[2] else None,
            status=row[0].status,
            items=[_item_line(item) for item in row[1]],
            total=row[0].total_price,
        )),
    )
    report = [
        DailySales(
            date=day.key, total_orders=day["total_orders"],
            total_sales=day["total_sales"], orders=day["orders"],
        )
        for day in days
    ]
    return sort_by(report, key=lambda row: row.date, descending=True)


def build_monthly_sales(orders: Sequence[OrderRecord]) -> List[MonthlySales]:
    """Order count and sales per UTC month, latest month first. No joins."""
    months = group_by(
        match(orders, _has_status(SALES_STATUSES)),
        key=lambda order: month_bucket(order.created_at),
        total_orders=Count(),
        total_sales=Sum(lambda order: order.total_price),
    )
    report = [
        MonthlySales(month=month.key, total_orders=month["total_orders"], total_sales=month["total_sales"])
        for month in months
    ]
    return sort_by(report, key=lambda row: row.month, descending=True)


def build_order_status(
    orders: Sequence[OrderRecord],
    items: Sequence[OrderItemRecord],
    customers: Sequence[CustomerRecord],
) -> Dict[str, List[CustomerOrderSummary]]:
    """
    Customers grouped under each order status.

    Orders are first summarised per (status, customer). Summaries whose
    customer record does not exist are dropped, then the rest are collected
    per status in the order they were first grouped. Statuses left without
    any customer do not appear in the mapping.

    Returns:
        Dict[str, List[CustomerOrderSummary]]: status value -> customer summaries.
    """
    with_items = join_many(
        match(orders, _has_status(SALES_STATUSES)), items,
        left_key=lambda order: order.id, right_key=lambda item: item.order_id,
    )
    per_customer = group_by(
        with_items,
        key=lambda row: (row[0].status, row[0].customer_id),
        **_per_customer_accumulators(),
    )
    with_customer = inner_join_one(
        per_customer, customers,
        left_key=lambda group: group.key[1], right_key=lambda customer: customer.id,
    )
    by_status = group_by(
        with_customer,
        key=lambda pair: pair[0].key[0],
        users=Push(lambda pair: _customer_summary(pair[0], pair[1])),
    )
    by_status = sort_by(by_status, key=lambda group: group.key)
    return {group.key: group["users"] for group in by_status}


def build_customer_orders(
    orders: Sequence[OrderRecord],
    items: Sequence[OrderItemRecord],
    customers: Sequence[CustomerRecord],
) -> List[CustomerOrderSummary]:
    """
    Per-customer totals over completed and confirmed orders, top spenders first.

    Items are resolved through the order's stored item-reference list. Customers
    that no longer exist are left out of the report.
    """
    with_items = join_many_by_refs(
        match(orders, _has_status(FULFILLED_STATUSES)), items,
        left_refs=lambda order: order.item_ids, right_key=lambda item: item.id,
    )
    per_customer = group_by(
        with_items,
        key=lambda row: row[0].customer_id,
        **_per_customer_accumulators(),
    )
    report = [
        _customer_summary(group, customer)
        for group, customer in inner_join_one(
            per_customer, customers,
            left_key=lambda group: group.key, right_key=lambda customer: customer.id,
        )
    ]
    return sort_by(report, key=lambda row: row.total_spent, descending=True)


def build_product_sales(
    orders: Sequence[OrderRecord],
    items: Sequence[OrderItemRecord],
) -> List[ProductSales]:
    """
    Quantity and revenue per product over completed and confirmed orders.

    One row per product id, best sellers first. ``name``, ``category`` and
    ``unit_price`` come from the first item seen for the product; name and
    category are the copies stored on the item and are null when the item
    does not carry them.
    """
    lines = unwind(join_many_by_refs(
        match(orders, _has_status(FULFILLED_STATUSES)), items,
        left_refs=lambda order: order.item_ids, right_key=lambda item: item.id,
    ))
    products = group_by(
        lines,
        key=lambda line: line[1].product_id,
        product_id=First(lambda line: line[1].product_id),
        name=First(lambda line: line[1].name),
        category=First(lambda line: line[1].category),
        unit_price=First(lambda line: line[1].unit_price),
        quantity=Sum(lambda line: line[1].quantity),
        total_price=Sum(lambda line: line[1].total_price),
    )
    report = [ProductSales(**product.values) for product in products]
    return sort_by(report, key=lambda row: row.quantity, descending=True)


async def generate_daily_sales_report() -> List[DailySales]:
    orders = await store.fetch_orders(SALES_STATUSES)
    items = await store.fetch_items_for_orders(order.id for order in orders)
    customers = await store.fetch_customers(order.customer_id for order in orders)
    report = build_daily_sales(orders, items, customers)
    logger.info(f"Daily sales report: {len(report)} days from {len(orders)} orders")
    return report


async def generate_monthly_sales_report() -> List[MonthlySales]:
    orders = await store.fetch_orders(SALES_STATUSES)
    report = build_monthly_sales(orders)
    logger.info(f"Monthly sales report: {len(report)} months from {len(orders)} orders")
    return report


async def generate_order_status_report() -> Dict[str, List[CustomerOrderSummary]]:
    orders = await store.fetch_orders(SALES_STATUSES)
    items = await store.fetch_items_for_orders(order.id for order in orders)
    customers = await store.fetch_customers(order.customer_id for order in orders)
    report = build_order_status(orders, items, customers)
    logger.info(f"Order status report: statuses {sorted(report)}")
    return report


async def generate_customer_order_report() -> List[CustomerOrderSummary]:
    orders = await store.fetch_orders(FULFILLED_STATUSES)
    items = await store.fetch_items_by_ids(ref for order in orders for ref in order.item_ids)
    customers = await store.fetch_customers(order.customer_id for order in orders)
    report = build_customer_orders(orders, items, customers)
    logger.info(f"Customer order report: {len(report)} customers")
    return report


async def generate_product_sales_report() -> List[ProductSales]:
    orders = await store.fetch_orders(FULFILLED_STATUSES)
    items = await store.fetch_items_by_ids(ref for order in orders for ref in order.item_ids)
    report = build_product_sales(orders, items)
    logger.info(f"Product sales report: {len(report)} products")
    return report
