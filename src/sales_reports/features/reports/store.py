"""Data access for the report engine.

Every function issues a single read against Tortoise and returns frozen
records. Nothing is cached and errors from the ORM or the driver propagate
unchanged; the three collections are read one after the other, so under
concurrent writes they may reflect slightly different instants.
"""

import logging
from typing import Iterable, List

from ..customers.models import Customer
from ..orders.models import Order, OrderItem, OrderStatus
from .pipeline import as_utc
from .records import CustomerRecord, OrderItemRecord, OrderRecord

logger = logging.getLogger(__name__)

_ITEM_FIELDS = (
    "id", "public_id", "order_id", "product_id", "quantity",
    "unit_price", "total_price", "name", "category",
)


def _to_item_record(row: dict) -> OrderItemRecord:
    return OrderItemRecord(**{name: row[name] for name in _ITEM_FIELDS})


async def fetch_orders(statuses: Iterable[OrderStatus]) -> List[OrderRecord]:
    """Orders whose status is one of ``statuses``, in insertion order."""
    rows = await Order.filter(status__in=list(statuses)).order_by("id").values(
        "id", "public_id", "customer_id", "items", "status", "total_price", "created_at"
    )
    logger.debug(f"Fetched {len(rows)} orders")
    return [
        OrderRecord(
            id=row["id"],
            public_id=row["public_id"],
            customer_id=row["customer_id"],
            item_ids=tuple(int(ref) for ref in (row["items"] or [])),
            status=OrderStatus(row["status"]).value,
            total_price=row["total_price"],
            created_at=as_utc(row["created_at"]),
        )
        for row in rows
    ]


async def fetch_items_for_orders(order_ids: Iterable[int]) -> List[OrderItemRecord]:
    """Order items pointing back at any of ``order_ids``."""
    order_ids = list(order_ids)
    if not order_ids:
        return []
    rows = await OrderItem.filter(order_id__in=order_ids).order_by("id").values(*_ITEM_FIELDS)
    return [_to_item_record(row) for row in rows]


async def fetch_items_by_ids(item_ids: Iterable[int]) -> List[OrderItemRecord]:
    """Order items listed in the orders' stored item-reference arrays."""
    item_ids = list(set(item_ids))
    if not item_ids:
        return []
    rows = await OrderItem.filter(id__in=item_ids).order_by("id").values(*_ITEM_FIELDS)
    return [_to_item_record(row) for row in rows]


async def fetch_customers(customer_ids: Iterable[int]) -> List[CustomerRecord]:
    customer_ids = list({cid for cid in customer_ids if cid is not None})
    if not customer_ids:
        return []
    rows = await Customer.filter(id__in=customer_ids).order_by("id").values(
        "id", "public_id", "full_name", "email", "phone"
    )
    return [CustomerRecord(**row) for row in rows]
