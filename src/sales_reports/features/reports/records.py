"""Read-only snapshots of store rows handed to the report builders."""

import datetime
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class OrderRecord:
    id: int
    public_id: str
    customer_id: Optional[int]
    item_ids: Tuple[int, ...]
    status: str
    total_price: float
    created_at: datetime.datetime


@dataclass(frozen=True)
class OrderItemRecord:
    id: int
    public_id: str
    order_id: int
    product_id: str
    quantity: int
    unit_price: float
    total_price: float
    name: Optional[str] = None
    category: Optional[str] = None


@dataclass(frozen=True)
class CustomerRecord:
    id: int
    public_id: str
    full_name: str
    email: str
    phone: str
