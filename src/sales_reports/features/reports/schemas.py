"""Report API Schemas

Pydantic models for the five admin reports and the envelope they travel in:

1. Daily Sales
2. Monthly Sales
3. Order Status (customers grouped by order status)
4. Customer Orders
5. Product Sales

Wire names are the ones dashboard clients already consume (``totalOrders``,
``fullName`` and so on); the Python attributes stay snake_case and the aliases
are used on output."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
import datetime


class ReportRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OrderItemLine(ReportRow):
    id: str = Field(..., description="Public id of the order item")
    product_id: str
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float


# 1. Daily Sales
class DailySalesOrder(ReportRow):
    customer: Optional[str] = Field(None, description="Customer name, null when the customer is unknown")
    status: str
    items: List[OrderItemLine]
    total: float


class DailySales(ReportRow):
    date: str = Field(..., description="UTC calendar day, YYYY-MM-DD")
    total_orders: int = Field(..., alias="totalOrders")
    total_sales: float = Field(..., alias="totalSales")
    orders: List[DailySalesOrder]


# 2. Monthly Sales
class MonthlySales(ReportRow):
    month: str = Field(..., description="UTC calendar month, YYYY-MM")
    total_orders: int = Field(..., alias="totalOrders")
    total_sales: float = Field(..., alias="totalSales")


# 3 and 4. Per-customer summaries
class CustomerOrderSummary(ReportRow):
    customer_id: str
    full_name: str = Field(..., alias="fullName")
    email: str
    phone: str
    total_orders: int = Field(..., alias="totalOrders")
    total_items: int = Field(..., alias="totalItems")
    total_spent: float = Field(..., alias="totalSpent")
    last_order_date: Optional[datetime.datetime] = Field(None, alias="lastOrderDate")


# 5. Product Sales
class ProductSales(ReportRow):
    product_id: str
    name: Optional[str] = None
    category: Optional[str] = None
    unit_price: Optional[float] = None
    quantity: int
    total_price: float


# Envelopes
class DailySalesResponse(BaseModel):
    success: bool = True
    report: List[DailySales]


class MonthlySalesResponse(BaseModel):
    success: bool = True
    report: List[MonthlySales]


class OrderStatusResponse(BaseModel):
    success: bool = True
    report: Dict[str, List[CustomerOrderSummary]]


class CustomerOrderResponse(BaseModel):
    success: bool = True
    report: List[CustomerOrderSummary]


class ProductSalesResponse(BaseModel):
    success: bool = True
    report: List[ProductSales]


class ErrorResponse(BaseModel):
    error: str
