import datetime

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from tortoise.exceptions import OperationalError

from ....features.customers.models import Customer
from ....features.orders.models import Order, OrderItem, OrderStatus, PaymentMethod
from ....features.auth.models import User
from .. import store

REPORT_ENDPOINTS = [
    "/api/v1/reports/daily-sales",
    "/api/v1/reports/monthly-sales",
    "/api/v1/reports/order-status",
    "/api/v1/reports/customer",
    "/api/v1/reports/product",
]


def utc(year, month, day, hour=12):
    return datetime.datetime(year, month, day, hour, tzinfo=datetime.timezone.utc)


async def create_customer(full_name: str, email: str, phone: str = "555-0100") -> Customer:
    return await Customer.create(full_name=full_name, email=email, phone=phone)


async def create_order(customer, order_status, created_at, lines, link_items=True) -> Order:
    """Creates an order plus its items.

    ``lines`` are (product_id, quantity, unit_price, name) tuples. With
    ``link_items`` the new item ids are recorded in the order's item list, the
    way checkout does it.
    """
    total = sum(quantity * unit_price for _, quantity, unit_price, _ in lines)
    order = await Order.create(
        customer=customer,
        status=order_status,
        total_price=total,
        unit_price=lines[0][2] if lines else 0.0,
        payment_method=PaymentMethod.DELIVERY,
        shipping_full_name=customer.full_name if customer else "Walk-in",
        shipping_phone="555-0199",
        shipping_city="Springfield",
        created_at=created_at,
    )
    items = []
    for product_id, quantity, unit_price, name in lines:
        items.append(await OrderItem.create(
            order=order, product_id=product_id, quantity=quantity,
            unit_price=unit_price, total_price=quantity * unit_price, name=name,
        ))
    if link_items:
        order.items = [i.id for i in items]
        await order.save(update_fields=["items"])
    return order


@pytest.mark.asyncio
async def test_report_auth_required(client: TestClient):
    for endpoint in REPORT_ENDPOINTS:
        response = client.get(endpoint)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_reports_forbidden_for_non_admin(customer_client: TestClient):
    for endpoint in REPORT_ENDPOINTS:
        response = customer_client.get(endpoint)
        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {"error": "Access denied"}


@pytest.mark.asyncio
async def test_reports_reject_inactive_admin(admin_client: TestClient, admin_token: tuple[str, User]):
    _, admin = admin_token
    admin.is_active = False
    await admin.save(update_fields=["is_active"])

    response = admin_client.get("/api/v1/reports/daily-sales")
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_reports_on_empty_store(admin_client: TestClient):
    expected_empty = {
        "/api/v1/reports/daily-sales": [],
        "/api/v1/reports/monthly-sales": [],
        "/api/v1/reports/order-status": {},
        "/api/v1/reports/customer": [],
        "/api/v1/reports/product": [],
    }
    for endpoint, empty in expected_empty.items():
        response = admin_client.get(endpoint)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"success": True, "report": empty}


@pytest.mark.asyncio
async def test_single_completed_order_across_reports(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 5), [("P1", 2, 50.0, None)])

    daily = admin_client.get("/api/v1/reports/daily-sales").json()
    assert daily["success"] is True
    day = daily["report"][0]
    assert day["date"] == "2024-03-05"
    assert day["totalOrders"] == 1
    assert day["totalSales"] == pytest.approx(100.0)
    assert day["orders"][0]["customer"] == "Alice"
    assert day["orders"][0]["status"] == "completed"
    assert day["orders"][0]["total"] == pytest.approx(100.0)
    assert day["orders"][0]["items"][0]["product_id"] == "P1"

    products = admin_client.get("/api/v1/reports/product").json()["report"]
    assert len(products) == 1
    assert products[0]["product_id"] == "P1"
    assert products[0]["quantity"] == 2
    assert products[0]["total_price"] == pytest.approx(100.0)
    # The item carries no denormalized name or category
    assert products[0]["name"] is None
    assert products[0]["category"] is None

    customers = admin_client.get("/api/v1/reports/customer").json()["report"]
    assert len(customers) == 1
    row = customers[0]
    assert row["customer_id"] == alice.public_id
    assert row["fullName"] == "Alice"
    assert row["email"] == "alice@example.com"
    assert row["totalOrders"] == 1
    assert row["totalItems"] == 2
    assert row["totalSpent"] == pytest.approx(100.0)
    assert row["lastOrderDate"].startswith("2024-03-05T12:00:00")


@pytest.mark.asyncio
async def test_monthly_sales_report(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 1, 31, 23), [("P1", 1, 10.0, None)])
    await create_order(alice, OrderStatus.CANCELLED, utc(2024, 2, 1, 0), [("P1", 1, 20.0, None)])
    await create_order(alice, OrderStatus.PENDING, utc(2024, 2, 15), [("P2", 3, 5.0, None)])

    response = admin_client.get("/api/v1/reports/monthly-sales")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["report"] == [
        {"month": "2024-02", "totalOrders": 2, "totalSales": pytest.approx(35.0)},
        {"month": "2024-01", "totalOrders": 1, "totalSales": pytest.approx(10.0)},
    ]


@pytest.mark.asyncio
async def test_order_status_report_drops_orphaned_customers(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    ghost = await create_customer("Ghost", "ghost@example.com")
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 1), [("P1", 2, 10.0, None)])
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 4), [("P2", 1, 5.0, None)])
    await create_order(alice, OrderStatus.PENDING, utc(2024, 3, 2), [("P1", 1, 10.0, None)])
    await create_order(ghost, OrderStatus.CANCELLED, utc(2024, 3, 3), [("P1", 4, 10.0, None)])
    await ghost.delete()

    response = admin_client.get("/api/v1/reports/order-status")
    assert response.status_code == status.HTTP_200_OK
    report = response.json()["report"]

    # The cancelled order's customer no longer exists, so the status disappears
    assert set(report) == {"completed", "pending"}
    completed = report["completed"]
    assert len(completed) == 1
    assert completed[0]["fullName"] == "Alice"
    assert completed[0]["totalOrders"] == 2
    assert completed[0]["totalItems"] == 3
    assert completed[0]["totalSpent"] == pytest.approx(25.0)
    assert completed[0]["lastOrderDate"].startswith("2024-03-04")
    assert report["pending"][0]["totalItems"] == 1


@pytest.mark.asyncio
async def test_customer_report_counts_only_fulfilled_orders(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    bob = await create_customer("Bob", "bob@example.com")
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 1), [("P1", 1, 30.0, None)])
    await create_order(alice, OrderStatus.CANCELLED, utc(2024, 3, 2), [("P1", 9, 30.0, None)])
    await create_order(bob, OrderStatus.CONFIRMED, utc(2024, 3, 3), [("P2", 2, 50.0, None)])
    await create_order(bob, OrderStatus.PENDING, utc(2024, 3, 4), [("P2", 1, 50.0, None)])

    report = admin_client.get("/api/v1/reports/customer").json()["report"]

    assert [row["fullName"] for row in report] == ["Bob", "Alice"]
    assert [(row["totalOrders"], row["totalItems"]) for row in report] == [(1, 2), (1, 1)]
    assert [row["totalSpent"] for row in report] == [pytest.approx(100.0), pytest.approx(30.0)]


@pytest.mark.asyncio
async def test_product_report_uses_item_reference_list(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 1), [("P1", 1, 10.0, "Mug"), ("P2", 5, 2.0, "Pen")])
    await create_order(alice, OrderStatus.CONFIRMED, utc(2024, 3, 2), [("P1", 3, 12.0, "Mug v2")])
    await create_order(alice, OrderStatus.PENDING, utc(2024, 3, 3), [("P1", 50, 10.0, "Mug")])
    # Items exist but the order never listed them
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 4), [("P3", 7, 1.0, "Clip")], link_items=False)

    report = admin_client.get("/api/v1/reports/product").json()["report"]

    assert [row["product_id"] for row in report] == ["P2", "P1"]
    p2, p1 = report
    assert (p2["quantity"], p2["total_price"], p2["name"]) == (5, pytest.approx(10.0), "Pen")
    assert (p1["quantity"], p1["total_price"]) == (4, pytest.approx(46.0))
    assert p1["name"] == "Mug"
    assert p1["unit_price"] == pytest.approx(10.0)


@pytest.mark.asyncio
async def test_daily_report_lists_items_by_back_reference(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    await create_order(alice, OrderStatus.PENDING, utc(2024, 3, 4), [("P3", 7, 1.0, "Clip")], link_items=False)

    day = admin_client.get("/api/v1/reports/daily-sales").json()["report"][0]
    assert [i["product_id"] for i in day["orders"][0]["items"]] == ["P3"]


@pytest.mark.asyncio
async def test_repeated_calls_return_identical_reports(admin_client: TestClient):
    alice = await create_customer("Alice", "alice@example.com")
    await create_order(alice, OrderStatus.COMPLETED, utc(2024, 3, 1), [("P1", 1, 10.0, "Mug")])
    await create_order(None, OrderStatus.CONFIRMED, utc(2024, 3, 2), [("P2", 2, 5.0, "Pen")])

    for endpoint in REPORT_ENDPOINTS:
        first = admin_client.get(endpoint).json()
        second = admin_client.get(endpoint).json()
        assert first == second


@pytest.mark.asyncio
async def test_store_failure_is_reported_as_internal_error(admin_client: TestClient, monkeypatch, caplog):
    async def broken_fetch(*args, **kwargs):
        raise OperationalError("no such table: orders")

    monkeypatch.setattr(store, "fetch_orders", broken_fetch)

    expected = {
        "/api/v1/reports/daily-sales": "Report error",
        "/api/v1/reports/monthly-sales": "Failed to generate monthly sales report",
        "/api/v1/reports/order-status": "Failed to generate order status report",
        "/api/v1/reports/customer": "Failed to generate customer order report",
        "/api/v1/reports/product": "Failed to generate product sales report",
    }
    with caplog.at_level("ERROR", logger="sales_reports.features.reports.router"):
        for endpoint, message in expected.items():
            response = admin_client.get(endpoint)
            assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
            # The underlying error is logged, not returned
            assert response.json() == {"error": message}

    assert "no such table: orders" in caplog.text