"""
Root conftest for the pytest test suite.

This file contains the main fixtures that are used across the entire test suite.

This setup uses a manual, async-native approach to database initialization
to ensure that each test runs against a fresh, isolated in-memory database,
which is the most reliable method for an async pytest environment.

Key Fixtures:
- `anyio_backend`: Specifies the asyncio backend.
- `initialize_test_db`: (autouse) Creates a fresh DB schema for each test.
- `app_for_testing`: Provides the FastAPI application instance with its production
  lifespan disabled to allow `initialize_test_db` to manage the test DB.
- `client`: Provides a non-authenticated TestClient.
- `admin_client`: Provides a TestClient authenticated as the seeded admin user.
- `customer_client`: Provides a TestClient authenticated as the seeded non-admin user.
- `admin_token` / `customer_token`: (token, user) pairs for the seeded accounts.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from tortoise import Tortoise

from sales_reports.core.config import build_tortoise_config
from sales_reports.features.auth.models import User
from sales_reports.features.auth.security import create_access_token, get_password_hash

# Import the app
from sales_reports.main import app as actual_app

ADMIN_USERNAME = "reportsadmin"
ADMIN_PASSWORD = "adminpassword123"
CUSTOMER_USERNAME = "reportscustomer"
CUSTOMER_PASSWORD = "customerpassword123"


async def add_admin_user():
    return await User.create(
        username=ADMIN_USERNAME,
        email="reportsadmin@example.com",
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role="admin",
    )


async def add_customer_user():
    return await User.create(
        username=CUSTOMER_USERNAME,
        email="reportscustomer@example.com",
        hashed_password=get_password_hash(CUSTOMER_PASSWORD),
        role="customer",
    )


def get_auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """
    Specifies the asyncio backend.
    """
    return "asyncio"


@pytest_asyncio.fixture(scope="function", autouse=True)
async def initialize_test_db() -> AsyncGenerator[None, None]:
    """
    Initializes the database for each test function.

    This async, autouse fixture creates a fresh in-memory database and schema
    for each test and tears it down afterwards.
    """
    await Tortoise.init(config=build_tortoise_config("sqlite://:memory:"))
    await Tortoise.generate_schemas()
    await add_admin_user()
    await add_customer_user()

    yield

    await Tortoise.close_connections()


@pytest.fixture(scope="function")
def app_for_testing() -> Generator[FastAPI, Any, None]:
    """
    Provides a FastAPI application instance for testing, with its
    production lifespan manager disabled to allow the test DB fixture
    to manage the database connection.
    """
    original_lifespan = actual_app.router.lifespan_context

    @asynccontextmanager
    async def dummy_lifespan(app: FastAPI):
        yield

    actual_app.router.lifespan_context = dummy_lifespan

    yield actual_app

    # Restore the original lifespan context after the test
    actual_app.router.lifespan_context = original_lifespan


@pytest.fixture(scope="function")
def client(app_for_testing: FastAPI) -> Generator[TestClient, Any, None]:
    """
    Provides a non-authenticated starlette TestClient.
    """
    with TestClient(app_for_testing) as tc:
        yield tc


@pytest_asyncio.fixture(scope="function")
async def admin_token() -> tuple[str, User]:
    user = await User.get(username=ADMIN_USERNAME)
    return create_access_token(data={"sub": user.username}), user


@pytest_asyncio.fixture(scope="function")
async def customer_token() -> tuple[str, User]:
    user = await User.get(username=CUSTOMER_USERNAME)
    return create_access_token(data={"sub": user.username}), user


@pytest.fixture(scope="function")
def admin_client(app_for_testing: FastAPI, admin_token: tuple[str, User]) -> Generator[TestClient, Any, None]:
    """
    Provides a TestClient authenticated as the seeded admin user.
    """
    token, _ = admin_token
    with TestClient(app_for_testing) as tc:
        tc.headers.update(get_auth_headers(token))
        yield tc


@pytest.fixture(scope="function")
def customer_client(app_for_testing: FastAPI, customer_token: tuple[str, User]) -> Generator[TestClient, Any, None]:
    """
    Provides a TestClient authenticated as the seeded customer (non-admin) user.
    """
    token, _ = customer_token
    with TestClient(app_for_testing) as tc:
        tc.headers.update(get_auth_headers(token))
        yield tc
