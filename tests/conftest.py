"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
books, categories, customers, orders, users
                 - a small catalogue and back-office dataset
backend          - ``FakeBackend`` pre-loaded with the dataset above
contact_store    - ``ContactStore`` writing to a temporary file
client           - FastAPI ``TestClient`` wired to ``backend`` and
                   ``contact_store`` through dependency overrides
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from bookshop.backend import get_backend
from bookshop.config import Settings
from bookshop.main import create_app
from bookshop.models import (
    Board,
    Book,
    Category,
    CategoryType,
    Customer,
    CustomerType,
    Order,
    OrderStatus,
    Role,
    User,
)
from bookshop.storefront.contact_store import ContactStore, get_contact_store
from tests.fakes import FakeBackend


def make_book(**overrides) -> Book:
    fields = dict(
        title="Mathematics Part I",
        author="R. Sharma",
        price=250.0,
        mrp=300.0,
        quantity=25,
        grade=5,
        subject="Mathematics",
        board=Board.CBSE,
    )
    fields.update(overrides)
    return Book(**fields)


# ── Dataset ──────────────────────────────────────────────────────────────────


@pytest.fixture
def books() -> list:
    return [
        make_book(id=1, title="Mathematics Part I", price=250.0, mrp=300.0, quantity=25, grade=5),
        make_book(id=2, title="basic science", author="A. Gupta", subject="Science",
                  price=180.0, mrp=180.0, quantity=4, grade=3, board=Board.ICSE),
        make_book(id=3, title="English Reader", author="M. Iyer", subject="English",
                  price=120.0, mrp=150.0, quantity=0, grade=8, board=Board.NCERT),
        make_book(id=4, title="Algebra Workbook", author="R. Sharma", subject="Mathematics",
                  price=320.0, mrp=320.0, quantity=12, grade=8),
    ]


@pytest.fixture
def categories() -> list:
    return [
        Category(id=1, name="Mathematics", description="Numbers and algebra",
                 category_type=CategoryType.SUBJECT),
        Category(id=2, name="Science", category_type=CategoryType.SUBJECT),
        Category(id=3, name="Primary", description="Grades 1 to 5",
                 category_type=CategoryType.GRADE_LEVEL),
        Category(id=4, name="Archived", is_active=False),
        Category(id=5, name="English"),
    ]


@pytest.fixture
def customers() -> list:
    return [
        Customer(id=1, name="Asha Rao", email="asha@example.com", phone="9876543210"),
        Customer(id=2, name="Green Valley School", email="office@gvs.edu", phone="0112345678",
                 customer_type=CustomerType.SCHOOL, institution_name="Green Valley School"),
    ]


@pytest.fixture
def orders() -> list:
    today = date.today().isoformat()
    return [
        Order(id=1, customer_id=1, status=OrderStatus.PENDING, final_amount=500.0,
              order_date=f"{today}T10:15:00"),
        Order(id=2, customer_id=2, status=OrderStatus.DELIVERED, final_amount=1200.0,
              order_date="2024-01-10T09:00:00"),
        Order(id=3, customer_id=1, status=OrderStatus.CANCELLED, final_amount=300.0,
              created_at=f"{today}T08:00:00"),
    ]


@pytest.fixture
def users() -> list:
    return [
        User(id=1, name="Admin User", email="admin@example.com", role=Role.ADMIN),
        User(id=2, name="Sarah Staff", email="sarah@example.com", role=Role.STAFF),
        User(id=3, name="Lisa Sales", email="lisa@example.com", role=Role.SALES_PERSON,
             is_active=False),
    ]


# ── Wiring ───────────────────────────────────────────────────────────────────


@pytest.fixture
def backend(books, categories, customers, orders, users) -> FakeBackend:
    return FakeBackend(
        books=books,
        categories=categories,
        customers=customers,
        orders=orders,
        users=users,
    )


@pytest.fixture
def contact_store(tmp_path) -> ContactStore:
    return ContactStore(tmp_path / "contact_messages.json")


@pytest.fixture
def client(backend, contact_store, tmp_path) -> TestClient:
    settings = Settings(cache_ttl=0, contact_file=tmp_path / "contact_messages.json")
    app = create_app(settings)
    app.dependency_overrides[get_backend] = lambda: backend
    app.dependency_overrides[get_contact_store] = lambda: contact_store
    return TestClient(app)
