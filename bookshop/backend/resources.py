"""
One resource object per backend collection.

Each resource maps Python calls onto the backend's paths and turns the
returned JSON into the models of ``bookshop.models``. The generic CRUD
operations live on :class:`Resource`; the filtered and search variants
each collection offers are added by the subclasses.
"""

from __future__ import annotations

import logging
import urllib.parse
from contextlib import contextmanager
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Generic, Iterator, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from ..errors import ApiError
from ..models import (
    Board,
    Book,
    Category,
    CategoryType,
    Customer,
    CustomerType,
    Order,
    OrderStatus,
    PageResponse,
    PaymentStatus,
    Role,
    SearchRequest,
    User,
    WireModel,
)

if TYPE_CHECKING:
    from .client import BackendClient

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=WireModel)
Payload = Union[WireModel, Dict[str, Any]]


def _seg(value: Any) -> str:
    """Quote one path segment."""
    if isinstance(value, Enum):
        value = value.value
    return urllib.parse.quote(str(value), safe="")


@contextmanager
def _parsing(path: str) -> Iterator[None]:
    """Turn a response that does not fit the models into an :class:`ApiError`."""
    try:
        yield
    except (ValidationError, TypeError, ValueError) as exc:
        logger.error("Unexpected response shape from %s: %s", path, exc)
        raise ApiError(None, status_code=None) from exc


def _payload(record: Payload) -> Dict[str, Any]:
    if isinstance(record, WireModel):
        return record.to_wire()
    return dict(record)


class Resource(Generic[ModelT]):
    """CRUD over one collection path (``/books``, ``/categories`` ...)."""

    path: str = ""
    model: Type[ModelT]

    def __init__(self, client: "BackendClient"):
        self._client = client

    def _url(self, *parts: Any) -> str:
        return "/".join([self.path] + [_seg(p) for p in parts])

    def _one(self, data: Any) -> Optional[ModelT]:
        if data is None:
            return None
        with _parsing(self.path):
            return self.model.model_validate(data)

    def _many(self, data: Any) -> List[ModelT]:
        with _parsing(self.path):
            return [self.model.model_validate(item) for item in data or []]

    def _page(self, data: Any) -> PageResponse[ModelT]:
        with _parsing(self.path):
            return PageResponse[self.model].model_validate(data or {})

    def list_all(self) -> List[ModelT]:
        return self._many(self._client.get(self.path))

    def get(self, record_id: int) -> Optional[ModelT]:
        return self._one(self._client.get(self._url(record_id)))

    def create(self, record: Payload) -> Optional[ModelT]:
        return self._one(self._client.post(self.path, _payload(record)))

    def update(self, record_id: int, record: Payload) -> Optional[ModelT]:
        return self._one(self._client.put(self._url(record_id), _payload(record)))

    def delete(self, record_id: int) -> None:
        self._client.delete(self._url(record_id))


class BookResource(Resource[Book]):
    path = "/books"
    model = Book

    def get_by_isbn(self, isbn: str) -> Optional[Book]:
        return self._one(self._client.get(self._url("isbn", isbn)))

    def by_grade(self, grade: int) -> List[Book]:
        return self._many(self._client.get(self._url("grade", grade)))

    def by_subject(self, subject: str) -> List[Book]:
        return self._many(self._client.get(self._url("subject", subject)))

    def by_board(self, board: Board) -> List[Book]:
        return self._many(self._client.get(self._url("board", board)))

    def by_category(self, category_id: int) -> List[Book]:
        return self._many(self._client.get(self._url("category", category_id)))

    def search(self, params: SearchRequest) -> PageResponse[Book]:
        return self._page(self._client.get(self._url("search"), params.to_wire()))

    def low_stock(self, threshold: Optional[int] = None) -> List[Book]:
        return self._many(self._client.get(self._url("low-stock"), {"threshold": threshold}))

    def best_sellers(self, limit: Optional[int] = None) -> List[Book]:
        return self._many(self._client.get(self._url("bestsellers"), {"limit": limit}))

    def update_stock(self, book_id: int, quantity: int) -> None:
        self._client.put(self._url(book_id, "stock"), params={"quantity": quantity})


class CategoryResource(Resource[Category]):
    path = "/categories"
    model = Category

    def get_by_name(self, name: str) -> Optional[Category]:
        return self._one(self._client.get(self._url("name", name)))

    def by_type(self, category_type: CategoryType) -> List[Category]:
        return self._many(self._client.get(self._url("type", category_type)))

    def with_books(self) -> List[Category]:
        return self._many(self._client.get(self._url("with-books")))

    def check_name_availability(self, name: str) -> bool:
        return bool(self._client.get(self._url("check-name"), {"name": name}))


class CustomerResource(Resource[Customer]):
    path = "/customers"
    model = Customer

    def get_by_email(self, email: str) -> Optional[Customer]:
        return self._one(self._client.get(self._url("email", email)))

    def by_type(self, customer_type: CustomerType) -> List[Customer]:
        return self._many(self._client.get(self._url("type", customer_type)))

    def search(self, params: SearchRequest) -> PageResponse[Customer]:
        return self._page(self._client.get(self._url("search"), params.to_wire()))

    def check_email_availability(self, email: str) -> bool:
        return bool(self._client.get(self._url("check-email"), {"email": email}))


class OrderResource(Resource[Order]):
    path = "/orders"
    model = Order

    def get_by_order_number(self, order_number: str) -> Optional[Order]:
        return self._one(self._client.get(self._url("order-number", order_number)))

    def by_customer(self, customer_id: int) -> List[Order]:
        return self._many(self._client.get(self._url("customer", customer_id)))

    def by_status(self, status: OrderStatus) -> List[Order]:
        return self._many(self._client.get(self._url("status", status)))

    def recent(self) -> List[Order]:
        return self._many(self._client.get(self._url("recent")))

    def search(self, params: SearchRequest) -> PageResponse[Order]:
        return self._page(self._client.get(self._url("search"), params.to_wire()))

    def update_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        return self._one(self._client.put(self._url(order_id, "status"), params={"status": status}))

    def update_payment_status(self, order_id: int, payment_status: PaymentStatus) -> Optional[Order]:
        return self._one(
            self._client.put(
                self._url(order_id, "payment-status"),
                params={"paymentStatus": payment_status},
            )
        )

    def cancel(self, order_id: int) -> None:
        self.delete(order_id)

    def total_sales(self) -> float:
        path = self._url("analytics", "total-sales")
        data = self._client.get(path)
        with _parsing(path):
            return float(data or 0)

    def sales_by_date_range(self, start_date: str, end_date: str) -> float:
        data = self._client.get(
            self._url("analytics", "sales-by-date-range"),
            {"startDate": start_date, "endDate": end_date},
        )
        with _parsing(self.path):
            return float(data or 0)


class UserResource(Resource[User]):
    path = "/users"
    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        return self._one(self._client.get(self._url("email", email)))

    def by_role(self, role: Role) -> List[User]:
        return self._many(self._client.get(self._url("role", role)))

    def active(self) -> List[User]:
        return self._many(self._client.get(self._url("active")))

    def update_password(self, user_id: int, current_password: str, new_password: str) -> None:
        self._client.put(
            self._url(user_id, "password"),
            {"currentPassword": current_password, "newPassword": new_password},
        )

    def check_email_availability(self, email: str) -> bool:
        return bool(self._client.get(self._url("check-email"), {"email": email}))
