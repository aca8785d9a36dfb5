"""
Record types shared by the storefront and the back-office.

These models mirror the entities served by the bookshop REST backend.
On the wire every field is camelCase (``createdAt``, ``isActive``,
``categoryId``); in Python the same fields are snake_case. Models are
populated from either spelling, and FastAPI serialises them back to
camelCase so that responses look exactly like the backend's own.

The backend is the authority for every real invariant (uniqueness,
stock non-negativity, order totals). Nothing here enforces more than
field types; form validation lives in ``bookshop.forms``.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Board(str, Enum):
    CBSE = "CBSE"
    ICSE = "ICSE"
    STATE_BOARD = "STATE_BOARD"
    IGCSE = "IGCSE"
    IB = "IB"
    NCERT = "NCERT"


class CategoryType(str, Enum):
    GRADE_LEVEL = "GRADE_LEVEL"
    SUBJECT = "SUBJECT"
    BOOK_TYPE = "BOOK_TYPE"
    BOARD = "BOARD"
    LANGUAGE = "LANGUAGE"


class CustomerType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    SCHOOL = "SCHOOL"
    INSTITUTION = "INSTITUTION"
    BULK_BUYER = "BULK_BUYER"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class PaymentMethod(str, Enum):
    CASH_ON_DELIVERY = "CASH_ON_DELIVERY"
    ONLINE_PAYMENT = "ONLINE_PAYMENT"
    BANK_TRANSFER = "BANK_TRANSFER"
    UPI = "UPI"
    CREDIT_CARD = "CREDIT_CARD"
    DEBIT_CARD = "DEBIT_CARD"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIAL = "PARTIAL"


class Role(str, Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    STAFF = "STAFF"
    INVENTORY_MANAGER = "INVENTORY_MANAGER"
    SALES_PERSON = "SALES_PERSON"


class WireModel(BaseModel):
    """Base for every model exchanged with the backend (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Return the JSON payload the backend expects for this record."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Record(WireModel):
    """Server-assigned identity and timestamps, absent on records not yet saved."""

    id: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Category(Record):
    name: str
    description: Optional[str] = None
    category_type: Optional[CategoryType] = None
    is_active: bool = True


class Book(Record):
    title: str
    author: str
    description: Optional[str] = None
    image: Optional[str] = None
    price: float
    mrp: float
    discount: Optional[float] = None
    quantity: int = 0
    grade: int
    subject: str
    board: Board
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    edition: Optional[str] = None
    language: Optional[str] = None
    is_active: bool = True
    category_id: Optional[int] = None
    category: Optional[Category] = None


class Customer(Record):
    name: str
    email: str
    phone: str
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None
    country: Optional[str] = None
    customer_type: CustomerType = CustomerType.INDIVIDUAL
    institution_name: Optional[str] = None
    contact_person: Optional[str] = None
    gst_number: Optional[str] = None
    is_active: bool = True


class OrderItem(Record):
    book_id: Optional[int] = None
    book: Optional[Book] = None
    quantity: int
    unit_price: float
    total_price: float = 0.0
    discount: Optional[float] = None


class Order(Record):
    order_number: Optional[str] = None
    customer_id: Optional[int] = None
    customer: Optional[Customer] = None
    status: OrderStatus = OrderStatus.PENDING
    total_amount: float = 0.0
    discount_amount: float = 0.0
    final_amount: float = 0.0
    order_date: Optional[str] = None
    delivery_date: Optional[str] = None
    delivery_address: Optional[str] = None
    delivery_city: Optional[str] = None
    delivery_state: Optional[str] = None
    delivery_pincode: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    order_items: List[OrderItem] = Field(default_factory=list)


class User(Record):
    name: str
    email: str
    # Write-only: accepted from forms, never serialised back out.
    password: Optional[str] = Field(default=None, exclude=True)
    phone: Optional[str] = None
    role: Role = Role.STAFF
    is_active: bool = True
    last_login: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class OrderLine(WireModel):
    book_id: int
    quantity: int
    unit_price: float


class CreateOrderRequest(WireModel):
    customer_id: int
    order_items: List[OrderLine]
    delivery_address: Optional[str] = None
    delivery_city: Optional[str] = None
    delivery_state: Optional[str] = None
    delivery_pincode: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None


class SearchRequest(WireModel):
    """Query parameters understood by the backend ``/search`` endpoints."""

    title: Optional[str] = None
    author: Optional[str] = None
    grade: Optional[int] = None
    subject: Optional[str] = None
    board: Optional[Board] = None
    order_number: Optional[str] = None
    customer_id: Optional[int] = None
    order_status: Optional[OrderStatus] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    page: Optional[int] = None
    size: Optional[int] = None
    sort_by: Optional[str] = None
    sort_direction: Optional[str] = None


ItemT = TypeVar("ItemT")


class PageResponse(WireModel, Generic[ItemT]):
    content: List[ItemT] = Field(default_factory=list)
    total_elements: int = 0
    total_pages: int = 0
    size: int = 0
    number: int = 0
    first: bool = True
    last: bool = True
    number_of_elements: int = 0
    empty: bool = True


DataT = TypeVar("DataT")


class ApiResponse(WireModel, Generic[DataT]):
    """The ``{success, data, message}`` envelope used in both directions."""

    success: bool = True
    data: Optional[DataT] = None
    message: str = ""
    timestamp: Optional[str] = None
