"""
Form validation.

These models check submitted form data before any backend call, only
so that the user gets a readable message next to the offending field.
They do not replace the backend's own validation: uniqueness, stock
and referential checks still happen there.

Error messages are raised as ``PydanticCustomError`` so that the text
reaches the client verbatim (no "Value error," prefix).
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from pydantic import ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .models import (
    Board,
    CategoryType,
    CreateOrderRequest,
    CustomerType,
    OrderLine,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    Role,
    WireModel,
)

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PHONE_LENGTH = 10
MIN_PASSWORD_LENGTH = 6

CONTACT_SUBJECTS: Dict[str, str] = {
    "general": "General Inquiry",
    "order": "Order Related",
    "books": "Book Availability",
    "shipping": "Shipping & Delivery",
    "return": "Return & Refund",
    "bulk": "Bulk Orders",
    "other": "Other",
}


def _required(value: Optional[str], label: str) -> str:
    if value is None or not value.strip():
        raise PydanticCustomError("required", "{label} is required", {"label": label})
    return value


def _email(value: Optional[str]) -> str:
    if not value or not EMAIL_RE.match(value):
        raise PydanticCustomError("email", "Invalid email format")
    return value


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class FormModel(WireModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


class BookForm(FormModel):
    title: str = ""
    author: str = ""
    description: Optional[str] = None
    image: Optional[str] = None
    price: float = 0.0
    mrp: float = 0.0
    discount: Optional[float] = None
    quantity: int = 0
    grade: int = 0
    subject: str = ""
    board: Board = Board.CBSE
    isbn: Optional[str] = None
    publisher: Optional[str] = None
    edition: Optional[str] = None
    language: Optional[str] = None
    category_id: Optional[int] = None

    @field_validator("title", "author", "subject")
    @classmethod
    def _check_required(cls, value, info):
        return _required(value, info.field_name.capitalize())

    @field_validator("description", "image", "isbn", "publisher", "edition", "language", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    @field_validator("price")
    @classmethod
    def _check_price(cls, value):
        if value <= 0:
            raise PydanticCustomError("min", "Price must be greater than 0")
        return value

    @field_validator("mrp")
    @classmethod
    def _check_mrp(cls, value):
        if value <= 0:
            raise PydanticCustomError("min", "MRP must be greater than 0")
        return value

    @field_validator("discount")
    @classmethod
    def _check_discount(cls, value):
        if value is not None and value < 0:
            raise PydanticCustomError("min", "Discount cannot be negative")
        return value

    @field_validator("quantity")
    @classmethod
    def _check_quantity(cls, value):
        if value < 0:
            raise PydanticCustomError("min", "Quantity cannot be negative")
        return value

    @field_validator("grade")
    @classmethod
    def _check_grade(cls, value):
        if value < 1:
            raise PydanticCustomError("min", "Grade must be at least 1")
        return value


class CategoryForm(FormModel):
    name: str = ""
    description: Optional[str] = None
    category_type: Optional[CategoryType] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        return _required(value, "Name")

    @field_validator("description", "category_type", mode="before")
    @classmethod
    def _optional(cls, value):
        return _blank_to_none(value)

    def to_payload(self, creating: bool = False) -> Dict[str, Any]:
        payload = self.to_wire()
        if creating:
            payload.setdefault("categoryType", CategoryType.SUBJECT.value)
        return payload


class CustomerForm(FormModel):
    name: str = ""
    email: str = ""
    phone: str = ""
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

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        return _required(value, "Name")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        return _email(value)

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value):
        if len(value or "") < MIN_PHONE_LENGTH:
            raise PydanticCustomError(
                "min_length",
                "Phone number must be at least {min} digits",
                {"min": MIN_PHONE_LENGTH},
            )
        return value

    @field_validator(
        "address", "city", "state", "pincode", "country",
        "institution_name", "contact_person", "gst_number",
        mode="before",
    )
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    @model_validator(mode="after")
    def _institution_fields(self):
        # Only schools and institutions carry an institution name and contact.
        if self.customer_type not in (CustomerType.SCHOOL, CustomerType.INSTITUTION):
            self.institution_name = None
            self.contact_person = None
        return self

    def to_payload(self, creating: bool = False) -> Dict[str, Any]:
        payload = self.to_wire()
        if creating:
            payload.setdefault("country", "India")
        return payload


class UserForm(FormModel):
    name: str = ""
    email: str = ""
    password: Optional[str] = None
    phone: Optional[str] = None
    role: Role = Role.STAFF
    is_active: bool = True
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        return _required(value, "Name")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        return _email(value)

    @field_validator("password", "phone", "address", "city", "state", "zip", "country", mode="before")
    @classmethod
    def _optional_text(cls, value):
        return _blank_to_none(value)

    @field_validator("password")
    @classmethod
    def _check_password(cls, value):
        if value is not None and len(value) < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "min_length",
                "Password must be at least {min} characters",
                {"min": MIN_PASSWORD_LENGTH},
            )
        return value


class UserCreateForm(UserForm):
    password: Optional[str] = None

    @field_validator("password")
    @classmethod
    def _password_given(cls, value):
        if not value:
            raise PydanticCustomError("required", "Password is required")
        return value


class PasswordChangeForm(FormModel):
    current_password: str = ""
    new_password: str = ""

    @field_validator("current_password")
    @classmethod
    def _check_current(cls, value):
        return _required(value, "Current password")

    @field_validator("new_password")
    @classmethod
    def _check_new(cls, value):
        if len(value or "") < MIN_PASSWORD_LENGTH:
            raise PydanticCustomError(
                "min_length",
                "Password must be at least {min} characters",
                {"min": MIN_PASSWORD_LENGTH},
            )
        return value


class StockForm(FormModel):
    quantity: int

    @field_validator("quantity")
    @classmethod
    def _check_quantity(cls, value):
        if value < 0:
            raise PydanticCustomError("min", "Quantity cannot be negative")
        return value


class OrderLineForm(FormModel):
    book_id: int
    quantity: int = 1
    unit_price: float = 0.0

    @field_validator("quantity")
    @classmethod
    def _check_quantity(cls, value):
        if value < 1:
            raise PydanticCustomError("min", "Quantity must be at least 1")
        return value

    @field_validator("unit_price")
    @classmethod
    def _check_price(cls, value):
        if value < 0:
            raise PydanticCustomError("min", "Unit price cannot be negative")
        return value


class OrderForm(FormModel):
    customer_id: int = 0
    order_items: List[OrderLineForm] = Field(default_factory=list)
    delivery_address: Optional[str] = None
    delivery_city: Optional[str] = None
    delivery_state: Optional[str] = None
    delivery_pincode: Optional[str] = None
    contact_phone: Optional[str] = None
    notes: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.CASH_ON_DELIVERY

    @field_validator("customer_id")
    @classmethod
    def _check_customer(cls, value):
        if value < 1:
            raise PydanticCustomError("required", "Customer is required")
        return value

    @field_validator("order_items")
    @classmethod
    def _check_items(cls, value):
        if not value:
            raise PydanticCustomError("required", "Add at least one book to the order")
        return value

    def to_request(self) -> CreateOrderRequest:
        return CreateOrderRequest(
            customer_id=self.customer_id,
            order_items=[
                OrderLine(book_id=i.book_id, quantity=i.quantity, unit_price=i.unit_price)
                for i in self.order_items
            ],
            delivery_address=self.delivery_address,
            delivery_city=self.delivery_city,
            delivery_state=self.delivery_state,
            delivery_pincode=self.delivery_pincode,
            contact_phone=self.contact_phone,
            notes=self.notes,
            payment_method=self.payment_method,
        )


class OrderStatusForm(FormModel):
    status: OrderStatus


class PaymentStatusForm(FormModel):
    payment_status: PaymentStatus


class ContactForm(FormModel):
    name: str = ""
    email: str = ""
    phone: Optional[str] = None
    subject: str = ""
    message: str = ""

    @field_validator("name")
    @classmethod
    def _check_name(cls, value):
        return _required(value, "Name")

    @field_validator("email")
    @classmethod
    def _check_email(cls, value):
        return _email(value)

    @field_validator("phone", mode="before")
    @classmethod
    def _optional_phone(cls, value):
        return _blank_to_none(value)

    @field_validator("subject")
    @classmethod
    def _check_subject(cls, value):
        if value not in CONTACT_SUBJECTS:
            raise PydanticCustomError("choice", "Please select a subject")
        return value

    @field_validator("message")
    @classmethod
    def _check_message(cls, value):
        return _required(value, "Message")
