"""Tests for form validation and payload building."""

import pytest
from pydantic import ValidationError

from bookshop.forms import (
    BookForm,
    CategoryForm,
    ContactForm,
    CustomerForm,
    OrderForm,
    PasswordChangeForm,
    StockForm,
    UserCreateForm,
    UserForm,
)
from bookshop.models import CreateOrderRequest, CustomerType, PaymentMethod


def _messages(form_cls, data) -> list:
    with pytest.raises(ValidationError) as info:
        form_cls.model_validate(data)
    return [e["msg"] for e in info.value.errors()]


VALID_BOOK = {
    "title": "Physics Today",
    "author": "K. Menon",
    "price": 410,
    "mrp": 450,
    "quantity": 3,
    "grade": 11,
    "subject": "Physics",
    "board": "ICSE",
}


class TestBookForm:

    def test_valid_book(self):
        form = BookForm.model_validate({**VALID_BOOK, "categoryId": 2})
        assert form.category_id == 2
        payload = form.to_wire()
        assert payload["categoryId"] == 2
        assert payload["board"] == "ICSE"

    def test_empty_form_lists_every_problem(self):
        messages = _messages(BookForm, {})
        assert messages == [
            "Title is required",
            "Author is required",
            "Price must be greater than 0",
            "MRP must be greater than 0",
            "Grade must be at least 1",
            "Subject is required",
        ]

    def test_whitespace_title_is_missing(self):
        assert _messages(BookForm, {**VALID_BOOK, "title": "   "}) == ["Title is required"]

    def test_negative_quantity_and_discount(self):
        messages = _messages(BookForm, {**VALID_BOOK, "quantity": -1, "discount": -5})
        assert "Quantity cannot be negative" in messages
        assert "Discount cannot be negative" in messages

    def test_board_defaults_to_cbse(self):
        data = dict(VALID_BOOK)
        del data["board"]
        assert BookForm.model_validate(data).board.value == "CBSE"

    def test_blank_optional_text_is_dropped(self):
        form = BookForm.model_validate({**VALID_BOOK, "isbn": "  ", "publisher": ""})
        assert "isbn" not in form.to_wire()
        assert "publisher" not in form.to_wire()


class TestCategoryForm:

    def test_name_required(self):
        assert _messages(CategoryForm, {"name": ""}) == ["Name is required"]

    def test_type_defaults_to_subject_on_create_only(self):
        form = CategoryForm(name="Atlases")
        assert form.to_payload(creating=True)["categoryType"] == "SUBJECT"
        assert "categoryType" not in form.to_payload()

    def test_explicit_type_is_kept(self):
        form = CategoryForm.model_validate({"name": "Grade 4", "categoryType": "GRADE_LEVEL"})
        assert form.to_payload(creating=True)["categoryType"] == "GRADE_LEVEL"


class TestCustomerForm:

    def test_short_phone(self):
        messages = _messages(CustomerForm, {"name": "Asha", "email": "asha@example.com", "phone": "12345"})
        assert messages == ["Phone number must be at least 10 digits"]

    def test_bad_email(self):
        messages = _messages(CustomerForm, {"name": "Asha", "email": "asha@", "phone": "9876543210"})
        assert messages == ["Invalid email format"]

    def test_institution_fields_cleared_for_individuals(self):
        form = CustomerForm.model_validate({
            "name": "Asha",
            "email": "asha@example.com",
            "phone": "9876543210",
            "institutionName": "Somewhere",
            "contactPerson": "Someone",
        })
        assert form.institution_name is None
        assert form.contact_person is None

    def test_institution_fields_kept_for_schools(self):
        form = CustomerForm(
            name="Green Valley School",
            email="office@gvs.edu",
            phone="0112345678",
            customer_type=CustomerType.SCHOOL,
            institution_name="Green Valley School",
            contact_person="Principal",
        )
        assert form.to_wire()["contactPerson"] == "Principal"

    def test_country_defaults_to_india_on_create(self):
        form = CustomerForm(name="Asha", email="asha@example.com", phone="9876543210")
        assert form.to_payload(creating=True)["country"] == "India"
        assert "country" not in form.to_payload()


class TestUserForms:

    def test_password_required_on_create(self):
        messages = _messages(UserCreateForm, {"name": "Sam", "email": "sam@example.com"})
        assert messages == ["Password is required"]

    def test_short_password(self):
        messages = _messages(UserCreateForm, {"name": "Sam", "email": "sam@example.com", "password": "abc"})
        assert "Password must be at least 6 characters" in messages

    def test_password_optional_on_update(self):
        form = UserForm(name="Sam", email="sam@example.com")
        assert "password" not in form.to_wire()

    def test_password_is_sent_when_given(self):
        form = UserCreateForm(name="Sam", email="sam@example.com", password="secret1")
        assert form.to_wire()["password"] == "secret1"
        assert form.to_wire()["role"] == "STAFF"

    def test_password_change(self):
        assert _messages(PasswordChangeForm, {"currentPassword": "", "newPassword": "12345"}) == [
            "Current password is required",
            "Password must be at least 6 characters",
        ]


def test_stock_cannot_be_negative():
    assert _messages(StockForm, {"quantity": -3}) == ["Quantity cannot be negative"]
    assert StockForm(quantity=0).quantity == 0


class TestOrderForm:

    def test_empty_order(self):
        assert _messages(OrderForm, {}) == [
            "Customer is required",
            "Add at least one book to the order",
        ]

    def test_line_checks(self):
        messages = _messages(OrderForm, {
            "customerId": 1,
            "orderItems": [{"bookId": 1, "quantity": 0, "unitPrice": -1}],
        })
        assert messages == ["Quantity must be at least 1", "Unit price cannot be negative"]

    def test_to_request(self):
        form = OrderForm.model_validate({
            "customerId": 2,
            "orderItems": [{"bookId": 4, "quantity": 3, "unitPrice": 320}],
            "deliveryCity": "Pune",
        })
        request = form.to_request()
        assert isinstance(request, CreateOrderRequest)
        assert request.payment_method == PaymentMethod.CASH_ON_DELIVERY
        assert request.to_wire() == {
            "customerId": 2,
            "orderItems": [{"bookId": 4, "quantity": 3, "unitPrice": 320.0}],
            "deliveryCity": "Pune",
            "paymentMethod": "CASH_ON_DELIVERY",
        }


class TestContactForm:

    def test_valid(self):
        form = ContactForm(name="Ravi", email="ravi@example.com", subject="bulk", message="Need 40 copies")
        assert form.phone is None

    def test_subject_must_be_known(self):
        messages = _messages(ContactForm, {
            "name": "Ravi", "email": "ravi@example.com", "subject": "", "message": "Hi",
        })
        assert messages == ["Please select a subject"]

    def test_message_required(self):
        messages = _messages(ContactForm, {
            "name": "Ravi", "email": "ravi@example.com", "subject": "general", "message": "  ",
        })
        assert messages == ["Message is required"]
