"""
Back-office management of customers and staff users.

Endpoints under /api/admin:
- /customers : list (with search), check-email, get, create, update, delete
- /users     : list (with search), stats, check-email, get, create,
               update, delete, change password
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..backend import BackendClient, get_backend
from ..errors import notify_failure
from ..forms import CustomerForm, PasswordChangeForm, UserCreateForm, UserForm
from ..models import ApiResponse, Customer, User
from .common import found_or_404
from .dashboard import user_stats
from .schemas import Availability, UserStats
from .search import search_customers, search_users

router = APIRouter()


# -- customers -------------------------------------------------------------


@router.get("/customers", response_model=ApiResponse[List[Customer]])
def list_customers(
    search: Optional[str] = Query(default=None, description="Name, email or phone"),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load customers"):
        customers = backend.customers.list_all()
    return ApiResponse[List[Customer]](data=search_customers(customers, search))


@router.get("/customers/check-email", response_model=ApiResponse[Availability])
def check_customer_email(email: str = Query(..., min_length=1), backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to check email"):
        available = backend.customers.check_email_availability(email)
    return ApiResponse[Availability](data=Availability(available=available))


@router.get("/customers/{customer_id}", response_model=ApiResponse[Customer])
def get_customer(customer_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load customer"):
        customer = backend.customers.get(customer_id)
    return ApiResponse[Customer](data=found_or_404(customer, "Customer"))


@router.post("/customers", response_model=ApiResponse[Customer], status_code=201)
def create_customer(form: CustomerForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to create customer"):
        customer = backend.customers.create(form.to_payload(creating=True))
    return ApiResponse[Customer](data=customer, message="Customer created successfully!")


@router.put("/customers/{customer_id}", response_model=ApiResponse[Customer])
def update_customer(customer_id: int, form: CustomerForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update customer"):
        customer = backend.customers.update(customer_id, form.to_payload())
    return ApiResponse[Customer](data=customer, message="Customer updated successfully!")


@router.delete("/customers/{customer_id}", response_model=ApiResponse[int])
def delete_customer(customer_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to delete customer"):
        backend.customers.delete(customer_id)
    return ApiResponse[int](data=customer_id, message="Customer deleted successfully!")


# -- users -----------------------------------------------------------------


@router.get("/users", response_model=ApiResponse[List[User]])
def list_users(
    search: Optional[str] = Query(default=None, description="Name, email or role"),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load users"):
        users = backend.users.list_all()
    return ApiResponse[List[User]](data=search_users(users, search))


@router.get("/users/stats", response_model=ApiResponse[UserStats])
def users_overview(backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load users"):
        users = backend.users.list_all()
    return ApiResponse[UserStats](data=user_stats(users))


@router.get("/users/check-email", response_model=ApiResponse[Availability])
def check_user_email(email: str = Query(..., min_length=1), backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to check email"):
        available = backend.users.check_email_availability(email)
    return ApiResponse[Availability](data=Availability(available=available))


@router.get("/users/{user_id}", response_model=ApiResponse[User])
def get_user(user_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load user"):
        user = backend.users.get(user_id)
    return ApiResponse[User](data=found_or_404(user, "User"))


@router.post("/users", response_model=ApiResponse[User], status_code=201)
def create_user(form: UserCreateForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to create user"):
        user = backend.users.create(form.to_wire())
    return ApiResponse[User](data=user, message="User created successfully!")


@router.put("/users/{user_id}", response_model=ApiResponse[User])
def update_user(user_id: int, form: UserForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update user"):
        user = backend.users.update(user_id, form.to_wire())
    return ApiResponse[User](data=user, message="User updated successfully!")


@router.put("/users/{user_id}/password", response_model=ApiResponse[int])
def change_password(user_id: int, form: PasswordChangeForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update password"):
        backend.users.update_password(user_id, form.current_password, form.new_password)
    return ApiResponse[int](data=user_id, message="Password updated successfully!")


@router.delete("/users/{user_id}", response_model=ApiResponse[int])
def delete_user(user_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to delete user"):
        backend.users.delete(user_id)
    return ApiResponse[int](data=user_id, message="User deleted successfully!")
