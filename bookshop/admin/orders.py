"""
Back-office order handling.

Endpoints under /api/admin/orders:
- GET    /                          : list, optionally by status
- GET    /stats                     : totals for the orders screen
- GET    /recent                    : backend's recent orders
- GET    /{order_id}                : one order
- POST   /                          : place an order for a customer
- PUT    /{order_id}/status         : move the order to another status
- PUT    /{order_id}/payment-status : record a payment status
- DELETE /{order_id}                : cancel

Order workflow rules (which transitions are allowed, totals, stock
reservation) belong to the backend; these handlers only forward.
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..backend import BackendClient, get_backend
from ..errors import notify_failure
from ..forms import OrderForm, OrderStatusForm, PaymentStatusForm
from ..models import ApiResponse, Order, OrderStatus
from .common import found_or_404
from .dashboard import order_stats
from .schemas import OrderStats

router = APIRouter(prefix="/orders")


@router.get("", response_model=ApiResponse[List[Order]])
def list_orders(
    status: Optional[OrderStatus] = Query(default=None),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load orders"):
        if status is None:
            orders = backend.orders.list_all()
        else:
            orders = backend.orders.by_status(status)
    return ApiResponse[List[Order]](data=orders)


@router.get("/stats", response_model=ApiResponse[OrderStats])
def orders_overview(backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load orders"):
        orders = backend.orders.list_all()
    return ApiResponse[OrderStats](data=order_stats(orders))


@router.get("/recent", response_model=ApiResponse[List[Order]])
def recent_orders(backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load orders"):
        orders = backend.orders.recent()
    return ApiResponse[List[Order]](data=orders)


@router.get("/{order_id}", response_model=ApiResponse[Order])
def get_order(order_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load order"):
        order = backend.orders.get(order_id)
    return ApiResponse[Order](data=found_or_404(order, "Order"))


@router.post("", response_model=ApiResponse[Order], status_code=201)
def create_order(form: OrderForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to create order"):
        order = backend.orders.create(form.to_request())
    return ApiResponse[Order](data=order, message="Order created successfully!")


@router.put("/{order_id}/status", response_model=ApiResponse[Order])
def update_order_status(order_id: int, form: OrderStatusForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update order status"):
        order = backend.orders.update_status(order_id, form.status)
    return ApiResponse[Order](data=order, message="Order status updated successfully!")


@router.put("/{order_id}/payment-status", response_model=ApiResponse[Order])
def update_payment_status(
    order_id: int,
    form: PaymentStatusForm,
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to update payment status"):
        order = backend.orders.update_payment_status(order_id, form.payment_status)
    return ApiResponse[Order](data=order, message="Payment status updated successfully!")


@router.delete("/{order_id}", response_model=ApiResponse[int])
def cancel_order(order_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to cancel order"):
        backend.orders.cancel(order_id)
    return ApiResponse[int](data=order_id, message="Order cancelled successfully!")
