"""
Back-office router.

Collects the management endpoints of ``catalog``, ``people`` and
``orders`` under /api/admin and adds the two summary screens:
- GET /dashboard : collection sizes, low-stock and recent books
- GET /analytics : sales figures, orders per status, best sellers
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..backend import BackendClient, get_backend
from ..errors import notify_failure
from ..models import ApiResponse
from . import catalog, orders, people
from .dashboard import dashboard_summary, orders_by_status, top_subject
from .schemas import Analytics, DashboardSummary

router = APIRouter(prefix="/api/admin", tags=["admin"])
router.include_router(catalog.router)
router.include_router(people.router)
router.include_router(orders.router)

BEST_SELLERS_SHOWN = 5


@router.get("/dashboard", response_model=ApiResponse[DashboardSummary])
def dashboard(backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load dashboard"):
        summary = dashboard_summary(
            books=backend.books.list_all(),
            categories=backend.categories.list_all(),
            customers=backend.customers.list_all(),
            orders=backend.orders.list_all(),
        )
    return ApiResponse[DashboardSummary](data=summary)


@router.get("/analytics", response_model=ApiResponse[Analytics])
def analytics(
    start_date: Optional[str] = Query(default=None, description="ISO date, inclusive"),
    end_date: Optional[str] = Query(default=None, description="ISO date, inclusive"),
    backend: BackendClient = Depends(get_backend),
):
    """Sales overview; the date-range figure is only fetched when both bounds are given."""
    if (start_date is None) != (end_date is None):
        raise HTTPException(status_code=400, detail="Both start_date and end_date are required")
    with notify_failure("Failed to load analytics"):
        books = backend.books.list_all()
        report = Analytics(
            total_sales=backend.orders.total_sales(),
            orders_by_status=orders_by_status(backend.orders.list_all()),
            best_sellers=backend.books.best_sellers(BEST_SELLERS_SHOWN),
            top_subject=top_subject(books),
        )
        if start_date and end_date:
            report.sales_in_range = backend.orders.sales_by_date_range(start_date, end_date)
    return ApiResponse[Analytics](data=report)
