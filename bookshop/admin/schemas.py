"""Response shapes for the back-office summary screens."""

from typing import Dict, List, Optional

from pydantic import Field

from ..models import Book, WireModel


class DashboardSummary(WireModel):
    total_books: int
    total_categories: int
    total_customers: int
    total_orders: int
    books_in_stock: int = 0
    active_categories: int = 0
    active_customers: int = 0
    low_stock_books: List[Book] = Field(default_factory=list)
    recent_books: List[Book] = Field(default_factory=list)


class OrderStats(WireModel):
    total_orders: int
    todays_orders: int
    pending_orders: int
    total_revenue: float


class UserStats(WireModel):
    total_users: int
    active_users: int
    admins: int


class SubjectShare(WireModel):
    subject: str
    book_count: int
    # Share of the catalogue, in percent.
    share: float


class Analytics(WireModel):
    total_sales: float
    sales_in_range: Optional[float] = None
    orders_by_status: Dict[str, int] = Field(default_factory=dict)
    best_sellers: List[Book] = Field(default_factory=list)
    top_subject: Optional[SubjectShare] = None


class Availability(WireModel):
    available: bool
