"""
Aggregates shown on the back-office summary screens.

All functions are pure: they take collections already fetched from the
backend and return counts or short lists, so they can be tested
without a server.
"""

from __future__ import annotations

from collections import Counter, OrderedDict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from ..models import Book, Category, Customer, Order, OrderStatus, Role, User
from .schemas import DashboardSummary, OrderStats, SubjectShare, UserStats

LOW_STOCK_THRESHOLD = 10
RECENT_BOOKS = 5

# Orders in these states do not count towards revenue.
NON_REVENUE_STATUSES = (OrderStatus.CANCELLED, OrderStatus.RETURNED)


def low_stock(books: Iterable[Book], threshold: int = LOW_STOCK_THRESHOLD) -> List[Book]:
    return [b for b in books if b.quantity < threshold]


def dashboard_summary(
    books: Sequence[Book],
    categories: Sequence[Category],
    customers: Sequence[Customer],
    orders: Sequence[Order],
) -> DashboardSummary:
    return DashboardSummary(
        total_books=len(books),
        total_categories=len(categories),
        total_customers=len(customers),
        total_orders=len(orders),
        books_in_stock=sum(1 for b in books if b.quantity > 0),
        active_categories=sum(1 for c in categories if c.is_active),
        active_customers=sum(1 for c in customers if c.is_active),
        low_stock_books=low_stock(books),
        recent_books=list(books[:RECENT_BOOKS]),
    )


def _day(timestamp: Optional[str]) -> Optional[str]:
    # ISO timestamps start with YYYY-MM-DD.
    if not timestamp or len(timestamp) < 10:
        return None
    return timestamp[:10]


def order_stats(orders: Iterable[Order], today: Optional[date] = None) -> OrderStats:
    """Count orders and sum revenue.

    An order is "today's" when its order date, or failing that its
    creation time, falls on ``today``. Revenue is the sum of final
    amounts over orders that were neither cancelled nor returned.
    """
    today_str = (today or date.today()).isoformat()
    orders = list(orders)
    return OrderStats(
        total_orders=len(orders),
        todays_orders=sum(1 for o in orders if _day(o.order_date or o.created_at) == today_str),
        pending_orders=sum(1 for o in orders if o.status == OrderStatus.PENDING),
        total_revenue=round(
            sum(o.final_amount for o in orders if o.status not in NON_REVENUE_STATUSES), 2
        ),
    )


def orders_by_status(orders: Iterable[Order]) -> Dict[str, int]:
    """Order count per status, listing every status (zero included)."""
    counts = Counter(o.status for o in orders)
    return OrderedDict((s.value, counts.get(s, 0)) for s in OrderStatus)


def user_stats(users: Iterable[User]) -> UserStats:
    users = list(users)
    return UserStats(
        total_users=len(users),
        active_users=sum(1 for u in users if u.is_active),
        admins=sum(1 for u in users if u.role == Role.ADMIN),
    )


def top_subject(books: Sequence[Book]) -> Optional[SubjectShare]:
    """The subject with the most books; ties go to the first one seen."""
    if not books:
        return None
    counts = Counter(b.subject for b in books)
    subject, count = counts.most_common(1)[0]
    return SubjectShare(
        subject=subject,
        book_count=count,
        share=round(100.0 * count / len(books), 1),
    )
