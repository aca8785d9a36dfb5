"""Search-box filtering for the back-office tables."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..models import Book, Category, Customer, User
from ..storefront.filters import contains


def search_books(books: Iterable[Book], term: Optional[str]) -> List[Book]:
    return [
        b for b in books
        if contains(b.title, term) or contains(b.author, term) or contains(b.subject, term)
    ]


def search_categories(categories: Iterable[Category], term: Optional[str]) -> List[Category]:
    return [
        c for c in categories
        if contains(c.name, term) or (c.description is not None and contains(c.description, term))
    ]


def search_customers(customers: Iterable[Customer], term: Optional[str]) -> List[Customer]:
    # Phone numbers are matched as typed, without case folding or trimming.
    return [
        c for c in customers
        if contains(c.name, term) or contains(c.email, term) or (term or "") in c.phone
    ]


def search_users(users: Iterable[User], term: Optional[str]) -> List[User]:
    return [
        u for u in users
        if contains(u.name, term) or contains(u.email, term) or contains(u.role.value, term)
    ]
