"""
In-memory filtering and sorting of the catalogue.

The shop fetches the whole book collection once and narrows it down
locally: free-text search, board/grade/subject filters and a price
range, followed by one of a handful of sort orders. The same helpers
back the category browser, which groups categories by type and counts
the books that look like they belong to each one.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Tuple

from ..models import Book, Category
from .schemas import ShopFilters

# Quantities above this are "in stock"; 1..LOW_STOCK_LIMIT are "low stock".
LOW_STOCK_LIMIT = 10

# Subjects offered as quick links and grades shown in the "shop by grade" grid.
QUICK_SUBJECTS = ("Mathematics", "Science", "English", "History", "Geography", "Hindi")
SHOP_GRADES = tuple(range(1, 13))


def _normalize(s: Optional[str]) -> str:
    return (s or "").strip().lower()


def contains(haystack: Optional[str], needle: Optional[str]) -> bool:
    """Case-insensitive substring test; an empty needle matches everything."""
    n = _normalize(needle)
    if not n:
        return True
    return n in _normalize(haystack)


def matches(book: Book, filters: ShopFilters) -> bool:
    """Return True when ``book`` passes every filter that is set."""
    term = _normalize(filters.search)
    if term and not (
        contains(book.title, term)
        or contains(book.author, term)
        or contains(book.subject, term)
    ):
        return False
    if filters.board is not None and book.board != filters.board:
        return False
    if filters.grade is not None and book.grade != filters.grade:
        return False
    if filters.subject and not contains(book.subject, filters.subject):
        return False
    if filters.min_price is not None and book.price < filters.min_price:
        return False
    if filters.max_price is not None and book.price > filters.max_price:
        return False
    return True


def sort_books(books: Iterable[Book], sort: str) -> List[Book]:
    """Sort a copy of ``books``.

    Parameters
    ----------
    books : Iterable[Book]
        Books to sort. The input is not modified.
    sort : str
        ``name`` (title, case-insensitive), ``price-low``,
        ``price-high`` or ``grade``. Any other value keeps the
        original order.

    Returns
    -------
    List[Book]
        The sorted books. Sorting is stable, so ties keep the order
        they had in the backend's response.
    """
    items = list(books)
    if sort == "name":
        items.sort(key=lambda b: _normalize(b.title))
    elif sort == "price-low":
        items.sort(key=lambda b: b.price)
    elif sort == "price-high":
        items.sort(key=lambda b: b.price, reverse=True)
    elif sort == "grade":
        items.sort(key=lambda b: b.grade)
    return items


def filter_books(books: Iterable[Book], filters: ShopFilters) -> List[Book]:
    """Apply ``filters`` then sort by ``filters.sort``."""
    return sort_books((b for b in books if matches(b, filters)), filters.sort)


def subject_facets(books: Iterable[Book]) -> List[str]:
    """Distinct subjects, in the order they first appear."""
    return list(OrderedDict.fromkeys(b.subject for b in books))


def grade_facets(books: Iterable[Book]) -> List[int]:
    return sorted({b.grade for b in books})


def stock_status(quantity: int) -> str:
    if quantity > LOW_STOCK_LIMIT:
        return "in_stock"
    if quantity > 0:
        return "low_stock"
    return "out_of_stock"


def category_book_count(category: Category, books: Iterable[Book]) -> int:
    """Count books whose subject or title mentions the category name."""
    name = category.name
    return sum(1 for b in books if contains(b.subject, name) or contains(b.title, name))


def subject_book_counts(books: Iterable[Book], subjects: Iterable[str] = QUICK_SUBJECTS) -> List[Tuple[str, int]]:
    books = list(books)
    return [(s, sum(1 for b in books if contains(b.subject, s))) for s in subjects]


def grade_book_counts(books: Iterable[Book], grades: Iterable[int] = SHOP_GRADES) -> List[Tuple[int, int]]:
    """Books per grade, listing every grade in ``grades`` (zero included)."""
    books = list(books)
    return [(g, sum(1 for b in books if b.grade == g)) for g in grades]


def filter_categories(categories: Iterable[Category], search: Optional[str]) -> List[Category]:
    """Active categories whose name or description contains ``search``."""
    term = _normalize(search)
    result = []
    for c in categories:
        if not c.is_active:
            continue
        if term and not (contains(c.name, term) or (c.description and contains(c.description, term))):
            continue
        result.append(c)
    return result


def group_by_type(categories: Iterable[Category]) -> Dict[str, List[Category]]:
    """Group categories by their type; untyped ones go under ``OTHER``."""
    groups: Dict[str, List[Category]] = OrderedDict()
    for c in categories:
        key = c.category_type.value if c.category_type is not None else "OTHER"
        groups.setdefault(key, []).append(c)
    return groups
