"""
Route definitions for the storefront.

Endpoints under /api/shop:
- GET  /home              : featured books and catalogue size
- GET  /books             : whole catalogue, filtered and sorted locally
- GET  /books/{book_id}   : one book
- GET  /categories        : active categories grouped by type, with book counts,
                            plus per-subject and per-grade book counts
- GET  /contact/subjects  : subjects offered by the contact form
- POST /contact           : store a "contact us" message
"""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..backend import BackendClient, get_backend
from ..errors import ApiError, notify_failure
from ..forms import CONTACT_SUBJECTS, ContactForm
from ..models import ApiResponse, Board, Book
from .contact_store import ContactStore, get_contact_store
from .filters import (
    category_book_count,
    filter_books,
    filter_categories,
    grade_book_counts,
    grade_facets,
    group_by_type,
    stock_status,
    subject_book_counts,
    subject_facets,
)
from .schemas import (
    CategoriesPage,
    CategoryCard,
    CategoryGroup,
    ContactReceipt,
    ContactSubject,
    GradeCount,
    HomePage,
    ShopBook,
    ShopFilters,
    ShopResults,
    SubjectCount,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/shop", tags=["shop"])

FEATURED_COUNT = 8
CONTACT_THANKS = "Thank you for your message! We will get back to you soon."


def to_shop_book(book: Book) -> ShopBook:
    return ShopBook(
        **book.model_dump(),
        stock_status=stock_status(book.quantity),
        on_sale=book.mrp > book.price,
    )


@router.get("/home", response_model=ApiResponse[HomePage])
def home(backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load books"):
        books = backend.books.list_all()
    page = HomePage(
        featured=[to_shop_book(b) for b in books[:FEATURED_COUNT]],
        catalog_size=len(books),
    )
    return ApiResponse[HomePage](data=page)


@router.get("/books", response_model=ApiResponse[ShopResults])
def list_books(
    search: Optional[str] = Query(default=None, description="Title, author or subject"),
    board: Optional[Board] = Query(default=None),
    grade: Optional[int] = Query(default=None, ge=1),
    subject: Optional[str] = Query(default=None),
    min_price: Optional[float] = Query(default=None, ge=0),
    max_price: Optional[float] = Query(default=None, ge=0),
    sort: str = Query(default="name", description="name, price-low, price-high or grade"),
    backend: BackendClient = Depends(get_backend),
):
    """Return the catalogue narrowed down by the shopper's filters.

    The facets (subjects and grades) are computed over the whole
    catalogue, not the filtered subset, so that the filter panel keeps
    offering every option.
    """
    filters = ShopFilters(
        search=search,
        board=board,
        grade=grade,
        subject=subject,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
    )
    with notify_failure("Failed to load books"):
        books = backend.books.list_all()
    shown = filter_books(books, filters)
    results = ShopResults(
        items=[to_shop_book(b) for b in shown],
        shown=len(shown),
        total=len(books),
        subjects=subject_facets(books),
        grades=grade_facets(books),
    )
    return ApiResponse[ShopResults](data=results)


@router.get("/books/{book_id}", response_model=ApiResponse[ShopBook])
def get_book(book_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load book"):
        book = backend.books.get(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return ApiResponse[ShopBook](data=to_shop_book(book))


@router.get("/categories", response_model=ApiResponse[CategoriesPage])
def list_categories(
    search: Optional[str] = Query(default=None, description="Name or description"),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load categories"):
        categories = backend.categories.list_all()
        books = backend.books.list_all()
    visible = filter_categories(categories, search)
    groups = [
        CategoryGroup(
            category_type=category_type,
            categories=[
                CategoryCard(**c.model_dump(), book_count=category_book_count(c, books))
                for c in members
            ],
        )
        for category_type, members in group_by_type(visible).items()
    ]
    page = CategoriesPage(
        groups=groups,
        subjects=[SubjectCount(subject=s, book_count=n) for s, n in subject_book_counts(books)],
        grades=[GradeCount(grade=g, book_count=n) for g, n in grade_book_counts(books)],
    )
    return ApiResponse[CategoriesPage](data=page)


@router.get("/contact/subjects", response_model=ApiResponse[List[ContactSubject]])
def contact_subjects():
    subjects = [ContactSubject(value=k, label=v) for k, v in CONTACT_SUBJECTS.items()]
    return ApiResponse[List[ContactSubject]](data=subjects)


@router.post("/contact", response_model=ApiResponse[ContactReceipt])
def submit_contact(form: ContactForm, store: ContactStore = Depends(get_contact_store)):
    with notify_failure("Failed to send message"):
        try:
            receipt = store.save(form)
        except OSError as exc:
            logger.error("Could not store contact message in %s: %s", store.path, exc)
            raise ApiError(status_code=500) from exc
    return ApiResponse[ContactReceipt](data=receipt, message=CONTACT_THANKS)
