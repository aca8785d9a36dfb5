"""
Back-office management of books and categories.

Endpoints under /api/admin:
- GET    /books                 : list, optionally narrowed by a search term
- GET    /books/low-stock       : backend low-stock report
- GET    /books/bestsellers     : backend best-seller report
- GET    /books/{book_id}       : one book
- POST   /books                 : create
- PUT    /books/{book_id}       : update
- PUT    /books/{book_id}/stock : set the stock quantity
- DELETE /books/{book_id}       : delete
- the same list/get/create/update/delete set under /categories, plus
  GET /categories/check-name
"""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..backend import BackendClient, get_backend
from ..errors import notify_failure
from ..forms import BookForm, CategoryForm, StockForm
from ..models import ApiResponse, Book, Category
from .common import found_or_404
from .schemas import Availability
from .search import search_books, search_categories

router = APIRouter()


# -- books -----------------------------------------------------------------


@router.get("/books", response_model=ApiResponse[List[Book]])
def list_books(
    search: Optional[str] = Query(default=None, description="Title, author or subject"),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load books"):
        books = backend.books.list_all()
    return ApiResponse[List[Book]](data=search_books(books, search))


@router.get("/books/low-stock", response_model=ApiResponse[List[Book]])
def low_stock_books(
    threshold: Optional[int] = Query(default=None, ge=0),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load low stock books"):
        books = backend.books.low_stock(threshold)
    return ApiResponse[List[Book]](data=books)


@router.get("/books/bestsellers", response_model=ApiResponse[List[Book]])
def best_sellers(
    limit: Optional[int] = Query(default=None, ge=1),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load best sellers"):
        books = backend.books.best_sellers(limit)
    return ApiResponse[List[Book]](data=books)


@router.get("/books/{book_id}", response_model=ApiResponse[Book])
def get_book(book_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load book"):
        book = backend.books.get(book_id)
    return ApiResponse[Book](data=found_or_404(book, "Book"))


@router.post("/books", response_model=ApiResponse[Book], status_code=201)
def create_book(form: BookForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to create book"):
        book = backend.books.create(form.to_wire())
    return ApiResponse[Book](data=book, message="Book created successfully!")


@router.put("/books/{book_id}", response_model=ApiResponse[Book])
def update_book(book_id: int, form: BookForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update book"):
        book = backend.books.update(book_id, form.to_wire())
    return ApiResponse[Book](data=book, message="Book updated successfully!")


@router.put("/books/{book_id}/stock", response_model=ApiResponse[int])
def update_stock(book_id: int, form: StockForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update stock"):
        backend.books.update_stock(book_id, form.quantity)
    return ApiResponse[int](data=form.quantity, message="Stock updated successfully!")


@router.delete("/books/{book_id}", response_model=ApiResponse[int])
def delete_book(book_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to delete book"):
        backend.books.delete(book_id)
    return ApiResponse[int](data=book_id, message="Book deleted successfully!")


# -- categories ------------------------------------------------------------


@router.get("/categories", response_model=ApiResponse[List[Category]])
def list_categories(
    search: Optional[str] = Query(default=None, description="Name or description"),
    backend: BackendClient = Depends(get_backend),
):
    with notify_failure("Failed to load categories"):
        categories = backend.categories.list_all()
    return ApiResponse[List[Category]](data=search_categories(categories, search))


@router.get("/categories/check-name", response_model=ApiResponse[Availability])
def check_category_name(name: str = Query(..., min_length=1), backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to check category name"):
        available = backend.categories.check_name_availability(name)
    return ApiResponse[Availability](data=Availability(available=available))


@router.get("/categories/{category_id}", response_model=ApiResponse[Category])
def get_category(category_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to load category"):
        category = backend.categories.get(category_id)
    return ApiResponse[Category](data=found_or_404(category, "Category"))


@router.post("/categories", response_model=ApiResponse[Category], status_code=201)
def create_category(form: CategoryForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to create category"):
        category = backend.categories.create(form.to_payload(creating=True))
    return ApiResponse[Category](data=category, message="Category created successfully!")


@router.put("/categories/{category_id}", response_model=ApiResponse[Category])
def update_category(category_id: int, form: CategoryForm, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to update category"):
        category = backend.categories.update(category_id, form.to_payload())
    return ApiResponse[Category](data=category, message="Category updated successfully!")


@router.delete("/categories/{category_id}", response_model=ApiResponse[int])
def delete_category(category_id: int, backend: BackendClient = Depends(get_backend)):
    with notify_failure("Failed to delete category"):
        backend.categories.delete(category_id)
    return ApiResponse[int](data=category_id, message="Category deleted successfully!")
