"""
Response shapes for the storefront.

``ShopBook`` extends the backend ``Book`` with two derived display
fields (stock status and whether the book is discounted). The other
models bundle a list with the counts and facets the shop page shows
next to it.
"""

from typing import List, Optional

from pydantic import BaseModel, Field
from typing_extensions import Literal

from ..models import Board, Book, Category, WireModel

StockStatus = Literal["in_stock", "low_stock", "out_of_stock"]


class ShopFilters(BaseModel):
    """Filters a shopper can set on the catalogue page.

    Unset fields do not filter. ``search`` matches title, author or
    subject; ``subject`` is a substring match; the price bounds are
    inclusive.
    """

    search: Optional[str] = None
    board: Optional[Board] = None
    grade: Optional[int] = None
    subject: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort: str = "name"


class ShopBook(Book):
    stock_status: StockStatus = "out_of_stock"
    on_sale: bool = False


class ShopResults(WireModel):
    """Filtered books plus the facets used to build the filter panel.

    ``shown`` is the number of books after filtering and ``total`` the
    size of the whole catalogue, as in "Showing 12 of 240 books".
    """

    items: List[ShopBook]
    shown: int
    total: int
    subjects: List[str] = Field(default_factory=list)
    grades: List[int] = Field(default_factory=list)
    boards: List[Board] = Field(default_factory=lambda: list(Board))


class HomePage(WireModel):
    featured: List[ShopBook]
    catalog_size: int


class CategoryCard(Category):
    book_count: int = 0


class CategoryGroup(WireModel):
    category_type: str
    categories: List[CategoryCard]


class ContactSubject(WireModel):
    value: str
    label: str


class ContactReceipt(WireModel):
    id: str
    received_at: str


class SubjectCount(WireModel):
    subject: str
    book_count: int


class GradeCount(WireModel):
    grade: int
    book_count: int


class CategoriesPage(WireModel):
    """Category groups plus the subject quick links and the grade grid."""

    groups: List[CategoryGroup]
    subjects: List[SubjectCount] = Field(default_factory=list)
    grades: List[GradeCount] = Field(default_factory=list)
