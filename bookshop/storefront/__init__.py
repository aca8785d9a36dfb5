"""
Storefront package.

Shopper-facing endpoints: the catalogue with its search, filters and
sort orders, the category browser, and the "contact us" form that
stands in for a checkout. Everything is read from the bookshop REST
backend on each request and transformed locally; the only state kept
here is the file of submitted contact messages.
"""

from .router import router as storefront_router  # noqa: F401
