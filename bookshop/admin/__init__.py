"""
Back-office package: CRUD screens for books, categories, customers,
orders and users, plus the dashboard and analytics summaries.
"""

from .router import router as admin_router  # noqa: F401
