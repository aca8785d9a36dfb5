"""
Access to the remote bookshop REST service.

Route handlers receive the shared :class:`BackendClient` through the
``get_backend`` dependency, which tests replace with an in-memory fake.
"""

from functools import lru_cache

from ..config import get_settings
from .client import BackendClient, QueryCache  # noqa: F401


@lru_cache(maxsize=1)
def get_backend() -> BackendClient:
    return BackendClient.from_settings(get_settings())
