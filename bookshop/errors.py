"""
Uniform failure handling.

Every failed backend call ends up as an :class:`ApiError`. The message
shown to the user comes from the backend's response body when it sent
one, otherwise from the fallback attached by :func:`notify_failure`,
otherwise from :data:`GENERIC_FAILURE`. Causes are not told apart:
validation, network and server faults all surface the same way.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

GENERIC_FAILURE = "Something went wrong"


class ApiError(Exception):
    """A backend call failed.

    Parameters
    ----------
    message : Optional[str]
        Message taken from the backend's response body, if any.
    status_code : Optional[int]
        Upstream HTTP status, or ``None`` when the backend was never
        reached (connection refused, timeout, malformed response).
    """

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message or GENERIC_FAILURE)
        self.message = message
        self.status_code = status_code
        self.fallback: Optional[str] = None

    @property
    def display_message(self) -> str:
        return self.message or self.fallback or GENERIC_FAILURE

    @property
    def http_status(self) -> int:
        """Status to answer with; 502 when the backend gave none."""
        if self.status_code and 400 <= self.status_code < 600:
            return self.status_code
        return 502


@contextmanager
def notify_failure(fallback: str) -> Iterator[None]:
    """Attach ``fallback`` to any :class:`ApiError` raised in the block."""
    try:
        yield
    except ApiError as exc:
        if exc.fallback is None:
            exc.fallback = fallback
        raise
