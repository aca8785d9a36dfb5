"""
HTTP client for the bookshop REST backend.

Requests go through the standard library (``urllib.request``) and
every response is expected in the ``{success, data, message}``
envelope; :meth:`BackendClient.request` returns the ``data`` part and
raises :class:`~bookshop.errors.ApiError` for anything else.

Successful GET results are memoised for a short time in a
:class:`QueryCache`. A mutation on a collection (``/books``,
``/orders`` ...) drops every cached entry of that collection so the
next read refetches it.
"""

from __future__ import annotations

import json
import logging
import threading
import time
import urllib.error
import urllib.parse
import urllib.request
from enum import Enum
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

from ..config import Settings
from ..errors import ApiError
from .resources import (
    BookResource,
    CategoryResource,
    CustomerResource,
    OrderResource,
    UserResource,
)

logger = logging.getLogger(__name__)

_MISSING = object()


def _encode_param(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _message_from_body(raw: bytes) -> Optional[str]:
    """Pull the ``message`` field out of an error body, if there is one."""
    if not raw:
        return None
    try:
        payload = json.loads(raw.decode("utf-8", errors="ignore"))
    except ValueError:
        return None
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


class QueryCache:
    """Time-bounded cache of GET results keyed by path and query parameters."""

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(path: str, params: Optional[Dict[str, str]]) -> Hashable:
        return (path, tuple(sorted((params or {}).items())))

    def get(self, key: Hashable) -> Any:
        if self.ttl <= 0:
            return _MISSING
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISSING
            stored_at, value = entry
            if self._clock() - stored_at > self.ttl:
                del self._entries[key]
                return _MISSING
            return value

    def put(self, key: Hashable, value: Any) -> None:
        if self.ttl <= 0:
            return
        now = self._clock()
        with self._lock:
            self._sweep(now)
            self._entries[key] = (now, value)

    def _sweep(self, now: float) -> None:
        # Caller holds the lock.
        expired = [k for k, (stored_at, _) in self._entries.items() if now - stored_at > self.ttl]
        for k in expired:
            del self._entries[k]

    def invalidate(self, collection: str) -> None:
        """Forget every entry whose path belongs to ``collection``."""
        prefix = "/" + collection.strip("/")
        with self._lock:
            stale = [
                k for k in self._entries
                if k[0] == prefix or k[0].startswith(prefix + "/")
            ]
            for k in stale:
                del self._entries[k]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


class BackendClient:
    """Thin JSON client exposing one resource object per backend collection.

    Parameters
    ----------
    base_url : str
        Root of the REST API, e.g. ``http://localhost:8080/api``.
    timeout : float
        Per-request timeout in seconds.
    token : Optional[str]
        Bearer token sent in the ``Authorization`` header when set.
    cache_ttl : float
        Lifetime of cached GET results in seconds; ``0`` disables caching.
    opener : Optional[Callable]
        Replacement for ``urllib.request.urlopen``; used by tests.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8080/api",
        timeout: float = 10.0,
        token: Optional[str] = None,
        cache_ttl: float = 0.0,
        opener: Optional[Callable[..., Any]] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token
        self.cache = QueryCache(cache_ttl)
        self._opener = opener or urllib.request.urlopen

        self.books = BookResource(self)
        self.categories = CategoryResource(self)
        self.customers = CustomerResource(self)
        self.orders = OrderResource(self)
        self.users = UserResource(self)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendClient":
        return cls(
            base_url=settings.api_url,
            timeout=settings.api_timeout,
            token=settings.api_token,
            cache_ttl=settings.cache_ttl,
        )

    # -- verbs ---------------------------------------------------------------

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        query = self._clean_params(params)
        key = QueryCache.key(path, query)
        cached = self.cache.get(key)
        if cached is not _MISSING:
            logger.debug("Cache hit for GET %s", path)
            return cached
        data = self.request("GET", path, params=query)
        self.cache.put(key, data)
        return data

    def post(self, path: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._mutate("POST", path, body, params)

    def put(self, path: str, body: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._mutate("PUT", path, body, params)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._mutate("DELETE", path, None, params)

    def _mutate(self, method: str, path: str, body: Any, params: Optional[Dict[str, Any]]) -> Any:
        try:
            return self.request(method, path, params=self._clean_params(params), body=body)
        finally:
            # Invalidate even on failure: the backend may have applied part of it.
            self.cache.invalidate(path.strip("/").split("/")[0])

    # -- transport -----------------------------------------------------------

    @staticmethod
    def _clean_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
        return {k: _encode_param(v) for k, v in (params or {}).items() if v is not None}

    def _build_request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]],
        body: Any,
    ) -> urllib.request.Request:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        data = json.dumps(body).encode("utf-8") if body is not None else None
        return urllib.request.Request(url, data=data, headers=headers, method=method)

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        body: Any = None,
    ) -> Any:
        """Perform one call and return the envelope's ``data``.

        Raises
        ------
        ApiError
            On an HTTP error status, a network failure, an undecodable
            body, or an envelope carrying ``success: false``.
        """
        request = self._build_request(method, path, params, body)
        logger.debug("%s %s", method, request.full_url)
        try:
            with self._opener(request, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                raw = response.read()
        except urllib.error.HTTPError as exc:
            body_bytes = exc.read() if exc.fp is not None else b""
            message = _message_from_body(body_bytes)
            logger.warning(
                "%s %s returned status %s: %s", method, request.full_url, exc.code, message
            )
            raise ApiError(message, status_code=exc.code) from exc
        except (urllib.error.URLError, TimeoutError, OSError) as exc:
            logger.error("Error calling %s %s: %s", method, request.full_url, exc)
            raise ApiError(None, status_code=None) from exc
        return self._unwrap(raw, status, request.full_url)

    @staticmethod
    def _unwrap(raw: bytes, status: int, url: str) -> Any:
        if not raw or not raw.strip():
            return None
        try:
            payload = json.loads(raw.decode("utf-8", errors="ignore"))
        except ValueError as exc:
            logger.error("Undecodable response from %s: %s", url, exc)
            raise ApiError(None, status_code=status) from exc
        if isinstance(payload, dict) and "success" in payload:
            if not payload.get("success"):
                raise ApiError(
                    payload.get("message") or None,
                    status_code=status if status >= 400 else 400,
                )
            return payload.get("data")
        return payload
