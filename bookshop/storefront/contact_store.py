"""
Persistence for "contact us" messages.

Messages are appended to a JSON file on disk (a list of objects). The
whole read-modify-write cycle runs under a ``threading.Lock`` so that
concurrent submissions handled by the threadpool do not overwrite one
another. A missing or unreadable file counts as an empty list.
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List

from ..config import get_settings
from ..forms import ContactForm
from .schemas import ContactReceipt

logger = logging.getLogger(__name__)


class ContactStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable contact file %s: %s", self.path, exc)
            return []
        return data if isinstance(data, list) else []

    def list_messages(self) -> List[Dict[str, Any]]:
        with self._lock:
            return self._load()

    def save(self, form: ContactForm) -> ContactReceipt:
        """Append one message and return its receipt.

        Raises
        ------
        OSError
            If the file cannot be written.
        """
        receipt = ContactReceipt(
            id=uuid.uuid4().hex,
            received_at=datetime.now(timezone.utc).isoformat(),
        )
        entry = {**receipt.model_dump(), **form.model_dump()}
        with self._lock:
            messages = self._load()
            messages.append(entry)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(messages, f, ensure_ascii=False, indent=2)
        logger.info("Stored contact message %s (%s)", receipt.id, form.subject)
        return receipt


@lru_cache(maxsize=None)
def _store_for(path: str) -> ContactStore:
    return ContactStore(Path(path))


def get_contact_store() -> ContactStore:
    return _store_for(str(get_settings().contact_file))
