"""Tests for the JSON file store behind the contact form."""

import json
import threading

from bookshop.forms import ContactForm
from bookshop.storefront.contact_store import ContactStore


def _form(**overrides) -> ContactForm:
    fields = dict(name="Ravi", email="ravi@example.com", subject="bulk", message="Need 40 copies")
    fields.update(overrides)
    return ContactForm(**fields)


def test_missing_file_is_empty(tmp_path):
    assert ContactStore(tmp_path / "nope.json").list_messages() == []


def test_save_appends_and_returns_receipt(tmp_path):
    path = tmp_path / "nested" / "messages.json"
    store = ContactStore(path)
    first = store.save(_form())
    second = store.save(_form(name="Meera", subject="general"))
    assert first.id != second.id
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert [m["name"] for m in saved] == ["Ravi", "Meera"]
    assert saved[0]["id"] == first.id
    assert saved[0]["received_at"] == first.received_at
    assert saved[1]["subject"] == "general"


def test_unreadable_file_is_replaced(tmp_path):
    path = tmp_path / "messages.json"
    path.write_text("{not json", encoding="utf-8")
    store = ContactStore(path)
    assert store.list_messages() == []
    store.save(_form())
    assert len(store.list_messages()) == 1


def test_concurrent_saves_keep_every_message(tmp_path):
    store = ContactStore(tmp_path / "messages.json")
    threads = [
        threading.Thread(target=store.save, args=(_form(name=f"Sender {i}"),))
        for i in range(20)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store.list_messages()) == 20
