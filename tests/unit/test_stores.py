"""
Unit tests for the record stores and persistence collaborators.
"""

from datetime import datetime, timezone

import pytest

from prospector import config
from prospector.db.connection import get_db
from prospector.db.persistence import InMemoryPersistence, SQLitePersistence
from prospector.db.stores import (
    CallLogStore,
    EmailStore,
    ProfileStore,
    ProspectStore,
    ServiceStore,
    find_service,
)
from prospector.models import CallLog, CallOutcome, EmailDraft, GeneratedEmail, UserProfile


class FailingPersistence(InMemoryPersistence):
    """Accepts loads, refuses every save."""

    def save(self, key, documents):
        raise OSError("disk full")


# ─── ADD / REMOVE / UPDATE ────────────────────────────────────

def test_add_skips_existing_and_repeated_ids(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    store.add([make_prospect(id="a"), make_prospect(id="b")])
    added = store.add([make_prospect(id="b"), make_prospect(id="c"), make_prospect(id="c")])
    assert [p.id for p in added] == ["c"]
    assert [p.id for p in store.all()] == ["a", "b", "c"]


def test_add_nothing_new_does_not_save(make_prospect):
    persistence = InMemoryPersistence()
    store = ProspectStore(persistence)
    store.add([make_prospect(id="a")])
    saves = persistence.save_count
    store.add([make_prospect(id="a")])
    assert persistence.save_count == saves


def test_remove_many_ignores_unknown_ids(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    store.add([make_prospect(id="a"), make_prospect(id="b")])
    removed = store.remove_many({"a", "zzz"})
    assert removed == {"a"}
    assert store.ids() == {"b"}


def test_remove_notifies_listeners(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    store.add([make_prospect(id="a")])
    seen = []
    store.on_remove(seen.append)
    store.remove_many(["a"])
    store.remove_many(["a"])
    assert seen == [{"a"}]


def test_update_replaces_wholesale(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    store.add([make_prospect(id="a"), make_prospect(id="b")])
    store.update(make_prospect(id="a", company_name="Renamed", hire_probability=99))
    assert store.get("a").company_name == "Renamed"
    assert [p.id for p in store.all()] == ["a", "b"]


def test_update_absent_id_is_noop(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    assert store.update(make_prospect(id="ghost")) is None
    assert len(store) == 0


def test_all_returns_a_copy(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    store.add([make_prospect(id="a")])
    store.all().clear()
    assert "a" in store


# ─── ATOMICITY ────────────────────────────────────────────────

def test_failed_save_leaves_store_unchanged(make_prospect):
    persistence = InMemoryPersistence({"prospects": [make_prospect(id="a").model_dump(mode="json")]})
    store = ProspectStore(persistence)
    store.persistence = FailingPersistence()

    with pytest.raises(OSError):
        store.add([make_prospect(id="b")])
    with pytest.raises(OSError):
        store.remove_many({"a"})
    with pytest.raises(OSError):
        store.update(make_prospect(id="a", company_name="Changed"))

    assert [p.id for p in store.all()] == ["a"]
    assert store.get("a").company_name == "Acme Logistics"


def test_failed_remove_does_not_notify(make_prospect):
    store = ProspectStore(InMemoryPersistence())
    store.add([make_prospect(id="a")])
    store.persistence = FailingPersistence()
    seen = []
    store.on_remove(seen.append)
    with pytest.raises(OSError):
        store.remove_many({"a"})
    assert seen == []


# ─── LOADING ──────────────────────────────────────────────────

def test_load_skips_unreadable_and_duplicate_documents(make_prospect):
    good = make_prospect(id="a").model_dump(mode="json")
    persistence = InMemoryPersistence({"prospects": [good, {"id": "broken"}, good]})
    store = ProspectStore(persistence)
    assert [p.id for p in store.all()] == ["a"]


def test_sqlite_round_trip(tmp_path, make_prospect, service):
    db_path = str(tmp_path / "prospector.db")
    prospects = ProspectStore(SQLitePersistence(db_path))
    prospects.add([make_prospect(id="a"), make_prospect(id="b", company_name="Bravo")])
    ServiceStore(SQLitePersistence(db_path)).add([service])

    reopened = SQLitePersistence(db_path)
    assert [p.company_name for p in ProspectStore(reopened).all()] == ["Acme Logistics", "Bravo"]
    assert ServiceStore(reopened).get(service.id).name == "Route Optimisation"
    assert reopened.keys() == ["prospects", "services"]


def test_sqlite_load_missing_key_is_empty(tmp_path):
    assert SQLitePersistence(str(tmp_path / "empty.db")).load("emails") == []


def test_connection_uses_configured_journal_mode(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DB_JOURNAL_MODE", "DELETE")
    monkeypatch.setenv("PROSPECTOR_JOURNAL_MODE", "WAL")
    conn = get_db(str(tmp_path / "journal.db"))
    try:
        assert conn.execute("PRAGMA journal_mode").fetchone()[0] == "delete"
    finally:
        conn.close()


# ─── SPECIALISED STORES ───────────────────────────────────────

def test_email_store_for_prospect(make_prospect, service):
    store = EmailStore(InMemoryPersistence())
    draft = EmailDraft(subject="Hi", body="Hello")
    a, b = make_prospect(id="a"), make_prospect(id="b")
    store.add([GeneratedEmail.from_draft(a, service, draft),
               GeneratedEmail.from_draft(b, service, draft)])
    emails = store.for_prospect("a")
    assert len(emails) == 1
    assert emails[0].draft.subject == "Hi"


def test_call_log_most_recent_first_and_cascade():
    store = CallLogStore(InMemoryPersistence())
    store.add([
        CallLog(id="c1", prospect_id="a", outcome=CallOutcome.VOICEMAIL,
                called_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        CallLog(id="c2", prospect_id="a", outcome=CallOutcome.INTERESTED,
                called_at=datetime(2024, 2, 1, tzinfo=timezone.utc)),
        CallLog(id="c3", prospect_id="b", outcome=CallOutcome.OTHER),
    ])
    assert [c.id for c in store.for_prospect("a")] == ["c2", "c1"]
    assert store.remove_for_prospects({"a"}) == {"c1", "c2"}
    assert store.ids() == {"c3"}


def test_profile_store_persists():
    persistence = InMemoryPersistence()
    assert ProfileStore(persistence).get().is_complete is False
    ProfileStore(persistence).save(UserProfile(name="Rob"))
    assert ProfileStore(persistence).get().name == "Rob"


def test_find_service(service):
    store = ServiceStore(InMemoryPersistence())
    store.add([service])
    assert find_service(store, service.id) == service
    assert find_service(store, None) is None
    assert find_service(store, "svc_missing") is None
