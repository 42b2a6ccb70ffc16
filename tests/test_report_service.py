"""Tests for report validation, filtering and the store wrapper."""
from datetime import datetime, timezone

import pytest

from app.config.mock_firestore import MockFirestore
from app.core.errors import PersistenceError, ReportValidationError
from app.models.report import ReportCreate, ReportResponse, ReportStatus
from app.services.report_service import ReportService, filter_reports, validate_report
from app.services.report_store import ReportStore


@pytest.fixture
def store():
    return ReportStore(MockFirestore(), collection="submissions", timeout=5.0)


def test_validate_report_accepts_complete_payload():
    assert validate_report(ReportCreate(name="Jane", text="Pothole", coords=[71.45, 51.17])) == []


def test_validate_report_lists_every_problem():
    errors = validate_report(ReportCreate(name=" ", text=None))
    assert errors == ["name is required", "text is required", "coords is required"]


def test_create_forces_pending_and_server_timestamp(store):
    service = ReportService(store)
    before = datetime.now(timezone.utc)
    report_id = service.create_report(ReportCreate(name="Jane", text="Pothole", coords=[1.0, 2.0]))

    [stored] = store.find_all()
    assert stored["id"] == report_id
    assert stored["status"] == "pending"
    assert stored["photo"] is None
    assert stored["createdAt"] >= before


def test_empty_photo_stored_as_null(store):
    ReportService(store).create_report(
        ReportCreate(name="Jane", text="Pothole", coords=[1.0, 2.0], photo="")
    )
    assert store.find_all()[0]["photo"] is None


def test_create_rejects_without_writing(store):
    service = ReportService(store)
    with pytest.raises(ReportValidationError) as excinfo:
        service.create_report(ReportCreate(name="Jane", text="", coords=[1.0, 2.0]))
    assert excinfo.value.errors == ["text is required"]
    assert store.find_all() == []


def test_create_permissive_mode_stores_anything(store):
    ReportService(store, require_fields=False).create_report(ReportCreate())
    [stored] = store.find_all()
    assert stored["name"] is None
    assert stored["coords"] is None


def test_list_reports_exposes_both_ids(store):
    service = ReportService(store)
    service.create_report(ReportCreate(name="Jane", text="Pothole", coords=[1.0, 2.0]))
    [report] = service.list_reports()
    assert isinstance(report, ReportResponse)
    assert report.legacy_id == report.id


def test_filter_reports_by_status_and_text():
    now = datetime.now(timezone.utc)
    reports = [
        ReportResponse(id="a", _id="a", text="Pothole", status="pending", createdAt=now),
        ReportResponse(id="b", _id="b", text="Graffiti", status="resolved", createdAt=now),
        ReportResponse(id="c", _id="c", text=None, status="resolved", createdAt=now),
    ]
    assert [r.id for r in filter_reports(reports, status=ReportStatus.RESOLVED)] == ["b", "c"]
    assert [r.id for r in filter_reports(reports, search="POT")] == ["a"]
    assert filter_reports(reports) == reports


def test_store_insert_failure_raises_persistence_error(unreachable_db):
    store = ReportStore(unreachable_db)
    with pytest.raises(PersistenceError):
        store.insert({"name": "Jane"})


def test_store_read_failure_raises_persistence_error(unreachable_db):
    with pytest.raises(PersistenceError):
        ReportStore(unreachable_db).find_all()


def test_store_ping_counts_collections(store):
    assert store.ping() == 0
    store.insert({"name": "Jane", "createdAt": datetime.now(timezone.utc)})
    assert store.ping() == 1


def test_list_reports_malformed_document_raises_persistence_error(store):
    store.insert({"name": 123, "text": "t", "coords": [0.0, 0.0], "createdAt": datetime.now(timezone.utc)})
    with pytest.raises(PersistenceError):
        ReportService(store).list_reports()


class RecordingFirestore:
    """Records the keyword arguments every client call receives."""

    def __init__(self):
        self.calls = []

    def collection(self, name):
        return self

    def document(self):
        self.id = "doc1"
        return self

    def order_by(self, field_path, direction=None):
        return self

    def set(self, document_data, **kwargs):
        self.calls.append(("set", kwargs))

    def stream(self, **kwargs):
        self.calls.append(("stream", kwargs))
        return iter([])

    def collections(self, **kwargs):
        self.calls.append(("collections", kwargs))
        return []


def test_store_calls_are_bounded_and_not_retried():
    db = RecordingFirestore()
    store = ReportStore(db, timeout=4.0)

    assert store.insert({"name": "Jane"}) == "doc1"
    assert store.find_all() == []
    assert store.ping() == 0

    assert db.calls == [
        ("set", {"retry": None, "timeout": 4.0}),
        ("stream", {"retry": None, "timeout": 4.0}),
        ("collections", {"retry": None, "timeout": 4.0}),
    ]
