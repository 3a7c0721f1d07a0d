#!/usr/bin/env python3
"""Tests for Logbook: mutations are saved, views are re-derived."""
import pytest

from maintlog import (
    Logbook,
    PersistenceError,
    ServiceType,
    Status,
    ValidationError,
    YamlStorage,
)


class FailingStorage:
    """Storage whose save always fails."""

    def __init__(self):
        self.attempts = 0

    def save(self, snapshot):
        self.attempts += 1
        raise PersistenceError("disk full")


class RecordingStorage:
    def __init__(self):
        self.saved = []

    def save(self, snapshot):
        self.saved.append(snapshot)


@pytest.fixture
def book(store):
    return Logbook(RecordingStorage(), store)


class TestLogbookSaves:
    """Every mutating call writes a snapshot."""

    def test_each_mutation_saves(self, book):
        book.update_vehicle_info(mileage=12900)
        record = book.add_maintenance("2024-01-01", "oil-change", 10000)
        issue = book.add_issue("2024-05-01", "Oil leak", "high")
        book.toggle_issue(issue.id)
        book.edit_issue(issue.id, "2024-05-01", "Oil leak at tubes", "high")
        book.delete_issue(issue.id)
        book.delete_maintenance(record.id)
        assert len(book.storage.saved) == 7

    def test_saved_snapshot_carries_last_saved(self, book):
        book.update_vehicle_info(mileage=100)
        snap = book.storage.saved[-1]
        assert snap.last_saved is not None
        assert book.store.last_saved == snap.last_saved
        assert snap.vehicle_info.mileage == 100

    def test_no_save_on_validation_error_or_miss(self, book):
        with pytest.raises(ValidationError):
            book.add_issue("2024-05-01", "", "high")
        assert book.toggle_issue("missing") is None
        assert book.delete_maintenance("missing") is False
        assert book.storage.saved == []

    def test_failed_save_keeps_memory_state(self, store):
        storage = FailingStorage()
        book = Logbook(storage, store)
        with pytest.raises(PersistenceError):
            book.add_maintenance("2024-01-01", "oil-change", 10000)
        assert len(book.store.maintenance) == 1
        assert book.store.last_saved is None
        with pytest.raises(PersistenceError):
            book.save()
        assert storage.attempts == 2


class TestLogbookView:
    """Tests for Logbook.view."""

    def test_view_contents(self, book):
        book.update_vehicle_info(mileage=12900)
        book.add_maintenance("2024-01-01", "oil-change", 10000)
        book.add_maintenance("2024-01-02", "engine", 10050)
        issue = book.add_issue("2024-05-01", "Oil leak", "high")
        book.add_issue("2024-05-02", "Horn", "low")
        book.toggle_issue(issue.id)

        view = book.view("oil-change")
        assert [r.type for r in view.maintenance] == [ServiceType.OIL_CHANGE]
        assert view.filter_type == "oil-change"
        assert [i.description for i in view.active_issues] == ["Horn"]
        assert [i.description for i in view.resolved_issues] == ["Oil leak"]
        assert view.schedule[ServiceType.OIL_CHANGE].status == Status.DUE_SOON

        assert len(book.view().maintenance) == 2
        assert book.view(ServiceType.ENGINE).filter_type == "engine"


class TestLogbookOpen:
    """Tests for Logbook.open."""

    def test_open_missing_file_uses_defaults(self, tmp_path):
        book = Logbook.open(tmp_path / "maintlog.yaml")
        assert book.store.vehicle_info.name == "1969 Volkswagen Beetle"
        assert isinstance(book.storage, YamlStorage)

    def test_open_after_save(self, tmp_path):
        path = tmp_path / "maintlog.yaml"
        book = Logbook.open(path)
        book.update_vehicle_info(vin="118123456", mileage=13500)
        book.add_maintenance("2024-01-01", "oil-change", 10000)

        reopened = Logbook.open(path)
        assert reopened.store.vehicle_info.vin == "118123456"
        assert reopened.store.last_saved is not None
        oil = reopened.view().schedule[ServiceType.OIL_CHANGE]
        assert oil.status == Status.OVERDUE
        assert oil.magnitude == 500

    def test_open_corrupt_file_uses_defaults(self, tmp_path):
        path = tmp_path / "maintlog.yaml"
        path.write_text("vehicleInfo: [unclosed\n")
        book = Logbook.open(path)
        assert book.store.maintenance == []
        assert book.store.current_mileage == 0
