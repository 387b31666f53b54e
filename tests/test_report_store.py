"""
Unit Tests for the Report Store

Covers the save/read/delete/clear contract, tolerance of malformed stored
data, and the all-or-nothing write guarantee.
"""

import json
import threading
from datetime import datetime

import pytest

from emergency_mind.core.exceptions import (
    InvalidNotesError,
    InvalidReportError,
    PersistenceError,
    SerializationError,
    StorageQuotaExceededError,
    StorageWriteError,
)
from emergency_mind.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    ReportStore,
)


NOTES = ["Patient presents with chest pain", "BP 140/90"]


class FailingWriteStorage(InMemoryKeyValueStorage):
    """In-memory medium whose writes can be switched off."""

    def __init__(self):
        super().__init__()
        self.fail_writes = False

    def set(self, key, value):
        if self.fail_writes:
            raise StorageWriteError(key, "disk unavailable")
        super().set(key, value)

    def remove(self, key):
        if self.fail_writes:
            raise StorageWriteError(key, "disk unavailable")
        super().remove(key)


@pytest.fixture
def populated_store(store):
    store.save("emergency", "final-report", NOTES, "FINAL MEDICAL REPORT ...")
    store.save("icu", "consultation", ["Sepsis suspected"], "MEDICAL CONSULTATION REPORT ...")
    store.save("emergency", "dama-form", ["Left against advice"], "DAMA ...")
    return store


# ---------------------------------------------------------------------------
# SAVE / READ
# ---------------------------------------------------------------------------


class TestSave:
    def test_save_assigns_id_and_timestamp(self, store):
        report = store.save("emergency", "final-report", NOTES, "text")

        assert report.id == "report-1"
        assert report.timestamp == "2026-10-19T08:30:15.123Z"
        assert report.notes == tuple(NOTES)

    def test_round_trip_by_id(self, store):
        saved = store.save("emergency", "final-report", NOTES, "text")
        assert store.get_by_id(saved.id) == saved

    def test_get_all_in_save_order(self, populated_store):
        assert [r.id for r in populated_store.get_all()] == ["report-1", "report-2", "report-3"]

    def test_default_ids_are_unique(self, memory_storage):
        store = ReportStore(memory_storage)
        first = store.save("icu", "consultation", ["a"], "t")
        second = store.save("icu", "consultation", ["a"], "t")
        assert first.id != second.id

    def test_missing_id_returns_none(self, populated_store):
        assert populated_store.get_by_id("nope") is None

    def test_stored_as_single_json_array(self, store, memory_storage):
        store.save("emergency", "final-report", NOTES, "text")
        stored = json.loads(memory_storage.get(store.storage_key))
        assert isinstance(stored, list)
        assert stored[0]["notes"] == NOTES


class TestSaveRejectsInvalidReports:
    @pytest.mark.parametrize("notes", [[], "BP 140/90", b"BP", [1], ["ok", None], ["  "]])
    def test_bad_notes_rejected(self, store, notes):
        with pytest.raises(InvalidNotesError):
            store.save("emergency", "final-report", notes, "text")

    @pytest.mark.parametrize(
        "specialty, service_code, text, field",
        [
            ("emergency", "final-report", "", "result"),
            ("emergency", "final-report", "   ", "result"),
            ("emergency", "final-report", None, "result"),
            ("emergency", "", "text", "service"),
            ("emergency", 7, "text", "service"),
            (None, "final-report", "text", "specialty"),
        ],
    )
    def test_bad_fields_rejected(self, store, specialty, service_code, text, field):
        with pytest.raises(InvalidReportError) as exc_info:
            store.save(specialty, service_code, ["x"], text)
        assert exc_info.value.field == field

    def test_rejected_save_keeps_earlier_reports(self, store, memory_storage):
        first = store.save("emergency", "final-report", ["BP 140/90"], "FINAL")
        raw_before = memory_storage.get(store.storage_key)

        with pytest.raises(InvalidNotesError):
            store.save("emergency", "final-report", [], "")
        with pytest.raises(InvalidNotesError):
            store.save("emergency", "final-report", [1], "t")

        assert memory_storage.get(store.storage_key) == raw_before
        store.save("icu", "consultation", ["x"], "t")
        assert [r.id for r in store.get_all()] == [first.id, "report-2"]

    def test_id_not_consumed_by_rejected_save(self, store):
        with pytest.raises(InvalidReportError):
            store.save("icu", "consultation", ["x"], "")
        assert store.save("icu", "consultation", ["x"], "t").id == "report-1"


class TestMalformedStorage:
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"id": "x"}',
            '[{"id": "x"}]',
            '[{"id": "x", "specialty": "e", "service": "s", "notes": [], '
            '"result": "r", "timestamp": "t"}]',
            '[{"id": 1, "specialty": "e", "service": "s", "notes": ["n"], '
            '"result": "r", "timestamp": "t"}]',
        ],
    )
    def test_malformed_reads_as_empty(self, store, memory_storage, raw):
        memory_storage.set(store.storage_key, raw)
        assert store.get_all() == []
        assert store.usage_stats().count == 0

    def test_empty_string_reads_as_empty(self, store, memory_storage):
        memory_storage.set(store.storage_key, "")
        assert store.get_all() == []

    def test_save_over_malformed_starts_fresh(self, store, memory_storage):
        memory_storage.set(store.storage_key, "garbage")
        store.save("icu", "consultation", ["x"], "t")
        assert len(store.get_all()) == 1


# ---------------------------------------------------------------------------
# FILTERS / SEARCH
# ---------------------------------------------------------------------------


class TestFilters:
    def test_filter_by_specialty_preserves_order(self, populated_store):
        expected = [r for r in populated_store.get_all() if r.specialty == "emergency"]
        assert populated_store.filter_by_specialty("emergency") == expected
        assert [r.id for r in expected] == ["report-1", "report-3"]

    def test_filter_by_service(self, populated_store):
        assert [r.id for r in populated_store.filter_by_service("consultation")] == ["report-2"]

    def test_search_notes_case_insensitive(self, populated_store):
        assert [r.id for r in populated_store.search("SEPSIS")] == ["report-2"]

    def test_search_matches_display_name(self, populated_store):
        assert [r.id for r in populated_store.search("dama form")] == ["report-3"]

    def test_search_matches_result_text(self, populated_store):
        assert [r.id for r in populated_store.search("final medical")] == ["report-1"]

    def test_combined_filter(self, populated_store):
        result = populated_store.filter(specialty="emergency", term="advice")
        assert [r.id for r in result] == ["report-3"]

    def test_filter_without_criteria_returns_all(self, populated_store):
        assert populated_store.filter() == populated_store.get_all()

    def test_newest_first(self, memory_storage):
        stamps = iter(["2026-10-19T08:00:00.000Z", "2026-10-19T09:00:00.000Z"])
        store = ReportStore(
            memory_storage,
            clock=lambda: datetime.strptime(next(stamps), "%Y-%m-%dT%H:%M:%S.000Z"),
        )
        older = store.save("icu", "consultation", ["a"], "t")
        newer = store.save("icu", "consultation", ["b"], "t")

        assert store.filter(newest_first=True) == [newer, older]

    def test_distinct_values_first_seen(self, populated_store):
        assert populated_store.distinct_specialties() == ["emergency", "icu"]
        assert populated_store.distinct_services() == ["final-report", "consultation", "dama-form"]


# ---------------------------------------------------------------------------
# DELETE / CLEAR / STATS
# ---------------------------------------------------------------------------


class TestDelete:
    def test_delete_existing(self, populated_store):
        before = len(populated_store.get_all())
        assert populated_store.delete_by_id("report-2") is True
        assert len(populated_store.get_all()) == before - 1
        assert populated_store.get_by_id("report-2") is None

    def test_delete_missing_leaves_collection(self, populated_store, memory_storage):
        raw_before = memory_storage.get(populated_store.storage_key)
        assert populated_store.delete_by_id("nope") is False
        assert memory_storage.get(populated_store.storage_key) == raw_before

    def test_write_failure_propagates_and_keeps_collection(self, clock, id_factory):
        storage = FailingWriteStorage()
        store = ReportStore(storage, clock=clock, id_factory=id_factory)
        store.save("emergency", "final-report", NOTES, "text")
        store.save("icu", "consultation", ["Sepsis suspected"], "text")
        before = store.get_all()

        storage.fail_writes = True
        with pytest.raises(PersistenceError):
            store.delete_by_id("report-1")

        assert store.get_all() == before


class TestClear:
    def test_clear_all(self, populated_store):
        assert populated_store.clear_all() is True
        assert populated_store.get_all() == []
        assert populated_store.usage_stats().count == 0

    def test_clear_empty_store(self, store):
        assert store.clear_all() is True

    def test_remove_failure_propagates_and_keeps_collection(self, clock, id_factory):
        storage = FailingWriteStorage()
        store = ReportStore(storage, clock=clock, id_factory=id_factory)
        store.save("emergency", "final-report", NOTES, "text")
        before = store.get_all()

        storage.fail_writes = True
        with pytest.raises(StorageWriteError):
            store.clear_all()

        assert store.get_all() == before


class TestUsageStats:
    def test_size_is_serialized_utf8_length(self, store, memory_storage):
        store.save("emergency", "final-report", ["• café"], "text")
        raw = memory_storage.get(store.storage_key)
        stats = store.usage_stats()
        assert stats.count == 1
        assert stats.approximate_size_bytes == len(raw.encode("utf-8"))


# ---------------------------------------------------------------------------
# WRITE FAILURES
# ---------------------------------------------------------------------------


class TestWriteFailures:
    def test_quota_exceeded_commits_nothing(self, clock, id_factory):
        storage = InMemoryKeyValueStorage(quota_bytes=400)
        store = ReportStore(storage, clock=clock, id_factory=id_factory)
        store.save("icu", "consultation", ["a"], "short")

        with pytest.raises(StorageQuotaExceededError):
            store.save("icu", "consultation", ["b"], "x" * 1000)

        assert [r.id for r in store.get_all()] == ["report-1"]

    def test_unencodable_text_is_serialization_error(self, store):
        store.save("icu", "consultation", ["a"], "ok")

        with pytest.raises(SerializationError):
            store.save("icu", "consultation", ["b"], "bad \ud800 surrogate")

        assert len(store.get_all()) == 1


# ---------------------------------------------------------------------------
# DURABILITY / CONCURRENCY
# ---------------------------------------------------------------------------


class TestFileBackedStore:
    def test_reports_survive_new_store(self, tmp_path, clock):
        first = ReportStore(JsonFileKeyValueStorage(str(tmp_path)), clock=clock)
        saved = first.save("emergency", "final-report", NOTES, "text")

        second = ReportStore(JsonFileKeyValueStorage(str(tmp_path)), clock=clock)
        assert second.get_by_id(saved.id) == saved


class TestConcurrentSaves:
    def test_threads_do_not_lose_updates(self, memory_storage):
        store = ReportStore(memory_storage)

        def worker():
            for _ in range(10):
                store.save("icu", "consultation", ["x"], "t")

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store.get_all()) == 40
