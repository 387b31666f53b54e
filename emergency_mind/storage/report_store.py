"""
Report Store - Persisted Report Collection

Holds every saved report as one JSON array under one key of a key-value
medium. Each mutation reads the full collection, applies one change, and
rewrites the full collection.

Architecture:
    ReportStore
    ├── Reads    → get_all, get_by_id, filters, search, usage_stats
    └── Writes   → save, delete_by_id, clear_all
                   (all through _transaction, under one re-entrant lock)

Pipeline Position:
    Dispatcher → RenderedDocument → [ReportStore] → KeyValueStorage
                                     ^^^^^^^^^^^
                                     You are here

Concurrency:
    The lock makes mutations atomic within a process. Independent processes
    writing the same medium are not coordinated; the last whole-collection
    write wins. A version token checked on write would be the place to add
    optimistic concurrency for multi-writer deployments.

Usage:
    from emergency_mind.storage import InMemoryKeyValueStorage, ReportStore

    store = ReportStore(InMemoryKeyValueStorage())
    report = store.save("emergency", "final-report", ["BP 140/90"], text)
    store.get_by_id(report.id)

Author: Emergency-Mind Team
Date: October 2026
"""

import json
import threading
import uuid
from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from emergency_mind.catalog.service_catalog import ServiceCatalog, default_catalog
from emergency_mind.core.constants import STORAGE_KEY
from emergency_mind.core.exceptions import (
    InvalidReportError,
    MalformedReportError,
    PersistenceError,
    SerializationError,
)
from emergency_mind.core.models import Report, StorageStats
from emergency_mind.storage.backends import KeyValueStorage
from emergency_mind.utils.timestamps import Clock, format_iso_timestamp, utc_now
from emergency_mind.validation.request_validator import RequestChecks

T = TypeVar("T")

# A mutation maps the current collection to (new collection, return value).
# A new collection of None removes the key from the medium.
Mutation = Callable[[List[Report]], Tuple[Optional[List[Report]], T]]


def _new_report_id() -> str:
    return str(uuid.uuid4())


def serialize_reports(reports: Sequence[Report]) -> str:
    """
    Encode a collection as the stored JSON array.

    Raises:
        SerializationError: If the collection cannot be encoded as UTF-8 JSON
    """
    try:
        payload = json.dumps([report.to_dict() for report in reports], ensure_ascii=False)
        payload.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(
            "Report collection could not be serialized", context={"error": str(e)}
        ) from e
    return payload


def deserialize_reports(raw: Optional[str]) -> List[Report]:
    """
    Decode the stored JSON array.

    Raises:
        MalformedReportError: If the value is not a JSON array of reports
    """
    if not raw:
        return []

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedReportError("Stored collection is not valid JSON", context={"error": str(e)}) from e

    if not isinstance(data, list):
        raise MalformedReportError(
            "Stored collection is not an array", context={"type": type(data).__name__}
        )

    return [Report.from_dict(record) for record in data]


class ReportStore:
    """
    Durable collection of saved reports.

    What it does:
        Saves, lists, filters, and deletes reports. Reads never fail: an
        empty, unreadable, or malformed medium reads as no reports. Writes
        either commit fully or raise PersistenceError with nothing committed.

    How it works:
        STAGE 1: Read helpers (decode, tolerate bad data)
        STAGE 2: Transaction (lock → read → mutate → write)
        STAGE 3: Public write API
        STAGE 4: Public read API

    Example:
        >>> store = ReportStore(InMemoryKeyValueStorage())
        >>> report = store.save("emergency", "final-report", ["BP 140/90"], "FINAL ...")
        >>> store.delete_by_id(report.id)
        True
        >>> store.delete_by_id(report.id)
        False
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: str = STORAGE_KEY,
        clock: Clock = utc_now,
        id_factory: Callable[[], str] = _new_report_id,
    ):
        """
        Args:
            storage: Key-value medium holding the collection
            storage_key: Key the collection is stored under
            clock: Source of save timestamps
            id_factory: Source of report ids
        """
        self._storage = storage
        self._storage_key = storage_key
        self._clock = clock
        self._id_factory = id_factory
        self._lock = threading.RLock()

        logger.info(
            f"ReportStore initialized | "
            f"Backend: {type(storage).__name__} | "
            f"Key: {storage_key}"
        )

    @property
    def storage_key(self) -> str:
        return self._storage_key

    # =========================================================================
    # STAGE 1: READ HELPERS
    # =========================================================================

    def _read(self) -> List[Report]:
        """Current collection; malformed or unreadable data reads as empty."""
        try:
            raw = self._storage.get(self._storage_key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Report storage unreadable, treating as empty | Error: {e}")
            return []

        try:
            return deserialize_reports(raw)
        except MalformedReportError as e:
            logger.warning(f"Malformed report storage, treating as empty | {e}")
            return []

    # =========================================================================
    # STAGE 2: TRANSACTION
    # =========================================================================

    def _transaction(self, mutate: Mutation) -> T:
        """
        Run one read-mutate-write cycle.

        STAGE 2.1: Read the full collection under the lock
        STAGE 2.2: Apply the mutation
        STAGE 2.3: Serialize and write (or remove) the full collection

        Raises:
            PersistenceError: If the medium rejects the write; the stored
                collection is unchanged
        """
        with self._lock:
            current = self._read()
            updated, result = mutate(list(current))

            if updated is None:
                try:
                    self._storage.remove(self._storage_key)
                except PersistenceError as e:
                    logger.error(f"Failed to clear report storage | {e}")
                    raise
                return result

            payload = serialize_reports(updated)
            try:
                self._storage.set(self._storage_key, payload)
            except PersistenceError as e:
                logger.error(f"Failed to write report storage | {e}")
                raise
            return result

    # =========================================================================
    # STAGE 3: WRITE API
    # =========================================================================

    def save(
        self, specialty: str, service_code: str, notes: Sequence[str], text: str
    ) -> Report:
        """
        Persist a new report.

        Args:
            specialty: Specialty the document was generated under
            service_code: Service code the document was rendered for
            notes: Bullets the document was rendered from
            text: Rendered document text

        Returns:
            The saved report with its new id and timestamp

        Raises:
            InvalidNotesError: Notes are not a non-empty list of strings
            InvalidReportError: Specialty, service code, or text is unusable
            StorageQuotaExceededError: Medium is full
            SerializationError: Collection could not be encoded
            PersistenceError: Any other write rejection
        """
        # Only records that Report.from_dict accepts are written
        checked_notes = RequestChecks.check_notes(notes)
        _check_report_field("specialty", specialty, allow_empty=True)
        _check_report_field("service", service_code)
        _check_report_field("result", text)

        report = Report(
            id=self._id_factory(),
            specialty=specialty,
            service=service_code,
            notes=checked_notes,
            result=text,
            timestamp=format_iso_timestamp(self._clock()),
        )

        def append(reports: List[Report]) -> Tuple[List[Report], Report]:
            reports.append(report)
            return reports, report

        saved = self._transaction(append)
        logger.info(f"Saved report {saved.id} | Service: {service_code} | Specialty: {specialty}")
        return saved

    def delete_by_id(self, report_id: str) -> bool:
        """
        Remove one report.

        Returns:
            True if the report existed and was removed, False otherwise
            (the stored collection is not rewritten in that case)
        """

        def remove(reports: List[Report]) -> Tuple[List[Report], bool]:
            remaining = [report for report in reports if report.id != report_id]
            if len(remaining) == len(reports):
                return reports, False
            return remaining, True

        with self._lock:
            if self.get_by_id(report_id) is None:
                logger.debug(f"Delete skipped, report not found | ID: {report_id}")
                return False
            deleted = self._transaction(remove)

        if deleted:
            logger.info(f"Deleted report {report_id}")
        return deleted

    def clear_all(self) -> bool:
        """Remove every report. Returns True on success."""
        cleared = self._transaction(lambda reports: (None, True))
        logger.info("Cleared all reports")
        return cleared

    # =========================================================================
    # STAGE 4: READ API
    # =========================================================================

    def get_all(self) -> List[Report]:
        """Every stored report in save order. Never raises."""
        with self._lock:
            return self._read()

    def get_by_id(self, report_id: str) -> Optional[Report]:
        for report in self.get_all():
            if report.id == report_id:
                return report
        return None

    def filter_by_specialty(self, specialty: str) -> List[Report]:
        return [report for report in self.get_all() if report.specialty == specialty]

    def filter_by_service(self, service_code: str) -> List[Report]:
        return [report for report in self.get_all() if report.service == service_code]

    def search(self, term: str, catalog: Optional[ServiceCatalog] = None) -> List[Report]:
        """
        Case-insensitive substring search.

        Matches a report when the term occurs in any note, in the result
        text, or in the service's display name.
        """
        return [
            report
            for report in self.get_all()
            if _matches_term(report, term.lower(), catalog or default_catalog)
        ]

    def filter(
        self,
        specialty: Optional[str] = None,
        service: Optional[str] = None,
        term: Optional[str] = None,
        catalog: Optional[ServiceCatalog] = None,
        newest_first: bool = False,
    ) -> List[Report]:
        """
        Combined history filter.

        Args:
            specialty: Keep only this specialty (None = all)
            service: Keep only this service code (None = all)
            term: Search term as in search() (None or "" = no search)
            catalog: Display-name source for the term match
            newest_first: Order by timestamp, most recent first

        Returns:
            Matching reports, in save order unless newest_first
        """
        catalog = catalog or default_catalog
        reports = self.get_all()

        if specialty is not None:
            reports = [report for report in reports if report.specialty == specialty]
        if service is not None:
            reports = [report for report in reports if report.service == service]
        if term:
            lowered = term.lower()
            reports = [report for report in reports if _matches_term(report, lowered, catalog)]

        if newest_first:
            # ISO-8601 UTC strings sort chronologically
            reports = sorted(reports, key=lambda report: report.timestamp, reverse=True)
        return reports

    def distinct_specialties(self) -> List[str]:
        """Specialties present in the collection, first-seen order."""
        return list(dict.fromkeys(report.specialty for report in self.get_all()))

    def distinct_services(self) -> List[str]:
        """Service codes present in the collection, first-seen order."""
        return list(dict.fromkeys(report.service for report in self.get_all()))

    def usage_stats(self) -> StorageStats:
        """Count and serialized UTF-8 size of the full collection."""
        reports = self.get_all()
        payload = serialize_reports(reports)
        return StorageStats(
            count=len(reports),
            approximate_size_bytes=len(payload.encode("utf-8")),
        )

    def __len__(self) -> int:
        return len(self.get_all())


def _check_report_field(name: str, value: Any, allow_empty: bool = False) -> None:
    if not isinstance(value, str):
        raise InvalidReportError(name, "must be a string")
    if not allow_empty and not value.strip():
        raise InvalidReportError(name, "cannot be empty")


def _matches_term(report: Report, lowered_term: str, catalog: ServiceCatalog) -> bool:
    return (
        any(lowered_term in note.lower() for note in report.notes)
        or lowered_term in report.result.lower()
        or lowered_term in catalog.display_name(report.service).lower()
    )
