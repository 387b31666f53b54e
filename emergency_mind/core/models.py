"""
Domain Models for Medico-Legal Document Generation

Model Hierarchy:
    GenerationRequest → A validated (service code, notes) pair
    RenderedDocument  → Text produced by one successful dispatch
    Report            → A persisted document with its input notes
    StorageStats      → Size information about the report collection

All models are frozen dataclasses. Notes are stored as tuples so a model
handed back to a caller cannot be mutated in place.

Usage:
    from emergency_mind.core.models import Report

    report = Report.from_dict(stored_record)
    print(report.service, len(report.notes))

Author: Emergency-Mind Team
Date: October 2026
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Tuple

from emergency_mind.core.exceptions import MalformedReportError


# =============================================================================
# STAGE 1: GENERATION REQUEST
# =============================================================================


@dataclass(frozen=True)
class GenerationRequest:
    """
    A generation request that passed validation.

    Only the request validator constructs these. Notes are trimmed and in
    the caller's original order; nothing is deduplicated.

    Attributes:
        service_code: Allow-listed service code (e.g. "final-report")
        notes: Non-empty tuple of non-empty, trimmed bullet strings
    """

    service_code: str
    notes: Tuple[str, ...]

    @property
    def note_count(self) -> int:
        """Number of bullets in the request."""
        return len(self.notes)


# =============================================================================
# STAGE 2: RENDERED DOCUMENT
# =============================================================================


@dataclass(frozen=True)
class RenderedDocument:
    """
    Output of one successful dispatch.

    Attributes:
        text: The rendered document
        rendered_at: Timestamp the dispatcher rendered at
        service_code: Service code the text was rendered for
        specialty: Specialty the caller submitted (not validated)
    """

    text: str
    rendered_at: datetime
    service_code: str = ""
    specialty: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Transport payload."""
        return {
            "text": self.text,
            "service": self.service_code,
            "specialty": self.specialty,
            "rendered_at": self.rendered_at.isoformat(),
        }


# =============================================================================
# STAGE 3: REPORT
# =============================================================================
# The only persisted entity. Created by ReportStore.save, destroyed by
# delete_by_id / clear_all; there is no update.

_REPORT_STRING_FIELDS = ("id", "specialty", "service", "result", "timestamp")


@dataclass(frozen=True)
class Report:
    """
    A persisted medico-legal document.

    Attributes:
        id: Globally unique identifier assigned at save time
        specialty: Free-form specialty code the caller supplied
        service: Service code used to render the text
        notes: Exact bullets the text was rendered from, in bullet order
        result: Rendered document text
        timestamp: ISO-8601 creation time, assigned once at save time

    Example:
        >>> report = Report(
        ...     id="5f0c...",
        ...     specialty="emergency",
        ...     service="final-report",
        ...     notes=("Patient presents with chest pain", "BP 140/90"),
        ...     result="FINAL MEDICAL REPORT ...",
        ...     timestamp="2026-10-19T08:30:00.000Z",
        ... )
        >>> report.note_count
        2
    """

    id: str
    specialty: str
    service: str
    notes: Tuple[str, ...]
    result: str
    timestamp: str

    @property
    def note_count(self) -> int:
        """Number of bullets the report was generated from."""
        return len(self.notes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "specialty": self.specialty,
            "service": self.service,
            "notes": list(self.notes),
            "result": self.result,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Report":
        """
        Create from dictionary (JSON deserialization).

        Raises:
            MalformedReportError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise MalformedReportError(
                "Stored report is not an object", context={"type": type(data).__name__}
            )

        for field_name in _REPORT_STRING_FIELDS:
            value = data.get(field_name)
            if not isinstance(value, str):
                raise MalformedReportError(
                    f"Stored report field '{field_name}' is missing or not a string",
                    context={"field": field_name},
                )

        notes = data.get("notes")
        if (
            not isinstance(notes, list)
            or not notes
            or not all(isinstance(note, str) for note in notes)
        ):
            raise MalformedReportError(
                "Stored report notes must be a non-empty list of strings",
                context={"field": "notes", "id": data.get("id")},
            )

        return cls(
            id=data["id"],
            specialty=data["specialty"],
            service=data["service"],
            notes=tuple(notes),
            result=data["result"],
            timestamp=data["timestamp"],
        )


# =============================================================================
# STAGE 4: STORAGE STATISTICS
# =============================================================================


@dataclass(frozen=True)
class StorageStats:
    """
    Informational size of the report collection.

    Attributes:
        count: Number of stored reports
        approximate_size_bytes: UTF-8 length of the serialized collection
    """

    count: int
    approximate_size_bytes: int

    def to_dict(self) -> Dict[str, int]:
        return {"count": self.count, "approximate_size_bytes": self.approximate_size_bytes}
