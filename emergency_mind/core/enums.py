"""
Enumerations for Medico-Legal Document Generation

Enumeration Categories:
    ServiceCode          → Document types with a dedicated template
    Specialty            → Clinical departments in the reference catalog
    ValidationErrorKind  → Categories of rejected generation requests
    ProviderType         → Configurable document provider backends
    StorageBackend       → Configurable report storage media

Author: Emergency-Mind Team
Date: October 2026
"""

from enum import Enum


# =============================================================================
# STAGE 1: SERVICE CODE ENUMERATION
# =============================================================================
# Each member has its own fixed template skeleton. Codes outside this set
# render through the generic template.


class ServiceCode(str, Enum):
    """
    Document types with a dedicated template.

    The values are the wire-level service codes used in URLs, storage, and
    the catalog. They are also the validator's default allow-list.
    """

    # -------------------------------------------------------------------------
    # 1.1 Reports
    # -------------------------------------------------------------------------
    FINAL_REPORT = "final-report"
    """Final medical report for the encounter."""

    CONSULTATION = "consultation"
    """Specialist consultation report."""

    DISCHARGE_SUMMARY = "discharge-summary"
    """Summary of the hospital stay at discharge."""

    # -------------------------------------------------------------------------
    # 1.2 Administrative / Legal Forms
    # -------------------------------------------------------------------------
    INSURANCE_APPROVAL = "insurance-approval"
    """Request for insurer approval of treatment."""

    DAMA_FORM = "dama-form"
    """Discharge Against Medical Advice form."""

    POLICE_REPORT = "police-report"
    """Medical report for a police incident."""

    # -------------------------------------------------------------------------
    # 1.3 Coding Aids
    # -------------------------------------------------------------------------
    ICD10_FINDER = "icd-10-finder"
    """ICD-10 code finder worksheet."""

    @classmethod
    def get_all_codes(cls) -> list:
        """Return all service code values as a list."""
        return [service.value for service in cls]

    @classmethod
    def from_string(cls, value: str) -> "ServiceCode":
        """
        Convert string to ServiceCode, accepting either the value
        ("final-report") or the member name ("FINAL_REPORT").

        Raises:
            ValueError: If string doesn't match any service code
        """
        normalized = value.strip().lower().replace("_", "-")
        for service in cls:
            if service.value == normalized or service.name == value.strip().upper():
                return service
        raise ValueError(f"Unknown service code: '{value}'. Valid codes: {cls.get_all_codes()}")


# =============================================================================
# STAGE 2: SPECIALTY ENUMERATION
# =============================================================================


class Specialty(str, Enum):
    """Clinical departments in the reference catalog."""

    EMERGENCY = "emergency"
    ICU = "icu"
    SURGERY = "surgery"
    INTERNAL_MEDICINE = "internal-medicine"
    OBGYN = "obgyn"
    PEDIATRICS = "pediatrics"
    CLINIC_DOCTOR = "clinic-doctor"
    GENERAL_SERVICES = "general-services"

    @classmethod
    def get_all_specialties(cls) -> list:
        """Return all specialty values as a list."""
        return [specialty.value for specialty in cls]


# =============================================================================
# STAGE 3: VALIDATION ERROR KIND
# =============================================================================


class ValidationErrorKind(str, Enum):
    """Why a generation request was rejected."""

    UNKNOWN_SERVICE = "UnknownService"
    """Service code is outside the validator allow-list."""

    INVALID_NOTES = "InvalidNotes"
    """Notes missing, empty, or containing a blank entry."""

    INVALID_REPORT = "InvalidReport"
    """A report field offered for saving is missing or empty."""


# =============================================================================
# STAGE 4: INFRASTRUCTURE SELECTORS
# =============================================================================


class ProviderType(str, Enum):
    """Document provider selected at configuration time."""

    TEMPLATE = "template"
    """Deterministic fixed-skeleton templates (reference implementation)."""


class StorageBackend(str, Enum):
    """Key-value medium backing the report store."""

    MEMORY = "memory"
    """Process-local dictionary; lost on exit."""

    FILE = "file"
    """One JSON file per key in a directory."""
