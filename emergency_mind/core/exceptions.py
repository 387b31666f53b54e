"""
Domain Exceptions for Medico-Legal Document Generation

This module defines all custom exceptions raised by the document service.
Every exception carries a human-readable message plus a context dictionary,
so a transport layer can map the error kind to its own status signalling
without parsing strings.

Exception Hierarchy:
    DocumentServiceError (base)
    ├── ConfigurationError          → Invalid configuration
    ├── ValidationError             → Rejected generation request
    │   ├── UnknownServiceError
    │   ├── InvalidNotesError
    │   └── InvalidReportError
    ├── GenerationError             → Provider/template failure (fatal)
    ├── PersistenceError            → Report store write failures
    │   ├── StorageWriteError
    │   ├── StorageQuotaExceededError
    │   └── SerializationError
    └── MalformedReportError        → Unparseable stored report

Usage:
    from emergency_mind.core.exceptions import UnknownServiceError

    try:
        request = validator.validate("not-a-service", ["BP 140/90"])
    except UnknownServiceError as e:
        logger.warning(f"Rejected: {e.service_code}")

Author: Emergency-Mind Team
Date: October 2026
"""

from typing import Any, Dict, List, Optional, Sequence

from emergency_mind.core.enums import ValidationErrorKind


# =============================================================================
# STAGE 1: BASE EXCEPTION
# =============================================================================


class DocumentServiceError(Exception):
    """
    Base exception for all document service errors.

    Attributes:
        message: Human-readable error description
        context: Dictionary of additional context for debugging
    """

    kind: str = "DOCUMENT_SERVICE_ERROR"

    def __init__(self, message: str, context: Optional[dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format message with context for display."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{context_str}]"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Error payload for a transport layer."""
        return {"kind": self.kind, "message": self.message, "details": dict(self.context)}


# =============================================================================
# STAGE 2: CONFIGURATION ERRORS
# =============================================================================


class ConfigurationError(DocumentServiceError):
    """
    Error in service configuration.

    When raised:
        - Unknown provider or storage backend name
        - Inverted latency range
        - Catalog exposes services the validator would reject (strict mode)
    """

    kind = "CONFIGURATION_ERROR"


# =============================================================================
# STAGE 3: VALIDATION ERRORS
# =============================================================================
# Always recoverable: the caller fixes the input and resubmits.


class ValidationError(DocumentServiceError):
    """
    A generation request was rejected before dispatch.

    The `kind` attribute is one of the ValidationErrorKind values so callers
    can branch on it without isinstance checks.
    """

    kind = "VALIDATION_ERROR"

    def __init__(
        self,
        message: str,
        kind: ValidationErrorKind,
        context: Optional[dict] = None,
    ):
        self.kind = kind.value
        super().__init__(message, context=context)


class UnknownServiceError(ValidationError):
    """
    Service code is not on the validator's allow-list.

    Attributes:
        service_code: The rejected code
        valid_services: The allow-list the code was checked against
    """

    def __init__(self, service_code: str, valid_services: Sequence[str]):
        self.service_code = service_code
        self.valid_services: List[str] = list(valid_services)
        super().__init__(
            f"Invalid service. Must be one of: {', '.join(self.valid_services)}",
            kind=ValidationErrorKind.UNKNOWN_SERVICE,
            context={"service_code": service_code, "valid_services": self.valid_services},
        )


class InvalidNotesError(ValidationError):
    """
    Notes are missing, empty, or contain a blank/non-string entry.

    Attributes:
        reason: Short description of the problem
        index: Position of the offending note, if any
    """

    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        context: Dict[str, Any] = {"reason": reason}
        if index is not None:
            context["index"] = index
        super().__init__(
            f"Validation failed: {reason}",
            kind=ValidationErrorKind.INVALID_NOTES,
            context=context,
        )


class InvalidReportError(ValidationError):
    """
    A report offered to the store has a missing, empty, or non-string field.

    Attributes:
        field: Name of the offending report field
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(
            f"Invalid report field '{field}': {reason}",
            kind=ValidationErrorKind.INVALID_REPORT,
            context={"field": field, "reason": reason},
        )


# =============================================================================
# STAGE 4: GENERATION ERRORS
# =============================================================================


class GenerationError(DocumentServiceError):
    """
    Document generation failed after validation succeeded.

    For the template provider this means a template-authoring defect; it is
    an unexpected condition, not a user-facing input error.
    """

    kind = "GENERATION_ERROR"


# =============================================================================
# STAGE 5: PERSISTENCE ERRORS
# =============================================================================


class PersistenceError(DocumentServiceError):
    """
    The durable medium rejected a write.

    When raised, nothing from the failed operation has been committed.
    """

    kind = "PERSISTENCE_ERROR"


class StorageWriteError(PersistenceError):
    """
    Low-level write/remove failure on the storage medium.

    Attributes:
        key: Storage key being written
        reason: Underlying failure description
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(
            f"Failed to write storage key '{key}': {reason}",
            context={"key": key, "reason": reason},
        )


class StorageQuotaExceededError(PersistenceError):
    """
    Write would push the medium past its capacity.

    Attributes:
        quota_bytes: Configured capacity
        required_bytes: Size the medium would have needed
    """

    def __init__(self, key: str, quota_bytes: int, required_bytes: int):
        self.key = key
        self.quota_bytes = quota_bytes
        self.required_bytes = required_bytes
        super().__init__(
            f"Storage quota exceeded writing '{key}'",
            context={"quota_bytes": quota_bytes, "required_bytes": required_bytes},
        )


class SerializationError(PersistenceError):
    """Report collection could not be encoded for storage."""

    pass


# =============================================================================
# STAGE 6: STORED DATA ERRORS
# =============================================================================


class MalformedReportError(DocumentServiceError):
    """
    A stored report record could not be parsed.

    Raised by Report.from_dict. The report store catches it and treats the
    whole collection as empty.
    """

    kind = "MALFORMED_REPORT"
