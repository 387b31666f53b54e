"""
Core Layer - Domain Models, Enums, Constants, Configuration, Exceptions

This layer contains the side-effect-free foundation of the document service.

Submodules:
    models.py     → GenerationRequest, RenderedDocument, Report, StorageStats
    enums.py      → ServiceCode, Specialty, ValidationErrorKind, ...
    constants.py  → Catalog tables, validator allow-list, storage key
    config.py     → ServiceConfiguration
    exceptions.py → Domain-specific exceptions

Dependency Rule:
    This layer depends on NOTHING else in the package.
    All other layers may depend on this layer.

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.core.models import (
    GenerationRequest,
    RenderedDocument,
    Report,
    StorageStats,
)
from emergency_mind.core.enums import (
    ServiceCode,
    Specialty,
    ValidationErrorKind,
    ProviderType,
    StorageBackend,
)
from emergency_mind.core.config import ServiceConfiguration
from emergency_mind.core.exceptions import (
    DocumentServiceError,
    ConfigurationError,
    ValidationError,
    UnknownServiceError,
    InvalidNotesError,
    InvalidReportError,
    GenerationError,
    PersistenceError,
    StorageWriteError,
    StorageQuotaExceededError,
    SerializationError,
    MalformedReportError,
)

__all__ = [
    # Models
    "GenerationRequest",
    "RenderedDocument",
    "Report",
    "StorageStats",
    # Enums
    "ServiceCode",
    "Specialty",
    "ValidationErrorKind",
    "ProviderType",
    "StorageBackend",
    # Configuration
    "ServiceConfiguration",
    # Exceptions
    "DocumentServiceError",
    "ConfigurationError",
    "ValidationError",
    "UnknownServiceError",
    "InvalidNotesError",
    "InvalidReportError",
    "GenerationError",
    "PersistenceError",
    "StorageWriteError",
    "StorageQuotaExceededError",
    "SerializationError",
    "MalformedReportError",
]
