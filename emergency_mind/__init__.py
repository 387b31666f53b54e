"""
Emergency-Mind Medico-Legal Document Service

Turns short clinician bullet notes into structured medico-legal documents
(final reports, consultations, discharge summaries, insurance approvals,
DAMA forms, police reports, ICD-10 code lists) and keeps a history of the
documents a user chose to save.

Architecture Overview:
    emergency_mind/
    ├── core/          → Domain models, enums, configuration (Layer 0 - Pure)
    ├── catalog/       → Specialty → service lookups (Layer 1 - Reference data)
    ├── validation/    → Request validation (Layer 2 - Business Logic)
    ├── generation/    → Templates, providers, dispatcher (Layer 3 - Business Logic)
    ├── storage/       → Report persistence (Layer 4 - Infrastructure)
    ├── service.py     → Main orchestrator (Layer 5 - Public API)
    └── cli.py         → emergency-mind command

Quick Start:
    from emergency_mind import DocumentService

    service = DocumentService.from_environment()
    report = service.generate_and_save(
        "emergency", "final-report", ["Patient presents with chest pain", "BP 140/90"]
    )

Author: Emergency-Mind Team
Date: October 2026
"""

__version__ = "1.0.0"
__author__ = "Emergency-Mind Team"

# =============================================================================
# PUBLIC API EXPORTS
# =============================================================================

# Main Entry Point
from emergency_mind.service import DocumentService

# Core Models
from emergency_mind.core.models import (
    GenerationRequest,
    RenderedDocument,
    Report,
    StorageStats,
)

# Enums
from emergency_mind.core.enums import (
    ServiceCode,
    Specialty,
    ValidationErrorKind,
    ProviderType,
    StorageBackend,
)

# Configuration
from emergency_mind.core.config import ServiceConfiguration

# Errors
from emergency_mind.core.exceptions import (
    DocumentServiceError,
    ValidationError,
    UnknownServiceError,
    InvalidNotesError,
    InvalidReportError,
    GenerationError,
    PersistenceError,
)

# Components
from emergency_mind.catalog import ServiceCatalog
from emergency_mind.validation import RequestValidator
from emergency_mind.generation import (
    DocumentProvider,
    GenerationDispatcher,
    LatencySimulatingProvider,
    TemplateDocumentProvider,
    TemplateRenderer,
)
from emergency_mind.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    ReportStore,
)

__all__ = [
    # Main Entry Point (use this!)
    "DocumentService",
    # Core Models
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
    # Errors
    "DocumentServiceError",
    "ValidationError",
    "UnknownServiceError",
    "InvalidNotesError",
    "InvalidReportError",
    "GenerationError",
    "PersistenceError",
    # Components
    "ServiceCatalog",
    "RequestValidator",
    "DocumentProvider",
    "GenerationDispatcher",
    "LatencySimulatingProvider",
    "TemplateDocumentProvider",
    "TemplateRenderer",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "ReportStore",
]
