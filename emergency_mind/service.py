"""
Medico-Legal Document Service - Main Orchestrator

This is the PUBLIC API entry point. It wires the catalog, validator,
dispatcher (with its provider), and report store together from one
ServiceConfiguration.

Architecture Diagram:
    ┌──────────────────────────────────────────────────────────────┐
    │                       DocumentService                        │
    ├──────────────────────────────────────────────────────────────┤
    │                                                              │
    │   ┌───────────┐    ┌────────────┐    ┌──────────┐            │
    │   │ Validator │ →  │ Dispatcher │ →  │ Provider │            │
    │   └───────────┘    └────────────┘    └──────────┘            │
    │                          │                                   │
    │                          ▼                                   │
    │                    ┌─────────────┐    ┌─────────────────┐    │
    │                    │ ReportStore │ →  │ KeyValueStorage │    │
    │                    └─────────────┘    └─────────────────┘    │
    └──────────────────────────────────────────────────────────────┘

Usage:
    from emergency_mind import DocumentService

    service = DocumentService.from_environment()
    document = service.generate("emergency", "final-report", ["BP 140/90"])
    report = service.save("emergency", "final-report", ["BP 140/90"], document)

Author: Emergency-Mind Team
Date: October 2026
"""

from typing import Any, Optional, Tuple

from loguru import logger

from emergency_mind.catalog.service_catalog import ServiceCatalog, default_catalog
from emergency_mind.core.config import ServiceConfiguration
from emergency_mind.core.enums import ProviderType, StorageBackend
from emergency_mind.core.exceptions import ConfigurationError
from emergency_mind.core.models import RenderedDocument, Report
from emergency_mind.generation.dispatcher import GenerationDispatcher
from emergency_mind.generation.providers import (
    DocumentProvider,
    LatencySimulatingProvider,
    TemplateDocumentProvider,
)
from emergency_mind.generation.template_renderer import TemplateRenderer
from emergency_mind.storage.backends import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorage,
)
from emergency_mind.storage.report_store import ReportStore
from emergency_mind.utils.timestamps import Clock, utc_now
from emergency_mind.validation.request_validator import RequestValidator


# =============================================================================
# STAGE 1: SERVICE CLASS
# =============================================================================


class DocumentService:
    """
    Facade over generation and report persistence.

    What it does:
        Builds every component from configuration (unless an override is
        passed in) and exposes generate / save / generate_and_save.

    How it works:
        STAGE 1: Initialize components from configuration
        STAGE 2: On generate(): validate → provider → RenderedDocument
        STAGE 3: On save(): append a Report to the store

    Example:
        >>> service = DocumentService(ServiceConfiguration())
        >>> report = service.generate_and_save(
        ...     "emergency", "final-report", ["Patient presents with chest pain"]
        ... )
        >>> report.service
        'final-report'
    """

    def __init__(
        self,
        config: Optional[ServiceConfiguration] = None,
        catalog: Optional[ServiceCatalog] = None,
        validator: Optional[RequestValidator] = None,
        dispatcher: Optional[GenerationDispatcher] = None,
        store: Optional[ReportStore] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize the service with configuration and optional overrides.

        Args:
            config: Service configuration (defaults if omitted)
            catalog: Optional catalog override
            validator: Optional validator override
            dispatcher: Optional dispatcher override (for testing)
            store: Optional report store override (for testing)
            clock: Time source shared by the renderer, dispatcher and store
        """
        # =====================================================================
        # STAGE 1.1: STORE CONFIGURATION
        # =====================================================================
        self._config = config or ServiceConfiguration()
        self._clock = clock

        # =====================================================================
        # STAGE 1.2: CATALOG AND VALIDATOR
        # =====================================================================
        self._catalog = catalog or default_catalog
        self._validator = validator or RequestValidator()

        if self._config.strict_catalog_check:
            self._check_catalog_consistency()

        # =====================================================================
        # STAGE 1.3: DISPATCHER (WITH PROVIDER)
        # =====================================================================
        if dispatcher is not None:
            self._dispatcher = dispatcher
        else:
            self._dispatcher = GenerationDispatcher(
                provider=self._create_provider(self._config),
                validator=self._validator,
                clock=clock,
            )

        # =====================================================================
        # STAGE 1.4: REPORT STORE
        # =====================================================================
        if store is not None:
            self._store = store
        else:
            self._store = ReportStore(
                storage=self._create_storage(self._config),
                storage_key=self._config.storage_key,
                clock=clock,
            )

        logger.info(
            f"DocumentService initialized | "
            f"Provider: {self._config.provider.value} | "
            f"Latency: {self._config.simulate_latency} | "
            f"Storage: {self._config.storage_backend.value}"
        )

    # =========================================================================
    # STAGE 2: GENERATION API
    # =========================================================================

    def generate(self, specialty: str, service_code: Any, raw_notes: Any) -> RenderedDocument:
        """
        Generate a document without saving it.

        Raises:
            UnknownServiceError / InvalidNotesError: Input rejected
            GenerationError: Provider failure
        """
        return self._dispatcher.generate(specialty, service_code, raw_notes)

    async def generate_async(
        self, specialty: str, service_code: Any, raw_notes: Any
    ) -> RenderedDocument:
        return await self._dispatcher.generate_async(specialty, service_code, raw_notes)

    # =========================================================================
    # STAGE 3: PERSISTENCE API
    # =========================================================================

    def save(
        self,
        specialty: str,
        service_code: str,
        notes: Any,
        document: RenderedDocument,
    ) -> Report:
        """
        Save a generated document with the notes it came from.

        Raises:
            ValidationError: Notes or report fields are unusable
            PersistenceError: The medium rejected the write
        """
        return self._store.save(specialty, service_code, notes, document.text)

    def generate_and_save(
        self, specialty: str, service_code: Any, raw_notes: Any
    ) -> Report:
        """
        Generate a document and save it in one call.

        The stored notes are the validated (trimmed) bullets.
        """
        request = self._validator.validate(service_code, raw_notes)
        document = self.generate(specialty, request.service_code, request.notes)
        return self.save(specialty, request.service_code, request.notes, document)

    # =========================================================================
    # STAGE 4: FACTORY METHODS
    # =========================================================================

    @classmethod
    def from_environment(cls, env_file: Optional[str] = None) -> "DocumentService":
        """
        Create the service from environment configuration.

        Raises:
            ConfigurationError: If a setting is invalid
        """
        config = ServiceConfiguration.from_environment(env_file=env_file, validate_on_load=True)
        return cls(config)

    # =========================================================================
    # STAGE 5: PRIVATE HELPERS
    # =========================================================================

    def _create_provider(self, config: ServiceConfiguration) -> DocumentProvider:
        """Create the document provider from configuration."""
        if config.provider != ProviderType.TEMPLATE:
            raise ConfigurationError(
                f"Unsupported provider: {config.provider}",
                context={"supported": [p.value for p in ProviderType]},
            )

        provider: DocumentProvider = TemplateDocumentProvider(
            renderer=TemplateRenderer(self._catalog), clock=self._clock
        )
        if config.simulate_latency:
            provider = LatencySimulatingProvider(
                provider,
                min_delay=config.latency_min_seconds,
                max_delay=config.latency_max_seconds,
            )
        return provider

    def _create_storage(self, config: ServiceConfiguration) -> KeyValueStorage:
        """Create the key-value medium from configuration."""
        if config.storage_backend == StorageBackend.FILE:
            return JsonFileKeyValueStorage(
                config.storage_directory, quota_bytes=config.storage_quota_bytes
            )
        return InMemoryKeyValueStorage(quota_bytes=config.storage_quota_bytes)

    def _check_catalog_consistency(self) -> None:
        """Fail if the catalog exposes services the validator would reject."""
        outside = self._catalog.services_outside(self._validator.allowed_services)
        if outside:
            raise ConfigurationError(
                "Catalog exposes services outside the validator allow-list",
                context={"services": list(outside)},
            )

    # =========================================================================
    # STAGE 6: PROPERTIES
    # =========================================================================

    @property
    def config(self) -> ServiceConfiguration:
        return self._config

    @property
    def catalog(self) -> ServiceCatalog:
        return self._catalog

    @property
    def validator(self) -> RequestValidator:
        return self._validator

    @property
    def dispatcher(self) -> GenerationDispatcher:
        return self._dispatcher

    @property
    def store(self) -> ReportStore:
        return self._store

    def stats(self) -> Tuple[int, int]:
        """(documents generated this session, reports stored)."""
        return self._dispatcher.generation_count, self._store.usage_stats().count
