"""
Generation Dispatcher - Validate, Render, Wrap

Composes the request validator and a document provider:
    1. Validate (service code, notes); errors surface verbatim
    2. Ask the provider for text
    3. Wrap the text with the render timestamp

The dispatcher holds no global lock. Callers serialize generation requests
per session; there is no cancellation and no built-in timeout.

Pipeline Position:
    Caller → Validator → [GenerationDispatcher] → Provider → Renderer
                          ^^^^^^^^^^^^^^^^^^^^^^
                          You are here

Author: Emergency-Mind Team
Date: October 2026
"""

import asyncio
from typing import Any, Optional

from loguru import logger

from emergency_mind.core.exceptions import DocumentServiceError, GenerationError
from emergency_mind.core.models import RenderedDocument
from emergency_mind.generation.providers import DocumentProvider, TemplateDocumentProvider
from emergency_mind.validation.request_validator import RequestValidator
from emergency_mind.utils.timestamps import Clock, utc_now


class GenerationDispatcher:
    """
    Orchestrates validation and rendering for one generation request.

    What it does:
        Depends only on the DocumentProvider protocol, so a different
        generation backend can be injected without changing validation or
        orchestration.

    How it works:
        STAGE 1: Validate input (no rendering on failure)
        STAGE 2: Call provider
        STAGE 3: Build RenderedDocument

    Example:
        >>> dispatcher = GenerationDispatcher.with_templates()
        >>> doc = dispatcher.generate("emergency", "final-report", ["BP 140/90"])
        >>> doc.text.startswith("FINAL MEDICAL REPORT")
        True
    """

    def __init__(
        self,
        provider: DocumentProvider,
        validator: Optional[RequestValidator] = None,
        clock: Clock = utc_now,
    ):
        """
        Args:
            provider: Document provider, fixed for this dispatcher's lifetime
            validator: Request validator (default allow-list if omitted)
            clock: Source of the render timestamp
        """
        self._provider = provider
        self._validator = validator or RequestValidator()
        self._clock = clock
        self._generation_count = 0

        logger.debug(
            f"GenerationDispatcher initialized | "
            f"Provider: {getattr(provider, 'provider_name', type(provider).__name__)}"
        )

    @classmethod
    def with_templates(
        cls, validator: Optional[RequestValidator] = None, clock: Clock = utc_now
    ) -> "GenerationDispatcher":
        """Dispatcher over the template provider, sharing one clock."""
        return cls(TemplateDocumentProvider(clock=clock), validator=validator, clock=clock)

    # =========================================================================
    # STAGE 1: MAIN GENERATION API
    # =========================================================================

    def generate(self, specialty: str, service_code: Any, raw_notes: Any) -> RenderedDocument:
        """
        Generate a document.

        Args:
            specialty: Caller's specialty (tagging only; not validated)
            service_code: Requested service code
            raw_notes: Unvalidated bullets

        Returns:
            RenderedDocument with text and render timestamp

        Raises:
            UnknownServiceError / InvalidNotesError: Input rejected
            GenerationError: Provider failed or returned no text
        """
        # =====================================================================
        # STAGE 1.1: VALIDATE
        # =====================================================================
        request = self._validator.validate(service_code, raw_notes)

        logger.info(
            f"Generating {request.service_code} | "
            f"Specialty: {specialty} | "
            f"Bullets: {request.note_count}"
        )

        # =====================================================================
        # STAGE 1.2: CALL PROVIDER
        # =====================================================================
        # One clock read stamps both the text and rendered_at
        rendered_at = self._clock()
        try:
            text = self._provider.generate_report(
                request.service_code, request.notes, rendered_at
            )
        except DocumentServiceError:
            raise
        except Exception as e:
            logger.exception(f"Provider failed for {request.service_code}")
            raise GenerationError(
                f"Unexpected error during generation: {e}",
                context={"service_code": request.service_code},
            ) from e

        if not text or not text.strip():
            raise GenerationError(
                "Provider returned empty document",
                context={"service_code": request.service_code},
            )

        # =====================================================================
        # STAGE 1.3: WRAP RESULT
        # =====================================================================
        self._generation_count += 1
        document = RenderedDocument(
            text=text,
            rendered_at=rendered_at,
            service_code=request.service_code,
            specialty=specialty,
        )

        logger.info(
            f"Generated {request.service_code} | Length: {len(text)} chars"
        )
        return document

    async def generate_async(
        self, specialty: str, service_code: Any, raw_notes: Any
    ) -> RenderedDocument:
        """generate() run in a worker thread so a slow provider doesn't block the loop."""
        return await asyncio.to_thread(self.generate, specialty, service_code, raw_notes)

    # =========================================================================
    # STAGE 2: PROPERTIES
    # =========================================================================

    @property
    def provider(self) -> DocumentProvider:
        """The injected provider."""
        return self._provider

    @property
    def validator(self) -> RequestValidator:
        """The request validator."""
        return self._validator

    @property
    def generation_count(self) -> int:
        """Number of documents generated successfully."""
        return self._generation_count
