"""
Request Validator - Generation Request Shape Checks

Checks a (service code, notes) pair before it reaches the dispatcher:
    1. Service code must be on the validator's allow-list
    2. Notes must be a non-empty list of non-blank strings

On success the notes are trimmed and returned in their original order.
The validator is pure: no I/O, no state beyond the allow-list.

Pipeline Position:
    Caller → [RequestValidator] → Dispatcher → Provider → Renderer
              ^^^^^^^^^^^^^^^^^^
              You are here

Author: Emergency-Mind Team
Date: October 2026
"""

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from emergency_mind.core.constants import VALIDATOR_ALLOWED_SERVICES
from emergency_mind.core.exceptions import InvalidNotesError, UnknownServiceError
from emergency_mind.core.models import GenerationRequest


# =============================================================================
# STAGE 1: RULE CHECKS (STATIC CLASS)
# =============================================================================


class RequestChecks:
    """
    Static checks used by RequestValidator.

    Each check raises the matching ValidationError subclass or returns the
    normalised value.
    """

    @staticmethod
    def check_service(service_code: Any, allowed_services: Sequence[str]) -> str:
        """
        Ensure the service code is on the allow-list.

        Raises:
            UnknownServiceError: If the code is not allow-listed
        """
        if not isinstance(service_code, str) or service_code not in allowed_services:
            raise UnknownServiceError(str(service_code), allowed_services)
        return service_code

    @staticmethod
    def check_notes(raw_notes: Any) -> Tuple[str, ...]:
        """
        Ensure notes form a non-empty sequence of non-blank strings.

        A bare string is rejected even though it is technically a sequence;
        iterating it would turn every character into a bullet.

        Returns:
            Trimmed notes, original order, no deduplication

        Raises:
            InvalidNotesError: On the first problem found
        """
        if isinstance(raw_notes, (str, bytes, bytearray)) or not isinstance(
            raw_notes, (list, tuple)
        ):
            raise InvalidNotesError("notes must be a list of strings")

        if len(raw_notes) == 0:
            raise InvalidNotesError("At least one bullet point is required")

        trimmed: List[str] = []
        for index, note in enumerate(raw_notes):
            if not isinstance(note, str):
                raise InvalidNotesError("Bullet point must be a string", index=index)
            stripped = note.strip()
            if not stripped:
                raise InvalidNotesError("Bullet point cannot be empty", index=index)
            trimmed.append(stripped)

        return tuple(trimmed)


# =============================================================================
# STAGE 2: REQUEST VALIDATOR
# =============================================================================


class RequestValidator:
    """
    Validates generation requests against a service allow-list.

    What it does:
        Turns raw caller input into a GenerationRequest, or raises
        UnknownServiceError / InvalidNotesError with enough detail for the
        caller to fix the input.

    When to use:
        - Always, before dispatching a generation. The dispatcher owns one.

    Example:
        >>> validator = RequestValidator()
        >>> request = validator.validate("final-report", ["  BP 140/90 "])
        >>> request.notes
        ('BP 140/90',)
    """

    def __init__(self, allowed_services: Optional[Iterable[str]] = None):
        """
        Args:
            allowed_services: Explicit allow-list (defaults to the seven
                templated services). Independent of the service catalog.
        """
        self._allowed_services: Tuple[str, ...] = tuple(
            VALIDATOR_ALLOWED_SERVICES if allowed_services is None else allowed_services
        )

    @property
    def allowed_services(self) -> Tuple[str, ...]:
        """Service codes this validator accepts."""
        return self._allowed_services

    def validate(self, service_code: Any, raw_notes: Any) -> GenerationRequest:
        """
        Validate a request.

        Algorithm:
            1. Check service code against allow-list
            2. Check notes shape and trim each note

        Raises:
            UnknownServiceError: Service code not allow-listed
            InvalidNotesError: Notes missing, empty, or blank
        """
        try:
            service = RequestChecks.check_service(service_code, self._allowed_services)
            notes = RequestChecks.check_notes(raw_notes)
        except (UnknownServiceError, InvalidNotesError) as e:
            logger.warning(f"Generation request rejected | Kind: {e.kind} | {e.message}")
            raise

        return GenerationRequest(service_code=service, notes=notes)


_default_validator = RequestValidator()


def validate(service_code: Any, raw_notes: Any) -> GenerationRequest:
    """Validate with the default allow-list."""
    return _default_validator.validate(service_code, raw_notes)
