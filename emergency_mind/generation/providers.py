"""
Document Providers - Protocol and Implementations

Protocol Pattern:
    - DocumentProvider defines the interface the dispatcher depends on
    - TemplateDocumentProvider renders with the deterministic templates
    - LatencySimulatingProvider wraps any provider with an artificial delay

The provider is handed to the dispatcher at construction time. Swapping
providers is a configuration decision, never a per-call one.

Author: Emergency-Mind Team
Date: October 2026
"""

import random
import time
from datetime import datetime
from typing import Callable, Optional, Protocol, Sequence, runtime_checkable

from loguru import logger

from emergency_mind.core.exceptions import ConfigurationError
from emergency_mind.generation.template_renderer import TemplateRenderer
from emergency_mind.utils.timestamps import Clock, utc_now


# =============================================================================
# STAGE 1: DOCUMENT PROVIDER PROTOCOL
# =============================================================================


@runtime_checkable
class DocumentProvider(Protocol):
    """
    Protocol defining the interface for document providers.

    Required Methods:
        generate_report(service_code, notes, now) → document text

    Optional Properties:
        provider_name → short identifier used in logs
    """

    def generate_report(
        self, service_code: str, notes: Sequence[str], now: Optional[datetime] = None
    ) -> str:
        """
        Produce the document text for validated input.

        Args:
            service_code: Allow-listed service code
            notes: Trimmed, non-empty bullets in order
            now: Instant to stamp the document with (provider clock if None)

        Returns:
            Document text
        """
        ...

    @property
    def provider_name(self) -> str:
        """Name of the provider."""
        ...


# =============================================================================
# STAGE 2: TEMPLATE PROVIDER
# =============================================================================


class TemplateDocumentProvider:
    """
    Reference provider backed by TemplateRenderer.

    The injected clock is only read when the caller passes no instant;
    the dispatcher always passes one.
    """

    def __init__(self, renderer: Optional[TemplateRenderer] = None, clock: Clock = utc_now):
        self._renderer = renderer or TemplateRenderer()
        self._clock = clock

    def generate_report(
        self, service_code: str, notes: Sequence[str], now: Optional[datetime] = None
    ) -> str:
        return self._renderer.render(service_code, notes, now or self._clock())

    @property
    def provider_name(self) -> str:
        return "template"


# =============================================================================
# STAGE 3: LATENCY SIMULATION WRAPPER
# =============================================================================


class LatencySimulatingProvider:
    """
    Delays each call to an inner provider by a random amount.

    What it does:
        Sleeps for a duration drawn uniformly from [min_delay, max_delay]
        seconds, then delegates. Output is exactly the inner provider's.
        Used for demos of a slow backend; rendering correctness never
        depends on it.

    Example:
        >>> slow = LatencySimulatingProvider(TemplateDocumentProvider(), 1.0, 3.0)
        >>> slow.generate_report("consultation", ["Referred for chest pain"])
    """

    def __init__(
        self,
        inner: DocumentProvider,
        min_delay: float = 1.0,
        max_delay: float = 3.0,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        if min_delay < 0 or max_delay < min_delay:
            raise ConfigurationError(
                f"Invalid latency range: min={min_delay}, max={max_delay}",
                context={"min": min_delay, "max": max_delay},
            )
        self._inner = inner
        self._min_delay = min_delay
        self._max_delay = max_delay
        self._sleep = sleep
        self._rng = rng or random.Random()

    @property
    def inner(self) -> DocumentProvider:
        """The wrapped provider."""
        return self._inner

    def next_delay(self) -> float:
        """Draw the delay for the next call."""
        return self._rng.uniform(self._min_delay, self._max_delay)

    def generate_report(
        self, service_code: str, notes: Sequence[str], now: Optional[datetime] = None
    ) -> str:
        delay = self.next_delay()
        logger.debug(f"Simulating provider latency | {delay:.2f}s | Service: {service_code}")
        self._sleep(delay)
        return self._inner.generate_report(service_code, notes, now)

    @property
    def provider_name(self) -> str:
        return f"{getattr(self._inner, 'provider_name', 'unknown')}+latency"
