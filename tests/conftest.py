"""
Shared fixtures for the Emergency-Mind test suite.

Every fixture uses a frozen clock and in-memory storage unless a test asks
for the file backend, so no test depends on wall-clock time or sleeps.
"""

from datetime import datetime, timezone
from itertools import count

import pytest

from emergency_mind.core.config import ServiceConfiguration
from emergency_mind.service import DocumentService
from emergency_mind.storage.backends import InMemoryKeyValueStorage
from emergency_mind.storage.report_store import ReportStore


FROZEN_NOW = datetime(2026, 10, 19, 8, 30, 15, 123000, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# CLOCK / IDS
# ---------------------------------------------------------------------------


@pytest.fixture
def frozen_now():
    return FROZEN_NOW


@pytest.fixture
def clock():
    """Clock that always returns FROZEN_NOW."""
    return lambda: FROZEN_NOW


@pytest.fixture
def id_factory():
    """Deterministic report ids: report-1, report-2, ..."""
    counter = count(1)
    return lambda: f"report-{next(counter)}"


# ---------------------------------------------------------------------------
# STORAGE
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def store(memory_storage, clock, id_factory):
    return ReportStore(memory_storage, clock=clock, id_factory=id_factory)


# ---------------------------------------------------------------------------
# SERVICE
# ---------------------------------------------------------------------------


@pytest.fixture
def service(store, clock):
    return DocumentService(ServiceConfiguration(), store=store, clock=clock)
