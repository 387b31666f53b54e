"""
Storage Layer - Report Persistence

Submodules:
    backends.py     → KeyValueStorage protocol + in-memory and JSON file media
    report_store.py → ReportStore (transactional whole-collection writes)

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.storage.backends import (
    KeyValueStorage,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
)
from emergency_mind.storage.report_store import (
    ReportStore,
    serialize_reports,
    deserialize_reports,
)

__all__ = [
    "KeyValueStorage",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "ReportStore",
    "serialize_reports",
    "deserialize_reports",
]
