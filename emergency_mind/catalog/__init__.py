"""
Catalog Layer - Specialty/Service Reference Data

Submodules:
    service_catalog.py → ServiceCatalog + reference-catalog helpers

Dependency Rule:
    This layer depends on: core (constants)
    This layer is used by: generation (generic template), storage (search),
    service facade, CLI

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.catalog.service_catalog import (
    ServiceCatalog,
    default_catalog,
    services_for,
    display_name,
)

__all__ = [
    "ServiceCatalog",
    "default_catalog",
    "services_for",
    "display_name",
]
