"""
Service Catalog - Specialty and Service Lookups

Read-only lookups over the specialty/service reference tables:
    services_for(specialty)  → ordered service codes (empty if unknown)
    display_name(code)       → human-readable name (raw code if unmapped)
    description(code)        → one-line description
    specialty_info(name)     → display name + description

No lookup ever raises. The catalog is consulted by the renderer (generic
template headings), the report store (search), and presentation code.
It is NOT the validator's allow-list; see services_outside().

Usage:
    from emergency_mind.catalog import default_catalog

    default_catalog.services_for("emergency")
    default_catalog.display_name("dama-form")

Author: Emergency-Mind Team
Date: October 2026
"""

from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from emergency_mind.core.constants import (
    DEFAULT_SERVICE_DESCRIPTION,
    SERVICE_DESCRIPTIONS,
    SERVICE_DISPLAY_NAMES,
    SPECIALTY_INFO,
    SPECIALTY_SERVICES,
    UNKNOWN_SPECIALTY_INFO,
)


class ServiceCatalog:
    """
    Static mapping of specialties to services and services to display text.

    What it does:
        Wraps the reference tables in constants.py behind lookup methods
        with safe fallbacks. A deployment can pass its own tables to extend
        the catalog without touching dispatcher or renderer logic.

    Example:
        >>> catalog = ServiceCatalog()
        >>> catalog.services_for("clinic-doctor")
        ('final-report', 'consultation', 'icd-10-finder')
        >>> catalog.display_name("unmapped-code")
        'unmapped-code'
    """

    def __init__(
        self,
        specialty_services: Optional[Mapping[str, Sequence[str]]] = None,
        display_names: Optional[Mapping[str, str]] = None,
        descriptions: Optional[Mapping[str, str]] = None,
        specialty_info: Optional[Mapping[str, Mapping[str, str]]] = None,
    ):
        # Copied so later edits to the caller's dicts don't leak in.
        source = SPECIALTY_SERVICES if specialty_services is None else specialty_services
        self._specialty_services: Dict[str, Tuple[str, ...]] = {
            specialty: tuple(services) for specialty, services in source.items()
        }
        self._display_names: Dict[str, str] = dict(
            SERVICE_DISPLAY_NAMES if display_names is None else display_names
        )
        self._descriptions: Dict[str, str] = dict(
            SERVICE_DESCRIPTIONS if descriptions is None else descriptions
        )
        self._specialty_info: Dict[str, Dict[str, str]] = {
            key: dict(value)
            for key, value in (SPECIALTY_INFO if specialty_info is None else specialty_info).items()
        }

    # =========================================================================
    # STAGE 1: SERVICE LOOKUPS
    # =========================================================================

    def services_for(self, specialty: str) -> Tuple[str, ...]:
        """Ordered service codes for a specialty; empty tuple if unknown."""
        return self._specialty_services.get(specialty, ())

    def display_name(self, service_code: str) -> str:
        """Display name for a service, falling back to the raw code."""
        return self._display_names.get(service_code, service_code)

    def description(self, service_code: str) -> str:
        """One-line description for a service."""
        return self._descriptions.get(service_code, DEFAULT_SERVICE_DESCRIPTION)

    def all_services(self) -> Tuple[str, ...]:
        """Every service code reachable through any specialty, first-seen order."""
        seen: List[str] = []
        for services in self._specialty_services.values():
            for service in services:
                if service not in seen:
                    seen.append(service)
        return tuple(seen)

    # =========================================================================
    # STAGE 2: SPECIALTY LOOKUPS
    # =========================================================================

    def specialties(self) -> Tuple[str, ...]:
        """Specialty codes in catalog order."""
        return tuple(self._specialty_services.keys())

    def specialty_info(self, specialty: str) -> Dict[str, str]:
        """Display name and description for a specialty."""
        return dict(self._specialty_info.get(specialty, UNKNOWN_SPECIALTY_INFO))

    # =========================================================================
    # STAGE 3: CONSISTENCY
    # =========================================================================

    def services_outside(self, allowed_services: Iterable[str]) -> Tuple[str, ...]:
        """
        Catalog services that the given allow-list would reject.

        Used for the optional startup consistency check. An empty result
        means every catalog entry can be generated.
        """
        allowed = set(allowed_services)
        return tuple(service for service in self.all_services() if service not in allowed)


# Module-level instance over the reference tables.
default_catalog = ServiceCatalog()


def services_for(specialty: str) -> Tuple[str, ...]:
    """services_for() on the reference catalog."""
    return default_catalog.services_for(specialty)


def display_name(service_code: str) -> str:
    """display_name() on the reference catalog."""
    return default_catalog.display_name(service_code)
