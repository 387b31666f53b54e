"""
Template Renderer - Deterministic Document Rendering

Renders a document from (service code, notes, timestamp) using the fixed
skeletons in templates.py. Given identical inputs the output is
byte-identical: the renderer reads no clock, draws no random numbers, and
keeps no state between calls.

Pipeline Position:
    Validator → Dispatcher → Provider → [TemplateRenderer]
                                         ^^^^^^^^^^^^^^^^
                                         You are here

Author: Emergency-Mind Team
Date: October 2026
"""

from datetime import datetime
from typing import Optional, Sequence

from emergency_mind.catalog.service_catalog import ServiceCatalog, default_catalog
from emergency_mind.core.constants import BULLET_MARKER
from emergency_mind.generation.templates import GENERIC_TEMPLATE, SERVICE_TEMPLATES
from emergency_mind.utils.timestamps import format_display_date, format_iso_timestamp


def format_bullets(notes: Sequence[str]) -> str:
    """One "• note" line per note, in input order."""
    return "\n".join(f"{BULLET_MARKER} {note}" for note in notes)


class TemplateRenderer:
    """
    Renders medico-legal documents from fixed templates.

    What it does:
        Selects a template by exact service-code match, falling back to the
        generic template titled with the catalog display name, and fills in
        the bullets, timestamp, and date line.

    Example:
        >>> renderer = TemplateRenderer()
        >>> text = renderer.render("final-report", ["BP 140/90"], now)
        >>> text.splitlines()[0]
        'FINAL MEDICAL REPORT'
    """

    def __init__(self, catalog: Optional[ServiceCatalog] = None):
        """
        Args:
            catalog: Source of display names for the generic template
        """
        self._catalog = catalog or default_catalog

    def has_template(self, service_code: str) -> bool:
        """Whether the code has a dedicated (non-generic) template."""
        return service_code in SERVICE_TEMPLATES

    def render(self, service_code: str, notes: Sequence[str], now: datetime) -> str:
        """
        Render a document.

        Args:
            service_code: Selects the template (exact match)
            notes: Bullets, rendered in the given order
            now: Generation timestamp written into the document

        Returns:
            The rendered document text
        """
        fields = {
            "bullets": format_bullets(notes),
            "timestamp": format_iso_timestamp(now),
            "date": format_display_date(now),
        }

        template = SERVICE_TEMPLATES.get(service_code)
        if template is None:
            template = GENERIC_TEMPLATE
            fields["title"] = self._catalog.display_name(service_code).upper()

        return template.format(**fields)


_default_renderer = TemplateRenderer()


def render(service_code: str, notes: Sequence[str], now: datetime) -> str:
    """render() on a renderer over the reference catalog."""
    return _default_renderer.render(service_code, notes, now)
