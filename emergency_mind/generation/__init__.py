"""
Generation Layer - Template Rendering and Dispatch

Submodules:
    templates.py         → Fixed section skeletons per service
    template_renderer.py → TemplateRenderer (pure render function)
    providers.py         → DocumentProvider protocol + implementations
    dispatcher.py        → GenerationDispatcher (validate → provider → wrap)

Dependency Rule:
    This layer depends on: core, catalog, validation, utils
    This layer is used by: service facade, CLI

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.generation.template_renderer import TemplateRenderer, render
from emergency_mind.generation.providers import (
    DocumentProvider,
    TemplateDocumentProvider,
    LatencySimulatingProvider,
)
from emergency_mind.generation.dispatcher import GenerationDispatcher

__all__ = [
    "TemplateRenderer",
    "render",
    "DocumentProvider",
    "TemplateDocumentProvider",
    "LatencySimulatingProvider",
    "GenerationDispatcher",
]
