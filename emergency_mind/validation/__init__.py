"""
Validation Layer - Generation Request Validation

Submodules:
    request_validator.py → RequestValidator, RequestChecks, validate()

Dependency Rule:
    This layer depends on: core
    This layer is used by: generation (dispatcher)

Author: Emergency-Mind Team
Date: October 2026
"""

from emergency_mind.validation.request_validator import (
    RequestValidator,
    RequestChecks,
    validate,
)

__all__ = [
    "RequestValidator",
    "RequestChecks",
    "validate",
]
