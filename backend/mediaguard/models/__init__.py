"""
Pydantic models for MediaGuard.

The registry, validators and API all exchange these frozen value types.
"""

from mediaguard.models.media import (
    AllowedTypes,
    CategoryProfile,
    DimensionInput,
    Finding,
    IssueCode,
    MediaCategory,
    MediaConstraints,
    Severity,
    Signature,
    SizeTier,
    SizeTiers,
    SizeValidationOptions,
    ValidationInput,
    ValidationResult,
)


__all__ = [
    "AllowedTypes",
    "CategoryProfile",
    "DimensionInput",
    "Finding",
    "IssueCode",
    "MediaCategory",
    "MediaConstraints",
    "Severity",
    "Signature",
    "SizeTier",
    "SizeTiers",
    "SizeValidationOptions",
    "ValidationInput",
    "ValidationResult",
]
