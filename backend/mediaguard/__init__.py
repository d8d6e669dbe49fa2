"""
MediaGuard: validation and classification of untrusted media uploads.

Library usage:
    from mediaguard import ValidationInput, validate_media_comprehensive

    result = validate_media_comprehensive(
        ValidationInput(filename="photo.jpg", declared_mime_type="image/jpeg", size_bytes=512_000)
    )

The HTTP service lives in ``mediaguard.main`` and is not imported here.
"""

__version__ = "1.0.0"

from mediaguard.core.registry import (
    UnknownCategoryError,
    allowed_types,
    get_profile,
    max_file_size,
)
from mediaguard.models.media import (
    AllowedTypes,
    DimensionInput,
    IssueCode,
    MediaCategory,
    SizeTier,
    SizeValidationOptions,
    ValidationInput,
    ValidationResult,
)
from mediaguard.services import (
    categorize_file_size,
    detect_media_type,
    validate_dimensions,
    validate_file,
    validate_file_size_advanced,
    validate_files,
    validate_media_comprehensive,
    validation_summary,
)
from mediaguard.utils.file_validator import format_file_size


__all__ = [
    "__version__",
    "AllowedTypes",
    "DimensionInput",
    "IssueCode",
    "MediaCategory",
    "SizeTier",
    "SizeValidationOptions",
    "UnknownCategoryError",
    "ValidationInput",
    "ValidationResult",
    "allowed_types",
    "categorize_file_size",
    "detect_media_type",
    "format_file_size",
    "get_profile",
    "max_file_size",
    "validate_dimensions",
    "validate_file",
    "validate_file_size_advanced",
    "validate_files",
    "validate_media_comprehensive",
    "validation_summary",
]
