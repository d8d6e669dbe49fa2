"""
Validation services for MediaGuard.

- type_detection: (filename, MIME) -> MediaCategory
- advanced_validation: dimension/duration checks and advisory size tiers
- media_validation_service: the aggregating entry points
"""

from mediaguard.services.advanced_validation import (
    categorize_file_size,
    optimization_suggestions,
    validate_dimensions,
    validate_duration,
    validate_file_size_advanced,
)
from mediaguard.services.media_validation_service import (
    validate_file,
    validate_files,
    validate_media_comprehensive,
    validation_summary,
)
from mediaguard.services.type_detection import detect_media_type


__all__ = [
    "categorize_file_size",
    "detect_media_type",
    "optimization_suggestions",
    "validate_dimensions",
    "validate_duration",
    "validate_file",
    "validate_file_size_advanced",
    "validate_files",
    "validate_media_comprehensive",
    "validation_summary",
]
