"""
Utilities Package for MediaGuard.

Modules:
--------
file_validator:
    Per-check validators returning Finding lists:
    - Extension and MIME allow-listing against a category
    - Hard size limits and the very-small-file warning
    - Magic-number inspection of a byte prefix
    - Filename security heuristics
    - format_file_size for human-readable sizes

logger:
    Structured logging configuration:
    - JSONFormatter / StandardFormatter
    - setup_logging for application-wide configuration
    - add_log_context for per-upload context fields
"""

from mediaguard.utils.file_validator import (
    extract_extension,
    format_file_size,
    is_dangerous_extension,
    match_signature,
    validate_extension,
    validate_file_size,
    validate_filename_security,
    validate_magic_numbers,
    validate_mime_type,
)
from mediaguard.utils.logger import add_log_context, setup_logging


__all__ = [
    "add_log_context",
    "extract_extension",
    "format_file_size",
    "is_dangerous_extension",
    "match_signature",
    "setup_logging",
    "validate_extension",
    "validate_file_size",
    "validate_filename_security",
    "validate_magic_numbers",
    "validate_mime_type",
]
