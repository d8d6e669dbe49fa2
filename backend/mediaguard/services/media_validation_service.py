"""
MediaGuard Media Validation Service

This module aggregates the individual validators into the two public
entry points used by upload handlers:

- validate_file: type detection, then extension, MIME, basic size, magic
  number (when a byte prefix is supplied) and filename security checks
- validate_media_comprehensive: validate_file plus dimension/duration and
  advisory size-tier checks, merged into a single de-duplicated result

Every applicable validator always runs. Nothing short-circuits on the first
failure, so one call reports every problem with an upload. Validation
failures are returned, never raised.

Usage:
    from mediaguard.services.media_validation_service import validate_media_comprehensive

    result = validate_media_comprehensive(
        ValidationInput(
            filename="photo.jpg",
            declared_mime_type="image/jpeg",
            size_bytes=512_000,
            byte_prefix=first_16_bytes,
            width=1920,
            height=1080,
        )
    )
    if not result.is_valid:
        reject(result.errors)
"""

import logging

from collections.abc import Iterable

from mediaguard.models.media import (
    DimensionInput,
    Finding,
    IssueCode,
    SizeValidationOptions,
    ValidationInput,
    ValidationResult,
)
from mediaguard.services.advanced_validation import (
    validate_dimensions,
    validate_file_size_advanced,
)
from mediaguard.services.type_detection import detect_media_type
from mediaguard.utils.file_validator import (
    extract_extension,
    validate_extension,
    validate_file_size,
    validate_filename_security,
    validate_magic_numbers,
    validate_mime_type,
)


# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# BASIC VALIDATION
# =============================================================================


def validate_file(file_input: ValidationInput) -> ValidationResult:
    """
    Validate one upload's filename, declared type, size and byte prefix.

    Type detection runs once; every other check runs against the detected
    category regardless of earlier failures. A supplied ``expected_category``
    that differs from the detected one is an additional error.

    Args:
        file_input: Data describing the upload attempt

    Returns:
        ValidationResult with detected category, MIME type and extension
    """
    extension = extract_extension(file_input.filename)
    category = detect_media_type(file_input.filename, file_input.declared_mime_type)

    findings: list[Finding] = []

    expected = file_input.expected_category
    if expected is not None and expected is not category:
        findings.append(
            Finding.error(
                IssueCode.TYPE_MISMATCH,
                f"File type mismatch: expected {expected.value}, detected {category.value}",
            )
        )

    findings.extend(validate_extension(extension, category))
    findings.extend(validate_mime_type(file_input.declared_mime_type, category))
    findings.extend(validate_file_size(file_input.size_bytes, category))

    # Signature mismatches are warnings only
    if file_input.byte_prefix is not None:
        findings.extend(validate_magic_numbers(file_input.byte_prefix, category))

    findings.extend(validate_filename_security(file_input.filename))

    result = ValidationResult.from_findings(
        findings,
        detected_category=category,
        detected_mime_type=file_input.declared_mime_type,
        detected_extension=extension,
    )

    logger.debug(
        "Validated %r as %s: %d error(s), %d warning(s)",
        file_input.filename,
        category.value,
        len(result.errors),
        len(result.warnings),
    )
    return result


# =============================================================================
# COMPREHENSIVE VALIDATION
# =============================================================================


def validate_media_comprehensive(
    file_input: ValidationInput,
    dimensions: DimensionInput | None = None,
    options: SizeValidationOptions | None = None,
) -> ValidationResult:
    """
    Run basic, dimension/duration and advanced size validation together.

    Dimension checks run when ``dimensions`` is given or when the input itself
    carries width, height or duration. They use ``dimensions.category`` when
    set, otherwise the expected category, otherwise the detected one. The
    advanced size check uses the expected category when given, otherwise the
    detected one.

    Args:
        file_input: Data describing the upload attempt
        dimensions: Optional explicit dimension data
        options: Optional advanced size options

    Returns:
        Union of all findings with duplicate messages removed; valid only if
        every part produced no errors
    """
    base = validate_file(file_input)
    target_category = file_input.expected_category or base.detected_category

    if dimensions is None and file_input.has_dimension_data:
        dimensions = DimensionInput(
            width=file_input.width,
            height=file_input.height,
            duration=file_input.duration,
        )

    parts: list[ValidationResult] = []

    if dimensions is not None:
        dimension_category = dimensions.category or target_category
        parts.append(
            ValidationResult.from_findings(
                validate_dimensions(dimensions, dimension_category),
                detected_category=base.detected_category,
            )
        )

    parts.append(
        ValidationResult.from_findings(
            validate_file_size_advanced(file_input.size_bytes, target_category, options),
            detected_category=base.detected_category,
        )
    )

    return base.merge(*parts)


def validate_files(file_inputs: Iterable[ValidationInput]) -> list[ValidationResult]:
    """Validate several uploads independently, preserving input order."""
    return [validate_file(file_input) for file_input in file_inputs]


def validation_summary(result: ValidationResult) -> str:
    """
    One-line description of a result for display next to an upload.

    Example:
        >>> validation_summary(ValidationResult())
        'File validation passed with no issues'
    """
    if not result.is_valid:
        return f"File validation failed with {len(result.errors)} error(s)"
    if result.warnings:
        return f"File validation passed with {len(result.warnings)} recommendation(s)"
    return "File validation passed with no issues"
