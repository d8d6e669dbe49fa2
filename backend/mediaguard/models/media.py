"""
Media validation models for MediaGuard.

This module defines the value types shared by every validator:

- MediaCategory: the closed set of media classes an upload is sorted into
- CategoryProfile: the immutable per-category rules held by the registry
- ValidationInput / DimensionInput / SizeValidationOptions: caller-supplied data
- Finding: a single error or warning produced by one validator
- ValidationResult: the merged, de-duplicated verdict handed back to callers

All models are frozen. A ValidationResult derives ``is_valid`` from its
errors, so a result with warnings only is always valid.
"""

from enum import Enum
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# =============================================================================
# ENUMS
# =============================================================================


class MediaCategory(str, Enum):
    """
    Coarse media class of an upload.

    Declaration order is the registry order used by type detection:
    image, video, audio, document.
    """

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    DOCUMENT = "document"


class SizeTier(str, Enum):
    """Size bucket of a file relative to its category's thresholds."""

    EXCELLENT = "excellent"
    GOOD = "good"
    ACCEPTABLE = "acceptable"
    LARGE = "large"
    TOO_LARGE = "too_large"


class Severity(str, Enum):
    """Whether a finding blocks acceptance (error) or is advisory (warning)."""

    ERROR = "error"
    WARNING = "warning"


class IssueCode(str, Enum):
    """
    Machine-readable code attached to every finding.

    Hard errors block acceptance; soft warnings are advisory only.
    """

    # Hard errors
    NO_EXTENSION = "no_extension"
    INVALID_EXTENSION = "invalid_extension"
    MISSING_MIME_TYPE = "missing_mime_type"
    INVALID_MIME_TYPE = "invalid_mime_type"
    NON_POSITIVE_SIZE = "non_positive_size"
    FILE_TOO_LARGE = "file_too_large"
    TYPE_MISMATCH = "type_mismatch"
    DANGEROUS_EXTENSION = "dangerous_extension"
    FILENAME_TOO_LONG = "filename_too_long"
    NULL_BYTE_IN_FILENAME = "null_byte_in_filename"
    DIMENSION_OUT_OF_RANGE = "dimension_out_of_range"
    DURATION_OUT_OF_RANGE = "duration_out_of_range"

    # Soft warnings
    SIGNATURE_MISMATCH = "signature_mismatch"
    BUFFER_TOO_SMALL_TO_VERIFY = "buffer_too_small_to_verify"
    FILE_VERY_SMALL = "file_very_small"
    SIZE_TIER_ADVICE = "size_tier_advice"
    OPTIMIZATION_SUGGESTION = "optimization_suggestion"
    COMPRESSION_ELIGIBLE = "compression_eligible"
    RECOMMENDED_DIMENSION_EXCEEDED = "recommended_dimension_exceeded"
    UNUSUAL_ASPECT_RATIO = "unusual_aspect_ratio"
    COMMON_ASPECT_RATIO_DETECTED = "common_aspect_ratio_detected"
    DOUBLE_EXTENSION_SUSPICION = "double_extension_suspicion"


# =============================================================================
# REGISTRY MODELS
# =============================================================================


class Signature(BaseModel):
    """A magic-number prefix and the format label it identifies."""

    model_config = ConfigDict(frozen=True)

    prefix: bytes = Field(..., min_length=1)
    label: str

    def matches(self, data: bytes) -> bool:
        return data.startswith(self.prefix)


class SizeTiers(BaseModel):
    """
    Upper byte bounds of the first four size tiers.

    A size equal to a bound belongs to that tier; anything above ``large``
    is ``too_large``.
    """

    model_config = ConfigDict(frozen=True)

    excellent: int = Field(..., gt=0)
    good: int = Field(..., gt=0)
    acceptable: int = Field(..., gt=0)
    large: int = Field(..., gt=0)

    @model_validator(mode="after")
    def check_ascending(self) -> "SizeTiers":
        if not self.excellent < self.good < self.acceptable < self.large:
            raise ValueError("size tier thresholds must be strictly ascending")
        return self


class MediaConstraints(BaseModel):
    """Dimension and duration limits; unset fields are not checked."""

    model_config = ConfigDict(frozen=True)

    min_width: int | None = None
    max_width: int | None = None
    min_height: int | None = None
    max_height: int | None = None
    recommended_max_width: int | None = None
    recommended_max_height: int | None = None
    min_aspect_ratio: float | None = None
    max_aspect_ratio: float | None = None
    min_duration: float | None = None
    max_duration: float | None = None
    recommended_max_duration: float | None = None

    @property
    def has_dimensions(self) -> bool:
        return self.max_width is not None or self.max_height is not None

    @property
    def has_duration(self) -> bool:
        return self.max_duration is not None


class CategoryProfile(BaseModel):
    """
    Immutable validation rules for one media category.

    Attributes:
        category: The category this profile describes
        extensions: Allowed extensions, lowercase and without the leading dot
        mime_types: Allowed MIME types, lowercase
        max_size_bytes: Hard upper size limit
        signatures: Known magic numbers, checked in order
        size_tiers: Thresholds for advisory size classification
        constraints: Dimension/duration limits (None for documents)
    """

    model_config = ConfigDict(frozen=True)

    category: MediaCategory
    extensions: tuple[str, ...]
    mime_types: tuple[str, ...]
    max_size_bytes: int = Field(..., gt=0)
    signatures: tuple[Signature, ...] = ()
    size_tiers: SizeTiers
    constraints: MediaConstraints | None = None


class AllowedTypes(BaseModel):
    """Allowed extensions and MIME types of a category, for upload-form hints."""

    model_config = ConfigDict(frozen=True)

    extensions: list[str]
    mime_types: list[str]


# =============================================================================
# INPUT MODELS
# =============================================================================


class ValidationInput(BaseModel):
    """
    Everything known about one upload attempt before it is persisted.

    Only ``byte_prefix`` touches file content, and only its first 16 bytes
    are ever inspected.
    """

    model_config = ConfigDict(frozen=True)

    filename: str
    declared_mime_type: str = ""
    size_bytes: int
    byte_prefix: bytes | None = None
    expected_category: MediaCategory | None = None
    width: int | None = None
    height: int | None = None
    duration: float | None = Field(default=None, allow_inf_nan=False)

    @property
    def has_dimension_data(self) -> bool:
        return any(value is not None for value in (self.width, self.height, self.duration))


class DimensionInput(BaseModel):
    """Width/height/duration to check; ``category`` overrides the detected one."""

    model_config = ConfigDict(frozen=True)

    width: int | None = None
    height: int | None = None
    duration: float | None = Field(default=None, allow_inf_nan=False)
    category: MediaCategory | None = None


class SizeValidationOptions(BaseModel):
    """Knobs for the advanced size check."""

    model_config = ConfigDict(frozen=True)

    recommend_optimization: bool = False
    allow_compression: bool = False


# =============================================================================
# RESULT MODELS
# =============================================================================


class Finding(BaseModel):
    """A single error or warning produced by one validator."""

    model_config = ConfigDict(frozen=True)

    code: IssueCode
    severity: Severity
    message: str

    @classmethod
    def error(cls, code: IssueCode, message: str) -> "Finding":
        return cls(code=code, severity=Severity.ERROR, message=message)

    @classmethod
    def warning(cls, code: IssueCode, message: str) -> "Finding":
        return cls(code=code, severity=Severity.WARNING, message=message)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR


def _unique(items: Iterable) -> tuple:
    # dict preserves first-seen order
    return tuple(dict.fromkeys(items))


class ValidationResult(BaseModel):
    """
    Merged verdict for one upload.

    ``errors`` and ``warnings`` hold unique messages in first-seen order;
    ``error_codes`` and ``warning_codes`` hold the matching unique codes so
    callers can branch without parsing text.

    Example:
        ```python
        result = validate_file(ValidationInput(filename="a.png", ...))
        if not result.is_valid:
            print(result.errors)
        ```
    """

    model_config = ConfigDict(frozen=True)

    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    error_codes: tuple[IssueCode, ...] = ()
    warning_codes: tuple[IssueCode, ...] = ()
    detected_category: MediaCategory = MediaCategory.DOCUMENT
    detected_mime_type: str = ""
    detected_extension: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors

    @classmethod
    def from_findings(
        cls,
        findings: Iterable[Finding],
        detected_category: MediaCategory = MediaCategory.DOCUMENT,
        detected_mime_type: str = "",
        detected_extension: str = "",
    ) -> "ValidationResult":
        """Build a result from raw findings, dropping duplicate messages."""
        findings = list(findings)
        errors = [f for f in findings if f.is_error]
        warnings = [f for f in findings if not f.is_error]
        return cls(
            errors=_unique(f.message for f in errors),
            warnings=_unique(f.message for f in warnings),
            error_codes=_unique(f.code for f in errors),
            warning_codes=_unique(f.code for f in warnings),
            detected_category=detected_category,
            detected_mime_type=detected_mime_type,
            detected_extension=detected_extension,
        )

    def merge(self, *others: "ValidationResult") -> "ValidationResult":
        """
        Union this result with others, keeping this result's detected fields.

        Messages are compared as exact, case-sensitive strings.
        """
        results = (self, *others)
        return ValidationResult(
            errors=_unique(m for r in results for m in r.errors),
            warnings=_unique(m for r in results for m in r.warnings),
            error_codes=_unique(c for r in results for c in r.error_codes),
            warning_codes=_unique(c for r in results for c in r.warning_codes),
            detected_category=self.detected_category,
            detected_mime_type=self.detected_mime_type,
            detected_extension=self.detected_extension,
        )
