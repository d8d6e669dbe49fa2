"""
Advanced media checks for MediaGuard: dimensions, durations and size tiers.

These checks refine the basic file validation with information that only
some callers have (pixel dimensions, playback duration) and with advisory
size classification. Size tiers and optimization suggestions are always
warnings; only out-of-range dimensions or durations are errors.
"""

import math

from mediaguard.core.registry import BYTES_PER_MB, get_profile
from mediaguard.models.media import (
    DimensionInput,
    Finding,
    IssueCode,
    MediaCategory,
    MediaConstraints,
    SizeTier,
    SizeValidationOptions,
)
from mediaguard.utils.file_validator import format_file_size, validate_file_size


# =============================================================================
# CONSTANTS
# =============================================================================

# Well-known aspect ratios, checked in order; the first within tolerance wins
COMMON_ASPECT_RATIOS: tuple[tuple[float, str], ...] = (
    (16 / 9, "16:9 (widescreen)"),
    (4 / 3, "4:3 (standard)"),
    (1 / 1, "1:1 (square)"),
    (3 / 2, "3:2 (photo)"),
    (21 / 9, "21:9 (ultrawide)"),
)

ASPECT_RATIO_TOLERANCE: float = 0.05

_OVERSIZED_TIERS = frozenset({SizeTier.LARGE, SizeTier.TOO_LARGE})

_BASE_SUGGESTIONS: dict[MediaCategory, tuple[str, ...]] = {
    MediaCategory.IMAGE: (
        "Consider using WebP format for better compression",
        "Reduce image dimensions if displaying at smaller sizes",
        "Use JPEG for photos, PNG for graphics with transparency",
    ),
    MediaCategory.VIDEO: (
        "Use H.264 codec for better compression and compatibility",
        "Consider reducing resolution or frame rate",
        "Use appropriate bitrate for the content type",
    ),
    MediaCategory.AUDIO: (
        "Use MP3 or AAC format for better compression",
        "Consider reducing bitrate for voice content",
        "Use appropriate sample rate (44.1kHz for music, 22kHz for voice)",
    ),
    MediaCategory.DOCUMENT: (
        "Compress PDF files to reduce size",
        "Remove unnecessary metadata and embedded objects",
        "Consider using PDF/A format for archival purposes",
    ),
}


def _num(value: float) -> int | float:
    # 3600.0 -> 3600 so messages read "3600s", not "3600.0s"
    return int(value) if float(value).is_integer() else value


# =============================================================================
# DIMENSION VALIDATION
# =============================================================================


def _check_axis(
    axis: str,
    value: int | None,
    minimum: int | None,
    maximum: int | None,
    recommended: int | None,
) -> list[Finding]:
    if value is None or minimum is None or maximum is None:
        return []

    if value < minimum or value > maximum:
        return [
            Finding.error(
                IssueCode.DIMENSION_OUT_OF_RANGE,
                f"Invalid {axis}: {value}px. Must be between {minimum}px and {maximum}px",
            )
        ]

    if recommended is not None and value > recommended:
        return [
            Finding.warning(
                IssueCode.RECOMMENDED_DIMENSION_EXCEEDED,
                f"{axis.capitalize()} {value}px is larger than recommended maximum of "
                f"{recommended}px. Consider resizing for better performance.",
            )
        ]

    return []


def _check_aspect_ratio(ratio: float, constraints: MediaConstraints) -> list[Finding]:
    findings: list[Finding] = []

    if constraints.min_aspect_ratio is not None and constraints.max_aspect_ratio is not None:
        if not constraints.min_aspect_ratio <= ratio <= constraints.max_aspect_ratio:
            findings.append(
                Finding.warning(
                    IssueCode.UNUSUAL_ASPECT_RATIO,
                    f"Unusual aspect ratio: {ratio:.2f}. "
                    "Very wide or very tall images may not display well.",
                )
            )

    for common_ratio, name in COMMON_ASPECT_RATIOS:
        if abs(ratio - common_ratio) < ASPECT_RATIO_TOLERANCE:
            findings.append(
                Finding.warning(
                    IssueCode.COMMON_ASPECT_RATIO_DETECTED,
                    f"Detected {name} aspect ratio",
                )
            )
            break

    return findings


def validate_duration(duration: float, category: MediaCategory) -> list[Finding]:
    """
    Validate playback duration (seconds) for video or audio.

    Returns an error outside [min, max], a warning between the recommended
    maximum and the hard maximum, nothing otherwise. Categories without
    duration limits yield no findings.
    """
    constraints = get_profile(category).constraints
    if constraints is None or not constraints.has_duration:
        return []

    kind = category.value.capitalize()
    if not math.isfinite(duration):
        return [
            Finding.error(
                IssueCode.DURATION_OUT_OF_RANGE,
                f"{kind} duration {duration}s is not a valid number of seconds",
            )
        ]

    shown = _num(duration)
    minimum = _num(constraints.min_duration)
    maximum = _num(constraints.max_duration)

    if duration < constraints.min_duration:
        return [
            Finding.error(
                IssueCode.DURATION_OUT_OF_RANGE,
                f"{kind} duration {shown}s is too short. Minimum duration is {minimum}s",
            )
        ]
    if duration > constraints.max_duration:
        return [
            Finding.error(
                IssueCode.DURATION_OUT_OF_RANGE,
                f"{kind} duration {shown}s exceeds maximum allowed duration of {maximum}s",
            )
        ]
    if (
        constraints.recommended_max_duration is not None
        and duration > constraints.recommended_max_duration
    ):
        advice = "Consider splitting into shorter segments"
        if category == MediaCategory.VIDEO:
            advice += " for better user experience"
        return [
            Finding.warning(
                IssueCode.RECOMMENDED_DIMENSION_EXCEEDED,
                f"{kind} duration {shown}s is longer than recommended maximum of "
                f"{_num(constraints.recommended_max_duration)}s. {advice}.",
            )
        ]
    return []


def validate_dimensions(dimensions: DimensionInput, category: MediaCategory) -> list[Finding]:
    """
    Validate width, height, aspect ratio and duration for a category.

    - Image: width/height ranges, recommended maxima, aspect-ratio sanity
      and common-ratio detection
    - Video: width/height as for images (without the sanity bounds) plus
      duration
    - Audio: duration only
    - Document: exempt

    Args:
        dimensions: The measured values; unset values are skipped
        category: Category whose constraints apply

    Returns:
        Findings from every applicable check
    """
    constraints = get_profile(category).constraints
    if constraints is None:
        return []

    findings: list[Finding] = []

    if constraints.has_dimensions:
        findings.extend(
            _check_axis(
                "width",
                dimensions.width,
                constraints.min_width,
                constraints.max_width,
                constraints.recommended_max_width,
            )
        )
        findings.extend(
            _check_axis(
                "height",
                dimensions.height,
                constraints.min_height,
                constraints.max_height,
                constraints.recommended_max_height,
            )
        )
        if dimensions.width and dimensions.height:
            findings.extend(
                _check_aspect_ratio(dimensions.width / dimensions.height, constraints)
            )

    if constraints.has_duration and dimensions.duration is not None:
        findings.extend(validate_duration(dimensions.duration, category))

    return findings


# =============================================================================
# SIZE TIERS
# =============================================================================


def categorize_file_size(size_bytes: int, category: MediaCategory) -> SizeTier:
    """Place a size into its category's tier; bounds are inclusive."""
    tiers = get_profile(category).size_tiers
    if size_bytes <= tiers.excellent:
        return SizeTier.EXCELLENT
    if size_bytes <= tiers.good:
        return SizeTier.GOOD
    if size_bytes <= tiers.acceptable:
        return SizeTier.ACCEPTABLE
    if size_bytes <= tiers.large:
        return SizeTier.LARGE
    return SizeTier.TOO_LARGE


def _tier_message(tier: SizeTier, size_bytes: int) -> str:
    size = format_file_size(size_bytes)
    messages = {
        SizeTier.EXCELLENT: f"File size is excellent ({size})",
        SizeTier.GOOD: f"File size is good ({size})",
        SizeTier.ACCEPTABLE: (
            f"File size is acceptable ({size}) but could be optimized for better performance"
        ),
        SizeTier.LARGE: (
            f"File size is large ({size}). "
            "Consider compressing or optimizing the file for better loading times."
        ),
        SizeTier.TOO_LARGE: (
            f"File size is very large ({size}). "
            "This may cause slow loading times and poor user experience. "
            "Consider compressing the file or splitting it into smaller parts."
        ),
    }
    return messages[tier]


def optimization_suggestions(category: MediaCategory, size_bytes: int) -> list[str]:
    """
    Category-specific advice for shrinking a file.

    Example:
        >>> optimization_suggestions(MediaCategory.AUDIO, 5_000_000)[0]
        'Use MP3 or AAC format for better compression'
    """
    suggestions = list(_BASE_SUGGESTIONS[category])

    if category is MediaCategory.IMAGE and size_bytes > 2 * BYTES_PER_MB:
        suggestions.append("Consider progressive JPEG for large images")
    elif category is MediaCategory.VIDEO and size_bytes > 20 * BYTES_PER_MB:
        suggestions.append("Consider splitting long videos into segments")

    return suggestions


def validate_file_size_advanced(
    size_bytes: int,
    category: MediaCategory,
    options: SizeValidationOptions | None = None,
) -> list[Finding]:
    """
    Basic size validation followed by advisory tier classification.

    If the basic check produces an error its findings are returned as-is.
    Otherwise a tier warning is added; large and too-large files also get the
    category's optimization suggestions (every non-excellent tier does when
    ``recommend_optimization`` is set), and oversized images get a
    compression-eligibility note when ``allow_compression`` is set.

    Args:
        size_bytes: Size of the file in bytes
        category: Category whose limits and tiers apply
        options: Optional SizeValidationOptions

    Returns:
        Basic size findings plus advisory warnings
    """
    options = options or SizeValidationOptions()

    findings = validate_file_size(size_bytes, category)
    if any(finding.is_error for finding in findings):
        return findings

    tier = categorize_file_size(size_bytes, category)
    findings.append(Finding.warning(IssueCode.SIZE_TIER_ADVICE, _tier_message(tier, size_bytes)))

    if tier in _OVERSIZED_TIERS or (
        options.recommend_optimization and tier is not SizeTier.EXCELLENT
    ):
        findings.extend(
            Finding.warning(IssueCode.OPTIMIZATION_SUGGESTION, suggestion)
            for suggestion in optimization_suggestions(category, size_bytes)
        )

    if options.allow_compression and category is MediaCategory.IMAGE and tier in _OVERSIZED_TIERS:
        findings.append(
            Finding.warning(
                IssueCode.COMPRESSION_ELIGIBLE,
                f"Image qualifies for automatic compression before storage "
                f"({format_file_size(size_bytes)})",
            )
        )

    return findings
