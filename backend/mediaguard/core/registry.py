"""
Category Registry for MediaGuard.

The registry is the single source of truth for what each media category
accepts: extensions, MIME types, hard size limit, magic-number signatures,
advisory size tiers and dimension/duration constraints.

The table is built once at import time and exposed through a read-only
mapping of frozen profiles, so it can be shared by any number of concurrent
validation calls without locking.

Usage:
    from mediaguard.core.registry import allowed_types, max_file_size

    hints = allowed_types(MediaCategory.IMAGE)
    limit = max_file_size(MediaCategory.IMAGE)  # 8 MiB
"""

from types import MappingProxyType
from typing import Mapping

from mediaguard.models.media import (
    AllowedTypes,
    CategoryProfile,
    MediaCategory,
    MediaConstraints,
    Signature,
    SizeTiers,
)


# =============================================================================
# CONSTANTS - Size Units
# =============================================================================

BYTES_PER_KB: int = 1024
BYTES_PER_MB: int = BYTES_PER_KB * BYTES_PER_KB


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnknownCategoryError(KeyError):
    """Raised when a category is requested that the registry does not hold."""

    def __init__(self, category: object) -> None:
        self.category = category
        super().__init__(f"Unknown media category: {category!r}")


# =============================================================================
# CATEGORY PROFILES
# =============================================================================

IMAGE_PROFILE = CategoryProfile(
    category=MediaCategory.IMAGE,
    extensions=("jpg", "jpeg", "png", "gif", "webp", "svg", "bmp", "ico"),
    mime_types=(
        "image/jpeg",
        "image/jpg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
        "image/bmp",
        "image/x-icon",
        "image/vnd.microsoft.icon",
    ),
    max_size_bytes=8 * BYTES_PER_MB,
    signatures=(
        Signature(prefix=b"\xff\xd8\xff", label="JPEG"),
        Signature(prefix=b"\x89PNG", label="PNG"),
        Signature(prefix=b"GIF8", label="GIF"),
        Signature(prefix=b"RIFF", label="WEBP"),
        Signature(prefix=b"<svg", label="SVG"),
        Signature(prefix=b"BM", label="BMP"),
    ),
    size_tiers=SizeTiers(
        excellent=200 * BYTES_PER_KB,
        good=1 * BYTES_PER_MB,
        acceptable=2 * BYTES_PER_MB,
        large=4 * BYTES_PER_MB,
    ),
    constraints=MediaConstraints(
        min_width=1,
        max_width=10000,
        min_height=1,
        max_height=10000,
        recommended_max_width=2048,
        recommended_max_height=2048,
        min_aspect_ratio=0.1,
        max_aspect_ratio=10.0,
    ),
)

VIDEO_PROFILE = CategoryProfile(
    category=MediaCategory.VIDEO,
    extensions=("mp4", "webm", "avi", "mov", "wmv", "flv", "mkv"),
    mime_types=(
        "video/mp4",
        "video/webm",
        "video/avi",
        "video/quicktime",
        "video/x-msvideo",
        "video/x-flv",
        "video/x-matroska",
    ),
    max_size_bytes=32 * BYTES_PER_MB,
    signatures=(
        Signature(prefix=b"\x00\x00\x00\x18ftyp", label="MP4"),
        Signature(prefix=b"\x1a\x45\xdf\xa3", label="WEBM/MKV"),
        Signature(prefix=b"RIFF", label="AVI"),
        Signature(prefix=b"\x00\x00\x00\x14ftyp", label="MOV"),
    ),
    size_tiers=SizeTiers(
        excellent=5 * BYTES_PER_MB,
        good=10 * BYTES_PER_MB,
        acceptable=20 * BYTES_PER_MB,
        large=30 * BYTES_PER_MB,
    ),
    constraints=MediaConstraints(
        min_width=144,
        max_width=4096,
        min_height=144,
        max_height=4096,
        recommended_max_width=1920,
        recommended_max_height=1080,
        min_duration=1,
        max_duration=3600,
        recommended_max_duration=600,
    ),
)

AUDIO_PROFILE = CategoryProfile(
    category=MediaCategory.AUDIO,
    extensions=("mp3", "wav", "ogg", "aac", "flac", "m4a"),
    mime_types=(
        "audio/mpeg",
        "audio/mp3",
        "audio/wav",
        "audio/wave",
        "audio/ogg",
        "audio/aac",
        "audio/flac",
        "audio/mp4",
    ),
    max_size_bytes=8 * BYTES_PER_MB,
    signatures=(
        Signature(prefix=b"\xff\xfb", label="MP3"),
        Signature(prefix=b"\xff\xf3", label="MP3"),
        Signature(prefix=b"\xff\xf2", label="MP3"),
        Signature(prefix=b"RIFF", label="WAV"),
        Signature(prefix=b"OggS", label="OGG"),
        Signature(prefix=b"fLaC", label="FLAC"),
    ),
    size_tiers=SizeTiers(
        excellent=2 * BYTES_PER_MB,
        good=4 * BYTES_PER_MB,
        acceptable=6 * BYTES_PER_MB,
        large=8 * BYTES_PER_MB,
    ),
    constraints=MediaConstraints(
        min_duration=1,
        max_duration=7200,
        recommended_max_duration=1800,
    ),
)

DOCUMENT_PROFILE = CategoryProfile(
    category=MediaCategory.DOCUMENT,
    extensions=("pdf", "doc", "docx", "txt", "rtf"),
    mime_types=(
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain",
        "text/rtf",
        "application/rtf",
    ),
    max_size_bytes=4 * BYTES_PER_MB,
    signatures=(
        Signature(prefix=b"%PDF", label="PDF"),
        Signature(prefix=b"\xd0\xcf\x11\xe0", label="DOC"),
        Signature(prefix=b"PK\x03\x04", label="DOCX"),
        Signature(prefix=b"{\\rtf", label="RTF"),
    ),
    size_tiers=SizeTiers(
        excellent=100 * BYTES_PER_KB,
        good=500 * BYTES_PER_KB,
        acceptable=1 * BYTES_PER_MB,
        large=2 * BYTES_PER_MB,
    ),
)

# Registry order drives type detection: image, video, audio, document
CATEGORY_PROFILES: Mapping[MediaCategory, CategoryProfile] = MappingProxyType(
    {
        profile.category: profile
        for profile in (IMAGE_PROFILE, VIDEO_PROFILE, AUDIO_PROFILE, DOCUMENT_PROFILE)
    }
)

# Every extension any category accepts, used by the double-extension heuristic
KNOWN_MEDIA_EXTENSIONS: frozenset[str] = frozenset(
    ext for profile in CATEGORY_PROFILES.values() for ext in profile.extensions
)


# =============================================================================
# ACCESSORS
# =============================================================================


def get_profile(category: MediaCategory | str) -> CategoryProfile:
    """
    Look up the profile for a category.

    Args:
        category: A MediaCategory or its string value, any case (e.g. "image")

    Returns:
        The shared, immutable CategoryProfile

    Raises:
        UnknownCategoryError: If the category is not registered. This is a
            programmer error, never a verdict on an upload.
    """
    if isinstance(category, str):
        category = category.lower()
    try:
        return CATEGORY_PROFILES[MediaCategory(category)]
    except (ValueError, KeyError) as e:
        raise UnknownCategoryError(category) from e


def allowed_types(category: MediaCategory | str) -> AllowedTypes:
    """
    Get the allowed extensions and MIME types for a category.

    Used by upload forms to pre-filter file pickers. The returned lists are
    copies; changing them does not touch the registry.

    Example:
        >>> allowed_types("audio").extensions
        ['mp3', 'wav', 'ogg', 'aac', 'flac', 'm4a']
    """
    profile = get_profile(category)
    return AllowedTypes(
        extensions=list(profile.extensions),
        mime_types=list(profile.mime_types),
    )


def max_file_size(category: MediaCategory | str) -> int:
    """Get the hard size limit of a category in bytes."""
    return get_profile(category).max_size_bytes


def iter_profiles() -> tuple[CategoryProfile, ...]:
    """All profiles in registry order."""
    return tuple(CATEGORY_PROFILES.values())
