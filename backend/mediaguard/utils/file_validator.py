"""
File Validation Utilities Module for MediaGuard

This module implements the per-check validators that the media validation
service aggregates:
- File extension allow-listing against the detected category
- Declared MIME type allow-listing against the detected category
- Hard size limits per category, plus a very-small-file warning
- Magic-number (file signature) inspection of a byte prefix
- Filename security heuristics (dangerous extensions, double extensions,
  length and NUL-byte abuse)
- Human-readable size formatting

Every validator returns a list of Finding objects and never raises for an
invalid upload. An empty list, or a list with warnings only, means the check
passed.

Security Constraints:
- REJECT executables and server-side scripts by final extension
  (.exe, .bat, .cmd, .scr, .pif, .com, .jar, .js, .vbs, .php, .asp, .jsp)
- REJECT filenames longer than 255 characters or containing NUL bytes
- WARN, never reject, on magic-number mismatch: RIFF is shared by
  WEBP, AVI and WAV
"""

from mediaguard.core.registry import (
    BYTES_PER_KB,
    BYTES_PER_MB,
    KNOWN_MEDIA_EXTENSIONS,
    get_profile,
)
from mediaguard.models.media import Finding, IssueCode, MediaCategory


# =============================================================================
# CONSTANTS - Thresholds
# =============================================================================

# Files under 1 KB are flagged as possibly corrupted
VERY_SMALL_FILE_BYTES: int = BYTES_PER_KB

# A prefix shorter than this cannot be checked against signatures
MIN_SIGNATURE_BYTES: int = 8

# Only this many leading bytes are ever inspected
SIGNATURE_WINDOW_BYTES: int = 16

# Common filesystem limit on a single filename
MAX_FILENAME_LENGTH: int = 255


# =============================================================================
# CONSTANTS - Dangerous File Extensions
# =============================================================================

# Executables and server-side scripts rejected regardless of any other field
DANGEROUS_EXTENSIONS: tuple[str, ...] = (
    "exe",
    "bat",
    "cmd",
    "scr",
    "pif",
    "com",
    "jar",
    "js",
    "vbs",
    "php",
    "asp",
    "jsp",
)


# =============================================================================
# FILE EXTENSION VALIDATION
# =============================================================================


def extract_extension(filename: str) -> str:
    """
    Extract the lowercase extension of a filename, without the dot.

    The extension is whatever follows the last ".", so "archive.tar.gz"
    yields "gz" and a trailing dot yields "".

    Example:
        >>> extract_extension("Photo.JPG")
        'jpg'
        >>> extract_extension("README")
        ''
    """
    parts = filename.lower().split(".")
    return parts[-1] if len(parts) > 1 else ""


def validate_extension(extension: str, category: MediaCategory) -> list[Finding]:
    """
    Validate a file extension against a category's allow-list.

    Args:
        extension: Lowercase extension without the leading dot
        category: The category the file was detected as

    Returns:
        A single error finding if the extension is missing or not allowed,
        otherwise an empty list

    Example:
        >>> validate_extension("png", MediaCategory.IMAGE)
        []
        >>> validate_extension("", MediaCategory.IMAGE)[0].message
        'File has no extension'
    """
    if not extension:
        return [Finding.error(IssueCode.NO_EXTENSION, "File has no extension")]

    profile = get_profile(category)
    if extension not in profile.extensions:
        allowed = ", ".join(f".{ext}" for ext in profile.extensions)
        return [
            Finding.error(
                IssueCode.INVALID_EXTENSION,
                f"Invalid file extension '.{extension}' for {category.value}. "
                f"Allowed extensions: {allowed}",
            )
        ]

    return []


# =============================================================================
# MIME TYPE VALIDATION
# =============================================================================


def validate_mime_type(mime_type: str, category: MediaCategory) -> list[Finding]:
    """
    Validate a declared MIME type against a category's allow-list.

    The declared type is an untrusted client hint, so it is only compared
    (case-insensitively) against the registry, never parsed further.

    Args:
        mime_type: MIME type declared by the client (e.g. "image/png")
        category: The category the file was detected as

    Returns:
        A single error finding if the MIME type is missing or not allowed,
        otherwise an empty list
    """
    if not mime_type:
        return [Finding.error(IssueCode.MISSING_MIME_TYPE, "MIME type is required")]

    profile = get_profile(category)
    if mime_type.lower() not in profile.mime_types:
        return [
            Finding.error(
                IssueCode.INVALID_MIME_TYPE,
                f"Invalid MIME type '{mime_type}' for {category.value}. "
                f"Allowed MIME types: {', '.join(profile.mime_types)}",
            )
        ]

    return []


# =============================================================================
# FILE SIZE VALIDATION
# =============================================================================


def validate_file_size(size_bytes: int, category: MediaCategory) -> list[Finding]:
    """
    Validate file size against the category's hard limit.

    Args:
        size_bytes: Size of the file in bytes
        category: The category the file was detected as

    Returns:
        Findings:
        - error if the size is zero or negative (no further checks)
        - error if the size exceeds the category maximum, with both sizes
          in MB to one decimal
        - warning if the file is under 1 KB

    Example:
        >>> [f.message for f in validate_file_size(0, MediaCategory.IMAGE)]
        ['File size must be greater than 0']
    """
    if size_bytes <= 0:
        return [
            Finding.error(IssueCode.NON_POSITIVE_SIZE, "File size must be greater than 0")
        ]

    findings: list[Finding] = []
    max_size = get_profile(category).max_size_bytes

    if size_bytes > max_size:
        size_mb = size_bytes / BYTES_PER_MB
        max_mb = max_size / BYTES_PER_MB
        findings.append(
            Finding.error(
                IssueCode.FILE_TOO_LARGE,
                f"File size {size_mb:.1f}MB exceeds maximum allowed size of "
                f"{max_mb:.1f}MB for {category.value}",
            )
        )

    if size_bytes < VERY_SMALL_FILE_BYTES:
        findings.append(
            Finding.warning(
                IssueCode.FILE_VERY_SMALL,
                "File is very small (less than 1KB), please verify it is not corrupted",
            )
        )

    return findings


# =============================================================================
# MAGIC NUMBER VALIDATION
# =============================================================================


def match_signature(data: bytes, category: MediaCategory) -> str | None:
    """
    Return the label of the first signature of ``category`` that ``data`` starts with.

    Only the first 16 bytes of ``data`` are looked at.

    Example:
        >>> match_signature(b"\\x89PNG\\r\\n\\x1a\\n", MediaCategory.IMAGE)
        'PNG'
    """
    window = data[:SIGNATURE_WINDOW_BYTES]
    for signature in get_profile(category).signatures:
        if signature.matches(window):
            return signature.label
    return None


def validate_magic_numbers(data: bytes, category: MediaCategory) -> list[Finding]:
    """
    Check a byte prefix against the category's known file signatures.

    A mismatch is reported as a warning, not an error: several formats share
    container prefixes across categories (RIFF is used by WEBP images, AVI
    video and WAV audio), so a mismatch alone cannot prove the file is bad.

    Args:
        data: Leading bytes of the file (at least 8, 16 recommended)
        category: The category the file was detected as

    Returns:
        At most one warning finding
    """
    if len(data) < MIN_SIGNATURE_BYTES:
        return [
            Finding.warning(
                IssueCode.BUFFER_TOO_SMALL_TO_VERIFY,
                "File too small to validate magic numbers",
            )
        ]

    if get_profile(category).signatures and match_signature(data, category) is None:
        return [
            Finding.warning(
                IssueCode.SIGNATURE_MISMATCH,
                f"File content does not match expected {category.value} format "
                "(magic number validation failed)",
            )
        ]

    return []


# =============================================================================
# FILENAME SECURITY CHECKS
# =============================================================================


def is_dangerous_extension(extension: str) -> bool:
    """
    Check if an extension is in the dangerous extensions list.

    Args:
        extension: File extension (with or without leading dot)

    Example:
        >>> is_dangerous_extension(".EXE")
        True
        >>> is_dangerous_extension("pdf")
        False
    """
    return extension.lower().lstrip(".") in DANGEROUS_EXTENSIONS


def validate_filename_security(filename: str) -> list[Finding]:
    """
    Run filename-only security heuristics, independent of any category.

    Checks:
    1. Final extension is an executable or server-side script (error)
    2. Double extension whose inner segment is a known media/document
       extension, e.g. "image.jpg.exe" (warning; may fire together with 1)
    3. Filename longer than 255 characters (error)
    4. NUL byte anywhere in the filename (error)

    Args:
        filename: The filename as supplied by the client

    Returns:
        All findings from the four checks, in the order above
    """
    findings: list[Finding] = []

    if is_dangerous_extension(extract_extension(filename)):
        findings.append(
            Finding.error(
                IssueCode.DANGEROUS_EXTENSION,
                f"Potentially dangerous file type detected: {filename}. "
                "Executable files are not allowed for security reasons.",
            )
        )

    parts = filename.split(".")
    if len(parts) > 2 and parts[-2].lower() in KNOWN_MEDIA_EXTENSIONS:
        findings.append(
            Finding.warning(
                IssueCode.DOUBLE_EXTENSION_SUSPICION,
                "File has multiple extensions, which could be suspicious. "
                "Please verify the file is safe.",
            )
        )

    if len(filename) > MAX_FILENAME_LENGTH:
        findings.append(
            Finding.error(
                IssueCode.FILENAME_TOO_LONG,
                f"Filename is too long (maximum {MAX_FILENAME_LENGTH} characters)",
            )
        )

    if "\x00" in filename:
        findings.append(
            Finding.error(
                IssueCode.NULL_BYTE_IN_FILENAME,
                "Filename contains null bytes, which is not allowed",
            )
        )

    return findings


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def format_file_size(size_bytes: int) -> str:
    """
    Format file size in bytes to human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Human-readable size string; bytes below 1 KB, otherwise KB/MB/GB
        with two decimals

    Example:
        >>> format_file_size(1536)
        '1.50 KB'
        >>> format_file_size(2_400_000)
        '2.29 MB'
    """
    if size_bytes < 0:
        return "Invalid size"

    bytes_per_gb = BYTES_PER_MB * BYTES_PER_KB

    if size_bytes < BYTES_PER_KB:
        return f"{size_bytes} B"
    if size_bytes < BYTES_PER_MB:
        return f"{size_bytes / BYTES_PER_KB:.2f} KB"
    if size_bytes < bytes_per_gb:
        return f"{size_bytes / BYTES_PER_MB:.2f} MB"
    return f"{size_bytes / bytes_per_gb:.2f} GB"
