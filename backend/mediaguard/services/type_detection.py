"""
Media type detection for MediaGuard.

Maps a (filename, declared MIME type) pair onto a MediaCategory using the
category registry. The declared MIME type is the stronger signal: a MIME
match in any category wins over an extension match in another one. When
neither signal matches anything the file is treated as a document.
"""

from mediaguard.core.registry import iter_profiles
from mediaguard.models.media import MediaCategory
from mediaguard.utils.file_validator import extract_extension


def detect_media_type(filename: str, mime_type: str | None) -> MediaCategory:
    """
    Detect the media category of an upload.

    Args:
        filename: Client-supplied filename
        mime_type: Client-declared MIME type (may be empty or None)

    Returns:
        The first category, in registry order, whose MIME types contain the
        declared type; failing that, the first whose extensions contain the
        filename's extension; failing that, MediaCategory.DOCUMENT.

    Example:
        >>> detect_media_type("clip.jpg", "video/mp4")
        <MediaCategory.VIDEO: 'video'>
        >>> detect_media_type("notes", "")
        <MediaCategory.DOCUMENT: 'document'>
    """
    profiles = iter_profiles()

    normalized_mime = (mime_type or "").lower()
    if normalized_mime:
        for profile in profiles:
            if normalized_mime in profile.mime_types:
                return profile.category

    extension = extract_extension(filename)
    if extension:
        for profile in profiles:
            if extension in profile.extensions:
                return profile.category

    return MediaCategory.DOCUMENT
