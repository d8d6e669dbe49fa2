"""
HTTP error mapping for enforced validation verdicts.

Validation itself never raises. When a caller asks the API to enforce a
verdict, a failed ValidationResult is turned into an HTTPException whose
status reflects the most specific problem:

- 413 Content Too Large: the file exceeds its category limit
- 415 Unsupported Media Type: extension, MIME type or executable rejected
- 400 Bad Request: anything else
"""

from typing import Any

from fastapi import HTTPException, status

from mediaguard.models.media import IssueCode, ValidationResult


# Starlette names this HTTP_413_CONTENT_TOO_LARGE only in recent releases
HTTP_413_CONTENT_TOO_LARGE: int = 413

UNSUPPORTED_TYPE_CODES: frozenset[IssueCode] = frozenset(
    {
        IssueCode.NO_EXTENSION,
        IssueCode.INVALID_EXTENSION,
        IssueCode.MISSING_MIME_TYPE,
        IssueCode.INVALID_MIME_TYPE,
        IssueCode.DANGEROUS_EXTENSION,
    }
)


def status_code_for(result: ValidationResult) -> int:
    """Pick the HTTP status for a failed result."""
    codes = set(result.error_codes)
    if IssueCode.FILE_TOO_LARGE in codes:
        return HTTP_413_CONTENT_TOO_LARGE
    if codes & UNSUPPORTED_TYPE_CODES:
        return status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    return status.HTTP_400_BAD_REQUEST


def _error_name(status_code: int) -> str:
    return {
        HTTP_413_CONTENT_TOO_LARGE: "file_too_large",
        status.HTTP_415_UNSUPPORTED_MEDIA_TYPE: "unsupported_media_type",
    }.get(status_code, "validation_failed")


def http_exception_for(result: ValidationResult, filename: str) -> HTTPException:
    """
    Build the HTTPException for a failed verdict.

    Args:
        result: A ValidationResult with at least one error
        filename: Name of the rejected file, echoed in the detail

    Returns:
        HTTPException ready to raise; ``detail`` carries the errors, the
        warnings and their codes
    """
    status_code = status_code_for(result)
    detail: dict[str, Any] = {
        "error": _error_name(status_code),
        "message": result.errors[0] if result.errors else "File validation failed",
        "filename": filename,
        "errors": list(result.errors),
        "warnings": list(result.warnings),
        "error_codes": [code.value for code in result.error_codes],
    }
    return HTTPException(status_code=status_code, detail=detail)
