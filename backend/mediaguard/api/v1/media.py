"""
FastAPI Media Router for MediaGuard

This module exposes the validation engine over JSON with 4 endpoints:
- GET /categories - Allowed types and size limits of every category
- GET /categories/{category} - Allowed types and size limit of one category
- POST /validate - Comprehensive validation of one upload's metadata
- POST /validate/batch - Comprehensive validation of several uploads

Clients never send whole files. They send the filename, declared MIME
type, size and optionally the first bytes of the file (base64-encoded),
plus any dimensions they already measured.

By default a failed verdict is still a 200 response with ``is_valid``
false. With ``?enforce=true`` the single-file endpoint raises instead:
413 for oversized files, 415 for rejected types, 400 otherwise.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Base64Bytes, BaseModel, Field, field_validator

from mediaguard.api.errors import http_exception_for
from mediaguard.config import Settings, get_settings
from mediaguard.core.registry import UnknownCategoryError, get_profile, iter_profiles
from mediaguard.models.media import (
    CategoryProfile,
    IssueCode,
    MediaCategory,
    SizeTier,
    ValidationInput,
    ValidationResult,
)
from mediaguard.services.advanced_validation import categorize_file_size
from mediaguard.services.media_validation_service import (
    validate_media_comprehensive,
    validation_summary,
)
from mediaguard.utils.file_validator import format_file_size
from mediaguard.utils.logger import add_log_context


# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter()

# Largest decoded byte_prefix accepted; only the signature window is inspected
MAX_PREFIX_BYTES: int = 64


# ============================================================================
# Request/Response Pydantic Models
# ============================================================================


class CategoryInfo(BaseModel):
    """Allowed types and hard size limit of one category, for upload forms."""

    category: MediaCategory
    extensions: list[str]
    mime_types: list[str]
    max_size_bytes: int
    max_size_display: str

    @classmethod
    def from_profile(cls, profile: CategoryProfile) -> "CategoryInfo":
        return cls(
            category=profile.category,
            extensions=list(profile.extensions),
            mime_types=list(profile.mime_types),
            max_size_bytes=profile.max_size_bytes,
            max_size_display=format_file_size(profile.max_size_bytes),
        )


class MediaValidationRequest(BaseModel):
    """
    Metadata of one upload attempt.

    ``recommend_optimization`` and ``allow_compression`` fall back to the
    service configuration when omitted.
    """

    filename: str = Field(..., description="Original filename as supplied by the client")
    mime_type: str = Field(default="", description="MIME type declared by the client")
    size: int = Field(..., description="File size in bytes")
    byte_prefix: Base64Bytes | None = Field(
        default=None,
        description="Base64-encoded leading bytes of the file (16 are enough, at most 64)",
    )
    expected_category: MediaCategory | None = Field(
        default=None, description="Category the upload form expects"
    )
    width: int | None = Field(default=None, description="Width in pixels")
    height: int | None = Field(default=None, description="Height in pixels")
    duration: float | None = Field(
        default=None, allow_inf_nan=False, description="Duration in seconds"
    )
    recommend_optimization: bool | None = None
    allow_compression: bool | None = None

    @field_validator("byte_prefix")
    @classmethod
    def validate_byte_prefix(cls, v: bytes | None) -> bytes | None:
        """Reject prefixes longer than MAX_PREFIX_BYTES once decoded."""
        if v is not None and len(v) > MAX_PREFIX_BYTES:
            raise ValueError(
                f"byte_prefix is {len(v)} bytes. At most {MAX_PREFIX_BYTES} bytes are accepted"
            )
        return v

    def to_input(self) -> ValidationInput:
        return ValidationInput(
            filename=self.filename,
            declared_mime_type=self.mime_type,
            size_bytes=self.size,
            byte_prefix=self.byte_prefix,
            expected_category=self.expected_category,
            width=self.width,
            height=self.height,
            duration=self.duration,
        )


class MediaValidationResponse(BaseModel):
    """Verdict for one upload, with a one-line summary and its size tier."""

    filename: str
    is_valid: bool
    errors: list[str]
    warnings: list[str]
    error_codes: list[IssueCode]
    warning_codes: list[IssueCode]
    detected_category: MediaCategory
    detected_mime_type: str
    detected_extension: str
    size_tier: SizeTier | None = None
    summary: str


class BatchValidationRequest(BaseModel):
    files: list[MediaValidationRequest] = Field(..., min_length=1)


class BatchValidationResponse(BaseModel):
    results: list[MediaValidationResponse]
    total: int
    valid_count: int
    invalid_count: int


# ============================================================================
# Helpers
# ============================================================================


def _validate_request(
    request: MediaValidationRequest, settings: Settings
) -> tuple[ValidationResult, MediaValidationResponse]:
    options = settings.size_options(
        recommend_optimization=request.recommend_optimization,
        allow_compression=request.allow_compression,
    )
    result = validate_media_comprehensive(request.to_input(), options=options)

    size_tier = None
    if request.size > 0:
        tier_category = request.expected_category or result.detected_category
        size_tier = categorize_file_size(request.size, tier_category)

    response = MediaValidationResponse(
        filename=request.filename,
        is_valid=result.is_valid,
        errors=list(result.errors),
        warnings=list(result.warnings),
        error_codes=list(result.error_codes),
        warning_codes=list(result.warning_codes),
        detected_category=result.detected_category,
        detected_mime_type=result.detected_mime_type,
        detected_extension=result.detected_extension,
        size_tier=size_tier,
        summary=validation_summary(result),
    )
    return result, response


# ============================================================================
# Endpoints
# ============================================================================


@router.get("/categories", response_model=list[CategoryInfo])
async def list_categories() -> list[CategoryInfo]:
    """List every category's allowed extensions, MIME types and size limit."""
    return [CategoryInfo.from_profile(profile) for profile in iter_profiles()]


@router.get("/categories/{category}", response_model=CategoryInfo)
async def get_category(category: str) -> CategoryInfo:
    """
    Get one category's allowed extensions, MIME types and size limit.

    Raises:
        HTTPException 404: If the category is not registered
    """
    try:
        profile = get_profile(category)
    except UnknownCategoryError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "unknown_category",
                "message": f"Unknown media category '{category}'",
                "available": [c.value for c in MediaCategory],
            },
        ) from None
    return CategoryInfo.from_profile(profile)


@router.post("/validate", response_model=MediaValidationResponse)
async def validate_media(
    request: MediaValidationRequest,
    enforce: bool = Query(default=False, description="Raise 400/413/415 on a failed verdict"),
    settings: Settings = Depends(get_settings),
) -> MediaValidationResponse:
    """
    Validate one upload's metadata and optional byte prefix.

    Returns:
        MediaValidationResponse with errors, warnings, detected type and tier

    Raises:
        HTTPException 413/415/400: If ``enforce`` is set and the verdict failed
    """
    result, response = _validate_request(request, settings)

    if enforce and not result.is_valid:
        exc = http_exception_for(result, request.filename)
        ctx_logger = add_log_context(
            logger,
            file_name=request.filename,
            category=result.detected_category.value,
        )
        ctx_logger.info(
            "Upload rejected with status %d: %s",
            exc.status_code,
            "; ".join(result.errors),
            extra={"error_codes": [code.value for code in result.error_codes]},
        )
        raise exc

    return response


@router.post("/validate/batch", response_model=BatchValidationResponse)
async def validate_media_batch(
    request: BatchValidationRequest,
    settings: Settings = Depends(get_settings),
) -> BatchValidationResponse:
    """
    Validate several uploads independently; results keep the request order.

    Raises:
        HTTPException 400: If more files are sent than ``max_batch_size``
    """
    if len(request.files) > settings.max_batch_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "batch_too_large",
                "message": f"At most {settings.max_batch_size} files can be validated at once",
                "count": len(request.files),
                "max_batch_size": settings.max_batch_size,
            },
        )

    results = [_validate_request(item, settings)[1] for item in request.files]
    valid_count = sum(1 for item in results if item.is_valid)

    logger.debug("Validated batch of %d file(s), %d valid", len(results), valid_count)

    return BatchValidationResponse(
        results=results,
        total=len(results),
        valid_count=valid_count,
        invalid_count=len(results) - valid_count,
    )
