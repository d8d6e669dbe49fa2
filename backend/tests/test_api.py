"""
MediaGuard HTTP API Test Suite

Tests the FastAPI surface: category lookups, single and batch validation,
enforced verdicts mapped to 400/413/415, and request-shape errors.
"""

import base64

from typing import Any

import pytest

from fastapi import status
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient
from starlette.requests import Request

from mediaguard.core.registry import BYTES_PER_MB
from mediaguard.main import app, unhandled_exception_handler


VALIDATE_URL = "/api/v1/media/validate"
BATCH_URL = "/api/v1/media/validate/batch"


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "filename": "photo.jpg",
        "mime_type": "image/jpeg",
        "size": 500_000,
    }
    payload.update(overrides)
    return payload


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


# =============================================================================
# HEALTH AND CATEGORIES
# =============================================================================


@pytest.mark.integration
class TestCategoryEndpoints:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"

    def test_list_categories(self, client: TestClient) -> None:
        response = client.get("/api/v1/media/categories")
        body = response.json()

        assert response.status_code == status.HTTP_200_OK
        assert [item["category"] for item in body] == ["image", "video", "audio", "document"]
        assert body[0]["max_size_bytes"] == 8 * BYTES_PER_MB
        assert body[0]["max_size_display"] == "8.00 MB"

    def test_single_category_is_case_insensitive(self, client: TestClient) -> None:
        response = client.get("/api/v1/media/categories/VIDEO")

        assert response.status_code == status.HTTP_200_OK
        assert "mp4" in response.json()["extensions"]

    def test_unknown_category(self, client: TestClient) -> None:
        response = client.get("/api/v1/media/categories/archive")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"]["error"] == "unknown_category"


# =============================================================================
# SINGLE VALIDATION
# =============================================================================


@pytest.mark.integration
class TestValidateEndpoint:
    def test_valid_photo(self, client: TestClient, jpeg_prefix: bytes) -> None:
        response = client.post(
            VALIDATE_URL,
            json=_payload(byte_prefix=_b64(jpeg_prefix), width=1920, height=1080),
        )
        body = response.json()

        assert response.status_code == status.HTTP_200_OK
        assert body["is_valid"] is True
        assert body["detected_category"] == "image"
        assert body["size_tier"] == "good"
        assert body["summary"] == "File validation passed with 2 recommendation(s)"

    def test_failed_verdict_is_not_an_http_error_by_default(self, client: TestClient) -> None:
        response = client.post(VALIDATE_URL, json=_payload(filename="payload.exe"))
        body = response.json()

        assert response.status_code == status.HTTP_200_OK
        assert body["is_valid"] is False
        assert "dangerous_extension" in body["error_codes"]

    @pytest.mark.parametrize(
        "overrides,expected_status,expected_error",
        [
            ({"filename": "payload.exe"}, 415, "unsupported_media_type"),
            ({"size": 9 * BYTES_PER_MB}, 413, "file_too_large"),
            ({"size": 0}, 400, "validation_failed"),
            ({"expected_category": "video"}, 400, "validation_failed"),
        ],
    )
    def test_enforced_verdict(
        self,
        client: TestClient,
        overrides: dict[str, Any],
        expected_status: int,
        expected_error: str,
    ) -> None:
        response = client.post(VALIDATE_URL, params={"enforce": "true"}, json=_payload(**overrides))
        detail = response.json()["detail"]

        assert response.status_code == expected_status
        assert detail["error"] == expected_error
        assert detail["errors"]
        assert detail["message"] == detail["errors"][0]

    def test_enforced_valid_upload_passes(self, client: TestClient) -> None:
        response = client.post(VALIDATE_URL, params={"enforce": "true"}, json=_payload())
        assert response.status_code == status.HTTP_200_OK

    def test_enforced_rejection_is_logged(
        self, client: TestClient, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level("INFO", logger="mediaguard.api.v1.media"):
            client.post(VALIDATE_URL, params={"enforce": "true"}, json=_payload(size=0))

        (record,) = [r for r in caplog.records if r.name == "mediaguard.api.v1.media"]
        assert record.file_name == "photo.jpg"
        assert record.category == "image"

    @pytest.mark.parametrize(
        "payload",
        [
            {"filename": "photo.jpg", "mime_type": "image/jpeg"},
            _payload(byte_prefix="abc"),
            _payload(expected_category="archive"),
            _payload(byte_prefix=_b64(b"\x00" * 65)),
        ],
    )
    def test_malformed_request(self, client: TestClient, payload: dict[str, Any]) -> None:
        response = client.post(VALIDATE_URL, json=payload)
        assert response.status_code == 422

    def test_prefix_at_the_cap_is_accepted(self, client: TestClient, jpeg_prefix: bytes) -> None:
        prefix = jpeg_prefix.ljust(64, b"\x00")[:64]

        response = client.post(VALIDATE_URL, json=_payload(byte_prefix=_b64(prefix)))

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["is_valid"] is True

    @pytest.mark.parametrize("duration", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_duration_is_rejected(self, client: TestClient, duration: str) -> None:
        body = (
            '{"filename": "song.mp3", "mime_type": "audio/mpeg", '
            f'"size": 3000000, "duration": {duration}}}'
        )

        response = client.post(
            VALIDATE_URL, content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422

    def test_compression_default_comes_from_settings(
        self, client: TestClient, override_settings
    ) -> None:
        override_settings(allow_compression=True)
        large = _payload(size=3 * BYTES_PER_MB)

        default = client.post(VALIDATE_URL, json=large).json()
        opted_out = client.post(VALIDATE_URL, json={**large, "allow_compression": False}).json()

        assert "compression_eligible" in default["warning_codes"]
        assert "compression_eligible" not in opted_out["warning_codes"]


# =============================================================================
# BATCH VALIDATION
# =============================================================================


@pytest.mark.integration
class TestBatchEndpoint:
    def test_batch(self, client: TestClient) -> None:
        response = client.post(
            BATCH_URL,
            json={"files": [_payload(), _payload(filename="payload.exe")]},
        )
        body = response.json()

        assert response.status_code == status.HTTP_200_OK
        assert body["total"] == 2
        assert body["valid_count"] == 1
        assert body["invalid_count"] == 1
        assert [item["filename"] for item in body["results"]] == ["photo.jpg", "payload.exe"]

    def test_batch_limit(self, client: TestClient, override_settings) -> None:
        override_settings(max_batch_size=1)

        response = client.post(BATCH_URL, json={"files": [_payload(), _payload()]})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"]["error"] == "batch_too_large"

    def test_empty_batch(self, client: TestClient) -> None:
        response = client.post(BATCH_URL, json={"files": []})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_batch_async_client(self, wav_prefix: bytes) -> None:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as async_client:
            response = await async_client.post(
                BATCH_URL,
                json={
                    "files": [
                        _payload(
                            filename="voice.wav",
                            mime_type="audio/wav",
                            byte_prefix=_b64(wav_prefix),
                            duration=30,
                        )
                    ]
                },
            )

        result = response.json()["results"][0]
        assert result["is_valid"] is True
        assert result["detected_category"] == "audio"
        assert result["size_tier"] == "excellent"


# =============================================================================
# ERROR HANDLING
# =============================================================================


@pytest.mark.integration
class TestUnhandledErrors:
    @pytest.mark.asyncio
    async def test_generic_500_body(self, caplog: pytest.LogCaptureFixture) -> None:
        request = Request(
            {
                "type": "http",
                "method": "POST",
                "path": VALIDATE_URL,
                "query_string": b"",
                "headers": [],
            }
        )

        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            response = await unhandled_exception_handler(request, exc)

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert b"boom" not in response.body
        assert any(r.exc_info for r in caplog.records if r.name == "mediaguard.main")
