"""
Configuration Test Suite
"""

import pytest

from pydantic import ValidationError

from mediaguard.config import Settings, get_settings


@pytest.mark.unit
class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.app_name == "MediaGuard"
        assert settings.max_batch_size == 50
        assert settings.allow_compression is True
        assert settings.recommend_optimization is False

    def test_log_level_is_normalized(self) -> None:
        assert Settings(log_level="DEBUG").log_level == "debug"

    @pytest.mark.parametrize(
        "field,value",
        [
            ("log_level", "verbose"),
            ("app_env", "qa"),
            ("max_batch_size", 0),
            ("max_batch_size", 501),
            ("port", 70000),
        ],
    )
    def test_invalid_values(self, field: str, value: object) -> None:
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_cors_origins_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example,")

        assert Settings().cors_origins == ["http://a.example", "http://b.example"]

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MAX_BATCH_SIZE", "7")
        monkeypatch.setenv("APP_ENV", "Production")

        settings = Settings()

        assert settings.max_batch_size == 7
        assert settings.is_production

    @pytest.mark.parametrize(
        "app_env,expected",
        [("development", False), ("testing", False), ("staging", False), ("PRODUCTION", True)],
    )
    def test_environment_flag(self, app_env: str, expected: bool) -> None:
        settings = Settings(app_env=app_env)

        assert settings.is_production is expected
        assert not hasattr(settings, "is_development")

    def test_size_options_fall_back_to_defaults(self) -> None:
        settings = Settings(recommend_optimization=True, allow_compression=False)

        defaults = settings.size_options()
        overridden = settings.size_options(recommend_optimization=False, allow_compression=True)

        assert defaults.recommend_optimization is True
        assert defaults.allow_compression is False
        assert overridden.recommend_optimization is False
        assert overridden.allow_compression is True

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()
