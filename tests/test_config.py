# ABOUTME: Tests for settings loading from SKYCAST_* environment variables.
# ABOUTME: Validates defaults, overrides and rejection of out-of-range values.

import pytest
from pydantic import ValidationError

from skycast.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("DEFAULT_CITY", "FALLBACK_CITY", "HTTP_TIMEOUT", "RETRY_ATTEMPTS", "FORECAST_DAYS", "LOG_LEVEL"):
            monkeypatch.delenv(f"SKYCAST_{name}", raising=False)
        settings = Settings.from_env()

        assert settings.default_city == "São Paulo"
        assert settings.fallback_city == "Rio de Janeiro"
        assert settings.retry_attempts == 3
        assert settings.forecast_days == 7

    def test_environment_overrides(self, monkeypatch):
        """SKYCAST_* variables override defaults and are coerced to their field types.

        Implementation: Sets string env vars for a city, a timeout and a day count.
        Passing implies: Deployments configure the app without code changes.
        """
        monkeypatch.setenv("SKYCAST_DEFAULT_CITY", "Lisbon")
        monkeypatch.setenv("SKYCAST_HTTP_TIMEOUT", "2.5")
        monkeypatch.setenv("SKYCAST_FORECAST_DAYS", "3")
        settings = Settings.from_env()

        assert settings.default_city == "Lisbon"
        assert settings.http_timeout == 2.5
        assert settings.forecast_days == 3

    def test_rejects_out_of_range_horizon(self, monkeypatch):
        monkeypatch.setenv("SKYCAST_FORECAST_DAYS", "30")
        with pytest.raises(ValidationError):
            Settings.from_env()
