"""Tests for settings loading from the environment."""

import pytest

from btcturk.auth.keys import ApiKeys
from btcturk.config import AppSettings, ExchangeSettings, ValidationSettings
from btcturk.exceptions import InvalidSecretEncoding


class TestExchangeSettings:
    """BTCTURK_-prefixed environment variables."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("BTCTURK_API_KEY", raising=False)
        monkeypatch.delenv("BTCTURK_API_SECRET", raising=False)
        settings = ExchangeSettings()
        assert settings.base_url == "https://api.btcturk.com"
        assert settings.timeout_seconds == 10.0
        assert settings.sign_body is False
        assert settings.client_order_id is None
        assert settings.api_keys() is None

    def test_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BTCTURK_API_KEY", "63762e79-cb5c-4c0b-b714-5f0ce94bf100")
        monkeypatch.setenv("BTCTURK_API_SECRET", "L2tW3CeHzXH16im1pIhofRw0GdlqCdb8")
        monkeypatch.setenv("BTCTURK_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("BTCTURK_SIGN_BODY", "true")
        settings = ExchangeSettings()
        keys = settings.api_keys()
        assert isinstance(keys, ApiKeys)
        assert keys.public_key == "63762e79-cb5c-4c0b-b714-5f0ce94bf100"
        assert settings.timeout_seconds == 2.5
        assert settings.sign_body is True

    def test_secret_hidden_in_repr(self, exchange_settings: ExchangeSettings) -> None:
        assert "L2tW3CeHzXH16im1pIhofRw0GdlqCdb8" not in repr(exchange_settings)

    def test_half_configured_pair_means_no_keys(self) -> None:
        settings = ExchangeSettings(api_key="public", api_secret="")  # type: ignore[arg-type]
        assert settings.api_keys() is None

    def test_invalid_secret(self) -> None:
        settings = ExchangeSettings(
            api_key="public",  # type: ignore[arg-type]
            api_secret="not base64!",  # type: ignore[arg-type]
        )
        with pytest.raises(InvalidSecretEncoding):
            settings.api_keys()


class TestValidationSettings:
    def test_default_enforces_maximum(self) -> None:
        assert ValidationSettings().enforce_maximum_order_amount is True

    def test_disable_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VALIDATION_ENFORCE_MAXIMUM_ORDER_AMOUNT", "false")
        assert ValidationSettings().enforce_maximum_order_amount is False


class TestAppSettings:
    def test_composes_sub_settings(self) -> None:
        settings = AppSettings(
            log_level="DEBUG",
            exchange=ExchangeSettings(base_url="https://api.btcturk.test"),
        )
        assert settings.log_level == "DEBUG"
        assert settings.exchange.base_url == "https://api.btcturk.test"
        assert settings.validation.enforce_maximum_order_amount is True
