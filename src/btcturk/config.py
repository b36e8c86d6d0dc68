"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from btcturk.auth.keys import ApiKeys


class ExchangeSettings(BaseSettings):
    """BtcTurk connection and authentication settings."""

    model_config = SettingsConfigDict(env_prefix="BTCTURK_")

    api_key: SecretStr = SecretStr("")
    api_secret: SecretStr = SecretStr("")
    base_url: str = "https://api.btcturk.com"
    timeout_seconds: float = 10.0
    client_order_id: str | None = None  # sent as newOrderClientId when set
    sign_body: bool = False  # exchange signs key+stamp only

    def api_keys(self) -> ApiKeys | None:
        """Build ApiKeys from the configured pair, or None when either is blank.

        Raises:
            InvalidSecretEncoding: If the secret is set but not base64.
        """
        api_key = self.api_key.get_secret_value()
        api_secret = self.api_secret.get_secret_value()
        if not api_key or not api_secret:
            return None
        return ApiKeys(api_key, api_secret)


class ValidationSettings(BaseSettings):
    """Pre-trade validation switches."""

    model_config = SettingsConfigDict(env_prefix="VALIDATION_")

    enforce_maximum_order_amount: bool = True


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    exchange: ExchangeSettings = ExchangeSettings()
    validation: ValidationSettings = ValidationSettings()
