"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here, no scattered magic strings.
Settings are loaded once at process entry and never mutated afterwards.
"""

from typing import Any

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic import ValidationError as SettingsValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from payproxy import __version__
from payproxy.domain.gateway.entities import EndpointTemplate, UpstreamConfig
from payproxy.domain.gateway.errors import ConfigurationError

# Field name -> environment variable reported when the value is missing.
REQUIRED_VARIABLES = {
    "api_url": "API_URL",
    "api_payment": "API_PAYMENT",
    "api_token": "API_TOKEN",
}

# Historical misspelling still accepted for the payment template.
LEGACY_PAYMENT_VARIABLE = "API_PAYMET"


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode (exposes /docs). Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        host: Listen address.
        port: Listen port.
        api_url: Primary upstream read endpoint.
        api_payment: Upstream payment endpoint template containing ``{id}``.
        api_token: Bearer credential for the upstream API.
        upstream_timeout_seconds: Bound applied to every outbound call.
        cors_origins: Origins allowed by the CORS middleware.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    project_name: str = "PayProxy"
    version: str = __version__
    debug: bool = False
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 5000

    api_url: str = Field(validation_alias="API_URL")
    api_payment: str = Field(
        validation_alias=AliasChoices("API_PAYMENT", LEGACY_PAYMENT_VARIABLE)
    )
    api_token: SecretStr = Field(validation_alias="API_TOKEN")

    upstream_timeout_seconds: float = Field(default=5.0, gt=0)
    cors_origins: list[str] = ["*"]

    @field_validator("api_url", "api_payment")
    @classmethod
    def _reject_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("api_token")
    @classmethod
    def _reject_blank_token(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("must not be blank")
        return value

    def upstream_config(self) -> UpstreamConfig:
        """Build the immutable upstream configuration handed to the forwarder."""
        return UpstreamConfig(
            data_endpoint=EndpointTemplate(self.api_url),
            payment_endpoint=EndpointTemplate(self.api_payment),
            token=self.api_token.get_secret_value(),
        )

    def environment_report(self) -> dict[str, str]:
        """Return which required variables are set, without their values."""
        return {
            "API_URL": "Set" if self.api_url else "Missing",
            "API_PAYMENT": "Set" if self.api_payment else "Missing",
            "API_TOKEN": "Set" if self.api_token.get_secret_value() else "Missing",
        }


def load_settings(**overrides: Any) -> Settings:
    """Load settings, converting validation failures to ConfigurationError.

    Args:
        overrides: Passed straight to ``Settings`` (e.g. ``_env_file=None``).

    Returns:
        The validated settings.

    Raises:
        ConfigurationError: If a required variable is missing or blank.
    """
    try:
        return Settings(**overrides)
    except SettingsValidationError as exc:
        problems = []
        for error in exc.errors():
            name = str(error["loc"][0]) if error["loc"] else "settings"
            problems.append(REQUIRED_VARIABLES.get(name, name))
        raise ConfigurationError(sorted(set(problems))) from exc
