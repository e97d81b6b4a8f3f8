from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .scopes import authority_from_url


class Strategy(str, Enum):
    """Supported authentication strategies."""

    INTERACTIVE_BROWSER = "interactive_browser"
    DEVICE_CODE = "device_code"


class LoginConfig(BaseSettings):
    """Known identifiers and credentials for a login run.

    Every identifier is optional; whatever is missing is discovered by the
    resolution pipeline. The model is frozen so the pipeline input cannot
    change while a run is in progress.

    Environment variables (aliases supported where noted):
        - AZURE_TENANT_ID
        - AZURE_SUBSCRIPTION_ID
        - AZURE_RESOURCE_GROUP
        - SWA_CLI_APP_NAME
        - AZURE_CLIENT_ID
        - AZURE_CLIENT_SECRET
        - SWA_CLI_LOGIN_USE_KEYCHAIN
        - SWA_CLI_LOGIN_STRATEGY
        - AZURE_AUTHORITY_HOST
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # The field name is listed in each AliasChoices so that keyword
    # construction keeps working alongside the environment names.

    tenant_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("tenant_id", "AZURE_TENANT_ID"),
    )
    subscription_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("subscription_id", "AZURE_SUBSCRIPTION_ID"),
    )
    resource_group_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "resource_group_name", "AZURE_RESOURCE_GROUP"
        ),
    )
    site_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("site_name", "app_name", "SWA_CLI_APP_NAME"),
    )
    client_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("client_id", "AZURE_CLIENT_ID"),
    )
    client_secret: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("client_secret", "AZURE_CLIENT_SECRET"),
    )
    use_keychain: bool = Field(
        default=True,
        validation_alias=AliasChoices("use_keychain", "SWA_CLI_LOGIN_USE_KEYCHAIN"),
    )
    strategy: Strategy = Field(
        default=Strategy.INTERACTIVE_BROWSER,
        validation_alias=AliasChoices("strategy", "SWA_CLI_LOGIN_STRATEGY"),
    )
    authority: str | None = Field(
        default=None,
        validation_alias=AliasChoices("authority", "AZURE_AUTHORITY_HOST"),
    )
    keychain_name: str = Field(
        default="swa-cli",
        validation_alias=AliasChoices("keychain_name", "SWA_CLI_KEYCHAIN_NAME"),
    )
    auth_record_path: Path = Field(
        default=Path.home() / ".swa" / "auth_record.json",
        validation_alias=AliasChoices("auth_record_path", "SWA_CLI_AUTH_RECORD"),
    )
    allow_unencrypted_storage: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "allow_unencrypted_storage", "SWA_CLI_ALLOW_UNENCRYPTED_STORAGE"
        ),
    )

    @field_validator("tenant_id", "subscription_id", "resource_group_name", "site_name", "client_id")
    @classmethod
    def _empty_as_none(cls, v: str | None) -> str | None:
        """Treat blank identifiers as not supplied."""
        if v is not None and not v.strip():
            return None
        return v

    @field_validator("authority")
    @classmethod
    def _normalise_authority(cls, v: str | None) -> str | None:
        """Reduce the authority host to ``scheme://host``."""
        if v is None:
            return v
        return authority_from_url(v)

    @model_validator(mode="after")
    def _cross_field_validation(self) -> "LoginConfig":
        """A client secret is meaningless without the client it belongs to."""
        if self.client_secret and not self.client_id:
            raise ValueError("client_secret requires client_id.")
        return self

    @property
    def is_service_principal(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @property
    def secret_value(self) -> str | None:
        return self.client_secret.get_secret_value() if self.client_secret else None
