from __future__ import annotations

import logging
from typing import Any, Protocol

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError
from azure.identity import (
    ClientSecretCredential,
    DeviceCodeCredential,
    InteractiveBrowserCredential,
)
from pydantic import SecretStr

from swalogin.errors import AuthError

from .config import LoginConfig, Strategy
from .keychain import Keychain
from .scopes import MANAGEMENT_DEFAULT_SCOPE

logger = logging.getLogger(__name__)


class CredentialProvider(Protocol):
    """Produces an authenticated credential or raises :class:`AuthError`."""

    def authenticate(
        self,
        tenant_id: str | None,
        client_id: str | None,
        client_secret: str | None,
        persist: bool,
    ) -> TokenCredential:
        raise NotImplementedError


def get_credential(
    config: LoginConfig | None = None,
    *,
    keychain: Keychain | None = None,
    persist: bool | None = None,
) -> TokenCredential:
    """Construct a :class:`TokenCredential` based on :class:`LoginConfig`.

    No token is requested; use :class:`IdentityCredentialProvider` to get a
    verified credential.

    Args:
        config: Login configuration. If ``None``, it is read from the environment.
        keychain: Where cached login material lives. Defaults to the one
            described by ``config``.
        persist: Overrides ``config.use_keychain``.

    Returns:
        A concrete :class:`TokenCredential`.

    Raises:
        AuthError: Service principal login was requested without a tenant.
    """
    cfg = config or LoginConfig()
    persist = cfg.use_keychain if persist is None else persist
    keychain = keychain or Keychain(
        cfg.auth_record_path,
        name=cfg.keychain_name,
        allow_unencrypted_storage=cfg.allow_unencrypted_storage,
    )

    kwargs: dict[str, Any] = {}
    if cfg.authority:
        kwargs["authority"] = cfg.authority
    if persist:
        kwargs["cache_persistence_options"] = keychain.cache_options()

    if cfg.is_service_principal:
        if not cfg.tenant_id:
            raise AuthError("Service principal login requires a tenant id.")
        return ClientSecretCredential(
            tenant_id=cfg.tenant_id,
            client_id=cfg.client_id,
            client_secret=cfg.secret_value,
            **kwargs,
        )

    if cfg.tenant_id:
        kwargs["tenant_id"] = cfg.tenant_id
    if cfg.client_id:
        kwargs["client_id"] = cfg.client_id
    if persist:
        record = keychain.load(cfg.tenant_id)
        if record is not None:
            kwargs["authentication_record"] = record

    match cfg.strategy:
        case Strategy.DEVICE_CODE:
            return DeviceCodeCredential(**kwargs)
        case _:
            return InteractiveBrowserCredential(**kwargs)


class IdentityCredentialProvider:
    """Credential provider backed by ``azure-identity``.

    Settings other than the identifiers passed to :meth:`authenticate`
    (strategy, authority, keychain location) come from ``config``.
    """

    def __init__(
        self,
        config: LoginConfig | None = None,
        *,
        keychain: Keychain | None = None,
        scope: str = MANAGEMENT_DEFAULT_SCOPE,
    ) -> None:
        self._config = config or LoginConfig()
        self._keychain = keychain or Keychain(
            self._config.auth_record_path,
            name=self._config.keychain_name,
            allow_unencrypted_storage=self._config.allow_unencrypted_storage,
        )
        self._scope = scope

    def authenticate(
        self,
        tenant_id: str | None,
        client_id: str | None,
        client_secret: str | None,
        persist: bool,
    ) -> TokenCredential:
        """Log in and return a credential that has already obtained a token.

        Raises:
            AuthError: If the login fails or the inputs are inconsistent.
        """
        cfg = self._config.model_copy(
            update={
                "tenant_id": tenant_id,
                "client_id": client_id,
                "client_secret": SecretStr(client_secret) if client_secret else None,
                "use_keychain": persist,
            }
        )
        credential = get_credential(cfg, keychain=self._keychain, persist=persist)

        try:
            if cfg.is_service_principal:
                logger.info("Authenticating service principal %s", client_id)
                credential.get_token(self._scope)
                record = None
            else:
                logger.info("Authenticating interactively (tenant=%s)", tenant_id or "any")
                record = credential.authenticate(scopes=[self._scope])
        except AzureError as e:
            raise AuthError(f"Authentication failed: {e}") from e

        try:
            if persist:
                if record is not None:
                    self._keychain.save(record)
            else:
                self._keychain.clear()
        except OSError as e:
            logger.warning("Could not update auth record %s: %s", self._keychain.record_path, e)
        return credential
