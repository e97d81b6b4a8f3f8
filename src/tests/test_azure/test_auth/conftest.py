from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from azure.identity import AuthenticationRecord

import swalogin.azure.auth.factory as factory
from swalogin.azure.auth.keychain import Keychain


def make_record(tenant_id: str = "t") -> AuthenticationRecord:
    return AuthenticationRecord(
        tenant_id=tenant_id,
        client_id="04b07795-8ddb-461a-bbee-02f9e1bf7b46",
        authority="login.microsoftonline.com",
        home_account_id=f"uid.{tenant_id}",
        username="user@example.com",
    )


class _Recorder:
    """Factory to create recorder classes that capture init kwargs."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.cls = self._make(name)

    @staticmethod
    def _make(name: str):
        class _C:
            last_kwargs: dict[str, Any] | None = None
            call_count: int = 0
            error: Exception | None = None
            token_scopes: list[tuple[str, ...]] = []
            auth_scopes: list[list[str]] = []

            def __init__(self, **kwargs: Any) -> None:
                type(self).last_kwargs = dict(kwargs)
                type(self).call_count += 1

            def get_token(self, *scopes: str) -> Any:
                type(self).token_scopes.append(scopes)
                if type(self).error is not None:
                    raise type(self).error
                return object()

            def authenticate(self, *, scopes: list[str]) -> AuthenticationRecord:
                type(self).auth_scopes.append(scopes)
                if type(self).error is not None:
                    raise type(self).error
                return make_record(self.last_kwargs.get("tenant_id", "organizations"))

        _C.__name__ = name
        _C.__qualname__ = name
        # Fresh lists per class so recorders do not share history.
        _C.token_scopes = []
        _C.auth_scopes = []
        return _C


@pytest.fixture()
def stub_identity(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replace the azure.identity credential classes used by the factory.

    Returns:
        dict[str, Any]: Exposes stub classes for assertion (e.g., call kwargs).
    """
    names = [
        "ClientSecretCredential",
        "DeviceCodeCredential",
        "InteractiveBrowserCredential",
    ]
    recorders = {n: _Recorder(n) for n in names}
    for n, rec in recorders.items():
        monkeypatch.setattr(factory, n, rec.cls)
    return {n: rec.cls for n, rec in recorders.items()}


@pytest.fixture()
def record_factory():
    return make_record


@pytest.fixture()
def keychain(tmp_path: Path) -> Keychain:
    return Keychain(tmp_path / "auth_record.json", name="swa-cli-test")
