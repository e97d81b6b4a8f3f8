"""Persistence of the account record that lets the next run log in silently."""

from __future__ import annotations

import logging
from pathlib import Path

from azure.identity import AuthenticationRecord, TokenCachePersistenceOptions

logger = logging.getLogger(__name__)


class Keychain:
    """Stores the ``AuthenticationRecord`` next to a named token cache.

    The token cache itself is owned by ``azure-identity`` (platform keyring
    or encrypted file); this class only keeps the record that points a
    credential at the cached account.
    """

    def __init__(
        self,
        record_path: str | Path,
        *,
        name: str = "swa-cli",
        allow_unencrypted_storage: bool = False,
    ) -> None:
        self.record_path = Path(record_path).expanduser()
        self.name = name
        self.allow_unencrypted_storage = allow_unencrypted_storage

    def cache_options(self) -> TokenCachePersistenceOptions:
        return TokenCachePersistenceOptions(
            name=self.name,
            allow_unencrypted_storage=self.allow_unencrypted_storage,
        )

    def load(self, tenant_id: str | None = None) -> AuthenticationRecord | None:
        """Return the stored record, if any and if it belongs to ``tenant_id``.

        Args:
            tenant_id: Tenant the caller is about to authenticate against. A
                record for another tenant is ignored. ``None`` accepts any.

        Returns:
            The record, or ``None`` when nothing usable is stored.
        """
        if not self.record_path.is_file():
            return None
        try:
            record = AuthenticationRecord.deserialize(self.record_path.read_text())
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable auth record %s: %s", self.record_path, e)
            return None
        if tenant_id and record.tenant_id != tenant_id:
            logger.debug("Stored auth record is for tenant %s, not %s", record.tenant_id, tenant_id)
            return None
        return record

    def save(self, record: AuthenticationRecord) -> None:
        self.record_path.parent.mkdir(parents=True, exist_ok=True)
        self.record_path.write_text(record.serialize())
        logger.debug("Auth record saved to %s", self.record_path)

    def clear(self) -> None:
        if self.record_path.exists():
            self.record_path.unlink()
            logger.debug("Auth record removed from %s", self.record_path)
