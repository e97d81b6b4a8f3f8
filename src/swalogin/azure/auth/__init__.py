"""Authentication helpers for the login flow.

Public API:
- IdentityCredentialProvider.authenticate() → TokenCredential
- get_credential() → TokenCredential (unverified)
- LoginConfig (settings)
- Strategy (enum of interactive flows and service principal login)
- Keychain (persisted account record)
- MANAGEMENT_DEFAULT_SCOPE (constant for Azure Resource Manager)
"""

from .config import LoginConfig, Strategy
from .factory import CredentialProvider, IdentityCredentialProvider, get_credential
from .keychain import Keychain
from .scopes import AZURE_CLOUD_NAME, MANAGEMENT_DEFAULT_SCOPE, authority_from_url

__all__ = [
    "LoginConfig",
    "Strategy",
    "CredentialProvider",
    "IdentityCredentialProvider",
    "get_credential",
    "Keychain",
    "AZURE_CLOUD_NAME",
    "MANAGEMENT_DEFAULT_SCOPE",
    "authority_from_url",
]
