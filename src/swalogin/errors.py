"""Errors raised while logging in and resolving the deployment target."""

from __future__ import annotations


class LoginError(Exception):
    """Base class for every failure that ends a login run."""


class AuthError(LoginError):
    """Authentication failed (bad credentials, network failure, login declined)."""


class AuthorizationError(LoginError):
    """The credential is not allowed to query the requested scope."""


class DirectoryError(LoginError):
    """A directory listing call failed for a reason other than authorization."""


class FatalResolutionError(LoginError):
    """A stage returned no candidates."""

    def __init__(self, stage: str, message: str | None = None) -> None:
        self.stage = stage
        super().__init__(message or f"No {stage} found. Aborting.")


class NoCandidates(LoginError):
    """The chooser was handed an empty list."""


class SelectionAborted(LoginError):
    """The user declined to pick one of several candidates."""
