from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    """An entity a scope can resolve to."""

    id: str
    display_name: str

    @property
    def label(self) -> str:
        if self.display_name and self.display_name != self.id:
            return f"{self.display_name} ({self.id})"
        return self.id


@dataclass(frozen=True)
class Tenant(Candidate):
    """Represents an Azure AD tenant."""

    default_domain: str | None = None


@dataclass(frozen=True)
class Subscription(Candidate):
    """Represents an Azure subscription."""

    state: str | None = None


@dataclass(frozen=True)
class ResourceGroup(Candidate):
    """Represents a resource group; ``id`` is the group name."""

    location: str | None = None


@dataclass(frozen=True)
class Site(Candidate):
    """Represents a Static Web App; ``id`` is the site name."""

    default_hostname: str | None = None
