from __future__ import annotations

import logging
from typing import Callable, Iterable, Protocol, TypeVar

from azure.core.credentials import TokenCredential
from azure.core.exceptions import AzureError, ClientAuthenticationError, HttpResponseError
from azure.mgmt.resource import ResourceManagementClient
from azure.mgmt.subscription import SubscriptionClient
from azure.mgmt.web import WebSiteManagementClient

from swalogin.errors import AuthorizationError, DirectoryError
from swalogin.models import ResourceGroup, Site, Subscription, Tenant

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ScopeDirectory(Protocol):
    """Read-only listing of the entities visible to a credential."""

    def list_tenants(self, credential: TokenCredential) -> list[Tenant]:
        """List tenants the signed-in account belongs to."""
        raise NotImplementedError

    def list_subscriptions(self, credential: TokenCredential) -> list[Subscription]:
        """List subscriptions in the credential's tenant."""
        raise NotImplementedError

    def list_resource_groups(
        self, credential: TokenCredential, subscription_id: str
    ) -> list[ResourceGroup]:
        """List resource groups in a subscription."""
        raise NotImplementedError

    def list_sites(
        self,
        credential: TokenCredential,
        subscription_id: str,
        resource_group_name: str,
    ) -> list[Site]:
        """List Static Web Apps in a resource group."""
        raise NotImplementedError


def _collect(what: str, fetch: Callable[[], Iterable[T]]) -> list[T]:
    """Drain a paged listing, mapping SDK failures to login errors."""
    try:
        items = list(fetch())
    except ClientAuthenticationError as e:
        raise AuthorizationError(f"Not authorized to list {what}: {e.message}") from e
    except HttpResponseError as e:
        if e.status_code in (401, 403):
            raise AuthorizationError(f"Not authorized to list {what}: {e.message}") from e
        raise DirectoryError(f"Failed to list {what}: {e.message}") from e
    except AzureError as e:
        raise DirectoryError(f"Failed to list {what}: {e}") from e
    logger.debug("Found %d %s", len(items), what)
    return items


class ArmScopeDirectory:
    """Scope directory backed by the Azure Resource Manager SDKs.

    A new management client is created per call so that each listing uses
    the credential it is given; nothing is cached between calls.
    """

    def __init__(self, **client_kwargs) -> None:
        self._client_kwargs = client_kwargs

    def list_tenants(self, credential: TokenCredential) -> list[Tenant]:
        client = SubscriptionClient(credential, **self._client_kwargs)
        return [
            Tenant(
                id=t.tenant_id,
                display_name=getattr(t, "display_name", None) or t.tenant_id,
                default_domain=getattr(t, "default_domain", None),
            )
            for t in _collect("tenants", client.tenants.list)
        ]

    def list_subscriptions(self, credential: TokenCredential) -> list[Subscription]:
        client = SubscriptionClient(credential, **self._client_kwargs)
        return [
            Subscription(
                id=s.subscription_id,
                display_name=s.display_name or s.subscription_id,
                state=s.state,
            )
            for s in _collect("subscriptions", client.subscriptions.list)
        ]

    def list_resource_groups(
        self, credential: TokenCredential, subscription_id: str
    ) -> list[ResourceGroup]:
        client = ResourceManagementClient(
            credential, subscription_id, **self._client_kwargs
        )
        return [
            ResourceGroup(id=rg.name, display_name=rg.name, location=rg.location)
            for rg in _collect("resource groups", client.resource_groups.list)
        ]

    def list_sites(
        self,
        credential: TokenCredential,
        subscription_id: str,
        resource_group_name: str,
    ) -> list[Site]:
        client = WebSiteManagementClient(
            credential, subscription_id, **self._client_kwargs
        )
        return [
            Site(
                id=site.name,
                display_name=site.name,
                default_hostname=site.default_hostname,
            )
            for site in _collect(
                "static sites",
                lambda: client.static_sites.get_static_sites_by_resource_group(
                    resource_group_name
                ),
            )
        ]
