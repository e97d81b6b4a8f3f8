"""Cascading resolution of tenant, subscription, resource group and site.

Each stage either takes the caller's value, auto-selects the only
candidate, asks the user to pick among several, or fails. Stages run in
order because each listing needs the identifiers resolved before it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from azure.core.credentials import TokenCredential

from swalogin.azure.auth.config import LoginConfig
from swalogin.azure.auth.factory import CredentialProvider, IdentityCredentialProvider
from swalogin.azure.directory import ArmScopeDirectory, ScopeDirectory
from swalogin.errors import FatalResolutionError, LoginError
from swalogin.models import Candidate
from swalogin.prompts import Chooser, TerminalChooser

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Scopes in resolution order."""

    TENANT = "tenant"
    SUBSCRIPTION = "subscription"
    RESOURCE_GROUP = "resourceGroup"
    SITE = "site"

    @property
    def label(self) -> str:
        return {
            Stage.TENANT: "tenant",
            Stage.SUBSCRIPTION: "subscription",
            Stage.RESOURCE_GROUP: "resource group",
            Stage.SITE: "static site",
        }[self]


class Source(str, Enum):
    """How a stage got its value."""

    OVERRIDE = "override"
    AUTO_SELECT = "auto_select"
    SELECTION = "selection"


@dataclass(frozen=True)
class ResolvedScope:
    value: str
    source: Source


@dataclass
class ResolutionContext:
    """Working state of a run, returned to the caller at the end.

    On failure ``error`` holds the exception that stopped the run and the
    stages after it stay unresolved.
    """

    credential: TokenCredential | None = None
    scopes: dict[Stage, ResolvedScope] = field(default_factory=dict)
    error: LoginError | None = None

    def resolve(self, stage: Stage, value: str, source: Source) -> None:
        if stage in self.scopes:
            raise RuntimeError(f"{stage.value} is already resolved")
        self.scopes[stage] = ResolvedScope(value, source)
        logger.debug("Resolved %s=%s (%s)", stage.value, value, source.value)

    def value(self, stage: Stage) -> str | None:
        scope = self.scopes.get(stage)
        return scope.value if scope else None

    @property
    def tenant_id(self) -> str | None:
        return self.value(Stage.TENANT)

    @property
    def subscription_id(self) -> str | None:
        return self.value(Stage.SUBSCRIPTION)

    @property
    def resource_group_name(self) -> str | None:
        return self.value(Stage.RESOURCE_GROUP)

    @property
    def site_name(self) -> str | None:
        return self.value(Stage.SITE)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class ResolutionPipeline:
    """Runs the four stages against the given collaborators."""

    def __init__(
        self,
        provider: CredentialProvider,
        directory: ScopeDirectory,
        chooser: Chooser,
    ) -> None:
        self._provider = provider
        self._directory = directory
        self._chooser = chooser

    def run(self, config: LoginConfig) -> ResolutionContext:
        context = ResolutionContext()
        try:
            self._run(config, context)
        except LoginError as e:
            logger.debug("Login stopped: %s", e)
            context.error = e
        logger.debug(
            "Login result: tenant=%s subscription=%s resourceGroup=%s site=%s",
            context.tenant_id,
            context.subscription_id,
            context.resource_group_name,
            context.site_name,
        )
        return context

    def _authenticate(self, config: LoginConfig, tenant_id: str | None) -> TokenCredential:
        return self._provider.authenticate(
            tenant_id, config.client_id, config.secret_value, config.use_keychain
        )

    def _run(self, config: LoginConfig, context: ResolutionContext) -> None:
        directory = self._directory
        context.credential = self._authenticate(config, config.tenant_id)

        source = self._resolve(
            context, Stage.TENANT, config.tenant_id, directory.list_tenants
        )
        if source is Source.SELECTION:
            # The first login may not be scoped to the chosen tenant.
            context.credential = self._authenticate(config, context.tenant_id)

        self._resolve(
            context,
            Stage.SUBSCRIPTION,
            config.subscription_id,
            directory.list_subscriptions,
        )
        self._resolve(
            context,
            Stage.RESOURCE_GROUP,
            config.resource_group_name,
            directory.list_resource_groups,
            context.subscription_id,
        )
        self._resolve(
            context,
            Stage.SITE,
            config.site_name,
            directory.list_sites,
            context.subscription_id,
            context.resource_group_name,
        )

    def _resolve(
        self,
        context: ResolutionContext,
        stage: Stage,
        override: str | None,
        list_fn: Callable[..., Sequence[Candidate]],
        *parents: str,
    ) -> Source:
        if override:
            context.resolve(stage, override, Source.OVERRIDE)
            return Source.OVERRIDE

        candidates = list_fn(context.credential, *parents)
        if not candidates:
            raise FatalResolutionError(stage.value, f"No {stage.label}s found. Aborting.")
        if len(candidates) == 1:
            logger.debug("A single %s found", stage.label)
            context.resolve(stage, candidates[0].id, Source.AUTO_SELECT)
            return Source.AUTO_SELECT

        chosen = self._chooser.choose(candidates, override, label=stage.label)
        context.resolve(stage, chosen.id, Source.SELECTION)
        return Source.SELECTION


def login(
    config: LoginConfig | None = None,
    *,
    chooser: Chooser | None = None,
) -> ResolutionContext:
    """Log in with ``azure-identity`` and resolve the target against ARM.

    Args:
        config: Known identifiers. If ``None``, they are read from the environment.
        chooser: How to ask the user. Defaults to a terminal prompt.

    Returns:
        The resolution context; check ``ok`` or call ``raise_for_error()``.
    """
    cfg = config or LoginConfig()
    pipeline = ResolutionPipeline(
        IdentityCredentialProvider(cfg),
        ArmScopeDirectory(),
        chooser or TerminalChooser(),
    )
    return pipeline.run(cfg)
