"""``swa-login``: log into Azure and pick the Static Web App to work with."""

from __future__ import annotations

import logging
from typing import Any

import click
from pydantic import ValidationError

from swalogin.azure.auth import AZURE_CLOUD_NAME, LoginConfig, Strategy
from swalogin.errors import SelectionAborted
from swalogin.resolution import ResolutionContext, login

EXAMPLES = """
\b
Examples:

\b
  Interactive login
  swa-login

\b
  Interactive login without storing credentials
  swa-login --no-use-keychain

\b
  Login into specific tenant
  swa-login --tenant 12345678-abcd-0123-4567-abcdef012345

\b
  Login using service principal
  swa-login --tenant 12345678-abcd-0123-4567-abcdef012345 \\
            --client-id 00000000-0000-0000-0000-000000000000 \\
            --client-secret <secret>
"""


def _summary(context: ResolutionContext) -> None:
    for name, value in (
        ("Tenant", context.tenant_id),
        ("Subscription", context.subscription_id),
        ("Resource group", context.resource_group_name),
        ("Static site", context.site_name),
    ):
        click.echo(f"  {name}: {value or '-'}")


@click.command(name="login", epilog=EXAMPLES)
@click.option("--tenant", "tenant_id", help="Azure tenant ID.")
@click.option("--subscription", "subscription_id", help="Azure subscription ID used by this project.")
@click.option("--resource-group", "resource_group_name", help="Azure resource group used by this project.")
@click.option("--app-name", "site_name", help="Azure Static Web App application name.")
@click.option("--client-id", help="Azure client ID.")
@click.option("--client-secret", help="Azure client secret.")
@click.option(
    "--use-keychain/--no-use-keychain",
    default=None,
    help="Enable credentials cache persistence.",
)
@click.option(
    "--device-code",
    is_flag=True,
    default=False,
    help="Use the device code flow instead of opening a browser.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log resolution details.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, device_code: bool, **options: Any) -> None:
    """Login into Azure Static Web Apps."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Only pass what was given so environment values still apply.
    overrides = {k: v for k, v in options.items() if v is not None}
    if device_code:
        overrides["strategy"] = Strategy.DEVICE_CODE
    try:
        config = LoginConfig(**overrides)
    except ValidationError as e:
        raise click.BadParameter(str(e)) from e

    context = login(config)

    if isinstance(context.error, SelectionAborted):
        click.secho("Aborted.", fg="yellow", err=True)
        _summary(context)
        ctx.exit(130)
    if context.error is not None:
        click.secho(f"✖ {context.error}", fg="red", err=True)
        _summary(context)
        ctx.exit(1)

    _summary(context)
    click.secho(f"✔ Logged in successfully to {AZURE_CLOUD_NAME}!", fg="green")


if __name__ == "__main__":
    main()
