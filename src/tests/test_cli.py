from __future__ import annotations

from typing import Any

import pytest
from click.testing import CliRunner

import swalogin.cli as cli
from swalogin.azure.auth.config import LoginConfig, Strategy
from swalogin.errors import FatalResolutionError, SelectionAborted
from swalogin.resolution import ResolutionContext, Source, Stage


@pytest.fixture()
def fake_login(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Replace the real login with one that records its config."""
    state: dict[str, Any] = {"error": None, "stages": list(Stage)}

    def _login(config: LoginConfig) -> ResolutionContext:
        state["config"] = config
        context = ResolutionContext(credential=object())
        for stage in state["stages"]:
            context.resolve(stage, f"{stage.value}-1", Source.AUTO_SELECT)
        context.error = state["error"]
        return context

    monkeypatch.setattr(cli, "login", _login)
    return state


def test_login__success_prints_summary(fake_login: dict[str, Any]) -> None:
    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 0, result.output
    assert "✔ Logged in successfully to AzureCloud!" in result.output
    assert "Resource group: resourceGroup-1" in result.output
    assert fake_login["config"].use_keychain is True


def test_login__options_become_config(fake_login: dict[str, Any]) -> None:
    result = CliRunner().invoke(
        cli.main,
        [
            "--tenant", "T1",
            "--subscription", "S1",
            "--resource-group", "RG1",
            "--app-name", "Site1",
            "--client-id", "c",
            "--client-secret", "sekrit",
            "--no-use-keychain",
            "--device-code",
        ],
    )

    assert result.exit_code == 0, result.output
    cfg: LoginConfig = fake_login["config"]
    assert (cfg.tenant_id, cfg.subscription_id) == ("T1", "S1")
    assert (cfg.resource_group_name, cfg.site_name) == ("RG1", "Site1")
    assert cfg.secret_value == "sekrit"
    assert cfg.use_keychain is False
    assert cfg.strategy is Strategy.DEVICE_CODE


def test_login__environment_used_when_option_missing(fake_login: dict[str, Any]) -> None:
    result = CliRunner().invoke(
        cli.main,
        ["--tenant", "from-cli"],
        env={"AZURE_TENANT_ID": "from-env", "AZURE_SUBSCRIPTION_ID": "sub-env"},
    )

    assert result.exit_code == 0, result.output
    assert fake_login["config"].tenant_id == "from-cli"
    assert fake_login["config"].subscription_id == "sub-env"


def test_login__failure_exits_nonzero(fake_login: dict[str, Any]) -> None:
    fake_login["stages"] = [Stage.TENANT, Stage.SUBSCRIPTION]
    fake_login["error"] = FatalResolutionError("resourceGroup", "No resource groups found. Aborting.")

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 1
    assert "No resource groups found. Aborting." in result.output
    assert "Subscription: subscription-1" in result.output
    assert "Static site: -" in result.output
    assert "Logged in successfully" not in result.output


def test_login__aborted_selection(fake_login: dict[str, Any]) -> None:
    fake_login["stages"] = []
    fake_login["error"] = SelectionAborted("No tenant selected.")

    result = CliRunner().invoke(cli.main, [])

    assert result.exit_code == 130
    assert "Aborted." in result.output


def test_login__secret_without_client_is_usage_error(fake_login: dict[str, Any]) -> None:
    result = CliRunner().invoke(cli.main, ["--client-secret", "sekrit"])

    assert result.exit_code == 2
    assert "config" not in fake_login
