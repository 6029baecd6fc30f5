"""Tests for the centralauth CLI commands."""

import pytest
from click.testing import CliRunner

from centralauth_oauth2.cli import centralauth_cli


@pytest.fixture
def runner():
    return CliRunner()


class TestShowConfig:
    """Tests for show-config."""

    def test_shows_domain_scoped_url(self, runner, centralauth_env):
        result = runner.invoke(centralauth_cli, ["show-config"])

        assert result.exit_code == 0
        assert "https://auth.example.com/oauth/user?domain=myapp.com" in result.output
        assert "Client Secret: Configured" in result.output
        assert "test-client-secret" not in result.output


class TestValidateConfig:
    """Tests for validate-config."""

    def test_valid(self, runner, centralauth_env):
        result = runner.invoke(centralauth_cli, ["validate-config"])

        assert result.exit_code == 0
        assert "[OK] Configuration is valid!" in result.output

    def test_missing_values(self, runner, centralauth_env, monkeypatch):
        monkeypatch.delenv("CENTRALAUTH_TOKEN_URL")
        monkeypatch.delenv("CENTRALAUTH_DOMAIN")

        result = runner.invoke(centralauth_cli, ["validate-config"])

        assert result.exit_code == 1
        assert "CENTRALAUTH_TOKEN_URL not configured" in result.output
        assert "CENTRALAUTH_DOMAIN not configured" in result.output


class TestTestConnection:
    """Tests for test-connection."""

    def test_skips_unconfigured_endpoints(self, runner, monkeypatch):
        for key in (
            "CENTRALAUTH_AUTHORIZATION_URL",
            "CENTRALAUTH_TOKEN_URL",
            "CENTRALAUTH_RESOURCE_OWNER_DETAILS_URL",
            "CENTRALAUTH_DOMAIN",
        ):
            monkeypatch.delenv(key, raising=False)

        result = runner.invoke(centralauth_cli, ["test-connection"])

        assert result.exit_code == 0
        assert "[SKIP] Authorization URL not configured" in result.output
        assert "[SKIP] Token URL not configured" in result.output
        assert "[SKIP] Resource Owner URL not configured" in result.output
