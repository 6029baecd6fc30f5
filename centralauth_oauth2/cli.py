"""
Flask CLI commands for CentralAuth plugin management.

These commands help with setup and debugging of the CentralAuth
integration.
"""

import click
import httpx

from .config import PluginConfig
from .provider import CentralAuthProvider


@click.group("centralauth")
def centralauth_cli():
    """CentralAuth login management commands."""
    pass


@centralauth_cli.command("show-config")
def show_config():
    """Display current CentralAuth configuration."""
    config = PluginConfig.from_env()
    provider = CentralAuthProvider(config=config.centralauth)
    centralauth = config.centralauth

    click.echo("=== CentralAuth Provider Configuration ===")
    click.echo(f"Provider Name: {centralauth.name}")
    click.echo(f"Authorization URL: {centralauth.authorization_url or 'Not configured'}")
    click.echo(f"Token URL: {centralauth.token_url or 'Not configured'}")
    click.echo(
        f"Resource Owner URL: {provider.get_resource_owner_details_url() or 'Not configured'}"
    )
    click.echo(f"Domain: {centralauth.domain or 'Not configured'}")
    click.echo(f"Redirect URI: {centralauth.redirect_uri}")
    click.echo(f"Scope: {centralauth.scope or '(none)'}")
    click.echo(f"Client ID: {centralauth.client_id[:8] + '...' if centralauth.client_id else 'Not configured'}")
    click.echo(f"Client Secret: {'Configured' if centralauth.client_secret else 'Not configured'}")

    click.echo("\n=== Redirects ===")
    click.echo(f"Frontend URL: {config.frontend_url}")
    click.echo(f"Login Success: {config.login_success_redirect}")
    click.echo(f"Login Error: {config.login_error_redirect}")


@centralauth_cli.command("validate-config")
def validate_config():
    """Validate the current configuration."""
    config = PluginConfig.from_env().centralauth
    errors = []
    warnings = []

    if not config.authorization_url:
        errors.append("CENTRALAUTH_AUTHORIZATION_URL not configured")
    if not config.token_url:
        errors.append("CENTRALAUTH_TOKEN_URL not configured")
    if not config.resource_owner_details_url:
        errors.append("CENTRALAUTH_RESOURCE_OWNER_DETAILS_URL not configured")
    if not config.client_id:
        errors.append("CENTRALAUTH_CLIENT_ID not configured")
    if not config.client_secret:
        errors.append("CENTRALAUTH_CLIENT_SECRET not configured")

    if not config.domain:
        warnings.append("CENTRALAUTH_DOMAIN not configured (user info requests are not domain scoped)")

    if warnings:
        click.echo("=== Warnings ===")
        for warning in warnings:
            click.echo(f"  ! {warning}")

    if errors:
        click.echo("\n=== Errors ===")
        for error in errors:
            click.echo(f"  x {error}")
        click.echo(f"\nConfiguration validation failed with {len(errors)} error(s)")
        raise SystemExit(1)

    click.echo("\n[OK] Configuration is valid!")


@centralauth_cli.command("test-connection")
@click.option("--timeout", default=10.0, show_default=True, help="Request timeout in seconds")
def test_connection(timeout):
    """Test connectivity to the CentralAuth endpoints."""
    config = PluginConfig.from_env().centralauth
    provider = CentralAuthProvider(config=config)

    click.echo("=== Testing CentralAuth Connectivity ===\n")

    endpoints = [
        ("Authorization URL", "HEAD", provider.get_base_authorization_url()),
        ("Token URL", "POST", provider.get_base_access_token_url()),
        ("Resource Owner URL", "POST", provider.get_resource_owner_details_url()),
    ]

    with httpx.Client(timeout=timeout, follow_redirects=True) as client:
        for label, method, url in endpoints:
            if not url:
                click.echo(f"[SKIP] {label} not configured")
                continue
            # Any HTTP answer counts, credentials are not sent
            try:
                resp = client.request(method, url)
                click.echo(f"[OK] {label} reachable ({resp.status_code}): {url}")
            except httpx.HTTPError as e:
                click.echo(f"[FAIL] {label}: {e}")
