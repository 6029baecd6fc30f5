"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import httpx
import pytest
from flask import Flask

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from centralauth_oauth2 import blueprint  # noqa: E402
from centralauth_oauth2.plugin import CentralAuthPlugin  # noqa: E402
from centralauth_oauth2.provider import CentralAuthProvider  # noqa: E402

ENV_VARS = {
    "CENTRALAUTH_BASE_URL": "https://app.example.com",
    "CENTRALAUTH_AUTHORIZATION_URL": "https://auth.example.com/oauth/authorize",
    "CENTRALAUTH_TOKEN_URL": "https://auth.example.com/oauth/token",
    "CENTRALAUTH_RESOURCE_OWNER_DETAILS_URL": "https://auth.example.com/oauth/user",
    "CENTRALAUTH_DOMAIN": "myapp.com",
    "CENTRALAUTH_CLIENT_ID": "test-client-id",
    "CENTRALAUTH_CLIENT_SECRET": "test-client-secret",
}


@pytest.fixture
def provider_options():
    """Snake case provider options with a domain."""
    return {
        "clientId": "test-client-id",
        "clientSecret": "test-client-secret",
        "redirectUri": "https://example.com/callback",
        "authorization_url": "https://auth.example.com/oauth/authorize",
        "token_url": "https://auth.example.com/oauth/token",
        "resource_owner_details_url": "https://auth.example.com/oauth/user",
        "domain": "example.com",
    }


@pytest.fixture
def provider(provider_options):
    return CentralAuthProvider(provider_options)


@pytest.fixture
def sample_user():
    """User info payload as returned by CentralAuth."""
    return {
        "id": 12345,
        "email": "test@example.com",
        "gravatar": "https://gravatar.com/avatar/abc123def456",
        "username": "testuser",
        "created_at": "2023-01-01T00:00:00Z",
        "updated_at": "2023-12-01T12:00:00Z",
    }


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, response):
        self.requests = []

        def handler(request):
            self.requests.append(request)
            return response

        super().__init__(handler)


@pytest.fixture
def mock_http():
    """Return a factory building (client, transport) answering with a fixed response."""
    clients = []

    def factory(response):
        transport = RecordingTransport(response)
        client = httpx.Client(transport=transport)
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def centralauth_env(monkeypatch):
    """Configure the plugin through environment variables."""
    for key in (
        "CENTRALAUTH_PROVIDER_NAME",
        "CENTRALAUTH_REDIRECT_URI",
        "CENTRALAUTH_SCOPE",
        "CENTRALAUTH_FRONTEND_URL",
        "CENTRALAUTH_LOGIN_SUCCESS_REDIRECT",
        "CENTRALAUTH_LOGIN_ERROR_REDIRECT",
    ):
        monkeypatch.delenv(key, raising=False)
    for key, value in ENV_VARS.items():
        monkeypatch.setenv(key, value)
    return ENV_VARS


@pytest.fixture
def app(centralauth_env):
    """Flask app with the CentralAuth plugin installed."""
    app = Flask(__name__)
    app.config["SECRET_KEY"] = "test-secret-key"
    app.config["TESTING"] = True
    CentralAuthPlugin(app)

    yield app

    blueprint.reset()


@pytest.fixture
def client(app):
    return app.test_client()
