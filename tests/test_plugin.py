"""Tests for CentralAuthPlugin."""

from flask import Flask

from centralauth_oauth2 import __version__, blueprint
from centralauth_oauth2.plugin import CentralAuthPlugin


class TestCentralAuthPlugin:
    """Tests for CentralAuthPlugin."""

    def test_registers_blueprint_and_cli(self, app):
        assert "centralauth" in app.blueprints
        assert "centralauth" in app.cli.commands

    def test_loads_config_from_env(self, app):
        assert blueprint.get_config().centralauth.domain == "myapp.com"

    def test_deferred_init(self, centralauth_env):
        plugin = CentralAuthPlugin()
        assert plugin.app is None

        app = Flask(__name__)
        try:
            plugin.init_app(app)
        finally:
            blueprint.reset()

        assert plugin.app is app
        assert plugin.config.centralauth.client_id == "test-client-id"

    def test_metadata(self):
        plugin = CentralAuthPlugin()
        assert plugin.get_name() == "centralauth-oauth2"
        assert plugin.get_version() == __version__
        assert plugin.get_config_secrets_to_obfuscate() == ["CENTRALAUTH_CLIENT_SECRET"]
