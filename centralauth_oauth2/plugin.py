"""
Flask plugin registration for CentralAuth.

This module provides the plugin class that wires the CentralAuth
blueprint and CLI commands into a Flask application.
"""

import logging

from flask import Flask

from . import blueprint
from .cli import centralauth_cli
from .config import PluginConfig

logger = logging.getLogger(__name__)


class CentralAuthPlugin:
    """
    CentralAuth login plugin.

    Authenticates users against a CentralAuth deployment via the OAuth2
    authorization code flow and keeps their profile in the session.
    """

    def __init__(self, app: Flask = None):
        """
        Initialize the plugin.

        Args:
            app: Flask application instance (optional, can call init_app later)
        """
        self.app = app
        self.config: PluginConfig = None

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask, *args, **kwargs):
        """
        Initialize the plugin with a Flask application.

        Args:
            app: Flask application instance
        """
        self.app = app

        # Reload configuration, the blueprint shares it
        blueprint.reset()
        self.config = blueprint.get_config()

        if not app.config.get("SECRET_KEY"):
            logger.warning(
                "Flask SECRET_KEY not set. Sessions will not persist across restarts."
            )

        app.register_blueprint(self.get_blueprint())
        app.cli.add_command(centralauth_cli)

        logger.info("CentralAuth plugin initialized")
        if self.config.centralauth.authorization_url:
            logger.info(f"Authorization URL: {self.config.centralauth.authorization_url}")
        else:
            logger.warning("CentralAuth not fully configured - CENTRALAUTH_AUTHORIZATION_URL not set")

    def get_blueprint(self):
        """Return the Flask blueprint for this extension."""
        return blueprint.centralauth_bp

    def get_config_secrets_to_obfuscate(self):
        """Return config keys that should not be exposed."""
        return ["CENTRALAUTH_CLIENT_SECRET"]

    @staticmethod
    def get_name() -> str:
        """Return the plugin name."""
        return "centralauth-oauth2"

    @staticmethod
    def get_version() -> str:
        """Return the plugin version."""
        from . import __version__
        return __version__

    @staticmethod
    def get_description() -> str:
        """Return the plugin description."""
        return "CentralAuth OAuth 2.0 login for Flask"
