"""
Flask blueprint for CentralAuth authentication.

This blueprint provides the following endpoints:
- GET /auth/login - Initiate the authorization code flow
- GET /auth/callback - Receive the authorization code, load the user
- GET /auth/logout - Clear session and logout
- GET /auth/me - Return the authenticated user
- GET /auth/info - Describe the configured provider
"""

import logging

from flask import (
    Blueprint,
    jsonify,
    redirect,
    request,
    session,
    url_for,
)

from .config import PluginConfig
from .exceptions import CentralAuthError
from .provider import CentralAuthProvider
from .request_context import RequestContext

logger = logging.getLogger(__name__)

centralauth_bp = Blueprint("centralauth", __name__, url_prefix="/auth")

# Plugin configuration (initialized on first request)
_config: PluginConfig = None
_provider: CentralAuthProvider = None


def get_config() -> PluginConfig:
    """Get or initialize plugin configuration."""
    global _config
    if _config is None:
        _config = PluginConfig.from_env()
    return _config


def get_provider() -> CentralAuthProvider:
    """Get or initialize the CentralAuth provider."""
    global _provider
    if _provider is None:
        _provider = CentralAuthProvider(config=get_config().centralauth)
    return _provider


def reset() -> None:
    """Drop cached configuration and provider (reloaded on next use)."""
    global _config, _provider
    _config = None
    _provider = None


def request_context() -> RequestContext:
    """Build the caller metadata for the current Flask request."""
    return RequestContext.from_headers(request.headers, request.remote_addr)


@centralauth_bp.route("/login")
def login():
    """
    Initiate the authorization code flow.

    Query Parameters:
        next: URL to redirect to after successful login (optional)
    """
    config = get_config()

    if not config.centralauth.authorization_url:
        return jsonify({
            "error": "CentralAuth not configured",
            "message": "CENTRALAUTH_AUTHORIZATION_URL is not set"
        }), 500

    try:
        authorization_url, state = get_provider().create_authorization_url()
    except Exception as e:
        logger.error(f"Error initiating CentralAuth login: {e}")
        return jsonify({"error": "Failed to initiate authentication"}), 500

    session["centralauth_state"] = state
    session["auth_return_url"] = request.args.get("next", config.login_success_redirect)

    logger.info("Initiating CentralAuth login, redirecting to provider")
    logger.debug(f"Authorization URL: {authorization_url}")
    return redirect(authorization_url)


@centralauth_bp.route("/callback")
def callback():
    """
    CentralAuth callback endpoint.

    Exchanges the authorization code for an access token and loads the
    resource owner into the session.
    """
    config = get_config()

    state = request.args.get("state")
    stored_state = session.pop("centralauth_state", None)
    if not state or state != stored_state:
        logger.warning("CentralAuth state mismatch")
        return redirect(config.login_error_redirect)

    error = request.args.get("error")
    if error:
        error_description = request.args.get("error_description", "Unknown error")
        logger.error(f"CentralAuth error: {error} - {error_description}")
        return redirect(config.login_error_redirect)

    code = request.args.get("code")
    if not code:
        logger.error("No authorization code received")
        return redirect(config.login_error_redirect)

    provider = get_provider()
    try:
        token = provider.fetch_access_token(code, state=state)
        owner = provider.get_resource_owner(token, request_context())
    except CentralAuthError as e:
        logger.warning(f"CentralAuth rejected the login: {e}")
        return redirect(config.login_error_redirect)
    except Exception:
        logger.exception("Error processing CentralAuth callback")
        return redirect(config.login_error_redirect)

    session["centralauth_user"] = dict(owner.to_dict())
    session["provider"] = config.centralauth.name

    logger.info(f"User {owner.get_id()} authenticated via {config.centralauth.name}")
    return redirect(session.pop("auth_return_url", config.login_success_redirect))


@centralauth_bp.route("/logout")
def logout():
    """Logout and clear session."""
    session.clear()
    logger.info("User logged out")
    return redirect(get_config().frontend_url)


@centralauth_bp.route("/me")
def me():
    """Return the authenticated user's CentralAuth profile."""
    user = session.get("centralauth_user")

    if not user:
        return jsonify({
            "error": "Not authenticated",
            "login_url": url_for("centralauth.login", _external=True),
        }), 401

    return jsonify({
        "user": user,
        "provider": session.get("provider"),
    })


@centralauth_bp.route("/info")
def auth_info():
    """
    Return information about the configured provider.

    This endpoint can be used by the frontend to display login options.
    """
    config = get_config()

    return jsonify({
        "provider": config.centralauth.name,
        "login_url": url_for("centralauth.login", _external=True),
        "configured": config.centralauth.is_configured,
    })
