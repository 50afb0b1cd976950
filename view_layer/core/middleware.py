"""Middleware configuration."""

from fastapi import FastAPI
from fastapi.middleware.trustedhost import TrustedHostMiddleware

from view_layer.config import Settings
from view_layer.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


def get_trusted_hosts(settings: Settings) -> list[str]:
    """Split the comma separated ``trusted_hosts`` setting."""
    return [host.strip() for host in settings.trusted_hosts.split(",") if host.strip()]


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure all middleware for the application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    # Trusted hosts - the server_url helper builds absolute URLs from the Host header
    trusted_hosts = get_trusted_hosts(settings)
    log_with_context(
        logger,
        "info",
        "Configuring TrustedHost middleware",
        event_type="security_config",
        hosts=trusted_hosts,
    )
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=trusted_hosts,
    )
