"""Make sure ``cloudflared`` holds an origin certificate before tunnel calls."""

from __future__ import annotations

import logging

from tunnelprep.cloudflared import Cloudflared
from tunnelprep.config import Settings

logger = logging.getLogger(__name__)


def is_logged_in(settings: Settings) -> bool:
    """Return True if ``cert.pem`` exists in the cloudflared directory."""
    return settings.cert_path.is_file()


def ensure_login(settings: Settings, cli: Cloudflared) -> bool:
    """Log in when no certificate is present.

    Returns True if the login flow ran, False if a certificate already
    existed. A failed or aborted login propagates as ``CommandError``.
    """
    if is_logged_in(settings):
        logger.debug("Found certificate at %s", settings.cert_path)
        return False
    print("You need to log in to Cloudflare first.")
    cli.login()
    return True
