"""Shared constants used across tunnelprep modules."""

from __future__ import annotations

import re

# Canonical 8-4-4-4-12 form, as printed by cloudflared
UUID_PATTERN = r"[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}"

UUID_RE = re.compile(UUID_PATTERN)

# Tunnel ID extraction strategies, tried in this order
TUNNEL_ID_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"tunnelID=({UUID_PATTERN})"),
    re.compile(rf"with id ({UUID_PATTERN})"),
    re.compile(rf"({UUID_PATTERN})"),
)

CLOUDFLARED_RELEASE_URL = (
    "https://github.com/cloudflare/cloudflared/releases/latest/download/"
    "cloudflared-{platform}"
)
CLOUDFLARED_INSTALL_DIR = "/usr/local/bin"
CLOUDFLARED_BREW_FORMULA = "cloudflare/cloudflare/cloudflared"
