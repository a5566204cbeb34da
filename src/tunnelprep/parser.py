"""Extract the tunnel ID from ``cloudflared tunnel create`` output.

``cloudflared`` has no structured output mode for ``tunnel create``, so the
ID is recovered from its log text. Three patterns are tried in order:

1. ``tunnelID=<uuid>`` (structured log field)
2. ``with id <uuid>`` ("Created tunnel NAME with id UUID")
3. any UUID in the text

The first pattern that matches wins.
"""

from __future__ import annotations

from tunnelprep.constants import TUNNEL_ID_PATTERNS, UUID_RE


def extract_tunnel_id(text: str) -> str | None:
    """Return the tunnel UUID found in *text*, or None."""
    if not text:
        return None
    for pattern in TUNNEL_ID_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


def is_uuid(value: str) -> bool:
    """Return True if *value* is a canonical lowercase UUID."""
    return bool(value) and UUID_RE.fullmatch(value) is not None
