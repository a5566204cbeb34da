"""Find or create the tunnel for a given name."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tunnelprep.cloudflared import Cloudflared
from tunnelprep.exceptions import InputError, TunnelIdError
from tunnelprep.parser import extract_tunnel_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TunnelResolution:
    """Outcome of resolving a tunnel name to an ID."""

    name: str
    tunnel_id: str
    created: bool
    output: str = ""


def find_existing(tunnels: list[dict], name: str) -> str | None:
    """Return the ID of the first tunnel whose name equals *name* exactly."""
    for tunnel in tunnels:
        if tunnel.get("name") == name and tunnel.get("id"):
            return str(tunnel["id"])
    return None


def resolve_tunnel(name: str, cli: Cloudflared) -> TunnelResolution:
    """Reuse the tunnel called *name* or create it.

    Names are compared case-sensitively. Raises ``CommandError`` if creation
    fails and ``TunnelIdError`` if the ID cannot be read from its output.
    """
    if not name or not name.strip():
        raise InputError("Tunnel name cannot be empty.")

    print("Checking for existing tunnels...")
    existing_id = find_existing(cli.list_tunnels(), name)
    if existing_id:
        logger.debug("Reusing tunnel %s (%s)", name, existing_id)
        return TunnelResolution(name=name, tunnel_id=existing_id, created=False)

    print(f"Creating new tunnel '{name}'...")
    output = cli.create_tunnel(name)
    tunnel_id = extract_tunnel_id(output)
    if not tunnel_id:
        raise TunnelIdError(
            "Failed to extract tunnel ID from the output.\n"
            "Please check the Cloudflare dashboard or run "
            "'cloudflared tunnel list' to find your tunnel ID."
        )
    return TunnelResolution(name=name, tunnel_id=tunnel_id, created=True, output=output)
