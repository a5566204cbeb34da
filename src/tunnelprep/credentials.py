"""Copy a tunnel's credentials file into the project.

The file is treated as an opaque secret: it is copied, never parsed. When
it cannot be found, recently written JSON files in the cloudflared
directory are listed as candidates but nothing is copied.
"""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from tunnelprep.config import Settings
from tunnelprep.exceptions import CredentialsError, TunnelIdError
from tunnelprep.parser import is_uuid

logger = logging.getLogger(__name__)

PRESENT = "present"
COPIED = "copied"
MISSING = "missing"


@dataclass
class CredentialsResult:
    """Outcome of staging the credentials file for one tunnel ID."""

    status: str
    path: Path
    candidates: list[Path] = field(default_factory=list)


def _is_safe_id(tunnel_id: str) -> bool:
    """Return True if *tunnel_id* can name a file without leaving its directory."""
    return (
        bool(tunnel_id)
        and not tunnel_id.startswith(".")
        and "/" not in tunnel_id
        and "\\" not in tunnel_id
    )


def find_candidates(settings: Settings) -> list[Path]:
    """Return JSON files newer than ``cert.pem``, newest first."""
    cert = settings.cert_path
    if not settings.cloudflared_dir.is_dir() or not cert.is_file():
        return []
    cutoff = cert.stat().st_mtime
    found = []
    for path in settings.cloudflared_dir.rglob("*.json"):
        try:
            if not path.is_file():
                continue
            mtime = path.stat().st_mtime
        except OSError:
            continue
        if mtime > cutoff:
            found.append((mtime, path))
    found.sort(key=lambda item: item[0], reverse=True)
    return [path for _, path in found[: settings.candidate_limit]]


def materialize_credentials(tunnel_id: str, settings: Settings) -> CredentialsResult:
    """Make ``files/<tunnel_id>.json`` exist in the project if possible."""
    if not _is_safe_id(tunnel_id):
        raise TunnelIdError(f"Invalid tunnel ID: {tunnel_id!r}")
    if not is_uuid(tunnel_id):
        logger.warning("Unexpected tunnel ID format: %r", tunnel_id)

    target = settings.credentials_target(tunnel_id)
    if target.is_file():
        return CredentialsResult(PRESENT, target)

    source = settings.credentials_source(tunnel_id)
    if source.is_file():
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(source, target)
        except OSError as e:
            raise CredentialsError(
                f"Could not copy {source} to {target}: {e.strerror or e}"
            ) from e
        logger.debug("Copied %s -> %s", source, target)
        return CredentialsResult(COPIED, target)

    logger.debug("No credentials at %s", source)
    return CredentialsResult(MISSING, target, find_candidates(settings))
