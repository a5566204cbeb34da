"""Thin wrapper around the ``cloudflared`` command-line tool.

All calls go through an injectable *runner* with the signature of
``subprocess.run`` so tests never touch a real binary.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Callable
from typing import Any

from tunnelprep.config import Settings
from tunnelprep.exceptions import CommandError

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]

_LIST_FALLBACK = "Will attempt to create a new tunnel."
_UNPARSEABLE_LIST = f"Warning: Could not parse tunnel list. {_LIST_FALLBACK}"


class Cloudflared:
    """Run ``cloudflared`` subcommands needed to prepare a tunnel."""

    def __init__(
        self,
        settings: Settings,
        runner: Runner = subprocess.run,
        binary: str = "cloudflared",
    ) -> None:
        self._settings = settings
        self._run = runner
        self._binary = binary

    def list_tunnels(self) -> list[dict[str, Any]]:
        """Return existing tunnels from ``tunnel list -o json``.

        Any failure degrades to an empty list; the caller then creates a
        new tunnel instead of aborting.
        """
        cmd = [self._binary, "tunnel", "list", "-o", "json"]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = self._run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._settings.command_timeout,
            )
        except (subprocess.TimeoutExpired, OSError) as exc:
            print(f"Warning: Could not list tunnels: {exc}. {_LIST_FALLBACK}")
            return []
        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit code {result.returncode}"
            print(f"Warning: Could not list tunnels: {detail}. {_LIST_FALLBACK}")
            return []
        try:
            data = json.loads(result.stdout or "[]")
        except json.JSONDecodeError:
            data = None
        if not isinstance(data, list):
            print(_UNPARSEABLE_LIST)
            return []
        return [t for t in data if isinstance(t, dict)]

    def create_tunnel(self, name: str) -> str:
        """Create tunnel *name* and return the combined stdout/stderr text."""
        cmd = [self._binary, "tunnel", "create", name]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = self._run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                timeout=self._settings.command_timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise CommandError(
                f"Timed out creating tunnel '{name}'", cmd, -1, ""
            ) from e
        except FileNotFoundError as e:
            raise CommandError("cloudflared not found on PATH", cmd, 127, "") from e
        except OSError as e:
            raise CommandError(f"Could not run cloudflared: {e}", cmd, 126, "") from e
        output = result.stdout or ""
        if result.returncode != 0:
            raise CommandError(
                "Error creating tunnel", cmd, result.returncode, output
            )
        return output

    def login(self) -> None:
        """Run the interactive ``cloudflared login`` flow on the terminal."""
        cmd = [self._binary, "login"]
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = self._run(cmd)
        except FileNotFoundError as e:
            raise CommandError("cloudflared not found on PATH", cmd, 127, "") from e
        except OSError as e:
            raise CommandError(f"Could not run cloudflared: {e}", cmd, 126, "") from e
        if result.returncode != 0:
            raise CommandError("Cloudflare login failed", cmd, result.returncode)
