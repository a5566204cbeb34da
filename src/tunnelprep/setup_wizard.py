"""Interactive helper that creates a Cloudflare Tunnel for a deployment.

Installs cloudflared and jq if missing, logs in, reuses or creates the
named tunnel, copies its credentials file into ``files/`` and prints the
steps that remain for the Ansible deployment. DNS is left to Ansible.

Usage:
    tunnelprep                                   # interactive
    tunnelprep --tunnel-name prod --domain example.com
    tunnelprep --project-dir ~/infra --no-install
"""

from __future__ import annotations

import argparse
import logging
import subprocess
from collections.abc import Mapping
from pathlib import Path

from tunnelprep import __version__
from tunnelprep.auth import ensure_login
from tunnelprep.cloudflared import Cloudflared, Runner
from tunnelprep.config import Settings
from tunnelprep.credentials import COPIED, materialize_credentials
from tunnelprep.exceptions import CommandError, TunnelPrepError
from tunnelprep.installer import ensure_tools
from tunnelprep.prompts import InputProvider, prompt_string, require_value
from tunnelprep.report import BANNER, format_credentials_notice, format_summary
from tunnelprep.resolver import TunnelResolution, resolve_tunnel

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s: %(message)s"

# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _parse_wizard_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tunnelprep",
        description=(
            "Create a Cloudflare Tunnel and copy its credentials file "
            "into the project for the Ansible deployment."
        ),
    )
    parser.add_argument(
        "--project-dir",
        type=Path,
        default=None,
        help="Project root receiving files/<tunnel-id>.json (default: cwd)",
    )
    parser.add_argument(
        "--cloudflared-dir",
        type=Path,
        default=None,
        help="cloudflared config directory (default: ~/.cloudflared)",
    )
    parser.add_argument(
        "--tunnel-name",
        default="",
        help="Tunnel name; skips the prompt when given",
    )
    parser.add_argument(
        "--domain",
        default="",
        help="Primary domain (e.g. example.com); skips the prompt when given",
    )
    parser.add_argument(
        "--no-install",
        action="store_true",
        help="Fail instead of installing missing cloudflared or jq",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log the commands being run",
    )
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )


def _build_settings(
    args: argparse.Namespace, environ: Mapping[str, str] | None
) -> Settings:
    settings = Settings.from_env(environ)
    if args.project_dir is not None:
        settings.project_dir = args.project_dir.expanduser()
    if args.cloudflared_dir is not None:
        settings.cloudflared_dir = args.cloudflared_dir.expanduser()
    if args.no_install:
        settings.install = False
    return settings


# ---------------------------------------------------------------------------
# Flow steps
# ---------------------------------------------------------------------------


def _announce(resolution: TunnelResolution) -> None:
    if resolution.created:
        print(resolution.output.rstrip())
        print(f"Successfully created tunnel with ID: {resolution.tunnel_id}")
    else:
        print(f"A tunnel with the name '{resolution.name}' already exists.")
        print(f"Using existing tunnel ID: {resolution.tunnel_id}")


def _prepare(
    settings: Settings,
    ask: InputProvider,
    runner: Runner,
    tunnel_name: str,
    domain: str,
) -> None:
    cli = Cloudflared(settings, runner=runner)

    ensure_tools(settings, runner)
    ensure_login(settings, cli)

    print(BANNER)

    if not tunnel_name:
        tunnel_name = require_value(ask, "Enter a name for your tunnel", "Tunnel name")
    resolution = resolve_tunnel(tunnel_name, cli)
    _announce(resolution)

    # Reused tunnels get their credentials staged before the domain prompt.
    staged_early = False
    if not resolution.created:
        early = materialize_credentials(resolution.tunnel_id, settings)
        if early.status == COPIED:
            print(format_credentials_notice(early, settings, resolution.tunnel_id))
            staged_early = True

    if not domain:
        domain = require_value(
            ask, "Enter your primary domain (e.g., example.com)", "Domain"
        )

    result = materialize_credentials(resolution.tunnel_id, settings)
    if not staged_early:
        print(format_credentials_notice(result, settings, resolution.tunnel_id))

    print(format_summary(resolution.name, resolution.tunnel_id, domain))


# ---------------------------------------------------------------------------
# Main wizard flow
# ---------------------------------------------------------------------------


def run_wizard(
    argv: list[str] | None = None,
    *,
    ask: InputProvider = prompt_string,
    runner: Runner = subprocess.run,
    environ: Mapping[str, str] | None = None,
) -> int:
    """Run the tunnel setup helper. Returns exit code."""
    args = _parse_wizard_args(argv)
    _configure_logging(args.verbose)

    try:
        settings = _build_settings(args, environ)
        _prepare(
            settings,
            ask,
            runner,
            args.tunnel_name.strip(),
            args.domain.strip(),
        )
    except CommandError as e:
        print(f"Error: {e}")
        if e.output:
            print(e.output.rstrip())
        logger.debug("Command %s exited %s", e.command, e.returncode)
        return e.exit_code
    except TunnelPrepError as e:
        print(f"Error: {e}")
        return e.exit_code
    return 0
