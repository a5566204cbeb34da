"""Runtime settings for tunnelprep.

Paths that a shell helper would take from the current directory and
``$HOME`` are explicit here so tests can point them at ``tmp_path``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from tunnelprep.exceptions import ConfigError

DEFAULT_CANDIDATE_LIMIT = 5
DEFAULT_COMMAND_TIMEOUT = 60

ENV_PROJECT_DIR = "TUNNELPREP_PROJECT_DIR"
ENV_CLOUDFLARED_DIR = "TUNNELPREP_CLOUDFLARED_DIR"
ENV_CANDIDATE_LIMIT = "TUNNELPREP_CANDIDATE_LIMIT"
ENV_COMMAND_TIMEOUT = "TUNNELPREP_COMMAND_TIMEOUT"


def _default_cloudflared_dir() -> Path:
    return Path.home() / ".cloudflared"


@dataclass
class Settings:
    """Filesystem locations and limits used by one run."""

    project_dir: Path = field(default_factory=Path.cwd)
    cloudflared_dir: Path = field(default_factory=_default_cloudflared_dir)
    credentials_subdir: str = "files"
    candidate_limit: int = DEFAULT_CANDIDATE_LIMIT
    command_timeout: int = DEFAULT_COMMAND_TIMEOUT
    install: bool = True

    @property
    def cert_path(self) -> Path:
        """Origin certificate written by ``cloudflared login``."""
        return self.cloudflared_dir / "cert.pem"

    @property
    def credentials_dir(self) -> Path:
        return self.project_dir / self.credentials_subdir

    def credentials_source(self, tunnel_id: str) -> Path:
        """Where ``cloudflared tunnel create`` stores the credentials file."""
        return self.cloudflared_dir / f"{tunnel_id}.json"

    def credentials_target(self, tunnel_id: str) -> Path:
        """Where the deployment expects the credentials file."""
        return self.credentials_dir / f"{tunnel_id}.json"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``TUNNELPREP_*`` environment variables."""
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get(ENV_PROJECT_DIR):
            settings.project_dir = Path(env[ENV_PROJECT_DIR]).expanduser()
        if env.get(ENV_CLOUDFLARED_DIR):
            settings.cloudflared_dir = Path(env[ENV_CLOUDFLARED_DIR]).expanduser()
        settings.candidate_limit = _int_from_env(
            env, ENV_CANDIDATE_LIMIT, DEFAULT_CANDIDATE_LIMIT
        )
        settings.command_timeout = _int_from_env(
            env, ENV_COMMAND_TIMEOUT, DEFAULT_COMMAND_TIMEOUT
        )
        return settings


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value
