"""Install the command-line tools tunnelprep depends on.

``cloudflared`` comes from the GitHub release on Linux and from Homebrew on
macOS; ``jq`` comes from apt-get, yum or Homebrew. Anything else is
reported as unsupported so the user can install the tool by hand.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
import stat
import subprocess
import tempfile
from pathlib import Path

import requests

from tunnelprep.cloudflared import Runner
from tunnelprep.config import Settings
from tunnelprep.constants import (
    CLOUDFLARED_BREW_FORMULA,
    CLOUDFLARED_INSTALL_DIR,
    CLOUDFLARED_RELEASE_URL,
)
from tunnelprep.exceptions import DependencyError

logger = logging.getLogger(__name__)

REQUIRED_TOOLS = ("cloudflared", "jq")

_ARCH_MAP = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv7l": "arm",
}

_DOWNLOAD_TIMEOUT = 300
_INSTALL_TIMEOUT = 600

# ---------------------------------------------------------------------------
# Platform detection
# ---------------------------------------------------------------------------


def detect_platform() -> str:
    """Return ``"linux"``, ``"macos"`` or ``"other"``."""
    system = platform.system()
    if system == "Linux":
        return "linux"
    if system == "Darwin":
        return "macos"
    return "other"


def _linux_arch() -> str:
    machine = platform.machine().lower()
    arch = _ARCH_MAP.get(machine)
    if arch is None:
        raise DependencyError(
            f"Unsupported architecture {machine!r}. "
            "Please install cloudflared manually."
        )
    return arch


def is_installed(tool: str) -> bool:
    return shutil.which(tool) is not None


# ---------------------------------------------------------------------------
# Install steps
# ---------------------------------------------------------------------------


def _run_install(cmd: list[str], runner: Runner) -> None:
    print(f"Running: {' '.join(cmd)}")
    try:
        runner(cmd, check=True, timeout=_INSTALL_TIMEOUT)
    except (
        subprocess.CalledProcessError,
        FileNotFoundError,
        subprocess.TimeoutExpired,
    ) as e:
        raise DependencyError(f"Install command failed: {' '.join(cmd)}") from e


def download_cloudflared(dest_dir: Path, arch: str) -> Path:
    """Download the Linux release binary into *dest_dir* and mark it executable."""
    url = CLOUDFLARED_RELEASE_URL.format(platform=f"linux-{arch}")
    target = dest_dir / "cloudflared"
    logger.debug("Downloading %s", url)
    try:
        response = requests.get(
            url, stream=True, timeout=_DOWNLOAD_TIMEOUT, allow_redirects=True
        )
        response.raise_for_status()
        with open(target, "wb") as f:
            for chunk in response.iter_content(chunk_size=8192):
                if chunk:
                    f.write(chunk)
    except requests.RequestException as e:
        raise DependencyError(f"Failed to download cloudflared from {url}") from e
    except OSError as e:
        raise DependencyError("Failed to write cloudflared binary") from e

    mode = os.stat(target).st_mode
    os.chmod(target, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return target


def install_cloudflared(runner: Runner, os_type: str | None = None) -> None:
    os_type = os_type or detect_platform()
    if os_type == "linux":
        arch = _linux_arch()
        with tempfile.TemporaryDirectory() as tmp:
            binary = download_cloudflared(Path(tmp), arch)
            _run_install(
                ["sudo", "mv", str(binary), CLOUDFLARED_INSTALL_DIR], runner
            )
    elif os_type == "macos":
        _run_install(["brew", "install", CLOUDFLARED_BREW_FORMULA], runner)
    else:
        raise DependencyError("Unsupported OS. Please install cloudflared manually.")


def install_jq(runner: Runner, os_type: str | None = None) -> None:
    os_type = os_type or detect_platform()
    if os_type == "linux":
        if is_installed("apt-get"):
            _run_install(["sudo", "apt-get", "update"], runner)
            _run_install(["sudo", "apt-get", "install", "-y", "jq"], runner)
        elif is_installed("yum"):
            _run_install(["sudo", "yum", "install", "-y", "jq"], runner)
        else:
            raise DependencyError("Couldn't install jq. Please install it manually.")
    elif os_type == "macos":
        _run_install(["brew", "install", "jq"], runner)
    else:
        raise DependencyError("Couldn't install jq. Please install it manually.")


_INSTALLERS = {
    "cloudflared": install_cloudflared,
    "jq": install_jq,
}

_INSTALL_MESSAGES = {
    "cloudflared": "cloudflared is not installed. Installing now...",
    "jq": "Installing jq for JSON parsing...",
}


def ensure_tools(
    settings: Settings,
    runner: Runner = subprocess.run,
    tools: tuple[str, ...] = REQUIRED_TOOLS,
) -> list[str]:
    """Install every missing tool in *tools*. Returns the names installed."""
    installed = []
    for tool in tools:
        if is_installed(tool):
            logger.debug("%s found at %s", tool, shutil.which(tool))
            continue
        if not settings.install:
            raise DependencyError(
                f"{tool} is not installed and automatic install is disabled. "
                f"Please install {tool} manually."
            )
        print(_INSTALL_MESSAGES[tool])
        _INSTALLERS[tool](runner)
        if not is_installed(tool):
            raise DependencyError(f"{tool} still not found on PATH after install.")
        print(f"{tool} installed successfully.")
        installed.append(tool)
    return installed
