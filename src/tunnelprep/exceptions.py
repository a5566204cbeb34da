"""Exceptions raised while preparing a tunnel.

Every error is fatal for the current run; ``run_wizard`` maps them to
exit code 1.
"""

from __future__ import annotations


class TunnelPrepError(Exception):
    """Base exception for all tunnelprep errors."""

    exit_code = 1


class DependencyError(TunnelPrepError):
    """Raised when a required tool is missing and cannot be installed."""


class ConfigError(TunnelPrepError):
    """Raised when environment configuration cannot be parsed."""


class InputError(TunnelPrepError):
    """Raised when a required interactive answer is empty."""


class CommandError(TunnelPrepError):
    """Raised when a wrapped command exits non-zero."""

    def __init__(
        self, message: str, command: list[str], returncode: int, output: str = ""
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


class TunnelIdError(TunnelPrepError):
    """Raised when no tunnel ID can be extracted from ``cloudflared`` output."""


class CredentialsError(TunnelPrepError):
    """Raised when the credentials file cannot be written into the project."""
