"""Tests for dependency installation."""

from __future__ import annotations

import os
import subprocess
from unittest.mock import MagicMock, patch

import pytest
import requests

from tunnelprep.config import Settings
from tunnelprep.exceptions import DependencyError
from tunnelprep.installer import (
    detect_platform,
    download_cloudflared,
    ensure_tools,
    install_cloudflared,
    install_jq,
)


@pytest.fixture
def settings(tmp_path):
    return Settings(project_dir=tmp_path, cloudflared_dir=tmp_path / ".cloudflared")


def _which_from(available):
    return lambda tool: f"/usr/bin/{tool}" if tool in available else None


class TestDetectPlatform:
    def test_linux(self):
        with patch("tunnelprep.installer.platform.system", return_value="Linux"):
            assert detect_platform() == "linux"

    def test_macos(self):
        with patch("tunnelprep.installer.platform.system", return_value="Darwin"):
            assert detect_platform() == "macos"

    def test_windows(self):
        with patch("tunnelprep.installer.platform.system", return_value="Windows"):
            assert detect_platform() == "other"


class TestInstallJq:
    def test_apt(self):
        runner = MagicMock()
        with patch(
            "tunnelprep.installer.shutil.which", side_effect=_which_from({"apt-get"})
        ):
            install_jq(runner, os_type="linux")
        cmds = [c.args[0] for c in runner.call_args_list]
        assert cmds == [
            ["sudo", "apt-get", "update"],
            ["sudo", "apt-get", "install", "-y", "jq"],
        ]

    def test_yum(self):
        runner = MagicMock()
        with patch(
            "tunnelprep.installer.shutil.which", side_effect=_which_from({"yum"})
        ):
            install_jq(runner, os_type="linux")
        runner.assert_called_once()
        assert runner.call_args.args[0] == ["sudo", "yum", "install", "-y", "jq"]

    def test_linux_without_package_manager(self):
        runner = MagicMock()
        with (
            patch("tunnelprep.installer.shutil.which", return_value=None),
            pytest.raises(DependencyError, match="install it manually"),
        ):
            install_jq(runner, os_type="linux")
        runner.assert_not_called()

    def test_macos(self):
        runner = MagicMock()
        install_jq(runner, os_type="macos")
        assert runner.call_args.args[0] == ["brew", "install", "jq"]

    def test_other_os(self):
        with pytest.raises(DependencyError):
            install_jq(MagicMock(), os_type="other")

    def test_failed_command(self):
        runner = MagicMock(
            side_effect=subprocess.CalledProcessError(1, ["brew", "install", "jq"])
        )
        with pytest.raises(DependencyError, match="Install command failed"):
            install_jq(runner, os_type="macos")


class TestInstallCloudflared:
    def test_macos_uses_brew_tap(self):
        runner = MagicMock()
        install_cloudflared(runner, os_type="macos")
        assert runner.call_args.args[0] == [
            "brew",
            "install",
            "cloudflare/cloudflare/cloudflared",
        ]

    def test_other_os(self):
        with pytest.raises(DependencyError, match="Unsupported OS"):
            install_cloudflared(MagicMock(), os_type="other")

    def test_linux_downloads_and_moves(self, tmp_path):
        runner = MagicMock()
        fake_binary = tmp_path / "cloudflared"
        with (
            patch("tunnelprep.installer.platform.machine", return_value="x86_64"),
            patch(
                "tunnelprep.installer.download_cloudflared", return_value=fake_binary
            ) as download,
        ):
            install_cloudflared(runner, os_type="linux")
        assert download.call_args.args[1] == "amd64"
        assert runner.call_args.args[0] == [
            "sudo",
            "mv",
            str(fake_binary),
            "/usr/local/bin",
        ]

    def test_linux_unknown_arch(self):
        with (
            patch("tunnelprep.installer.platform.machine", return_value="mips"),
            pytest.raises(DependencyError, match="architecture"),
        ):
            install_cloudflared(MagicMock(), os_type="linux")


class TestDownloadCloudflared:
    def test_writes_executable(self, tmp_path):
        response = MagicMock()
        response.iter_content.return_value = [b"\x7fELF", b"", b"rest"]
        with patch(
            "tunnelprep.installer.requests.get", return_value=response
        ) as get:
            path = download_cloudflared(tmp_path, "arm64")
        assert get.call_args.args[0].endswith("cloudflared-linux-arm64")
        assert path.read_bytes() == b"\x7fELFrest"
        assert os.access(path, os.X_OK)

    def test_http_error(self, tmp_path):
        response = MagicMock()
        response.raise_for_status.side_effect = requests.HTTPError("404")
        with (
            patch("tunnelprep.installer.requests.get", return_value=response),
            pytest.raises(DependencyError, match="Failed to download"),
        ):
            download_cloudflared(tmp_path, "amd64")


class TestEnsureTools:
    def test_all_present(self, settings):
        runner = MagicMock()
        with patch(
            "tunnelprep.installer.shutil.which",
            side_effect=_which_from({"cloudflared", "jq"}),
        ):
            assert ensure_tools(settings, runner) == []
        runner.assert_not_called()

    def test_installs_missing_jq(self, settings):
        available = {"cloudflared", "apt-get"}

        def fake_run(cmd, **kwargs):
            if cmd[-1] == "jq":
                available.add("jq")

        with (
            patch(
                "tunnelprep.installer.shutil.which",
                side_effect=lambda tool: _which_from(available)(tool),
            ),
            patch("tunnelprep.installer.platform.system", return_value="Linux"),
        ):
            assert ensure_tools(settings, fake_run) == ["jq"]

    def test_still_missing_after_install(self, settings):
        with (
            patch("tunnelprep.installer.shutil.which", side_effect=_which_from({"jq"})),
            patch("tunnelprep.installer.platform.system", return_value="Darwin"),
            pytest.raises(DependencyError, match="still not found"),
        ):
            ensure_tools(settings, MagicMock())

    def test_no_install_fails_fast(self, settings):
        settings.install = False
        runner = MagicMock()
        with (
            patch("tunnelprep.installer.shutil.which", return_value=None),
            pytest.raises(DependencyError, match="cloudflared is not installed"),
        ):
            ensure_tools(settings, runner)
        runner.assert_not_called()

    def test_unsupported_os(self, settings):
        with (
            patch("tunnelprep.installer.shutil.which", return_value=None),
            patch("tunnelprep.installer.platform.system", return_value="Windows"),
            pytest.raises(DependencyError, match="Unsupported OS"),
        ):
            ensure_tools(settings, MagicMock())
