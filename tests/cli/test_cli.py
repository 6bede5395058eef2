#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for the qodepack command-line interface."""

from __future__ import annotations

from collections.abc import Callable
import json
from pathlib import Path
from unittest.mock import ANY, Mock, patch

from click.testing import CliRunner
import pytest

from qodepack.cli import main as cli_main
from qodepack.config import QodePackRuntimeConfig
from qodepack.exceptions import DeploymentError, PackagingError
from qodepack.win32.deployqt import DeployQtOptions
from tests.conftest import read_subsystem


def test_version() -> None:
    result = CliRunner().invoke(cli_main, ["--version"])
    assert result.exit_code == 0
    assert "qodepack version" in result.output


def test_init_command(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests that 'init' writes the config and the template."""
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_main, ["init", "MyApp"])

    assert result.exit_code == 0, result.output
    assert json.loads((tmp_path / "deploy" / "config.json").read_text()) == {"appName": "MyApp"}
    assert (tmp_path / "deploy" / "win32" / "MyApp").is_dir()


class TestPackCommand:
    """Tests for 'pack'."""

    @patch("qodepack.commands.package.pack_project")
    def test_pack_success(self, mock_pack: Mock, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        dist.mkdir()
        mock_pack.return_value = tmp_path / "deploy" / "win32" / "build" / "MyApp"

        result = CliRunner().invoke(cli_main, ["pack", str(dist)])

        assert result.exit_code == 0, result.output
        mock_pack.assert_called_once_with(dist.resolve(), runtime_config=ANY)
        assert isinstance(mock_pack.call_args.kwargs["runtime_config"], QodePackRuntimeConfig)

    @patch("qodepack.commands.package.pack_project")
    def test_pack_uses_runtime_config_from_environment(self, mock_pack: Mock, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        dist.mkdir()
        mock_pack.return_value = tmp_path / "build"

        result = CliRunner().invoke(
            cli_main,
            ["pack", str(dist)],
            env={"QT_INSTALL_DIR": "C:/Qt/5.15.2/msvc2019_64", "QODEPACK_QODE_PATH": "C:/tools/qode.exe"},
        )

        assert result.exit_code == 0, result.output
        runtime_config = mock_pack.call_args.kwargs["runtime_config"]
        assert runtime_config.qt_home == "C:/Qt/5.15.2/msvc2019_64"
        assert runtime_config.qode_path == "C:/tools/qode.exe"

    @patch("qodepack.commands.package.pack_project")
    def test_pack_failure_aborts(self, mock_pack: Mock, tmp_path: Path) -> None:
        dist = tmp_path / "dist"
        dist.mkdir()
        mock_pack.side_effect = PackagingError("Qt installation not found")

        result = CliRunner().invoke(cli_main, ["pack", str(dist)])

        assert result.exit_code == 1

    def test_pack_requires_existing_dist(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli_main, ["pack", str(tmp_path / "missing")])
        assert result.exit_code == 2


class TestPatchSubsystemCommand:
    """Tests for 'patch-subsystem'."""

    def test_patch(self, write_pe: Callable[..., Path]) -> None:
        exe = write_pe(subsystem=3)

        result = CliRunner().invoke(cli_main, ["patch-subsystem", str(exe)])

        assert result.exit_code == 0, result.output
        assert read_subsystem(exe.read_bytes()) == 2

    def test_patch_invalid_file(self, tmp_path: Path) -> None:
        exe = tmp_path / "not-a-pe.exe"
        exe.write_bytes(b"\x00" * 256)

        result = CliRunner().invoke(cli_main, ["patch-subsystem", str(exe)])

        assert result.exit_code == 1
        assert exe.read_bytes() == b"\x00" * 256

    @patch("qodepack.win32.deployqt.run_windeployqt")
    def test_patch_with_deploy_options(
        self, mock_deploy: Mock, write_pe: Callable[..., Path], tmp_path: Path
    ) -> None:
        exe = write_pe()
        qml = tmp_path / "qml"
        qml.mkdir()
        mock_deploy.return_value = ""

        result = CliRunner().invoke(
            cli_main,
            ["patch-subsystem", str(exe), "--release", "--qml-dir", str(qml), "--extra-arg", "--no-opengl-sw"],
        )

        assert result.exit_code == 0, result.output
        mock_deploy.assert_called_once_with(
            exe,
            DeployQtOptions(qml_dir=qml, release=True, extra_args=["--no-opengl-sw"]),
        )

    @patch("qodepack.win32.deployqt.run_windeployqt")
    def test_patch_deploy_failure(self, mock_deploy: Mock, write_pe: Callable[..., Path]) -> None:
        exe = write_pe()
        mock_deploy.side_effect = DeploymentError("windeployqt failed with code 1: boom")

        result = CliRunner().invoke(cli_main, ["patch-subsystem", str(exe), "--deploy"])

        assert result.exit_code == 1
        assert read_subsystem(exe.read_bytes()) == 2


# 🪟📦🔚
