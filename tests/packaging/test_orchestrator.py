#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for init and pack orchestration."""

from __future__ import annotations

from collections.abc import Callable
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from qodepack.config import QodePackRuntimeConfig
from qodepack.exceptions import ConfigurationError, PackagingError
from qodepack.packaging.orchestrator import PackagingOrchestrator
from tests.conftest import read_subsystem, write_manifest


@pytest.fixture
def dist_dir(project_dir: Path) -> Path:
    dist = project_dir / "dist"
    dist.mkdir()
    (dist / "index.js").write_text("require('@nodegui/nodegui');\n")
    return dist


@pytest.fixture
def packable_project(
    project_dir: Path,
    add_module: Callable[..., Path],
    nodegui_module: Path,
    write_pe: Callable[..., Path],
    dist_dir: Path,
) -> PackagingOrchestrator:
    """A project with qode, the core framework, one dependency and a Qt install."""
    add_module("lodash")
    write_manifest(project_dir, "myapp", {"@nodegui/nodegui": "^0.57.0", "lodash": "^4.17.21"})
    qode = write_pe("qode.exe", subsystem=3)

    orchestrator = PackagingOrchestrator(
        project_dir,
        runtime_config=QodePackRuntimeConfig(qode_path=str(qode)),
    )
    orchestrator.init("MyApp")
    return orchestrator


class TestInit:
    """Tests for PackagingOrchestrator.init."""

    def test_init_copies_bundled_template(self, project_dir: Path) -> None:
        orchestrator = PackagingOrchestrator(project_dir, runtime_config=QodePackRuntimeConfig())

        app_dir = orchestrator.init("MyApp")

        assert app_dir == project_dir.resolve() / "deploy" / "win32" / "MyApp"
        assert json.loads((app_dir / "qode.json").read_text()) == {"distPath": "./dist/index.js"}
        config = json.loads((project_dir / "deploy" / "config.json").read_text())
        assert config == {"appName": "MyApp"}

    def test_init_without_template_writes_minimal_app(self, project_dir: Path, tmp_path: Path) -> None:
        orchestrator = PackagingOrchestrator(
            project_dir,
            runtime_config=QodePackRuntimeConfig(),
            template_dir=tmp_path / "no-template",
        )

        app_dir = orchestrator.init("MyApp")

        manifest = json.loads((app_dir / "package.json").read_text())
        assert manifest == {"name": "MyApp", "version": "1.0.0"}
        assert (app_dir / "README.md").read_text().startswith("# MyApp")

    def test_init_twice_keeps_user_edits(self, project_dir: Path) -> None:
        orchestrator = PackagingOrchestrator(project_dir, runtime_config=QodePackRuntimeConfig())
        app_dir = orchestrator.init("MyApp")
        (app_dir / "icon.ico").write_bytes(b"icon")

        orchestrator.init("MyApp")

        assert (app_dir / "icon.ico").exists()


class TestPack:
    """Tests for PackagingOrchestrator.pack."""

    def test_pack_builds_distribution(self, packable_project: PackagingOrchestrator, dist_dir: Path) -> None:
        build_dir = packable_project.pack(dist_dir)

        assert build_dir == packable_project.build_root / "MyApp"
        assert (build_dir / "qode.json").exists()
        assert (build_dir / "dist" / "index.js").exists()
        assert read_subsystem((build_dir / "qode.exe").read_bytes()) == 2

        modules = build_dir / "node_modules"
        assert (modules / "lodash" / "index.js").exists()
        core = modules / "@nodegui" / "nodegui"
        assert (core / "dist" / "index.js").exists()
        assert not (core / "miniqt").exists()
        assert not (core / "src").exists()

        assert (build_dir / "Qt5Core.dll").exists()
        assert (build_dir / "qt.conf").exists()
        assert (build_dir / "start.bat").exists()

    def test_pack_leaves_source_qode_untouched(
        self, packable_project: PackagingOrchestrator, dist_dir: Path
    ) -> None:
        qode = Path(packable_project.runtime_config.qode_path)

        packable_project.pack(dist_dir)

        assert read_subsystem(qode.read_bytes()) == 3

    def test_pack_clears_previous_build(self, packable_project: PackagingOrchestrator, dist_dir: Path) -> None:
        stale = packable_project.build_root / "Stale" / "old.txt"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")

        packable_project.pack(dist_dir)

        assert not stale.exists()

    def test_pack_without_init_raises(self, project_dir: Path, dist_dir: Path) -> None:
        orchestrator = PackagingOrchestrator(project_dir, runtime_config=QodePackRuntimeConfig())

        with pytest.raises(ConfigurationError, match="qodepack init"):
            orchestrator.pack(dist_dir)

    def test_pack_missing_qode_raises(self, project_dir: Path, dist_dir: Path) -> None:
        orchestrator = PackagingOrchestrator(project_dir, runtime_config=QodePackRuntimeConfig())
        orchestrator.init("MyApp")

        with pytest.raises(PackagingError, match="qode binary not found"):
            orchestrator.pack(dist_dir)

    def test_pack_missing_dist_raises(self, packable_project: PackagingOrchestrator, tmp_path: Path) -> None:
        with pytest.raises(PackagingError, match="dist directory not found"):
            packable_project.pack(tmp_path / "missing-dist")

    def test_pack_without_qt_raises(
        self,
        project_dir: Path,
        add_module: Callable[..., Path],
        write_pe: Callable[..., Path],
        dist_dir: Path,
    ) -> None:
        add_module("lodash")
        write_manifest(project_dir, "myapp", {"lodash": "1"})
        orchestrator = PackagingOrchestrator(
            project_dir,
            runtime_config=QodePackRuntimeConfig(qode_path=str(write_pe())),
        )
        orchestrator.init("MyApp")

        with pytest.raises(PackagingError, match="Qt installation not found"):
            orchestrator.pack(dist_dir)

    def test_configured_qt_home_is_used(self, packable_project: PackagingOrchestrator, dist_dir: Path) -> None:
        packable_project.runtime_config = QodePackRuntimeConfig(
            qt_home="/opt/Qt/5.15.2/msvc2019_64",
            qode_path=packable_project.runtime_config.qode_path,
        )

        with patch("qodepack.packaging.orchestrator.deploy_qt_runtime") as mock_deploy:
            build_dir = packable_project.pack(dist_dir)

        mock_deploy.assert_called_once_with(build_dir, Path("/opt/Qt/5.15.2/msvc2019_64"))

    def test_default_qode_location(self, project_dir: Path) -> None:
        orchestrator = PackagingOrchestrator(project_dir, runtime_config=QodePackRuntimeConfig())

        assert orchestrator.qode_binary() == (
            project_dir.resolve() / "node_modules" / "@nodegui" / "qode" / "binaries" / "qode.exe"
        )


# 🪟📦🔚
