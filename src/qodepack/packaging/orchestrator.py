#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Packaging orchestration for ``init`` and ``pack``."""

from __future__ import annotations

from pathlib import Path
import shutil

from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.file import atomic_write_text, safe_copy
from provide.foundation.file.directory import ensure_dir, safe_rmtree
from provide.foundation.file.formats import write_json

from qodepack.config.defaults import (
    BUILD_DIR,
    CONFIG_FILE,
    DEFAULT_EXECUTABLE_PERMS,
    DEFAULT_TEMPLATE_VERSION,
    DEPLOY_DIR,
    DIST_DIR,
    MODULES_DIR,
    PACKAGE_MANIFEST,
    PLATFORM_DIR,
    QODE_BINARY,
    QODE_PACKAGE,
    RUNTIME_EXECUTABLE,
)
from qodepack.config.project import AppConfig, load_app_config, save_app_config
from qodepack.config.runtime import QodePackRuntimeConfig
from qodepack.exceptions import PackagingError
from qodepack.packaging.dependencies import DependencyCopyResult, copy_package_dependencies
from qodepack.win32.pe_utils import SubsystemPatchResult, switch_to_gui_subsystem
from qodepack.win32.qt_runtime import deploy_qt_runtime, find_qt_home

TEMPLATE_DIR = Path(__file__).parent.parent / "template" / PLATFORM_DIR


class PackagingOrchestrator:
    """Builds the Windows distribution folder for a NodeGUI project."""

    def __init__(
        self,
        project_dir: Path | None = None,
        runtime_config: QodePackRuntimeConfig | None = None,
        template_dir: Path = TEMPLATE_DIR,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            project_dir: Project root holding package.json and node_modules (default: cwd)
            runtime_config: Runtime settings (default: loaded from the environment)
            template_dir: Bundled application template copied by ``init``
        """
        self.project_dir = (project_dir or Path.cwd()).resolve()
        self.runtime_config = runtime_config or QodePackRuntimeConfig.from_env()
        self.template_dir = template_dir

        self.deploy_dir = self.project_dir / DEPLOY_DIR
        self.config_file = self.deploy_dir / CONFIG_FILE
        self.user_template_dir = self.deploy_dir / PLATFORM_DIR
        self.build_root = self.user_template_dir / BUILD_DIR

    def app_template_dir(self, app_name: str) -> Path:
        return self.user_template_dir / app_name

    def build_dir(self, app_name: str) -> Path:
        return self.build_root / app_name

    def qode_binary(self) -> Path:
        """The qode runtime shipped as the application executable."""
        if self.runtime_config.qode_path:
            return Path(self.runtime_config.qode_path)
        return self.project_dir.joinpath(MODULES_DIR, QODE_PACKAGE, *QODE_BINARY)

    def init(self, app_name: str) -> Path:
        """Create the deploy layout and application template for ``app_name``.

        Returns:
            Path to the user-editable application template
        """
        pout(f"Initializing application {app_name}...", color="blue")

        ensure_dir(self.deploy_dir)
        ensure_dir(self.user_template_dir)
        app_dir = ensure_dir(self.app_template_dir(app_name))

        save_app_config(self.config_file, AppConfig(app_name=app_name))

        if self.template_dir.is_dir():
            pout(f"Copying template from {self.template_dir}", color="yellow")
            shutil.copytree(self.template_dir, app_dir, dirs_exist_ok=True)
        else:
            pout("Creating minimal template structure", color="yellow")
            write_json(app_dir / PACKAGE_MANIFEST, {"name": app_name, "version": DEFAULT_TEMPLATE_VERSION})
            atomic_write_text(app_dir / "README.md", f"# {app_name}\n\nBuilt with NodeGUI")

        logger.info("Application template created", app_name=app_name, path=str(app_dir))
        pout(f"Template created at {app_dir}", color="green")
        return app_dir

    def pack(self, dist_path: Path) -> Path:
        """Package the application bundle at ``dist_path``.

        Returns:
            Path to the packaged application directory

        Raises:
            ConfigurationError: If ``init`` has not been run
            PackagingError: If a packaging step fails
            SubsystemPatchError: If the runtime executable cannot be patched
        """
        config = load_app_config(self.config_file)
        app_name = config.app_name
        template_app_dir = self.app_template_dir(app_name)
        build_app_dir = self.build_dir(app_name)

        pout(f"cleaning build directory at {self.build_root}")
        safe_rmtree(self.build_root)

        pout(f"creating build directory at {self.build_root}")
        if not template_app_dir.is_dir():
            raise PackagingError(
                f"Application template not found at {template_app_dir}. Run 'qodepack init {app_name}' first.",
                path=str(template_app_dir),
            )
        shutil.copytree(template_app_dir, build_app_dir)

        pout("copying qode")
        self.copy_qode(build_app_dir)

        pout("copying dist")
        self.copy_app_dist(Path(dist_path), build_app_dir)

        pout("copying package dependencies")
        self.copy_dependencies(build_app_dir)

        pout("running windeployqt")
        self.deploy_qt(build_app_dir)

        pout("Hiding Qode's console")
        self.hide_console(build_app_dir / RUNTIME_EXECUTABLE)

        logger.info("Build successful", app_name=app_name, build_dir=str(build_app_dir))
        pout(f"Build successful. Find the app at {self.build_root}", color="green")
        return build_app_dir

    def copy_qode(self, build_app_dir: Path) -> Path:
        qode = self.qode_binary()
        if not qode.is_file():
            raise PackagingError(f"qode binary not found at {qode}", path=str(qode))

        pout(f"Using qode path: {qode}")
        qode.chmod(DEFAULT_EXECUTABLE_PERMS)
        dest = build_app_dir / RUNTIME_EXECUTABLE
        safe_copy(qode, dest, overwrite=True)
        return dest

    def copy_app_dist(self, dist_path: Path, build_app_dir: Path) -> Path:
        if not dist_path.is_dir():
            raise PackagingError(f"Application dist directory not found at {dist_path}", path=str(dist_path))
        dest = build_app_dir / DIST_DIR
        shutil.copytree(dist_path, dest, dirs_exist_ok=True)
        return dest

    def copy_dependencies(self, build_app_dir: Path) -> DependencyCopyResult:
        return copy_package_dependencies(self.project_dir, build_app_dir)

    def deploy_qt(self, build_app_dir: Path) -> None:
        qt_home = find_qt_home(self.project_dir, self.runtime_config.qt_home)
        if qt_home is None:
            raise PackagingError(
                "Qt installation not found. Set QT_INSTALL_DIR or install @nodegui/nodegui.",
            )
        deploy_qt_runtime(build_app_dir, qt_home)

    def hide_console(self, executable: Path) -> SubsystemPatchResult:
        return switch_to_gui_subsystem(executable)


# 🪟📦🔚
