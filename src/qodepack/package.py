#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Public API for the qodepack packaging tool."""

from __future__ import annotations

from pathlib import Path

from qodepack.config.runtime import QodePackRuntimeConfig
from qodepack.packaging.orchestrator import PackagingOrchestrator


def init_project(
    app_name: str,
    project_dir: Path | None = None,
    runtime_config: QodePackRuntimeConfig | None = None,
) -> Path:
    """Create the Windows deploy template for a NodeGUI project.

    Writes ``deploy/config.json`` and the editable application template under
    ``deploy/win32/<app_name>``.

    Args:
        app_name: Name of the packaged application
        project_dir: Project root (default: current directory)
        runtime_config: Runtime settings (default: loaded from the environment)

    Returns:
        Path to the created application template

    Example:
        ```python
        from qodepack import init_project

        init_project("MyApp")
        ```
    """
    return PackagingOrchestrator(project_dir, runtime_config).init(app_name)


def pack_project(
    dist_path: Path,
    project_dir: Path | None = None,
    runtime_config: QodePackRuntimeConfig | None = None,
) -> Path:
    """Package a built NodeGUI application for Windows.

    Stages the application template, the qode runtime, the application bundle,
    its runtime dependencies and the Qt libraries into
    ``deploy/win32/build/<appName>``, then switches ``qode.exe`` to the GUI
    subsystem so no console window opens.

    Args:
        dist_path: Directory holding the bundled application (e.g. webpack output)
        project_dir: Project root (default: current directory)
        runtime_config: Runtime settings (default: loaded from the environment)

    Returns:
        Path to the packaged application directory

    Raises:
        ConfigurationError: If ``init`` has not been run
        PackagingError: If a packaging step fails
        SubsystemPatchError: If ``qode.exe`` cannot be patched

    Example:
        ```python
        from pathlib import Path
        from qodepack import pack_project

        build_dir = pack_project(Path("dist"))
        print(f"Packaged into {build_dir}")
        ```
    """
    return PackagingOrchestrator(project_dir, runtime_config).pack(dist_path)


# 🪟📦🔚
