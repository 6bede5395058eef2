#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Manual Qt runtime deployment.

Copies the Qt shared libraries, the MSVC runtime and the Qt plugin folders
next to the packaged executable, then writes ``qt.conf`` and a ``start.bat``
launcher.
"""

from __future__ import annotations

from pathlib import Path
import shutil

from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.file import atomic_write_text, safe_copy
from provide.foundation.file.directory import ensure_dir

from qodepack.config.defaults import (
    CORE_FRAMEWORK,
    LAUNCHER_SCRIPT,
    LAUNCHER_SCRIPT_CONTENT,
    MODULES_DIR,
    QT_CONF_CONTENT,
    QT_DLL_EXCLUDED_FRAGMENTS,
    QT_DLL_EXCLUDED_SUFFIX,
    QT_PLUGIN_FOLDERS,
    QT_PLUGINS_DIR,
    TOOLCHAIN_CACHE_DIR,
    VCREDIST_RELATIVE,
)
from qodepack.exceptions import PackagingError


def is_release_qt_dll(filename: str) -> bool:
    """Whether a file from the Qt bin directory belongs in the package.

    Keeps release DLLs only: drops debug builds (``*d.dll``) and the
    designer, help and uitool libraries.
    """
    lower = filename.lower()
    if not lower.endswith(".dll") or lower.endswith(QT_DLL_EXCLUDED_SUFFIX):
        return False
    return not any(fragment in lower for fragment in QT_DLL_EXCLUDED_FRAGMENTS)


def find_qt_home(project_dir: Path, configured: str | None = None) -> Path | None:
    """Locate the Qt installation.

    An explicitly configured directory wins. Otherwise look for the Qt build
    downloaded by the core framework under ``miniqt/<version>/<toolchain>``.
    """
    if configured:
        return Path(configured)

    miniqt = project_dir / MODULES_DIR / CORE_FRAMEWORK / TOOLCHAIN_CACHE_DIR
    if not miniqt.is_dir():
        return None

    for candidate in sorted(miniqt.glob("*/*")):
        if (candidate / "bin").is_dir():
            logger.debug("Detected Qt installation", qt_home=str(candidate))
            return candidate
    return None


def _copy_vcredist(qt_bin_dir: Path, build_dir: Path) -> int:
    vcredist_dir = qt_bin_dir.joinpath(*VCREDIST_RELATIVE).resolve()
    if not vcredist_dir.is_dir():
        pout("MSVC redist dir not found, skipping...")
        return 0

    pout("Copying MSVC runtime DLLs...")
    copied = 0
    for dll in sorted(vcredist_dir.iterdir()):
        if dll.is_file() and dll.name.lower().endswith(".dll"):
            safe_copy(dll, build_dir / dll.name, overwrite=True)
            copied += 1
    return copied


def _copy_qt_dlls(qt_bin_dir: Path, build_dir: Path) -> int:
    pout("Copying all DLLs from Qt bin directory...")
    copied = 0
    try:
        dlls = sorted(p for p in qt_bin_dir.iterdir() if p.is_file() and is_release_qt_dll(p.name))
        pout(f"Found {len(dlls)} DLL files to copy (excluding debug and designer DLLs)")
        for dll in dlls:
            logger.debug(f"Copying {dll.name}...")
            safe_copy(dll, build_dir / dll.name, overwrite=True)
            copied += 1
    except OSError as e:
        logger.warning("Error copying DLLs", error=str(e), qt_bin_dir=str(qt_bin_dir))
    return copied


def _copy_plugin_folders(qt_plugins_dir: Path, target_plugins_dir: Path) -> list[str]:
    copied: list[str] = []
    for folder in QT_PLUGIN_FOLDERS:
        source = qt_plugins_dir / folder
        if not source.is_dir():
            logger.warning(f"Could not find plugin directory {source}")
            continue
        pout(f"Copying plugin folder {folder}...")
        shutil.copytree(source, target_plugins_dir / folder, dirs_exist_ok=True)
        copied.append(folder)
    return copied


def deploy_qt_runtime(build_dir: Path, qt_home: Path) -> None:
    """
    Copy the Qt runtime into a build directory.

    Args:
        build_dir: Directory holding the packaged executable
        qt_home: Qt installation (containing ``bin`` and ``plugins``)

    Raises:
        PackagingError: If the deployment fails outside the tolerated steps
    """
    pout("Using manual Qt deployment approach...", color="blue", bold=True)
    qt_bin_dir = qt_home / "bin"
    qt_plugins_dir = qt_home / QT_PLUGINS_DIR

    try:
        target_plugins_dir = ensure_dir(build_dir / QT_PLUGINS_DIR)
        atomic_write_text(build_dir / "qt.conf", QT_CONF_CONTENT)

        vcredist_count = _copy_vcredist(qt_bin_dir, build_dir)
        dll_count = _copy_qt_dlls(qt_bin_dir, build_dir)
        plugins = _copy_plugin_folders(qt_plugins_dir, target_plugins_dir)

        atomic_write_text(build_dir / LAUNCHER_SCRIPT, LAUNCHER_SCRIPT_CONTENT)
    except OSError as e:
        pout(f"Error during Qt deployment: {e}", color="red")
        raise PackagingError(f"Failed during Qt deployment: {e}", cause=e) from e

    logger.info(
        "Qt runtime deployed",
        build_dir=str(build_dir),
        qt_home=str(qt_home),
        vcredist_dlls=vcredist_count,
        qt_dlls=dll_count,
        plugins=plugins,
    )
    pout("Manual Qt deployment completed successfully", color="green")


# 🪟📦🔚
