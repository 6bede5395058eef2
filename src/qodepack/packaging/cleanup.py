#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Size-reduction rules for the copied core framework package.

Each rule is an independent, best-effort step. A failing step is logged and
the remaining steps still run.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.file import safe_delete
from provide.foundation.file.directory import safe_rmtree

from qodepack.config.defaults import (
    BUILD_ARTIFACT_PATTERNS,
    BUNDLED_SOURCE_DIR,
    RELEASE_BUILD_DIR,
    TOOLCHAIN_CACHE_DIR,
)


@dataclass(frozen=True)
class CleanupStep:
    """A named removal applied to a copied package directory."""

    name: str
    action: Callable[[Path], None]


def _remove_entry(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        safe_rmtree(path)
    else:
        safe_delete(path)


def remove_toolchain_cache(package_dir: Path) -> None:
    """Remove the downloaded Qt toolchain (``miniqt``).

    If the directory cannot be removed outright, its immediate children are
    deleted one by one and individual failures are tolerated.
    """
    miniqt = package_dir / TOOLCHAIN_CACHE_DIR
    if not miniqt.exists():
        return

    pout(f"Removing {TOOLCHAIN_CACHE_DIR} folder to reduce size", color="yellow")
    try:
        safe_rmtree(miniqt)
        pout(f"Successfully removed {TOOLCHAIN_CACHE_DIR} folder", color="green")
        return
    except OSError as e:
        logger.warning(f"Failed to remove {TOOLCHAIN_CACHE_DIR} folder", path=str(miniqt), error=str(e))

    pout(f"Keeping {TOOLCHAIN_CACHE_DIR} folder but removing contents to reduce size", color="yellow")
    for item in list(miniqt.iterdir()):
        try:
            _remove_entry(item)
        except OSError as e:
            logger.debug("Could not remove toolchain cache entry", path=str(item), error=str(e))


def remove_bundled_source(package_dir: Path) -> None:
    """Remove the native addon sources (``src``)."""
    source_dir = package_dir / BUNDLED_SOURCE_DIR
    if not source_dir.exists():
        return

    pout(f"Removing {BUNDLED_SOURCE_DIR} folder to reduce size", color="yellow")
    safe_rmtree(source_dir)
    pout(f"Successfully removed {BUNDLED_SOURCE_DIR} folder", color="green")


def remove_build_artifacts(package_dir: Path) -> None:
    """Remove linker artifacts (``*.lib``, ``*.exp``) from ``build/Release``."""
    release_dir = package_dir.joinpath(*RELEASE_BUILD_DIR)
    if not release_dir.is_dir():
        return

    for pattern in BUILD_ARTIFACT_PATTERNS:
        for artifact in sorted(release_dir.glob(pattern)):
            try:
                safe_delete(artifact)
                pout(f"Successfully removed {artifact.name} file", color="green")
            except OSError as e:
                logger.warning(f"Failed to remove {artifact.name} file", path=str(artifact), error=str(e))


CORE_FRAMEWORK_CLEANUP: tuple[CleanupStep, ...] = (
    CleanupStep("toolchain-cache", remove_toolchain_cache),
    CleanupStep("bundled-source", remove_bundled_source),
    CleanupStep("build-artifacts", remove_build_artifacts),
)


def run_cleanup_steps(package_dir: Path, steps: Sequence[CleanupStep] = CORE_FRAMEWORK_CLEANUP) -> list[str]:
    """Run cleanup steps in order and return the names of those that failed."""
    failed: list[str] = []
    for step in steps:
        try:
            step.action(package_dir)
        except OSError as e:
            logger.warning(
                "Cleanup step failed",
                step=step.name,
                package_dir=str(package_dir),
                error=str(e),
            )
            failed.append(step.name)
    return failed


# 🪟📦🔚
