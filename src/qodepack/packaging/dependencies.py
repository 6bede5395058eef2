#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Runtime dependency copier.

Walks the project's package manifest and copies the transitive closure of its
runtime dependencies out of the local ``node_modules`` cache into a build
tree. Every package is copied once, flat, under its own name; nested
``node_modules`` directories are never copied because transitive dependencies
are re-resolved from the shared cache.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
import shutil
from typing import Any

from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.file import safe_copy
from provide.foundation.file.directory import ensure_dir
from provide.foundation.file.formats import read_json

from qodepack.config.defaults import (
    BIN_DIR,
    CORE_FRAMEWORK,
    LOCK_FILE,
    MODULES_DIR,
    PACKAGE_MANIFEST,
    RESERVED_SCOPE,
)
from qodepack.exceptions import PackagingError
from qodepack.packaging.cleanup import CORE_FRAMEWORK_CLEANUP, CleanupStep, run_cleanup_steps


@dataclass
class TraversalContext:
    """State of one dependency copy run.

    ``visited`` only ever grows; membership is what stops cycles. Besides
    package names it holds the ``.bin`` and lock file sentinels once those
    shared resources have been handled.
    """

    cache_dir: Path
    target_dir: Path
    visited: set[str] = field(default_factory=set)
    requested_ranges: dict[str, str] = field(default_factory=dict)
    copied: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    bin_copied: bool = False
    lock_file_copied: bool = False

    def visit(self, name: str) -> bool:
        """Mark ``name`` visited. Returns False if it already was."""
        if name in self.visited:
            return False
        self.visited.add(name)
        return True


@dataclass
class DependencyCopyResult:
    """Summary of a dependency copy run."""

    target_dir: Path
    copied: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    bin_copied: bool = False
    lock_file_copied: bool = False


def _exclude_nested_modules(package_root: Path) -> Callable[[str, list[str]], set[str]]:
    """copytree ignore hook that skips the package's own top-level node_modules."""

    def ignore(directory: str, names: list[str]) -> set[str]:
        if Path(directory) == package_root and MODULES_DIR in names:
            return {MODULES_DIR}
        return set()

    return ignore


def read_manifest_dependencies(manifest_path: Path) -> dict[str, str]:
    """Return the ``dependencies`` mapping of a package.json.

    Raises:
        ValueError: If the manifest is unreadable or malformed
    """
    data = read_json(manifest_path)
    if not isinstance(data, dict):
        raise ValueError(f"Could not read manifest {manifest_path}")

    dependencies = data.get("dependencies") or {}
    if not isinstance(dependencies, dict):
        raise ValueError(f"'dependencies' in {manifest_path} is not an object")
    return {str(name): str(version) for name, version in dependencies.items()}


class DependencyCopier:
    """Copies the runtime dependency closure out of a local node_modules cache."""

    def __init__(
        self,
        cache_dir: Path,
        core_framework: str = CORE_FRAMEWORK,
        reserved_scope: str = RESERVED_SCOPE,
        cleanup_steps: Sequence[CleanupStep] = CORE_FRAMEWORK_CLEANUP,
    ) -> None:
        """Initialize the copier.

        Args:
            cache_dir: The project's node_modules directory
            core_framework: Package that is always processed first and trimmed
            reserved_scope: Scope whose other packages ship with the core framework
            cleanup_steps: Size-reduction rules applied to the core framework copy
        """
        self.cache_dir = cache_dir
        self.core_framework = core_framework
        self.reserved_scope = reserved_scope
        self.cleanup_steps = cleanup_steps

    def copy(self, dependencies: Mapping[str, Any], target_dir: Path) -> DependencyCopyResult:
        """Copy every dependency reachable from ``dependencies`` into ``target_dir``.

        Args:
            dependencies: Direct dependencies (name -> version range)
            target_dir: Destination node_modules directory

        Returns:
            DependencyCopyResult summarizing the run
        """
        ensure_dir(target_dir)
        ctx = TraversalContext(cache_dir=self.cache_dir, target_dir=target_dir)

        if self.core_framework in dependencies:
            pout(f"Processing core NodeGUI module: {self.core_framework}", color="magenta")
            self._visit(ctx, self.core_framework, str(dependencies[self.core_framework]), direct=True)

        for name, version_range in dependencies.items():
            if name.startswith(self.reserved_scope):
                if name != self.core_framework:
                    pout(f"Skipping {name} (nodegui module)", color="yellow")
                continue

            pout(f"Processing dependency: {name}", color="blue")
            self._visit(ctx, name, str(version_range), direct=True)

        logger.info(
            "Finished copying package dependencies",
            copied=len(ctx.copied),
            missing=ctx.missing,
            target_dir=str(target_dir),
        )
        return DependencyCopyResult(
            target_dir=target_dir,
            copied=list(ctx.copied),
            missing=list(ctx.missing),
            bin_copied=ctx.bin_copied,
            lock_file_copied=ctx.lock_file_copied,
        )

    def _visit(self, ctx: TraversalContext, name: str, version_range: str, direct: bool) -> None:
        if not ctx.visit(name):
            first_range = ctx.requested_ranges.get(name)
            if first_range is not None and first_range != version_range:
                logger.warning(
                    "Dependency requested under a different version range; reusing the cached copy",
                    dependency=name,
                    first_range=first_range,
                    requested_range=version_range,
                )
            return
        ctx.requested_ranges[name] = version_range

        source = self.cache_dir / name
        target = ctx.target_dir / name

        pout(f"Copying module: {name}", color="cyan")
        if not source.is_dir():
            logger.warning(f"Could not find module {name}", path=str(source))
            ctx.missing.append(name)
            return

        self._copy_package(source, target)
        ctx.copied.append(name)

        if name == self.core_framework:
            failed = run_cleanup_steps(target, self.cleanup_steps)
            if failed:
                logger.warning("Core framework size reduction incomplete", failed_steps=failed)

        if direct and BIN_DIR not in ctx.visited:
            self._copy_shared_bin(ctx)

        if LOCK_FILE not in ctx.visited:
            self._copy_lock_file(ctx)

        manifest_path = source / PACKAGE_MANIFEST
        if not manifest_path.exists():
            return

        try:
            dependencies = read_manifest_dependencies(manifest_path)
        except (OSError, ValueError) as e:
            logger.warning(f"Error processing dependencies for {name}", error=str(e))
            return

        for dep_name, dep_range in dependencies.items():
            if dep_name.startswith(self.reserved_scope) and dep_name != self.core_framework:
                continue
            self._visit(ctx, dep_name, dep_range, direct=False)

    def _copy_package(self, source: Path, target: Path) -> None:
        try:
            shutil.copytree(
                source,
                target,
                ignore=_exclude_nested_modules(source),
                symlinks=True,
                dirs_exist_ok=True,
            )
        except (OSError, shutil.Error) as e:
            raise PackagingError(f"Failed to copy module {source.name}: {e}", cause=e, source=str(source)) from e

    def _copy_shared_bin(self, ctx: TraversalContext) -> None:
        bin_source = ctx.cache_dir / BIN_DIR
        ctx.visited.add(BIN_DIR)
        if not bin_source.is_dir():
            return

        pout(f"Copying {BIN_DIR} directory with executables", color="magenta")
        try:
            shutil.copytree(bin_source, ctx.target_dir / BIN_DIR, symlinks=True, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            logger.warning(f"Failed to copy {BIN_DIR} directory", error=str(e))
            return
        ctx.bin_copied = True

    def _copy_lock_file(self, ctx: TraversalContext) -> None:
        lock_source = ctx.cache_dir / LOCK_FILE
        ctx.visited.add(LOCK_FILE)
        if not lock_source.is_file():
            return

        pout(f"Copying {LOCK_FILE}", color="magenta")
        try:
            safe_copy(lock_source, ctx.target_dir / LOCK_FILE, overwrite=True)
        except OSError as e:
            logger.warning(f"Failed to copy {LOCK_FILE}", error=str(e))
            return
        ctx.lock_file_copied = True


def copy_package_dependencies(project_dir: Path, build_dir: Path) -> DependencyCopyResult:
    """Copy the project's runtime dependencies into ``<build_dir>/node_modules``.

    Only ``dependencies`` are followed; ``devDependencies`` are never packaged.
    """
    pout("Copying package dependencies...")
    target_dir = build_dir / MODULES_DIR

    manifest_path = project_dir / PACKAGE_MANIFEST
    if not manifest_path.exists():
        logger.warning(f"Could not find {PACKAGE_MANIFEST}, skipping dependency copying", path=str(manifest_path))
        return DependencyCopyResult(target_dir=target_dir)

    try:
        dependencies = read_manifest_dependencies(manifest_path)
    except ValueError as e:
        raise PackagingError(str(e), path=str(manifest_path)) from e

    copier = DependencyCopier(project_dir / MODULES_DIR)
    result = copier.copy(dependencies, target_dir)
    pout("Finished copying package dependencies", color="green")
    return result


# 🪟📦🔚
