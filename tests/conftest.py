#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Shared pytest fixtures and helpers for qodepack tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
import json
from pathlib import Path
import struct
from typing import Any

import provide.testkit  # noqa: F401 - Installs setproctitle blocker early
from provide.testkit.logger import reset_foundation_setup_for_testing
import pytest


def create_minimal_pe(
    magic: int = 0x20B,
    subsystem: int = 3,
    pe_offset: int = 0x80,
    size: int = 1024,
) -> bytes:
    """Create a minimal PE image for testing.

    Args:
        magic: Optional header magic (0x10B PE32, 0x20B PE32+)
        subsystem: Subsystem value written into the optional header
        pe_offset: Offset of the PE signature (e_lfanew)
        size: Total image size

    Returns:
        PE image as bytes
    """
    data = bytearray(size)

    # MZ header
    data[0:2] = b"MZ"
    data[0x3C:0x40] = struct.pack("<I", pe_offset)

    # PE signature
    data[pe_offset : pe_offset + 4] = b"PE\x00\x00"

    # COFF header
    coff_offset = pe_offset + 4
    data[coff_offset : coff_offset + 2] = struct.pack("<H", 0x8664)
    data[coff_offset + 16 : coff_offset + 18] = struct.pack("<H", 240 if magic == 0x20B else 224)

    # Optional header
    opt_hdr_offset = coff_offset + 20
    data[opt_hdr_offset : opt_hdr_offset + 2] = struct.pack("<H", magic)
    data[opt_hdr_offset + 68 : opt_hdr_offset + 70] = struct.pack("<H", subsystem)

    # Recognizable bytes around the subsystem field
    data[opt_hdr_offset + 66 : opt_hdr_offset + 68] = b"\xaa\xbb"
    data[opt_hdr_offset + 70 : opt_hdr_offset + 72] = b"\xcc\xdd"

    return bytes(data)


def read_subsystem(data: bytes) -> int:
    """Read the subsystem field of a PE image."""
    pe_offset = struct.unpack("<I", data[0x3C:0x40])[0]
    subsystem_offset = pe_offset + 4 + 20 + 68
    value: int = struct.unpack("<H", data[subsystem_offset : subsystem_offset + 2])[0]
    return value


@pytest.fixture(autouse=True)
def reset_foundation_logging() -> Iterator[None]:
    """Reset foundation logging state before each test to avoid conflicts."""
    reset_foundation_setup_for_testing()
    yield
    reset_foundation_setup_for_testing()


@pytest.fixture
def write_pe(tmp_path: Path) -> Callable[..., Path]:
    """Write a minimal PE image to disk and return its path."""

    def _write(name: str = "qode.exe", **kwargs: Any) -> Path:
        path = tmp_path / name
        path.write_bytes(create_minimal_pe(**kwargs))
        return path

    return _write


def write_manifest(package_dir: Path, name: str, dependencies: dict[str, str] | None = None) -> None:
    """Write a package.json into ``package_dir``."""
    package_dir.mkdir(parents=True, exist_ok=True)
    manifest: dict[str, Any] = {"name": name, "version": "1.0.0"}
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    (package_dir / "package.json").write_text(json.dumps(manifest))


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create an empty NodeGUI project with a node_modules cache."""
    project = tmp_path / "project"
    (project / "node_modules").mkdir(parents=True)
    return project


@pytest.fixture
def add_module(project_dir: Path) -> Callable[..., Path]:
    """Install a fake package into the project's node_modules cache."""

    def _add(name: str, dependencies: dict[str, str] | None = None, files: dict[str, str] | None = None) -> Path:
        module_dir = project_dir / "node_modules" / name
        write_manifest(module_dir, name, dependencies)
        (module_dir / "index.js").write_text(f"module.exports = '{name}';\n")
        for rel_path, content in (files or {}).items():
            file_path = module_dir / rel_path
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
        return module_dir

    return _add


@pytest.fixture
def nodegui_module(add_module: Callable[..., Path]) -> Path:
    """A core framework package with the directories qodepack trims."""
    return add_module(
        "@nodegui/nodegui",
        dependencies={},
        files={
            "miniqt/5.15.2/msvc2019_64/bin/Qt5Core.dll": "qt",
            "src/cpp/main.cpp": "int main() {}",
            "build/Release/nodegui_core.node": "addon",
            "build/Release/nodegui_core.lib": "lib",
            "build/Release/nodegui_core.exp": "exp",
            "dist/index.js": "exports.QMainWindow = {};",
            "node_modules/nested/index.js": "nested",
        },
    )


# 🪟📦🔚
