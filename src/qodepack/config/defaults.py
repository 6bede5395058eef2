#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Centralized default values for qodepack configuration."""

from __future__ import annotations

# =================================
# Deploy layout (relative to the project directory)
# =================================
DEPLOY_DIR = "deploy"
CONFIG_FILE = "config.json"
PLATFORM_DIR = "win32"
BUILD_DIR = "build"
DIST_DIR = "dist"
RUNTIME_EXECUTABLE = "qode.exe"
DEFAULT_TEMPLATE_VERSION = "1.0.0"

# =================================
# Dependency cache layout
# =================================
PACKAGE_MANIFEST = "package.json"
MODULES_DIR = "node_modules"
BIN_DIR = ".bin"
LOCK_FILE = "package-lock.json"

# =================================
# NodeGUI packages
# =================================
CORE_FRAMEWORK = "@nodegui/nodegui"
RESERVED_SCOPE = "@nodegui/"
QODE_PACKAGE = "@nodegui/qode"
QODE_BINARY = ("binaries", "qode.exe")

# Size reduction applied to the copied core framework
TOOLCHAIN_CACHE_DIR = "miniqt"
BUNDLED_SOURCE_DIR = "src"
RELEASE_BUILD_DIR = ("build", "Release")
BUILD_ARTIFACT_PATTERNS = ("*.lib", "*.exp")

# =================================
# Qt runtime deployment
# =================================
QT_CONF_CONTENT = "[Paths]\nPlugins = ./plugins\n"
QT_PLUGINS_DIR = "plugins"
VCREDIST_RELATIVE = ("..", "..", "..", "vcredist")
QT_DLL_EXCLUDED_SUFFIX = "d.dll"
QT_DLL_EXCLUDED_FRAGMENTS = ("designer", "help", "uitool")
QT_PLUGIN_FOLDERS = (
    "platforms",
    "styles",
    "imageformats",
    "iconengines",
    "sqldrivers",
    "bearer",
    "printsupport",
)
LAUNCHER_SCRIPT = "start.bat"
LAUNCHER_SCRIPT_CONTENT = "@echo off\necho Starting application...\nstart qode.exe\n"

# =================================
# External deployment tool
# =================================
WINDEPLOYQT = "windeployqt"

# =================================
# File permissions defaults
# =================================
DEFAULT_EXECUTABLE_PERMS = 0o755

# 🪟📦🔚
