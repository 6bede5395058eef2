#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""qodepack core package exports."""

from __future__ import annotations

from provide.foundation.utils import get_version

from qodepack.exceptions import (
    ConfigurationError,
    DeploymentError,
    PackagingError,
    PEFormatError,
    QodePackError,
    SubsystemPatchError,
)
from qodepack.package import init_project, pack_project
from qodepack.packaging.dependencies import DependencyCopier, copy_package_dependencies
from qodepack.win32 import DeployQtOptions, run_windeployqt, switch_to_gui_subsystem

__version__ = get_version("qodepack", caller_file=__file__)

__all__ = [
    "ConfigurationError",
    "DependencyCopier",
    "DeployQtOptions",
    "DeploymentError",
    "PEFormatError",
    "PackagingError",
    "QodePackError",
    "SubsystemPatchError",
    "__version__",
    "copy_package_dependencies",
    "init_project",
    "pack_project",
    "run_windeployqt",
    "switch_to_gui_subsystem",
]

# 🪟📦🔚
