#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""This package contains the logic that assembles a NodeGUI application
into a redistributable Windows folder."""

from qodepack.packaging.dependencies import (
    DependencyCopier,
    DependencyCopyResult,
    copy_package_dependencies,
)
from qodepack.packaging.orchestrator import PackagingOrchestrator

__all__ = [
    "DependencyCopier",
    "DependencyCopyResult",
    "PackagingOrchestrator",
    "copy_package_dependencies",
]

# 🪟📦🔚
