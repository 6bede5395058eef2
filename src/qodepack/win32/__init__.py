#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Windows-specific packaging steps: Qt deployment and executable patching."""

from __future__ import annotations

from qodepack.win32.deployqt import DeployQtOptions, build_windeployqt_command, run_windeployqt
from qodepack.win32.pe_utils import SubsystemPatchResult, switch_to_gui_subsystem
from qodepack.win32.qt_runtime import deploy_qt_runtime, find_qt_home

__all__ = [
    "DeployQtOptions",
    "SubsystemPatchResult",
    "build_windeployqt_command",
    "deploy_qt_runtime",
    "find_qt_home",
    "run_windeployqt",
    "switch_to_gui_subsystem",
]

# 🪟📦🔚
