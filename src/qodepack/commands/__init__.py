#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Command modules for the qodepack CLI."""

from __future__ import annotations

from qodepack.commands.init import init_command
from qodepack.commands.package import pack_command
from qodepack.commands.patch import patch_command

__all__ = [
    "init_command",
    "pack_command",
    "patch_command",
]

# 🪟📦🔚
