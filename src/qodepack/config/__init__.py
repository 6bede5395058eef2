#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""qodepack configuration: runtime settings from the environment and
per-project settings from deploy/config.json."""

from __future__ import annotations

from qodepack.config.project import AppConfig, load_app_config, save_app_config
from qodepack.config.runtime import QodePackRuntimeConfig

__all__ = [
    "AppConfig",
    "QodePackRuntimeConfig",
    "load_app_config",
    "save_app_config",
]

# 🪟📦🔚
