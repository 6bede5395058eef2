#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Per-project configuration stored in deploy/config.json."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from attrs import define
from provide.foundation import logger
from provide.foundation.file.formats import read_json, write_json

from qodepack.exceptions import ConfigurationError


@define
class AppConfig:
    """Application settings written by ``init`` and consumed by ``pack``."""

    app_name: str

    def to_dict(self) -> dict[str, Any]:
        return {"appName": self.app_name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AppConfig:
        app_name = data.get("appName")
        if not app_name or not isinstance(app_name, str):
            raise ConfigurationError("Project configuration is missing 'appName'")
        return cls(app_name=app_name)


def load_app_config(config_path: Path) -> AppConfig:
    """Read the project configuration.

    Raises:
        ConfigurationError: If the file is missing or does not hold a JSON object
    """
    data = read_json(config_path)
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"No valid project configuration at {config_path}. Run 'qodepack init <appName>' first.",
            path=str(config_path),
        )
    return AppConfig.from_dict(data)


def save_app_config(config_path: Path, config: AppConfig) -> None:
    """Write the project configuration."""
    write_json(config_path, config.to_dict())
    logger.debug("Wrote project configuration", path=str(config_path), app_name=config.app_name)


# 🪟📦🔚
