#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Custom exceptions for qodepack."""

from __future__ import annotations

from provide.foundation.errors import FoundationError


class QodePackError(FoundationError):
    """Base exception for all qodepack errors."""

    pass


class SubsystemPatchError(QodePackError):
    """Raised when the executable cannot be opened, read or written."""

    pass


class PEFormatError(SubsystemPatchError):
    """Raised when a file is not a PE image qodepack knows how to patch."""

    pass


class DeploymentError(QodePackError):
    """Raised when the external Qt deployment tool fails."""

    pass


class PackagingError(QodePackError):
    """Raised for errors during packaging orchestration."""

    pass


class ConfigurationError(QodePackError):
    """Raised when the project configuration is missing or invalid."""

    pass


# 🪟📦🔚
