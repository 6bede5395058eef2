#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""windeployqt runner.

Qt's deployment tool is treated as a black box: qodepack builds its argument
list, runs it once, relays its output to the log as it arrives and reports
success or failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from provide.foundation import logger
from provide.foundation.console import pout
from provide.foundation.process import ProcessError, stream

from qodepack.config.defaults import WINDEPLOYQT
from qodepack.exceptions import DeploymentError


@dataclass
class DeployQtOptions:
    """Options forwarded to windeployqt."""

    qt_dir: Path | None = None
    qml_dir: Path | None = None
    debug: bool = False
    release: bool = False
    translation_dir: Path | None = None
    extra_args: list[str] = field(default_factory=list)


def windeployqt_executable(options: DeployQtOptions) -> str:
    """Use ``<qt_dir>/bin/windeployqt`` when a Qt directory is given, else rely on PATH."""
    if options.qt_dir:
        return str(Path(options.qt_dir) / "bin" / WINDEPLOYQT)
    return WINDEPLOYQT


def build_windeployqt_command(file_path: Path | str, options: DeployQtOptions) -> list[str]:
    """Build the full windeployqt command line.

    Argument order: extra args, translation dir, build flavour, QML dir, executable.
    ``debug`` takes precedence over ``release``.
    """
    args: list[str] = list(options.extra_args)
    if options.translation_dir:
        args += ["--translationdir", str(options.translation_dir)]
    if options.debug:
        args.append("--debug")
    elif options.release:
        args.append("--release")
    if options.qml_dir:
        args += ["--qmldir", str(options.qml_dir)]
    args.append(str(file_path))
    return [windeployqt_executable(options), *args]


def run_windeployqt(file_path: Path | str, options: DeployQtOptions) -> str:
    """
    Run windeployqt on an executable.

    Output (stdout and stderr merged) is relayed to the log line by line while
    the tool runs. Blocks until the tool exits; there is no timeout and no retry.

    Args:
        file_path: Executable to deploy Qt libraries for
        options: windeployqt options

    Returns:
        Combined tool output

    Raises:
        DeploymentError: If the tool cannot be started or exits non-zero
    """
    cmd = build_windeployqt_command(file_path, options)
    pout(f"Running: {' '.join(cmd)}", color="blue")

    output: list[str] = []
    try:
        for line in stream(cmd, stream_stderr=True):
            logger.info(f"windeployqt: {line}")
            output.append(line)
    except ProcessError as e:
        captured = "\n".join(output)
        if e.return_code is None:
            logger.error("windeployqt failed to start", command=" ".join(cmd), error=str(e))
            raise DeploymentError(f"windeployqt failed to start: {e}", cause=e) from e

        logger.error("windeployqt failed", returncode=e.return_code, output=captured)
        raise DeploymentError(
            f"windeployqt failed with code {e.return_code}: {captured}",
            cause=e,
            return_code=e.return_code,
            output=captured,
        ) from e

    return "\n".join(output)


# 🪟📦🔚
