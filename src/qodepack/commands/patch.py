#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Subsystem patch command for the qodepack CLI."""

from __future__ import annotations

from pathlib import Path

import click
from provide.foundation.console import perr, pout

from qodepack.console import get_command_logger
from qodepack.exceptions import QodePackError
from qodepack.win32 import DeployQtOptions, switch_to_gui_subsystem

# Get structured logger for this command
log = get_command_logger("patch-subsystem")

_DIR = click.Path(exists=True, file_okay=False, path_type=Path)


@click.command("patch-subsystem")
@click.argument(
    "executable",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--deploy",
    is_flag=True,
    help="Run windeployqt on the executable after patching",
)
@click.option("--qt-dir", type=_DIR, help="Qt installation containing bin/windeployqt")
@click.option("--qml-dir", type=_DIR, help="Directory with QML files to scan")
@click.option("--debug/--release", "debug", default=None, help="Deploy debug or release Qt binaries")
@click.option("--translation-dir", type=click.Path(path_type=Path), help="Where to copy Qt translations")
@click.option("--extra-arg", "extra_args", multiple=True, help="Extra argument passed to windeployqt (repeatable)")
def patch_command(
    executable: Path,
    deploy: bool,
    qt_dir: Path | None,
    qml_dir: Path | None,
    debug: bool | None,
    translation_dir: Path | None,
    extra_args: tuple[str, ...],
) -> None:
    """Switch EXECUTABLE from the console to the GUI subsystem."""
    deploy_options = None
    if deploy or qt_dir or qml_dir or debug is not None or translation_dir or extra_args:
        deploy_options = DeployQtOptions(
            qt_dir=qt_dir,
            qml_dir=qml_dir,
            debug=debug is True,
            release=debug is False,
            translation_dir=translation_dir,
            extra_args=list(extra_args),
        )
    log.debug("Patching subsystem", executable=str(executable), deploy=deploy_options is not None)

    try:
        result = switch_to_gui_subsystem(executable, deploy_options)
    except QodePackError as e:
        log.error("Patch failed", error=str(e), executable=str(executable))
        perr(f"❌ Patch failed: {e}")
        raise click.Abort() from e

    if result.switched:
        pout(f"✅ {executable.name} ({result.image_format}) now uses the GUI subsystem")
    else:
        pout(f"ℹ️  {executable.name} ({result.image_format}) left at subsystem {result.previous_subsystem}")


# 🪟📦🔚
