#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Subsystem switching for the packaged runtime executable.

Flips IMAGE_SUBSYSTEM_WINDOWS_CUI to IMAGE_SUBSYSTEM_WINDOWS_GUI so the
packaged application starts without a console window.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from provide.foundation import logger
from provide.foundation.console import pout

from qodepack.exceptions import PEFormatError, SubsystemPatchError

from .headers import IMAGE_SUBSYSTEM_WINDOWS_CUI, IMAGE_SUBSYSTEM_WINDOWS_GUI, PEImage

if TYPE_CHECKING:
    from qodepack.win32.deployqt import DeployQtOptions


@dataclass
class SubsystemPatchResult:
    """Outcome of a subsystem patch."""

    path: Path
    image_format: str
    previous_subsystem: int
    switched: bool
    deploy_output: str | None = None

    @property
    def subsystem(self) -> int:
        return IMAGE_SUBSYSTEM_WINDOWS_GUI if self.switched else self.previous_subsystem


def _patch_image(image: PEImage) -> tuple[str, int, bool]:
    pe_offset = image.validate_signature()
    optional_header_offset = image.optional_header_offset(pe_offset)
    image_format = image.image_format(optional_header_offset)
    pout(f"Found a valid {image_format} executable file", color="green")

    subsystem_offset = image.subsystem_offset(optional_header_offset)
    subsystem = image.read_subsystem(subsystem_offset)
    if subsystem != IMAGE_SUBSYSTEM_WINDOWS_CUI:
        pout(f"Subsystem found to be: {subsystem}. Not switching.. aborting", color="yellow")
        logger.info("Subsystem left unchanged", subsystem=subsystem, image_format=image_format)
        return image_format, subsystem, False

    pout(
        f"Switching to GUI subsystem IMAGE_SUBSYSTEM_WINDOWS_GUI: {IMAGE_SUBSYSTEM_WINDOWS_GUI}",
        color="cyan",
    )
    image.write_subsystem(subsystem_offset, IMAGE_SUBSYSTEM_WINDOWS_GUI)
    logger.info(
        "Switched executable to GUI subsystem",
        image_format=image_format,
        offset=f"0x{subsystem_offset:x}",
    )
    return image_format, subsystem, True


def switch_to_gui_subsystem(
    file_path: Path | str,
    deploy_options: DeployQtOptions | None = None,
) -> SubsystemPatchResult:
    """
    Switch a console PE executable to the Windows GUI subsystem in place.

    Only a subsystem of 3 (console) is rewritten, to 2 (GUI). Any other
    subsystem leaves the file untouched and is reported, not raised. The file
    handle is closed before the optional windeployqt step runs.

    Args:
        file_path: Executable to patch
        deploy_options: When given, windeployqt is run on the executable afterwards

    Returns:
        SubsystemPatchResult describing what was found and done

    Raises:
        PEFormatError: If the file is not a PE32/PE32+ image
        SubsystemPatchError: If the file cannot be opened, read or written
        DeploymentError: If windeployqt exits with a non-zero code
    """
    path = Path(file_path)
    logger.debug("Patching executable subsystem", path=str(path))

    try:
        with path.open("r+b") as stream:
            image_format, previous, switched = _patch_image(PEImage(stream))
    except PEFormatError as e:
        logger.error("Error switching subsystem", path=str(path), error=str(e))
        raise
    except OSError as e:
        logger.error("Error switching subsystem", path=str(path), error=str(e))
        raise SubsystemPatchError(f"Failed to patch {path}: {e}", cause=e, path=str(path)) from e

    result = SubsystemPatchResult(
        path=path,
        image_format=image_format,
        previous_subsystem=previous,
        switched=switched,
    )

    if deploy_options is not None:
        from qodepack.win32.deployqt import run_windeployqt

        result.deploy_output = run_windeployqt(path, deploy_options)
        pout("windeployqt completed successfully", color="green")

    return result
