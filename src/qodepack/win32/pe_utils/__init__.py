"""Windows PE Executable Utilities.

Provides utilities for reading and rewriting the PE optional header of the
packaged runtime executable.
"""

from qodepack.win32.pe_utils.headers import (
    IMAGE_SUBSYSTEM_WINDOWS_CUI,
    IMAGE_SUBSYSTEM_WINDOWS_GUI,
    PEImage,
)
from qodepack.win32.pe_utils.subsystem import SubsystemPatchResult, switch_to_gui_subsystem

__all__ = [
    "IMAGE_SUBSYSTEM_WINDOWS_CUI",
    "IMAGE_SUBSYSTEM_WINDOWS_GUI",
    "PEImage",
    "SubsystemPatchResult",
    "switch_to_gui_subsystem",
]
