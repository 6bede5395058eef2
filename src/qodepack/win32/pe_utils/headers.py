#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""PE header reader/writer.

Provides a small typed view over an open, seekable PE image. Only the fields
needed to locate and rewrite the optional header's Subsystem are modelled.
"""

import struct
from typing import BinaryIO

from provide.foundation import logger

from qodepack.exceptions import PEFormatError

# e_lfanew: offset of the PE signature, stored in the DOS header
PE_HEADER_POINTER_OFFSET = 0x3C
PE_SIGNATURE = b"PE\x00\x00"
PE_SIGNATURE_SIZE = 4
COFF_HEADER_SIZE = 20

PE32_MAGIC = 0x10B
PE32_PLUS_MAGIC = 0x20B
IMAGE_FORMATS = {
    PE32_MAGIC: "PE32",
    PE32_PLUS_MAGIC: "PE32+",
}

# Subsystem sits at the same offset in PE32 and PE32+ optional headers
# https://learn.microsoft.com/en-us/windows/win32/debug/pe-format#optional-header-windows-specific-fields-image-only
SUBSYSTEM_FIELD_OFFSET = 68

IMAGE_SUBSYSTEM_WINDOWS_GUI = 2
IMAGE_SUBSYSTEM_WINDOWS_CUI = 3

_U16 = struct.Struct("<H")
_U32 = struct.Struct("<I")


class PEImage:
    """Random-access reader/writer for the PE header fields qodepack touches.

    The image does not own the stream; callers open and close it.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def _read(self, offset: int, size: int) -> bytes:
        self.stream.seek(offset)
        data = self.stream.read(size)
        if len(data) != size:
            raise PEFormatError(
                f"Unexpected end of file reading {size} bytes at 0x{offset:x}",
                offset=offset,
                size=size,
            )
        return data

    def read_u16(self, offset: int) -> int:
        value: int = _U16.unpack(self._read(offset, _U16.size))[0]
        return value

    def read_u32(self, offset: int) -> int:
        value: int = _U32.unpack(self._read(offset, _U32.size))[0]
        return value

    def write_u16(self, offset: int, value: int) -> None:
        self.stream.seek(offset)
        self.stream.write(_U16.pack(value))
        self.stream.flush()

    @property
    def pe_header_offset(self) -> int:
        """Offset of the PE signature, read from the DOS header (e_lfanew)."""
        return self.read_u32(PE_HEADER_POINTER_OFFSET)

    def validate_signature(self) -> int:
        """Check the PE signature and return its offset.

        Raises:
            PEFormatError: If the bytes at e_lfanew are not ``PE\\0\\0``
        """
        pe_offset = self.pe_header_offset
        signature = self._read(pe_offset, PE_SIGNATURE_SIZE)
        if signature != PE_SIGNATURE:
            logger.warning(
                "Invalid PE signature",
                expected="PE\\x00\\x00",
                actual=signature.hex(),
                offset=f"0x{pe_offset:x}",
            )
            raise PEFormatError("Not a PE file. aborting", offset=pe_offset)
        return pe_offset

    @staticmethod
    def optional_header_offset(pe_offset: int) -> int:
        """Start of the optional header: signature, then the fixed-size COFF header."""
        return pe_offset + PE_SIGNATURE_SIZE + COFF_HEADER_SIZE

    def image_format(self, optional_header_offset: int) -> str:
        """Return ``"PE32"`` or ``"PE32+"`` from the optional header magic.

        Raises:
            PEFormatError: For any other magic value
        """
        magic = self.read_u16(optional_header_offset)
        image_format = IMAGE_FORMATS.get(magic)
        if image_format is None:
            raise PEFormatError(f"Unknown PE format! 0x{magic:x}", magic=magic)
        return image_format

    @staticmethod
    def subsystem_offset(optional_header_offset: int) -> int:
        return optional_header_offset + SUBSYSTEM_FIELD_OFFSET

    def read_subsystem(self, subsystem_offset: int) -> int:
        return self.read_u16(subsystem_offset)

    def write_subsystem(self, subsystem_offset: int, subsystem: int) -> None:
        self.write_u16(subsystem_offset, subsystem)
        logger.trace(
            "Wrote subsystem field",
            offset=f"0x{subsystem_offset:x}",
            subsystem=subsystem,
        )
