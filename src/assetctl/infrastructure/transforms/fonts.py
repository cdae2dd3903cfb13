"""Font format conversion via fontTools.

TrueType/OpenType and WOFF/WOFF2 inputs can be converted; Embedded
OpenType (EOT) is written by prefixing the TrueType data with an EOT
header (version 0x00020001, uncompressed, no XOR obfuscation).
Conversions keep the source font's ``head.modified`` stamp, so rebuilding
from unchanged sources gives identical bytes.
"""

from __future__ import annotations

import struct
from io import BytesIO
from pathlib import Path

from fontTools.ttLib import TTFont

# Inputs fontTools can open.
CONVERTIBLE = frozenset({".ttf", ".otf", ".woff", ".woff2"})

_EOT_VERSION = 0x00020001
_EOT_MAGIC = 0x504C
_DEFAULT_CHARSET = 1
_WINDOWS_ENGLISH = (3, 1, 0x409)


def can_convert(path: Path) -> bool:
    return path.suffix.lower() in CONVERTIBLE


def to_truetype(source: Path) -> bytes:
    """Decode *source* (any convertible flavor) into plain sfnt bytes."""
    font = TTFont(source, recalcTimestamp=False)
    font.flavor = None
    buffer = BytesIO()
    font.save(buffer)
    font.close()
    return buffer.getvalue()


def to_flavor(ttf: bytes, flavor: str) -> bytes:
    """Re-wrap TrueType *ttf* bytes as ``"woff"`` or ``"woff2"``."""
    font = TTFont(BytesIO(ttf), recalcTimestamp=False)
    font.flavor = flavor
    buffer = BytesIO()
    font.save(buffer)
    font.close()
    return buffer.getvalue()


def _name(font: TTFont, name_id: int) -> str:
    table = font["name"]
    record = table.getName(name_id, *_WINDOWS_ENGLISH)
    if record is not None:
        return record.toUnicode()
    return table.getDebugName(name_id) or ""


def _name_field(value: str) -> bytes:
    encoded = value.encode("utf-16-le")
    # PaddingN (always 0), NameSize, Name
    return struct.pack("<HH", 0, len(encoded)) + encoded


def to_eot(ttf: bytes) -> bytes:
    """Wrap TrueType *ttf* bytes in an Embedded OpenType container."""
    font = TTFont(BytesIO(ttf), recalcTimestamp=False)
    os2 = font["OS/2"]
    panose = os2.panose
    panose_bytes = bytes(
        [
            panose.bFamilyType,
            panose.bSerifStyle,
            panose.bWeight,
            panose.bProportion,
            panose.bContrast,
            panose.bStrokeVariation,
            panose.bArmStyle,
            panose.bLetterForm,
            panose.bMidline,
            panose.bXHeight,
        ]
    )
    names = b"".join(
        _name_field(_name(font, name_id))
        for name_id in (1, 2, 5, 4)  # family, subfamily, version, full name
    )
    # Padding5, RootStringSize (no root string)
    names += struct.pack("<HH", 0, 0)

    fixed = struct.pack(
        "<LL10sBBLHH4L2LL4L",
        _EOT_VERSION,
        0,  # flags: no subsetting, compression, or XOR
        panose_bytes,
        _DEFAULT_CHARSET,
        os2.fsSelection & 0x01,
        os2.usWeightClass,
        os2.fsType,
        _EOT_MAGIC,
        os2.ulUnicodeRange1,
        os2.ulUnicodeRange2,
        os2.ulUnicodeRange3,
        os2.ulUnicodeRange4,
        getattr(os2, "ulCodePageRange1", 0),
        getattr(os2, "ulCodePageRange2", 0),
        font["head"].checkSumAdjustment,
        0,
        0,
        0,
        0,
    )
    font.close()
    header_size = 8 + len(fixed) + len(names)
    prefix = struct.pack("<LL", header_size + len(ttf), len(ttf))
    return prefix + fixed + names + ttf
