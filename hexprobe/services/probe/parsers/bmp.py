# hexprobe/services/probe/parsers/bmp.py
from __future__ import annotations

from hexprobe.domain.dataclasses.probe_info import BmpProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

MIN_SIZE = 26
CORE_HEADER_SIZE = 12  # BITMAPCOREHEADER (OS/2 1.x)


def looks_like(data: bytes) -> bool:
    if len(data) < MIN_SIZE or data[:2] != b"BM":
        return False
    return ByteCursor(data, 14).u32le() >= CORE_HEADER_SIZE


def parse(data: bytes) -> BmpProbeInfo:
    if len(data) >= 2 and data[:2] != b"BM":
        raise MalformedInputError("bmp: missing BM signature")
    if len(data) < MIN_SIZE:
        raise TruncatedDataError(f"bmp: {len(data)} bytes is too short for the headers")

    cur = ByteCursor(data, 14)
    dib_size = cur.u32le()
    if dib_size < CORE_HEADER_SIZE:
        raise MalformedInputError(f"bmp: DIB header size {dib_size} is too small")
    if dib_size == CORE_HEADER_SIZE:
        width = cur.u16le()
        height = cur.u16le()
        bpp = cur.seek(24).u16le()
    else:
        width = cur.i32le()
        height = abs(cur.i32le())  # negative height: top-down rows
        bpp = cur.seek(28).u16le()
    if width <= 0 or height <= 0:
        raise MalformedInputError(f"bmp: invalid dimensions {width}x{height}")
    if bpp <= 0:
        raise MalformedInputError("bmp: bits per pixel is zero")
    return BmpProbeInfo(width=width, height=height, bit_depth=bpp, dib_header_size=dib_size)
