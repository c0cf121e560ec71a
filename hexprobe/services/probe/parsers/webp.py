# hexprobe/services/probe/parsers/webp.py
from __future__ import annotations

from hexprobe.domain.dataclasses.probe_info import WebpProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError, UnsupportedFormatError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

MIN_SIZE = 30
VP8_START_CODE = b"\x9d\x01\x2a"
VP8L_SIGNATURE = 0x2F


def looks_like(data: bytes) -> bool:
    return len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP"


def _lossy(cur: ByteCursor) -> tuple[int, int]:
    # 3-byte frame tag at 20, start code at 23, then 14-bit sizes with 2 scale bits
    if cur.seek(23).bytes(3) != VP8_START_CODE:
        raise MalformedInputError("webp: VP8 key frame start code missing")
    width = cur.u16le() & 0x3FFF
    height = cur.u16le() & 0x3FFF
    return width, height


def _lossless(cur: ByteCursor) -> tuple[int, int]:
    if cur.seek(20).u8() != VP8L_SIGNATURE:
        raise MalformedInputError("webp: VP8L signature byte missing")
    b1, b2, b3, b4 = cur.bytes(4)
    width = (b1 | ((b2 & 0x3F) << 8)) + 1
    height = (((b2 >> 6) & 0x03) | (b3 << 2) | ((b4 & 0x0F) << 10)) + 1
    return width, height


def _extended(cur: ByteCursor) -> tuple[int, int]:
    raw = cur.seek(24).bytes(6)
    width = int.from_bytes(raw[0:3], "little") + 1
    height = int.from_bytes(raw[3:6], "little") + 1
    return width, height


_VARIANTS = {
    "VP8 ": _lossy,
    "VP8L": _lossless,
    "VP8X": _extended,
}


def parse(data: bytes) -> WebpProbeInfo:
    if len(data) < 12:
        raise TruncatedDataError("webp: too short for the RIFF header")
    if not looks_like(data):
        raise MalformedInputError("webp: not a RIFF/WEBP file")
    if len(data) < MIN_SIZE:
        raise TruncatedDataError("webp: first chunk is incomplete")

    cur = ByteCursor(data, 12)
    fourcc = cur.ascii(4)
    decode = _VARIANTS.get(fourcc)
    if decode is None:
        raise UnsupportedFormatError(f"webp: unsupported chunk '{fourcc}'")
    width, height = decode(cur)
    if width <= 0 or height <= 0:
        raise MalformedInputError(f"webp: invalid dimensions {width}x{height}")
    return WebpProbeInfo(width=width, height=height, bit_depth=8, variant=fourcc)
