# hexprobe/services/probe/parsers/png.py
from __future__ import annotations

from hexprobe.domain.dataclasses.probe_info import PngProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

SIGNATURE = b"\x89PNG\r\n\x1a\n"
IHDR_LENGTH = 13
MIN_SIZE = len(SIGNATURE) + 8 + IHDR_LENGTH + 4  # signature, chunk header, IHDR, CRC


def looks_like(data: bytes) -> bool:
    return data[:len(SIGNATURE)] == SIGNATURE


def parse(data: bytes) -> PngProbeInfo:
    if len(data) < len(SIGNATURE):
        raise TruncatedDataError("png: shorter than the signature")
    if not looks_like(data):
        raise MalformedInputError("png: bad signature")

    cur = ByteCursor(data, len(SIGNATURE))
    length = cur.u32be()
    chunk_type = cur.ascii(4)
    if chunk_type != "IHDR":
        raise MalformedInputError(f"png: first chunk is '{chunk_type}', expected IHDR")
    if length != IHDR_LENGTH:
        raise MalformedInputError(f"png: IHDR length is {length}, expected {IHDR_LENGTH}")
    if len(data) < MIN_SIZE:
        raise TruncatedDataError("png: IHDR chunk is incomplete")

    width = cur.u32be()
    height = cur.u32be()
    bit_depth = cur.u8()
    color_type = cur.u8()
    if width <= 0 or height <= 0:
        raise MalformedInputError(f"png: invalid dimensions {width}x{height}")
    return PngProbeInfo(width=width, height=height, bit_depth=bit_depth, color_type=color_type)
