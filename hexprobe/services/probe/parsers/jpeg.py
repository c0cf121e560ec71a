# hexprobe/services/probe/parsers/jpeg.py
from __future__ import annotations

from hexprobe.domain.dataclasses.probe_info import JpegProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

SOI = b"\xff\xd8\xff"
EOI = 0xD9
SOS = 0xDA
STANDALONE = frozenset({0x01, *range(0xD0, 0xD8)})
SOF_MARKERS = frozenset({0xC0, 0xC1, 0xC2, 0xC3, 0xC5, 0xC6, 0xC7, 0xC9, 0xCA, 0xCB, 0xCD, 0xCE, 0xCF})


def looks_like(data: bytes) -> bool:
    return len(data) >= 4 and data[:3] == SOI


def parse(data: bytes) -> JpegProbeInfo:
    if len(data) < 4:
        raise TruncatedDataError("jpeg: shorter than the SOI marker")
    if not looks_like(data):
        raise MalformedInputError("jpeg: missing SOI marker")

    cur = ByteCursor(data, 2)
    while cur.remaining >= 4:
        if cur.u8() != 0xFF:
            raise MalformedInputError(f"jpeg: expected a marker at offset {cur.position - 1}")
        marker = cur.u8()
        while marker == 0xFF:  # fill bytes
            marker = cur.u8()
        if marker in (EOI, SOS):
            raise MalformedInputError("jpeg: reached scan data before a SOF segment")
        if marker in STANDALONE:
            continue

        segment_start = cur.position
        length = cur.u16be()
        if length < 2:
            raise MalformedInputError(f"jpeg: segment length {length} at offset {segment_start}")
        end = segment_start + length
        if end > len(data):
            raise TruncatedDataError(f"jpeg: segment 0x{marker:02X} runs past the end of the data")

        if marker in SOF_MARKERS:
            if length - 2 < 6:
                raise MalformedInputError("jpeg: SOF segment is too short")
            precision = cur.u8()
            height = cur.u16be()
            width = cur.u16be()
            components = cur.u8()
            if width <= 0 or height <= 0 or components <= 0:
                raise MalformedInputError(f"jpeg: invalid frame {width}x{height}x{components}")
            return JpegProbeInfo(width=width, height=height, bit_depth=precision, channels=components)
        cur.seek(end)

    raise TruncatedDataError("jpeg: no SOF segment before the end of the data")
