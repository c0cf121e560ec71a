# hexprobe/services/probe/parsers/tiff.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from hexprobe.domain.dataclasses.probe_info import TiffProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

LITTLE_ENDIAN_MARK = b"II*\x00"
BIG_ENDIAN_MARK = b"MM\x00*"

TAG_WIDTH = 256
TAG_HEIGHT = 257
TAG_BITS_PER_SAMPLE = 258
WANTED_TAGS = (TAG_WIDTH, TAG_HEIGHT, TAG_BITS_PER_SAMPLE)

TYPE_SHORT = 3
TYPE_LONG = 4
TYPE_SIZES = {TYPE_SHORT: 2, TYPE_LONG: 4}
ENTRY_SIZE = 12


@dataclass(frozen=True)
class _Reader:
    """ByteCursor reads in the file's byte order."""
    cur: ByteCursor
    little: bool

    def u16(self, at: int) -> int:
        self.cur.seek(at)
        return self.cur.u16le() if self.little else self.cur.u16be()

    def u32(self, at: int) -> int:
        self.cur.seek(at)
        return self.cur.u32le() if self.little else self.cur.u32be()

    def value(self, at: int, field_type: int) -> int:
        return self.u16(at) if field_type == TYPE_SHORT else self.u32(at)


def looks_like(data: bytes) -> bool:
    return len(data) >= 8 and data[:4] in (LITTLE_ENDIAN_MARK, BIG_ENDIAN_MARK)


def read_ifd_values(data: bytes, little: bool) -> Dict[int, int]:
    """First value of each wanted SHORT/LONG tag in the first IFD."""
    reader = _Reader(ByteCursor(data), little)
    ifd = reader.u32(4)
    if ifd < 8:
        raise MalformedInputError(f"tiff: IFD offset {ifd} points into the header")
    if ifd + 2 > len(data):
        raise TruncatedDataError(f"tiff: IFD offset {ifd} is past the end of the data")

    count = reader.u16(ifd)
    values: Dict[int, int] = {}
    for i in range(count):
        entry = ifd + 2 + i * ENTRY_SIZE
        if entry + ENTRY_SIZE > len(data):
            raise TruncatedDataError(f"tiff: IFD entry {i} runs past the end of the data")
        tag = reader.u16(entry)
        field_type = reader.u16(entry + 2)
        if tag not in WANTED_TAGS or field_type not in TYPE_SIZES or tag in values:
            continue
        n = reader.u32(entry + 4)
        if n == 0:
            continue
        if n * TYPE_SIZES[field_type] <= 4:
            # value stored inline, left-justified in the 4-byte field
            values[tag] = reader.value(entry + 8, field_type)
        else:
            values[tag] = reader.value(reader.u32(entry + 8), field_type)
    return values


def parse(data: bytes) -> TiffProbeInfo:
    if len(data) < 8:
        raise TruncatedDataError("tiff: too short for the header")
    if not looks_like(data):
        raise MalformedInputError("tiff: missing II*/MM* byte-order mark")
    little = data[:2] == b"II"
    values = read_ifd_values(data, little)

    width: Optional[int] = values.get(TAG_WIDTH)
    height: Optional[int] = values.get(TAG_HEIGHT)
    if not width or not height:
        raise MalformedInputError("tiff: missing image width/height tags")
    bits = values.get(TAG_BITS_PER_SAMPLE) or None
    return TiffProbeInfo(width=width, height=height, bit_depth=bits, little_endian=little)
