# hexprobe/services/probe/parsers/ogg.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from hexprobe.domain.dataclasses.probe_info import OggProbeInfo
from hexprobe.domain.enums.bitrate_mode import BitrateMode
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError, UnsupportedFormatError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

CAPTURE_PATTERN = b"OggS"
PAGE_HEADER_SIZE = 27
VORBIS_IDENT = b"\x01vorbis"
IDENT_PACKET_SIZE = 30
_GRANULE_SIGN = 1 << 63


@dataclass(frozen=True)
class OggPage:
    offset: int
    version: int
    header_type: int
    granule_position: int
    serial: int
    sequence: int
    segment_count: int
    payload_size: int

    @property
    def header_size(self) -> int:
        return PAGE_HEADER_SIZE + self.segment_count

    @property
    def total_size(self) -> int:
        return self.header_size + self.payload_size

    @property
    def has_granule(self) -> bool:
        # -1 (all bits set) means no packet finishes on this page
        return not self.granule_position & _GRANULE_SIGN


def read_page(data: bytes, offset: int) -> Optional[OggPage]:
    """Page header at ``offset``; None when the pattern is missing or the page overruns the buffer."""
    if offset < 0 or offset + PAGE_HEADER_SIZE > len(data):
        return None
    cur = ByteCursor(data, offset)
    if cur.bytes(4) != CAPTURE_PATTERN:
        return None
    version = cur.u8()
    header_type = cur.u8()
    granule = cur.u64le()
    serial = cur.u32le()
    sequence = cur.u32le()
    cur.skip(4)  # CRC, not verified
    segment_count = cur.u8()
    if not cur.has(segment_count):
        return None
    payload_size = sum(cur.bytes(segment_count))
    page = OggPage(
        offset=offset,
        version=version,
        header_type=header_type,
        granule_position=granule,
        serial=serial,
        sequence=sequence,
        segment_count=segment_count,
        payload_size=payload_size,
    )
    if offset + page.total_size > len(data):
        return None
    return page


def iter_pages(data: bytes, start: int = 0) -> Iterator[OggPage]:
    offset = start
    while True:
        page = read_page(data, offset)
        if page is None:
            return
        yield page
        offset += page.total_size


def looks_like(data: bytes) -> bool:
    return len(data) >= 4 and data[:4] == CAPTURE_PATTERN


def parse(data: bytes) -> OggProbeInfo:
    if len(data) < PAGE_HEADER_SIZE:
        raise TruncatedDataError(f"ogg: {len(data)} bytes is too short for a page header")
    first = read_page(data, 0)
    if first is None:
        if data[:4] != CAPTURE_PATTERN:
            raise MalformedInputError("ogg: missing OggS capture pattern")
        raise TruncatedDataError("ogg: first page runs past the end of the data")

    ident = first.header_size
    if ident + IDENT_PACKET_SIZE > len(data):
        raise TruncatedDataError("ogg: identification packet is incomplete")
    cur = ByteCursor(data, ident)
    if cur.bytes(len(VORBIS_IDENT)) != VORBIS_IDENT:
        raise UnsupportedFormatError("ogg: first packet is not a Vorbis identification header")
    cur.u32le()  # vorbis version
    channels = cur.u8()
    sample_rate = cur.u32le()
    cur.skip(4)  # bitrate_maximum
    nominal = cur.i32le()
    nominal_bitrate = nominal if nominal > 0 else None

    pages = 0
    payload_bits = 0
    max_granule = 0
    for page in iter_pages(data):
        pages += 1
        payload_bits += page.payload_size * 8
        if page.has_granule and page.granule_position > max_granule:
            max_granule = page.granule_position

    if sample_rate <= 0 or channels <= 0:
        raise MalformedInputError("ogg: identification header declares no channels or sample rate")

    duration = max_granule * 1000 // sample_rate
    bitrate = payload_bits * 1000 // duration // 1000 if duration > 0 else 0
    if bitrate <= 0 and nominal_bitrate:
        bitrate = nominal_bitrate // 1000

    if pages <= 1:
        mode = BitrateMode.UNKNOWN
    elif nominal_bitrate or pages > 2:
        mode = BitrateMode.VBR
    else:
        mode = BitrateMode.UNKNOWN

    return OggProbeInfo(
        codec="vorbis",
        sample_rate=sample_rate,
        channels=channels,
        bitrate_kbps=bitrate,
        bitrate_mode=mode,
        duration_millis=duration,
        page_count=pages,
        nominal_bitrate=nominal_bitrate,
    )
