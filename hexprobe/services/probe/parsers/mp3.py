# hexprobe/services/probe/parsers/mp3.py
"""
MPEG-1/2/2.5 Layer III header parser.

Finds the first frame (confirmed by a second valid header right after it),
reads an optional Xing/Info or VBRI frame count, then walks every frame to
total samples and bits.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from hexprobe.domain.dataclasses.probe_info import Mp3ProbeInfo
from hexprobe.domain.enums.bitrate_mode import BitrateMode
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

SYNC_MASK = 0xFFE00000

# Layer III bitrate tables (kbps); index 0 is "free", 15 is invalid.
BITRATES_MPEG1 = (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0)
BITRATES_MPEG2 = (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0)

VERSION_MPEG1 = 0b11
VERSION_MPEG2 = 0b10
VERSION_MPEG25 = 0b00
VERSION_RESERVED = 0b01

SAMPLE_RATES = {
    VERSION_MPEG1: (44100, 48000, 32000),
    VERSION_MPEG2: (22050, 24000, 16000),
    VERSION_MPEG25: (11025, 12000, 8000),
}

ID3_HEADER_SIZE = 10
ID3_FOOTER_FLAG = 0x10
VBRI_OFFSET = 36  # frame start + 4 header bytes + 32


@dataclass(frozen=True)
class FrameHeader:
    version: int
    bitrate_kbps: int
    sample_rate: int
    channels: int
    padding: int
    frame_length: int

    @property
    def is_mpeg1(self) -> bool:
        return self.version == VERSION_MPEG1

    @property
    def samples_per_frame(self) -> int:
        return 1152 if self.is_mpeg1 else 576

    @property
    def side_info_size(self) -> int:
        if self.is_mpeg1:
            return 17 if self.channels == 1 else 32
        return 9 if self.channels == 1 else 17


def synchsafe(b0: int, b1: int, b2: int, b3: int) -> int:
    """Four 7-bit groups, big-endian; the high bit of each byte is ignored."""
    return ((b0 & 0x7F) << 21) | ((b1 & 0x7F) << 14) | ((b2 & 0x7F) << 7) | (b3 & 0x7F)


def audio_start(data: bytes) -> int:
    """Offset of the first byte after an ID3v2 tag (0 when there is none)."""
    if len(data) < ID3_HEADER_SIZE or data[:3] != b"ID3":
        return 0
    cur = ByteCursor(data, 5)
    flags = cur.u8()
    size = synchsafe(*cur.bytes(4))
    start = ID3_HEADER_SIZE + size
    if flags & ID3_FOOTER_FLAG:
        start += ID3_HEADER_SIZE
    return min(start, len(data))


def decode_header(word: int) -> Optional[FrameHeader]:
    """Decode a 32-bit big-endian header word; None when any field is reserved or invalid."""
    if word & SYNC_MASK != SYNC_MASK:
        return None
    version = (word >> 19) & 0x3
    layer = (word >> 17) & 0x3
    bitrate_index = (word >> 12) & 0xF
    rate_index = (word >> 10) & 0x3
    padding = (word >> 9) & 0x1
    mode = (word >> 6) & 0x3

    if version == VERSION_RESERVED or layer != 0b01:
        return None
    if bitrate_index in (0, 15) or rate_index == 3:
        return None

    table = BITRATES_MPEG1 if version == VERSION_MPEG1 else BITRATES_MPEG2
    bitrate = table[bitrate_index]
    sample_rate = SAMPLE_RATES[version][rate_index]
    coefficient = 144000 if version == VERSION_MPEG1 else 72000
    frame_length = coefficient * bitrate // sample_rate + padding
    if frame_length < 4:
        return None
    return FrameHeader(
        version=version,
        bitrate_kbps=bitrate,
        sample_rate=sample_rate,
        channels=1 if mode == 3 else 2,
        padding=padding,
        frame_length=frame_length,
    )


def header_at(cur: ByteCursor, offset: int) -> Optional[FrameHeader]:
    if offset < 0 or offset + 4 > cur.length:
        return None
    return decode_header(cur.seek(offset).u32be())


def find_first_frame(data: bytes, start: int = 0) -> Optional[int]:
    """First offset holding a valid header that is followed by another valid header."""
    cur = ByteCursor(data)
    for offset in range(start, len(data) - 3):
        if data[offset] != 0xFF:
            continue
        header = header_at(cur, offset)
        if header is None:
            continue
        if header_at(cur, offset + header.frame_length) is not None:
            return offset
    return None


def iter_frames(data: bytes, start: int) -> Iterator[tuple[int, FrameHeader]]:
    """Yield ``(offset, header)`` for consecutive frames until a header is invalid or runs past the end."""
    cur = ByteCursor(data)
    offset = start
    while True:
        header = header_at(cur, offset)
        if header is None or offset + header.frame_length > len(data):
            return
        yield offset, header
        offset += header.frame_length


def read_xing_frames(data: bytes, frame: int, header: FrameHeader) -> Optional[int]:
    """Frame count declared by a Xing/Info tag, if present and flagged."""
    at = frame + 4 + header.side_info_size
    if at + 16 > len(data):
        return None
    cur = ByteCursor(data, at)
    if cur.bytes(4) not in (b"Xing", b"Info"):
        return None
    flags = cur.u32be()
    if not flags & 0x1:
        return None
    count = cur.u32be()
    return count or None


def read_vbri_frames(data: bytes, frame: int) -> Optional[int]:
    at = frame + VBRI_OFFSET
    if at + 18 > len(data):
        return None
    cur = ByteCursor(data, at)
    if cur.bytes(4) != b"VBRI":
        return None
    count = cur.skip(10).u32be()
    return count or None


def duration_millis(total_samples: int, declared_frames: Optional[int], header: FrameHeader) -> int:
    """
    Scanned samples win; the Xing/VBRI frame count is used only when the scan
    produced none.
    """
    if total_samples > 0:
        return total_samples * 1000 // header.sample_rate
    if declared_frames:
        return declared_frames * header.samples_per_frame * 1000 // header.sample_rate
    return 0


def looks_like(data: bytes) -> bool:
    if len(data) >= 3 and data[:3] == b"ID3":
        return True
    return len(data) >= 4 and decode_header(int.from_bytes(data[:4], "big")) is not None


def parse(data: bytes) -> Mp3ProbeInfo:
    if len(data) < 4:
        raise TruncatedDataError(f"mp3: {len(data)} bytes is too short for a frame header")

    start = audio_start(data)
    first = find_first_frame(data, start)
    if first is None:
        if len(data) - start < 4:
            raise TruncatedDataError("mp3: no audio data after the ID3 tag")
        raise MalformedInputError("mp3: no MPEG Layer III frame sync found")

    first_header = header_at(ByteCursor(data), first)
    xing_frames = read_xing_frames(data, first, first_header)
    vbri_frames = read_vbri_frames(data, first)
    declared_frames = xing_frames or vbri_frames
    has_vbr_header = declared_frames is not None

    frames = 0
    total_samples = 0
    total_bits = 0
    bitrates = set()
    for _, header in iter_frames(data, first):
        frames += 1
        total_samples += header.samples_per_frame
        total_bits += header.frame_length * 8
        bitrates.add(header.bitrate_kbps)

    sample_rate = first_header.sample_rate
    duration = duration_millis(total_samples, declared_frames, first_header)

    bitrate = total_bits * 1000 // duration // 1000 if duration > 0 else 0
    if bitrate <= 0:
        bitrate = first_header.bitrate_kbps

    if frames <= 1:
        mode = BitrateMode.UNKNOWN
    elif has_vbr_header and len(bitrates) == 1:
        mode = BitrateMode.CVBR
    elif has_vbr_header or len(bitrates) > 1:
        mode = BitrateMode.VBR
    else:
        mode = BitrateMode.CBR

    return Mp3ProbeInfo(
        codec="mp3",
        sample_rate=sample_rate,
        channels=first_header.channels,
        bitrate_kbps=bitrate,
        bitrate_mode=mode,
        duration_millis=duration,
        frame_count=frames,
        has_vbr_header=has_vbr_header,
    )
