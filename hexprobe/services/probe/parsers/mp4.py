# hexprobe/services/probe/parsers/mp4.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from hexprobe.domain.dataclasses.probe_info import Mp4ProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError, UnsupportedFormatError
from hexprobe.services.probe.parsers import isobmff
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

MP4_BRANDS = frozenset({
    "isom", "iso2", "avc1", "mp41", "mp42", "qt  ",
    "iso3", "iso4", "iso5", "iso6", "dash", "M4A ", "M4V ",
})

# moov/trak/mdia/minf/stbl/stsd hold every header read here
CONTAINERS = frozenset({"moov", "trak", "mdia", "minf", "stbl", "stsd"})

VIDEO_CODECS = {
    "avc1": "h264", "avc3": "h264",
    "hvc1": "hevc", "hev1": "hevc",
    "av01": "av1", "vp09": "vp9", "mp4v": "mpeg4",
}
AUDIO_CODECS = {
    "mp4a": "aac", "Opus": "opus", "fLaC": "flac",
    "ac-3": "ac3", "ec-3": "eac3", ".mp3": "mp3",
}


@dataclass
class _Track:
    handler: Optional[str] = None
    entry: Optional[str] = None
    channels: Optional[int] = None
    sample_rate: Optional[int] = None


def read_mvhd_duration(data: bytes, box: isobmff.Box) -> Optional[int]:
    """Movie duration in milliseconds, or None when the header is short or has no timescale."""
    cur = ByteCursor(data, box.payload_start)
    if box.payload_size < 20:
        return None
    version = cur.u8()
    if version == 1:
        if box.payload_size < 32:
            return None
        timescale = cur.seek(box.payload_start + 20).u32be()
        duration = cur.u64be()
    else:
        timescale = cur.seek(box.payload_start + 12).u32be()
        duration = cur.u32be()
    if timescale <= 0:
        return None
    return duration * 1000 // timescale


def read_tkhd_dimensions(data: bytes, box: isobmff.Box) -> Optional[tuple[int, int]]:
    """Track width/height (integer part of the 16.16 fields)."""
    if box.payload_size < 84:
        return None
    cur = ByteCursor(data, box.payload_start)
    version = cur.u8()
    at = 88 if version == 1 else 76
    if box.payload_size < at + 8:
        return None
    width = cur.seek(box.payload_start + at).u32be() >> 16
    height = cur.u32be() >> 16
    return width, height


def read_handler(data: bytes, box: isobmff.Box) -> Optional[str]:
    if box.payload_size < 12:
        return None
    return ByteCursor(data, box.payload_start + 8).ascii(4)


def read_audio_entry(data: bytes, box: isobmff.Box) -> tuple[Optional[int], Optional[int]]:
    """(channels, sample_rate) of an AudioSampleEntry."""
    if box.payload_size < 28:
        return None, None
    cur = ByteCursor(data, box.payload_start + 16)
    channels = cur.u16be()
    rate = cur.seek(box.payload_start + 24).u32be() >> 16
    return channels or None, rate or None


def looks_like(data: bytes) -> bool:
    return isobmff.major_brand(data) in MP4_BRANDS


def parse(data: bytes) -> Mp4ProbeInfo:
    if len(data) < 12:
        raise TruncatedDataError("mp4: too short for an ftyp box")
    brand = isobmff.major_brand(data)
    if brand is None:
        raise MalformedInputError("mp4: missing ftyp box")
    if brand not in MP4_BRANDS:
        raise UnsupportedFormatError(f"mp4: unsupported major brand '{brand}'")

    duration: Optional[int] = None
    width = height = None
    tracks: List[_Track] = []
    for box, parent in isobmff.walk(data, CONTAINERS, strict=True):
        kind = box.type
        if kind == "mvhd":
            if duration is None:
                duration = read_mvhd_duration(data, box)
        elif kind == "trak":
            tracks.append(_Track())
        elif kind == "tkhd":
            dims = read_tkhd_dimensions(data, box)
            if dims and dims[0] > 0 and dims[1] > 0 and width is None:
                width, height = dims
        elif kind == "hdlr" and tracks:
            tracks[-1].handler = read_handler(data, box)
        elif parent is not None and parent.type == "stsd" and tracks and tracks[-1].entry is None:
            track = tracks[-1]
            track.entry = kind
            if track.handler == "soun" or kind in AUDIO_CODECS:
                track.channels, track.sample_rate = read_audio_entry(data, box)

    video_codec = audio_codec = None
    channels = sample_rate = None
    for track in tracks:
        if track.entry is None:
            continue
        if video_codec is None and (track.handler == "vide" or track.entry in VIDEO_CODECS):
            video_codec = VIDEO_CODECS.get(track.entry, track.entry.strip())
        elif audio_codec is None and (track.handler == "soun" or track.entry in AUDIO_CODECS):
            audio_codec = AUDIO_CODECS.get(track.entry, track.entry.strip())
            channels, sample_rate = track.channels, track.sample_rate

    return Mp4ProbeInfo(
        major_brand=brand.strip(),
        duration_millis=duration,
        width=width,
        height=height,
        video_codec=video_codec,
        audio_codec=audio_codec,
        sample_rate=sample_rate,
        channels=channels,
    )
