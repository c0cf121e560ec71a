# hexprobe/services/probe/parsers/wav.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from hexprobe.domain.dataclasses.probe_info import WavProbeInfo
from hexprobe.domain.enums.bitrate_mode import BitrateMode
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
MIN_FMT_SIZE = 16


@dataclass(frozen=True)
class RiffChunk:
    id: str
    offset: int  # start of the payload
    size: int


def iter_chunks(data: bytes, start: int = RIFF_HEADER_SIZE) -> Iterator[RiffChunk]:
    """RIFF sub-chunks from ``start``; odd sizes are padded to an even boundary."""
    cur = ByteCursor(data)
    offset = start
    while offset + CHUNK_HEADER_SIZE <= len(data):
        cur.seek(offset)
        chunk_id = cur.ascii(4)
        size = cur.u32le()
        payload = offset + CHUNK_HEADER_SIZE
        if payload + size > len(data):
            raise TruncatedDataError(f"wav: chunk '{chunk_id}' at {offset} runs past the end of the data")
        yield RiffChunk(chunk_id, payload, size)
        offset = payload + size + (size & 1)


def looks_like(data: bytes) -> bool:
    return len(data) >= RIFF_HEADER_SIZE and data[:4] == b"RIFF" and data[8:12] == b"WAVE"


def parse(data: bytes) -> WavProbeInfo:
    if len(data) < RIFF_HEADER_SIZE:
        raise TruncatedDataError(f"wav: {len(data)} bytes is too short for a RIFF header")
    if not looks_like(data):
        raise MalformedInputError("wav: not a RIFF/WAVE file")

    channels = sample_rate = bits = None
    data_size = None
    cur = ByteCursor(data)
    for chunk in iter_chunks(data):
        if chunk.id == "fmt ":
            if chunk.size < MIN_FMT_SIZE:
                raise MalformedInputError(f"wav: fmt chunk is {chunk.size} bytes, need {MIN_FMT_SIZE}")
            channels = cur.seek(chunk.offset + 2).u16le()
            sample_rate = cur.u32le()
            bits = cur.seek(chunk.offset + 14).u16le()
        elif chunk.id == "data":
            data_size = chunk.size
        if channels is not None and data_size is not None:
            break

    if channels is None:
        raise MalformedInputError("wav: missing fmt chunk")
    if data_size is None:
        raise MalformedInputError("wav: missing data chunk")
    if channels <= 0 or sample_rate <= 0 or bits <= 0:
        raise MalformedInputError(
            f"wav: invalid format (channels={channels}, sample_rate={sample_rate}, bits={bits})"
        )

    byte_rate = sample_rate * channels * bits // 8
    if byte_rate <= 0:
        raise MalformedInputError("wav: byte rate is zero")
    return WavProbeInfo(
        codec="pcm",
        sample_rate=sample_rate,
        channels=channels,
        bitrate_kbps=byte_rate * 8 // 1000,
        bitrate_mode=BitrateMode.CBR,
        duration_millis=data_size * 1000 // byte_rate,
        bits_per_sample=bits,
        data_size=data_size,
    )
