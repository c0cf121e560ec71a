# tests/conftest.py
"""
Byte-level fixture builders. Every builder returns a minimal but valid file
image for its format so parser tests need no binary fixtures on disk.
"""
from __future__ import annotations

import struct
from pathlib import Path
from types import SimpleNamespace

import pytest

from hexprobe.common import settings as settings_mod

MP3_HEADER_128K = b"\xff\xfb\x90\x00"  # MPEG1 Layer III, 128 kbps, 44100 Hz, stereo
MP3_FRAME_LEN_128K = 417


# ----------------------------------------------------------------------------- audio
def mp3_frames(count: int = 3, header: bytes = MP3_HEADER_128K, frame_len: int = MP3_FRAME_LEN_128K) -> bytes:
    return (header + b"\x00" * (frame_len - 4)) * count


def mp3_xing_frame(total_frames: int, header: bytes = MP3_HEADER_128K, frame_len: int = MP3_FRAME_LEN_128K) -> bytes:
    body = bytearray(frame_len)
    body[0:4] = header
    at = 4 + 32  # MPEG1 stereo side info
    body[at:at + 4] = b"Xing"
    body[at + 4:at + 8] = struct.pack(">I", 0x1)
    body[at + 8:at + 12] = struct.pack(">I", total_frames)
    return bytes(body)


def id3v2(size: int, flags: int = 0) -> bytes:
    ss = bytes([(size >> 21) & 0x7F, (size >> 14) & 0x7F, (size >> 7) & 0x7F, size & 0x7F])
    return b"ID3" + b"\x04\x00" + bytes([flags]) + ss + b"\x00" * size


def vorbis_ident(channels: int = 2, sample_rate: int = 44100, nominal: int = 128000) -> bytes:
    return (
        b"\x01vorbis"
        + struct.pack("<I", 0)
        + bytes([channels])
        + struct.pack("<I", sample_rate)
        + struct.pack("<i", 0)        # maximum
        + struct.pack("<i", nominal)  # nominal
        + struct.pack("<i", 0)        # minimum
        + b"\xb8\x01"
    )


def ogg_page(payload: bytes, granule: int = 0, header_type: int = 0, sequence: int = 0) -> bytes:
    lacing = [255] * (len(payload) // 255) + [len(payload) % 255]
    return (
        b"OggS"
        + bytes([0, header_type])
        + struct.pack("<Q", granule)
        + struct.pack("<I", 0x1234)
        + struct.pack("<I", sequence)
        + struct.pack("<I", 0)
        + bytes([len(lacing)])
        + bytes(lacing)
        + payload
    )


def wav(channels: int = 1, sample_rate: int = 8000, bits: int = 16, data_size: int = 16000, extra_chunk: bytes = b"") -> bytes:
    block_align = channels * bits // 8
    fmt = struct.pack("<HHIIHH", 1, channels, sample_rate, sample_rate * block_align, block_align, bits)
    body = (
        b"WAVE"
        + b"fmt " + struct.pack("<I", len(fmt)) + fmt
        + extra_chunk
        + b"data" + struct.pack("<I", data_size) + b"\x00" * data_size
    )
    return b"RIFF" + struct.pack("<I", len(body)) + body


# ----------------------------------------------------------------------------- images
def png(width: int = 640, height: int = 480, bit_depth: int = 8, color_type: int = 6, ihdr_len: int = 13) -> bytes:
    ihdr = struct.pack(">IIBBBBB", width, height, bit_depth, color_type, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + struct.pack(">I", ihdr_len) + b"IHDR" + ihdr + b"\x00\x00\x00\x00"
        + struct.pack(">I", 0) + b"IEND" + b"\xae\x42\x60\x82"
    )


def jpeg(width: int = 800, height: int = 600, components: int = 3, sof: int = 0xC0, before_sof: bytes = b"") -> bytes:
    app0 = b"\xff\xe0" + struct.pack(">H", 16) + b"JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
    sof_payload = struct.pack(">BHHB", 8, height, width, components) + b"\x01\x11\x00" * components
    sof_seg = bytes([0xFF, sof]) + struct.pack(">H", len(sof_payload) + 2) + sof_payload
    return b"\xff\xd8" + app0 + before_sof + sof_seg + b"\xff\xd9"


def bmp(width: int = 32, height: int = -16, bpp: int = 24, dib: int = 40) -> bytes:
    if dib == 12:
        info = struct.pack("<IHHHH", 12, width, abs(height), 1, bpp)
    else:
        info = struct.pack("<IiiHH", dib, width, height, 1, bpp) + b"\x00" * (dib - 16)
    head = b"BM" + struct.pack("<IHHI", 14 + len(info), 0, 0, 14 + len(info))
    return head + info


def tiff(width: int = 1024, height: int = 768, bits: int = 8, little: bool = True) -> bytes:
    e = "<" if little else ">"
    mark = b"II*\x00" if little else b"MM\x00*"
    entries = [
        struct.pack(e + "HHI", 256, 3, 1) + struct.pack(e + "H", width) + b"\x00\x00",
        struct.pack(e + "HHI", 257, 4, 1) + struct.pack(e + "I", height),
        struct.pack(e + "HHI", 258, 3, 1) + struct.pack(e + "H", bits) + b"\x00\x00",
    ]
    ifd = struct.pack(e + "H", len(entries)) + b"".join(entries) + struct.pack(e + "I", 0)
    return mark + struct.pack(e + "I", 8) + ifd


def _riff_webp(fourcc: bytes, chunk: bytes) -> bytes:
    body = b"WEBP" + fourcc + struct.pack("<I", len(chunk)) + chunk
    return b"RIFF" + struct.pack("<I", len(body)) + body


def webp_lossy(width: int = 320, height: int = 200) -> bytes:
    chunk = b"\x30\x01\x00" + b"\x9d\x01\x2a" + struct.pack("<HH", width, height) + b"\x00" * 8
    return _riff_webp(b"VP8 ", chunk)


def webp_lossless(width: int = 320, height: int = 200) -> bytes:
    bits = (width - 1) | ((height - 1) << 14)
    chunk = b"\x2f" + struct.pack("<I", bits) + b"\x00" * 8
    return _riff_webp(b"VP8L", chunk)


def webp_extended(width: int = 4000, height: int = 3000) -> bytes:
    chunk = b"\x10\x00\x00\x00" + (width - 1).to_bytes(3, "little") + (height - 1).to_bytes(3, "little")
    return _riff_webp(b"VP8X", chunk)


# ----------------------------------------------------------------------------- ISO BMFF
def box(kind: bytes, payload: bytes = b"") -> bytes:
    return struct.pack(">I", 8 + len(payload)) + kind + payload


def large_box(kind: bytes, payload: bytes = b"") -> bytes:
    return struct.pack(">I", 1) + kind + struct.pack(">Q", 16 + len(payload)) + payload


def ftyp(brand: bytes = b"isom", compatible: bytes = b"isomiso2") -> bytes:
    return box(b"ftyp", brand + struct.pack(">I", 0x200) + compatible)


def mvhd(timescale: int = 1000, duration: int = 5000, version: int = 0) -> bytes:
    if version == 1:
        payload = bytes([1, 0, 0, 0]) + b"\x00" * 16 + struct.pack(">IQ", timescale, duration)
    else:
        payload = b"\x00" * 4 + b"\x00" * 8 + struct.pack(">II", timescale, duration)
    return box(b"mvhd", payload + b"\x00" * 80)


def tkhd(width: int = 1920, height: int = 1080) -> bytes:
    payload = bytearray(84)
    payload[76:80] = struct.pack(">I", width << 16)
    payload[80:84] = struct.pack(">I", height << 16)
    return box(b"tkhd", bytes(payload))


def hdlr(handler: bytes) -> bytes:
    return box(b"hdlr", b"\x00" * 8 + handler + b"\x00" * 13)


def stsd(entry: bytes) -> bytes:
    return box(b"stsd", b"\x00" * 4 + struct.pack(">I", 1) + entry)


def mp4a_entry(channels: int = 2, sample_rate: int = 48000) -> bytes:
    payload = bytearray(28)
    payload[16:18] = struct.pack(">H", channels)
    payload[18:20] = struct.pack(">H", 16)
    payload[24:28] = struct.pack(">I", sample_rate << 16)
    return box(b"mp4a", bytes(payload))


def trak(*children: bytes) -> bytes:
    return box(b"trak", b"".join(children))


def video_trak(width: int = 1920, height: int = 1080, entry: bytes = b"avc1") -> bytes:
    stbl = box(b"stbl", stsd(box(entry, b"\x00" * 78)))
    mdia = box(b"mdia", hdlr(b"vide") + box(b"minf", stbl))
    return trak(tkhd(width, height), mdia)


def audio_trak(channels: int = 2, sample_rate: int = 48000) -> bytes:
    stbl = box(b"stbl", stsd(mp4a_entry(channels, sample_rate)))
    mdia = box(b"mdia", hdlr(b"soun") + box(b"minf", stbl))
    return trak(tkhd(0, 0), mdia)


def ispe(width: int, height: int) -> bytes:
    return box(b"ispe", b"\x00" * 4 + struct.pack(">II", width, height))


def pixi(*depths: int) -> bytes:
    return box(b"pixi", b"\x00" * 4 + bytes([len(depths)]) + bytes(depths))


def heif(width: int = 4032, height: int = 3024, depths=(8, 8, 8), brand: bytes = b"heic") -> bytes:
    ipco = box(b"ipco", box(b"hvcC", b"\x00" * 8) + ispe(width, height) + pixi(*depths))
    meta = box(b"meta", b"\x00" * 4 + hdlr(b"pict") + box(b"iprp", ipco + box(b"ipma", b"\x00" * 8)))
    return ftyp(brand, b"mif1heic") + meta + box(b"mdat", b"\x00" * 16)


BUILDERS = SimpleNamespace(
    mp3_frames=mp3_frames,
    mp3_xing_frame=mp3_xing_frame,
    id3v2=id3v2,
    vorbis_ident=vorbis_ident,
    ogg_page=ogg_page,
    wav=wav,
    png=png,
    jpeg=jpeg,
    bmp=bmp,
    tiff=tiff,
    webp_lossy=webp_lossy,
    webp_lossless=webp_lossless,
    webp_extended=webp_extended,
    box=box,
    large_box=large_box,
    ftyp=ftyp,
    mvhd=mvhd,
    tkhd=tkhd,
    hdlr=hdlr,
    stsd=stsd,
    mp4a_entry=mp4a_entry,
    trak=trak,
    video_trak=video_trak,
    audio_trak=audio_trak,
    ispe=ispe,
    pixi=pixi,
    heif=heif,
)


@pytest.fixture()
def media():
    """Namespace of the byte builders above."""
    return BUILDERS


@pytest.fixture()
def write_file(tmp_path):
    """write_file("name.ext", data) -> Path under tmp_path."""
    def _write(name: str, data: bytes) -> Path:
        p = tmp_path / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        return p
    return _write


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    # each test reads settings from its own environment, never from a developer .env
    monkeypatch.chdir(tmp_path)
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()
