# hexprobe/services/probe/parsers/heif.py
from __future__ import annotations

from typing import Optional

from hexprobe.domain.dataclasses.probe_info import HeifProbeInfo
from hexprobe.domain.errors import MalformedInputError, TruncatedDataError, UnsupportedFormatError
from hexprobe.services.probe.parsers import isobmff
from hexprobe.services.probe.parsers.byte_cursor import ByteCursor

HEIF_BRANDS = frozenset({"heic", "heix", "hevc", "hevx", "mif1", "msf1", "heif", "avif", "avis"})

CONTAINERS = frozenset({
    "meta", "moov", "trak", "mdia", "minf", "stbl", "dinf", "edts", "udta",
    "iprp", "ipco", "iinf", "iref", "grpl", "strk", "meco", "mere",
    "traf", "mvex", "moof", "mfra", "sinf", "schi", "hnti", "hinf", "wave",
    "ilst", "tref", "jp2h", "res ", "ipro", "fiin", "paen", "trgr",
})

MAX_DEPTH = 32
MAX_BOXES = 10_000


def read_ispe(data: bytes, box: isobmff.Box) -> Optional[tuple[int, int]]:
    # full box: version/flags, then width and height
    if box.payload_size < 12:
        return None
    cur = ByteCursor(data, box.payload_start + 4)
    return cur.u32be(), cur.u32be()


def read_pixi_depth(data: bytes, box: isobmff.Box) -> Optional[int]:
    """Smallest positive per-channel bit depth."""
    if box.payload_size < 5:
        return None
    cur = ByteCursor(data, box.payload_start + 4)
    count = cur.u8()
    depths = cur.bytes(min(count, box.end - cur.position))
    positive = [d for d in depths if d > 0]
    return min(positive) if positive else None


def looks_like(data: bytes) -> bool:
    return isobmff.major_brand(data) in HEIF_BRANDS


def parse(data: bytes) -> HeifProbeInfo:
    if len(data) < 12:
        raise TruncatedDataError("heif: too short for an ftyp box")
    brand = isobmff.major_brand(data)
    if brand is None:
        raise MalformedInputError("heif: missing ftyp box")
    if brand not in HEIF_BRANDS:
        raise UnsupportedFormatError(f"heif: unsupported major brand '{brand}'")

    extents = None
    bit_depth = None
    walker = isobmff.walk(data, CONTAINERS, strict=False, max_depth=MAX_DEPTH, max_boxes=MAX_BOXES)
    for box, _ in walker:
        if box.type == "ispe" and extents is None:
            extents = read_ispe(data, box)
        elif box.type == "pixi" and bit_depth is None:
            bit_depth = read_pixi_depth(data, box)
        if extents is not None and bit_depth is not None:
            break

    if extents is None:
        raise MalformedInputError("heif: no ispe (image spatial extents) property")
    width, height = extents
    return HeifProbeInfo(width=width, height=height, bit_depth=bit_depth, major_brand=brand.strip())
