# hexprobe/services/probe/sniffer.py
from __future__ import annotations

from typing import List, Optional

from hexprobe.domain.enums.media_format import MediaFormat
from hexprobe.domain.policies.media_types import format_for_extension
from hexprobe.services.probe.registry import HANDLERS

# Strong signatures first; MPEG frame sync is two bytes of bit pattern and goes last.
SNIFF_ORDER = (
    MediaFormat.PNG,
    MediaFormat.JPEG,
    MediaFormat.OGG,
    MediaFormat.WAV,
    MediaFormat.WEBP,
    MediaFormat.HEIF,
    MediaFormat.MP4,
    MediaFormat.TIFF,
    MediaFormat.BMP,
    MediaFormat.MP3,
)


def sniff(data: bytes) -> Optional[MediaFormat]:
    """Format family suggested by the leading magic bytes, if any."""
    for fmt in SNIFF_ORDER:
        if HANDLERS[fmt].looks_like(data):
            return fmt
    return None


def candidates(data: bytes, ext: str) -> List[MediaFormat]:
    """Formats to try, in order: the extension's family, then the sniffed one when different."""
    out: List[MediaFormat] = []
    by_ext = format_for_extension(ext)
    if by_ext is not None:
        out.append(by_ext)
    sniffed = sniff(data)
    if sniffed is not None and sniffed not in out:
        out.append(sniffed)
    return out
