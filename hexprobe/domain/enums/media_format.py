from __future__ import annotations
from enum import StrEnum


class MediaFormat(StrEnum):
    """Format families with a native parser."""
    MP3 = "mp3"
    OGG = "ogg"
    WAV = "wav"
    PNG = "png"
    JPEG = "jpeg"
    MP4 = "mp4"
    HEIF = "heif"
    BMP = "bmp"
    TIFF = "tiff"
    WEBP = "webp"
