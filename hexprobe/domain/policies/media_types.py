# hexprobe/domain/policies/media_types.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from hexprobe.domain.enums.media_format import MediaFormat
from hexprobe.domain.enums.media_type import MediaType

UNKNOWN_MIME = "application/octet-stream"


@dataclass(frozen=True)
class MimeEntry:
    mime_type: str
    media_type: MediaType


UNKNOWN_ENTRY = MimeEntry(UNKNOWN_MIME, MediaType.UNKNOWN)

# Extension -> mime/media type. Anything missing is application/octet-stream / UNKNOWN.
MIME_TABLE: Dict[str, MimeEntry] = {
    "mp4": MimeEntry("video/mp4", MediaType.VIDEO),
    "m4a": MimeEntry("audio/mp4", MediaType.AUDIO),
    "mp3": MimeEntry("audio/mpeg", MediaType.AUDIO),
    "ogg": MimeEntry("audio/ogg", MediaType.AUDIO),
    "wav": MimeEntry("audio/wav", MediaType.AUDIO),
    "png": MimeEntry("image/png", MediaType.IMAGE),
    "jpg": MimeEntry("image/jpeg", MediaType.IMAGE),
    "jpeg": MimeEntry("image/jpeg", MediaType.IMAGE),
    # other families the native parsers understand
    "oga": MimeEntry("audio/ogg", MediaType.AUDIO),
    "m4v": MimeEntry("video/x-m4v", MediaType.VIDEO),
    "mov": MimeEntry("video/quicktime", MediaType.VIDEO),
    "bmp": MimeEntry("image/bmp", MediaType.IMAGE),
    "tif": MimeEntry("image/tiff", MediaType.IMAGE),
    "tiff": MimeEntry("image/tiff", MediaType.IMAGE),
    "webp": MimeEntry("image/webp", MediaType.IMAGE),
    "heic": MimeEntry("image/heic", MediaType.IMAGE),
    "heif": MimeEntry("image/heif", MediaType.IMAGE),
    "avif": MimeEntry("image/avif", MediaType.IMAGE),
}

# Conversion targets need a media type even when nothing can parse them (pcm, flac, mkv...).
TARGET_MEDIA_TYPES: Dict[str, MediaType] = {
    **{ext: MediaType.AUDIO for ext in ("mp3", "ogg", "wav", "pcm", "m4a", "aac", "flac")},
    **{ext: MediaType.VIDEO for ext in ("mp4", "mkv", "mov", "avi", "webm")},
    **{ext: MediaType.IMAGE for ext in ("png", "jpg", "jpeg", "gif", "bmp", "webp", "tif", "tiff", "heif", "heic")},
}

# First entry is the canonical extension reported for content-sniffed files.
FORMAT_EXTENSIONS: Dict[MediaFormat, Tuple[str, ...]] = {
    MediaFormat.MP3: ("mp3",),
    MediaFormat.OGG: ("ogg", "oga"),
    MediaFormat.WAV: ("wav",),
    MediaFormat.PNG: ("png",),
    MediaFormat.JPEG: ("jpg", "jpeg"),
    MediaFormat.MP4: ("mp4", "m4a", "m4v", "mov"),
    MediaFormat.HEIF: ("heic", "heif", "avif"),
    MediaFormat.BMP: ("bmp",),
    MediaFormat.TIFF: ("tif", "tiff"),
    MediaFormat.WEBP: ("webp",),
}


def extension_of(path: Union[str, Path]) -> str:
    """Lower-cased text after the last '.' of the file name; '' when there is none."""
    name = Path(path).name
    idx = name.rfind(".")
    return name[idx + 1:].lower() if idx >= 0 else ""


def mime_for(ext: str) -> MimeEntry:
    return MIME_TABLE.get((ext or "").lower(), UNKNOWN_ENTRY)


def media_type_for_target(ext: str) -> MediaType:
    ext = (ext or "").lower()
    if ext in TARGET_MEDIA_TYPES:
        return TARGET_MEDIA_TYPES[ext]
    return mime_for(ext).media_type


def format_for_extension(ext: str) -> Optional[MediaFormat]:
    ext = (ext or "").lower()
    for fmt, exts in FORMAT_EXTENSIONS.items():
        if ext in exts:
            return fmt
    return None


def output_extension(fmt: MediaFormat, ext: str, *, audio_only: bool = False) -> str:
    """
    Extension to report for a file parsed as ``fmt``. The caller's own
    extension wins when it belongs to the same family (jpeg stays jpeg,
    an audio-only .mp4 stays mp4); otherwise the family's canonical one is
    used, with sniffed ISO BMFF files split into m4a or mp4 by ``audio_only``.
    """
    exts = FORMAT_EXTENSIONS[fmt]
    if ext in exts:
        return ext
    if fmt is MediaFormat.MP4:
        return "m4a" if audio_only else "mp4"
    return exts[0]
