# hexprobe/services/probe/registry.py
"""
Closed dispatch table: one entry per MediaFormat with its magic check, its
parser and the function that turns parser output into ProbeResult parts.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from hexprobe.domain.dataclasses.probe_info import (
    AudioProbeInfo,
    ImageProbeInfo,
    JpegProbeInfo,
    Mp4ProbeInfo,
    PngProbeInfo,
    WavProbeInfo,
)
from hexprobe.domain.entities.probe import StreamInfo
from hexprobe.domain.enums.media_format import MediaFormat
from hexprobe.domain.enums.stream_kind import StreamKind
from hexprobe.services.probe.parsers import bmp, heif, jpeg, mp3, mp4, ogg, png, tiff, wav, webp

DEFAULT_MP4_VIDEO_CODEC = "h264/unknown"


@dataclass(frozen=True)
class Description:
    duration_millis: Optional[int] = None
    stream: Optional[StreamInfo] = None
    tags: Dict[str, str] = field(default_factory=dict)
    audio_only: bool = False


@dataclass(frozen=True)
class FormatHandler:
    format: MediaFormat
    looks_like: Callable[[bytes], bool]
    parse: Callable[[bytes], Any]
    describe: Callable[[Any], Description]


def _positive(value: Optional[int]) -> Optional[int]:
    return value if value is not None and value > 0 else None


def describe_audio(info: AudioProbeInfo) -> Description:
    tags = {"bitrateMode": str(info.bitrate_mode)}
    if isinstance(info, WavProbeInfo):
        tags["bitsPerSample"] = str(info.bits_per_sample)
    stream = StreamInfo(
        index=0,
        kind=StreamKind.AUDIO,
        codec=info.codec,
        bitrate_kbps=_positive(info.bitrate_kbps),
        sample_rate=info.sample_rate,
        channels=info.channels,
    )
    return Description(duration_millis=_positive(info.duration_millis), stream=stream, tags=tags, audio_only=True)


def _image_describer(codec: str) -> Callable[[ImageProbeInfo], Description]:
    def describe(info: ImageProbeInfo) -> Description:
        tags: Dict[str, str] = {}
        if isinstance(info, JpegProbeInfo):
            tags["bitsPerSample"] = str(info.bit_depth)
            tags["channels"] = str(info.channels)
        elif info.bit_depth:
            tags["bitDepth"] = str(info.bit_depth)
        if isinstance(info, PngProbeInfo):
            tags["colorType"] = str(info.color_type)
        brand = getattr(info, "major_brand", None)
        if brand:
            tags["majorBrand"] = brand
        # still images are reported as a single video-kind stream
        stream = StreamInfo(index=0, kind=StreamKind.VIDEO, codec=codec, width=info.width, height=info.height)
        return Description(stream=stream, tags=tags)
    return describe


def describe_mp4(info: Mp4ProbeInfo) -> Description:
    tags = {"majorBrand": info.major_brand} if info.major_brand else {}
    duration = _positive(info.duration_millis)
    if info.has_video:
        stream = StreamInfo(
            index=0,
            kind=StreamKind.VIDEO,
            codec=info.video_codec or DEFAULT_MP4_VIDEO_CODEC,
            width=info.width,
            height=info.height,
        )
        return Description(duration_millis=duration, stream=stream, tags=tags)
    if info.is_audio_only:
        stream = None
        if info.audio_codec:
            stream = StreamInfo(
                index=0,
                kind=StreamKind.AUDIO,
                codec=info.audio_codec,
                sample_rate=_positive(info.sample_rate),
                channels=_positive(info.channels),
            )
        return Description(duration_millis=duration, stream=stream, tags=tags, audio_only=True)
    return Description(duration_millis=duration, tags=tags)


HANDLERS: Dict[MediaFormat, FormatHandler] = {
    MediaFormat.MP3: FormatHandler(MediaFormat.MP3, mp3.looks_like, mp3.parse, describe_audio),
    MediaFormat.OGG: FormatHandler(MediaFormat.OGG, ogg.looks_like, ogg.parse, describe_audio),
    MediaFormat.WAV: FormatHandler(MediaFormat.WAV, wav.looks_like, wav.parse, describe_audio),
    MediaFormat.PNG: FormatHandler(MediaFormat.PNG, png.looks_like, png.parse, _image_describer("png")),
    MediaFormat.JPEG: FormatHandler(MediaFormat.JPEG, jpeg.looks_like, jpeg.parse, _image_describer("jpeg")),
    MediaFormat.MP4: FormatHandler(MediaFormat.MP4, mp4.looks_like, mp4.parse, describe_mp4),
    MediaFormat.HEIF: FormatHandler(MediaFormat.HEIF, heif.looks_like, heif.parse, _image_describer("heif")),
    MediaFormat.BMP: FormatHandler(MediaFormat.BMP, bmp.looks_like, bmp.parse, _image_describer("bmp")),
    MediaFormat.TIFF: FormatHandler(MediaFormat.TIFF, tiff.looks_like, tiff.parse, _image_describer("tiff")),
    MediaFormat.WEBP: FormatHandler(MediaFormat.WEBP, webp.looks_like, webp.parse, _image_describer("webp")),
}


def handler_for(fmt: MediaFormat) -> FormatHandler:
    return HANDLERS[fmt]
