# hexprobe/domain/dataclasses/probe_info.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hexprobe.domain.enums.bitrate_mode import BitrateMode
from hexprobe.domain.errors import MalformedInputError


# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AudioProbeInfo:
    """Shared shape of every audio parser result."""
    codec: str
    sample_rate: int
    channels: int
    bitrate_kbps: int
    bitrate_mode: BitrateMode
    duration_millis: int

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise MalformedInputError(f"{self.codec}: sample rate must be positive")
        if self.channels <= 0:
            raise MalformedInputError(f"{self.codec}: channel count must be positive")


@dataclass(frozen=True)
class Mp3ProbeInfo(AudioProbeInfo):
    frame_count: int = 0
    has_vbr_header: bool = False


@dataclass(frozen=True)
class OggProbeInfo(AudioProbeInfo):
    page_count: int = 0
    nominal_bitrate: Optional[int] = None  # bits/s as declared by the ident header


@dataclass(frozen=True)
class WavProbeInfo(AudioProbeInfo):
    bits_per_sample: int = 0
    data_size: int = 0


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ImageProbeInfo:
    width: int
    height: int
    bit_depth: Optional[int]

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise MalformedInputError(f"image dimensions must be positive, got {self.width}x{self.height}")


@dataclass(frozen=True)
class PngProbeInfo(ImageProbeInfo):
    color_type: int = 0


@dataclass(frozen=True)
class JpegProbeInfo(ImageProbeInfo):
    channels: int = 0


@dataclass(frozen=True)
class BmpProbeInfo(ImageProbeInfo):
    dib_header_size: int = 0


@dataclass(frozen=True)
class TiffProbeInfo(ImageProbeInfo):
    little_endian: bool = True


@dataclass(frozen=True)
class WebpProbeInfo(ImageProbeInfo):
    variant: str = ""  # "VP8 " | "VP8L" | "VP8X"


@dataclass(frozen=True)
class HeifProbeInfo(ImageProbeInfo):
    major_brand: str = ""


# ---------------------------------------------------------------------------
# ISO base media (MP4 / M4A)
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Mp4ProbeInfo:
    major_brand: str
    duration_millis: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    video_codec: Optional[str] = None
    audio_codec: Optional[str] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None

    @property
    def has_video(self) -> bool:
        return bool(self.width and self.height)

    @property
    def is_audio_only(self) -> bool:
        return not self.has_video and (self.audio_codec is not None or self.major_brand == "M4A")
