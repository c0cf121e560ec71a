# hexprobe/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from hexprobe.domain.enums.media_type import MediaType
from hexprobe.domain.enums.stream_kind import StreamKind


@dataclass(frozen=True)
class StreamInfo:
    """One elementary stream. Numeric fields are either unknown (None) or strictly positive."""
    index: int
    kind: StreamKind
    codec: str
    bitrate_kbps: Optional[int] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[float] = None

    def __post_init__(self):
        if self.index < 0:
            raise ValueError("index must be >= 0")
        if not self.codec:
            raise ValueError("codec is required")
        for name in ("bitrate_kbps", "sample_rate", "channels", "width", "height", "frame_rate"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be > 0 when set")


@dataclass(frozen=True)
class ProbeResult:
    """Normalized outcome of probing one file."""
    input: Path
    mime_type: str
    extension: str
    media_type: MediaType
    duration_millis: Optional[int] = None
    streams: Tuple[StreamInfo, ...] = ()
    tags: Dict[str, str] = field(default_factory=dict)

    @property
    def size_bytes(self) -> Optional[int]:
        raw = self.tags.get("sizeBytes")
        return int(raw) if raw is not None else None

    @property
    def is_degraded(self) -> bool:
        """True when only the extension/magic family is known (no stream was parsed)."""
        return not self.streams and self.duration_millis is None

    @property
    def primary_stream(self) -> Optional[StreamInfo]:
        return self.streams[0] if self.streams else None
