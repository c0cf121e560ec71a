# services/schemas/probe.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import Field

from hexprobe.domain.enums.media_type import MediaType
from hexprobe.domain.enums.stream_kind import StreamKind
from hexprobe.services.schemas.base import CamelModel


class ProbeRequest(CamelModel):
    path: str = Field(..., description="Absolute path of the file to probe", examples=["/data/in/song.mp3"])


class BatchProbeRequest(CamelModel):
    paths: List[str] = Field(..., min_length=1)
    max_workers: Optional[int] = Field(None, ge=1, le=64)


class StreamInfoSchema(CamelModel):
    index: int
    kind: StreamKind
    codec: str
    bitrate_kbps: Optional[int] = None
    sample_rate: Optional[int] = None
    channels: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    frame_rate: Optional[float] = None


class ProbeResultSchema(CamelModel):
    input: str
    mime_type: str = Field(..., examples=["audio/mpeg"])
    extension: str = Field(..., examples=["mp3"])
    media_type: MediaType
    duration_millis: Optional[int] = None
    streams: List[StreamInfoSchema] = Field(default_factory=list)
    tags: Dict[str, str] = Field(default_factory=dict)


class BatchProbeItem(CamelModel):
    path: str
    result: Optional[ProbeResultSchema] = None
    error_kind: Optional[str] = None
    error: Optional[str] = None


class BatchProbeResponse(CamelModel):
    ok: bool
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    planned: int
    probed_ok: int
    degraded: int
    not_supported: int
    missing_files: int
    errors: int
    items: List[BatchProbeItem] = Field(default_factory=list)
