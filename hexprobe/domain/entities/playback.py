# hexprobe/domain/entities/playback.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from hexprobe.domain.enums.media_type import MediaType


@dataclass(frozen=True)
class PlaybackOptions:
    dry_run: bool = False
    allow_external_app: bool = True


@dataclass(frozen=True)
class PlaybackResult:
    started: bool
    backend: str
    media_type: MediaType
    message: Optional[str] = None
