# hexprobe/domain/entities/extraction.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AudioExtractOptions:
    format: Optional[str] = None  # None -> keep the source extension
    overwrite: bool = False
