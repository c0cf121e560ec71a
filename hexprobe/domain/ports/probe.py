from __future__ import annotations
from pathlib import Path
from typing import Protocol
from hexprobe.domain.entities.probe import ProbeResult


class MediaProbePort(Protocol):
    def probe(self, path: Path) -> ProbeResult: ...
