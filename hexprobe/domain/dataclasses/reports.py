# hexprobe/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (path, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def _merge_timing(self, other: "BaseReport") -> None:
        # earliest start, latest finish
        if self.started_at is None or (other.started_at and other.started_at < self.started_at):
            self.started_at = other.started_at
        if other.finished_at and (self.finished_at is None or other.finished_at > self.finished_at):
            self.finished_at = other.finished_at


@dataclass
class ProbeReport(BaseReport):
    planned: int = 0
    probed_ok: int = 0
    degraded: int = 0          # identified by extension/magic, header unreadable
    not_supported: int = 0     # no parser recognized the file
    missing_files: int = 0
    errors: int = 0

    def merge(self, other: "ProbeReport") -> "ProbeReport":
        self.planned += other.planned
        self.probed_ok += other.probed_ok
        self.degraded += other.degraded
        self.not_supported += other.not_supported
        self.missing_files += other.missing_files
        self.errors += other.errors
        self.error_details.extend(other.error_details)
        self._merge_timing(other)
        return self
