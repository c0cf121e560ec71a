# hexprobe/domain/entities/validation.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ValidationOptions:
    strict: bool = False
    max_bytes: Optional[int] = None  # None -> configured default

    def __post_init__(self):
        if self.max_bytes is not None and self.max_bytes <= 0:
            raise ValueError("max_bytes must be > 0")


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
