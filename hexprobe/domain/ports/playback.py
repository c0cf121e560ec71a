from __future__ import annotations
from pathlib import Path
from typing import Protocol


class PlayerPort(Protocol):
    backend: str
    def available(self) -> bool: ...
    def open(self, path: Path) -> None: ...
