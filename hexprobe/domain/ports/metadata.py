from __future__ import annotations
from pathlib import Path
from typing import Dict, Mapping, Protocol


class MetadataStorePort(Protocol):
    def read(self, media: Path) -> Dict[str, str]: ...
    def write(self, media: Path, entries: Mapping[str, str]) -> None: ...
