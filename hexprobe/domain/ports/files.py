from __future__ import annotations
from pathlib import Path
from typing import Optional, Protocol


class FileOpsPort(Protocol):
    def ensure_dir(self, p: Path) -> None: ...
    def file_exists(self, p: Path) -> bool: ...
    def size_of(self, p: Path) -> int: ...
    def read_bytes(self, p: Path, *, max_bytes: Optional[int] = None) -> bytes: ...
    def prepare_output(self, dst: Path, *, overwrite: bool) -> None: ...
    def copy_file(self, src: Path, dst: Path, *, overwrite: bool) -> Path: ...
