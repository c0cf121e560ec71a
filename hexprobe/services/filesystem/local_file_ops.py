from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from hexprobe.domain.errors import IOFailureError, NotFoundError, OutputConflictError
from hexprobe.domain.ports.files import FileOpsPort


class LocalFileOps(FileOpsPort):
    """
    Local filesystem implementation for FileOpsPort. OS errors surface as
    IOFailureError, missing inputs as NotFoundError.
    """

    def ensure_dir(self, path: Path) -> None:
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise IOFailureError(f"Cannot create directory: {e}", path=path) from e

    def file_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def size_of(self, path: Path) -> int:
        p = Path(path)
        if not p.is_file():
            raise NotFoundError("File does not exist", path=p)
        try:
            return p.stat().st_size
        except OSError as e:
            raise IOFailureError(f"Cannot stat file: {e}", path=p) from e

    def read_bytes(self, path: Path, *, max_bytes: Optional[int] = None) -> bytes:
        """Whole file into memory; with ``max_bytes`` the size is checked before reading."""
        p = Path(path)
        if max_bytes is not None:
            size = self.size_of(p)
            if size > max_bytes:
                raise IOFailureError(f"File is {size} bytes, limit is {max_bytes}", path=p)
        elif not p.is_file():
            raise NotFoundError("File does not exist", path=p)
        try:
            return p.read_bytes()
        except OSError as e:
            raise IOFailureError(f"Cannot read file: {e}", path=p) from e

    def prepare_output(self, dst: Path, *, overwrite: bool) -> None:
        """Create the parent directory; refuse an existing destination unless overwriting."""
        dst_p = Path(dst)
        if dst_p.exists() and not overwrite:
            raise OutputConflictError("Output already exists and overwrite is disabled", path=dst_p)
        self.ensure_dir(dst_p.parent)

    def copy_file(self, src: Path, dst: Path, *, overwrite: bool = False) -> Path:
        src_p = Path(src)
        dst_p = Path(dst)
        if not src_p.is_file():
            raise NotFoundError("Source file does not exist", path=src_p)
        self.prepare_output(dst_p, overwrite=overwrite)
        if src_p.resolve() == dst_p.resolve():
            return dst_p
        tmp = self.temp_sibling(dst_p)
        try:
            shutil.copyfile(src_p, tmp)
            os.replace(tmp, dst_p)
        except OSError as e:
            raise IOFailureError(f"Copy failed: {e}", path=dst_p) from e
        finally:
            tmp.unlink(missing_ok=True)
        return dst_p

    def temp_sibling(self, dst: Path) -> Path:
        """Empty temp file next to ``dst`` so a later os.replace stays on one filesystem."""
        dst_p = Path(dst)
        try:
            with tempfile.NamedTemporaryFile("wb", suffix=dst_p.suffix, delete=False, dir=str(dst_p.parent)) as tf:
                return Path(tf.name)
        except OSError as e:
            raise IOFailureError(f"Cannot create temp file: {e}", path=dst_p) from e
