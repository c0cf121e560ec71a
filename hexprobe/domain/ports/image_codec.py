from __future__ import annotations
from pathlib import Path
from typing import Any, Protocol


class ImageCodecPort(Protocol):
    """Pixel decode/encode by file extension (png, jpg, webp, bmp, tiff, heif, ...)."""
    def supports(self, ext: str) -> bool: ...
    def decode(self, path: Path) -> Any: ...
    def encode(self, image: Any, dst: Path, ext: str) -> Path: ...
