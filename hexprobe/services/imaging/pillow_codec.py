from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from hexprobe.common.logging import get_logger
from hexprobe.common.settings import get_settings
from hexprobe.domain.errors import IOFailureError, MalformedInputError, UnsupportedConversionRouteError
from hexprobe.domain.ports.image_codec import ImageCodecPort

logger = get_logger(__name__)

# extension -> Pillow format name
PIL_FORMATS: Dict[str, str] = {
    "png": "PNG",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "webp": "WEBP",
    "bmp": "BMP",
    "tif": "TIFF",
    "tiff": "TIFF",
    "heif": "HEIF",
    "heic": "HEIF",
}


def _safe_replace(src: Path, dst: Path) -> None:
    os.replace(str(src), str(dst))


class PillowImageCodec(ImageCodecPort):
    """
    Pixel decode/encode through Pillow. HEIF/HEIC only work when a Pillow
    HEIF plugin has registered the format.
    """

    def __init__(self, jpeg_quality: Optional[int] = None, webp_quality: Optional[int] = None):
        cfg = get_settings().conversion
        self.jpeg_quality = int(jpeg_quality or cfg.jpeg_quality)
        self.webp_quality = int(webp_quality or cfg.webp_quality)

    def supports(self, ext: str) -> bool:
        fmt = PIL_FORMATS.get((ext or "").lower())
        if fmt is None:
            return False
        Image.init()
        return fmt in Image.SAVE and fmt in Image.OPEN

    def decode(self, path: Path) -> Image.Image:
        try:
            with Image.open(path) as im:
                im.load()
                img = im.copy()
        except UnidentifiedImageError as e:
            raise MalformedInputError(f"Cannot decode image: {e}", path=path) from e
        except OSError as e:
            raise IOFailureError(f"Cannot read image: {e}", path=path) from e
        if img.width <= 0 or img.height <= 0:
            raise MalformedInputError("Decoded image has no pixels", path=path)
        return img

    def encode(self, image: Image.Image, dst: Path, ext: str) -> Path:
        ext = (ext or "").lower()
        if not self.supports(ext):
            raise UnsupportedConversionRouteError(f"Image encoding to '{ext}' is not available", path=dst)
        dst = Path(dst)
        dst.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile("wb", suffix=f".{ext}", delete=False, dir=str(dst.parent)) as tf:
            tmp_out = Path(tf.name)
        try:
            self._pillow_save(image, tmp_out, ext)
            _safe_replace(tmp_out, dst)
        except OSError as e:
            raise IOFailureError(f"Cannot write image: {e}", path=dst) from e
        finally:
            tmp_out.unlink(missing_ok=True)
        logger.debug("encoded %dx%d image to %s", image.width, image.height, dst)
        return dst

    def _pillow_save(self, img: Image.Image, path: Path, ext: str) -> None:
        fmt = PIL_FORMATS[ext]
        if fmt == "PNG":
            img.save(path, format="PNG", optimize=True)
        elif fmt == "JPEG":
            if img.mode not in ("RGB", "L"):
                img = img.convert("RGB")
            img.save(path, format="JPEG", quality=self.jpeg_quality, subsampling=0, optimize=True)
        elif fmt == "WEBP":
            img.save(path, format="WEBP", quality=self.webp_quality, method=6)
        elif fmt == "BMP":
            if img.mode not in ("1", "L", "P", "RGB"):
                img = img.convert("RGB")
            img.save(path, format="BMP")
        else:
            img.save(path, format=fmt)
