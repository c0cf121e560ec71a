# hexprobe/services/metadata/sidecar_store.py
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Dict, Mapping, Optional

from hexprobe.common.settings import get_settings
from hexprobe.domain.errors import IOFailureError, MalformedInputError
from hexprobe.domain.ports.metadata import MetadataStorePort


class JsonSidecarStore(MetadataStorePort):
    """
    Key/value metadata kept next to the media file as ``<name><suffix>``
    (e.g. ``song.mp3.meta.json``). Writes replace the whole sidecar atomically.
    """

    def __init__(self, suffix: Optional[str] = None):
        self.suffix = suffix or get_settings().metadata.sidecar_suffix

    def sidecar_path(self, media: Path) -> Path:
        media = Path(media)
        return media.with_name(media.name + self.suffix)

    def read(self, media: Path) -> Dict[str, str]:
        side = self.sidecar_path(media)
        if not side.is_file():
            return {}
        try:
            raw = json.loads(side.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Sidecar is not valid JSON: {e}", path=side) from e
        except OSError as e:
            raise IOFailureError(f"Cannot read sidecar: {e}", path=side) from e
        if not isinstance(raw, dict):
            raise MalformedInputError("Sidecar must hold a JSON object", path=side)
        return {str(k): str(v) for k, v in raw.items()}

    def write(self, media: Path, entries: Mapping[str, str]) -> None:
        side = self.sidecar_path(media)
        payload = json.dumps(dict(sorted(entries.items())), indent=2, ensure_ascii=False)
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", suffix=".tmp", delete=False, dir=str(side.parent)
            ) as tf:
                tf.write(payload + "\n")
                tmp = Path(tf.name)
            os.replace(tmp, side)
        except OSError as e:
            raise IOFailureError(f"Cannot write sidecar: {e}", path=side) from e
