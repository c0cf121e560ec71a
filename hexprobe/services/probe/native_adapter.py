# hexprobe/services/probe/native_adapter.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from hexprobe.common.logging import get_logger
from hexprobe.common.settings import get_settings
from hexprobe.domain.entities.probe import ProbeResult
from hexprobe.domain.enums.media_format import MediaFormat
from hexprobe.domain.errors import (
    RECOVERABLE_PARSE_ERRORS,
    IOFailureError,
    NotFoundError,
    UnsupportedFormatError,
)
from hexprobe.domain.policies.media_types import extension_of, format_for_extension, mime_for, output_extension
from hexprobe.domain.ports.files import FileOpsPort
from hexprobe.domain.ports.probe import MediaProbePort
from hexprobe.services.filesystem.local_file_ops import LocalFileOps
from hexprobe.services.probe.registry import HANDLERS, Description
from hexprobe.services.probe.sniffer import candidates

logger = get_logger(__name__)


class NativeProbeAdapter(MediaProbePort):
    """
    MediaProbePort implemented with the in-process header parsers; no
    external decoder is involved. Stateless, safe to share across threads.
    """

    def __init__(self, file_ops: Optional[FileOpsPort] = None):
        self.file_ops = file_ops or LocalFileOps()

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> ProbeResult:
        if not path:
            raise ValueError("No path provided to probe().")
        path = Path(path)
        if not self.file_ops.file_exists(path):
            raise NotFoundError("File does not exist", path=path)

        data = self.file_ops.read_bytes(path)
        ext = extension_of(path)
        size_tag = {"sizeBytes": str(len(data))}

        identified: Optional[MediaFormat] = None
        for fmt in candidates(data, ext):
            identified = identified or fmt
            handler = HANDLERS[fmt]
            try:
                info = handler.parse(data)
            except RECOVERABLE_PARSE_ERRORS as e:
                logger.debug("probe %s: %s parser gave up: %s", path, fmt, e)
                continue
            return self._full_result(path, ext, fmt, handler.describe(info), size_tag)

        if identified is not None:
            logger.info("probe %s: header unreadable, reporting %s from name/magic only", path, identified)
            return self._minimal_result(path, ext, identified, size_tag)

        entry = mime_for(ext)
        return ProbeResult(
            input=path,
            mime_type=entry.mime_type,
            extension=ext,
            media_type=entry.media_type,
            tags=dict(size_tag),
        )

    def get(self, path: Path) -> ProbeResult:
        return self.probe(path)

    def parse_strict(self, path: Path, *, max_bytes: Optional[int] = None) -> Any:
        """
        Parse by extension only and let parse errors propagate unchanged.
        The size ceiling is checked before the file is read.
        """
        path = Path(path)
        cap = get_settings().probe.strict_max_bytes
        if max_bytes is not None:
            cap = min(cap, max_bytes)
        size = self.file_ops.size_of(path)
        if size > cap:
            raise IOFailureError(f"Strict validation is limited to files <= {cap} bytes (got {size})", path=path)
        ext = extension_of(path)
        fmt = format_for_extension(ext)
        if fmt is None:
            raise UnsupportedFormatError(f"No strict parser for extension '{ext}'", path=path)
        return HANDLERS[fmt].parse(self.file_ops.read_bytes(path))

    # ---- helpers --------------------------------------------------------------
    @staticmethod
    def _full_result(
        path: Path, ext: str, fmt: MediaFormat, desc: Description, size_tag: Dict[str, str]
    ) -> ProbeResult:
        out_ext = output_extension(fmt, ext, audio_only=desc.audio_only)
        entry = mime_for(out_ext)
        return ProbeResult(
            input=path,
            mime_type=entry.mime_type,
            extension=out_ext,
            media_type=entry.media_type,
            duration_millis=desc.duration_millis,
            streams=(desc.stream,) if desc.stream is not None else (),
            tags={**size_tag, **desc.tags},
        )

    @staticmethod
    def _minimal_result(path: Path, ext: str, fmt: MediaFormat, size_tag: Dict[str, str]) -> ProbeResult:
        out_ext = output_extension(fmt, ext, audio_only=ext == "m4a")
        entry = mime_for(out_ext)
        return ProbeResult(
            input=path,
            mime_type=entry.mime_type,
            extension=out_ext,
            media_type=entry.media_type,
            tags=dict(size_tag),
        )
