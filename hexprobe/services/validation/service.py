# hexprobe/services/validation/service.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from hexprobe.common.logging import get_logger
from hexprobe.common.settings import get_settings
from hexprobe.domain.entities.validation import ValidationOptions, ValidationResult
from hexprobe.domain.errors import ParseError, UnsupportedFormatError
from hexprobe.domain.policies.media_types import extension_of, format_for_extension
from hexprobe.domain.ports.files import FileOpsPort
from hexprobe.services.filesystem.local_file_ops import LocalFileOps
from hexprobe.services.probe.native_adapter import NativeProbeAdapter

logger = get_logger(__name__)


class ValidationService:
    """
    Cheap checks (exists, size) and, in strict mode, a full header parse by
    extension. Parser messages are reported verbatim in ``errors``.
    """

    def __init__(self, prober: Optional[NativeProbeAdapter] = None, file_ops: Optional[FileOpsPort] = None):
        self.file_ops = file_ops or LocalFileOps()
        self.prober = prober or NativeProbeAdapter(self.file_ops)

    def validate(self, path: Path, options: Optional[ValidationOptions] = None) -> ValidationResult:
        options = options or ValidationOptions()
        cfg = get_settings().probe
        path = Path(path)
        warnings: List[str] = []

        if not self.file_ops.file_exists(path):
            return ValidationResult(valid=False, errors=[f"File does not exist: {path}"])

        size = self.file_ops.size_of(path)
        max_bytes = options.max_bytes or cfg.validation_max_bytes
        if size > max_bytes:
            return ValidationResult(valid=False, errors=[f"File exceeds maxBytes: {size} > {max_bytes}"])
        if size == 0:
            warnings.append("File is empty")
        if not options.strict:
            return ValidationResult(valid=True, warnings=warnings)

        # checked before anything is read into memory
        if size > cfg.strict_max_bytes:
            return ValidationResult(
                valid=False,
                warnings=warnings,
                errors=[f"Strict validation is limited to files <= {cfg.strict_max_bytes} bytes"],
            )
        ext = extension_of(path)
        if format_for_extension(ext) is None:
            warnings.append(f"No strict parser for extension '{ext}'")
            return ValidationResult(valid=True, warnings=warnings)
        try:
            self.prober.parse_strict(path, max_bytes=max_bytes)
        except (ParseError, UnsupportedFormatError) as e:
            logger.info("strict validation failed for %s: %s", path, e.message)
            return ValidationResult(valid=False, warnings=warnings, errors=[e.message])
        return ValidationResult(valid=True, warnings=warnings)
