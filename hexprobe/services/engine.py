# hexprobe/services/engine.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from hexprobe.common.logging import get_logger
from hexprobe.common.settings import get_settings
from hexprobe.domain.dataclasses.reports import ProbeReport
from hexprobe.domain.entities.conversion import ConversionOptions, ConversionRequest, ConversionResult
from hexprobe.domain.entities.extraction import AudioExtractOptions
from hexprobe.domain.entities.playback import PlaybackOptions, PlaybackResult
from hexprobe.domain.entities.probe import ProbeResult
from hexprobe.domain.entities.validation import ValidationOptions, ValidationResult
from hexprobe.domain.enums.media_type import MediaType
from hexprobe.domain.errors import (
    IOFailureError,
    NotFoundError,
    UnsupportedConversionRouteError,
    UnsupportedFormatError,
)
from hexprobe.domain.policies.media_types import extension_of, media_type_for_target
from hexprobe.domain.ports.files import FileOpsPort
from hexprobe.domain.ports.metadata import MetadataStorePort
from hexprobe.domain.ports.playback import PlayerPort
from hexprobe.services.convert.hub import ConversionHub
from hexprobe.services.filesystem.local_file_ops import LocalFileOps
from hexprobe.services.metadata.sidecar_store import JsonSidecarStore
from hexprobe.services.playback.launcher import SystemOpener
from hexprobe.services.probe.batch import BatchItem, ProbeBatchService
from hexprobe.services.probe.native_adapter import NativeProbeAdapter
from hexprobe.services.validation.service import ValidationService

logger = get_logger(__name__)


class MediaEngine:
    """
    Facade over the probe, conversion, validation, metadata and playback
    services. Every collaborator can be injected; defaults are the local
    implementations.
    """

    def __init__(
        self,
        file_ops: Optional[FileOpsPort] = None,
        prober: Optional[NativeProbeAdapter] = None,
        hub: Optional[ConversionHub] = None,
        metadata_store: Optional[MetadataStorePort] = None,
        player: Optional[PlayerPort] = None,
    ):
        self.file_ops = file_ops or LocalFileOps()
        self.prober = prober or NativeProbeAdapter(self.file_ops)
        self.hub = hub or ConversionHub(file_ops=self.file_ops)
        self.metadata_store = metadata_store or JsonSidecarStore()
        self.player = player or SystemOpener()
        self.validator = ValidationService(self.prober, self.file_ops)

    # ---- probing --------------------------------------------------------------
    def probe(self, path: Path | str) -> ProbeResult:
        return self.prober.probe(Path(path))

    def get(self, path: Path | str) -> ProbeResult:
        return self.probe(path)

    def probe_many(self, paths: Iterable[Path | str], max_workers: Optional[int] = None) -> Tuple[List[BatchItem], ProbeReport]:
        return ProbeBatchService(self.prober, max_workers=max_workers).run(paths)

    def validate(self, path: Path | str, options: Optional[ValidationOptions] = None) -> ValidationResult:
        return self.validator.validate(Path(path), options)

    # ---- conversion -----------------------------------------------------------
    def convert(
        self, input: Path | str, output: Path | str, options: Optional[ConversionOptions] = None
    ) -> ConversionResult:
        if not output:
            raise ValueError("output is required")
        src, dst = Path(input), Path(output)
        if not self.file_ops.file_exists(src):
            raise NotFoundError("Input file does not exist", path=src)
        if options is None:
            target = extension_of(dst)
            if not target:
                raise ValueError("target format is required (output has no extension)")
            cfg = get_settings().conversion
            options = ConversionOptions(target_format=target, preset=cfg.default_preset, overwrite=cfg.overwrite)

        # the route comes from the parsed content; the passthrough check uses the file name
        source = self.probe(src)
        request = ConversionRequest(
            input=src,
            output=dst,
            source_extension=extension_of(src),
            target_extension=options.target_format,
            source_media_type=source.media_type,
            target_media_type=media_type_for_target(options.target_format),
            options=options,
        )
        return self.hub.convert(request)

    def extract_audio(
        self, input: Path | str, output_dir: Path | str, options: Optional[AudioExtractOptions] = None
    ) -> ConversionResult:
        """Copy-only: the audio stream is written out as-is, no transcoding."""
        options = options or AudioExtractOptions()
        src = Path(input)
        source = self.probe(src)
        if source.media_type != MediaType.AUDIO:
            raise UnsupportedConversionRouteError(
                f"Audio extraction from {source.media_type} input is not implemented yet", path=src
            )
        wanted = (options.format or source.extension).lower().lstrip(".")
        if wanted != source.extension:
            raise UnsupportedConversionRouteError(
                f"Audio extraction only copies the source format ({source.extension}), requested {wanted}",
                path=src,
            )
        out = Path(output_dir) / f"{src.stem}_audio.{wanted}"
        out = self.file_ops.copy_file(src, out, overwrite=options.overwrite)
        return ConversionResult(output_file=out, format=wanted, reencoded=False)

    # ---- metadata -------------------------------------------------------------
    def read_metadata(self, path: Path | str) -> Dict[str, str]:
        result = self.probe(path)
        merged = dict(self.metadata_store.read(Path(path)))
        merged.update({
            "mimeType": result.mime_type,
            "extension": result.extension,
            "mediaType": str(result.media_type),
        })
        return merged

    def write_metadata(self, path: Path | str, entries: Mapping[str, str]) -> None:
        p = Path(path)
        if not self.file_ops.file_exists(p):
            raise NotFoundError("File does not exist", path=p)
        clean: Dict[str, str] = {}
        for key, value in entries.items():
            if not isinstance(key, str) or not key.strip():
                raise ValueError("metadata keys must be non-blank strings")
            if value is None:
                raise ValueError(f"metadata value for '{key}' is missing")
            clean[key.strip()] = str(value)
        self.metadata_store.write(p, clean)

    # ---- playback -------------------------------------------------------------
    def play(self, path: Path | str, options: Optional[PlaybackOptions] = None) -> PlaybackResult:
        options = options or PlaybackOptions()
        p = Path(path)
        result = self.probe(p)
        if result.media_type == MediaType.UNKNOWN:
            raise UnsupportedFormatError("Playback is not supported for unknown media types", path=p)
        if options.dry_run:
            return PlaybackResult(started=False, backend="dry-run", media_type=result.media_type,
                                  message=f"Would open {p.name} with {self.player.backend}")
        if not options.allow_external_app:
            return PlaybackResult(started=False, backend="none", media_type=result.media_type,
                                  message="External applications are disabled")
        if not self.player.available():
            raise IOFailureError(f"No playback backend available ({self.player.backend})", path=p)
        self.player.open(p)
        return PlaybackResult(started=True, backend=self.player.backend, media_type=result.media_type)
