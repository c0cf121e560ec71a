# hexprobe/domain/entities/conversion.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from hexprobe.common.strings.splitters import normalize_ext
from hexprobe.domain.enums.media_type import MediaType


@dataclass(frozen=True)
class ConversionOptions:
    target_format: str
    preset: str = "balanced"
    overwrite: bool = False

    def __post_init__(self):
        object.__setattr__(self, "target_format", normalize_ext(self.target_format))
        if not self.target_format:
            raise ValueError("target_format is required")


@dataclass(frozen=True)
class ConversionRequest:
    input: Path
    output: Path
    source_extension: str
    target_extension: str
    source_media_type: MediaType
    target_media_type: MediaType
    options: ConversionOptions

    def __post_init__(self):
        object.__setattr__(self, "input", Path(self.input))
        object.__setattr__(self, "output", Path(self.output))
        object.__setattr__(self, "source_extension", normalize_ext(self.source_extension))
        object.__setattr__(self, "target_extension", normalize_ext(self.target_extension))

    @property
    def same_extension(self) -> bool:
        return self.source_extension == self.target_extension


@dataclass(frozen=True)
class ConversionResult:
    output_file: Path
    format: str
    reencoded: bool
