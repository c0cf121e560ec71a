# hexprobe/services/mappers/probe.py
from __future__ import annotations

from typing import Iterable

from hexprobe.domain.dataclasses.reports import ProbeReport
from hexprobe.domain.entities.conversion import ConversionResult
from hexprobe.domain.entities.probe import ProbeResult, StreamInfo
from hexprobe.domain.entities.validation import ValidationResult
from hexprobe.services.probe.batch import BatchItem
from hexprobe.services.schemas.convert import ConvertResponse
from hexprobe.services.schemas.probe import (
    BatchProbeItem,
    BatchProbeResponse,
    ProbeResultSchema,
    StreamInfoSchema,
)
from hexprobe.services.schemas.validation import ValidationResultSchema


def to_stream_schema(s: StreamInfo) -> StreamInfoSchema:
    return StreamInfoSchema(
        index=s.index,
        kind=s.kind,
        codec=s.codec,
        bitrate_kbps=s.bitrate_kbps,
        sample_rate=s.sample_rate,
        channels=s.channels,
        width=s.width,
        height=s.height,
        frame_rate=s.frame_rate,
    )


def to_probe_schema(r: ProbeResult) -> ProbeResultSchema:
    return ProbeResultSchema(
        input=str(r.input),
        mime_type=r.mime_type,
        extension=r.extension,
        media_type=r.media_type,
        duration_millis=r.duration_millis,
        streams=[to_stream_schema(s) for s in r.streams],
        tags=dict(r.tags),
    )


def to_batch_response(items: Iterable[BatchItem], report: ProbeReport) -> BatchProbeResponse:
    out = []
    for item in items:
        out.append(BatchProbeItem(
            path=str(item.path),
            result=to_probe_schema(item.result) if item.result is not None else None,
            error_kind=str(item.error.kind) if item.error is not None else None,
            error=item.error.message if item.error is not None else None,
        ))
    return BatchProbeResponse(
        ok=report.errors == 0 and report.missing_files == 0,
        started_at=report.started_at,
        finished_at=report.finished_at,
        planned=report.planned,
        probed_ok=report.probed_ok,
        degraded=report.degraded,
        not_supported=report.not_supported,
        missing_files=report.missing_files,
        errors=report.errors,
        items=out,
    )


def to_convert_response(r: ConversionResult) -> ConvertResponse:
    return ConvertResponse(output_file=str(r.output_file), format=r.format, reencoded=r.reencoded)


def to_validation_schema(r: ValidationResult) -> ValidationResultSchema:
    return ValidationResultSchema(valid=r.valid, warnings=list(r.warnings), errors=list(r.errors))
