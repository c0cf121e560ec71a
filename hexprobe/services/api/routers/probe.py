# hexprobe/services/api/routers/probe.py
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends

from hexprobe.common.settings import get_settings
from hexprobe.domain.entities.validation import ValidationOptions
from hexprobe.services.api.deps import get_engine
from hexprobe.services.engine import MediaEngine
from hexprobe.services.mappers.probe import to_batch_response, to_probe_schema, to_validation_schema
from hexprobe.services.schemas.probe import BatchProbeRequest, BatchProbeResponse, ProbeRequest, ProbeResultSchema
from hexprobe.services.schemas.validation import ValidateRequest, ValidationResultSchema

cfg = get_settings()
router = APIRouter(prefix=cfg.api.prefix, tags=["probe"])


@router.post("/probe", response_model=ProbeResultSchema)
def probe_file(payload: ProbeRequest, engine: MediaEngine = Depends(get_engine)) -> ProbeResultSchema:
    return to_probe_schema(engine.probe(Path(payload.path)))


@router.post("/probe/batch", response_model=BatchProbeResponse)
def probe_batch(payload: BatchProbeRequest, engine: MediaEngine = Depends(get_engine)) -> BatchProbeResponse:
    items, report = engine.probe_many(payload.paths, max_workers=payload.max_workers)
    return to_batch_response(items, report)


@router.post("/validate", response_model=ValidationResultSchema)
def validate_file(payload: ValidateRequest, engine: MediaEngine = Depends(get_engine)) -> ValidationResultSchema:
    options = ValidationOptions(strict=payload.strict, max_bytes=payload.max_bytes)
    return to_validation_schema(engine.validate(Path(payload.path), options))
