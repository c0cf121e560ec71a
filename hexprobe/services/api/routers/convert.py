# hexprobe/services/api/routers/convert.py
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends

from hexprobe.common.settings import get_settings
from hexprobe.domain.entities.conversion import ConversionOptions
from hexprobe.domain.policies.media_types import extension_of
from hexprobe.services.api.deps import get_engine
from hexprobe.services.engine import MediaEngine
from hexprobe.services.mappers.probe import to_convert_response
from hexprobe.services.schemas.convert import ConvertRequest, ConvertResponse

cfg = get_settings()
router = APIRouter(prefix=cfg.api.prefix, tags=["convert"])


@router.post("/convert", response_model=ConvertResponse)
def convert_file(payload: ConvertRequest, engine: MediaEngine = Depends(get_engine)) -> ConvertResponse:
    conv = get_settings().conversion
    options = ConversionOptions(
        target_format=payload.target_format or extension_of(payload.output),
        preset=payload.preset or conv.default_preset,
        overwrite=conv.overwrite if payload.overwrite is None else payload.overwrite,
    )
    result = engine.convert(Path(payload.input), Path(payload.output), options)
    return to_convert_response(result)
