# hexprobe/services/api/routers/metadata.py
from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Query

from hexprobe.common.settings import get_settings
from hexprobe.services.api.deps import get_engine
from hexprobe.services.engine import MediaEngine
from hexprobe.services.schemas.metadata import MetadataResponse, MetadataWriteRequest

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/metadata", tags=["metadata"])


@router.get("", response_model=MetadataResponse)
def read_metadata(
    path: str = Query(..., description="Absolute path of the media file"),
    engine: MediaEngine = Depends(get_engine),
) -> MetadataResponse:
    return MetadataResponse(path=path, entries=engine.read_metadata(Path(path)))


@router.put("", response_model=MetadataResponse)
def write_metadata(payload: MetadataWriteRequest, engine: MediaEngine = Depends(get_engine)) -> MetadataResponse:
    engine.write_metadata(Path(payload.path), payload.entries)
    return MetadataResponse(path=payload.path, entries=engine.read_metadata(Path(payload.path)))
