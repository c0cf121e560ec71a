# services/schemas/metadata.py
from __future__ import annotations

from typing import Dict

from pydantic import Field

from hexprobe.services.schemas.base import CamelModel


class MetadataWriteRequest(CamelModel):
    path: str
    entries: Dict[str, str] = Field(default_factory=dict)


class MetadataResponse(CamelModel):
    path: str
    entries: Dict[str, str] = Field(default_factory=dict)
