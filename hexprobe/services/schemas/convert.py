# services/schemas/convert.py
from __future__ import annotations

from typing import Optional

from pydantic import Field

from hexprobe.services.schemas.base import CamelModel


class ConvertRequest(CamelModel):
    input: str
    output: str
    target_format: Optional[str] = Field(None, description="Defaults to the output file's extension")
    preset: Optional[str] = Field(None, examples=["balanced"])
    overwrite: Optional[bool] = None


class ConvertResponse(CamelModel):
    output_file: str
    format: str
    reencoded: bool
