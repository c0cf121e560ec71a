# services/schemas/validation.py
from __future__ import annotations

from typing import List, Optional

from pydantic import Field

from hexprobe.services.schemas.base import CamelModel


class ValidateRequest(CamelModel):
    path: str
    strict: bool = False
    max_bytes: Optional[int] = Field(None, ge=1)


class ValidationResultSchema(CamelModel):
    valid: bool
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
