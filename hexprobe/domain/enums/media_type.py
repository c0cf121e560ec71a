from __future__ import annotations
from enum import StrEnum


class MediaType(StrEnum):
    AUDIO = "AUDIO"
    VIDEO = "VIDEO"
    IMAGE = "IMAGE"
    UNKNOWN = "UNKNOWN"
