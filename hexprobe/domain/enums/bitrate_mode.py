from __future__ import annotations
from enum import StrEnum


class BitrateMode(StrEnum):
    CBR = "CBR"
    VBR = "VBR"
    CVBR = "CVBR"  # VBR header present, but every scanned frame shares one bitrate
    UNKNOWN = "UNKNOWN"
