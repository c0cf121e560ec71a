from __future__ import annotations
from enum import StrEnum


class ConversionRoute(StrEnum):
    AUDIO_TO_AUDIO = "AUDIO_TO_AUDIO"
    AUDIO_TO_IMAGE = "AUDIO_TO_IMAGE"
    VIDEO_TO_AUDIO = "VIDEO_TO_AUDIO"
    VIDEO_TO_VIDEO = "VIDEO_TO_VIDEO"
    IMAGE_TO_IMAGE = "IMAGE_TO_IMAGE"
    UNSUPPORTED = "UNSUPPORTED"
