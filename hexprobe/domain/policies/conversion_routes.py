# hexprobe/domain/policies/conversion_routes.py
from __future__ import annotations

from typing import Dict, Tuple

from hexprobe.domain.enums.conversion_route import ConversionRoute
from hexprobe.domain.enums.media_type import MediaType

_ROUTES: Dict[Tuple[MediaType, MediaType], ConversionRoute] = {
    (MediaType.AUDIO, MediaType.AUDIO): ConversionRoute.AUDIO_TO_AUDIO,
    (MediaType.VIDEO, MediaType.VIDEO): ConversionRoute.VIDEO_TO_VIDEO,
    (MediaType.IMAGE, MediaType.IMAGE): ConversionRoute.IMAGE_TO_IMAGE,
    (MediaType.VIDEO, MediaType.AUDIO): ConversionRoute.VIDEO_TO_AUDIO,
    (MediaType.AUDIO, MediaType.IMAGE): ConversionRoute.AUDIO_TO_IMAGE,
}


def resolve(source: MediaType, target: MediaType) -> ConversionRoute:
    """
    Classify a media-type pair. Total over the 4x4 grid; extensions play no
    part. UNKNOWN on either side is always UNSUPPORTED.
    """
    return _ROUTES.get((MediaType(source), MediaType(target)), ConversionRoute.UNSUPPORTED)
