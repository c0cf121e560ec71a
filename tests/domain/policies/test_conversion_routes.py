import itertools

import pytest

from hexprobe.domain.enums import ConversionRoute, MediaType
from hexprobe.domain.policies.conversion_routes import resolve

SUPPORTED = {
    (MediaType.AUDIO, MediaType.AUDIO): ConversionRoute.AUDIO_TO_AUDIO,
    (MediaType.VIDEO, MediaType.VIDEO): ConversionRoute.VIDEO_TO_VIDEO,
    (MediaType.IMAGE, MediaType.IMAGE): ConversionRoute.IMAGE_TO_IMAGE,
    (MediaType.VIDEO, MediaType.AUDIO): ConversionRoute.VIDEO_TO_AUDIO,
    (MediaType.AUDIO, MediaType.IMAGE): ConversionRoute.AUDIO_TO_IMAGE,
}


@pytest.mark.parametrize("source, target", list(itertools.product(MediaType, repeat=2)))
def test_resolve_is_total(source, target):
    assert resolve(source, target) == SUPPORTED.get((source, target), ConversionRoute.UNSUPPORTED)


def test_unknown_is_always_unsupported():
    for other in MediaType:
        assert resolve(MediaType.UNKNOWN, other) == ConversionRoute.UNSUPPORTED
        assert resolve(other, MediaType.UNKNOWN) == ConversionRoute.UNSUPPORTED
