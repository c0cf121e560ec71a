# hexprobe/services/convert/hub.py
from __future__ import annotations

from functools import partial
from typing import Callable, Dict, Iterable, Optional

from hexprobe.common.logging import get_logger
from hexprobe.common.settings import get_settings
from hexprobe.domain.entities.conversion import ConversionRequest, ConversionResult
from hexprobe.domain.enums.conversion_route import ConversionRoute
from hexprobe.domain.errors import UnsupportedConversionRouteError
from hexprobe.domain.policies.conversion_routes import resolve
from hexprobe.domain.ports.files import FileOpsPort
from hexprobe.domain.ports.image_codec import ImageCodecPort
from hexprobe.services.convert import converters
from hexprobe.services.filesystem.local_file_ops import LocalFileOps
from hexprobe.services.imaging.pillow_codec import PillowImageCodec

logger = get_logger(__name__)

Strategy = Callable[[ConversionRequest], ConversionResult]


def _unsupported(request: ConversionRequest) -> ConversionResult:
    raise UnsupportedConversionRouteError(
        f"Unsupported conversion route: {request.source_media_type} -> {request.target_media_type}"
        f" ({request.source_extension} -> {request.target_extension})",
        path=request.input,
    )


class ConversionHub:
    """
    Routes a ConversionRequest to a strategy. Identical extensions are a
    passthrough copy whatever the media types; everything else goes through
    the route table.
    """

    def __init__(
        self,
        file_ops: Optional[FileOpsPort] = None,
        image_codec: Optional[ImageCodecPort] = None,
        image_exts: Optional[Iterable[str]] = None,
    ):
        self.file_ops = file_ops or LocalFileOps()
        self.image_codec = image_codec or PillowImageCodec()
        allowed = frozenset(image_exts or get_settings().conversion.image_exts)

        self._routes: Dict[ConversionRoute, Strategy] = {
            ConversionRoute.IMAGE_TO_IMAGE: partial(
                converters.transcode_image, file_ops=self.file_ops, codec=self.image_codec, allowed_exts=allowed
            ),
            ConversionRoute.AUDIO_TO_AUDIO: partial(converters.copy_wav_pcm, file_ops=self.file_ops),
            ConversionRoute.VIDEO_TO_AUDIO: converters.rejecting("video->audio conversion is not implemented yet"),
            ConversionRoute.AUDIO_TO_IMAGE: converters.rejecting(
                "audio->image (album cover) extraction is not implemented yet"
            ),
            ConversionRoute.VIDEO_TO_VIDEO: converters.rejecting("video->video transcoding is not implemented yet"),
            ConversionRoute.UNSUPPORTED: _unsupported,
        }

    def route_for(self, request: ConversionRequest) -> ConversionRoute:
        return resolve(request.source_media_type, request.target_media_type)

    def convert(self, request: ConversionRequest) -> ConversionResult:
        if request.same_extension:
            return converters.copy_same_format(request, self.file_ops)
        route = self.route_for(request)
        logger.debug("convert %s -> %s via %s", request.input, request.output, route)
        return self._routes[route](request)
