# hexprobe/services/convert/converters.py
"""
Conversion strategies. Each is a plain function of a request plus the
collaborators it needs; the hub picks one from its route table.
"""
from __future__ import annotations

from typing import Callable, NoReturn

from hexprobe.common.logging import get_logger
from hexprobe.domain.entities.conversion import ConversionRequest, ConversionResult
from hexprobe.domain.errors import UnsupportedConversionRouteError
from hexprobe.domain.ports.files import FileOpsPort
from hexprobe.domain.ports.image_codec import ImageCodecPort

logger = get_logger(__name__)

WAV_PCM_PAIRS = frozenset({("wav", "pcm"), ("pcm", "wav")})


def copy_same_format(request: ConversionRequest, file_ops: FileOpsPort) -> ConversionResult:
    """Byte-for-byte copy; used whenever source and target extensions match."""
    out = file_ops.copy_file(request.input, request.output, overwrite=request.options.overwrite)
    logger.info("copied %s -> %s (same format)", request.input, out)
    return ConversionResult(output_file=out, format=request.target_extension, reencoded=False)


def copy_wav_pcm(request: ConversionRequest, file_ops: FileOpsPort) -> ConversionResult:
    """wav <-> pcm is a raw byte copy; header bytes are kept as they are."""
    pair = (request.source_extension, request.target_extension)
    if pair not in WAV_PCM_PAIRS:
        raise UnsupportedConversionRouteError(
            f"audio->audio transcoding is not implemented yet: {pair[0]} -> {pair[1]}", path=request.input
        )
    out = file_ops.copy_file(request.input, request.output, overwrite=request.options.overwrite)
    logger.info("copied %s -> %s (%s -> %s)", request.input, out, *pair)
    return ConversionResult(output_file=out, format=request.target_extension, reencoded=False)


def transcode_image(
    request: ConversionRequest,
    file_ops: FileOpsPort,
    codec: ImageCodecPort,
    allowed_exts: frozenset,
) -> ConversionResult:
    src, dst = request.source_extension, request.target_extension
    for ext in (src, dst):
        if ext not in allowed_exts or not codec.supports(ext):
            raise UnsupportedConversionRouteError(
                f"image transcoding {src} -> {dst} is not supported ('{ext}')", path=request.input
            )
    file_ops.prepare_output(request.output, overwrite=request.options.overwrite)
    image = codec.decode(request.input)
    out = codec.encode(image, request.output, dst)
    logger.info("re-encoded %s -> %s (%s -> %s, preset=%s)", request.input, out, src, dst, request.options.preset)
    return ConversionResult(output_file=out, format=dst, reencoded=True)


def rejecting(message: str) -> Callable[[ConversionRequest], NoReturn]:
    """Strategy for a reserved route: always fails with ``message``."""
    def reject(request: ConversionRequest) -> NoReturn:
        raise UnsupportedConversionRouteError(
            f"{message} ({request.source_extension} -> {request.target_extension})", path=request.input
        )
    return reject
