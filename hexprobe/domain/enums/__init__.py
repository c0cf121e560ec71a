from hexprobe.domain.enums.bitrate_mode import BitrateMode
from hexprobe.domain.enums.conversion_route import ConversionRoute
from hexprobe.domain.enums.error_kind import ErrorKind
from hexprobe.domain.enums.media_format import MediaFormat
from hexprobe.domain.enums.media_type import MediaType
from hexprobe.domain.enums.stream_kind import StreamKind
__all__ = [
    "BitrateMode",
    "ConversionRoute",
    "ErrorKind",
    "MediaFormat",
    "MediaType",
    "StreamKind",
]
