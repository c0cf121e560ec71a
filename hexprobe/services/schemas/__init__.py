from hexprobe.services.schemas.convert import ConvertRequest, ConvertResponse
from hexprobe.services.schemas.metadata import MetadataResponse, MetadataWriteRequest
from hexprobe.services.schemas.probe import (
    BatchProbeItem,
    BatchProbeRequest,
    BatchProbeResponse,
    ProbeRequest,
    ProbeResultSchema,
    StreamInfoSchema,
)
from hexprobe.services.schemas.validation import ValidateRequest, ValidationResultSchema

__all__ = [
    "BatchProbeItem",
    "BatchProbeRequest",
    "BatchProbeResponse",
    "ConvertRequest",
    "ConvertResponse",
    "MetadataResponse",
    "MetadataWriteRequest",
    "ProbeRequest",
    "ProbeResultSchema",
    "StreamInfoSchema",
    "ValidateRequest",
    "ValidationResultSchema",
]
