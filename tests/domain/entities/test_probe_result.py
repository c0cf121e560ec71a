from pathlib import Path

import pytest

from hexprobe.domain.entities.probe import ProbeResult, StreamInfo
from hexprobe.domain.enums import MediaType, StreamKind


def test_probe_result_defaults_are_degraded():
    pr = ProbeResult(input=Path("/x/a.mp3"), mime_type="audio/mpeg", extension="mp3", media_type=MediaType.AUDIO)
    assert pr.duration_millis is None
    assert pr.streams == ()
    assert pr.tags == {}
    assert pr.is_degraded is True
    assert pr.primary_stream is None
    assert pr.size_bytes is None


def test_probe_result_with_stream():
    s = StreamInfo(index=0, kind=StreamKind.AUDIO, codec="mp3", bitrate_kbps=128, sample_rate=44100, channels=2)
    pr = ProbeResult(
        input=Path("/x/a.mp3"),
        mime_type="audio/mpeg",
        extension="mp3",
        media_type=MediaType.AUDIO,
        duration_millis=1000,
        streams=(s,),
        tags={"sizeBytes": "1251"},
    )
    assert pr.is_degraded is False
    assert pr.primary_stream is s
    assert pr.size_bytes == 1251


@pytest.mark.parametrize("field", ["bitrate_kbps", "sample_rate", "channels", "width", "height", "frame_rate"])
def test_stream_info_rejects_non_positive(field):
    with pytest.raises(ValueError):
        StreamInfo(index=0, kind=StreamKind.VIDEO, codec="h264", **{field: 0})


def test_stream_info_requires_codec_and_index():
    with pytest.raises(ValueError):
        StreamInfo(index=0, kind=StreamKind.VIDEO, codec="")
    with pytest.raises(ValueError):
        StreamInfo(index=-1, kind=StreamKind.VIDEO, codec="h264")
