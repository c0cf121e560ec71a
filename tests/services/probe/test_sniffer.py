import pytest

from hexprobe.domain.enums import MediaFormat
from hexprobe.services.probe.sniffer import candidates, sniff


@pytest.mark.parametrize(
    "builder, fmt",
    [
        (lambda m: m.png(), MediaFormat.PNG),
        (lambda m: m.jpeg(), MediaFormat.JPEG),
        (lambda m: m.ogg_page(m.vorbis_ident()), MediaFormat.OGG),
        (lambda m: m.wav(), MediaFormat.WAV),
        (lambda m: m.webp_lossy(), MediaFormat.WEBP),
        (lambda m: m.heif(), MediaFormat.HEIF),
        (lambda m: m.ftyp(b"mp42"), MediaFormat.MP4),
        (lambda m: m.tiff(), MediaFormat.TIFF),
        (lambda m: m.bmp(), MediaFormat.BMP),
        (lambda m: m.mp3_frames(2), MediaFormat.MP3),
        (lambda m: m.id3v2(4), MediaFormat.MP3),
    ],
)
def test_sniff_by_magic(media, builder, fmt):
    assert sniff(builder(media)) is fmt


def test_sniff_unknown():
    assert sniff(b"hello world, not media") is None
    assert sniff(b"") is None


def test_candidates_put_extension_first(media):
    assert candidates(media.png(), "jpg") == [MediaFormat.JPEG, MediaFormat.PNG]
    assert candidates(media.png(), "png") == [MediaFormat.PNG]
    assert candidates(media.png(), "txt") == [MediaFormat.PNG]
    assert candidates(b"plain text", "txt") == []
