import pytest

from hexprobe.domain.enums import MediaFormat, MediaType
from hexprobe.domain.policies.media_types import (
    UNKNOWN_MIME,
    extension_of,
    format_for_extension,
    media_type_for_target,
    mime_for,
    output_extension,
)


@pytest.mark.parametrize(
    "name, ext",
    [
        ("song.MP3", "mp3"),
        ("/a/b/archive.tar.gz", "gz"),
        ("README", ""),
        ("dir.d/noext", ""),
        (".hidden", "hidden"),
    ],
)
def test_extension_of(name, ext):
    assert extension_of(name) == ext


@pytest.mark.parametrize(
    "ext, mime, media",
    [
        ("mp4", "video/mp4", MediaType.VIDEO),
        ("m4a", "audio/mp4", MediaType.AUDIO),
        ("mp3", "audio/mpeg", MediaType.AUDIO),
        ("ogg", "audio/ogg", MediaType.AUDIO),
        ("wav", "audio/wav", MediaType.AUDIO),
        ("png", "image/png", MediaType.IMAGE),
        ("jpg", "image/jpeg", MediaType.IMAGE),
        ("JPEG", "image/jpeg", MediaType.IMAGE),
        ("txt", UNKNOWN_MIME, MediaType.UNKNOWN),
        ("", UNKNOWN_MIME, MediaType.UNKNOWN),
    ],
)
def test_mime_table(ext, mime, media):
    entry = mime_for(ext)
    assert entry.mime_type == mime
    assert entry.media_type == media


def test_target_media_types_cover_unparsed_formats():
    assert media_type_for_target("pcm") == MediaType.AUDIO
    assert media_type_for_target("mkv") == MediaType.VIDEO
    assert media_type_for_target("gif") == MediaType.IMAGE
    assert media_type_for_target("xyz") == MediaType.UNKNOWN


def test_format_for_extension():
    assert format_for_extension("jpeg") is MediaFormat.JPEG
    assert format_for_extension("m4a") is MediaFormat.MP4
    assert format_for_extension("HEIC") is MediaFormat.HEIF
    assert format_for_extension("txt") is None


def test_output_extension_keeps_family_member_or_uses_canonical():
    assert output_extension(MediaFormat.JPEG, "jpeg") == "jpeg"
    assert output_extension(MediaFormat.JPEG, "png") == "jpg"
    assert output_extension(MediaFormat.MP4, "mp4", audio_only=True) == "mp4"
    assert output_extension(MediaFormat.MP4, "m4a", audio_only=False) == "m4a"
    assert output_extension(MediaFormat.MP4, "", audio_only=True) == "m4a"
    assert output_extension(MediaFormat.MP4, "bin", audio_only=False) == "mp4"
    assert output_extension(MediaFormat.MP4, "mov") == "mov"
    assert output_extension(MediaFormat.MP3, "") == "mp3"
