from types import SimpleNamespace

import pytest
from PIL import Image

from hexprobe.domain.entities.conversion import ConversionOptions
from hexprobe.domain.entities.extraction import AudioExtractOptions
from hexprobe.domain.entities.playback import PlaybackOptions
from hexprobe.domain.enums import MediaType
from hexprobe.domain.errors import (
    IOFailureError,
    NotFoundError,
    OutputConflictError,
    UnsupportedConversionRouteError,
    UnsupportedFormatError,
)
from hexprobe.services.engine import MediaEngine


class _FakePlayer:
    backend = "fake-player"

    def __init__(self, available=True):
        self._available = available
        self.opened = []

    def available(self):
        return self._available

    def open(self, path):
        self.opened.append(path)


@pytest.fixture()
def player():
    return _FakePlayer()


@pytest.fixture()
def engine(player):
    return MediaEngine(player=player)


# ---- convert --------------------------------------------------------------------
def test_convert_defaults_from_output_extension(engine, tmp_path):
    src = tmp_path / "a.png"
    Image.new("RGB", (8, 8), (0, 128, 255)).save(src, format="PNG")
    result = engine.convert(src, tmp_path / "a.webp")
    assert result.format == "webp"
    assert result.reencoded is True
    assert engine.probe(result.output_file).extension == "webp"


def test_convert_same_extension_copies_audio_only_mp4(engine, write_file, media, tmp_path):
    moov = media.box(b"moov", media.mvhd(1000, 2000) + media.audio_trak())
    src = write_file("voice.mp4", media.ftyp(b"M4A ") + moov)
    result = engine.convert(src, tmp_path / "copy.mp4")
    assert result.format == "mp4"
    assert result.reencoded is False
    assert result.output_file.read_bytes() == src.read_bytes()


def test_convert_same_extension_copies_mislabelled_file(engine, write_file, media, tmp_path):
    src = write_file("photo.jpg", media.png())
    result = engine.convert(src, tmp_path / "copy.jpg")
    assert result.format == "jpg"
    assert result.reencoded is False
    assert result.output_file.read_bytes() == src.read_bytes()


def test_convert_honours_explicit_options(engine, write_file, media, tmp_path):
    src = write_file("tone.wav", media.wav())
    out = tmp_path / "tone.wav.bak"
    result = engine.convert(src, out, ConversionOptions(target_format="WAV"))
    assert result.format == "wav"
    assert out.read_bytes() == src.read_bytes()


def test_convert_argument_errors(engine, write_file, tmp_path):
    with pytest.raises(NotFoundError):
        engine.convert(tmp_path / "missing.png", tmp_path / "x.jpg")
    src = write_file("a.png", b"x")
    with pytest.raises(ValueError):
        engine.convert(src, "")
    with pytest.raises(ValueError):
        engine.convert(src, tmp_path / "no_extension")


# ---- extract_audio ----------------------------------------------------------------
def test_extract_audio_copies_source(engine, write_file, media, tmp_path):
    src = write_file("track.mp3", media.mp3_frames(3))
    result = engine.extract_audio(src, tmp_path / "extracted")
    assert result.output_file == tmp_path / "extracted" / "track_audio.mp3"
    assert result.output_file.read_bytes() == src.read_bytes()

    with pytest.raises(OutputConflictError):
        engine.extract_audio(src, tmp_path / "extracted")
    engine.extract_audio(src, tmp_path / "extracted", AudioExtractOptions(overwrite=True))


def test_extract_audio_rejects_transcoding_and_video(engine, write_file, media, tmp_path):
    src = write_file("track.mp3", media.mp3_frames(3))
    with pytest.raises(UnsupportedConversionRouteError):
        engine.extract_audio(src, tmp_path, AudioExtractOptions(format="ogg"))
    clip = write_file("clip.mp4", media.ftyp() + media.box(b"moov", media.mvhd() + media.video_trak()))
    with pytest.raises(UnsupportedConversionRouteError):
        engine.extract_audio(clip, tmp_path)


# ---- metadata ---------------------------------------------------------------------
def test_metadata_write_then_read_merges_probe_keys(engine, write_file, media):
    p = write_file("song.mp3", media.mp3_frames(3))
    engine.write_metadata(p, {" title ": "Song", "mimeType": "text/plain"})
    meta = engine.read_metadata(p)
    assert meta["title"] == "Song"
    assert meta["mimeType"] == "audio/mpeg"
    assert meta["extension"] == "mp3"
    assert meta["mediaType"] == "AUDIO"


def test_metadata_write_validation(engine, write_file, tmp_path):
    p = write_file("a.png", b"x")
    with pytest.raises(ValueError):
        engine.write_metadata(p, {"  ": "v"})
    with pytest.raises(ValueError):
        engine.write_metadata(p, {"k": None})
    with pytest.raises(NotFoundError):
        engine.write_metadata(tmp_path / "nope.png", {"k": "v"})


# ---- playback ---------------------------------------------------------------------
def test_play_opens_with_backend(engine, player, write_file, media):
    p = write_file("tone.wav", media.wav())
    result = engine.play(p)
    assert result.started is True
    assert result.backend == "fake-player"
    assert result.media_type == MediaType.AUDIO
    assert player.opened == [p]


def test_play_dry_run_and_disabled(engine, player, write_file, media):
    p = write_file("pic.png", media.png())
    dry = engine.play(p, PlaybackOptions(dry_run=True))
    assert (dry.started, dry.backend) == (False, "dry-run")
    off = engine.play(p, PlaybackOptions(allow_external_app=False))
    assert (off.started, off.backend) == (False, "none")
    assert player.opened == []


def test_play_errors(write_file, media):
    engine = MediaEngine(player=_FakePlayer(available=False))
    with pytest.raises(UnsupportedFormatError):
        engine.play(write_file("a.txt", b"text"))
    with pytest.raises(IOFailureError):
        engine.play(write_file("b.wav", media.wav()))


# ---- probe_many / validate --------------------------------------------------------
def test_probe_many_and_validate(engine, write_file, media):
    paths = [write_file("1.wav", media.wav()), write_file("2.png", media.png())]
    items, report = engine.probe_many(paths, max_workers=2)
    assert report.probed_ok == 2
    assert [i.result.media_type for i in items] == [MediaType.AUDIO, MediaType.IMAGE]
    assert engine.validate(paths[0]).valid is True


def test_engine_accepts_injected_prober(write_file, player):
    canned = SimpleNamespace(
        probe=lambda path: SimpleNamespace(media_type=MediaType.VIDEO, extension="mp4", mime_type="video/mp4"),
    )
    engine = MediaEngine(prober=canned, player=player)
    result = engine.play(write_file("x.bin", b"?"), PlaybackOptions(dry_run=True))
    assert result.media_type == MediaType.VIDEO
