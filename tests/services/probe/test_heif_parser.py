import pytest

from hexprobe.domain.errors import MalformedInputError, UnsupportedFormatError
from hexprobe.services.probe.parsers import heif


def test_heic_extents_and_depth(media):
    info = heif.parse(media.heif(4032, 3024, depths=(8, 8, 8)))
    assert (info.width, info.height) == (4032, 3024)
    assert info.bit_depth == 8
    assert info.major_brand == "heic"


def test_avif_brand_and_min_depth(media):
    info = heif.parse(media.heif(64, 48, depths=(10, 0, 12), brand=b"avif"))
    assert info.major_brand == "avif"
    assert info.bit_depth == 10


def test_missing_pixi_leaves_depth_unknown(media):
    ipco = media.box(b"ipco", media.ispe(10, 10))
    data = media.ftyp(b"mif1") + media.box(b"meta", b"\x00" * 4 + media.box(b"iprp", ipco))
    assert heif.parse(data).bit_depth is None


def test_missing_ispe_is_malformed(media):
    data = media.ftyp(b"heic") + media.box(b"meta", b"\x00" * 4 + media.hdlr(b"pict"))
    with pytest.raises(MalformedInputError):
        heif.parse(data)


def test_mp4_brand_is_unsupported(media):
    with pytest.raises(UnsupportedFormatError):
        heif.parse(media.ftyp(b"isom") + media.box(b"moov"))


def test_nesting_beyond_limit_is_malformed(media):
    nested = media.ispe(1, 1)
    for _ in range(heif.MAX_DEPTH + 5):
        nested = media.box(b"iprp", nested)
    with pytest.raises(MalformedInputError):
        heif.parse(media.ftyp(b"heic") + nested)


def test_box_count_limit_is_malformed(media):
    padding = media.box(b"free") * (heif.MAX_BOXES + 1)
    with pytest.raises(MalformedInputError):
        heif.parse(media.ftyp(b"heic") + padding)
