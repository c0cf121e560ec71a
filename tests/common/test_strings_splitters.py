from hexprobe.common.strings.splitters import csv_to_list, ext_list, normalize_ext


def test_csv_to_list_none():
    assert csv_to_list(None) == []


def test_csv_to_list_list_input():
    assert csv_to_list([" a ", "b", "", "  "]) == ["a", "b"]


def test_csv_to_list_string_input():
    assert csv_to_list(" a, b ,c ,, d ") == ["a", "b", "c", "d"]


def test_normalize_ext():
    assert normalize_ext(".JPG") == "jpg"
    assert normalize_ext(" png ") == "png"
    assert normalize_ext(None) == ""
    assert normalize_ext("") == ""


def test_ext_list_dedupes_and_keeps_order():
    assert ext_list(".PNG, jpg, png,, .Jpg, webp") == ["png", "jpg", "webp"]
