import logging

import pytest

from ppmview.errors import (
    DecodeError,
    InvalidMaxColorValue,
    MalformedHeader,
    TruncatedPixelData,
    UnsupportedFormat,
)
from ppmview.io.ppm import (
    DECODERS,
    AsciiPixelDecoder,
    BinaryPixelDecoder,
    DecodeResult,
    decode_ppm,
    read_ppm,
    try_decode_ppm,
)


def test_p3_example(p3_example):
    img = decode_ppm(p3_example)
    assert img.size == (2, 1)
    assert img.pixels == ((255, 0, 0), (0, 255, 0))
    assert img.complete


def test_p6_example_scaled():
    img = decode_ppm(b"P6\n1 1\n100\n" + bytes([50, 50, 50]))
    assert img.pixels == ((128, 128, 128),)


def test_p6_row_major(p6_2x2):
    img = decode_ppm(p6_2x2)
    assert img.pixels == ((0, 1, 2), (3, 4, 5), (6, 7, 8), (9, 10, 11))
    assert img.pixel_at(1, 0) == (3, 4, 5)
    assert img.pixel_at(0, 1) == (6, 7, 8)


def test_p6_truncated_is_tolerated():
    img = decode_ppm(b"P6\n2 2\n255\n" + bytes(range(10)))
    assert len(img.pixels) == 3
    assert not img.complete
    assert img.size == (2, 2)


def test_p6_truncated_strict():
    with pytest.raises(TruncatedPixelData):
        decode_ppm(b"P6\n2 2\n255\n" + bytes(range(10)), strict=True)


def test_truncation_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="ppmview.io.ppm"):
        decode_ppm(b"P6\n2 2\n255\n" + bytes(range(10)))
    assert "Za mało pikseli P6: 3 < 4" in caplog.text


def test_p6_pixel_data_may_start_with_whitespace_bytes():
    img = decode_ppm(b"P6\n1 1\n255\n\n\n\n")
    assert img.pixels == ((10, 10, 10),)


def test_p6_surplus_bytes_ignored():
    img = decode_ppm(b"P6\n1 1\n255\n" + bytes(7))
    assert img.pixels == ((0, 0, 0),)


def test_p6_samples_above_maxval_are_clamped():
    img = decode_ppm(b"P6\n1 1\n100\n" + bytes([200, 100, 0]))
    assert img.pixels == ((255, 255, 0),)


def test_p6_without_terminator_has_no_pixels():
    img = decode_ppm(b"P6\n1 1\n255")
    assert img.pixels == ()
    with pytest.raises(TruncatedPixelData):
        decode_ppm(b"P6\n1 1\n255", strict=True)


def test_p3_identity_for_255():
    vals = list(range(0, 255, 5))[:48]
    data = b"P3\n4 4\n255\n" + " ".join(map(str, vals)).encode()
    img = decode_ppm(data)
    flat = [c for px in img.pixels for c in px]
    assert flat == vals


def test_p3_non_numeric_tokens_discarded():
    img = decode_ppm(b"P3\n1 2\n255\n1 x 2 3\n# 4 5 6\n")
    assert img.pixels == ((1, 2, 3), (4, 5, 6))


def test_p3_partial_triple_dropped():
    img = decode_ppm(b"P3\n2 1\n255\n1 2 3 4 5")
    assert img.pixels == ((1, 2, 3),)
    with pytest.raises(TruncatedPixelData):
        decode_ppm(b"P3\n2 1\n255\n1 2 3 4 5", strict=True)


def test_p3_surplus_samples_ignored():
    img = decode_ppm(b"P3\n1 1\n255\n1 2 3 4 5 6")
    assert img.pixels == ((1, 2, 3),)


def test_p3_scaled_and_clamped():
    img = decode_ppm(b"P3\n2 1\n15\n15 30 0\n7 0 1")
    assert img.pixels == ((255, 255, 0), (119, 0, 17))


def test_p3_triples_span_lines():
    img = decode_ppm(b"P3\n2 1\n255\n1\n2\n3 4\n5 6\n")
    assert img.pixels == ((1, 2, 3), (4, 5, 6))


def test_p3_16bit_maxval():
    img = decode_ppm(b"P3\n1 1\n65535\n65535 0 32768")
    assert img.pixels == ((255, 0, 128),)


@pytest.mark.parametrize("data", [b"", b"P", b"P5\n1 1\n255\n\x00", b"GIF89a"])
def test_unsupported_format(data):
    with pytest.raises(UnsupportedFormat):
        decode_ppm(data)


@pytest.mark.parametrize("data", [b"P3\n1 1\n0\n1 1 1", b"P6\n1 1\n0\n\x00\x00\x00"])
def test_zero_maxval(data):
    with pytest.raises(InvalidMaxColorValue):
        decode_ppm(data)


def test_malformed_header_aborts():
    with pytest.raises(MalformedHeader):
        decode_ppm(b"P6\n2 2\n")


def test_deterministic(p3_example, p6_2x2):
    assert decode_ppm(p3_example) == decode_ppm(p3_example)
    assert decode_ppm(p6_2x2) == decode_ppm(p6_2x2)


def test_input_buffer_types(p3_example):
    assert decode_ppm(bytearray(p3_example)) == decode_ppm(p3_example)
    assert decode_ppm(memoryview(p3_example)) == decode_ppm(p3_example)


def test_complete_decode_has_width_times_height_pixels():
    data = b"P6\n3 5\n255\n" + bytes(3 * 5 * 3)
    img = decode_ppm(data, strict=True)
    assert len(img.pixels) == img.width * img.height


def test_decoders_share_contract():
    assert isinstance(DECODERS["P3"], AsciiPixelDecoder)
    assert isinstance(DECODERS["P6"], BinaryPixelDecoder)


def test_try_decode(p3_example):
    ok = try_decode_ppm(p3_example)
    assert ok.ok and ok.image.size == (2, 1)
    bad = try_decode_ppm(b"nope")
    assert not bad.ok
    assert bad.image is None
    assert isinstance(bad.error, UnsupportedFormat)


def test_errors_are_value_errors():
    assert issubclass(DecodeError, ValueError)
    for cls in (UnsupportedFormat, MalformedHeader, InvalidMaxColorValue, TruncatedPixelData):
        assert issubclass(cls, DecodeError)


def test_read_ppm(ppm_file, p6_2x2):
    img = read_ppm(ppm_file(p6_2x2))
    assert img.size == (2, 2)


def test_read_ppm_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_ppm(str(tmp_path / "missing.ppm"))


def test_decode_result_needs_exactly_one_field(p3_example):
    with pytest.raises(ValueError):
        DecodeResult()
    with pytest.raises(ValueError):
        DecodeResult(image=decode_ppm(p3_example), error=MalformedHeader("x"))
