import dataclasses

import pytest

from prestoedit.geometry import MeasureKind, Measurement, Rect, Vector


def test_vector_addition():
    assert Vector(1, 2) + Vector(3, 4) == Vector(4, 6)


def test_vector_is_immutable():
    v = Vector(1, 2)
    with pytest.raises(dataclasses.FrozenInstanceError):
        v.x = 5
    assert v == Vector(1, 2)


def test_rect_fields():
    r = Rect(1, 2, 30, 40)
    assert (r.x, r.y, r.w, r.h) == (1, 2, 30, 40)


def test_percent_half():
    assert Measurement(MeasureKind.PERCENT, 0.5).get_value(100, 1) == 50


def test_percent_full_is_maximum():
    assert Measurement(MeasureKind.PERCENT, 1.0).get_value(77, 3) == 77


def test_chars_scaled_by_char_size():
    assert Measurement(MeasureKind.CHARS, 3).get_value(100, 4) == 12


def test_chars_clamped_to_maximum():
    assert Measurement(MeasureKind.CHARS, 100).get_value(10, 3) == 10


@pytest.mark.parametrize("value", [0, 1, 5, 40, 1000])
def test_chars_and_neg_chars_sum_to_maximum(value):
    chars = Measurement(MeasureKind.CHARS, value).get_value(60, 2)
    neg = Measurement(MeasureKind.NEG_CHARS, value).get_value(60, 2)
    assert chars + neg == 60


@pytest.mark.parametrize("value", [0, 7, 59, 60, 500])
def test_pixels_and_neg_pixels_sum_to_maximum(value):
    pixels = Measurement(MeasureKind.PIXELS, value).get_value(60, 9)
    neg = Measurement(MeasureKind.NEG_PIXELS, value).get_value(60, 9)
    assert pixels + neg == 60
    assert 0 <= pixels <= 60


def test_pixels_ignore_char_size():
    assert Measurement(MeasureKind.PIXELS, 7).get_value(60, 9) == 7