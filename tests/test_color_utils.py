#!/usr/bin/env python3
"""Tests for color parsing and the Lab distance heuristic."""

import pytest

from color_utils import color_delta_e, hex_to_lab, hex_to_rgb, hex_to_rgba


def test_hex_to_rgb_parses_long_and_short_forms():
    assert hex_to_rgb("#ff8000") == (255, 128, 0)
    assert hex_to_rgb("0a0b0c") == (10, 11, 12)
    assert hex_to_rgb("#fff") == (255, 255, 255)


@pytest.mark.parametrize("value", ["", "#12", "#zzzzzz", "not a color", None])
def test_hex_to_rgb_invalid_is_black(value):
    assert hex_to_rgb(value) == (0, 0, 0)


def test_hex_to_rgba_formats_css_color():
    assert hex_to_rgba("#ff0000", 0.22) == "rgba(255, 0, 0, 0.22)"


def test_white_lab_is_full_lightness():
    l, a, b = hex_to_lab("#ffffff")
    assert l == pytest.approx(100, abs=0.1)
    assert a == pytest.approx(0, abs=0.5)
    assert b == pytest.approx(0, abs=0.5)


def test_delta_e_is_zero_for_same_color():
    assert color_delta_e("#7c3aed", "#7c3aed") == 0


def test_delta_e_is_symmetric():
    assert color_delta_e("#7c3aed", "#22d3ee") == pytest.approx(color_delta_e("#22d3ee", "#7c3aed"))


def test_delta_e_orders_near_and_far_colors():
    near = color_delta_e("#ff0000", "#fe0101")
    far = color_delta_e("#ff0000", "#0000ff")
    assert near < 2
    assert far > 100
