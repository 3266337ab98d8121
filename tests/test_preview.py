"""Tests for ASCII and PIL digit previews."""

from PIL import Image

from segcode.patterns import BASE_PATTERNS
from segcode.preview import (
    BACKGROUND,
    OFF_COLOR,
    ON_COLOR,
    render_ascii,
    render_image,
    segment_boxes,
)

ALL = {'a', 'b', 'c', 'd', 'e', 'f', 'g', 'dp'}


class TestRenderAscii:
    def test_eight_with_dp(self):
        assert render_ascii([ALL]).split("\n") == [
            " _",
            "|_|",
            "|_|.",
        ]

    def test_one(self):
        assert render_ascii([BASE_PATTERNS['1']]).split("\n") == [
            "",
            "  |",
            "  |",
        ]

    def test_two_cells(self):
        art = render_ascii([BASE_PATTERNS['1'], BASE_PATTERNS['2']])
        assert art.split("\n") == [
            "      _",
            "  |   _|",
            "  |  |_",
        ]

    def test_blank(self):
        assert render_ascii([set()]) == "\n\n"

    def test_three_lines_always(self):
        assert render_ascii([]).count("\n") == 2


class TestSegmentBoxes:
    def test_all_segments_present(self):
        assert set(segment_boxes(80)) == ALL

    def test_boxes_inside_cell(self):
        size = 80
        height = round(size * 1.6)
        for seg, (x0, y0, x1, y1) in segment_boxes(size).items():
            assert 0 <= x0 < x1 <= size, seg
            assert 0 <= y0 < y1 <= height, seg

    def test_top_bar_geometry(self):
        t = round(100 * 0.16)
        assert segment_boxes(100)['a'] == (t, 0, 100 - t, t)


class TestRenderImage:
    def test_returns_rgb_image(self):
        img = render_image([ALL], size=40)
        assert isinstance(img, Image.Image)
        assert img.mode == 'RGB'

    def test_width_grows_with_cells(self):
        one = render_image([ALL], size=40)
        three = render_image([ALL, ALL, ALL], size=40)
        assert three.width > one.width
        assert three.height == one.height

    def test_lit_and_unlit_colors(self):
        size, pad = 80, 16
        img = render_image([{'a'}], size=size)
        t = round(size * 0.16)
        # centre of bar a (lit) and bar d (unlit)
        a_px = img.getpixel((pad + size // 2, pad + t // 2))
        d_box = segment_boxes(size)['d']
        d_px = img.getpixel((pad + size // 2, pad + (d_box[1] + d_box[3]) // 2))
        assert a_px == ON_COLOR
        assert d_px == OFF_COLOR

    def test_background(self):
        img = render_image([set()], size=40)
        assert img.getpixel((0, 0)) == BACKGROUND

    def test_empty_row(self):
        img = render_image([], size=40)
        assert img.width > 0
