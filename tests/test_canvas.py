"""Tests for the canvas and image export."""

import pytest
from PIL import Image

from whitted.core.color import BLACK, Color
from whitted.renderer.canvas import Canvas


class TestCanvas:

    def test_starts_black(self):
        c = Canvas(10, 20)
        assert (c.width, c.height) == (10, 20)
        for x in range(10):
            for y in range(20):
                assert c.pixel_at(x, y) == BLACK

    def test_write_pixel(self):
        c = Canvas(10, 20)
        c.write_pixel(2, 3, Color(1, 0, 0))
        assert c.pixel_at(2, 3) == Color(1, 0, 0)

    def test_out_of_bounds(self):
        c = Canvas(10, 20)
        with pytest.raises(IndexError):
            c.write_pixel(10, 0, Color(1, 0, 0))
        with pytest.raises(IndexError):
            c.pixel_at(0, -1)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            Canvas(0, 5)

    def test_write_row(self):
        c = Canvas(3, 2)
        c.write_row(1, [Color(0.1, 0.2, 0.3)] * 3)
        assert c.pixel_at(2, 1) == Color(0.1, 0.2, 0.3)
        with pytest.raises(ValueError):
            c.write_row(0, [BLACK])


class TestPPM:

    def test_header(self):
        lines = Canvas(5, 3).to_ppm().splitlines()
        assert lines[:3] == ["P3", "5 3", "255"]

    def test_pixel_data(self):
        c = Canvas(5, 3)
        c.write_pixel(0, 0, Color(1.5, 0, 0))
        c.write_pixel(2, 1, Color(0, 0.5, 0))
        c.write_pixel(4, 2, Color(-0.5, 0, 1))
        lines = c.to_ppm().splitlines()
        assert lines[3:6] == [
            "255 0 0 0 0 0 0 0 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 128 0 0 0 0 0 0 0",
            "0 0 0 0 0 0 0 0 0 0 0 0 0 0 255",
        ]

    def test_long_lines_are_split(self):
        c = Canvas(10, 2)
        for y in range(2):
            c.write_row(y, [Color(1, 0.8, 0.6)] * 10)
        lines = c.to_ppm().splitlines()
        assert lines[3:7] == [
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
            "255 204 153 255 204 153 255 204 153 255 204 153 255 204 153 255 204",
            "153 255 204 153 255 204 153 255 204 153 255 204 153",
        ]
        assert all(len(line) <= 70 for line in lines)

    def test_ends_with_newline(self):
        assert Canvas(5, 3).to_ppm().endswith("\n")


class TestExport:

    def test_to_image(self):
        c = Canvas(4, 2)
        c.write_pixel(3, 1, Color(1, 0.5, 0))
        image = c.to_image()
        assert image.size == (4, 2)
        assert image.getpixel((3, 1)) == (255, 128, 0)

    def test_save_ppm(self, tmp_path):
        c = Canvas(2, 2)
        path = c.save(tmp_path / "out.ppm")
        assert path.read_text(encoding="ascii").startswith("P3\n2 2\n255\n")

    def test_save_png(self, tmp_path):
        c = Canvas(3, 2)
        c.write_pixel(0, 0, Color(0, 1, 0))
        path = c.save(tmp_path / "nested" / "out.png")
        with Image.open(path) as image:
            assert image.size == (3, 2)
            assert image.convert("RGB").getpixel((0, 0)) == (0, 255, 0)

    def test_average(self):
        a, b = Canvas(2, 1), Canvas(2, 1)
        a.write_pixel(0, 0, Color(1, 0, 0))
        b.write_pixel(0, 0, Color(0, 0, 1))
        avg = Canvas.average([a, b])
        assert avg.pixel_at(0, 0) == Color(0.5, 0, 0.5)

    def test_average_rejects_mismatched_sizes(self):
        with pytest.raises(ValueError):
            Canvas.average([Canvas(2, 1), Canvas(1, 2)])
        with pytest.raises(ValueError):
            Canvas.average([])
