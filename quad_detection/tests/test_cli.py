"""
Tests for the command line interface
"""

import argparse
import os

import cv2
import pytest

from quad_detection.__main__ import main, parse_aspect
from quad_detection.planner import AspectRatio


@pytest.fixture
def workdir(monkeypatch, tmp_path):
    monkeypatch.setattr(os, "environ", os.environ.copy())
    for name in list(os.environ):
        if name.startswith("QUAD_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def rectangle_file(workdir, single_rectangle):
    image, _ = single_rectangle
    path = workdir / "rectangle.png"
    cv2.imwrite(str(path), image)
    return path


class TestParseAspect:
    def test_preset_name(self):
        assert parse_aspect("a4_portrait") is AspectRatio.A4_PORTRAIT

    def test_number(self):
        assert parse_aspect("1.5") == 1.5

    @pytest.mark.parametrize("value", ["0", "-2", "wide"])
    def test_invalid(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_aspect(value)


class TestMain:
    def test_lists_candidates(self, rectangle_file, capsys):
        assert main(["-i", str(rectangle_file)]) == 0
        out = capsys.readouterr().out
        assert "1 candidate(s)" in out
        assert "[0] confidence=" in out

    def test_writes_rectified_output(self, rectangle_file, workdir):
        output = workdir / "out.png"
        assert main(["-i", str(rectangle_file), "-o", str(output)]) == 0

        corrected = cv2.imread(str(output))
        assert corrected is not None
        height, width = corrected.shape[:2]
        assert abs(width - 300) <= 8
        assert abs(height - 200) <= 8

    def test_aspect_ratio(self, rectangle_file, workdir):
        output = workdir / "square.png"
        assert main(["-i", str(rectangle_file), "-o", str(output), "--aspect", "SQUARE"]) == 0
        height, width = cv2.imread(str(output)).shape[:2]
        assert height == width

    def test_preview(self, rectangle_file, workdir):
        preview = workdir / "preview.png"
        assert main(["-i", str(rectangle_file), "--preview", str(preview)]) == 0
        assert cv2.imread(str(preview)).shape == (300, 400, 3)

    def test_preview_side_by_side(self, rectangle_file, workdir):
        preview = workdir / "preview.png"
        output = workdir / "out.png"
        assert main(["-i", str(rectangle_file), "-o", str(output), "--preview", str(preview)]) == 0
        assert cv2.imread(str(preview)).shape[1] > 400

    def test_missing_image(self, workdir, capsys):
        assert main(["-i", str(workdir / "missing.png")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_unreadable_image(self, workdir):
        path = workdir / "broken.png"
        path.write_bytes(b"not an image")
        assert main(["-i", str(path)]) == 1

    def test_no_candidates(self, workdir, blank_image, capsys):
        path = workdir / "blank.png"
        cv2.imwrite(str(path), blank_image)

        assert main(["-i", str(path)]) == 0
        assert "No quadrilaterals detected" in capsys.readouterr().out
        assert main(["-i", str(path), "-o", str(workdir / "out.png")]) == 1
        assert not (workdir / "out.png").exists()

    def test_select_out_of_range(self, rectangle_file, workdir):
        output = workdir / "out.png"
        assert main(["-i", str(rectangle_file), "-o", str(output), "--select", "3"]) == 1
        assert not output.exists()

    def test_invalid_environment_config(self, rectangle_file, workdir, capsys):
        os.environ["QUAD_MAX_RESULTS"] = "-1"
        assert main(["-i", str(rectangle_file)]) == 1
        assert "max_results" in capsys.readouterr().out

    def test_max_results_override(self, workdir, many_squares, capsys):
        path = workdir / "squares.png"
        cv2.imwrite(str(path), many_squares)
        assert main(["-i", str(path), "--max-results", "2"]) == 0
        assert "2 candidate(s)" in capsys.readouterr().out
