import logging

import pytest
from PIL import Image

from softraster.cli import build_config, main, parse_args, render_scene
from softraster.config import RenderConfig


def test_defaults_match_render_config():
    _, args = parse_args([])
    assert build_config(args) == RenderConfig()


def test_cube_render_writes_image(tmp_path):
    out = tmp_path / "cube.png"
    assert main([str(out), "--width", "64", "--height", "48", "--yaw", "30"]) == 0

    with Image.open(out) as img:
        assert img.size == (64, 48)
        # the cube sits in the middle of the frame
        assert img.getpixel((32, 24)) != (0, 0, 0)
        assert img.getpixel((0, 0)) == (0, 0, 0)


def test_triangle_scene_matches_raster_demo(tmp_path):
    out = tmp_path / "tri.png"
    assert main([str(out), "--scene", "triangle", "--background", "#070707"]) == 0

    with Image.open(out) as img:
        assert img.getpixel((15, 15)) == (249, 2, 2)
        assert img.getpixel((5, 5)) == (7, 7, 7)


def test_render_scene_uses_colour_scale():
    config = RenderConfig(scene="triangle", colour_scale=200.0)
    painter = render_scene(config)
    # weight of the red vertex at (15, 15) is 479 / 490
    assert tuple(painter.frame[15, 15]) == (int(479 / 490 * 200), 2, 2)


def test_unwritable_output_is_fatal(tmp_path, caplog):
    out = tmp_path / "missing" / "img.png"
    with caplog.at_level(logging.ERROR, logger="softraster"):
        status = main([str(out), "--width", "8", "--height", "8"])
    assert status == 1
    assert "unable to save" in caplog.text
    assert not out.exists()


def test_bad_background_is_a_usage_error():
    with pytest.raises(SystemExit) as exc:
        main(["--background", "not-a-colour"])
    assert exc.value.code == 2


def test_bad_planes_are_a_usage_error(tmp_path):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "x.png"), "--near", "10", "--far", "1"])
    assert exc.value.code == 2
