import numpy as np

from softraster.preview import to_surface


def test_to_surface_swaps_axes():
    frame = np.zeros((2, 3, 3), dtype=np.uint8)
    frame[0, 2] = (255, 0, 0)
    frame[1, 0] = (0, 0, 255)

    surface = to_surface(frame)
    assert surface.get_size() == (3, 2)
    assert tuple(surface.get_at((2, 0)))[:3] == (255, 0, 0)
    assert tuple(surface.get_at((0, 1)))[:3] == (0, 0, 255)
    assert tuple(surface.get_at((1, 1)))[:3] == (0, 0, 0)
