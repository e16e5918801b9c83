import math

import numpy as np

from softraster.linalg import Mat4, Vec3, translate
from softraster.painter import Painter
from softraster.pipeline import apply_matrix, project, render, to_raster_space
from softraster.scene import Model, Vertex, create_model


def _tri():
    return create_model([(0, 0, 0), (1, 0, 0), (0, 1, 0)],
                        [(1, 0, 0), (0, 1, 0), (0, 0, 1)],
                        [0, 1, 2])


def test_apply_matrix_is_pure():
    model = _tri()
    before = list(model)
    moved = apply_matrix(model, translate(1.0, 2.0, 3.0))

    assert list(model) == before
    assert [v.position for v in moved] == [Vec3(1.0, 2.0, 3.0),
                                           Vec3(2.0, 2.0, 3.0),
                                           Vec3(1.0, 3.0, 3.0)]
    assert [v.colour for v in moved] == [v.colour for v in model]


def test_apply_matrix_does_not_divide_by_w():
    m = Mat4.identity()
    m.m[3][3] = 2.0
    moved = apply_matrix(_tri(), m)
    assert moved[1].position == Vec3(1.0, 0.0, 0.0)


def test_project_divides_by_w():
    m = Mat4.identity()
    m.m[3][3] = 2.0
    model = create_model([(2, 4, 6)] * 3, [(1, 1, 1)] * 3, [0, 1, 2])
    ndc = project(model, m)
    assert ndc[0].position == Vec3(1.0, 2.0, 3.0)
    assert model[0].position == Vec3(2.0, 4.0, 6.0)


def test_project_with_zero_w_does_not_raise():
    ndc = project(_tri(), Mat4())
    assert all(math.isnan(c) for c in ndc[0].position)


def test_to_raster_space_corners_and_depth():
    def raster(x, y, z=0.25):
        v = Vertex(Vec3(x, y, z), Vec3(1.0, 1.0, 1.0))
        return to_raster_space(v, 640, 480).position

    assert raster(-1.0, -1.0) == Vec3(0.0, 0.0, 0.25)
    assert raster(1.0, 1.0) == Vec3(640.0, 480.0, 0.25)
    assert raster(0.0, 0.0, -0.5) == Vec3(320.0, 240.0, -0.5)


def test_to_raster_space_leaves_input_alone():
    v = Vertex(Vec3(0.5, -0.5, 0.1), Vec3(0.2, 0.4, 0.6))
    out = to_raster_space(v, 100, 100)
    assert v.position == Vec3(0.5, -0.5, 0.1)
    assert out.colour == v.colour


def test_render_chains_into_painter():
    # Identity view + projection: the model is already in NDC.
    model = Model([
        Vertex(Vec3(-1.0, -1.0, 0.0), Vec3(1.0, 1.0, 1.0)),
        Vertex(Vec3(-1.0, 1.0, 0.0), Vec3(1.0, 1.0, 1.0)),
        Vertex(Vec3(1.0, -1.0, 0.0), Vec3(1.0, 1.0, 1.0)),
    ])
    painter = Painter(8, 8)
    out = render(model, Mat4.identity(), Mat4.identity(), painter)

    assert out is painter
    assert tuple(painter.frame[0, 0]) == (255, 255, 255)
    assert tuple(painter.frame[7, 7]) == (0, 0, 0)
    assert np.isinf(painter.depth[7, 7])
