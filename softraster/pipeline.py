import logging

import numpy as np

from .linalg import Mat4, Vec3, vec3_to_vec4
from .scene import Model, Vertex

logger = logging.getLogger(__name__)


# ============================================================
#  Coordinate-space transforms
# ============================================================

def apply_matrix(model: Model, matrix: Mat4) -> Model:
    """
    Transform every vertex position by `matrix` with w = 1.

    The resulting w is dropped without a divide, so this is only meant for
    affine transforms (model, world -> view).
    """
    out = []
    for vtx in model:
        p = matrix.mul_vec4(vec3_to_vec4(vtx.position))
        out.append(Vertex(p.xyz(), vtx.colour))
    return Model(out)


def project(model: Model, matrix: Mat4) -> Model:
    """
    Transform every vertex position by a projection matrix, then apply the
    perspective divide (x, y, z) / w.

    View space -> NDC. There is no clipping: a vertex with w == 0 divides to
    inf/nan and whatever triangle it belongs to renders as garbage or not at
    all.
    """
    out = []
    for vtx in model:
        c = matrix.mul_vec4(vec3_to_vec4(vtx.position))
        with np.errstate(divide="ignore", invalid="ignore"):
            x, y, z = np.array([c.x, c.y, c.z]) / np.float64(c.w)
        out.append(Vertex(Vec3(float(x), float(y), float(z)), vtx.colour))
    return Model(out)


def to_raster_space(vertex: Vertex, width: int, height: int) -> Vertex:
    """
    Viewport transform: NDC [-1..1] -> raster [0..width] x [0..height].

      x_r = ((x + 1) / 2) * width
      y_r = ((y + 1) / 2) * height
      z   passes through as the depth value
    """
    p = vertex.position
    return Vertex(
        Vec3((p.x + 1.0) / 2.0 * width, (p.y + 1.0) / 2.0 * height, p.z),
        vertex.colour,
    )


def render(model: Model, view: Mat4, projection: Mat4, painter):
    """
    Run the whole chain into `painter`:
      model -> view (apply_matrix) -> NDC (project) -> raster (painter.draw)
    """
    logger.debug("view transform: %d vertices", len(model))
    in_view = apply_matrix(model, view)
    logger.debug("projection + perspective divide")
    ndc = project(in_view, projection)
    painter.draw(ndc)
    return painter
