"""
Scene model: vertices, triangle lists and the built-in demo geometry.

A triangle is never stored on its own; it is three consecutive vertices of
a Model. The Model refuses any vertex count that is not a multiple of 3.
"""
import logging
from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

from .linalg import Vec3

logger = logging.getLogger(__name__)

Triple = Tuple[float, float, float]


@dataclass(frozen=True)
class Vertex:
    """
    Position + colour.

    Vertices are values: every pipeline stage builds new ones, so a vertex
    handed to a later stage is never changed behind the caller's back.
    """
    position: Vec3
    colour: Vec3

    @staticmethod
    def interpolate(a: "Vertex", b: "Vertex", c: "Vertex", weights) -> "Vertex":
        """
        Blend three vertices attribute-wise:
          attr = w0*a.attr + w1*b.attr + w2*c.attr

        Weights are used as given (no perspective correction).
        """
        w0, w1, w2 = weights
        return Vertex(
            position=a.position * w0 + b.position * w1 + c.position * w2,
            colour=a.colour * w0 + b.colour * w1 + c.colour * w2,
        )


class Model:
    """Ordered, immutable triangle list (vertices grouped in threes)."""

    def __init__(self, vertices: Sequence[Vertex]):
        vertices = tuple(vertices)
        if len(vertices) % 3 != 0:
            raise ValueError(
                f"model needs a multiple of 3 vertices, got {len(vertices)}")
        self._vertices = vertices

    @property
    def vertices(self) -> Tuple[Vertex, ...]:
        return self._vertices

    def __len__(self):
        return len(self._vertices)

    def __iter__(self) -> Iterator[Vertex]:
        return iter(self._vertices)

    def __getitem__(self, index):
        return self._vertices[index]

    def __eq__(self, o):
        if not isinstance(o, Model):
            return NotImplemented
        return self._vertices == o._vertices

    def __repr__(self):
        return f"Model({len(self)} vertices, {self.triangle_count} triangles)"

    @property
    def triangle_count(self) -> int:
        return len(self._vertices) // 3

    def triangles(self) -> Iterator[Tuple[Vertex, Vertex, Vertex]]:
        """Yield (a, b, c) for vertices 3k, 3k+1, 3k+2."""
        vs = self._vertices
        for i in range(0, len(vs), 3):
            yield vs[i], vs[i + 1], vs[i + 2]


def create_model(positions: Sequence[Triple], colours: Sequence[Triple],
                 indices: Sequence[int]) -> Model:
    """
    Build a triangle list from indexed geometry.

    One vertex is emitted per index; position and colour come from the same
    slot of `positions` and `colours`.
    """
    if len(positions) != len(colours):
        raise ValueError(
            f"{len(positions)} positions but {len(colours)} colours")
    if len(indices) % 3 != 0:
        raise ValueError(
            f"index list length must be a multiple of 3, got {len(indices)}")

    vts = []
    for i in indices:
        if not 0 <= i < len(positions):
            raise ValueError(
                f"index {i} out of range for {len(positions)} vertices")
        x, y, z = positions[i]
        cx, cy, cz = colours[i]
        vts.append(Vertex(Vec3(float(x), float(y), float(z)),
                          Vec3(float(cx), float(cy), float(cz))))

    logger.debug("built model: %d vertices from %d positions", len(vts), len(positions))
    return Model(vts)


# ============================================================
#  Built-in geometry
# ============================================================

CUBE_POSITIONS = [
    # front
    (-1.0, -1.0, -1.0),
    (1.0, -1.0, -1.0),
    (1.0, 1.0, -1.0),
    (-1.0, 1.0, -1.0),
    # back
    (-1.0, -1.0, 1.0),
    (1.0, -1.0, 1.0),
    (1.0, 1.0, 1.0),
    (-1.0, 1.0, 1.0),
]

CUBE_COLOURS = [
    # front
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 1.0, 1.0),
    # back
    (1.0, 0.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.0, 0.0, 1.0),
    (1.0, 1.0, 1.0),
]

# Seen from outside the cube every face is clockwise in a y-up view, which
# is the winding that gives a positive edge-function area.
CUBE_INDICES = [
    # front
    0, 1, 2,
    2, 3, 0,
    # right
    1, 5, 6,
    6, 2, 1,
    # back
    7, 6, 5,
    5, 4, 7,
    # left
    4, 0, 3,
    3, 7, 4,
    # bottom
    4, 5, 1,
    1, 0, 4,
    # top
    3, 2, 6,
    6, 7, 3,
]


def get_cube_model() -> Model:
    """The 8-vertex, 12-triangle cube spanning [-1, 1] on every axis."""
    return create_model(CUBE_POSITIONS, CUBE_COLOURS, CUBE_INDICES)


def get_triangle_model() -> Model:
    """Single red/green/blue triangle, already in 512x512 raster space."""
    return create_model(
        [(10.0, 10.0, 0.0), (10.0, 500.0, 0.0), (500.0, 10.0, 0.0)],
        [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)],
        [0, 1, 2],
    )
