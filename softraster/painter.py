"""
Edge-function rasterizer.

The Painter owns a colour buffer and a depth buffer of fixed size and fills
them one raster-space triangle at a time:

  1. clamp the triangle's bounding box to the buffer
  2. sample every pixel of the box at its centre (x + 0.5, y + 0.5)
  3. edge functions give containment + barycentric weights
  4. interpolate depth and colour with the weights (screen space)
  5. keep the fragment only if it is strictly nearer than the stored depth

The per-pixel loop runs in Numba kernels. They are compiled with
error_model="numpy" so a zero-area triangle divides 0/0 into NaN weights
instead of raising; the NaN depth then fails the depth test and the
triangle leaves no trace.
"""
import logging
import math
from typing import Optional, Tuple

import numpy as np
from numba import njit
from PIL import Image

from .linalg import Vec3
from .pipeline import to_raster_space
from .scene import Model, Vertex

logger = logging.getLogger(__name__)


# ============================================================
#  Numba kernels
# ============================================================

@njit(cache=True)
def _edge(v0x, v0y, v1x, v1y, px, py):
    """Twice the signed area of (v0, v1, p); >= 0 on the inner side of v0->v1."""
    return (px - v0x) * (v1y - v0y) - (py - v0y) * (v1x - v0x)


@njit(cache=True, error_model="numpy")
def _weights(ax, ay, bx, by, cx, cy, px, py):
    """
    Containment test + barycentric weights of p in triangle (a, b, c).

    Returns (inside, wa, wb, wc). Containment is decided on the raw edge
    values, so only triangles with a positive area can ever cover a pixel.
    """
    area = _edge(ax, ay, bx, by, cx, cy)
    w0 = _edge(bx, by, cx, cy, px, py)
    w1 = _edge(cx, cy, ax, ay, px, py)
    w2 = _edge(ax, ay, bx, by, px, py)
    if w0 >= 0.0 and w1 >= 0.0 and w2 >= 0.0:
        return True, w0 / area, w1 / area, w2 / area
    return False, 0.0, 0.0, 0.0


@njit(cache=True)
def _channel(value, colour_scale):
    """[0..1] float -> 8-bit channel: scale, truncate, saturate."""
    v = int(value * colour_scale)
    if v < 0:
        return 0
    if v > 255:
        return 255
    return v


@njit(cache=True, error_model="numpy")
def _fill_triangle(frame, depth,
                   xmin, xmax, ymin, ymax,
                   ax, ay, az, ar, ag, ab,
                   bx, by, bz, br, bg, bb,
                   cx, cy, cz, cr, cg, cb,
                   colour_scale):
    """
    Scan the inclusive box [xmin..xmax] x [ymin..ymax] and shade covered
    pixels that pass the depth test.

    frame: (H, W, 3) uint8, indexed [y, x, channel]
    depth: (H, W) float64, smaller is nearer

    Returns the number of pixels written.
    """
    written = 0
    for y in range(ymin, ymax + 1):
        py = y + 0.5
        for x in range(xmin, xmax + 1):
            px = x + 0.5
            inside, w0, w1, w2 = _weights(ax, ay, bx, by, cx, cy, px, py)
            if not inside:
                continue

            z = w0*az + w1*bz + w2*cz
            # NaN never compares less, which is what drops degenerate triangles
            if not (z < depth[y, x]):
                continue
            depth[y, x] = z

            frame[y, x, 0] = _channel(w0*ar + w1*br + w2*cr, colour_scale)
            frame[y, x, 1] = _channel(w0*ag + w1*bg + w2*cg, colour_scale)
            frame[y, x, 2] = _channel(w0*ab + w1*bb + w2*cb, colour_scale)
            written += 1
    return written


# ============================================================
#  Geometry helpers
# ============================================================

def edge(v0, v1, p) -> float:
    """
    Edge function of the directed line v0 -> v1 evaluated at p:

      (p.x - v0.x) * (v1.y - v0.y) - (p.y - v0.y) * (v1.x - v0.x)

    Twice the signed area of triangle (v0, v1, p). Swapping any two points
    flips the sign. Only x and y are read.
    """
    return _edge(float(v0.x), float(v0.y), float(v1.x), float(v1.y),
                 float(p.x), float(p.y))


def map_triangle_pos(p, a, b, c) -> Optional[Tuple[float, float, float]]:
    """
    Barycentric weights (for a, b, c) of raster-space point p, or None when
    the triangle does not cover p.

    Points on an edge count as covered. A zero-area triangle that "covers" p
    returns NaN weights.
    """
    inside, w0, w1, w2 = _weights(float(a.x), float(a.y), float(b.x), float(b.y),
                                  float(c.x), float(c.y), float(p.x), float(p.y))
    if not inside:
        return None
    return w0, w1, w2


def _clamp(value: float, size: int) -> int:
    # floor then clamp to [0, size-1]; clamping first keeps inf out of floor()
    if value != value:
        return 0
    return int(math.floor(min(max(value, 0.0), size - 1.0)))


def bounding_box(a, b, c, width: int, height: int) -> Tuple[int, int, int, int]:
    """
    Pixel scan region of triangle (a, b, c): (xmin, xmax, ymin, ymax), all
    inclusive and inside [0, width-1] x [0, height-1].
    """
    xs = (a.x, b.x, c.x)
    ys = (a.y, b.y, c.y)
    return (_clamp(min(xs), width), _clamp(max(xs), width),
            _clamp(min(ys), height), _clamp(max(ys), height))


# ============================================================
#  Painter
# ============================================================

class Painter:
    """
    Fixed-size colour + depth buffers and the triangle scan loop.

    frame: (height, width, 3) uint8, starts at `background`
    depth: (height, width) float64, starts at +inf

    `colour_scale` maps a [0..1] colour channel to the 8-bit range before
    truncation (255 by default).
    """
    def __init__(self, width: int, height: int,
                 background=(0, 0, 0), colour_scale: float = 255.0):
        if width <= 0 or height <= 0:
            raise ValueError(f"painter size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.background = tuple(int(v) for v in background)
        self.colour_scale = float(colour_scale)
        self.frame = np.empty((self.height, self.width, 3), dtype=np.uint8)
        self.depth = np.empty((self.height, self.width), dtype=np.float64)
        self.clear()

    def clear(self):
        """Reset both buffers to their initial state."""
        self.frame[:, :] = self.background
        self.depth.fill(np.inf)

    def draw_triangle(self, a: Vertex, b: Vertex, c: Vertex) -> int:
        """
        Rasterize one triangle whose vertices are in raster space.

        Triangles must be wound so that edge(a, b, c) > 0; the other winding
        covers no pixel. Returns the number of pixels written.
        """
        pa, pb, pc = a.position, b.position, c.position
        xmin, xmax, ymin, ymax = bounding_box(pa, pb, pc, self.width, self.height)
        ca, cb, cc = a.colour, b.colour, c.colour
        return _fill_triangle(self.frame, self.depth,
                              xmin, xmax, ymin, ymax,
                              pa.x, pa.y, pa.z, ca.x, ca.y, ca.z,
                              pb.x, pb.y, pb.z, cb.x, cb.y, cb.z,
                              pc.x, pc.y, pc.z, cc.x, cc.y, cc.z,
                              self.colour_scale)

    def draw(self, model: Model) -> int:
        """
        Viewport-map an NDC model and rasterize all of its triangles in order.
        Returns the total number of pixel writes.
        """
        written = 0
        for a, b, c in model.triangles():
            written += self.draw_triangle(
                to_raster_space(a, self.width, self.height),
                to_raster_space(b, self.width, self.height),
                to_raster_space(c, self.width, self.height))
        logger.debug("drew %d triangles, %d pixel writes",
                     model.triangle_count, written)
        return written

    def fragment_at(self, x: int, y: int,
                    a: Vertex, b: Vertex, c: Vertex) -> Optional[Vertex]:
        """
        Interpolated vertex that triangle (a, b, c) produces at pixel (x, y),
        or None if the pixel centre is not covered. Buffers are not touched.
        """
        weights = map_triangle_pos(Vec3(x + 0.5, y + 0.5, 0.0),
                                   a.position, b.position, c.position)
        if weights is None:
            return None
        return Vertex.interpolate(a, b, c, weights)

    def to_image(self) -> Image.Image:
        """Copy of the colour buffer as an RGB Pillow image."""
        return Image.fromarray(self.frame.copy())

    def save(self, path: str):
        """Encode the colour buffer to `path`; the format follows the extension."""
        self.to_image().save(path)
        logger.info("saved %dx%d image to %s", self.width, self.height, path)
