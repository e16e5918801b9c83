import math
from dataclasses import dataclass
from typing import List, Optional


# ============================================================
#  Math primitives
# ============================================================

@dataclass(frozen=True)
class Vec2:
    """
    2D point in raster space (edge-function and bounding-box input).
    """
    x: float
    y: float


@dataclass(frozen=True)
class Vec3:
    """
    3D vector for vertex positions and colours.

    Used in:
      - model-space / view-space / NDC / raster-space positions
      - per-vertex RGB colour in [0..1]
      - camera eye, target and up vectors
    """
    x: float
    y: float
    z: float

    def __add__(self, o): return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)
    def __sub__(self, o): return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)
    def __mul__(self, k: float): return Vec3(self.x * k, self.y * k, self.z * k)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, o) -> float:
        """Dot product (scalar product)."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def cross(self, o):
        """Cross product (vector product)."""
        return Vec3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """Return normalized vector (length=1)."""
        n = self.norm()
        if n <= 1e-12:
            return Vec3(0.0, 0.0, 0.0)
        return self * (1.0 / n)


@dataclass(frozen=True)
class Vec4:
    """
    4D homogeneous vector.
    A position is lifted to (x, y, z, 1) before a matrix product.
    """
    x: float
    y: float
    z: float
    w: float

    def xyz(self) -> Vec3:
        """Drop w without dividing."""
        return Vec3(self.x, self.y, self.z)


class Mat4:
    """
    4x4 matrix (row-major), applied to column vectors: M * v.

    Used for:
      - model rotation (yaw)
      - view matrix (look-at)
      - projection matrix (perspective)
    """
    def __init__(self, m: Optional[List[List[float]]] = None):
        self.m = m if m is not None else [[0.0]*4 for _ in range(4)]

    @staticmethod
    def identity():
        """Create identity matrix."""
        m = Mat4()
        for i in range(4):
            m.m[i][i] = 1.0
        return m

    def __matmul__(self, o: "Mat4") -> "Mat4":
        """Matrix multiplication (Mat4 @ Mat4)."""
        r = Mat4()
        for i in range(4):
            for j in range(4):
                s = 0.0
                for k in range(4):
                    s += self.m[i][k] * o.m[k][j]
                r.m[i][j] = s
        return r

    def __eq__(self, o):
        if not isinstance(o, Mat4):
            return NotImplemented
        return self.m == o.m

    def __repr__(self):
        return f"Mat4({self.m!r})"

    def mul_vec4(self, v: Vec4) -> Vec4:
        """Multiply matrix by a Vec4 (Mat4 * Vec4)."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]*v.w
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]*v.w
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]*v.w
        w = self.m[3][0]*v.x + self.m[3][1]*v.y + self.m[3][2]*v.z + self.m[3][3]*v.w
        return Vec4(x, y, z, w)


def vec3_to_vec4(v: Vec3, w: float = 1.0) -> Vec4:
    """Convert Vec3 to homogeneous Vec4."""
    return Vec4(v.x, v.y, v.z, w)


# ============================================================
#  3D transforms
# ============================================================

def translate(tx, ty, tz) -> Mat4:
    """Translation matrix: (x, y, z) -> (x + tx, y + ty, z + tz)."""
    m = Mat4.identity()
    m.m[0][3] = tx
    m.m[1][3] = ty
    m.m[2][3] = tz
    return m

def scale(sx, sy, sz) -> Mat4:
    """Scaling matrix: (x, y, z) -> (sx*x, sy*y, sz*z)."""
    m = Mat4.identity()
    m.m[0][0] = sx
    m.m[1][1] = sy
    m.m[2][2] = sz
    return m

def rotate_y(a) -> Mat4:
    """Rotation around Y axis by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[0][0] = c
    m.m[0][2] = s
    m.m[2][0] = -s
    m.m[2][2] = c
    return m


# ============================================================
#  Camera and projection
# ============================================================

def look_at(eye: Vec3, target: Vec3, up: Vec3) -> Mat4:
    """
    Right-handed view matrix (world -> view).

    The camera sits at `eye` and looks towards `target`; in view space it
    looks down -Z with +Y up and +X to the right.
    """
    f = (target - eye).normalize()
    s = f.cross(up).normalize()
    u = s.cross(f)
    return Mat4([
        [s.x, s.y, s.z, -s.dot(eye)],
        [u.x, u.y, u.z, -u.dot(eye)],
        [-f.x, -f.y, -f.z, f.dot(eye)],
        [0.0, 0.0, 0.0, 1.0],
    ])

def perspective(fov_y, aspect, z_near, z_far) -> Mat4:
    """
    Perspective projection matrix.

    Parameters:
      fov_y  - vertical field of view in radians
      aspect - width / height
      z_near - near plane distance (positive)
      z_far  - far plane distance (positive)

    Produces clip space with w = -z_view; after the divide the near plane
    maps to z = -1 and the far plane to z = +1, so smaller z is nearer.
    """
    f = 1.0 / math.tan(fov_y / 2.0)
    m = Mat4()
    m.m[0][0] = f / aspect
    m.m[1][1] = f
    m.m[2][2] = (z_far + z_near) / (z_near - z_far)
    m.m[2][3] = (2.0 * z_far * z_near) / (z_near - z_far)
    m.m[3][2] = -1.0
    return m
