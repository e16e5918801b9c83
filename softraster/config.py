import math
from dataclasses import dataclass
from typing import Optional, Tuple

from .linalg import Mat4, Vec3, look_at, perspective, rotate_y

Triple = Tuple[float, float, float]


def parse_hex_color(hex_str) -> Optional[Tuple[int, int, int]]:
    """
    Parse '#RRGGBB' or 'RRGGBB' (case-insensitive) to an (r, g, b) tuple of
    0-255 ints. Returns None when the text is not a colour.
    """
    if hex_str is None:
        return None
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        return None
    try:
        return (int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16))
    except ValueError:
        return None


@dataclass
class RenderConfig:
    """Camera, projection and output settings for one still render."""
    width: int = 512
    height: int = 512
    fov: float = 45.0                   # vertical, degrees
    near: float = 0.1
    far: float = 100.0
    eye: Triple = (2.0, 2.0, -5.0)
    target: Triple = (0.0, 0.0, 0.0)
    up: Triple = (0.0, 1.0, 0.0)
    yaw: float = 0.0                    # model rotation about Y, degrees
    colour_scale: float = 255.0
    background: Tuple[int, int, int] = (0, 0, 0)
    output: str = "img.png"
    scene: str = "cube"

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.near < self.far:
            raise ValueError(f"need 0 < near < far, got near={self.near} far={self.far}")
        if not 0.0 < self.fov < 180.0:
            raise ValueError(f"fov must be in (0, 180) degrees, got {self.fov}")

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def view_matrix(self) -> Mat4:
        """Model yaw followed by the look-at camera transform."""
        return look_at(Vec3(*self.eye), Vec3(*self.target), Vec3(*self.up)) \
            @ rotate_y(math.radians(self.yaw))

    def projection_matrix(self) -> Mat4:
        return perspective(math.radians(self.fov), self.aspect, self.near, self.far)
