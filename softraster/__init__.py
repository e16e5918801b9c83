from .linalg import Vec2, Vec3, Vec4, Mat4, look_at, perspective
from .scene import Vertex, Model, create_model, get_cube_model, get_triangle_model
from .pipeline import apply_matrix, project, to_raster_space, render
from .painter import Painter, edge, map_triangle_pos, bounding_box
from .config import RenderConfig
