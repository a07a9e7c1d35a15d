"""
Pyramid roof generator for City Buildings Generator.

Works on any floor border: the base is the triangulated border facing
down, and a fan of side triangles rises to an apex above the centroid.
"""

from typing import Sequence
import logging

from ..config import VERTEX_MERGE_TOLERANCE
from ..errors import InvalidArgument
from ..models.geometry import Point2D
from ..models.mesh import MeshData
from ..utils.polygon_utils import ensure_ccw, iter_edges, polygon_centroid
from ..utils.triangulation import triangulate

logger = logging.getLogger(__name__)


def make_pyramid_roof(
    border: Sequence[Point2D],
    apex_height: float,
    base_height: float = 0.0
) -> MeshData:
    """
    Generate a pyramid roof over a floor border.

    Args:
        border: Border of the top floor (>= 3 points)
        apex_height: Height of the apex above the base (> 0)
        base_height: Elevation of the base

    Returns:
        Closed MeshData with merged vertices and normals

    Raises:
        InvalidArgument: On a short border or non-positive apex height
    """
    if len(border) < 3:
        raise InvalidArgument(f"Border needs at least 3 points, got {len(border)}")
    if apex_height <= 0:
        raise InvalidArgument(f"Apex height must be positive, got {apex_height}")

    ring = ensure_ccw(border)
    mesh = MeshData()

    # Base, facing down
    base_vertices, base_triangles = triangulate(ring)
    base = [mesh.add_vertex(p.x, p.y, base_height) for p in base_vertices]
    for i, j, k in base_triangles:
        mesh.add_triangle(base[i], base[k], base[j])

    center = polygon_centroid(ring)
    apex = mesh.add_vertex(center.x, center.y, base_height + apex_height)

    for a, b in iter_edges(ring):
        ia = mesh.add_vertex(a.x, a.y, base_height)
        ib = mesh.add_vertex(b.x, b.y, base_height)
        mesh.add_triangle(ia, ib, apex)

    mesh.merge_duplicate_vertices(VERTEX_MERGE_TOLERANCE)
    mesh.compute_normals()

    logger.debug(
        f"Pyramid roof: {len(ring)} sides, apex {apex_height:.2f}m above base"
    )
    return mesh
