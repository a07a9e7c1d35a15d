"""
Solid extrusion for City Buildings Generator.

Turns 2D rings into closed 3D solids: vertical wall quads along every
ring, triangulated bottom and top caps, shared vertices merged so the
result is watertight, and per-vertex normals.

Also provides the simple boxes used as default window meshes and
free-standing walls.
"""

from typing import Sequence, Union
import logging

from ..config import VERTEX_MERGE_TOLERANCE
from ..errors import InvalidArgument
from ..models.geometry import Point2D, Polygon
from ..models.mesh import MeshData
from ..utils.polygon_utils import (
    ensure_ccw,
    ensure_cw,
    expand_polygon,
    iter_edges,
    offset_polygon,
    widen_polyline_border,
)
from ..utils.triangulation import triangulate

logger = logging.getLogger(__name__)


def thicken_polygon(
    border: Union[Sequence[Point2D], Polygon],
    thickness: float,
    holes: Sequence[Sequence[Point2D]] = ()
) -> MeshData:
    """
    Extrude a polygon with holes vertically into a closed solid.

    The solid spans z = 0 to z = thickness. The outer border is made CCW
    and holes CW, so every wall quad faces away from the material. The
    bottom cap faces down and the top cap faces up.

    Args:
        border: Outer ring (>= 3 points), or a Polygon carrying its own holes
        thickness: Extrusion height (> 0)
        holes: Inner rings

    Returns:
        Watertight MeshData with normals

    Raises:
        InvalidArgument: On a short border or non-positive thickness
        TriangulationError: If the caps cannot be triangulated
    """
    if isinstance(border, Polygon):
        holes = list(border.holes) + list(holes)
        border = border.outer_ring

    if len(border) < 3:
        raise InvalidArgument(f"Border needs at least 3 points, got {len(border)}")
    if thickness <= 0:
        raise InvalidArgument(f"Thickness must be positive, got {thickness}")

    outer = ensure_ccw(border)
    inner = [ensure_cw(hole) for hole in holes]

    mesh = MeshData()

    # Side walls
    for ring in [outer] + inner:
        for a, b in iter_edges(ring):
            a0 = mesh.add_vertex(a.x, a.y, 0.0)
            b0 = mesh.add_vertex(b.x, b.y, 0.0)
            b1 = mesh.add_vertex(b.x, b.y, thickness)
            a1 = mesh.add_vertex(a.x, a.y, thickness)
            mesh.add_quad(a0, b0, b1, a1)

    # Caps: triangulate once, reuse for bottom and top
    cap_vertices, cap_triangles = triangulate(outer, inner)

    bottom = [mesh.add_vertex(p.x, p.y, 0.0) for p in cap_vertices]
    for i, j, k in cap_triangles:
        mesh.add_triangle(bottom[i], bottom[k], bottom[j])

    top = [mesh.add_vertex(p.x, p.y, thickness) for p in cap_vertices]
    for i, j, k in cap_triangles:
        mesh.add_triangle(top[i], top[j], top[k])

    mesh.merge_duplicate_vertices(VERTEX_MERGE_TOLERANCE)
    mesh.compute_normals()

    return mesh


def make_box(size_x: float, size_y: float, size_z: float) -> MeshData:
    """
    Axis-aligned box centered at the origin.

    Args:
        size_x, size_y, size_z: Extent along each axis (> 0)

    Returns:
        MeshData with 8 vertices and 6 outward-facing quads
    """
    if size_x <= 0 or size_y <= 0 or size_z <= 0:
        raise InvalidArgument(
            f"Box sizes must be positive, got ({size_x}, {size_y}, {size_z})"
        )

    hx, hy, hz = size_x / 2.0, size_y / 2.0, size_z / 2.0
    mesh = MeshData()

    for z in (-hz, hz):
        mesh.add_vertex(-hx, -hy, z)
        mesh.add_vertex(hx, -hy, z)
        mesh.add_vertex(hx, hy, z)
        mesh.add_vertex(-hx, hy, z)

    mesh.add_quad(0, 3, 2, 1)  # bottom
    mesh.add_quad(4, 5, 6, 7)  # top
    mesh.add_quad(0, 1, 5, 4)  # -Y
    mesh.add_quad(1, 2, 6, 5)  # +X
    mesh.add_quad(2, 3, 7, 6)  # +Y
    mesh.add_quad(3, 0, 4, 7)  # -X

    mesh.compute_normals()
    return mesh


def make_wall(
    points: Sequence[Point2D],
    thickness: float,
    height: float,
    closed: bool = False
) -> MeshData:
    """
    Free-standing wall following a polyline.

    Open walls widen the polyline into a ribbon. Closed walls connect the
    last point back to the first and are built as a ring between the
    polygon expanded by thickness/2 and the polygon shrunk by thickness/2.

    Args:
        points: Wall centerline
        thickness: Wall thickness (> 0)
        height: Wall height (> 0)
        closed: Whether the centerline is a closed loop

    Returns:
        Wall solid

    Raises:
        InvalidArgument: On bad sizes, or if a closed wall is so thick that
            its inner opening vanishes
    """
    if thickness <= 0:
        raise InvalidArgument(f"Wall thickness must be positive, got {thickness}")
    if height <= 0:
        raise InvalidArgument(f"Wall height must be positive, got {height}")

    if not closed:
        return thicken_polygon(widen_polyline_border(points, thickness), height)

    outer = expand_polygon(points, thickness / 2.0)
    inner_rings = offset_polygon(points, -thickness / 2.0)
    if not inner_rings:
        raise InvalidArgument(
            f"Closed wall of thickness {thickness} leaves no inner opening"
        )
    if len(inner_rings) > 1:
        logger.debug(
            f"Closed wall opening split into {len(inner_rings)} pieces, "
            f"keeping the largest"
        )

    return thicken_polygon(outer, height, holes=[inner_rings[0]])
