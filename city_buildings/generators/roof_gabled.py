"""
Gabled roof generator for City Buildings Generator.

Generates roofs that follow the centerline (main points) of a widened
floor plan:
1. Eave vertices come from the widened floor border
2. One ridge vertex sits above the midpoint of every right/left eave pair
3. Each centerline segment gets an eave underside quad and two slope quads
4. Two triangular gable ends close the roof

Cross-hipped roofs reuse the gabled geometry and pull the two end ridge
vertices inward. The rafter trim is a separate, thickened copy of the
slopes with optional overhangs.

Vertex layout of the gabled mesh for n main points:
    0 .. n-1       right eave points (walking direction)
    n .. 2n-1      left eave points, walked backward
    2n .. 3n-1     ridge points, one per main point

Vertex layout of the rafter trim: six vertices per main point i,
starting at 6i:
    +0 right eave   +1 left eave   +2 ridge
    +3 right eave, outer   +4 left eave, outer   +5 ridge, top
"""

from typing import List, Sequence, Tuple
import math
import logging

from ..errors import InvalidArgument
from ..models.building import RafterTrim
from ..models.geometry import Point2D, Point3D
from ..models.mesh import MeshData
from ..utils.math_utils import is_open_interval
from ..utils.polygon_utils import widen_polyline_border

logger = logging.getLogger(__name__)


def _check_roof_angle(angle: float) -> None:
    if not is_open_interval(angle, 0.0, math.pi / 2.0):
        raise InvalidArgument(
            f"Roof angle must lie strictly between 0 and pi/2, got {angle}"
        )


def _eave_pairs(
    main_points: Sequence[Point2D],
    width: float
) -> Tuple[List[Point2D], List[Point2D]]:
    """Right and left eave points, one of each per main point."""
    border = widen_polyline_border(main_points, width)
    n = len(main_points)
    right = border[:n]
    left = [border[2 * n - 1 - i] for i in range(n)]
    return right, left


def _build_gabled_mesh(
    main_points: Sequence[Point2D],
    width: float,
    angle: float,
    base_height: float
) -> MeshData:
    """Gabled roof positions and faces, without normals."""
    _check_roof_angle(angle)

    ridge_height = math.tan(angle) * width / 2.0
    right, left = _eave_pairs(main_points, width)
    n = len(right)

    mesh = MeshData()
    for p in right:
        mesh.add_vertex(p.x, p.y, base_height)
    for p in reversed(left):
        mesh.add_vertex(p.x, p.y, base_height)
    for r, l in zip(right, left):
        mesh.add_vertex((r.x + l.x) / 2.0, (r.y + l.y) / 2.0, base_height + ridge_height)

    def r_idx(i):
        return i

    def l_idx(i):
        return 2 * n - 1 - i

    def m_idx(i):
        return 2 * n + i

    for i in range(n - 1):
        j = i + 1
        # Eave underside, facing down
        mesh.add_quad(r_idx(i), l_idx(i), l_idx(j), r_idx(j))
        # Right slope
        mesh.add_quad(r_idx(i), r_idx(j), m_idx(j), m_idx(i))
        # Left slope
        mesh.add_quad(l_idx(j), l_idx(i), m_idx(i), m_idx(j))

    # Gable ends
    mesh.add_triangle(r_idx(0), m_idx(0), l_idx(0))
    mesh.add_triangle(r_idx(n - 1), l_idx(n - 1), m_idx(n - 1))

    return mesh


def make_cross_gabled_roof(
    main_points: Sequence[Point2D],
    width: float,
    angle: float,
    base_height: float = 0.0
) -> MeshData:
    """
    Generate a gabled roof following the main points of a floor plan.

    Args:
        main_points: Floor centerline (>= 2 points)
        width: Width of the floor under the roof
        angle: Slope angle in radians, in (0, pi/2)
        base_height: Elevation of the eaves

    Returns:
        MeshData with 3n vertices, 3(n-1) quads and 2 gable triangles

    Raises:
        InvalidArgument: On a bad angle or an invalid centerline
    """
    mesh = _build_gabled_mesh(main_points, width, angle, base_height)
    mesh.compute_normals()

    logger.debug(
        f"Gabled roof: {len(main_points)} main points, "
        f"ridge height {math.tan(angle) * width / 2.0:.2f}m"
    )
    return mesh


def make_cross_hipped_roof(
    main_points: Sequence[Point2D],
    width: float,
    angle: float,
    hip_depth: float,
    base_height: float = 0.0
) -> MeshData:
    """
    Generate a hipped roof: a gabled roof with both end ridge points
    pulled inward along the ridge by hip_depth.

    Args:
        main_points: Floor centerline (>= 2 points)
        width: Width of the floor under the roof
        angle: Slope angle in radians, in (0, pi/2)
        hip_depth: How far the end ridge points move inward
        base_height: Elevation of the eaves

    Returns:
        MeshData with the same topology as the gabled roof

    Raises:
        InvalidArgument: If hip_depth is negative or reaches past the
            first or last ridge segment (half of it for a single segment)
    """
    if hip_depth < 0:
        raise InvalidArgument(f"hip_depth must be non-negative, got {hip_depth}")

    mesh = _build_gabled_mesh(main_points, width, angle, base_height)
    n = len(main_points)
    first = 2 * n
    last = 3 * n - 1

    ridge_first = Point3D(*mesh.vertices[first])
    ridge_second = Point3D(*mesh.vertices[first + 1])
    ridge_before_last = Point3D(*mesh.vertices[last - 1])
    ridge_last = Point3D(*mesh.vertices[last])

    first_length = ridge_first.distance_to(ridge_second)
    last_length = ridge_last.distance_to(ridge_before_last)
    if n == 2:
        limit = first_length / 2.0
    else:
        limit = min(first_length, last_length)

    if hip_depth >= limit:
        raise InvalidArgument(
            f"hip_depth {hip_depth:.3f} must be smaller than {limit:.3f} "
            f"for these main points"
        )

    moved_first = ridge_first + (ridge_second - ridge_first).normalized().scale(hip_depth)
    moved_last = ridge_last - (ridge_last - ridge_before_last).normalized().scale(hip_depth)
    mesh.vertices[first] = moved_first.as_tuple()
    mesh.vertices[last] = moved_last.as_tuple()

    mesh.compute_normals()
    return mesh


def make_rafter_trim(
    main_points: Sequence[Point2D],
    width: float,
    angle: float,
    trim: RafterTrim,
    base_height: float = 0.0
) -> MeshData:
    """
    Generate the thickened rafter trim that sits on a gabled roof.

    Six vertices are generated per main point: the right eave, left eave
    and ridge points of the roof, plus the same three points pushed out by
    the trim thickness. Gable end quads are only generated at the two
    physical ends of the roof.

    Thickness is measured perpendicular to the slope, so the vertical and
    horizontal offsets follow from the law of sines:
        thick_height = t / sin(pi/2 - angle)
        thick_width  = t / sin(angle)

    Args:
        main_points: Floor centerline (>= 2 points)
        width: Width of the floor under the roof
        angle: Slope angle in radians, in (0, pi/2)
        trim: Thickness and overhangs
        base_height: Elevation of the eaves

    Returns:
        MeshData made of quads only

    Raises:
        InvalidArgument: On a bad angle, non-positive thickness or
            negative overhangs
    """
    _check_roof_angle(angle)
    if trim.thickness <= 0:
        raise InvalidArgument(f"Trim thickness must be positive, got {trim.thickness}")
    if trim.rake_overhang < 0 or trim.roof_overhang < 0:
        raise InvalidArgument(
            f"Overhangs must be non-negative, got rake={trim.rake_overhang}, "
            f"roof={trim.roof_overhang}"
        )

    ridge_height = math.tan(angle) * width / 2.0
    thick_height = trim.thickness / math.sin(math.pi / 2.0 - angle)
    thick_width = trim.thickness / math.sin(angle)

    right, left = _eave_pairs(main_points, width)
    n = len(right)

    positions: List[Point3D] = []
    for r, l in zip(right, left):
        eave_r = r.to_3d(base_height)
        eave_l = l.to_3d(base_height)
        ridge = Point3D((r.x + l.x) / 2.0, (r.y + l.y) / 2.0, base_height + ridge_height)
        to_right = (eave_r - eave_l).normalized()

        positions.append(eave_r)
        positions.append(eave_l)
        positions.append(ridge)
        positions.append(eave_r + to_right.scale(thick_width))
        positions.append(eave_l - to_right.scale(thick_width))
        positions.append(ridge + Point3D(0.0, 0.0, thick_height))

    quads = []
    for i in range(n - 1):
        g = 6 * i
        h = g + 6
        # Underside, seen from below
        quads.append((g, g + 2, h + 2, h))
        quads.append((g + 1, h + 1, h + 2, g + 2))
        # Top, seen from above
        quads.append((g + 3, h + 3, h + 5, g + 5))
        quads.append((g + 4, g + 5, h + 5, h + 4))
        # Flat soffits under the eaves
        quads.append((g, h, h + 3, g + 3))
        quads.append((g + 1, g + 4, h + 4, h + 1))
        if i == 0:
            quads.append((g, g + 3, g + 5, g + 2))
            quads.append((g + 1, g + 2, g + 5, g + 4))
        if i == n - 2:
            quads.append((h, h + 2, h + 5, h + 3))
            quads.append((h + 1, h + 4, h + 5, h + 2))

    if trim.rake_overhang > 0:
        direction = (positions[6] - positions[0]).normalized().scale(trim.rake_overhang)
        for k in range(6):
            positions[k] = positions[k] - direction
        direction = (positions[-1] - positions[-7]).normalized().scale(trim.rake_overhang)
        for k in range(len(positions) - 6, len(positions)):
            positions[k] = positions[k] + direction

    if trim.roof_overhang > 0:
        length = trim.roof_overhang / math.sin(math.pi / 2.0 - angle)
        for g in range(0, len(positions), 6):
            to_top = (positions[g + 2] - positions[g]).normalized().scale(length)
            positions[g] = positions[g] - to_top
            positions[g + 3] = positions[g + 3] - to_top
            # Mirror the horizontal part for the left side
            to_top = Point3D(-to_top.x, -to_top.y, to_top.z)
            positions[g + 1] = positions[g + 1] - to_top
            positions[g + 4] = positions[g + 4] - to_top

    mesh = MeshData(vertices=[p.as_tuple() for p in positions], quads=quads)
    mesh.compute_normals()
    return mesh
