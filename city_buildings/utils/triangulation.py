"""
Triangulation utilities for City Buildings Generator.

Wraps the constrained Delaunay triangulation of shapely (GEOS) for
polygons with holes. Used for the caps of extruded solids and the base
of pyramid roofs.
"""

from typing import List, Sequence, Tuple, Union
import logging

import shapely
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.polygon import orient

from ..errors import TriangulationError
from ..models.geometry import Point2D, Polygon
from .polygon_utils import ensure_ccw, ensure_cw

logger = logging.getLogger(__name__)

# Triangles with a doubled area below this are skipped
_MIN_DOUBLE_AREA = 1e-12


def triangulate(
    border: Union[Sequence[Point2D], Polygon],
    holes: Sequence[Sequence[Point2D]] = ()
) -> Tuple[List[Point2D], List[Tuple[int, int, int]]]:
    """
    Triangulate a polygon with optional holes.

    The border is normalized to CCW and holes to CW before being handed to
    GEOS. The triangulation only uses the input vertices.

    Args:
        border: Outer ring (>= 3 points), or a Polygon whose holes are
            added to holes
        holes: Inner rings (each >= 3 points)

    Returns:
        Tuple of (vertices, triangles): three vertices per triangle (not
        deduplicated) and one CCW index triple into them per triangle

    Raises:
        TriangulationError: If a ring is too short or the polygon is invalid
            (self-intersecting, holes outside the border, ...)
    """
    if isinstance(border, Polygon):
        holes = list(border.holes) + list(holes)
        border = border.outer_ring

    if len(border) < 3:
        raise TriangulationError(
            f"Border needs at least 3 points, got {len(border)}"
        )
    for i, hole in enumerate(holes):
        if len(hole) < 3:
            raise TriangulationError(
                f"Hole {i} needs at least 3 points, got {len(hole)}"
            )

    outer = [(p.x, p.y) for p in ensure_ccw(border)]
    inner = [[(p.x, p.y) for p in ensure_cw(hole)] for hole in holes]
    polygon = ShapelyPolygon(outer, inner)

    if not polygon.is_valid:
        raise TriangulationError(
            f"Cannot triangulate invalid polygon: {shapely.is_valid_reason(polygon)}"
        )

    result = shapely.constrained_delaunay_triangles(polygon)

    vertices: List[Point2D] = []
    triangles: List[Tuple[int, int, int]] = []
    skipped = 0

    for tri in getattr(result, "geoms", []):
        coords = orient(tri, sign=1.0).exterior.coords[:3]
        (x0, y0), (x1, y1), (x2, y2) = coords
        double_area = (x1 - x0) * (y2 - y0) - (x2 - x0) * (y1 - y0)
        if double_area < _MIN_DOUBLE_AREA:
            skipped += 1
            continue

        base = len(vertices)
        vertices.extend(Point2D(x, y) for x, y in coords)
        triangles.append((base, base + 1, base + 2))

    if skipped:
        logger.debug(f"Skipped {skipped} degenerate triangles")

    return vertices, triangles
