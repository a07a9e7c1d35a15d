"""
Polygon utilities for City Buildings Generator.

Provides area and winding helpers, regular polygons, polyline widening,
outward polygon expansion, general polygon offsetting, segmented
centerlines and edge tessellation.

All rings are implicitly closed lists of Point2D (the first point is
never repeated at the end).
"""

from typing import Callable, Iterator, List, Sequence, Tuple
import math

from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.polygon import orient

from ..config import MIN_SEGMENT_LENGTH, OFFSET_MIN_AREA, OFFSET_MITRE_LIMIT
from ..errors import InvalidArgument
from ..models.geometry import Point2D
from .math_utils import line_intersection_2d, perpendicular_vector


def polygon_signed_area(ring: Sequence[Point2D]) -> float:
    """
    Compute signed area using shoelace formula.

    Args:
        ring: List of polygon vertices

    Returns:
        Signed area (positive = CCW, negative = CW)
    """
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y
        area -= ring[j].x * ring[i].y

    return area / 2.0


def polygon_area(ring: Sequence[Point2D]) -> float:
    """
    Compute unsigned area of polygon.

    Args:
        ring: List of polygon vertices

    Returns:
        Absolute area
    """
    return abs(polygon_signed_area(ring))


def polygon_centroid(ring: Sequence[Point2D]) -> Point2D:
    """
    Compute the vertex average of a ring.

    Args:
        ring: List of polygon vertices

    Returns:
        Centroid point
    """
    n = len(ring)
    if n == 0:
        return Point2D(0.0, 0.0)

    if n == 1:
        return ring[0]

    cx = sum(p.x for p in ring) / n
    cy = sum(p.y for p in ring) / n
    return Point2D(cx, cy)


def is_clockwise(ring: Sequence[Point2D]) -> bool:
    """
    Check if ring is clockwise.

    Args:
        ring: List of polygon vertices

    Returns:
        True if clockwise (negative signed area)
    """
    return polygon_signed_area(ring) < 0


def reverse_ring(ring: Sequence[Point2D]) -> List[Point2D]:
    """
    Reverse the order of vertices in a ring.

    Args:
        ring: List of polygon vertices

    Returns:
        Reversed ring
    """
    return list(reversed(ring))


def ensure_ccw(ring: Sequence[Point2D]) -> List[Point2D]:
    """
    Ensure ring is counter-clockwise, reversing if needed.

    Args:
        ring: List of polygon vertices

    Returns:
        Ring in CCW order (always a new list)
    """
    if is_clockwise(ring):
        return reverse_ring(ring)
    return list(ring)


def ensure_cw(ring: Sequence[Point2D]) -> List[Point2D]:
    """
    Ensure ring is clockwise, reversing if needed.

    Args:
        ring: List of polygon vertices

    Returns:
        Ring in CW order (always a new list)
    """
    if not is_clockwise(ring):
        return reverse_ring(ring)
    return list(ring)


def iter_edges(ring: Sequence[Point2D]) -> Iterator[Tuple[Point2D, Point2D]]:
    """Yield (start, end) pairs for every edge of a closed ring."""
    n = len(ring)
    for i in range(n):
        yield ring[i], ring[(i + 1) % n]


def regular_polygon(
    sides: int,
    radius: float,
    base_angle: float = 0.0,
    center: Point2D = Point2D(0.0, 0.0)
) -> List[Point2D]:
    """
    Points of a regular polygon, CCW, first vertex at base_angle.

    Args:
        sides: Number of sides (>= 3)
        radius: Distance from center to every vertex (> 0)
        base_angle: Angle of the first vertex in radians
        center: Polygon center

    Returns:
        List of `sides` points

    Raises:
        InvalidArgument: If sides < 3 or radius <= 0
    """
    if sides < 3:
        raise InvalidArgument(f"Regular polygon needs at least 3 sides, got {sides}")
    if radius <= 0:
        raise InvalidArgument(f"Regular polygon radius must be positive, got {radius}")

    step = 2.0 * math.pi / sides
    return [
        Point2D(
            center.x + math.cos(base_angle + i * step) * radius,
            center.y + math.sin(base_angle + i * step) * radius,
        )
        for i in range(sides)
    ]


def widen_polyline(
    points: Sequence[Point2D],
    width: float,
    lengthen_ends: bool = False
) -> List[Tuple[Point2D, Point2D]]:
    """
    Widen a polyline into a quad strip.

    Each point is offset by +-width/2 along the perpendicular of the
    bisector of its incoming and outgoing directions. The end points use a
    virtual neighbour extrapolated along their only segment.

    Args:
        points: Centerline vertices (>= 2, no zero-length segments)
        width: Strip width (> 0)
        lengthen_ends: Push both end points outward by width/2 first

    Returns:
        One (right, left) pair per source point, right being on the
        clockwise side of the walking direction

    Raises:
        InvalidArgument: On too few points, non-positive width or
            zero-length segments
    """
    n = len(points)
    if n < 2:
        raise InvalidArgument(f"Polyline needs at least 2 points, got {n}")
    if width <= 0:
        raise InvalidArgument(f"Polyline width must be positive, got {width}")

    directions = []
    for a, b in zip(points[:-1], points[1:]):
        segment = b - a
        if segment.length() < MIN_SEGMENT_LENGTH:
            raise InvalidArgument(f"Polyline has a zero-length segment at {a}")
        directions.append(segment.normalized())

    half = width / 2.0
    pts = list(points)
    if lengthen_ends:
        pts[0] = pts[0] - directions[0].scale(half)
        pts[-1] = pts[-1] + directions[-1].scale(half)

    strip = []
    for i, p in enumerate(pts):
        d_in = directions[i - 1] if i > 0 else directions[0]
        d_out = directions[i] if i < n - 1 else directions[-1]

        bisector = (d_in + d_out).normalized()
        if bisector.length() == 0.0:
            # Full reversal: fall back to the incoming direction
            bisector = d_in

        side = perpendicular_vector(bisector).scale(half)
        strip.append((p - side, p + side))

    return strip


def widen_polyline_border(
    points: Sequence[Point2D],
    width: float,
    lengthen_ends: bool = True
) -> List[Point2D]:
    """
    Closed border of a widened polyline.

    The right side is walked forward, then the left side backward, so the
    border is CCW for straight or left-turning lines. Vertex i and vertex
    2n-1-i are the right/left partners of source point i.

    Args:
        points: Centerline vertices
        width: Ribbon width
        lengthen_ends: Push both end points outward by width/2 first

    Returns:
        Border ring with 2 * len(points) vertices
    """
    strip = widen_polyline(points, width, lengthen_ends)
    right = [r for r, _ in strip]
    left = [l for _, l in strip]
    return right + left[::-1]


def expand_polygon(ring: Sequence[Point2D], delta: float) -> List[Point2D]:
    """
    Grow a polygon outward by moving every edge along its outward normal.

    Adjacent offset edges are re-intersected to find the new vertices, so
    the result always has the same vertex count as the input. Where two
    neighbouring edges are parallel the vertex is moved along their shared
    normal instead.

    Args:
        ring: Polygon vertices (any winding)
        delta: Offset distance (>= 0)

    Returns:
        Expanded ring in CCW order

    Raises:
        InvalidArgument: If delta < 0, the ring has fewer than 3 vertices or
            a zero-length edge
    """
    if delta < 0:
        raise InvalidArgument(f"expand_polygon only grows polygons, got delta={delta}")
    if len(ring) < 3:
        raise InvalidArgument(f"Polygon needs at least 3 vertices, got {len(ring)}")

    ccw = ensure_ccw(ring)
    if delta == 0:
        return ccw

    # Outward normal of a CCW edge points to its right
    normals = []
    for a, b in iter_edges(ccw):
        d = b - a
        if d.length() < MIN_SEGMENT_LENGTH:
            raise InvalidArgument(f"Polygon has a zero-length edge at {a}")
        d = d.normalized()
        normals.append(Point2D(d.y, -d.x))

    n = len(ccw)
    result = []
    for i in range(n):
        prev = (i - 1) % n
        shift_prev = normals[prev].scale(delta)
        shift_next = normals[i].scale(delta)

        hit = line_intersection_2d(
            ccw[prev] + shift_prev, ccw[i] + shift_prev,
            ccw[i] + shift_next, ccw[(i + 1) % n] + shift_next,
        )
        if hit is None:
            hit = ccw[i] + shift_next
        result.append(hit)

    return result


def offset_polygon(ring: Sequence[Point2D], delta: float) -> List[List[Point2D]]:
    """
    Offset a polygon inward (delta < 0) or outward (delta > 0).

    Uses a mitred shapely buffer. An inward offset may split the polygon
    into several pieces or make it vanish entirely.

    Args:
        ring: Polygon vertices (any winding)
        delta: Signed offset distance

    Returns:
        CCW rings ordered by descending area. Rings with an area at or
        below OFFSET_MIN_AREA are dropped; an empty list means the polygon
        collapsed. Interior rings of the result are ignored.

    Raises:
        InvalidArgument: If the ring has fewer than 3 vertices
    """
    if len(ring) < 3:
        raise InvalidArgument(f"Polygon needs at least 3 vertices, got {len(ring)}")

    shape = ShapelyPolygon([(p.x, p.y) for p in ring])
    buffered = shape.buffer(delta, join_style="mitre", mitre_limit=OFFSET_MITRE_LIMIT)

    if buffered.is_empty:
        return []

    pieces = getattr(buffered, "geoms", [buffered])
    pieces = [
        piece for piece in pieces
        if piece.geom_type == "Polygon" and piece.area > OFFSET_MIN_AREA
    ]
    pieces.sort(key=lambda piece: piece.area, reverse=True)

    rings = []
    for piece in pieces:
        exterior = orient(piece, sign=1.0).exterior
        rings.append([Point2D(x, y) for x, y in exterior.coords[:-1]])

    return rings


def segmented_line(
    start: Point2D,
    steps: int,
    start_angle: float,
    angle_delta: Callable[[], float],
    length: Callable[[], float]
) -> List[Point2D]:
    """
    Build a polyline by walking `steps` segments from start.

    The first segment points along start_angle; before every later segment
    the running angle is incremented by angle_delta(). Each segment length
    is drawn from length().

    Args:
        start: First point
        steps: Number of segments (>= 1)
        start_angle: Direction of the first segment in radians
        angle_delta: Callable returning the turn before each later segment
        length: Callable returning each segment length

    Returns:
        steps + 1 points
    """
    if steps < 1:
        raise InvalidArgument(f"Segmented line needs at least 1 step, got {steps}")

    points = [start]
    angle = start_angle
    current = start
    for step in range(steps):
        if step > 0:
            angle += angle_delta()
        seg_length = length()
        current = current + Point2D(math.cos(angle), math.sin(angle)).scale(seg_length)
        points.append(current)

    return points


def tessellate_ring(ring: Sequence[Point2D], num_segments: int = 2) -> List[Point2D]:
    """
    Split every edge of a ring into num_segments equal parts.

    Args:
        ring: Polygon vertices
        num_segments: Parts per edge (>= 1, 1 returns a copy)

    Returns:
        Ring with len(ring) * num_segments vertices
    """
    if num_segments < 1:
        raise InvalidArgument(f"num_segments must be at least 1, got {num_segments}")

    result = []
    for a, b in iter_edges(ring):
        result.append(a)
        for j in range(1, num_segments):
            t = j / num_segments
            result.append(a + (b - a).scale(t))
    return result


def _fractalize(
    ring: Sequence[Point2D],
    outside: bool,
    levels: int,
    bump: Callable[[Point2D, Point2D, Point2D], List[Point2D]]
) -> List[Point2D]:
    """
    Replace the middle third of every edge with a bump, levels times.

    bump(mid1, mid2, normal) returns the points inserted between the two
    third points, where normal is the unit normal pointing out of (or into)
    the ring.
    """
    if len(ring) < 3:
        raise InvalidArgument(f"Polygon needs at least 3 vertices, got {len(ring)}")
    if levels < 0:
        raise InvalidArgument(f"levels must be non-negative, got {levels}")

    points = ensure_ccw(ring)
    sign = 1.0 if outside else -1.0

    for _ in range(levels):
        result = []
        for a, b in iter_edges(points):
            d = b - a
            if d.length() < MIN_SEGMENT_LENGTH:
                raise InvalidArgument(f"Polygon has a zero-length edge at {a}")
            normal = Point2D(d.y, -d.x).normalized().scale(sign)
            mid1 = a + d.scale(1.0 / 3.0)
            mid2 = a + d.scale(2.0 / 3.0)
            result.append(a)
            result.append(mid1)
            result.extend(bump(mid1, mid2, normal))
            result.append(mid2)
        points = result

    return points


def fractalize_triangle(
    ring: Sequence[Point2D],
    outside: bool = True,
    levels: int = 1
) -> List[Point2D]:
    """
    Grow an equilateral triangle on the middle third of every edge.

    One level on an equilateral triangle gives the Koch star; every level
    multiplies the vertex count by 4.

    Args:
        ring: Base polygon (any winding, returned CCW)
        outside: Triangles point out of the polygon if True, into it otherwise
        levels: Number of times the construction is repeated

    Returns:
        New ring with len(ring) * 4**levels vertices
    """
    def bump(mid1, mid2, normal):
        height = mid1.distance_to(mid2) * math.sqrt(3.0) / 2.0
        mid = (mid1 + mid2).scale(0.5)
        return [mid + normal.scale(height)]

    return _fractalize(ring, outside, levels, bump)


def fractalize_square(
    ring: Sequence[Point2D],
    outside: bool = True,
    levels: int = 1
) -> List[Point2D]:
    """
    Grow a square on the middle third of every edge.

    Args:
        ring: Base polygon (any winding, returned CCW)
        outside: Squares stick out of the polygon if True, into it otherwise
        levels: Number of times the construction is repeated

    Returns:
        New ring with len(ring) * 5**levels vertices
    """
    def bump(mid1, mid2, normal):
        offset = normal.scale(mid1.distance_to(mid2))
        return [mid1 + offset, mid2 + offset]

    return _fractalize(ring, outside, levels, bump)
