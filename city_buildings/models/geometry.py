"""
Core geometry types for City Buildings Generator.

Provides Point2D, Point3D and Polygon classes used throughout the
geometry engine. All polygon math happens in the XY ground plane;
Z is up and elevation is added at assembly time.
"""

from dataclasses import dataclass, field
from typing import List
import math


@dataclass(frozen=True, slots=True)
class Point2D:
    """2D point (or vector) in the ground plane."""
    x: float
    y: float

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return math.sqrt(dx * dx + dy * dy)

    def __sub__(self, other: 'Point2D') -> 'Point2D':
        """Vector subtraction."""
        return Point2D(self.x - other.x, self.y - other.y)

    def __add__(self, other: 'Point2D') -> 'Point2D':
        """Vector addition."""
        return Point2D(self.x + other.x, self.y + other.y)

    def scale(self, factor: float) -> 'Point2D':
        """Multiply both components by a scalar."""
        return Point2D(self.x * factor, self.y * factor)

    def dot(self, other: 'Point2D') -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: 'Point2D') -> float:
        """2D cross product (returns scalar z-component)."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Vector length."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalized(self) -> 'Point2D':
        """Unit vector in the same direction, or (0, 0) for a null vector."""
        length = self.length()
        if length < 1e-12:
            return Point2D(0.0, 0.0)
        return Point2D(self.x / length, self.y / length)

    def angle(self) -> float:
        """Angle of the vector in radians, CCW from +X."""
        return math.atan2(self.y, self.x)

    def to_3d(self, z: float = 0.0) -> 'Point3D':
        """Lift to 3D at elevation z."""
        return Point3D(self.x, self.y, z)


@dataclass(frozen=True, slots=True)
class Point3D:
    """3D point (or vector), Z up."""
    x: float
    y: float
    z: float

    def to_2d(self) -> Point2D:
        """Project to XY plane."""
        return Point2D(self.x, self.y)

    def distance_to(self, other: 'Point3D') -> float:
        """Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        dz = self.z - other.z
        return math.sqrt(dx * dx + dy * dy + dz * dz)

    def __sub__(self, other: 'Point3D') -> 'Point3D':
        """Vector subtraction."""
        return Point3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __add__(self, other: 'Point3D') -> 'Point3D':
        """Vector addition."""
        return Point3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def scale(self, factor: float) -> 'Point3D':
        """Multiply all components by a scalar."""
        return Point3D(self.x * factor, self.y * factor, self.z * factor)

    def dot(self, other: 'Point3D') -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: 'Point3D') -> 'Point3D':
        """Cross product."""
        return Point3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        """Vector length."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> 'Point3D':
        """Unit vector in the same direction, or the null vector."""
        length = self.length()
        if length < 1e-12:
            return Point3D(0.0, 0.0, 0.0)
        return Point3D(self.x / length, self.y / length, self.z / length)

    def as_tuple(self) -> tuple:
        """Plain (x, y, z) tuple, the form stored in MeshData."""
        return (self.x, self.y, self.z)



@dataclass
class Polygon:
    """
    2D polygon with optional holes, e.g. a courtyard floor plan.

    Attributes:
        outer_ring: List of Point2D forming the outer boundary (should be CCW)
        holes: List of inner rings (each should be CW)

    Rings are implicitly closed: the first point is never repeated at
    the end.
    """
    outer_ring: List[Point2D]
    holes: List[List[Point2D]] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        """Total number of vertices including holes."""
        return len(self.outer_ring) + sum(len(hole) for hole in self.holes)

    @property
    def has_holes(self) -> bool:
        return len(self.holes) > 0

    def area(self) -> float:
        """Area of the outer ring minus the holes."""
        total = abs(_signed_area(self.outer_ring))
        for hole in self.holes:
            total -= abs(_signed_area(hole))
        return total

    def is_ccw(self) -> bool:
        return _signed_area(self.outer_ring) > 0

    def ensure_ccw_outer(self) -> None:
        """Reverse the outer ring in place if it is CW."""
        if not self.is_ccw():
            self.outer_ring = list(reversed(self.outer_ring))

    def ensure_cw_holes(self) -> None:
        """Reverse every CCW hole in place."""
        for i, hole in enumerate(self.holes):
            if _signed_area(hole) > 0:
                self.holes[i] = list(reversed(hole))


def _signed_area(ring: List[Point2D]) -> float:
    """Shoelace area, positive for CCW rings."""
    n = len(ring)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += ring[i].x * ring[j].y - ring[j].x * ring[i].y
    return area / 2.0
