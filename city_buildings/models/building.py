"""
Building data model for City Buildings Generator.

Provides the parameter records consumed by the building composer:
floor plan variants, roof variants, window rules, the BuildingParams
record itself, and the placed Instance records it produces.

Floor plans and roofs are sum types: one dataclass per variant, each
carrying only the fields that variant needs. Dispatch is done with
isinstance checks.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union
import math

from .geometry import Point2D, Point3D
from .mesh import MeshData

Color = Tuple[float, float, float]

WHITE: Color = (1.0, 1.0, 1.0)


# =============================================================================
# FLOOR PLANS
# =============================================================================

@dataclass(frozen=True)
class MainPointsPlan:
    """
    Floor plan from a centerline polyline widened to a ribbon.

    Attributes:
        main_points: Centerline vertices (at least 2)
        width: Ribbon width at the ground floor
    """
    main_points: Tuple[Point2D, ...]
    width: float

    def __post_init__(self):
        object.__setattr__(self, 'main_points', tuple(self.main_points))


@dataclass(frozen=True)
class BorderPlan:
    """Floor plan given directly as a closed polygon."""
    border: Tuple[Point2D, ...]

    def __post_init__(self):
        object.__setattr__(self, 'border', tuple(self.border))


@dataclass(frozen=True)
class RegularPlan:
    """
    Regular polygon floor plan.

    Described by its center, one of its vertices and the number of sides.
    """
    center: Point2D
    vertex: Point2D
    num_sides: int

    @property
    def radius(self) -> float:
        """Distance from center to every vertex."""
        return self.center.distance_to(self.vertex)

    @property
    def base_angle(self) -> float:
        """Angle of the given vertex as seen from the center (radians)."""
        return (self.vertex - self.center).angle()

    @classmethod
    def from_radius(
        cls,
        num_sides: int,
        radius: float,
        base_angle: float = 0.0,
        center: Point2D = Point2D(0.0, 0.0)
    ) -> 'RegularPlan':
        """Build a plan from radius and base angle instead of a vertex."""
        vertex = Point2D(
            center.x + math.cos(base_angle) * radius,
            center.y + math.sin(base_angle) * radius,
        )
        return cls(center=center, vertex=vertex, num_sides=num_sides)


FloorPlan = Union[MainPointsPlan, BorderPlan, RegularPlan]


# =============================================================================
# ROOFS
# =============================================================================

@dataclass(frozen=True)
class RafterTrim:
    """
    Thickened rafter trim for gabled roofs.

    Attributes:
        thickness: Material thickness measured perpendicular to the slope
        rake_overhang: Overhang past the gable ends, along the ridge
        roof_overhang: Overhang past the eaves, measured horizontally
        color: Trim color
    """
    thickness: float
    rake_overhang: float = 0.0
    roof_overhang: float = 0.0
    color: Color = WHITE


@dataclass(frozen=True)
class NoRoof:
    """Flat top, no roof geometry."""
    color: Color = WHITE


@dataclass(frozen=True)
class CrossGabledRoof:
    """Gabled roof following the main points; angle in radians."""
    angle: float
    trim: Optional[RafterTrim] = None
    color: Color = WHITE


@dataclass(frozen=True)
class CrossHippedRoof:
    """Gabled roof whose end ridge points are pulled in by hip_depth."""
    angle: float
    hip_depth: float
    color: Color = WHITE


@dataclass(frozen=True)
class PyramidRoof:
    """Pyramid over any floor border, apex above the centroid."""
    apex_height: float
    color: Color = WHITE


RoofSpec = Union[NoRoof, CrossGabledRoof, CrossHippedRoof, PyramidRoof]


# =============================================================================
# WINDOWS
# =============================================================================

@dataclass
class WindowSpec:
    """
    Window placement rules.

    Window meshes are assumed centered at the origin on all three axes,
    with width along X, depth along Y and height along Z. They are shared
    by reference across every placed window.

    Attributes:
        name: Name prefix for window instances
        spacing: Desired distance between windows
        edge_distance: Minimum distance between a window and a corner
        open_mesh: Mesh used for open windows
        closed_mesh: Mesh used for closed windows
        open_ratio: Probability of a placed window being open
        filled_ratio: Probability of a slot actually receiving a window
    """
    name: str
    spacing: float
    edge_distance: float
    open_mesh: Optional[MeshData]
    closed_mesh: Optional[MeshData]
    open_ratio: float = 0.5
    filled_ratio: float = 1.0


# =============================================================================
# BUILDING PARAMETERS
# =============================================================================

@dataclass
class BuildingParams:
    """
    Complete parameter record for one building.

    Constructed once per building, consumed by the composer, then
    discarded. Owns no meshes.

    Attributes:
        building_id: Name prefix of every produced instance
        plan: Floor plan variant
        num_floors: Number of stories (>= 1)
        floor_height: Height of one floor slab
        belt_height: Height of the belt course between floors (0 disables)
        belt_extra_width: How much wider than the floor the belt is
        width_delta_per_floor: Offset applied per floor (> 0 taper out,
            < 0 taper in)
        color: Floor color
        belt_color: Belt course color
        roof: Roof variant
        windows: Window rules (None for no windows)
        rng: Random source used for window selection
    """
    building_id: str
    plan: FloorPlan
    num_floors: int = 1
    floor_height: float = 3.0
    belt_height: float = 0.0
    belt_extra_width: float = 0.0
    width_delta_per_floor: float = 0.0
    color: Color = WHITE
    belt_color: Color = WHITE
    roof: RoofSpec = field(default_factory=NoRoof)
    windows: Optional[WindowSpec] = None
    rng: Optional[object] = None


# =============================================================================
# PLACED INSTANCES
# =============================================================================

@dataclass(frozen=True)
class Frame:
    """
    Placement transform: origin plus orthonormal axes.

    The default frame is the identity at the origin.
    """
    origin: Point3D = Point3D(0.0, 0.0, 0.0)
    x: Point3D = Point3D(1.0, 0.0, 0.0)
    y: Point3D = Point3D(0.0, 1.0, 0.0)
    z: Point3D = Point3D(0.0, 0.0, 1.0)

    @classmethod
    def rotated_z(cls, origin: Point3D, angle: float) -> 'Frame':
        """Frame at origin whose X axis points along angle in the ground plane."""
        c = math.cos(angle)
        s = math.sin(angle)
        return cls(
            origin=origin,
            x=Point3D(c, s, 0.0),
            y=Point3D(-s, c, 0.0),
            z=Point3D(0.0, 0.0, 1.0),
        )

    def translated(self, offset: Point3D) -> 'Frame':
        """Copy of this frame moved by offset."""
        return Frame(self.origin + offset, self.x, self.y, self.z)

    def transform_point(self, p: Point3D) -> Point3D:
        """Map a point from local to world coordinates."""
        return (
            self.origin
            + self.x.scale(p.x)
            + self.y.scale(p.y)
            + self.z.scale(p.z)
        )


@dataclass(frozen=True)
class Instance:
    """
    A placed mesh.

    The mesh is a shared reference: window meshes in particular are reused
    by thousands of instances and must never be copied per placement.
    """
    name: str
    mesh: MeshData
    frame: Frame = Frame()
    color: Color = WHITE

    def translated(self, offset: Point3D) -> 'Instance':
        """Copy of this instance moved by offset, sharing the same mesh."""
        return Instance(self.name, self.mesh, self.frame.translated(offset), self.color)


@dataclass
class BuildingGeneratorResult:
    """Result of building generation."""
    building_id: str
    instances: List[Instance] = field(default_factory=list)
    height: float = 0.0
    stats: dict = field(default_factory=dict)
