"""
Configuration constants for City Buildings Generator.

Contains all tunable parameters for building generation, including
geometry tolerances, default window meshes, the ranges used by the
random building factory, and city layout settings.
"""

from dataclasses import dataclass, field
import math
from typing import Tuple

Range = Tuple[float, float]


# =============================================================================
# GEOMETRY TOLERANCES
# =============================================================================

# Positions closer than this are merged into a single vertex
VERTEX_MERGE_TOLERANCE = 1e-6

# Rings produced by polygon offsetting with an area below this are dropped
OFFSET_MIN_AREA = 1e-9

# Mitre limit for polygon offsetting (ratio of mitre length to offset).
# Large enough that ordinary building corners are always re-intersected
# rather than bevelled.
OFFSET_MITRE_LIMIT = 50.0

# Segments shorter than this are considered zero-length
MIN_SEGMENT_LENGTH = 1e-9

# =============================================================================
# WINDOWS
# =============================================================================

# Default window meshes (meters): width (X), depth (Y), height (Z)
OPEN_WINDOW_SIZE = (1.6, 0.1, 1.0)
CLOSED_WINDOW_SIZE = (1.0, 0.1, 1.0)

OPEN_WINDOW_COLOR = (0.8, 0.8, 1.0)
CLOSED_WINDOW_COLOR = (0.3, 0.1, 0.0)

# =============================================================================
# RANDOM BUILDING PARAMETERS
# =============================================================================

# Floor plan kind weights: main points, border, regular
PLAN_KIND_WEIGHTS = (80.0, 5.0, 20.0)

# Centerline generation for main-points plans
SEGMENT_COUNT_CHOICES = (3, 4, 5, 6, 7, 8)
SEGMENT_START_ANGLE = math.pi / 2.0
SEGMENT_ANGLE_DELTA_RANGE = (-math.pi / 3.0, math.pi / 3.0)
SEGMENT_LENGTH_MEAN = 10.0
SEGMENT_LENGTH_SIGMA = 1.0

# Border plan shapes: fixed star, triangle fractal, square fractal of a
# regular polygon (one level, grown outward)
BORDER_SHAPE_WEIGHTS = (50.0, 25.0, 25.0)

# Star-shaped border used by border plans
DEFAULT_STAR_BORDER = (
    (10.0, 10.0), (0.0, 5.0), (-10.0, 10.0), (-5.0, 0.0),
    (-10.0, -10.0), (0.0, -5.0), (10.0, -10.0), (5.0, 0.0),
)

# Roof kind weights for main-points plans: gabled, hipped, pyramid, none
MAIN_POINTS_ROOF_WEIGHTS = (75.0, 10.0, 10.0, 5.0)
# Roof kind weights for other plans: pyramid, none
OTHER_ROOF_WEIGHTS = (85.0, 15.0)

# Upper bound of the random hip depth, as a fraction of the shorter end segment
HIP_DEPTH_FRACTION = 0.9

# =============================================================================
# CITY LAYOUT
# =============================================================================

DEFAULT_BUILDINGS_PER_SIDE = 14
DEFAULT_BUILDING_SPACING = 70.0
DEFAULT_GROUND_SIZE = 5000.0
GROUND_COLOR = (0.3, 0.3, 0.1)


# =============================================================================
# RUNTIME CONFIGURATION
# =============================================================================

def _check_range(name: str, value: Range, minimum: float = None) -> None:
    low, high = value
    if low > high:
        raise ValueError(f"{name} must be a (low, high) range, got {value}")
    if minimum is not None and low < minimum:
        raise ValueError(f"{name} must not go below {minimum}, got {value}")


@dataclass
class GeneratorConfig:
    """
    Ranges used by the random building parameter factory.

    Every range is a (low, high) tuple sampled uniformly unless noted.
    """

    # Floor plans
    floor_width: Range = (5.0, 15.0)
    regular_sides: Tuple[int, int] = (3, 4)  # Inclusive integer range
    regular_radius: Range = (5.0, 15.0)
    regular_base_angle: Range = (0.0, math.pi)

    # Floors
    num_floors: Tuple[int, int] = (3, 8)  # Inclusive integer range
    floor_height: Range = (2.5, 5.0)
    belt_height: Range = (0.25, 0.45)
    belt_extra_width: Range = (0.25, 0.45)
    width_delta_per_floor: Range = (-0.15, 2.0)

    # Roofs
    roof_angle: Range = (math.pi / 10.0, math.pi / 3.0)
    trim_thickness: Range = (0.25, 0.75)
    rake_overhang: Range = (0.1, 2.0)
    roof_overhang: Range = (0.1, 1.0)
    apex_height: Range = (3.0, 13.0)

    # Windows
    window_spacing: Range = (0.1, 0.5)
    window_edge_distance: Range = (0.2, 0.5)
    open_ratio: Range = (0.0, 1.0)
    filled_ratio: Range = (0.0, 1.0)

    def __post_init__(self):
        """Validate configuration values."""
        _check_range("floor_width", self.floor_width, minimum=1e-6)
        _check_range("regular_sides", self.regular_sides, minimum=3)
        _check_range("regular_radius", self.regular_radius, minimum=1e-6)
        _check_range("regular_base_angle", self.regular_base_angle)
        _check_range("num_floors", self.num_floors, minimum=1)
        _check_range("floor_height", self.floor_height, minimum=1e-6)
        _check_range("belt_height", self.belt_height, minimum=0.0)
        _check_range("belt_extra_width", self.belt_extra_width, minimum=0.0)
        _check_range("width_delta_per_floor", self.width_delta_per_floor)
        _check_range("trim_thickness", self.trim_thickness, minimum=1e-6)
        _check_range("rake_overhang", self.rake_overhang, minimum=0.0)
        _check_range("roof_overhang", self.roof_overhang, minimum=0.0)
        _check_range("apex_height", self.apex_height, minimum=1e-6)
        _check_range("window_spacing", self.window_spacing, minimum=0.0)
        _check_range("window_edge_distance", self.window_edge_distance, minimum=0.0)
        _check_range("open_ratio", self.open_ratio, minimum=0.0)
        _check_range("filled_ratio", self.filled_ratio, minimum=0.0)

        low, high = self.roof_angle
        if not (0.0 < low <= high < math.pi / 2.0):
            raise ValueError("roof_angle must lie strictly between 0 and pi/2")

        if self.open_ratio[1] > 1.0 or self.filled_ratio[1] > 1.0:
            raise ValueError("window ratios must lie in [0, 1]")


@dataclass
class CityConfig:
    """
    Runtime configuration for city generation.

    Attributes:
        buildings_per_side: The city is a square grid of this many buildings
            per side
        spacing: Distance between neighbouring grid cells (meters)
        seed: Global random seed; every building derives its own stream
        workers: Number of worker threads (1 = sequential)
        ground_size: Side length of the ground plane (0 disables it)
        generator: Ranges for the random building factory
    """
    buildings_per_side: int = DEFAULT_BUILDINGS_PER_SIDE
    spacing: float = DEFAULT_BUILDING_SPACING
    seed: int = 12345
    workers: int = 1
    ground_size: float = DEFAULT_GROUND_SIZE
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)

    def __post_init__(self):
        """Validate configuration values."""
        if self.buildings_per_side < 1:
            raise ValueError("buildings_per_side must be at least 1")

        if self.spacing <= 0:
            raise ValueError("spacing must be positive")

        if self.workers < 1:
            raise ValueError("workers must be at least 1")

        if self.ground_size < 0:
            raise ValueError("ground_size must be non-negative")


# Default configuration instance
DEFAULT_CONFIG = GeneratorConfig()
