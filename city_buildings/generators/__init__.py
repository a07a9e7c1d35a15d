"""
Mesh generators for City Buildings Generator.

Contains solid extrusion, the floor stack generator, gabled/hipped and
pyramid roof generators, window placement, the random parameter factory
and the main building generator that orchestrates them all.
"""

from .solids import thicken_polygon, make_box, make_wall
from .floors import FloorStack, floor_border_at_level, get_building_height, make_floors
from .roof_gabled import make_cross_gabled_roof, make_cross_hipped_roof, make_rafter_trim
from .roof_pyramid import make_pyramid_roof
from .windows import count_windows, make_default_window_meshes, make_windows
from .building_generator import (
    generate_building,
    make_floors_from_params,
    make_roof_from_params,
)
from .random_params import make_random_building_params

__all__ = [
    'thicken_polygon',
    'make_box',
    'make_wall',
    'FloorStack',
    'floor_border_at_level',
    'get_building_height',
    'make_floors',
    'make_cross_gabled_roof',
    'make_cross_hipped_roof',
    'make_rafter_trim',
    'make_pyramid_roof',
    'count_windows',
    'make_default_window_meshes',
    'make_windows',
    'generate_building',
    'make_floors_from_params',
    'make_roof_from_params',
    'make_random_building_params',
]
