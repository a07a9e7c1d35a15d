"""
City Buildings Generator

Procedurally synthesizes 3D building meshes, and whole city grids, from
compact parametric descriptions: a floor plan, a number of stories, a
roof style and window placement rules.

Buildings are returned as lists of named Instance records (mesh, frame,
color) ready to be handed over to any scene model.
"""

__version__ = "0.1.0"
__author__ = "City Buildings Team"

from .errors import (
    BuildingGenerationError,
    InvalidArgument,
    TriangulationError,
    UnsupportedCombination,
)
from .generators.building_generator import generate_building
from .processing.city_layout import generate_city

__all__ = [
    'BuildingGenerationError',
    'InvalidArgument',
    'TriangulationError',
    'UnsupportedCombination',
    'generate_building',
    'generate_city',
]
