"""
Data models for City Buildings Generator.
"""

from .geometry import Point2D, Point3D, Polygon
from .mesh import MeshData, merge_meshes
from .building import (
    BorderPlan,
    BuildingGeneratorResult,
    BuildingParams,
    CrossGabledRoof,
    CrossHippedRoof,
    FloorPlan,
    Frame,
    Instance,
    MainPointsPlan,
    NoRoof,
    PyramidRoof,
    RafterTrim,
    RegularPlan,
    RoofSpec,
    WindowSpec,
)

__all__ = [
    'Point2D', 'Point3D', 'Polygon',
    'MeshData', 'merge_meshes',
    'MainPointsPlan', 'BorderPlan', 'RegularPlan', 'FloorPlan',
    'NoRoof', 'CrossGabledRoof', 'CrossHippedRoof', 'PyramidRoof',
    'RafterTrim', 'RoofSpec',
    'WindowSpec', 'BuildingParams',
    'Frame', 'Instance', 'BuildingGeneratorResult',
]
