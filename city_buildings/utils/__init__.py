"""
Utility functions for City Buildings Generator.
"""

from .math_utils import (
    line_intersection_2d,
    perpendicular_vector,
)
from .polygon_utils import (
    expand_polygon,
    fractalize_square,
    fractalize_triangle,
    offset_polygon,
    polygon_signed_area,
    regular_polygon,
    segmented_line,
    widen_polyline,
    widen_polyline_border,
)
from .random_source import RandomSource
from .triangulation import triangulate

__all__ = [
    'line_intersection_2d',
    'perpendicular_vector',
    'expand_polygon',
    'fractalize_square',
    'fractalize_triangle',
    'offset_polygon',
    'polygon_signed_area',
    'regular_polygon',
    'segmented_line',
    'widen_polyline',
    'widen_polyline_border',
    'RandomSource',
    'triangulate',
]
