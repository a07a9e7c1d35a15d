"""
Processing modules for City Buildings Generator.

Contains the city grid generator.
"""

from .city_layout import (
    BuildingFailure,
    CityResult,
    CityStats,
    generate_city,
    grid_position,
)

__all__ = [
    'BuildingFailure',
    'CityResult',
    'CityStats',
    'generate_city',
    'grid_position',
]
