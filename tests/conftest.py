"""
Pytest configuration and fixtures for building generator tests
"""
import pytest

from city_buildings.generators.windows import make_default_window_meshes
from city_buildings.models.geometry import Point2D
from city_buildings.utils.random_source import RandomSource


def edge_use(mesh):
    """Count how often every directed edge is used by the faces of a mesh"""
    counts = {}
    for face in list(mesh.triangles) + list(mesh.quads):
        for i in range(len(face)):
            edge = (face[i], face[(i + 1) % len(face)])
            counts[edge] = counts.get(edge, 0) + 1
    return counts


def is_watertight(mesh):
    """Every directed edge used once and matched by its reverse"""
    counts = edge_use(mesh)
    return all(
        count == 1 and counts.get((b, a)) == 1
        for (a, b), count in counts.items()
    )


@pytest.fixture
def unit_square():
    """CCW unit square"""
    return [Point2D(0, 0), Point2D(1, 0), Point2D(1, 1), Point2D(0, 1)]


@pytest.fixture
def square_10():
    """CCW 10 x 10 square with a corner at the origin"""
    return [Point2D(0, 0), Point2D(10, 0), Point2D(10, 10), Point2D(0, 10)]


@pytest.fixture
def straight_line():
    """Two-point centerline along +X, 10 m long"""
    return [Point2D(0, 0), Point2D(10, 0)]


@pytest.fixture
def window_meshes():
    """Default (open, closed) window meshes"""
    return make_default_window_meshes()


@pytest.fixture
def rng():
    """Seeded random source"""
    return RandomSource(42)
