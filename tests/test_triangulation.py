"""
Tests for the triangulation adapter
"""
import pytest

from city_buildings.errors import InvalidArgument, TriangulationError
from city_buildings.models.geometry import Point2D, Polygon
from city_buildings.utils.polygon_utils import polygon_centroid, polygon_signed_area
from city_buildings.utils.triangulation import triangulate


def triangle_areas(vertices, triangles):
    return [
        polygon_signed_area([vertices[i], vertices[j], vertices[k]])
        for i, j, k in triangles
    ]


class TestTriangulate:
    """Tests for triangulate()"""

    def test_square(self, unit_square):
        """A square gives two CCW triangles covering its area"""
        vertices, triangles = triangulate(unit_square)

        assert len(triangles) == 2
        assert len(vertices) == 6
        areas = triangle_areas(vertices, triangles)
        assert all(a > 0 for a in areas)
        assert sum(areas) == pytest.approx(1.0)

    def test_cw_border(self, unit_square):
        """Border winding does not matter, output is always CCW"""
        vertices, triangles = triangulate(unit_square[::-1])
        assert all(a > 0 for a in triangle_areas(vertices, triangles))

    def test_uses_input_vertices_only(self, square_10):
        """No Steiner points are inserted"""
        vertices, _ = triangulate(square_10)
        assert set(vertices) <= set(square_10)

    def test_hole(self):
        """A square hole is left uncovered"""
        border = [Point2D(0, 0), Point2D(4, 0), Point2D(4, 4), Point2D(0, 4)]
        hole = [Point2D(1, 1), Point2D(3, 1), Point2D(3, 3), Point2D(1, 3)]
        vertices, triangles = triangulate(border, [hole])

        areas = triangle_areas(vertices, triangles)
        assert all(a > 0 for a in areas)
        assert sum(areas) == pytest.approx(12.0)

        for i, j, k in triangles:
            c = polygon_centroid([vertices[i], vertices[j], vertices[k]])
            assert not (1 < c.x < 3 and 1 < c.y < 3)

    def test_polygon_with_hole(self):
        """A Polygon brings its own holes"""
        border = [Point2D(0, 0), Point2D(4, 0), Point2D(4, 4), Point2D(0, 4)]
        hole = [Point2D(1, 1), Point2D(3, 1), Point2D(3, 3), Point2D(1, 3)]
        vertices, triangles = triangulate(Polygon(border, [hole]))

        assert sum(triangle_areas(vertices, triangles)) == pytest.approx(12.0)

    def test_self_intersecting(self):
        """A bowtie is rejected as invalid"""
        bowtie = [Point2D(0, 0), Point2D(1, 1), Point2D(1, 0), Point2D(0, 1)]
        with pytest.raises(TriangulationError):
            triangulate(bowtie)

    def test_error_is_invalid_argument(self):
        """Triangulation errors are invalid-argument errors"""
        assert issubclass(TriangulationError, InvalidArgument)
        with pytest.raises(InvalidArgument):
            triangulate([Point2D(0, 0), Point2D(1, 0)])

    def test_short_hole(self, square_10):
        """Holes need at least three points too"""
        with pytest.raises(TriangulationError):
            triangulate(square_10, [[Point2D(1, 1), Point2D(2, 2)]])
