"""
Tests for solid extrusion, boxes and walls
"""
import pytest

from conftest import is_watertight
from city_buildings.errors import InvalidArgument
from city_buildings.generators.solids import make_box, make_wall, thicken_polygon
from city_buildings.models.geometry import Point2D, Polygon


def face_centroid(mesh, face):
    pts = [mesh.vertices[i] for i in face]
    return tuple(sum(c) / len(pts) for c in zip(*pts))


def assert_outward(mesh, center):
    """Every face normal points away from an interior point of a convex solid"""
    faces = list(mesh.triangles) + list(mesh.quads)
    for face, normal in zip(faces, mesh.face_normals()):
        c = face_centroid(mesh, face)
        outward = tuple(a - b for a, b in zip(c, center))
        assert sum(n * o for n, o in zip(normal, outward)) > 0


class TestThickenPolygon:
    """Tests for thicken_polygon"""

    def test_square_counts(self, unit_square):
        """One side quad per edge, two triangles per cap, shared corners"""
        mesh = thicken_polygon(unit_square, 2.0)

        assert len(mesh.quads) == 4
        assert len(mesh.triangles) == 4
        assert mesh.vertex_count() == 8
        assert mesh.has_normals()
        assert mesh.validate() == []

    def test_square_extent(self, unit_square):
        """The solid spans z = 0 to z = thickness"""
        mesh = thicken_polygon(unit_square, 2.5)
        assert mesh.compute_bounds() == ((0, 0, 0), (1, 1, 2.5))

    def test_square_watertight_and_outward(self, unit_square):
        """Closed surface with consistently outward faces"""
        mesh = thicken_polygon(unit_square, 1.0)
        assert is_watertight(mesh)
        assert_outward(mesh, (0.5, 0.5, 0.5))

    def test_cw_input(self, unit_square):
        """CW borders are normalized before extrusion"""
        mesh = thicken_polygon(unit_square[::-1], 1.0)
        assert is_watertight(mesh)
        assert_outward(mesh, (0.5, 0.5, 0.5))

    def test_non_convex(self):
        """An L shape is extruded watertight"""
        ring = [
            Point2D(0, 0), Point2D(4, 0), Point2D(4, 1),
            Point2D(1, 1), Point2D(1, 4), Point2D(0, 4),
        ]
        mesh = thicken_polygon(ring, 3.0)
        assert len(mesh.quads) == 6
        assert is_watertight(mesh)

    def test_hole(self):
        """Holes get their own side quads facing into the hole"""
        border = [Point2D(0, 0), Point2D(4, 0), Point2D(4, 4), Point2D(0, 4)]
        hole = [Point2D(1, 1), Point2D(3, 1), Point2D(3, 3), Point2D(1, 3)]
        mesh = thicken_polygon(border, 1.0, holes=[hole])

        assert len(mesh.quads) == 8
        assert mesh.vertex_count() == 16
        assert is_watertight(mesh)

        hole_faces = [
            (face, normal) for face, normal in zip(mesh.quads, mesh.face_normals()[len(mesh.triangles):])
            if all(1 <= mesh.vertices[i][0] <= 3 and 1 <= mesh.vertices[i][1] <= 3 for i in face)
        ]
        assert len(hole_faces) == 4
        for face, normal in hole_faces:
            c = face_centroid(mesh, face)
            to_center = (2 - c[0], 2 - c[1], 0)
            assert normal[0] * to_center[0] + normal[1] * to_center[1] > 0

    def test_polygon_with_hole(self):
        """A Polygon with a hole extrudes like border plus holes"""
        border = [Point2D(0, 0), Point2D(4, 0), Point2D(4, 4), Point2D(0, 4)]
        hole = [Point2D(1, 3), Point2D(3, 3), Point2D(3, 1), Point2D(1, 1)]
        mesh = thicken_polygon(Polygon(border, [hole]), 1.0)

        assert len(mesh.quads) == 8
        assert mesh.vertex_count() == 16
        assert is_watertight(mesh)

    @pytest.mark.parametrize("border,thickness", [
        ([Point2D(0, 0), Point2D(1, 0)], 1.0),
        ([Point2D(0, 0), Point2D(1, 0), Point2D(0, 1)], 0.0),
        ([Point2D(0, 0), Point2D(1, 0), Point2D(0, 1)], -1.0),
    ])
    def test_invalid(self, border, thickness):
        """Short borders and non-positive thickness are rejected"""
        with pytest.raises(InvalidArgument):
            thicken_polygon(border, thickness)


class TestMakeBox:
    """Tests for make_box"""

    def test_box(self):
        """Centered box with six outward quads"""
        mesh = make_box(1.6, 0.1, 1.0)

        assert mesh.vertex_count() == 8
        assert len(mesh.quads) == 6
        assert mesh.size() == pytest.approx((1.6, 0.1, 1.0))
        assert is_watertight(mesh)
        assert_outward(mesh, (0.0, 0.0, 0.0))

    def test_invalid(self):
        """Box sizes must be positive"""
        with pytest.raises(InvalidArgument):
            make_box(1.0, 0.0, 1.0)


class TestMakeWall:
    """Tests for make_wall"""

    def test_open_wall(self, straight_line):
        """An open wall is the widened, lengthened centerline"""
        mesh = make_wall(straight_line, 1.0, 3.0)
        (min_x, min_y, min_z), (max_x, max_y, max_z) = mesh.compute_bounds()

        assert (min_x, max_x) == pytest.approx((-0.5, 10.5))
        assert (min_y, max_y) == pytest.approx((-0.5, 0.5))
        assert (min_z, max_z) == pytest.approx((0.0, 3.0))
        assert is_watertight(mesh)

    def test_closed_wall(self, square_10):
        """A closed wall is a ring with an inner opening"""
        mesh = make_wall(square_10, 1.0, 2.0, closed=True)

        assert len(mesh.quads) == 8
        assert is_watertight(mesh)
        assert mesh.size() == pytest.approx((11.0, 11.0, 2.0))

    def test_closed_wall_without_opening(self, unit_square):
        """A wall thicker than its loop leaves no opening"""
        with pytest.raises(InvalidArgument):
            make_wall(unit_square, 2.0, 1.0, closed=True)

    def test_invalid_height(self, straight_line):
        """Wall height must be positive"""
        with pytest.raises(InvalidArgument):
            make_wall(straight_line, 1.0, 0.0)
