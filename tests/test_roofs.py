"""
Tests for gabled, hipped and pyramid roofs and the rafter trim
"""
import math

import pytest

from conftest import is_watertight
from city_buildings.errors import InvalidArgument
from city_buildings.generators.roof_gabled import (
    make_cross_gabled_roof,
    make_cross_hipped_roof,
    make_rafter_trim,
)
from city_buildings.generators.roof_pyramid import make_pyramid_roof
from city_buildings.models.building import RafterTrim
from city_buildings.models.geometry import Point2D


class TestGabledRoof:
    """Tests for make_cross_gabled_roof"""

    def test_counts(self, straight_line):
        """Two main points give 6 vertices, 3 quads and 2 gables"""
        mesh = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4)

        assert mesh.vertex_count() == 6
        assert len(mesh.quads) == 3
        assert len(mesh.triangles) == 2
        assert mesh.has_normals()

    def test_ridge_height(self, straight_line):
        """Ridge rises tan(angle) * width / 2 over the eaves"""
        mesh = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4, base_height=3.0)

        ridge = mesh.vertices[4:6]
        for v in ridge:
            assert v[1] == pytest.approx(0.0)
            assert v[2] == pytest.approx(5.0)
        for v in mesh.vertices[:4]:
            assert v[2] == pytest.approx(3.0)

    def test_eaves_follow_widened_plan(self, straight_line):
        """Eaves sit on the lengthened, widened centerline"""
        mesh = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4)
        (min_x, min_y, _), (max_x, max_y, _) = mesh.compute_bounds()
        assert (min_x, max_x) == pytest.approx((-2.0, 12.0))
        assert (min_y, max_y) == pytest.approx((-2.0, 2.0))

    def test_closed(self, straight_line):
        """Slopes, underside and gables close the roof"""
        mesh = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4)
        assert is_watertight(mesh)

    def test_gables_face_out(self, straight_line):
        """The first gable faces -X and the last faces +X"""
        normals = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4).face_normals()
        assert normals[0][0] < 0
        assert normals[1][0] > 0

    def test_slopes_face_up(self, straight_line):
        """Both slopes face up and away from the ridge"""
        mesh = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4)
        normals = mesh.face_normals()
        underside, right, left = normals[2:5]

        assert underside[2] < 0
        assert right[2] > 0 and right[1] < 0
        assert left[2] > 0 and left[1] > 0

    def test_bent_centerline(self):
        """Every main point gets a ridge vertex"""
        points = [Point2D(0, 0), Point2D(10, 0), Point2D(10, 10)]
        mesh = make_cross_gabled_roof(points, 4.0, math.pi / 6)

        assert mesh.vertex_count() == 9
        assert len(mesh.quads) == 6
        assert is_watertight(mesh)

    @pytest.mark.parametrize("angle", [0.0, math.pi / 2, -0.1, 2.0])
    def test_angle_domain(self, straight_line, angle):
        """The slope angle must lie strictly inside (0, pi/2)"""
        with pytest.raises(InvalidArgument):
            make_cross_gabled_roof(straight_line, 4.0, angle)


class TestHippedRoof:
    """Tests for make_cross_hipped_roof"""

    def test_end_ridge_points_move_inward(self, straight_line):
        """Both end ridge points move hip_depth along the ridge"""
        mesh = make_cross_hipped_roof(straight_line, 4.0, math.pi / 4, 3.0)

        first, last = mesh.vertices[4], mesh.vertices[5]
        assert first[0] == pytest.approx(1.0)
        assert last[0] == pytest.approx(9.0)
        assert first[2] == pytest.approx(2.0)
        assert is_watertight(mesh)

    def test_zero_depth_is_gabled(self, straight_line):
        """No hip depth gives the gabled roof"""
        hipped = make_cross_hipped_roof(straight_line, 4.0, math.pi / 4, 0.0)
        gabled = make_cross_gabled_roof(straight_line, 4.0, math.pi / 4)
        assert hipped.vertices == gabled.vertices

    def test_single_segment_limit(self, straight_line):
        """With one segment the ends may not meet in the middle"""
        with pytest.raises(InvalidArgument):
            make_cross_hipped_roof(straight_line, 4.0, math.pi / 4, 7.0)

    def test_negative_depth(self, straight_line):
        """Negative hip depth is rejected"""
        with pytest.raises(InvalidArgument):
            make_cross_hipped_roof(straight_line, 4.0, math.pi / 4, -1.0)


class TestRafterTrim:
    """Tests for make_rafter_trim"""

    def test_counts(self, straight_line):
        """Six vertices per main point, quads only"""
        mesh = make_rafter_trim(straight_line, 4.0, math.pi / 4, RafterTrim(0.5))

        assert mesh.vertex_count() == 12
        assert len(mesh.quads) == 10
        assert mesh.triangles == []
        assert mesh.has_normals()

    def test_thickness(self, straight_line):
        """The top ridge and outer eaves follow the law of sines"""
        t = 0.5
        mesh = make_rafter_trim(straight_line, 4.0, math.pi / 4, RafterTrim(t))

        ridge, ridge_top = mesh.vertices[2], mesh.vertices[5]
        assert ridge_top[2] - ridge[2] == pytest.approx(t * math.sqrt(2.0))

        right, right_outer = mesh.vertices[0], mesh.vertices[3]
        assert right[1] - right_outer[1] == pytest.approx(t * math.sqrt(2.0))

    def test_rake_overhang(self, straight_line):
        """Gable ends move outward along the ridge"""
        mesh = make_rafter_trim(
            straight_line, 4.0, math.pi / 4, RafterTrim(0.5, rake_overhang=1.0)
        )
        assert mesh.vertices[0][0] == pytest.approx(-3.0)
        assert mesh.vertices[6][0] == pytest.approx(13.0)

    def test_roof_overhang(self, straight_line):
        """Eaves move down the slope on both sides"""
        ov = 0.5
        mesh = make_rafter_trim(
            straight_line, 4.0, math.pi / 4, RafterTrim(0.5, roof_overhang=ov)
        )
        right, left = mesh.vertices[0], mesh.vertices[1]
        assert right[1] == pytest.approx(-2.0 - ov)
        assert right[2] == pytest.approx(-ov)
        assert left[1] == pytest.approx(2.0 + ov)
        assert left[2] == pytest.approx(-ov)

    def test_invalid(self, straight_line):
        """Thickness must be positive and overhangs non-negative"""
        with pytest.raises(InvalidArgument):
            make_rafter_trim(straight_line, 4.0, math.pi / 4, RafterTrim(0.0))
        with pytest.raises(InvalidArgument):
            make_rafter_trim(
                straight_line, 4.0, math.pi / 4, RafterTrim(0.5, rake_overhang=-1.0)
            )


class TestPyramidRoof:
    """Tests for make_pyramid_roof"""

    def test_square(self, square_10):
        """Square base: two base triangles and four sides around one apex"""
        mesh = make_pyramid_roof(square_10, 5.0, base_height=3.0)

        assert mesh.vertex_count() == 5
        assert len(mesh.triangles) == 6
        assert is_watertight(mesh)

        apex = max(mesh.vertices, key=lambda v: v[2])
        assert apex == pytest.approx((5.0, 5.0, 8.0))

    def test_base_faces_down(self, square_10):
        """Base triangles face down, sides face up"""
        mesh = make_pyramid_roof(square_10, 5.0)
        normals = mesh.face_normals()
        assert all(n[2] < 0 for n in normals[:2])
        assert all(n[2] > 0 for n in normals[2:])

    def test_cw_border(self, square_10):
        """Border winding does not change the result"""
        mesh = make_pyramid_roof(square_10[::-1], 5.0)
        assert is_watertight(mesh)

    def test_invalid(self, square_10):
        """Short borders and non-positive apex heights are rejected"""
        with pytest.raises(InvalidArgument):
            make_pyramid_roof(square_10[:2], 5.0)
        with pytest.raises(InvalidArgument):
            make_pyramid_roof(square_10, 0.0)
