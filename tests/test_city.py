"""
Tests for city grid generation
"""
import pytest

from city_buildings.config import CityConfig
from city_buildings.errors import TriangulationError, UnsupportedCombination
from city_buildings.models.building import BuildingGeneratorResult, Instance
from city_buildings.models.mesh import MeshData
from city_buildings.processing import city_layout
from city_buildings.processing.city_layout import generate_city, grid_position, make_ground


def instance_summary(city):
    return [(inst.name, inst.frame.origin, inst.mesh.vertex_count()) for inst in city.instances]


class TestGridPosition:
    """Tests for grid_position"""

    @pytest.mark.parametrize("index,expected", [
        (0, (-35.0, -35.0)),
        (1, (0.0, 35.0)),
        (2, (35.0, -35.0)),
        (3, (70.0, 35.0)),
    ])
    def test_two_by_two(self, index, expected):
        """Columns advance every row, odd indices shift half a cell"""
        p = grid_position(index, 2, 70.0)
        assert (p.x, p.y) == pytest.approx(expected)
        assert p.z == 0.0


class TestGround:
    """Tests for make_ground"""

    def test_ground_quad(self):
        """One upward quad centered on the origin"""
        ground = make_ground(100.0)

        assert ground.name == "ground"
        assert ground.mesh.quads == [(0, 1, 2, 3)]
        assert ground.mesh.compute_bounds() == ((-50.0, -50.0, 0.0), (50.0, 50.0, 0.0))
        assert ground.mesh.normals[0] == pytest.approx((0.0, 0.0, 1.0))


class TestGenerateCity:
    """Tests for generate_city"""

    def test_counts(self):
        """Every grid cell is generated or skipped, ground comes last"""
        city = generate_city(CityConfig(buildings_per_side=2, seed=1, ground_size=500.0))

        stats = city.stats
        assert stats.buildings_requested == 4
        assert stats.buildings_generated + stats.buildings_skipped == 4
        assert len(city.buildings) == stats.buildings_generated
        assert len(city.failures) == stats.buildings_skipped
        assert city.instances[-1] is city.ground
        assert stats.instances == len(city.instances)

    def test_same_seed_same_city(self):
        """Output depends on the seed only"""
        a = generate_city(CityConfig(buildings_per_side=2, seed=3))
        b = generate_city(CityConfig(buildings_per_side=2, seed=3))
        assert instance_summary(a) == instance_summary(b)

    def test_workers_do_not_change_output(self):
        """Threaded generation merges back in grid order"""
        sequential = generate_city(CityConfig(buildings_per_side=3, seed=8, workers=1))
        threaded = generate_city(CityConfig(buildings_per_side=3, seed=8, workers=3))
        assert instance_summary(sequential) == instance_summary(threaded)

    def test_no_ground(self):
        """ground_size 0 disables the ground plane"""
        city = generate_city(CityConfig(buildings_per_side=1, ground_size=0.0))
        assert city.ground is None
        assert all(inst.name != "ground" for inst in city.instances)

    def test_failing_building_is_skipped(self, monkeypatch):
        """One failing building does not affect its neighbours"""
        def fake_generate(params):
            if params.building_id == "building1":
                raise UnsupportedCombination("no roof for you")
            mesh = MeshData()
            mesh.add_vertex(0.0, 0.0, 0.0)
            return BuildingGeneratorResult(
                building_id=params.building_id,
                instances=[Instance(f"{params.building_id}_body", mesh)],
                stats={'vertex_count': 1, 'face_count': 0, 'window_count': 0},
            )

        monkeypatch.setattr(city_layout, "generate_building", fake_generate)
        city = generate_city(CityConfig(buildings_per_side=2, spacing=70.0, ground_size=0.0))

        assert [inst.name for inst in city.instances] == [
            "building0_body", "building2_body", "building3_body",
        ]
        assert [f.building_id for f in city.failures] == ["building1"]
        assert "no roof for you" in city.failures[0].reason
        assert city.stats.buildings_skipped == 1

        origin = city.instances[1].frame.origin
        assert (origin.x, origin.y) == pytest.approx((35.0, -35.0))

    def test_triangulation_failure_is_skipped(self, monkeypatch):
        """A building whose caps cannot be triangulated is recorded and skipped"""
        def fake_generate(params):
            if params.building_id == "building2":
                raise TriangulationError("ribbon folds onto itself")
            mesh = MeshData()
            mesh.add_vertex(0.0, 0.0, 0.0)
            return BuildingGeneratorResult(
                building_id=params.building_id,
                instances=[Instance(f"{params.building_id}_body", mesh)],
                stats={'vertex_count': 1, 'face_count': 0, 'window_count': 0},
            )

        monkeypatch.setattr(city_layout, "generate_building", fake_generate)
        city = generate_city(CityConfig(buildings_per_side=2, spacing=70.0, ground_size=0.0))

        assert [f.building_id for f in city.failures] == ["building2"]
        assert "ribbon folds onto itself" in city.failures[0].reason
        assert len(city.instances) == 3

    def test_invalid_config(self):
        """City configuration is validated"""
        with pytest.raises(ValueError):
            CityConfig(buildings_per_side=0)
        with pytest.raises(ValueError):
            CityConfig(workers=0)
