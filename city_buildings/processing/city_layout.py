"""
City layout for City Buildings Generator.

Generates a square grid of random buildings plus a ground plane.

Each building is independent:
- it draws from its own RandomSource, derived from the global seed and
  its grid index, so the output does not depend on the worker count
- it runs inside a catch-and-skip boundary, so an invalid building is
  logged, recorded and left out without affecting its neighbours

With more than one worker, buildings are generated on a thread pool and
merged back on the calling thread in index order.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging
import time

from ..config import GROUND_COLOR, CityConfig
from ..errors import InvalidArgument, UnsupportedCombination
from ..models.building import BuildingGeneratorResult, Instance
from ..models.geometry import Point3D
from ..models.mesh import MeshData
from ..generators.building_generator import generate_building
from ..generators.random_params import make_random_building_params
from ..generators.windows import make_default_window_meshes
from ..utils.random_source import RandomSource

logger = logging.getLogger(__name__)


@dataclass
class BuildingFailure:
    """A building that was skipped, and why."""
    index: int
    building_id: str
    reason: str


@dataclass
class CityStats:
    """Statistics from a city generation run."""
    buildings_requested: int = 0
    buildings_generated: int = 0
    buildings_skipped: int = 0
    instances: int = 0
    windows: int = 0
    vertices: int = 0
    faces: int = 0
    processing_time_ms: int = 0


@dataclass
class CityResult:
    """
    Complete result of city generation.

    Attributes:
        instances: Every placed instance, buildings in grid order, ground last
        buildings: Per-building results (successful buildings only), with
            instances already moved to their grid position
        failures: Skipped buildings
        stats: Run statistics
        ground: Ground plane instance (None if disabled)
    """
    instances: List[Instance] = field(default_factory=list)
    buildings: List[BuildingGeneratorResult] = field(default_factory=list)
    failures: List[BuildingFailure] = field(default_factory=list)
    stats: CityStats = field(default_factory=CityStats)
    ground: Optional[Instance] = None


def grid_position(index: int, buildings_per_side: int, spacing: float) -> Point3D:
    """
    Ground position of the building at a grid index.

    Columns advance every buildings_per_side buildings; odd indices are
    shifted by half a spacing. The grid is centered on the origin.
    """
    start = spacing * (buildings_per_side - 1) / 2.0
    x = -start + spacing * (index // buildings_per_side) + spacing / 2.0 * (index % 2)
    y = -start + spacing * (index % buildings_per_side)
    return Point3D(x, y, 0.0)


def make_ground(size: float) -> Instance:
    """Square ground quad of the given side, centered on the origin."""
    half = size / 2.0
    mesh = MeshData(name="ground")
    mesh.add_vertex(-half, -half, 0.0)
    mesh.add_vertex(half, -half, 0.0)
    mesh.add_vertex(half, half, 0.0)
    mesh.add_vertex(-half, half, 0.0)
    mesh.add_quad(0, 1, 2, 3)
    mesh.compute_normals()
    mesh.set_color(GROUND_COLOR)
    return Instance("ground", mesh, color=GROUND_COLOR)


def _generate_one(
    index: int,
    config: CityConfig,
    open_mesh: MeshData,
    closed_mesh: MeshData
) -> Tuple[Optional[BuildingGeneratorResult], Optional[BuildingFailure]]:
    """Generate the building at a grid index, or describe why it failed."""
    building_id = f"building{index}"
    rng = RandomSource(config.seed).spawn(index)

    try:
        params = make_random_building_params(
            rng, open_mesh, closed_mesh, building_id, config.generator
        )
        result = generate_building(params)
    except (InvalidArgument, UnsupportedCombination) as e:
        logger.warning(f"Skipping building {building_id}: {e}")
        return None, BuildingFailure(index, building_id, str(e))

    offset = grid_position(index, config.buildings_per_side, config.spacing)
    result.instances = [inst.translated(offset) for inst in result.instances]
    return result, None


def generate_city(
    config: Optional[CityConfig] = None,
    open_mesh: Optional[MeshData] = None,
    closed_mesh: Optional[MeshData] = None
) -> CityResult:
    """
    Generate a grid of random buildings.

    Args:
        config: City configuration (defaults to CityConfig())
        open_mesh: Shared open window mesh (default box if None)
        closed_mesh: Shared closed window mesh (default box if None)

    Returns:
        CityResult with instances, failures and stats
    """
    config = config or CityConfig()
    start_time = time.time()

    if open_mesh is None or closed_mesh is None:
        default_open, default_closed = make_default_window_meshes()
        open_mesh = open_mesh or default_open
        closed_mesh = closed_mesh or default_closed

    count = config.buildings_per_side * config.buildings_per_side
    logger.info(
        f"Generating {count} buildings (seed {config.seed}, "
        f"{config.workers} worker(s))"
    )

    indices = range(count)
    if config.workers > 1:
        with ThreadPoolExecutor(max_workers=config.workers) as executor:
            outcomes = list(executor.map(
                lambda i: _generate_one(i, config, open_mesh, closed_mesh), indices
            ))
    else:
        outcomes = [_generate_one(i, config, open_mesh, closed_mesh) for i in indices]

    city = CityResult()
    city.stats.buildings_requested = count

    for result, failure in outcomes:
        if failure is not None:
            city.failures.append(failure)
            city.stats.buildings_skipped += 1
            continue

        city.buildings.append(result)
        city.instances.extend(result.instances)
        city.stats.buildings_generated += 1
        city.stats.windows += result.stats.get('window_count', 0)
        city.stats.vertices += result.stats.get('vertex_count', 0)
        city.stats.faces += result.stats.get('face_count', 0)

    if config.ground_size > 0:
        city.ground = make_ground(config.ground_size)
        city.instances.append(city.ground)

    city.stats.instances = len(city.instances)
    city.stats.processing_time_ms = int((time.time() - start_time) * 1000)

    logger.info(
        f"Generated {city.stats.buildings_generated} buildings, "
        f"skipped {city.stats.buildings_skipped}, "
        f"{city.stats.instances} instances, {city.stats.windows} windows"
    )

    return city
