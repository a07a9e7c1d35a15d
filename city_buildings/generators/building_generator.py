"""
Building generator orchestrator for City Buildings Generator.

Combines the floor stack, the roof (gabled, hipped, pyramid or none),
the optional rafter trim and the windows of one building into a list of
named instances.

Roof/plan compatibility is checked before any geometry is built, and no
instance is created until every part has been generated, so a failing
building never produces partial output.
"""

from typing import List, Optional, Tuple
import logging

from ..errors import UnsupportedCombination
from ..models.building import (
    BorderPlan,
    BuildingGeneratorResult,
    BuildingParams,
    CrossGabledRoof,
    CrossHippedRoof,
    Instance,
    MainPointsPlan,
    NoRoof,
    PyramidRoof,
    RegularPlan,
)
from ..models.mesh import MeshData
from .floors import FloorStack, floor_border_at_level, get_building_height, make_floors
from .roof_gabled import make_cross_gabled_roof, make_cross_hipped_roof, make_rafter_trim
from .roof_pyramid import make_pyramid_roof
from .windows import make_windows

logger = logging.getLogger(__name__)

_ROOF_TYPES = (NoRoof, CrossGabledRoof, CrossHippedRoof, PyramidRoof)
_PLAN_TYPES = (MainPointsPlan, BorderPlan, RegularPlan)


def _check_combination(params: BuildingParams) -> None:
    """Reject unknown variants and roofs that need main points."""
    if not isinstance(params.plan, _PLAN_TYPES):
        raise UnsupportedCombination(
            f"Building {params.building_id}: unknown floor plan type "
            f"{type(params.plan).__name__}"
        )
    if not isinstance(params.roof, _ROOF_TYPES):
        raise UnsupportedCombination(
            f"Building {params.building_id}: unknown roof type "
            f"{type(params.roof).__name__}"
        )
    if isinstance(params.roof, (CrossGabledRoof, CrossHippedRoof)) and \
       not isinstance(params.plan, MainPointsPlan):
        raise UnsupportedCombination(
            f"Building {params.building_id}: {type(params.roof).__name__} needs a "
            f"MainPointsPlan, got {type(params.plan).__name__}"
        )


def make_floors_from_params(params: BuildingParams) -> FloorStack:
    """Build the floor stack described by a parameter record."""
    return make_floors(
        params.plan,
        params.num_floors,
        params.floor_height,
        params.belt_height,
        params.belt_extra_width,
        params.width_delta_per_floor,
    )


def make_roof_from_params(params: BuildingParams) -> Tuple[Optional[MeshData], Optional[MeshData]]:
    """
    Build the roof described by a parameter record.

    The roof sits on top of the floor stack and uses the border of the top
    floor (its width, for roofs that follow the main points).

    Args:
        params: Building parameters

    Returns:
        Tuple of (roof_mesh, trim_mesh); roof_mesh is None for NoRoof and
        trim_mesh is None unless a gabled roof carries a rafter trim

    Raises:
        UnsupportedCombination: If the roof needs main points and the plan
            has none, or a variant is unknown
    """
    _check_combination(params)

    roof = params.roof
    plan = params.plan
    top_level = params.num_floors - 1
    base_height = get_building_height(
        params.num_floors, params.floor_height, params.belt_height
    )

    if isinstance(roof, NoRoof):
        return None, None

    if isinstance(roof, PyramidRoof):
        border = floor_border_at_level(plan, top_level, params.width_delta_per_floor)
        return make_pyramid_roof(border, roof.apex_height, base_height), None

    top_width = plan.width + params.width_delta_per_floor * top_level

    if isinstance(roof, CrossHippedRoof):
        mesh = make_cross_hipped_roof(
            plan.main_points, top_width, roof.angle, roof.hip_depth, base_height
        )
        return mesh, None

    mesh = make_cross_gabled_roof(plan.main_points, top_width, roof.angle, base_height)
    trim = None
    if roof.trim is not None:
        trim = make_rafter_trim(
            plan.main_points, top_width, roof.angle, roof.trim, base_height
        )
    return mesh, trim


def generate_building(params: BuildingParams) -> BuildingGeneratorResult:
    """
    Generate all instances of one building.

    Instances, in order:
        {id}_body       floors, params.color
        {id}_belt       belt courses, params.belt_color (omitted if empty)
        {id}_roof       roof, roof color (omitted for NoRoof)
        {id}_roof_trim  rafter trim, trim color (only with a trim)
        window instances

    Args:
        params: Building parameters

    Returns:
        BuildingGeneratorResult with instances, total height and stats

    Raises:
        InvalidArgument: On malformed parameters
        UnsupportedCombination: On a roof/plan mismatch
    """
    _check_combination(params)

    stack = make_floors_from_params(params)
    roof_mesh, trim_mesh = make_roof_from_params(params)
    windows = make_windows(params)

    building_id = params.building_id
    instances: List[Instance] = [
        Instance(f"{building_id}_body", stack.floors, color=params.color)
    ]
    if not stack.belts.is_empty():
        instances.append(
            Instance(f"{building_id}_belt", stack.belts, color=params.belt_color)
        )
    if roof_mesh is not None:
        instances.append(
            Instance(f"{building_id}_roof", roof_mesh, color=params.roof.color)
        )
    if trim_mesh is not None:
        instances.append(
            Instance(f"{building_id}_roof_trim", trim_mesh, color=params.roof.trim.color)
        )
    instances.extend(windows)

    height = get_building_height(params.num_floors, params.floor_height, params.belt_height)

    meshes = [stack.floors, stack.belts, roof_mesh, trim_mesh]
    meshes = [m for m in meshes if m is not None]
    stats = {
        'vertex_count': sum(m.vertex_count() for m in meshes),
        'face_count': sum(m.face_count() for m in meshes),
        'window_count': len(windows),
        'roof': type(params.roof).__name__,
        'plan': type(params.plan).__name__,
    }

    logger.debug(
        f"Building {building_id}: {stats['roof']} on {stats['plan']}, "
        f"{stats['vertex_count']} vertices, {stats['face_count']} faces, "
        f"{stats['window_count']} windows"
    )

    return BuildingGeneratorResult(
        building_id=building_id,
        instances=instances,
        height=height,
        stats=stats,
    )
