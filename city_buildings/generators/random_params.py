"""
Random building parameters for City Buildings Generator.

Draws a complete BuildingParams record from a RandomSource. Every range
comes from GeneratorConfig; the fixed choices (plan and roof weights,
centerline shape, star border) live in config.py.
"""

from typing import Optional
import logging

from ..config import (
    BORDER_SHAPE_WEIGHTS,
    DEFAULT_CONFIG,
    DEFAULT_STAR_BORDER,
    HIP_DEPTH_FRACTION,
    MAIN_POINTS_ROOF_WEIGHTS,
    OTHER_ROOF_WEIGHTS,
    PLAN_KIND_WEIGHTS,
    SEGMENT_ANGLE_DELTA_RANGE,
    SEGMENT_COUNT_CHOICES,
    SEGMENT_LENGTH_MEAN,
    SEGMENT_LENGTH_SIGMA,
    SEGMENT_START_ANGLE,
    GeneratorConfig,
)
from ..models.building import (
    BorderPlan,
    BuildingParams,
    CrossGabledRoof,
    CrossHippedRoof,
    MainPointsPlan,
    NoRoof,
    PyramidRoof,
    RafterTrim,
    RegularPlan,
    WindowSpec,
)
from ..models.geometry import Point2D
from ..models.mesh import MeshData
from ..utils.polygon_utils import (
    fractalize_square,
    fractalize_triangle,
    regular_polygon,
    segmented_line,
)
from ..utils.random_source import RandomSource

logger = logging.getLogger(__name__)

PLAN_MAIN_POINTS = "main_points"
PLAN_BORDER = "border"
PLAN_REGULAR = "regular"

BORDER_STAR = "star"
BORDER_TRIANGLES = "triangles"
BORDER_SQUARES = "squares"

ROOF_GABLED = "gabled"
ROOF_HIPPED = "hipped"
ROOF_PYRAMID = "pyramid"
ROOF_NONE = "none"


def _uniform(rng: RandomSource, value_range) -> float:
    low, high = value_range
    return rng.uniform(low, high)


def _nonzero_angle_delta(rng: RandomSource) -> float:
    low, high = SEGMENT_ANGLE_DELTA_RANGE
    value = 0.0
    while value == 0.0:
        value = rng.uniform(low, high)
    return value


def make_random_building_params(
    rng: RandomSource,
    open_mesh: MeshData,
    closed_mesh: MeshData,
    building_id: str,
    config: Optional[GeneratorConfig] = None
) -> BuildingParams:
    """
    Draw random parameters for one building.

    All values are drawn up front, so the sequence of draws (and thus the
    result for a given seed) does not depend on which plan or roof kind
    is picked.

    Args:
        rng: Random source; also stored in the record for window selection
        open_mesh: Shared open window mesh
        closed_mesh: Shared closed window mesh
        building_id: Name prefix of the building's instances
        config: Parameter ranges (defaults to DEFAULT_CONFIG)

    Returns:
        BuildingParams ready for generate_building
    """
    cfg = config or DEFAULT_CONFIG

    plan_kind = rng.weighted_choice(
        [PLAN_MAIN_POINTS, PLAN_BORDER, PLAN_REGULAR], PLAN_KIND_WEIGHTS
    )

    # Floor plans
    num_segments = rng.choice(SEGMENT_COUNT_CHOICES)
    main_points = segmented_line(
        Point2D(0.0, 0.0),
        num_segments,
        SEGMENT_START_ANGLE,
        lambda: _nonzero_angle_delta(rng),
        lambda: rng.gaussian(SEGMENT_LENGTH_MEAN, SEGMENT_LENGTH_SIGMA),
    )
    floor_width = _uniform(rng, cfg.floor_width)
    num_sides = rng.randint(*cfg.regular_sides)
    radius = _uniform(rng, cfg.regular_radius)
    base_angle = _uniform(rng, cfg.regular_base_angle)
    border_shape = rng.weighted_choice(
        [BORDER_STAR, BORDER_TRIANGLES, BORDER_SQUARES], BORDER_SHAPE_WEIGHTS
    )

    if plan_kind == PLAN_MAIN_POINTS:
        plan = MainPointsPlan(main_points, floor_width)
    elif plan_kind == PLAN_BORDER:
        if border_shape == BORDER_STAR:
            border = [Point2D(x, y) for x, y in DEFAULT_STAR_BORDER]
        else:
            base = regular_polygon(num_sides, radius, base_angle)
            if border_shape == BORDER_TRIANGLES:
                border = fractalize_triangle(base)
            else:
                border = fractalize_square(base)
        plan = BorderPlan(border)
    else:
        plan = RegularPlan.from_radius(num_sides, radius, base_angle)

    # Floors
    num_floors = rng.randint(*cfg.num_floors)
    floor_height = _uniform(rng, cfg.floor_height)
    belt_height = _uniform(rng, cfg.belt_height)
    belt_extra_width = _uniform(rng, cfg.belt_extra_width)
    color = rng.random_color()
    belt_color = rng.random_color()
    width_delta = _uniform(rng, cfg.width_delta_per_floor)

    # Roof
    if plan_kind == PLAN_MAIN_POINTS:
        roof_kind = rng.weighted_choice(
            [ROOF_GABLED, ROOF_HIPPED, ROOF_PYRAMID, ROOF_NONE],
            MAIN_POINTS_ROOF_WEIGHTS,
        )
    else:
        roof_kind = rng.weighted_choice([ROOF_PYRAMID, ROOF_NONE], OTHER_ROOF_WEIGHTS)

    roof_color = rng.random_color()
    roof_angle = _uniform(rng, cfg.roof_angle)
    trim_thickness = _uniform(rng, cfg.trim_thickness)
    trim_color = rng.random_color()
    rake_overhang = _uniform(rng, cfg.rake_overhang)
    roof_overhang = _uniform(rng, cfg.roof_overhang)

    shorter_end = min(
        main_points[0].distance_to(main_points[1]),
        main_points[-1].distance_to(main_points[-2]),
    )
    hip_depth = rng.uniform(0.0, max(shorter_end * HIP_DEPTH_FRACTION, 0.0))
    apex_height = _uniform(rng, cfg.apex_height)

    if roof_kind == ROOF_GABLED:
        trim = RafterTrim(trim_thickness, rake_overhang, roof_overhang, trim_color)
        roof = CrossGabledRoof(roof_angle, trim, roof_color)
    elif roof_kind == ROOF_HIPPED:
        roof = CrossHippedRoof(roof_angle, hip_depth, roof_color)
    elif roof_kind == ROOF_PYRAMID:
        roof = PyramidRoof(apex_height, roof_color)
    else:
        roof = NoRoof(roof_color)

    # Windows
    windows = WindowSpec(
        name=f"{building_id}_wnd",
        spacing=_uniform(rng, cfg.window_spacing),
        edge_distance=_uniform(rng, cfg.window_edge_distance),
        open_mesh=open_mesh,
        closed_mesh=closed_mesh,
        open_ratio=_uniform(rng, cfg.open_ratio),
        filled_ratio=_uniform(rng, cfg.filled_ratio),
    )

    logger.debug(
        f"Random building {building_id}: {plan_kind} plan, {roof_kind} roof, "
        f"{num_floors} floors"
    )

    return BuildingParams(
        building_id=building_id,
        plan=plan,
        num_floors=num_floors,
        floor_height=floor_height,
        belt_height=belt_height,
        belt_extra_width=belt_extra_width,
        width_delta_per_floor=width_delta,
        color=color,
        belt_color=belt_color,
        roof=roof,
        windows=windows,
        rng=rng,
    )
