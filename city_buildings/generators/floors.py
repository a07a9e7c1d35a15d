"""
Floor stack generator for City Buildings Generator.

Builds the body of a building: one extruded slab per floor and, between
consecutive floors, a slightly wider belt course. Floors may taper in or
out by a fixed width delta per level.

Stack layout for N floors (fh = floor height, bh = belt height):

    level i floor:  z = (fh + bh) * i        .. (fh + bh) * i + fh
    level i belt:   z = (fh + bh) * i + fh   .. (fh + bh) * (i + 1)

There are N - 1 belts; the top floor carries none, so the stack height is
N * fh + (N - 1) * bh.
"""

from dataclasses import dataclass, field
from typing import List
import logging

from ..errors import InvalidArgument, UnsupportedCombination
from ..models.building import BorderPlan, FloorPlan, MainPointsPlan, RegularPlan
from ..models.geometry import Point2D
from ..models.mesh import MeshData
from ..utils.polygon_utils import (
    ensure_ccw,
    expand_polygon,
    offset_polygon,
    regular_polygon,
    widen_polyline_border,
)
from .solids import thicken_polygon

logger = logging.getLogger(__name__)


@dataclass
class FloorStack:
    """Floors and belts of one building, as two separate meshes."""
    floors: MeshData = field(default_factory=MeshData)
    belts: MeshData = field(default_factory=MeshData)


def get_building_height(num_floors: int, floor_height: float, belt_height: float) -> float:
    """Height of a stack of num_floors floors separated by belts."""
    return num_floors * floor_height + (num_floors - 1) * belt_height


def floor_border_at_level(plan: FloorPlan, level: int, width_delta: float = 0.0) -> List[Point2D]:
    """
    Compute the 2D border of a given floor.

    Args:
        plan: Floor plan variant
        level: Floor index (0 = ground floor)
        width_delta: Width change per floor

    Returns:
        Border ring of that floor

    Raises:
        InvalidArgument: If the tapered width/radius is no longer positive
            or an inward offset makes the border vanish
        UnsupportedCombination: On an unknown plan type
    """
    offset = width_delta * level

    if isinstance(plan, MainPointsPlan):
        width = plan.width + offset
        if width <= 0:
            raise InvalidArgument(
                f"Floor {level} width {width:.3f} is not positive "
                f"(base {plan.width}, delta {width_delta})"
            )
        return widen_polyline_border(plan.main_points, width)

    if isinstance(plan, BorderPlan):
        if offset == 0:
            return ensure_ccw(plan.border)
        rings = offset_polygon(plan.border, offset)
        if not rings:
            raise InvalidArgument(
                f"Floor {level} border collapsed after offset {offset:.3f}"
            )
        if len(rings) > 1:
            logger.debug(
                f"Floor {level} border split into {len(rings)} pieces, "
                f"keeping the largest"
            )
        return rings[0]

    if isinstance(plan, RegularPlan):
        radius = plan.radius + offset
        if radius <= 0:
            raise InvalidArgument(
                f"Floor {level} radius {radius:.3f} is not positive "
                f"(base {plan.radius:.3f}, delta {width_delta})"
            )
        return regular_polygon(plan.num_sides, radius, plan.base_angle, plan.center)

    raise UnsupportedCombination(f"Unknown floor plan type: {type(plan).__name__}")


def make_floors(
    plan: FloorPlan,
    num_floors: int,
    floor_height: float,
    belt_height: float = 0.0,
    belt_extra_width: float = 0.0,
    width_delta: float = 0.0
) -> FloorStack:
    """
    Build the floor slabs and belt courses of a building.

    With a zero width delta the ground floor solids are built once and
    reused as displaced copies; otherwise every level is rebuilt from its
    own border.

    Args:
        plan: Floor plan variant
        num_floors: Number of floors (>= 1)
        floor_height: Height of each floor slab (> 0)
        belt_height: Height of each belt course (0 disables belts)
        belt_extra_width: How far the belt sticks out of its floor (>= 0)
        width_delta: Width change per floor

    Returns:
        FloorStack with the merged floors and merged belts
    """
    if num_floors < 1:
        raise InvalidArgument(f"num_floors must be at least 1, got {num_floors}")
    if floor_height <= 0:
        raise InvalidArgument(f"floor_height must be positive, got {floor_height}")
    if belt_height < 0:
        raise InvalidArgument(f"belt_height must be non-negative, got {belt_height}")
    if belt_extra_width < 0:
        raise InvalidArgument(
            f"belt_extra_width must be non-negative, got {belt_extra_width}"
        )

    has_belts = belt_height > 0
    level_step = floor_height + belt_height
    stack = FloorStack()

    if width_delta == 0:
        border = floor_border_at_level(plan, 0)
        floor = thicken_polygon(border, floor_height)
        belt = None
        if has_belts and num_floors > 1:
            belt = thicken_polygon(expand_polygon(border, belt_extra_width), belt_height)

        for i in range(num_floors):
            z = level_step * i
            stack.floors.merge(floor.displaced(0.0, 0.0, z))
            if belt is not None and i < num_floors - 1:
                stack.belts.merge(belt.displaced(0.0, 0.0, z + floor_height))
    else:
        for i in range(num_floors):
            z = level_step * i
            border = floor_border_at_level(plan, i, width_delta)
            floor = thicken_polygon(border, floor_height)
            stack.floors.merge(floor.displaced(0.0, 0.0, z))
            if has_belts and i < num_floors - 1:
                belt = thicken_polygon(
                    expand_polygon(border, belt_extra_width), belt_height
                )
                stack.belts.merge(belt.displaced(0.0, 0.0, z + floor_height))

    logger.debug(
        f"Floor stack: {num_floors} floors, {stack.floors.vertex_count()} floor vertices, "
        f"{stack.belts.vertex_count()} belt vertices"
    )

    return stack
