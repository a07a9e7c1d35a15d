"""
Window placement for City Buildings Generator.

Windows are not merged into the building mesh: every window is an
Instance that references one of two shared meshes (open or closed),
placed on a side of a floor border and rotated to face out of it.

On each side of length W, windows of width w keep a distance of at
least eps from the corners and roughly s from each other:

    n  = floor((W - w - 2 * eps) / (w + s)) + 1     (0 if w + 2 * eps >= W)
    s' = (W - 2 * eps - n * w) / (n - 1)            (n > 1)

The actual spacing s' spreads the n windows evenly over the side, so
2 * eps + n * w + (n - 1) * s' == W. A single window is centered.
"""

from typing import List, Tuple
import math
import logging

from ..config import (
    CLOSED_WINDOW_COLOR,
    CLOSED_WINDOW_SIZE,
    OPEN_WINDOW_COLOR,
    OPEN_WINDOW_SIZE,
)
from ..errors import InvalidArgument
from ..models.building import BuildingParams, Frame, Instance, WindowSpec
from ..models.mesh import MeshData
from ..utils.polygon_utils import iter_edges
from .floors import floor_border_at_level
from .solids import make_box

logger = logging.getLogger(__name__)


def count_windows(
    side_length: float,
    window_width: float,
    edge_distance: float,
    spacing: float
) -> Tuple[int, float]:
    """
    Number of windows fitting on a side and their actual spacing.

    Args:
        side_length: Length W of the side
        window_width: Width w of one window
        edge_distance: Minimum distance eps from the corners
        spacing: Desired distance s between windows

    Returns:
        Tuple of (n, actual_spacing). actual_spacing is 0 when n <= 1.
    """
    if window_width + 2.0 * edge_distance >= side_length:
        return 0, 0.0

    n = int(math.floor(
        (side_length - window_width - 2.0 * edge_distance) / (window_width + spacing)
    )) + 1

    if n <= 1:
        return n, 0.0

    actual = (side_length - 2.0 * edge_distance - n * window_width) / (n - 1)
    return n, actual


def window_offsets(
    side_length: float,
    window_width: float,
    edge_distance: float,
    spacing: float
) -> List[float]:
    """Distance of every window center from the start of the side."""
    n, actual = count_windows(side_length, window_width, edge_distance, spacing)
    if n == 0:
        return []
    if n == 1:
        return [side_length / 2.0]

    first = edge_distance + window_width / 2.0
    return [first + (window_width + actual) * j for j in range(n)]


def _check_window_spec(spec: WindowSpec) -> None:
    if spec.open_mesh is None or spec.closed_mesh is None:
        raise InvalidArgument("Window spec needs both an open and a closed mesh")
    for label, mesh in (("open", spec.open_mesh), ("closed", spec.closed_mesh)):
        if mesh.is_empty() or mesh.size()[0] <= 0:
            raise InvalidArgument(f"The {label} window mesh has no width along X")
    if not 0.0 <= spec.open_ratio <= 1.0:
        raise InvalidArgument(f"open_ratio must lie in [0, 1], got {spec.open_ratio}")
    if not 0.0 <= spec.filled_ratio <= 1.0:
        raise InvalidArgument(f"filled_ratio must lie in [0, 1], got {spec.filled_ratio}")
    if spec.spacing < 0:
        raise InvalidArgument(f"Window spacing must be non-negative, got {spec.spacing}")
    if spec.edge_distance < 0:
        raise InvalidArgument(
            f"Window edge distance must be non-negative, got {spec.edge_distance}"
        )


def make_windows(params: BuildingParams) -> List[Instance]:
    """
    Place the windows of a building.

    For every floor and every side of that floor's border, window slots
    are computed with count_windows. Each slot receives a window with
    probability filled_ratio; a placed window is open with probability
    open_ratio.

    Args:
        params: Building parameters; params.windows and params.rng are used

    Returns:
        One Instance per placed window, named "{prefix}_{k}" where k counts
        placed windows only

    Raises:
        InvalidArgument: On an invalid window spec or a missing random source
    """
    spec = params.windows
    if spec is None:
        return []

    _check_window_spec(spec)
    if params.rng is None:
        raise InvalidArgument("Window placement needs a random source")

    rng = params.rng
    window_width = max(spec.open_mesh.size()[0], spec.closed_mesh.size()[0])
    level_step = params.floor_height + params.belt_height

    windows = []
    for floor in range(params.num_floors):
        border = floor_border_at_level(params.plan, floor, params.width_delta_per_floor)
        center_z = params.floor_height / 2.0 + level_step * floor

        for p1, p2 in iter_edges(border):
            side = p2 - p1
            side_length = side.length()
            offsets = window_offsets(
                side_length, window_width, spec.edge_distance, spec.spacing
            )
            if not offsets:
                continue

            direction = side.normalized()
            angle = side.angle()

            for offset in offsets:
                if not rng.bernoulli(spec.filled_ratio):
                    continue

                mesh = spec.open_mesh if rng.bernoulli(spec.open_ratio) else spec.closed_mesh
                center = p1 + direction.scale(offset)
                windows.append(Instance(
                    name=f"{spec.name}_{len(windows)}",
                    mesh=mesh,
                    frame=Frame.rotated_z(center.to_3d(center_z), angle),
                ))

    logger.debug(f"{spec.name}: placed {len(windows)} windows on {params.num_floors} floors")
    return windows


def make_default_window_meshes() -> Tuple[MeshData, MeshData]:
    """
    Default open and closed window meshes.

    Both are boxes centered at the origin, width along X, depth along Y
    and height along Z.

    Returns:
        Tuple of (open_mesh, closed_mesh)
    """
    open_mesh = make_box(*OPEN_WINDOW_SIZE)
    open_mesh.set_color(OPEN_WINDOW_COLOR)
    open_mesh.name = "open_window"

    closed_mesh = make_box(*CLOSED_WINDOW_SIZE)
    closed_mesh.set_color(CLOSED_WINDOW_COLOR)
    closed_mesh.name = "closed_window"

    return open_mesh, closed_mesh
