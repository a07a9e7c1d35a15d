"""
Error taxonomy for City Buildings Generator.

All geometry and composition operations validate their inputs eagerly and
raise one of these exceptions before building anything, so a failed
building never leaves half-built meshes behind.
"""


class BuildingGenerationError(Exception):
    """Base class for all building generation errors."""
    pass


class InvalidArgument(BuildingGenerationError, ValueError):
    """
    Raised for malformed geometric input.

    Examples: too few points, non-positive thickness/height/width,
    angle out of domain, mismatched vector lengths, ratios outside [0, 1].
    """
    pass


class UnsupportedCombination(BuildingGenerationError):
    """
    Raised when a roof kind is paired with an incompatible floor plan,
    or when an unknown variant reaches a dispatch point.
    """
    pass


class TriangulationError(InvalidArgument):
    """
    Raised when a polygon cannot be triangulated: a ring with fewer than
    3 points, or a self-intersecting border (for example a ribbon whose
    centerline folds back onto itself).
    """
    pass
