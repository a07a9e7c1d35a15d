"""
Mesh data model for City Buildings Generator.

Provides MeshData class for representing generated building geometry
that can be merged, displaced and handed over to an external scene model.

Faces use 0-based indexing into the vertex list. Triangles and quads are
kept in separate lists; quads are never split implicitly.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
import math

Vec3 = Tuple[float, float, float]


@dataclass
class MeshData:
    """
    Generated mesh data for buildings.

    Attributes:
        vertices: List of (x, y, z) vertex positions
        normals: Optional per-vertex normals (parallel to vertices)
        colors: Optional per-vertex RGB colors (parallel to vertices)
        triangles: Triangle faces, 3 vertex indices each (0-based)
        quads: Quad faces, 4 vertex indices each (0-based)
        name: Optional mesh name

    Note on indexing:
        - Faces are stored with 0-based indices
        - When merging, indices are adjusted by the prior vertex count
    """
    vertices: List[Vec3] = field(default_factory=list)
    normals: List[Vec3] = field(default_factory=list)
    colors: List[Vec3] = field(default_factory=list)
    triangles: List[Tuple[int, int, int]] = field(default_factory=list)
    quads: List[Tuple[int, int, int, int]] = field(default_factory=list)
    name: Optional[str] = None

    def vertex_count(self) -> int:
        """Get number of vertices."""
        return len(self.vertices)

    def face_count(self) -> int:
        """Get number of faces (triangles + quads)."""
        return len(self.triangles) + len(self.quads)

    def triangle_count(self) -> int:
        """
        Get number of triangles after splitting quads.
        """
        return len(self.triangles) + 2 * len(self.quads)

    def has_normals(self) -> bool:
        """Check if mesh has one normal per vertex."""
        return len(self.normals) == len(self.vertices) and len(self.vertices) > 0

    def has_colors(self) -> bool:
        """Check if mesh has one color per vertex."""
        return len(self.colors) == len(self.vertices) and len(self.vertices) > 0

    def add_vertex(self, x: float, y: float, z: float) -> int:
        """
        Add a vertex and return its 0-based index.

        Args:
            x, y, z: Vertex coordinates

        Returns:
            0-based index of the new vertex
        """
        self.vertices.append((x, y, z))
        return len(self.vertices) - 1

    def add_triangle(self, v1: int, v2: int, v3: int) -> None:
        """
        Add a triangle face.

        Args:
            v1, v2, v3: Vertex indices (0-based, CCW seen from outside)
        """
        self.triangles.append((v1, v2, v3))

    def add_quad(self, v1: int, v2: int, v3: int, v4: int) -> None:
        """
        Add a quad face.

        Args:
            v1, v2, v3, v4: Vertex indices (0-based, CCW seen from outside)
        """
        self.quads.append((v1, v2, v3, v4))

    def merge(self, other: 'MeshData') -> None:
        """
        Merge another mesh into this one.

        Vertices are appended and every face index of the other mesh is
        offset by this mesh's prior vertex count. Normals and colors survive
        only if both meshes carry them (or this one is still empty).

        Args:
            other: MeshData to merge into this one
        """
        if not other.vertices:
            return

        was_empty = not self.vertices
        keep_normals = other.has_normals() and (was_empty or self.has_normals())
        keep_colors = other.has_colors() and (was_empty or self.has_colors())

        vertex_offset = len(self.vertices)
        self.vertices.extend(other.vertices)

        if keep_normals:
            self.normals.extend(other.normals)
        else:
            self.normals.clear()

        if keep_colors:
            self.colors.extend(other.colors)
        else:
            self.colors.clear()

        for a, b, c in other.triangles:
            self.triangles.append((a + vertex_offset, b + vertex_offset, c + vertex_offset))

        for a, b, c, d in other.quads:
            self.quads.append((
                a + vertex_offset, b + vertex_offset,
                c + vertex_offset, d + vertex_offset
            ))

    def copy(self) -> 'MeshData':
        """Return an independent copy of this mesh."""
        return MeshData(
            vertices=list(self.vertices),
            normals=list(self.normals),
            colors=list(self.colors),
            triangles=list(self.triangles),
            quads=list(self.quads),
            name=self.name,
        )

    def displaced(self, dx: float, dy: float, dz: float) -> 'MeshData':
        """
        Return a copy with every vertex translated by (dx, dy, dz).

        The original mesh is left untouched.
        """
        result = self.copy()
        result.vertices = [(x + dx, y + dy, z + dz) for x, y, z in self.vertices]
        return result

    def set_color(self, color: Vec3) -> None:
        """Assign the same RGB color to every vertex."""
        self.colors = [tuple(color)] * len(self.vertices)

    def merge_duplicate_vertices(self, tolerance: float = 1e-6) -> int:
        """
        Collapse vertices closer than tolerance into a single vertex.

        Faces are remapped; faces that collapse to fewer than 3 distinct
        vertices are dropped. Normals and colors of the surviving vertex
        are kept.

        Args:
            tolerance: Coordinates are snapped to this grid size when
                comparing positions

        Returns:
            Number of vertices removed
        """
        if not self.vertices:
            return 0

        keep_normals = self.has_normals()
        keep_colors = self.has_colors()

        lookup: Dict[Tuple[int, int, int], int] = {}
        remap: List[int] = []
        new_vertices: List[Vec3] = []
        new_normals: List[Vec3] = []
        new_colors: List[Vec3] = []

        for i, (x, y, z) in enumerate(self.vertices):
            key = (
                int(round(x / tolerance)),
                int(round(y / tolerance)),
                int(round(z / tolerance)),
            )
            idx = lookup.get(key)
            if idx is None:
                idx = len(new_vertices)
                lookup[key] = idx
                new_vertices.append((x, y, z))
                if keep_normals:
                    new_normals.append(self.normals[i])
                if keep_colors:
                    new_colors.append(self.colors[i])
            remap.append(idx)

        removed = len(self.vertices) - len(new_vertices)

        triangles = []
        for face in self.triangles:
            mapped = tuple(remap[i] for i in face)
            if len(set(mapped)) == 3:
                triangles.append(mapped)

        quads = []
        for face in self.quads:
            mapped = tuple(remap[i] for i in face)
            distinct = len(set(mapped))
            if distinct == 4:
                quads.append(mapped)
            elif distinct == 3 and any(
                mapped[k] == mapped[(k + 1) % 4] for k in range(4)
            ):
                # A quad with one collapsed edge is still a valid triangle;
                # collapsed diagonals (a, b, a, c) are dropped
                tri = []
                for idx in mapped:
                    if idx not in tri:
                        tri.append(idx)
                triangles.append(tuple(tri))

        self.vertices = new_vertices
        self.normals = new_normals
        self.colors = new_colors
        self.triangles = triangles
        self.quads = quads

        return removed

    def face_normals(self) -> List[Vec3]:
        """
        Compute one unnormalized normal per face using Newell's method.

        Triangles come first, then quads. The vector length is twice the
        face area, so summing them gives area-weighted vertex normals.
        """
        normals = []
        for face in list(self.triangles) + list(self.quads):
            normals.append(_newell_normal([self.vertices[i] for i in face]))
        return normals

    def compute_normals(self) -> None:
        """
        Compute per-vertex normals by area-weighted face normal accumulation.

        Vertices not referenced by any face get (0, 0, 1).
        """
        acc = [[0.0, 0.0, 0.0] for _ in self.vertices]
        faces = list(self.triangles) + list(self.quads)

        for face, (nx, ny, nz) in zip(faces, self.face_normals()):
            for idx in face:
                acc[idx][0] += nx
                acc[idx][1] += ny
                acc[idx][2] += nz

        normals = []
        for nx, ny, nz in acc:
            length = math.sqrt(nx * nx + ny * ny + nz * nz)
            if length < 1e-12:
                normals.append((0.0, 0.0, 1.0))
            else:
                normals.append((nx / length, ny / length, nz / length))

        self.normals = normals

    def is_empty(self) -> bool:
        """Check if mesh has no geometry."""
        return len(self.vertices) == 0

    def validate(self) -> List[str]:
        """
        Validate mesh integrity.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.vertices:
            errors.append("Mesh has no vertices")
            return errors

        max_idx = len(self.vertices) - 1

        for kind, faces in (("Triangle", self.triangles), ("Quad", self.quads)):
            for i, face in enumerate(faces):
                for idx in face:
                    if idx < 0 or idx > max_idx:
                        errors.append(
                            f"{kind} {i} has invalid vertex index {idx} "
                            f"(valid range: 0-{max_idx})"
                        )

        if self.normals and len(self.normals) != len(self.vertices):
            errors.append(
                f"Normal count {len(self.normals)} does not match "
                f"vertex count {len(self.vertices)}"
            )

        if self.colors and len(self.colors) != len(self.vertices):
            errors.append(
                f"Color count {len(self.colors)} does not match "
                f"vertex count {len(self.vertices)}"
            )

        return errors

    def compute_bounds(self) -> Optional[Tuple[Vec3, Vec3]]:
        """
        Compute bounding box of the mesh.

        Returns:
            ((min_x, min_y, min_z), (max_x, max_y, max_z)) or None if empty
        """
        if not self.vertices:
            return None

        xs = [v[0] for v in self.vertices]
        ys = [v[1] for v in self.vertices]
        zs = [v[2] for v in self.vertices]

        return (
            (min(xs), min(ys), min(zs)),
            (max(xs), max(ys), max(zs))
        )

    def size(self) -> Vec3:
        """Extent of the mesh along each axis ((0, 0, 0) if empty)."""
        bounds = self.compute_bounds()
        if bounds is None:
            return (0.0, 0.0, 0.0)
        (min_x, min_y, min_z), (max_x, max_y, max_z) = bounds
        return (max_x - min_x, max_y - min_y, max_z - min_z)

    def __repr__(self) -> str:
        return (
            f"MeshData(vertices={len(self.vertices)}, "
            f"triangles={len(self.triangles)}, quads={len(self.quads)})"
        )


def _newell_normal(points: List[Vec3]) -> Vec3:
    """Unnormalized polygon normal (length = 2 * area)."""
    nx = ny = nz = 0.0
    n = len(points)
    for i in range(n):
        x1, y1, z1 = points[i]
        x2, y2, z2 = points[(i + 1) % n]
        nx += (y1 - y2) * (z1 + z2)
        ny += (z1 - z2) * (x1 + x2)
        nz += (x1 - x2) * (y1 + y2)
    return (nx, ny, nz)


def merge_meshes(meshes: List[MeshData]) -> MeshData:
    """
    Merge multiple meshes into one.

    Args:
        meshes: List of MeshData to merge

    Returns:
        Single merged MeshData
    """
    result = MeshData()

    for mesh in meshes:
        result.merge(mesh)

    return result
