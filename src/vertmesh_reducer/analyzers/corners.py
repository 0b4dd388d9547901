"""Per-vertex face-corner attributes and their equivalence test."""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

from vertmesh_reducer.mesh import Mesh
from vertmesh_reducer.utils import round_half_up, uv_byte_to_float, uv_float_to_byte
from vertmesh_reducer.utils.constants import SMALL_NUMBER

Vector = tuple[float, float, float]

ZERO_NORMAL: Vector = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class Corner:
    """Attributes one triangle contributes to one of its vertex slots."""

    texture_index: int
    poly_flags: int
    u: int
    v: int
    normal: Vector = ZERO_NORMAL


def face_normal(p0: np.ndarray, p1: np.ndarray, p2: np.ndarray) -> Vector:
    """Unit normal of a triangle, or the zero vector for degenerate faces."""
    cross = np.cross(p1 - p0, p2 - p0)
    length_sq = float(np.dot(cross, cross))
    if length_sq <= SMALL_NUMBER:
        return ZERO_NORMAL
    cross = cross / np.sqrt(length_sq)
    return (float(cross[0]), float(cross[1]), float(cross[2]))


def build_corner_lists(mesh: Mesh) -> list[list[Corner]]:
    """
    Collect the face-corner attributes owned by every vertex slot.

    Face normals come from the first frame only. Corners are appended in
    triangle order, so a slot shared by many triangles accumulates many
    corners. Corners pointing outside the vertex slots are skipped.
    """
    if mesh.frame_vertex_count <= 0:
        return []

    corner_lists: list[list[Corner]] = [[] for _ in range(mesh.frame_vertex_count)]
    first_frame = mesh.positions[: mesh.frame_vertex_count]
    origin = np.zeros(3)

    for tri in mesh.triangles:
        points = [
            first_frame[index]
            if mesh.is_valid_vertex(index) and index < len(first_frame)
            else origin
            for index in tri.vertices
        ]
        normal = face_normal(points[0], points[1], points[2])

        for index, (u, v) in zip(tri.vertices, tri.uvs):
            if not mesh.is_valid_vertex(index):
                continue
            corner_lists[index].append(
                Corner(
                    texture_index=tri.texture_index,
                    poly_flags=tri.poly_flags,
                    u=u,
                    v=v,
                    normal=normal,
                )
            )

    return corner_lists


def snap_uv_byte(value: int, grid: float) -> int:
    """Quantize a UV byte to the nearest multiple of ``grid`` (in 0..1 space)."""
    snapped = round_half_up(uv_byte_to_float(value) / grid) * grid
    return uv_float_to_byte(snapped)


def snap_corner_uvs(
    corner_lists: list[list[Corner]], grid: float
) -> list[list[Corner]]:
    """Return corner lists with UVs snapped to ``grid``; ``grid <= 0`` is a no-op."""
    if grid <= 0.0:
        return corner_lists

    return [
        [
            replace(corner, u=snap_uv_byte(corner.u, grid), v=snap_uv_byte(corner.v, grid))
            for corner in corners
        ]
        for corners in corner_lists
    ]


def _corners_match(
    a: Corner, b: Corner, uv_tolerance: int, cos_normal: float
) -> bool:
    if a.texture_index != b.texture_index or a.poly_flags != b.poly_flags:
        return False
    if abs(a.u - b.u) > uv_tolerance or abs(a.v - b.v) > uv_tolerance:
        return False
    if cos_normal > 0.0:
        dot = sum(x * y for x, y in zip(a.normal, b.normal))
        if dot < cos_normal:
            return False
    return True


def corner_sets_equivalent(
    a: list[Corner], b: list[Corner], uv_tolerance: int, cos_normal: float
) -> bool:
    """
    Greedy first-fit pairing of two corner lists.

    Each corner of ``a``, in order, claims the first unused corner of ``b``
    it matches. This is not an optimal assignment: a list that another
    pairing order would accept can be rejected here.
    """
    if len(a) != len(b):
        return False

    used = [False] * len(b)
    for corner in a:
        for j, candidate in enumerate(b):
            if used[j]:
                continue
            if _corners_match(corner, candidate, uv_tolerance, cos_normal):
                used[j] = True
                break
        else:
            return False

    return True
