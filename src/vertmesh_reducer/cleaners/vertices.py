"""Welding of vertex slots that are equivalent across the whole animation."""

from __future__ import annotations

import numpy as np

from vertmesh_reducer.analyzers.corners import (
    Corner,
    build_corner_lists,
    corner_sets_equivalent,
    snap_corner_uvs,
)
from vertmesh_reducer.analyzers.tolerances import Tolerances
from vertmesh_reducer.mesh import Mesh


def find_canonical_slots(
    mesh: Mesh,
    corner_lists: list[list[Corner]],
    tolerances: Tolerances,
) -> tuple[list[int], list[int]]:
    """
    Assign every vertex slot to the first equivalent canonical slot.

    A slot joins canonical entry ``c`` when its whole track stays within
    ``tolerances.position_units`` of ``c``'s track on every frame and their
    corner lists pair up (see ``corner_sets_equivalent``). Otherwise it
    becomes a new canonical entry.

    Returns ``(remap, canonical)``: ``remap[v]`` is the new index of slot
    ``v`` and ``canonical[i]`` is the original slot kept for new index ``i``.
    """
    # (verts, frames, 3)
    tracks = mesh.frames().transpose(1, 0, 2)
    tolerance_sq = (
        tolerances.position_units * tolerances.position_units
        if tolerances.position_units > 0.0
        else 0.0
    )

    canonical: list[int] = []
    remap: list[int] = []

    for vertex in range(mesh.frame_vertex_count):
        match = -1
        if canonical:
            deltas = tracks[canonical] - tracks[vertex]
            close = ((deltas * deltas).sum(axis=2) <= tolerance_sq).all(axis=1)
            for candidate in np.flatnonzero(close):
                if corner_sets_equivalent(
                    corner_lists[vertex],
                    corner_lists[canonical[candidate]],
                    tolerances.uv_bytes,
                    tolerances.cos_normal,
                ):
                    match = int(candidate)
                    break

        if match < 0:
            match = len(canonical)
            canonical.append(vertex)
        remap.append(match)

    return remap, canonical


def weld_vertices(mesh: Mesh, tolerances: Tolerances, uv_snap_grid: float) -> bool:
    """
    Merge equivalent vertex slots in place.

    The first slot of each group keeps its own positions verbatim. Triangle
    corners are rewritten through the remap; out-of-range corners are left
    untouched. Returns True when the vertex count shrank.
    """
    if mesh.frame_vertex_count <= 0 or mesh.anim_frame_count <= 0:
        return False
    if not mesh.has_consistent_layout:
        return False

    corner_lists = snap_corner_uvs(build_corner_lists(mesh), uv_snap_grid)
    remap, canonical = find_canonical_slots(mesh, corner_lists, tolerances)

    if len(canonical) == mesh.frame_vertex_count:
        return False

    mesh.positions = np.ascontiguousarray(mesh.frames()[:, canonical, :]).reshape(-1, 3)

    for tri in mesh.triangles:
        tri.vertices = [
            remap[index] if mesh.is_valid_vertex(index) else index
            for index in tri.vertices
        ]

    mesh.frame_vertex_count = len(canonical)
    return True
