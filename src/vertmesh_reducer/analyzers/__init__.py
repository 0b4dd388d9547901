"""Analyzers for tolerances, corner attributes, motion, bounds and adjacency."""

from vertmesh_reducer.analyzers.bounds import compute_box, compute_sphere, rebuild_bounds
from vertmesh_reducer.analyzers.connectivity import (
    build_connectivity,
    rebuild_connectivity,
)
from vertmesh_reducer.analyzers.corners import (
    Corner,
    build_corner_lists,
    corner_sets_equivalent,
    face_normal,
    snap_corner_uvs,
    snap_uv_byte,
)
from vertmesh_reducer.analyzers.motion import (
    build_vertex_tolerance_sq,
    compute_vertex_motion,
)
from vertmesh_reducer.analyzers.tolerances import (
    Tolerances,
    compute_mesh_scale,
    normalize_tolerances,
)

__all__ = [
    "Corner",
    "Tolerances",
    "build_connectivity",
    "build_corner_lists",
    "build_vertex_tolerance_sq",
    "compute_box",
    "compute_mesh_scale",
    "compute_sphere",
    "compute_vertex_motion",
    "corner_sets_equivalent",
    "face_normal",
    "normalize_tolerances",
    "rebuild_bounds",
    "rebuild_connectivity",
    "snap_corner_uvs",
    "snap_uv_byte",
]
