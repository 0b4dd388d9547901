"""Cleaners that weld vertices, drop duplicate triangles and decimate keyframes."""

from vertmesh_reducer.cleaners.keyframes import (
    collect_anchor_frames,
    decimate_keyframes,
    find_kept_frames,
    measure_frame_errors,
)
from vertmesh_reducer.cleaners.triangles import remove_duplicate_triangles, triangle_key
from vertmesh_reducer.cleaners.vertices import find_canonical_slots, weld_vertices

__all__ = [
    "collect_anchor_frames",
    "decimate_keyframes",
    "find_canonical_slots",
    "find_kept_frames",
    "measure_frame_errors",
    "remove_duplicate_triangles",
    "triangle_key",
    "weld_vertices",
]
