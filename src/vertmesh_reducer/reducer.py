"""Animated mesh reduction: vertex welding followed by keyframe decimation."""

from __future__ import annotations

from dataclasses import dataclass, field

from vertmesh_reducer.analyzers import (
    build_vertex_tolerance_sq,
    compute_vertex_motion,
    normalize_tolerances,
    rebuild_bounds,
    rebuild_connectivity,
)
from vertmesh_reducer.cleaners import (
    decimate_keyframes,
    remove_duplicate_triangles,
    weld_vertices,
)
from vertmesh_reducer.mesh import Mesh
from vertmesh_reducer.utils import estimate_mesh_bytes
from vertmesh_reducer.utils.constants import DEFAULT_OPTIONS


@dataclass(frozen=True)
class ReductionOptions:
    """
    Reduction tolerances, relative to the mesh.

    Position and frame tolerances are fractions of the mesh scale (half the
    diagonal of the animation's bounding box). UV tolerance and snap grid
    are in normalized 0..1 texture space.
    """

    position_tolerance: float = DEFAULT_OPTIONS["position_tolerance"]
    uv_tolerance: float = DEFAULT_OPTIONS["uv_tolerance"]
    normal_angle_tolerance_deg: float = DEFAULT_OPTIONS["normal_angle_tolerance_deg"]
    frame_error_tolerance: float = DEFAULT_OPTIONS["frame_error_tolerance"]
    motion_error_scale: float = DEFAULT_OPTIONS["motion_error_scale"]
    uv_snap_grid: float = DEFAULT_OPTIONS["uv_snap_grid"]
    weld_vertices: bool = DEFAULT_OPTIONS["weld_vertices"]


@dataclass
class ReductionStats:
    """Before/after counts for one reduced mesh."""

    mesh_name: str
    original_verts: int = 0
    reduced_verts: int = 0
    original_triangles: int = 0
    reduced_triangles: int = 0
    original_frames: int = 0
    reduced_frames: int = 0
    changed: bool = False
    warnings: list[str] = field(default_factory=list)

    @property
    def welded_vertices(self) -> int:
        return self.original_verts - self.reduced_verts

    @property
    def removed_triangles(self) -> int:
        return self.original_triangles - self.reduced_triangles

    @property
    def dropped_frames(self) -> int:
        return self.original_frames - self.reduced_frames

    @property
    def original_bytes(self) -> int:
        return estimate_mesh_bytes(
            self.original_triangles, self.original_verts, self.original_frames
        )

    @property
    def reduced_bytes(self) -> int:
        return estimate_mesh_bytes(
            self.reduced_triangles, self.reduced_verts, self.reduced_frames
        )


def _check_mesh(mesh: Mesh, stats: ReductionStats) -> None:
    """Record malformed-input warnings; reduction steps skip what they can't use."""
    if not mesh.has_consistent_layout:
        stats.warnings.append(
            f"{len(mesh.positions)} positions do not match "
            f"{mesh.frame_vertex_count} verts x {mesh.anim_frame_count} frames; "
            "geometry left untouched"
        )

    invalid = mesh.count_invalid_corners()
    if invalid:
        stats.warnings.append(
            f"{invalid} triangle corner(s) reference missing vertex slots; skipped"
        )


def reduce(
    mesh: Mesh | None, options: ReductionOptions | None = None
) -> tuple[bool, ReductionStats | None]:
    """
    Reduce ``mesh`` in place.

    Pipeline:
    1. Scale relative tolerances to the mesh
    2. Weld equivalent vertex slots, then drop duplicate triangles
    3. Profile per-vertex motion to build per-vertex frame budgets
    4. Decimate keyframes between anchor frames
    5. Rebuild adjacency and bounds for whatever changed

    Returns ``(changed, stats)``. A missing mesh yields ``(False, None)``.
    """
    if mesh is None:
        return False, None

    if options is None:
        options = ReductionOptions()

    stats = ReductionStats(
        mesh_name=mesh.name,
        original_verts=mesh.frame_vertex_count,
        original_triangles=len(mesh.triangles),
        original_frames=mesh.anim_frame_count,
    )
    _check_mesh(mesh, stats)

    tolerances = normalize_tolerances(mesh, options)

    welded = False
    removed_tris = False
    if options.weld_vertices:
        welded = weld_vertices(mesh, tolerances, options.uv_snap_grid)
        removed_tris = remove_duplicate_triangles(mesh)

    vertex_tolerance_sq = None
    if options.motion_error_scale > 0.0:
        motion = compute_vertex_motion(mesh)
        vertex_tolerance_sq = build_vertex_tolerance_sq(
            motion,
            tolerances.frame_units,
            options.motion_error_scale,
            tolerances.frame_units * tolerances.frame_units,
        )

    decimated = decimate_keyframes(mesh, tolerances.frame_units, vertex_tolerance_sq)

    if welded or removed_tris:
        rebuild_connectivity(mesh)
    if welded or decimated:
        rebuild_bounds(mesh)

    stats.reduced_verts = mesh.frame_vertex_count
    stats.reduced_triangles = len(mesh.triangles)
    stats.reduced_frames = mesh.anim_frame_count
    stats.changed = welded or removed_tris or decimated

    return stats.changed, stats
