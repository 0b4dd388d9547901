"""Per-vertex motion profile and the decimation budgets derived from it."""

from __future__ import annotations

import numpy as np

from vertmesh_reducer.mesh import Mesh


def compute_vertex_motion(mesh: Mesh) -> np.ndarray | None:
    """
    Largest distance each vertex slot moves between two consecutive frames.

    Returns None for static meshes (one frame or fewer) and for meshes whose
    positions do not match their frame layout.
    """
    if mesh.anim_frame_count <= 1 or mesh.frame_vertex_count <= 0:
        return None
    if not mesh.has_consistent_layout:
        return None

    steps = np.diff(mesh.frames(), axis=0)
    return np.linalg.norm(steps, axis=2).max(axis=0)


def build_vertex_tolerance_sq(
    motion: np.ndarray | None,
    base_tolerance: float,
    motion_scale: float,
    default_tolerance_sq: float,
) -> np.ndarray | None:
    """
    Squared error budget per vertex: ``(base + scale * motion) ** 2``.

    A non-positive linear term falls back to ``default_tolerance_sq`` so a
    budget never collapses to zero.
    """
    if motion is None or motion.size == 0:
        return None
    if base_tolerance <= 0.0 and motion_scale <= 0.0:
        return None

    tolerance = base_tolerance + motion_scale * motion
    applied = np.where(tolerance > 0.0, tolerance, np.sqrt(default_tolerance_sq))
    return applied * applied
