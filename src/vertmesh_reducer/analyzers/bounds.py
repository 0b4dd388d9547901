"""Per-frame and whole-animation bounding volumes."""

import numpy as np

from vertmesh_reducer.mesh import Box, Mesh, Sphere
from vertmesh_reducer.utils.constants import SPHERE_RADIUS_SLACK


def _vec(values: np.ndarray) -> tuple[float, float, float]:
    return (float(values[0]), float(values[1]), float(values[2]))


def compute_box(points: np.ndarray) -> Box:
    """Axis-aligned box around ``points`` (an ``(N, 3)`` array, N > 0)."""
    return Box(min=_vec(points.min(axis=0)), max=_vec(points.max(axis=0)))


def compute_sphere(points: np.ndarray) -> Sphere:
    """Sphere centred on the box centre, reaching the farthest point."""
    lo = points.min(axis=0)
    hi = points.max(axis=0)
    center = (lo + hi) * 0.5
    radius_sq = float(((points - center) ** 2).sum(axis=1).max())
    return Sphere(center=_vec(center), radius=float(np.sqrt(radius_sq)) * SPHERE_RADIUS_SLACK)


def rebuild_bounds(mesh: Mesh) -> bool:
    """Recompute every frame's box and sphere plus the combined ones."""
    if mesh.anim_frame_count <= 0 or mesh.frame_vertex_count <= 0:
        return False
    if not mesh.has_consistent_layout:
        return False

    frames = mesh.frames()
    mesh.frame_boxes = [compute_box(points) for points in frames]
    mesh.frame_spheres = [compute_sphere(points) for points in frames]
    mesh.bounding_box = compute_box(mesh.positions)
    mesh.bounding_sphere = compute_sphere(mesh.positions)
    return True
