"""
Pytest fixtures for the mesh reducer tests.

Meshes are built in memory; no files are needed except in the exporter
and CLI tests, which use ``tmp_path``.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from vertmesh_reducer.mesh import AnimSequence, Mesh, Triangle

MeshFactory = Callable[..., Mesh]


def _build_mesh(
    tracks: np.ndarray | list,
    triangles: list[Triangle] | None = None,
    sequences: list[AnimSequence] | None = None,
    name: str = "TestMesh",
) -> Mesh:
    """Build a mesh from per-frame positions shaped ``(frames, verts, 3)``."""
    frames = np.asarray(tracks, dtype=np.float64)
    frame_count, vert_count, _ = frames.shape
    return Mesh(
        name=name,
        frame_vertex_count=vert_count,
        anim_frame_count=frame_count,
        positions=frames.reshape(-1, 3),
        triangles=triangles or [],
        anim_sequences=sequences or [],
    )


@pytest.fixture
def mesh_factory() -> MeshFactory:
    """Factory building a mesh from ``(frames, verts, 3)`` positions."""
    return _build_mesh


@pytest.fixture
def seam_quad_mesh() -> Mesh:
    """
    A flat quad split into two triangles whose shared edge is duplicated.

    Slots 3 and 5 copy slots 1 and 2 (same track, same UVs, same normal),
    as a UV seam exporter would write them. Everything translates along +x.
    """
    base = np.array(
        [
            [0.0, 0.0, 0.0],  # 0
            [4.0, 0.0, 0.0],  # 1
            [0.0, 4.0, 0.0],  # 2
            [4.0, 0.0, 0.0],  # 3 == 1
            [4.0, 4.0, 0.0],  # 4
            [0.0, 4.0, 0.0],  # 5 == 2
        ]
    )
    frames = [base + [float(f), 0.0, 0.0] for f in range(3)]
    triangles = [
        Triangle([0, 1, 2], uvs=[(0, 0), (255, 0), (0, 255)]),
        Triangle([3, 4, 5], uvs=[(255, 0), (255, 255), (0, 255)]),
    ]
    return _build_mesh(frames, triangles, name="SeamQuad")


@pytest.fixture
def linear_motion_mesh() -> Mesh:
    """
    Ten frames where frames 1-8 are exact interpolations of frames 0 and 9.

    One sequence covers all frames at 10 fps (one second).
    """
    start = np.array([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [0.0, 2.0, 0.0]])
    end = start + [9.0, 3.0, -6.0]
    frames = [start + (end - start) * (f / 9.0) for f in range(10)]
    triangles = [Triangle([0, 1, 2], uvs=[(0, 0), (255, 0), (0, 255)])]
    sequences = [AnimSequence("Walk", start_frame=0, frame_count=10, rate=10.0)]
    return _build_mesh(frames, triangles, sequences, name="Walker")


@pytest.fixture
def wobbly_mesh() -> Mesh:
    """
    Thirty frames of noisy motion split into three overlapping sequences.

    Seeded so every run sees the same positions.
    """
    rng = np.random.default_rng(1234)
    base = rng.uniform(-5.0, 5.0, size=(8, 3))
    t = np.linspace(0.0, 1.0, 30)[:, np.newaxis, np.newaxis]
    frames = base[np.newaxis] + np.sin(t * 6.0) * 2.0 + rng.normal(0.0, 0.05, (30, 8, 3))
    triangles = [
        Triangle([0, 1, 2]),
        Triangle([2, 3, 4], texture_index=1),
        Triangle([4, 5, 6], poly_flags=2),
        Triangle([5, 6, 7]),
    ]
    sequences = [
        AnimSequence("Idle", start_frame=0, frame_count=10, rate=15.0),
        AnimSequence("Run", start_frame=10, frame_count=15, rate=20.0),
        AnimSequence("Pose", start_frame=12, frame_count=18, rate=0.0),
    ]
    return _build_mesh(frames, triangles, sequences, name="Wobbly")
