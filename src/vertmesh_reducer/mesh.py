"""Vertex-animated mesh data model.

A mesh stores one full position per vertex slot per keyframe. Positions are
kept flat, frame-major: the position of slot ``v`` at frame ``f`` lives at
``positions[f * frame_vertex_count + v]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _as_positions(values: object) -> np.ndarray:
    """Coerce any sequence of xyz triples into an ``(N, 3)`` float array."""
    array = np.asarray(values, dtype=np.float64)
    if array.size == 0:
        return np.zeros((0, 3), dtype=np.float64)
    return array.reshape(-1, 3)


@dataclass
class Triangle:
    """One mesh face: three vertex slots plus per-corner UV bytes."""

    vertices: list[int]
    texture_index: int = 0
    poly_flags: int = 0
    uvs: list[tuple[int, int]] = field(
        default_factory=lambda: [(0, 0), (0, 0), (0, 0)]
    )

    def __post_init__(self) -> None:
        self.vertices = [int(v) for v in self.vertices]
        self.uvs = [(int(u), int(v)) for u, v in self.uvs]
        if len(self.vertices) != 3 or len(self.uvs) != 3:
            raise ValueError("Triangle needs exactly 3 vertices and 3 UVs")


@dataclass
class AnimSequence:
    """Named frame range; a view over the frame axis that may overlap others."""

    name: str
    start_frame: int
    frame_count: int
    rate: float = 30.0

    @property
    def end_frame(self) -> int:
        """Last frame of the sequence (inclusive)."""
        return self.start_frame + self.frame_count - 1

    @property
    def duration(self) -> float:
        """Playback length in seconds."""
        if self.rate <= 0:
            return 0.0
        return self.frame_count / self.rate


@dataclass(frozen=True)
class Box:
    """Axis-aligned bounding box."""

    min: tuple[float, float, float]
    max: tuple[float, float, float]

    @property
    def size(self) -> tuple[float, float, float]:
        return (
            self.max[0] - self.min[0],
            self.max[1] - self.min[1],
            self.max[2] - self.min[2],
        )


@dataclass(frozen=True)
class Sphere:
    """Bounding sphere."""

    center: tuple[float, float, float]
    radius: float


@dataclass
class Connectivity:
    """Vertex-to-triangle adjacency in compressed (offset, count) form."""

    offsets: list[int] = field(default_factory=list)
    counts: list[int] = field(default_factory=list)
    links: list[int] = field(default_factory=list)

    def triangles_for(self, vertex: int) -> list[int]:
        """Triangle indices referencing ``vertex``, in triangle order."""
        if vertex < 0 or vertex >= len(self.offsets):
            return []
        start = self.offsets[vertex]
        return self.links[start : start + self.counts[vertex]]


@dataclass
class Mesh:
    """A vertex-animated mesh, mutated in place by the reducer."""

    name: str = "Mesh"
    frame_vertex_count: int = 0
    anim_frame_count: int = 0
    positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 3)))
    triangles: list[Triangle] = field(default_factory=list)
    anim_sequences: list[AnimSequence] = field(default_factory=list)

    # Derived data, rebuilt by the reducer
    connectivity: Connectivity | None = None
    frame_boxes: list[Box] = field(default_factory=list)
    frame_spheres: list[Sphere] = field(default_factory=list)
    bounding_box: Box | None = None
    bounding_sphere: Sphere | None = None

    def __post_init__(self) -> None:
        self.positions = _as_positions(self.positions)

    @property
    def has_consistent_layout(self) -> bool:
        """True when positions hold exactly one slot per vertex per frame."""
        return (
            self.frame_vertex_count >= 0
            and self.anim_frame_count >= 0
            and len(self.positions)
            == self.frame_vertex_count * self.anim_frame_count
        )

    def frames(self) -> np.ndarray:
        """Positions as a ``(frames, verts, 3)`` view."""
        return self.positions.reshape(
            self.anim_frame_count, self.frame_vertex_count, 3
        )

    def frame(self, index: int) -> np.ndarray:
        """Positions of every vertex slot at one frame."""
        start = index * self.frame_vertex_count
        return self.positions[start : start + self.frame_vertex_count]

    def track(self, vertex: int) -> np.ndarray:
        """Positions of one vertex slot across every frame."""
        return self.frames()[:, vertex, :]

    def is_valid_vertex(self, index: int) -> bool:
        return 0 <= index < self.frame_vertex_count

    def count_invalid_corners(self) -> int:
        """Number of triangle corners pointing outside the vertex slots."""
        return sum(
            1
            for tri in self.triangles
            for index in tri.vertices
            if not self.is_valid_vertex(index)
        )
