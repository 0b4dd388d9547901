"""Keyframe decimation by recursive maximum-error search.

Frames that linear interpolation between two surviving frames reproduces
within budget are dropped. Anchor frames (the first and last frame of the
animation and of every sequence) always survive. Each segment between two
consecutive anchors is refined Douglas-Peucker style: the worst candidate
frame is kept if it is out of budget and both halves are searched again.
"""

from __future__ import annotations

import numpy as np

from vertmesh_reducer.mesh import AnimSequence, Mesh
from vertmesh_reducer.utils.constants import DEFAULT_FRAME_RATE, SMALL_NUMBER


def collect_anchor_frames(mesh: Mesh) -> list[int]:
    """Sorted, unique frames that must never be dropped."""
    anchors = {0, mesh.anim_frame_count - 1}
    for seq in mesh.anim_sequences:
        if seq.frame_count <= 0:
            continue
        anchors.add(seq.start_frame)
        anchors.add(seq.end_frame)
    return sorted(f for f in anchors if 0 <= f < mesh.anim_frame_count)


def measure_frame_errors(
    frames: np.ndarray,
    start: int,
    end: int,
    base_tolerance_sq: float,
    vertex_tolerance_sq: np.ndarray | None = None,
) -> np.ndarray:
    """
    Interpolation error of every frame strictly between ``start`` and ``end``.

    For each candidate frame the vertices are scanned in order. The first
    vertex whose squared error exceeds its own budget stops the scan and
    its error stands for the frame, even when a later vertex is worse. A
    frame where every vertex fits reports its largest squared error.

    Per-vertex budgets only decide where the scan stops. Returns the
    representative squared error of each candidate frame.
    """
    count = end - start - 1
    vert_count = frames.shape[1]
    if count <= 0 or vert_count == 0:
        return np.zeros(0)

    if vertex_tolerance_sq is not None:
        allow = np.asarray(vertex_tolerance_sq, dtype=np.float64)
    else:
        allow = np.full(vert_count, base_tolerance_sq, dtype=np.float64)

    first = frames[start]
    span = frames[end] - first
    alphas = (np.arange(start + 1, end) - start) / float(end - start)
    expected = first[np.newaxis] + span[np.newaxis] * alphas[:, np.newaxis, np.newaxis]
    delta = frames[start + 1 : end] - expected
    errors = (delta * delta).sum(axis=2)

    exceeded = errors > allow[np.newaxis, :]
    driver = np.where(
        exceeded.any(axis=1), exceeded.argmax(axis=1), errors.argmax(axis=1)
    )
    rows = np.arange(count)
    return errors[rows, driver]


def _reduce_between(
    frames: np.ndarray,
    start: int,
    end: int,
    base_tolerance_sq: float,
    vertex_tolerance_sq: np.ndarray | None,
    keep: np.ndarray,
) -> None:
    stack = [(start, end)]
    while stack:
        lo, hi = stack.pop()
        if hi <= lo + 1:
            continue

        if base_tolerance_sq <= 0.0 and vertex_tolerance_sq is None:
            keep[lo + 1 : hi] = True
            continue

        errors = measure_frame_errors(
            frames, lo, hi, base_tolerance_sq, vertex_tolerance_sq
        )
        if errors.size == 0:
            continue

        best = int(errors.argmax())
        # Per-vertex budgets only pick the representative; the uniform one decides
        if errors[best] <= 0.0 or errors[best] <= base_tolerance_sq:
            continue

        best_frame = lo + 1 + best
        keep[best_frame] = True
        stack.append((best_frame, hi))
        stack.append((lo, best_frame))


def find_kept_frames(
    mesh: Mesh,
    base_tolerance_sq: float,
    vertex_tolerance_sq: np.ndarray | None = None,
    anchors: list[int] | None = None,
) -> np.ndarray:
    """Boolean mask over frames: anchors plus every frame the search keeps."""
    if anchors is None:
        anchors = collect_anchor_frames(mesh)

    keep = np.zeros(mesh.anim_frame_count, dtype=bool)
    keep[anchors] = True

    frames = mesh.frames()
    for start, end in zip(anchors, anchors[1:]):
        _reduce_between(frames, start, end, base_tolerance_sq, vertex_tolerance_sq, keep)
    return keep


def build_frame_remap(keep: np.ndarray) -> list[int | None]:
    """Old frame index to new index for kept frames, None for dropped ones."""
    remap: list[int | None] = [None] * len(keep)
    for new_index, old_index in enumerate(np.flatnonzero(keep)):
        remap[int(old_index)] = new_index
    return remap


def remap_sequences(
    sequences: list[AnimSequence], frame_remap: list[int | None]
) -> None:
    """
    Point sequences at the surviving frames, keeping their play time.

    The rate is rescaled so ``frame_count / rate`` stays the same; sequences
    stored without a usable rate are treated as 30 fps.
    """
    total = len(frame_remap)
    for seq in sequences:
        if seq.frame_count <= 0:
            continue

        old_start = seq.start_frame
        old_end = old_start + seq.frame_count
        old_rate = seq.rate if seq.rate > SMALL_NUMBER else DEFAULT_FRAME_RATE
        old_duration = seq.frame_count / old_rate

        new_start = frame_remap[old_start] if 0 <= old_start < total else None
        new_count = sum(
            1
            for frame in range(max(old_start, 0), min(old_end, total))
            if frame_remap[frame] is not None
        )

        seq.start_frame = new_start if new_start is not None else 0
        seq.frame_count = max(1, new_count)
        if old_duration > SMALL_NUMBER:
            seq.rate = seq.frame_count / old_duration


def decimate_keyframes(
    mesh: Mesh,
    frame_tolerance: float,
    vertex_tolerance_sq: np.ndarray | None = None,
) -> bool:
    """
    Drop keyframes that interpolation reproduces within budget, in place.

    ``frame_tolerance`` is the uniform budget in mesh units;
    ``vertex_tolerance_sq`` optionally overrides it per vertex (squared).
    Returns True when at least one frame was dropped.
    """
    if mesh.anim_frame_count <= 2 or mesh.frame_vertex_count <= 0:
        return False
    if not mesh.has_consistent_layout or frame_tolerance <= 0.0:
        return False

    anchors = collect_anchor_frames(mesh)
    if len(anchors) < 2:
        return False

    keep = find_kept_frames(
        mesh, frame_tolerance * frame_tolerance, vertex_tolerance_sq, anchors
    )
    kept = np.flatnonzero(keep)
    if len(kept) == mesh.anim_frame_count:
        return False

    frame_remap = build_frame_remap(keep)
    mesh.positions = np.ascontiguousarray(mesh.frames()[kept]).reshape(-1, 3)
    remap_sequences(mesh.anim_sequences, frame_remap)
    mesh.anim_frame_count = len(kept)
    return True
