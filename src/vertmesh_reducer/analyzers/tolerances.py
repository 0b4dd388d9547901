"""Conversion of relative reduction options into absolute mesh units."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from vertmesh_reducer.mesh import Mesh
from vertmesh_reducer.utils import clamp_uv_byte, round_half_up
from vertmesh_reducer.utils.constants import NORMAL_CHECK_DISABLED, UV_BYTE_MAX

if TYPE_CHECKING:
    from vertmesh_reducer.reducer import ReductionOptions


@dataclass(frozen=True)
class Tolerances:
    """Absolute tolerances for one reduction call."""

    mesh_scale: float
    position_units: float
    frame_units: float
    uv_bytes: int
    cos_normal: float

    @property
    def normal_check_enabled(self) -> bool:
        return self.cos_normal > 0.0


def compute_mesh_scale(mesh: Mesh) -> float:
    """
    Half the diagonal of the box around every position of every frame.

    Floored to 1.0 so tiny or degenerate meshes never get zero tolerances.
    """
    if len(mesh.positions) == 0:
        return 1.0

    lo = mesh.positions.min(axis=0)
    hi = mesh.positions.max(axis=0)
    scale = float(np.linalg.norm((hi - lo) * 0.5))
    return max(scale, 1.0)


def normal_tolerance_cosine(angle_deg: float) -> float:
    """Cosine of the allowed face-normal drift, or the disabled sentinel."""
    if angle_deg <= 0.0:
        return NORMAL_CHECK_DISABLED
    return math.cos(angle_deg * math.pi / 180.0)


def normalize_tolerances(mesh: Mesh, options: ReductionOptions) -> Tolerances:
    """Scale the relative options of ``options`` to ``mesh``."""
    scale = compute_mesh_scale(mesh)
    return Tolerances(
        mesh_scale=scale,
        position_units=options.position_tolerance * scale,
        frame_units=options.frame_error_tolerance * scale,
        uv_bytes=clamp_uv_byte(round_half_up(options.uv_tolerance * UV_BYTE_MAX)),
        cos_normal=normal_tolerance_cosine(options.normal_angle_tolerance_deg),
    )
