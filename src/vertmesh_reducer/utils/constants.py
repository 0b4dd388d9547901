"""Constants and default tolerances for mesh reduction."""

from typing import TypedDict

# Degenerate face normal / frame rate epsilon
SMALL_NUMBER = 1e-8

# Rate assumed for sequences stored with a zero or negative rate
DEFAULT_FRAME_RATE = 30.0

# Cosine sentinel that turns the face-normal comparison off
NORMAL_CHECK_DISABLED = -1.0

# Bounding sphere radius padding
SPHERE_RADIUS_SLACK = 1.001

# Packed on-disk sizes used for the before/after byte estimates
MESH_TRIANGLE_BYTES = 20
MESH_VERTEX_BYTES = 4

# UV bytes span 0..255 for 0.0..1.0
UV_BYTE_MAX = 255


class ReductionConfig(TypedDict):
    """Default values for ReductionOptions."""

    position_tolerance: float
    uv_tolerance: float
    normal_angle_tolerance_deg: float
    frame_error_tolerance: float
    motion_error_scale: float
    uv_snap_grid: float
    weld_vertices: bool


# Defaults used by the asset conversion driver
DEFAULT_OPTIONS: ReductionConfig = {
    "position_tolerance": 0.01,  # Conservative vertex welding
    "uv_tolerance": 0.01,  # ~3 UV bytes
    "normal_angle_tolerance_deg": 15.0,  # 0 = ignore face normals
    "frame_error_tolerance": 1.0,  # Allow more frame error
    "motion_error_scale": 1.0,  # Fast vertices get a looser budget
    "uv_snap_grid": 1.0 / 64.0,  # 0 = no snapping
    "weld_vertices": True,  # False = keyframe decimation only
}
