"""Small helpers shared by the analyzers and cleaners."""

import math

from vertmesh_reducer.utils.constants import (
    MESH_TRIANGLE_BYTES,
    MESH_VERTEX_BYTES,
    UV_BYTE_MAX,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounding towards +inf."""
    return math.floor(value + 0.5)


def clamp_uv_byte(value: int) -> int:
    """Clamp an integer into the 0..255 UV byte range."""
    return max(0, min(UV_BYTE_MAX, value))


def uv_byte_to_float(value: int) -> float:
    """Convert a UV byte to its normalized 0..1 value."""
    return value / float(UV_BYTE_MAX)


def uv_float_to_byte(value: float) -> int:
    """Convert a normalized UV coordinate back to the nearest valid byte."""
    return clamp_uv_byte(round_half_up(value * UV_BYTE_MAX))


def sort3(a: int, b: int, c: int) -> tuple[int, int, int]:
    """Sort three integers with a fixed compare-and-swap network."""
    if a > b:
        a, b = b, a
    if b > c:
        b, c = c, b
    if a > b:
        a, b = b, a
    return a, b, c


def estimate_mesh_bytes(triangles: int, frame_verts: int, frames: int) -> int:
    """Estimate the packed storage size of a vertex-animated mesh."""
    return triangles * MESH_TRIANGLE_BYTES + frame_verts * frames * MESH_VERTEX_BYTES
