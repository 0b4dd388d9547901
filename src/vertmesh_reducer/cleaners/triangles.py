"""Removal of triangles that became identical after welding."""

from vertmesh_reducer.mesh import Mesh, Triangle
from vertmesh_reducer.utils import sort3

TriangleKey = tuple[tuple[int, int, int], int, int]


def triangle_key(tri: Triangle) -> TriangleKey:
    """Winding-independent identity of a triangle: sorted slots, flags, texture."""
    a, b, c = tri.vertices
    return (sort3(a, b, c), tri.poly_flags, tri.texture_index)


def remove_duplicate_triangles(mesh: Mesh) -> bool:
    """Keep the first triangle of each key; later duplicates and their UVs go."""
    if not mesh.triangles:
        return False

    seen: set[TriangleKey] = set()
    kept: list[Triangle] = []
    for tri in mesh.triangles:
        key = triangle_key(tri)
        if key in seen:
            continue
        seen.add(key)
        kept.append(tri)

    if len(kept) == len(mesh.triangles):
        return False

    mesh.triangles = kept
    return True
