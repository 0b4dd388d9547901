"""Vertex-to-triangle adjacency."""

from vertmesh_reducer.mesh import Connectivity, Mesh


def build_connectivity(mesh: Mesh) -> Connectivity:
    """
    List, per vertex slot, the triangles that reference it.

    A triangle is listed once per corner that uses the slot, in triangle
    order. Out-of-range corners are ignored.
    """
    per_vertex: list[list[int]] = [[] for _ in range(max(mesh.frame_vertex_count, 0))]
    for tri_index, tri in enumerate(mesh.triangles):
        for vertex in tri.vertices:
            if mesh.is_valid_vertex(vertex):
                per_vertex[vertex].append(tri_index)

    connectivity = Connectivity()
    for linked in per_vertex:
        connectivity.offsets.append(len(connectivity.links))
        connectivity.counts.append(len(linked))
        connectivity.links.extend(linked)
    return connectivity


def rebuild_connectivity(mesh: Mesh) -> bool:
    """Replace ``mesh.connectivity`` with a fresh adjacency table."""
    if mesh.frame_vertex_count <= 0:
        return False
    mesh.connectivity = build_connectivity(mesh)
    return True
