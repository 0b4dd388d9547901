"""JSON mesh file import and export."""

import json
from pathlib import Path
from typing import Any

from vertmesh_reducer.mesh import AnimSequence, Box, Mesh, Sphere, Triangle


def _require(data: dict[str, Any], key: str) -> Any:
    if key not in data:
        raise ValueError(f"Mesh file is missing '{key}'")
    return data[key]


def _triangle_from_dict(data: dict[str, Any]) -> Triangle:
    try:
        return Triangle(
            vertices=list(_require(data, "vertices")),
            texture_index=int(data.get("texture_index", 0)),
            poly_flags=int(data.get("poly_flags", 0)),
            uvs=[tuple(uv) for uv in data.get("uvs", [(0, 0)] * 3)],
        )
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid triangle {data!r}: {e}") from e


def _sequence_from_dict(data: dict[str, Any]) -> AnimSequence:
    return AnimSequence(
        name=str(_require(data, "name")),
        start_frame=int(_require(data, "start_frame")),
        frame_count=int(_require(data, "frame_count")),
        rate=float(data.get("rate", 30.0)),
    )


def _box_to_dict(box: Box) -> dict[str, list[float]]:
    return {"min": list(box.min), "max": list(box.max)}


def _sphere_to_dict(sphere: Sphere) -> dict[str, Any]:
    return {"center": list(sphere.center), "radius": sphere.radius}


def mesh_from_dict(data: dict[str, Any]) -> Mesh:
    """Build a Mesh from its JSON representation (derived sections are ignored)."""
    try:
        positions = [[float(c) for c in p] for p in _require(data, "positions")]
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid positions: {e}") from e

    try:
        return Mesh(
            name=str(data.get("name", "Mesh")),
            frame_vertex_count=int(_require(data, "frame_vertex_count")),
            anim_frame_count=int(_require(data, "anim_frame_count")),
            positions=positions,
            triangles=[_triangle_from_dict(t) for t in data.get("triangles", [])],
            anim_sequences=[
                _sequence_from_dict(s) for s in data.get("anim_sequences", [])
            ],
        )
    except TypeError as e:
        raise ValueError(f"Invalid mesh document: {e}") from e


def mesh_to_dict(mesh: Mesh) -> dict[str, Any]:
    """JSON-ready representation of a Mesh, including derived data if built."""
    data: dict[str, Any] = {
        "name": mesh.name,
        "frame_vertex_count": mesh.frame_vertex_count,
        "anim_frame_count": mesh.anim_frame_count,
        "positions": mesh.positions.tolist(),
        "triangles": [
            {
                "vertices": list(tri.vertices),
                "texture_index": tri.texture_index,
                "poly_flags": tri.poly_flags,
                "uvs": [list(uv) for uv in tri.uvs],
            }
            for tri in mesh.triangles
        ],
        "anim_sequences": [
            {
                "name": seq.name,
                "start_frame": seq.start_frame,
                "frame_count": seq.frame_count,
                "rate": seq.rate,
            }
            for seq in mesh.anim_sequences
        ],
    }

    if mesh.connectivity is not None:
        data["connectivity"] = {
            "offsets": mesh.connectivity.offsets,
            "counts": mesh.connectivity.counts,
            "links": mesh.connectivity.links,
        }

    if mesh.bounding_box is not None and mesh.bounding_sphere is not None:
        data["bounds"] = {
            "box": _box_to_dict(mesh.bounding_box),
            "sphere": _sphere_to_dict(mesh.bounding_sphere),
            "frames": [
                {"box": _box_to_dict(box), "sphere": _sphere_to_dict(sphere)}
                for box, sphere in zip(mesh.frame_boxes, mesh.frame_spheres)
            ],
        }

    return data


def load_mesh(filepath: str | Path) -> Mesh:
    """Read a mesh from a JSON file.

    Raises:
        OSError: The file cannot be read
        ValueError: The file is not a valid mesh document
    """
    path = Path(filepath)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path.name} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{path.name} does not contain a mesh object")
    return mesh_from_dict(data)


def save_mesh(mesh: Mesh, filepath: str | Path) -> Path:
    """Write a mesh to a JSON file, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(mesh_to_dict(mesh), indent=2), encoding="utf-8")
    return path
