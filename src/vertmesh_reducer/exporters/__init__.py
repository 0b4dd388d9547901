"""Mesh file import/export and batch reduction."""

from vertmesh_reducer.exporters.batch import (
    BatchSummary,
    output_path_for,
    reduce_files,
)
from vertmesh_reducer.exporters.json_mesh import (
    load_mesh,
    mesh_from_dict,
    mesh_to_dict,
    save_mesh,
)

__all__ = [
    "BatchSummary",
    "load_mesh",
    "mesh_from_dict",
    "mesh_to_dict",
    "output_path_for",
    "reduce_files",
    "save_mesh",
]
