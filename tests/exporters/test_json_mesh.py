"""Tests for JSON mesh import and export."""

import json
from pathlib import Path

import pytest

from vertmesh_reducer.mesh import Mesh

MINIMAL = {
    "name": "Tri",
    "frame_vertex_count": 3,
    "anim_frame_count": 2,
    "positions": [
        [0, 0, 0], [1, 0, 0], [0, 1, 0],
        [0, 0, 1], [1, 0, 1], [0, 1, 1],
    ],
    "triangles": [{"vertices": [0, 1, 2], "uvs": [[0, 0], [255, 0], [0, 255]]}],
    "anim_sequences": [{"name": "Lift", "start_frame": 0, "frame_count": 2}],
}


class TestMeshFromDict:
    """Tests for mesh_from_dict function."""

    def test_minimal_document(self) -> None:
        """Optional fields should fall back to their defaults."""
        from vertmesh_reducer.exporters import mesh_from_dict

        mesh = mesh_from_dict(MINIMAL)
        assert mesh.name == "Tri"
        assert mesh.positions.shape == (6, 3)
        assert mesh.has_consistent_layout
        assert mesh.triangles[0].texture_index == 0
        assert mesh.triangles[0].uvs[1] == (255, 0)
        assert mesh.anim_sequences[0].rate == 30.0

    def test_missing_key(self) -> None:
        """Required keys should be reported by name."""
        from vertmesh_reducer.exporters import mesh_from_dict

        data = dict(MINIMAL)
        del data["anim_frame_count"]
        with pytest.raises(ValueError, match="anim_frame_count"):
            mesh_from_dict(data)

    def test_bad_triangle(self) -> None:
        """A triangle with the wrong corner count should be rejected."""
        from vertmesh_reducer.exporters import mesh_from_dict

        data = dict(MINIMAL, triangles=[{"vertices": [0, 1]}])
        with pytest.raises(ValueError, match="Invalid triangle"):
            mesh_from_dict(data)

    def test_bad_positions(self) -> None:
        """Non-numeric positions should be rejected."""
        from vertmesh_reducer.exporters import mesh_from_dict

        data = dict(MINIMAL, positions=[["a", "b", "c"]])
        with pytest.raises(ValueError, match="positions"):
            mesh_from_dict(data)


class TestMeshToDict:
    """Tests for mesh_to_dict function."""

    def test_derived_sections_only_when_built(self, seam_quad_mesh: Mesh) -> None:
        """Connectivity and bounds should appear once the reducer built them."""
        from vertmesh_reducer.exporters import mesh_to_dict
        from vertmesh_reducer.reducer import reduce

        data = mesh_to_dict(seam_quad_mesh)
        assert "connectivity" not in data
        assert "bounds" not in data

        reduce(seam_quad_mesh)
        data = mesh_to_dict(seam_quad_mesh)
        assert data["connectivity"]["counts"] == [1, 2, 2, 1]
        assert len(data["bounds"]["frames"]) == 2
        assert data["bounds"]["sphere"]["radius"] > 0


class TestLoadSaveMesh:
    """Tests for load_mesh and save_mesh."""

    def test_save_then_load(self, tmp_path: Path, wobbly_mesh: Mesh) -> None:
        """A saved mesh should load back with the same geometry."""
        from vertmesh_reducer.exporters import load_mesh, save_mesh

        target = save_mesh(wobbly_mesh, tmp_path / "nested" / "wobbly.json")
        assert target.is_file()

        loaded = load_mesh(target)
        assert loaded.name == "Wobbly"
        assert loaded.frame_vertex_count == 8
        assert loaded.positions.tolist() == wobbly_mesh.positions.tolist()
        assert [s.name for s in loaded.anim_sequences] == ["Idle", "Run", "Pose"]
        assert loaded.triangles[2].poly_flags == 2

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Broken JSON should raise ValueError."""
        from vertmesh_reducer.exporters import load_mesh

        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="not valid JSON"):
            load_mesh(path)

    def test_non_object_document(self, tmp_path: Path) -> None:
        """A JSON list is not a mesh."""
        from vertmesh_reducer.exporters import load_mesh

        path = tmp_path / "list.json"
        path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")
        with pytest.raises(ValueError, match="mesh object"):
            load_mesh(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files should raise OSError."""
        from vertmesh_reducer.exporters import load_mesh

        with pytest.raises(OSError):
            load_mesh(tmp_path / "nope.json")
