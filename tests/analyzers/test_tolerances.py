"""Tests for tolerance normalization."""

import math

import numpy as np
import pytest

from vertmesh_reducer.mesh import Mesh


class TestComputeMeshScale:
    """Tests for compute_mesh_scale function."""

    def test_half_diagonal_over_all_frames(self, mesh_factory) -> None:
        """Scale should span every frame, not just the first."""
        from vertmesh_reducer.analyzers import compute_mesh_scale

        mesh = mesh_factory(
            [
                [[0.0, 0.0, 0.0], [2.0, 2.0, 2.0]],
                [[4.0, 4.0, 4.0], [2.0, 2.0, 2.0]],
            ]
        )
        assert compute_mesh_scale(mesh) == pytest.approx(math.sqrt(12.0))

    def test_small_mesh_floored_to_one(self, mesh_factory) -> None:
        """Tiny meshes should never get a scale below 1."""
        from vertmesh_reducer.analyzers import compute_mesh_scale

        mesh = mesh_factory([[[0.0, 0.0, 0.0], [0.1, 0.1, 0.1]]])
        assert compute_mesh_scale(mesh) == 1.0

    def test_empty_mesh(self) -> None:
        """A mesh without positions should use scale 1."""
        from vertmesh_reducer.analyzers import compute_mesh_scale

        assert compute_mesh_scale(Mesh()) == 1.0


class TestNormalizeTolerances:
    """Tests for normalize_tolerances function."""

    def _mesh(self) -> Mesh:
        # Box from -10 to +10 on x only: scale = 10
        return Mesh(
            frame_vertex_count=2,
            anim_frame_count=1,
            positions=np.array([[-10.0, 0.0, 0.0], [10.0, 0.0, 0.0]]),
        )

    def test_units_scaled_by_mesh(self) -> None:
        """Position and frame tolerances should scale with the mesh."""
        from vertmesh_reducer.analyzers import normalize_tolerances
        from vertmesh_reducer.reducer import ReductionOptions

        tol = normalize_tolerances(
            self._mesh(),
            ReductionOptions(position_tolerance=0.01, frame_error_tolerance=0.05),
        )
        assert tol.mesh_scale == pytest.approx(10.0)
        assert tol.position_units == pytest.approx(0.1)
        assert tol.frame_units == pytest.approx(0.5)

    def test_uv_tolerance_rounded_to_byte(self) -> None:
        """UV tolerance should round to the nearest byte and clamp."""
        from vertmesh_reducer.analyzers import normalize_tolerances
        from vertmesh_reducer.reducer import ReductionOptions

        mesh = self._mesh()
        assert normalize_tolerances(mesh, ReductionOptions(uv_tolerance=0.01)).uv_bytes == 3
        assert normalize_tolerances(mesh, ReductionOptions(uv_tolerance=2.0)).uv_bytes == 255
        assert normalize_tolerances(mesh, ReductionOptions(uv_tolerance=-1.0)).uv_bytes == 0

    def test_normal_angle_to_cosine(self) -> None:
        """A positive angle should become its cosine."""
        from vertmesh_reducer.analyzers import normalize_tolerances
        from vertmesh_reducer.reducer import ReductionOptions

        tol = normalize_tolerances(
            self._mesh(), ReductionOptions(normal_angle_tolerance_deg=60.0)
        )
        assert tol.cos_normal == pytest.approx(0.5)
        assert tol.normal_check_enabled

    def test_zero_angle_disables_normal_check(self) -> None:
        """A zero angle should disable the normal comparison."""
        from vertmesh_reducer.analyzers import normalize_tolerances
        from vertmesh_reducer.reducer import ReductionOptions
        from vertmesh_reducer.utils.constants import NORMAL_CHECK_DISABLED

        tol = normalize_tolerances(
            self._mesh(), ReductionOptions(normal_angle_tolerance_deg=0.0)
        )
        assert tol.cos_normal == NORMAL_CHECK_DISABLED
        assert not tol.normal_check_enabled
