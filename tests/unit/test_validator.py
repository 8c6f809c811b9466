"""Unit tests for MeshValidator."""

import math

import pytest

from textplaque.core.extrusion import extrude_shape
from textplaque.core.validator import MeshValidator
from textplaque.domain import Mesh


def _tetrahedron() -> Mesh:
    return Mesh(
        vertices=[(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)],
        triangles=[(0, 2, 1), (0, 1, 3), (1, 2, 3), (0, 3, 2)],
    )


class TestValidate:
    """Tests for validation findings."""

    def test_closed_solid_is_clean(self):
        """A closed tetrahedron has no warnings apart from missing normals."""
        report = MeshValidator().validate(_tetrahedron())

        assert report.is_manifold
        assert report.warnings == []
        assert report.vertex_count == 4
        assert report.triangle_count == 4

    def test_extruded_square_is_manifold(self, square_shape):
        """An extruded prism is watertight."""
        report = MeshValidator().validate(extrude_shape(square_shape, 1.0))

        assert report.open_edges == 0
        assert report.non_manifold_edges == 0

    def test_single_triangle_has_open_edges(self):
        """Each edge of a lone triangle is open."""
        mesh = Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], triangles=[(0, 1, 2)])

        report = MeshValidator().validate(mesh)

        assert report.open_edges == 3
        assert not report.is_manifold
        assert "3 open edge(s)" in report.warnings

    def test_degenerate_and_invalid_triangles(self):
        """Repeated and out-of-range indices are counted separately."""
        mesh = _tetrahedron()
        mesh = Mesh(
            vertices=mesh.vertices,
            triangles=mesh.triangles + [(0, 0, 1), (0, 1, 9)],
        )

        report = MeshValidator().validate(mesh)

        assert report.degenerate_triangles == 1
        assert report.invalid_index_triangles == 1
        assert report.needs_repair

    def test_zero_area_triangle(self):
        """Collinear vertices give a zero-area triangle."""
        mesh = Mesh(vertices=[(0, 0, 0), (1, 0, 0), (2, 0, 0)], triangles=[(0, 1, 2)])

        report = MeshValidator().validate(mesh)

        assert report.zero_area_triangles == 1

    def test_non_unit_normals(self):
        """Normals whose length is not 1 are reported."""
        mesh = Mesh(
            vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)],
            triangles=[(0, 1, 2)],
            normals=[(0.0, 0.0, 1.0), (0.0, 0.0, 2.0), (0.0, 0.0, 1.0)],
        )

        report = MeshValidator().validate(mesh)

        assert report.normals_present
        assert report.inconsistent_normals == 1

    def test_missing_normals_need_repair(self):
        """Meshes without normals get them during repair."""
        report = MeshValidator().validate(_tetrahedron())

        assert not report.normals_present
        assert report.needs_repair


class TestRepair:
    """Tests for MeshValidator.repair."""

    def test_drops_unwritable_triangles(self):
        """Degenerate and invalid triangles are removed."""
        mesh = Mesh(
            vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)],
            triangles=[(0, 1, 2), (0, 0, 1), (0, 1, 5)],
        )

        repaired = MeshValidator().repair(mesh)

        assert repaired.triangles == [(0, 1, 2)]
        assert mesh.triangle_count == 3

    def test_drop_unwritable_leaves_normals_alone(self):
        """Filtering triangles does not compute normals."""
        mesh = Mesh(
            vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)],
            triangles=[(0, 1, 2), (2, 2, 1), (0, 3, 1)],
        )
        validator = MeshValidator()

        report = validator.validate(mesh)
        filtered = validator.drop_unwritable(mesh)

        assert report.has_unwritable_triangles
        assert filtered.triangles == [(0, 1, 2)]
        assert filtered.normals is None

    def test_clean_mesh_has_no_unwritable_triangles(self, ring_shape):
        """Extruded meshes only lack normals."""
        report = MeshValidator().validate(extrude_shape(ring_shape, 2.0))

        assert not report.has_unwritable_triangles
        assert report.needs_repair

    def test_normals_are_unit_length(self, ring_shape):
        """Computed normals are normalized."""
        repaired = MeshValidator().repair(extrude_shape(ring_shape, 2.0))

        assert repaired.normals is not None
        assert len(repaired.normals) == repaired.vertex_count
        for nx, ny, nz in repaired.normals:
            assert math.sqrt(nx * nx + ny * ny + nz * nz) == pytest.approx(1.0)

    def test_flat_triangle_normal(self):
        """A CCW triangle in the XY plane has +Z normals."""
        mesh = Mesh(vertices=[(0, 0, 0), (1, 0, 0), (0, 1, 0)], triangles=[(0, 1, 2)])

        repaired = MeshValidator().repair(mesh)

        assert repaired.normals == [(0.0, 0.0, 1.0)] * 3

    def test_repaired_mesh_passes(self):
        """A repaired closed mesh no longer needs repair."""
        validator = MeshValidator()

        report = validator.validate(validator.repair(_tetrahedron()))

        assert not report.needs_repair
        assert report.inconsistent_normals == 0
