"""Mesh validation and light repair before export.

Validation is advisory: findings are reported, never raised. Repair only
removes triangles that cannot be written and fills in missing normals; it
does not weld vertices or resolve self-intersections.
"""

import math
from collections import Counter

from textplaque.domain import Mesh, ValidationReport, Vertex

NORMAL_TOLERANCE = 1e-6
AREA_TOLERANCE = 1e-12


def _sub(a: Vertex, b: Vertex) -> Vertex:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def _cross(a: Vertex, b: Vertex) -> Vertex:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _length(v: Vertex) -> float:
    return math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


class MeshValidator:
    """Checks triangle meshes for problems slicers would complain about."""

    def validate(self, mesh: Mesh) -> ValidationReport:
        """Inspect a mesh.

        Args:
            mesh: Mesh to inspect

        Returns:
            ValidationReport with counts and warnings
        """
        report = ValidationReport(
            vertex_count=mesh.vertex_count,
            triangle_count=mesh.triangle_count,
            normals_present=mesh.normals is not None,
        )

        edges: Counter[tuple[int, int]] = Counter()
        n = mesh.vertex_count
        for a, b, c in mesh.triangles:
            if not (0 <= a < n and 0 <= b < n and 0 <= c < n):
                report.invalid_index_triangles += 1
                continue
            if a == b or b == c or a == c:
                report.degenerate_triangles += 1
                continue

            va, vb, vc = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
            if _length(_cross(_sub(vb, va), _sub(vc, va))) <= AREA_TOLERANCE:
                report.zero_area_triangles += 1

            for u, v in ((a, b), (b, c), (c, a)):
                edges[(min(u, v), max(u, v))] += 1

        report.open_edges = sum(1 for count in edges.values() if count == 1)
        report.non_manifold_edges = sum(1 for count in edges.values() if count > 2)

        if mesh.normals is not None:
            if len(mesh.normals) != n:
                report.inconsistent_normals = abs(len(mesh.normals) - n)
            report.inconsistent_normals += sum(
                1 for normal in mesh.normals if abs(_length(normal) - 1.0) > NORMAL_TOLERANCE
            )

        if report.invalid_index_triangles:
            report.warnings.append(
                f"{report.invalid_index_triangles} triangle(s) reference missing vertices"
            )
        if report.degenerate_triangles:
            report.warnings.append(f"{report.degenerate_triangles} degenerate triangle(s)")
        if report.zero_area_triangles:
            report.warnings.append(f"{report.zero_area_triangles} zero-area triangle(s)")
        if report.open_edges:
            report.warnings.append(f"{report.open_edges} open edge(s)")
        if report.non_manifold_edges:
            report.warnings.append(f"{report.non_manifold_edges} non-manifold edge(s)")
        if report.inconsistent_normals:
            report.warnings.append(f"{report.inconsistent_normals} inconsistent normal(s)")

        return report

    def drop_unwritable(self, mesh: Mesh) -> Mesh:
        """Remove degenerate triangles and ones with out-of-range indices.

        Vertices and normals are kept as they are.
        """
        n = mesh.vertex_count
        triangles = [
            (a, b, c)
            for a, b, c in mesh.triangles
            if 0 <= a < n and 0 <= b < n and 0 <= c < n and a != b and b != c and a != c
        ]
        return Mesh(
            vertices=list(mesh.vertices),
            triangles=triangles,
            normals=list(mesh.normals) if mesh.normals is not None else None,
        )

    def repair(self, mesh: Mesh) -> Mesh:
        """Drop unwritable triangles and compute missing normals.

        Normals are the area-weighted average of adjacent face normals.

        Args:
            mesh: Mesh to repair

        Returns:
            A new mesh; the input is left untouched
        """
        mesh = self.drop_unwritable(mesh)
        n = mesh.vertex_count
        triangles = mesh.triangles

        normals = mesh.normals
        if normals is None:
            sums = [[0.0, 0.0, 0.0] for _ in range(n)]
            for a, b, c in triangles:
                va, vb, vc = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
                # Unnormalized cross product is weighted by twice the face area
                face = _cross(_sub(vb, va), _sub(vc, va))
                for index in (a, b, c):
                    sums[index][0] += face[0]
                    sums[index][1] += face[1]
                    sums[index][2] += face[2]

            normals = []
            for total in sums:
                length = _length((total[0], total[1], total[2]))
                if length == 0.0:
                    normals.append((0.0, 0.0, 1.0))
                else:
                    normals.append((total[0] / length, total[1] / length, total[2] / length))

        return Mesh(vertices=mesh.vertices, triangles=triangles, normals=normals)
