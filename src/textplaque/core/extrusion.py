"""Triangulation of shapes with holes and prism extrusion.

Caps are triangulated with mapbox-earcut. Cap and wall triangles share
vertices, so every extruded shape is a closed, consistently wound solid.
"""

import mapbox_earcut as earcut
import numpy as np

from textplaque.core.geometry import dedupe_points, distinct_point_count
from textplaque.domain import ClassifiedShape, Mesh
from textplaque.exceptions import DegenerateGeometryError


def _ring_coords(shape: ClassifiedShape) -> tuple[np.ndarray, np.ndarray, list[tuple[int, int]]]:
    """Build earcut inputs for a shape.

    The outer ring is wound CCW and holes CW.

    Returns:
        Tuple of (coords (N, 2) float64, ring end indices uint32,
        (start, length) of each ring)

    Raises:
        DegenerateGeometryError: If the outer ring has fewer than 3 valid points
    """
    outer = dedupe_points(shape.outer.oriented(counter_clockwise=True).points)
    if distinct_point_count(outer) < 3:
        raise DegenerateGeometryError("outer boundary has fewer than 3 valid points", len(outer))

    rings = [outer]
    for hole in shape.holes:
        ring = dedupe_points(hole.oriented(counter_clockwise=False).points)
        if distinct_point_count(ring) >= 3:
            rings.append(ring)

    verts: list[tuple[float, float]] = []
    ring_ends: list[int] = []
    rings_meta: list[tuple[int, int]] = []
    for ring in rings:
        start = len(verts)
        verts.extend((p.x, p.y) for p in ring)
        ring_ends.append(len(verts))
        rings_meta.append((start, len(ring)))

    coords = np.asarray(verts, dtype=np.float64)
    ends = np.asarray(ring_ends, dtype=np.uint32)
    return coords, ends, rings_meta


def triangulate(shape: ClassifiedShape) -> tuple[np.ndarray, np.ndarray, list[tuple[int, int]]]:
    """Triangulate a shape with holes.

    Args:
        shape: Outer boundary with holes

    Returns:
        Tuple of (coords (N, 2), CCW triangles (M, 3), ring metadata)

    Raises:
        DegenerateGeometryError: If the shape has too few points or the
            triangulation is empty
    """
    coords, ends, rings_meta = _ring_coords(shape)
    tri = np.asarray(earcut.triangulate_float64(coords, ends), dtype=np.int64).reshape(-1, 3)
    if tri.shape[0] == 0:
        raise DegenerateGeometryError("triangulation produced no triangles", coords.shape[0])

    # Orient every triangle CCW
    a = coords[tri[:, 0]]
    b = coords[tri[:, 1]]
    c = coords[tri[:, 2]]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    flip = cross < 0
    tri[flip] = tri[flip][:, [0, 2, 1]]
    return coords, tri, rings_meta


def extrude_shape(shape: ClassifiedShape, depth: float) -> Mesh:
    """Extrude a shape into a closed prism from z=0 to z=depth.

    The top cap faces +Z, the bottom cap faces -Z, outer walls face
    outward and hole walls face into the hole.

    Args:
        shape: Outer boundary with holes
        depth: Extrusion height (> 0)

    Returns:
        Mesh of the prism

    Raises:
        DegenerateGeometryError: If the shape cannot be triangulated
    """
    coords, tri, rings_meta = triangulate(shape)
    n = coords.shape[0]

    bottom = np.column_stack([coords, np.zeros((n, 1), dtype=np.float64)])
    top = np.column_stack([coords, np.full((n, 1), float(depth), dtype=np.float64)])
    vertices = np.vstack([bottom, top])

    top_faces = tri + n
    bottom_faces = tri[:, ::-1]

    side_faces: list[list[int]] = []
    for start, length in rings_meta:
        for k in range(length):
            i0 = start + k
            i1 = start + (k + 1) % length
            side_faces.append([i0, i1, i1 + n])
            side_faces.append([i0, i1 + n, i0 + n])

    faces = np.vstack([bottom_faces, top_faces, np.asarray(side_faces, dtype=np.int64)])
    return Mesh(
        vertices=[(float(x), float(y), float(z)) for x, y, z in vertices],
        triangles=[(int(i), int(j), int(k)) for i, j, k in faces],
    )


def extrude_shapes(shapes: list[ClassifiedShape], depth: float) -> Mesh:
    """Extrude several shapes into one mesh."""
    mesh = Mesh()
    for shape in shapes:
        mesh = mesh.merged(extrude_shape(shape, depth))
    return mesh
