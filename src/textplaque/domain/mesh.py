"""Triangle meshes and the solids built from them.

This module defines the 3D domain models:
- Mesh: Indexed triangle mesh
- Material: Display name and colour of a printed part
- Solid: A named mesh with a material and a translation
- Dimensions: Bounding size reported for display
- ValidationReport: Advisory findings from mesh validation
"""

from dataclasses import dataclass, field

Vertex = tuple[float, float, float]
Triangle = tuple[int, int, int]


@dataclass(frozen=True)
class Mesh:
    """Indexed triangle mesh.

    Triangles reference vertices by index and are wound counter-clockwise
    when seen from outside the solid.

    Attributes:
        vertices: Vertex positions
        triangles: Vertex index triples
        normals: Optional per-vertex unit normals (same length as vertices)
    """

    vertices: list[Vertex] = field(default_factory=list)
    triangles: list[Triangle] = field(default_factory=list)
    normals: list[Vertex] | None = None

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles)

    def is_empty(self) -> bool:
        """Check whether the mesh has no triangles."""
        return not self.triangles

    def bounding_box(self) -> tuple[Vertex, Vertex]:
        """Axis-aligned bounding box.

        Returns:
            Tuple of (min corner, max corner)

        Raises:
            ValueError: If the mesh has no vertices
        """
        if not self.vertices:
            raise ValueError("Cannot measure a mesh without vertices")

        xs = [v[0] for v in self.vertices]
        ys = [v[1] for v in self.vertices]
        zs = [v[2] for v in self.vertices]
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))

    def translated(self, dx: float = 0.0, dy: float = 0.0, dz: float = 0.0) -> "Mesh":
        """Return a copy moved by (dx, dy, dz)."""
        return Mesh(
            vertices=[(x + dx, y + dy, z + dz) for x, y, z in self.vertices],
            triangles=list(self.triangles),
            normals=list(self.normals) if self.normals is not None else None,
        )

    def scaled(self, sx: float, sy: float, sz: float = 1.0) -> "Mesh":
        """Return a copy scaled about the origin.

        Normals are dropped for non-uniform scales since they no longer
        stay unit length; MeshValidator.repair recomputes them.
        """
        uniform = sx == sy == sz
        return Mesh(
            vertices=[(x * sx, y * sy, z * sz) for x, y, z in self.vertices],
            triangles=list(self.triangles),
            normals=list(self.normals) if uniform and self.normals is not None else None,
        )

    def merged(self, other: "Mesh") -> "Mesh":
        """Concatenate two meshes, re-indexing the other's triangles."""
        base = len(self.vertices)
        normals = None
        if self.normals is not None and other.normals is not None:
            normals = self.normals + other.normals
        return Mesh(
            vertices=self.vertices + other.vertices,
            triangles=self.triangles + [(a + base, b + base, c + base) for a, b, c in other.triangles],
            normals=normals,
        )


@dataclass(frozen=True)
class Material:
    """Material assignment for a printed part.

    Attributes:
        name: Display name (e.g., "Foreground")
        color: Colour as #RRGGBB
    """

    name: str
    color: str


@dataclass(frozen=True)
class Solid:
    """A named mesh placed in the scene.

    Attributes:
        name: Part name shown by slicers
        mesh: Geometry in the solid's local frame
        material: Material and colour of the part
        translation: Placement offset (x, y, z) in millimetres
    """

    name: str
    mesh: Mesh
    material: Material
    translation: Vertex = (0.0, 0.0, 0.0)

    def z_range(self) -> tuple[float, float]:
        """Placed z extent of the solid."""
        (_, _, z_min), (_, _, z_max) = self.mesh.bounding_box()
        dz = self.translation[2]
        return z_min + dz, z_max + dz


@dataclass(frozen=True)
class Dimensions:
    """Bounding size of a rendered plaque in millimetres.

    Attributes:
        width: Foreground width along X
        height: Foreground height along Y
        depth: Foreground depth plus background depth
    """

    width: float
    height: float
    depth: float


@dataclass
class ValidationReport:
    """Advisory findings from MeshValidator.

    Attributes:
        vertex_count: Number of vertices inspected
        triangle_count: Number of triangles inspected
        degenerate_triangles: Triangles repeating a vertex index
        invalid_index_triangles: Triangles referencing missing vertices
        zero_area_triangles: Triangles with distinct indices but no area
        open_edges: Edges used by exactly one triangle
        non_manifold_edges: Edges used by more than two triangles
        normals_present: Whether the mesh carried normals
        inconsistent_normals: Normals whose length is not 1
        warnings: Human-readable warnings
    """

    vertex_count: int = 0
    triangle_count: int = 0
    degenerate_triangles: int = 0
    invalid_index_triangles: int = 0
    zero_area_triangles: int = 0
    open_edges: int = 0
    non_manifold_edges: int = 0
    normals_present: bool = False
    inconsistent_normals: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def has_unwritable_triangles(self) -> bool:
        """Whether some triangles repeat or reference missing vertices."""
        return self.degenerate_triangles > 0 or self.invalid_index_triangles > 0

    @property
    def needs_repair(self) -> bool:
        """Whether repair() would exclude triangles or add normals."""
        return self.has_unwritable_triangles or not self.normals_present

    @property
    def is_manifold(self) -> bool:
        """Whether every edge is shared by exactly two triangles."""
        return self.open_edges == 0 and self.non_manifold_edges == 0
