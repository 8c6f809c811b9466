"""Core geometry algorithms for textplaque.

This module contains the core algorithms for:

- Geometry operations (signed area, point-in-polygon, bbox containment)
- Path flattening (Bezier sampling into closed polygons)
- Contour classification (outer boundaries and holes by area and nesting)
- Shape offsetting (background outline)
- Extrusion and solid building
- Mesh validation and repair

Key functions:
- signed_area: Calculate polygon area using shoelace formula
- point_in_polygon: Test if point is inside polygon
- flatten: Convert path commands to contours
- extrude_shape: Triangulate and extrude one shape

Key classes:
- PathFlattener: Converts path commands to contours
- ContourClassifier: Groups contours into shapes with holes
- ShapeOffsetter: Grows outlines and shrinks holes
- SolidBuilder: Builds and positions foreground and background
- MeshValidator: Checks and repairs meshes before export

The render orchestrator, PlaquePipeline, lives in textplaque.core.pipeline
since it depends on the io layer.
"""

from textplaque.core.builder import SolidBuilder
from textplaque.core.classifier import Classification, ContourClassifier, ContourNode
from textplaque.core.extrusion import extrude_shape, extrude_shapes, triangulate
from textplaque.core.flattener import PathFlattener, flatten
from textplaque.core.geometry import (
    bbox_contains,
    containment_ratio,
    point_in_polygon,
    signed_area,
)
from textplaque.core.offsetter import ShapeOffsetter
from textplaque.core.validator import MeshValidator

__all__ = [
    # Classifier classes
    "Classification",
    "ContourClassifier",
    "ContourNode",
    # Validation
    "MeshValidator",
    # Flattening
    "PathFlattener",
    # Offsetting and building
    "ShapeOffsetter",
    "SolidBuilder",
    # Geometry functions
    "bbox_contains",
    "containment_ratio",
    "extrude_shape",
    "extrude_shapes",
    "flatten",
    "point_in_polygon",
    "signed_area",
    "triangulate",
]
