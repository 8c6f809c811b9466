"""Contour classification into outer boundaries and holes.

Font backends disagree on which winding direction marks an outer contour,
so classification is decided by area and containment only:

- Larger contours are considered first
- A contour's parent is the smallest larger contour that contains it
- Nesting depth alternates between outer boundaries and holes

Winding direction is reported for diagnostics but never trusted.
"""

from dataclasses import dataclass, field

import structlog

from textplaque.core.geometry import bbox_contains, containment_ratio, point_in_polygon
from textplaque.domain import ClassifiedShape, Contour
from textplaque.exceptions import EmptyGeometryError

logger = structlog.get_logger(__name__)


@dataclass
class ContourNode:
    """Classification state of one contour.

    Attributes:
        index: Emission index of the contour
        is_outer: True for an outer boundary, False for a hole
        parent: Emission index of the containing contour (None at depth 0)
        depth: Nesting depth (0 for top-level)
        holes: Emission indices of accepted holes (outer boundaries only)
    """

    index: int
    is_outer: bool
    parent: int | None
    depth: int
    holes: list[int] = field(default_factory=list)


@dataclass
class Classification:
    """Shapes produced by ContourClassifier with the diagnostics collected.

    Attributes:
        shapes: Outer boundaries with their holes, in emission order
        dropped_zero_area: Emission indices of contours without area
        ambiguous: Emission indices of rejected hole candidates
        warnings: Human-readable diagnostics
    """

    shapes: list[ClassifiedShape]
    dropped_zero_area: list[int] = field(default_factory=list)
    ambiguous: list[int] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def hole_count(self) -> int:
        return sum(len(shape.holes) for shape in self.shapes)


class ContourClassifier:
    """Groups flattened contours into shapes with holes.

    The classifier is stateless and safe to reuse across renders.
    """

    def __init__(self, containment_ratio: float = 0.95, area_epsilon: float = 1e-9) -> None:
        """Initialize the classifier.

        Args:
            containment_ratio: Share of a hole's points that must lie inside
                its outer contour for the hole to be accepted
            area_epsilon: Contours with an absolute area at or below this
                are dropped
        """
        self.containment_ratio = containment_ratio
        self.area_epsilon = area_epsilon

    def classify(self, contours: list[Contour]) -> list[ClassifiedShape]:
        """Classify contours into shapes.

        Args:
            contours: Contours in emission order

        Returns:
            Shapes ordered by the emission order of their outer contour

        Raises:
            EmptyGeometryError: If no outer boundary results
        """
        return self.classify_with_diagnostics(contours).shapes

    def classify_with_diagnostics(self, contours: list[Contour]) -> Classification:
        """Classify contours and report what was dropped.

        Process:
        1. Drop contours whose area is at or below the epsilon
        2. Sort the rest by absolute area, largest first (ties keep order)
        3. Find each contour's smallest container among larger contours
        4. Alternate roles by depth and validate each hole candidate

        Args:
            contours: Contours in emission order

        Returns:
            Classification with shapes and diagnostics

        Raises:
            EmptyGeometryError: If no outer boundary results
        """
        result = Classification(shapes=[])

        kept: list[int] = []
        for idx, contour in enumerate(contours):
            if contour.area() <= self.area_epsilon:
                result.dropped_zero_area.append(idx)
                message = f"Dropped contour {idx} with zero area"
                result.warnings.append(message)
                logger.warning("Dropping zero-area contour", contour=idx, points=len(contour))
                continue
            kept.append(idx)

        # sorted() is stable so equal areas keep emission order
        order = sorted(kept, key=lambda i: contours[i].area(), reverse=True)

        nodes: dict[int, ContourNode] = {}
        for position, idx in enumerate(order):
            contour = contours[idx]
            parent = self._find_parent(contour, contours, order[:position], nodes)

            if parent is None:
                nodes[idx] = ContourNode(index=idx, is_outer=True, parent=None, depth=0)
                continue

            parent_node = nodes[parent]
            depth = parent_node.depth + 1

            if not parent_node.is_outer:
                # Island inside a counter starts a new outer boundary
                nodes[idx] = ContourNode(index=idx, is_outer=True, parent=parent, depth=depth)
                continue

            if self._accepts_hole(contour, contours[parent], parent_node, contours):
                parent_node.holes.append(idx)
                nodes[idx] = ContourNode(index=idx, is_outer=False, parent=parent, depth=depth)
            else:
                result.ambiguous.append(idx)
                message = f"Dropped ambiguous inner path {idx} inside contour {parent}"
                result.warnings.append(message)
                logger.warning(
                    "Dropping ambiguous inner path",
                    contour=idx,
                    parent=parent,
                    ratio=round(containment_ratio(contour, contours[parent]), 3),
                )

        for idx in sorted(nodes):
            node = nodes[idx]
            if not node.is_outer:
                continue
            result.shapes.append(
                ClassifiedShape(
                    outer=contours[idx],
                    holes=[contours[h] for h in sorted(node.holes)],
                )
            )

        if not result.shapes:
            raise EmptyGeometryError("no outer contour found")

        logger.debug(
            "Classified contours",
            contours=len(contours),
            shapes=len(result.shapes),
            holes=result.hole_count,
            dropped=len(result.dropped_zero_area) + len(result.ambiguous),
        )
        return result

    def _find_parent(
        self,
        contour: Contour,
        contours: list[Contour],
        candidates: list[int],
        nodes: dict[int, ContourNode],
    ) -> int | None:
        """Find the smallest classified contour containing this one.

        Uses bounding box containment as a fast rejection test, then tests
        the contour's representative point against the candidate polygon.

        Args:
            contour: Contour to place
            contours: All contours in emission order
            candidates: Indices of contours at least as large, largest first
            nodes: Contours classified so far

        Returns:
            Emission index of the parent, or None at depth 0
        """
        bbox = contour.bounding_box()
        test_point = contour.representative_point()

        parent: int | None = None
        for idx in candidates:
            if idx not in nodes:
                continue
            candidate = contours[idx]
            if not bbox_contains(candidate.bounding_box(), bbox):
                continue
            if not point_in_polygon(test_point, candidate.points):
                continue
            if parent is None or candidate.area() <= contours[parent].area():
                parent = idx
        return parent

    def _accepts_hole(
        self,
        hole: Contour,
        outer: Contour,
        outer_node: ContourNode,
        contours: list[Contour],
    ) -> bool:
        """Check the containment ratio and area conservation of a hole candidate."""
        if containment_ratio(hole, outer) < self.containment_ratio:
            return False
        hole_area = sum(contours[h].area() for h in outer_node.holes) + hole.area()
        return outer.area() > hole_area
