"""Exportable package model."""

from dataclasses import dataclass, field
from enum import Enum

from textplaque.domain.mesh import Solid


class UpAxis(str, Enum):
    """Axis treated as "up" by the source geometry."""

    X_UP = "X_UP"
    Y_UP = "Y_UP"
    Z_UP = "Z_UP"


class PackageLayout(str, Enum):
    """How solids are laid out in the 3MF package.

    FLAT writes one object per solid straight into the root model.
    ASSEMBLY writes each mesh to its own object file and groups them as
    components of one parent object, which slicers need to attach
    per-part extruder metadata.
    """

    FLAT = "flat"
    ASSEMBLY = "assembly"


@dataclass(frozen=True)
class PackageModel:
    """Everything needed to serialize one export.

    Object ids and material ids are assigned by the packager following the
    order of ``solids``.

    Attributes:
        solids: Solids to export, in order
        unit: 3MF model unit
        up_axis: Up axis of the source geometry
        layout: Flat or assembly layout
        title: Name of the model (parent object name in assembly layout)
    """

    solids: list[Solid] = field(default_factory=list)
    unit: str = "millimeter"
    up_axis: UpAxis = UpAxis.Y_UP
    layout: PackageLayout = PackageLayout.ASSEMBLY
    title: str = "Text"

    def is_empty(self) -> bool:
        return not self.solids
