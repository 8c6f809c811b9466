"""3MF package writer.

A 3MF file is a ZIP archive holding XML parts that describe the model,
its relationships and slicer metadata. Two layouts are supported:

- FLAT: one object per solid in 3D/3dmodel.model, coloured through a core
  basematerials group
- ASSEMBLY: each mesh in its own 3D/Objects/object_N.model part, grouped as
  components of one parent object, with Bambu Studio style metadata that
  assigns each part to its own extruder
"""

import json
import re
import uuid
import xml.etree.ElementTree as ET
import zipfile
from dataclasses import dataclass
from datetime import date
from enum import Enum
from io import BytesIO

import structlog

from textplaque.core.validator import MeshValidator
from textplaque.domain import Mesh, PackageLayout, PackageModel, Solid, UpAxis, Vertex
from textplaque.exceptions import EmptyModelError

logger = structlog.get_logger(__name__)

MIME_TYPE = "application/3mf"

NS_CORE = "http://schemas.microsoft.com/3dmanufacturing/core/2015/02"
NS_PRODUCTION = "http://schemas.microsoft.com/3dmanufacturing/production/2015/06"
NS_BAMBU = "http://schemas.bambulab.com/package/2021"
NS_RELATIONSHIPS = "http://schemas.openxmlformats.org/package/2006/relationships"
NS_CONTENT_TYPES = "http://schemas.openxmlformats.org/package/2006/content-types"
REL_TYPE_MODEL = "http://schemas.microsoft.com/3dmanufacturing/2013/01/3dmodel"

CONTENT_TYPE_RELS = "application/vnd.openxmlformats-package.relationships+xml"
CONTENT_TYPE_MODEL = "application/vnd.ms-package.3dmanufacturing-3dmodel+xml"

ROOT_MODEL_PATH = "3D/3dmodel.model"
MODEL_RELS_PATH = "3D/_rels/3dmodel.model.rels"
IDENTITY_MATRIX = "1 0 0 0 0 1 0 0 0 0 1 0 0 0 0 1"
FILAMENT_MAP_MODE = "Auto For Flush"
EXTRUDER_COLOUR = "#018001"

# Fixed entry timestamp so identical geometry zips identically
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)
ZIP_COMPRESS_LEVEL = 8


class PackagerStage(Enum):
    """Stages of one export, run in order."""

    COLLECT_MESHES = "collect_meshes"
    VALIDATE_GEOMETRY = "validate_geometry"
    GENERATE_RESOURCE_XML = "generate_resource_xml"
    GENERATE_BUILD_XML = "generate_build_xml"
    GENERATE_METADATA_XML = "generate_metadata_xml"
    ZIP_AND_EMIT = "zip_and_emit"


@dataclass
class _PackagedObject:
    """A solid with its ids and export-ready geometry."""

    object_id: int
    extruder: int
    solid: Solid
    mesh: Mesh
    translation: Vertex

    @property
    def part_path(self) -> str:
        return f"3D/Objects/object_{self.object_id}.model"


def transform_coordinates(x: float, y: float, z: float, up_axis: UpAxis) -> Vertex:
    """Remap a coordinate for the configured up axis.

    Args:
        x: X coordinate
        y: Y coordinate
        z: Z coordinate
        up_axis: Up axis of the source geometry

    Returns:
        Remapped (x, y, z)

    Examples:
        >>> transform_coordinates(1.0, 2.0, 3.0, UpAxis.Z_UP)
        (1.0, 3.0, -2.0)
        >>> transform_coordinates(1.0, 2.0, 3.0, UpAxis.X_UP)
        (2.0, 3.0, 1.0)
    """
    if up_axis == UpAxis.Z_UP:
        return (x, z, -y)
    if up_axis == UpAxis.X_UP:
        return (y, z, x)
    return (x, y, z)


def format_coordinate(value: float) -> str:
    """Format a coordinate with 6 fixed decimals."""
    text = f"{value:.6f}"
    if text == "-0.000000":
        return "0.000000"
    return text


def format_transform(translation: Vertex) -> str:
    """Translation-only 3MF transform (3x4 matrix, row-major)."""
    tx, ty, tz = translation
    return (
        f"1 0 0 0 1 0 0 0 1 "
        f"{format_coordinate(tx)} {format_coordinate(ty)} {format_coordinate(tz)}"
    )


def suggest_filename(text: str) -> str:
    """Suggest a download file name for rendered text.

    Args:
        text: The rendered text

    Returns:
        Lower-cased text with non-alphanumerics replaced by "_", suffixed
        "_3d_text.3mf"

    Examples:
        >>> suggest_filename("Hello World!")
        'hello_world__3d_text.3mf'
    """
    stem = re.sub(r"[^a-z0-9]", "_", text, flags=re.IGNORECASE).lower()
    if not stem:
        stem = "text"
    return f"{stem}_3d_text.3mf"


def _serialize(root: ET.Element) -> bytes:
    ET.indent(root, space=" ")
    return ET.tostring(root, encoding="UTF-8", xml_declaration=True)


def _model_root(unit: str, production: bool) -> ET.Element:
    attrib = {
        "unit": unit,
        "xml:lang": "en-US",
        "xmlns": NS_CORE,
    }
    if production:
        attrib["xmlns:BambuStudio"] = NS_BAMBU
        attrib["xmlns:p"] = NS_PRODUCTION
        attrib["requiredextensions"] = "p"
    return ET.Element("model", attrib=attrib)


def _add_mesh(parent: ET.Element, mesh: Mesh, up_axis: UpAxis) -> None:
    mesh_elem = ET.SubElement(parent, "mesh")
    vertices_elem = ET.SubElement(mesh_elem, "vertices")
    for x, y, z in mesh.vertices:
        tx, ty, tz = transform_coordinates(x, y, z, up_axis)
        ET.SubElement(
            vertices_elem,
            "vertex",
            attrib={
                "x": format_coordinate(tx),
                "y": format_coordinate(ty),
                "z": format_coordinate(tz),
            },
        )
    triangles_elem = ET.SubElement(mesh_elem, "triangles")
    for v1, v2, v3 in mesh.triangles:
        ET.SubElement(
            triangles_elem,
            "triangle",
            attrib={"v1": str(v1), "v2": str(v2), "v3": str(v3)},
        )


class ThreeMFPackager:
    """Serializes a PackageModel into 3MF bytes.

    Example:
        packager = ThreeMFPackager()
        data = packager.package(PackageModel(solids=[background, foreground]))
        Path("plaque.3mf").write_bytes(data)
    """

    def __init__(
        self,
        validator: MeshValidator | None = None,
        application: str = "BambuStudio-02.02.00.85",
    ) -> None:
        """Initialize the packager.

        Args:
            validator: Mesh validator used before export
            application: Value of the root model's Application metadata
        """
        self.validator = validator or MeshValidator()
        self.application = application

    def package(self, model: PackageModel) -> bytes:
        """Serialize a model into a 3MF archive.

        Args:
            model: Solids and package options

        Returns:
            ZIP archive bytes

        Raises:
            EmptyModelError: If the model has no solids
        """
        self._stage(PackagerStage.COLLECT_MESHES, solids=len(model.solids))
        if model.is_empty():
            raise EmptyModelError()

        self._stage(PackagerStage.VALIDATE_GEOMETRY)
        objects = self._collect(model)

        self._stage(PackagerStage.GENERATE_RESOURCE_XML, layout=model.layout.value)
        files: dict[str, bytes] = {}
        if model.layout == PackageLayout.FLAT:
            root = self._flat_model(model, objects)
        else:
            root = self._assembly_model(model, objects)
            for obj in objects:
                files[obj.part_path] = _serialize(self._object_model(model, obj))

        self._stage(PackagerStage.GENERATE_BUILD_XML)
        self._add_build(root, model, objects)
        files[ROOT_MODEL_PATH] = _serialize(root)

        self._stage(PackagerStage.GENERATE_METADATA_XML)
        files["[Content_Types].xml"] = self._content_types()
        files["_rels/.rels"] = self._package_rels()
        if model.layout == PackageLayout.ASSEMBLY:
            files[MODEL_RELS_PATH] = self._model_rels(objects)
            files["Metadata/model_settings.config"] = self._model_settings(model, objects)
            files["Metadata/project_settings.config"] = self._project_settings(objects)

        self._stage(PackagerStage.ZIP_AND_EMIT, parts=len(files))
        return self._zip(files)

    def _stage(self, stage: PackagerStage, **kwargs: object) -> None:
        logger.debug("Packager stage", stage=stage.value, **kwargs)

    def _collect(self, model: PackageModel) -> list[_PackagedObject]:
        objects: list[_PackagedObject] = []
        for index, solid in enumerate(model.solids, start=1):
            mesh = solid.mesh
            report = self.validator.validate(mesh)
            for warning in report.warnings:
                logger.warning("Mesh validation warning", part=solid.name, warning=warning)
            if report.has_unwritable_triangles:
                mesh = self.validator.drop_unwritable(mesh)
            objects.append(
                _PackagedObject(
                    object_id=index,
                    extruder=index,
                    solid=solid,
                    mesh=mesh,
                    translation=transform_coordinates(*solid.translation, model.up_axis),
                )
            )
        return objects

    def _flat_model(self, model: PackageModel, objects: list[_PackagedObject]) -> ET.Element:
        root = _model_root(model.unit, production=False)
        ET.SubElement(root, "metadata", name="Application").text = self.application
        ET.SubElement(root, "metadata", name="Title").text = model.title

        resources = ET.SubElement(root, "resources")
        materials_id = len(objects) + 1
        materials = ET.SubElement(resources, "basematerials", id=str(materials_id))
        for obj in objects:
            ET.SubElement(
                materials,
                "base",
                name=obj.solid.material.name,
                displaycolor=obj.solid.material.color,
            )

        for pindex, obj in enumerate(objects):
            obj_elem = ET.SubElement(
                resources,
                "object",
                attrib={
                    "id": str(obj.object_id),
                    "name": obj.solid.name,
                    "type": "model",
                    "pid": str(materials_id),
                    "pindex": str(pindex),
                },
            )
            _add_mesh(obj_elem, obj.mesh, model.up_axis)
        return root

    def _assembly_model(self, model: PackageModel, objects: list[_PackagedObject]) -> ET.Element:
        root = _model_root(model.unit, production=True)
        ET.SubElement(root, "metadata", name="Application").text = self.application
        ET.SubElement(root, "metadata", name="BambuStudio:3mfVersion").text = "1"
        ET.SubElement(root, "metadata", name="CreationDate").text = date.today().isoformat()
        ET.SubElement(root, "metadata", name="Title").text = model.title

        resources = ET.SubElement(root, "resources")
        parent = ET.SubElement(
            resources,
            "object",
            attrib={
                "id": str(self._parent_id(objects)),
                "p:UUID": str(uuid.uuid4()),
                "type": "model",
            },
        )
        components = ET.SubElement(parent, "components")
        for obj in objects:
            ET.SubElement(
                components,
                "component",
                attrib={
                    "p:path": f"/{obj.part_path}",
                    "objectid": str(obj.object_id),
                    "p:UUID": str(uuid.uuid4()),
                    "transform": format_transform(obj.translation),
                },
            )
        return root

    def _object_model(self, model: PackageModel, obj: _PackagedObject) -> ET.Element:
        root = _model_root(model.unit, production=True)
        ET.SubElement(root, "metadata", name="BambuStudio:3mfVersion").text = "1"
        resources = ET.SubElement(root, "resources")
        obj_elem = ET.SubElement(
            resources,
            "object",
            attrib={
                "id": str(obj.object_id),
                "p:UUID": str(uuid.uuid4()),
                "type": "model",
            },
        )
        _add_mesh(obj_elem, obj.mesh, model.up_axis)
        ET.SubElement(root, "build")
        return root

    def _add_build(
        self,
        root: ET.Element,
        model: PackageModel,
        objects: list[_PackagedObject],
    ) -> None:
        if model.layout == PackageLayout.FLAT:
            build = ET.SubElement(root, "build")
            for obj in objects:
                ET.SubElement(
                    build,
                    "item",
                    attrib={
                        "objectid": str(obj.object_id),
                        "transform": format_transform(obj.translation),
                        "printable": "1",
                    },
                )
            return

        build = ET.SubElement(root, "build", attrib={"p:UUID": str(uuid.uuid4())})
        ET.SubElement(
            build,
            "item",
            attrib={
                "objectid": str(self._parent_id(objects)),
                "p:UUID": str(uuid.uuid4()),
                "transform": format_transform((0.0, 0.0, 0.0)),
                "printable": "1",
            },
        )

    @staticmethod
    def _parent_id(objects: list[_PackagedObject]) -> int:
        return len(objects) + 1

    def _content_types(self) -> bytes:
        root = ET.Element("Types", xmlns=NS_CONTENT_TYPES)
        ET.SubElement(root, "Default", Extension="rels", ContentType=CONTENT_TYPE_RELS)
        ET.SubElement(root, "Default", Extension="model", ContentType=CONTENT_TYPE_MODEL)
        ET.SubElement(root, "Default", Extension="config", ContentType=CONTENT_TYPE_MODEL)
        return _serialize(root)

    def _package_rels(self) -> bytes:
        root = ET.Element("Relationships", xmlns=NS_RELATIONSHIPS)
        ET.SubElement(
            root,
            "Relationship",
            Target=f"/{ROOT_MODEL_PATH}",
            Id="rel0",
            Type=REL_TYPE_MODEL,
        )
        return _serialize(root)

    def _model_rels(self, objects: list[_PackagedObject]) -> bytes:
        root = ET.Element("Relationships", xmlns=NS_RELATIONSHIPS)
        for obj in objects:
            ET.SubElement(
                root,
                "Relationship",
                Target=f"/{obj.part_path}",
                Id=f"rel{obj.object_id}",
                Type=REL_TYPE_MODEL,
            )
        return _serialize(root)

    def _model_settings(self, model: PackageModel, objects: list[_PackagedObject]) -> bytes:
        parent_id = str(self._parent_id(objects))
        root = ET.Element("config")

        parent = ET.SubElement(root, "object", id=parent_id)
        ET.SubElement(parent, "metadata", key="name", value=model.title)
        ET.SubElement(parent, "metadata", key="extruder", value="1")
        for obj in objects:
            part = ET.SubElement(parent, "part", id=str(obj.object_id), subtype="normal_part")
            ET.SubElement(part, "metadata", key="name", value=obj.solid.name)
            ET.SubElement(part, "metadata", key="extruder", value=str(obj.extruder))
            ET.SubElement(part, "metadata", key="matrix", value=IDENTITY_MATRIX)
            ET.SubElement(part, "mesh_stat", face_count=str(obj.mesh.triangle_count))

        plate = ET.SubElement(root, "plate")
        ET.SubElement(plate, "metadata", key="plater_id", value="1")
        ET.SubElement(plate, "metadata", key="plater_name", value="")
        ET.SubElement(plate, "metadata", key="locked", value="false")
        ET.SubElement(plate, "metadata", key="filament_map_mode", value=FILAMENT_MAP_MODE)
        instance = ET.SubElement(plate, "model_instance")
        ET.SubElement(instance, "metadata", key="object_id", value=parent_id)
        ET.SubElement(instance, "metadata", key="instance_id", value="0")
        ET.SubElement(instance, "metadata", key="identify_id", value="100")

        assemble = ET.SubElement(root, "assemble")
        ET.SubElement(
            assemble,
            "assemble_item",
            attrib={
                "object_id": parent_id,
                "instance_id": "0",
                "transform": format_transform((0.0, 0.0, 0.0)),
                "offset": "0 0 0",
            },
        )
        return _serialize(root)

    def _project_settings(self, objects: list[_PackagedObject]) -> bytes:
        settings = {
            "extruder_colour": [EXTRUDER_COLOUR],
            "filament_colour": [obj.solid.material.color.upper() for obj in objects],
            "filament_map": [str(obj.extruder) for obj in objects],
            "filament_map_mode": FILAMENT_MAP_MODE,
        }
        return json.dumps(settings, indent=4).encode("utf-8")

    def _zip(self, files: dict[str, bytes]) -> bytes:
        buffer = BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            for name, data in files.items():
                info = zipfile.ZipInfo(name, date_time=ZIP_DATE_TIME)
                info.compress_type = zipfile.ZIP_DEFLATED
                archive.writestr(
                    info,
                    data,
                    compress_type=zipfile.ZIP_DEFLATED,
                    compresslevel=ZIP_COMPRESS_LEVEL,
                )
        return buffer.getvalue()
