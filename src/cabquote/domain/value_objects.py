"""Value objects for the furniture configuration domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class MaterialType(str, Enum):
    """Board and sheet material families carried by the catalog.

    Attributes:
        PAL: Melamine-faced chipboard.
        MDF: Standard paintable MDF.
        MDF_AGT: High-gloss AGT faced MDF.
        PFL: Hardboard, used mostly for back panels and drawer bottoms.
        GLASS: Glass panels for doors and shelves.
        COUNTERTOP: Worktop boards.
    """

    PAL = "PAL"
    MDF = "MDF"
    MDF_AGT = "MDF-AGT"
    PFL = "PFL"
    GLASS = "GLASS"
    COUNTERTOP = "COUNTERTOP"


class AccessoryType(str, Enum):
    """Hardware categories for module accessories."""

    HINGE = "hinge"
    SLIDE = "slide"
    HANDLE = "handle"
    FOOT = "foot"
    PROFILE = "profile"
    PUSH_SYSTEM = "push_system"
    SHELF_SUPPORT = "shelf_support"
    CONNECTOR = "connector"
    OTHER = "other"


class ProcessingType(str, Enum):
    """Manufacturing operations applied to a module material.

    Most operations are priced per square meter. GLASS_DRILL and GLASS_CUT
    are discrete operations whose area field holds a unit count.
    """

    CNC_CLASSIC = "cnc_classic"
    CNC_RIFLED = "cnc_rifled"
    GLASS_CUT = "glass_cut"
    GLASS_SANDBLAST = "glass_sandblast"
    GLASS_DRILL = "glass_drill"
    GLASS_CNC = "glass_cnc"
    PAINTING = "painting"
    EDGE_BANDING = "edge_banding"
    OTHER = "other"


class ModulePart(str, Enum):
    """Parts of a module that a material can be assigned to."""

    BODY = "body"
    DOOR = "door"
    DRAWER_FRONT = "drawer_front"
    BACK_PANEL = "back_panel"
    SHELF = "shelf"
    COUNTERTOP = "countertop"
    OTHER = "other"


class ModuleType(str, Enum):
    """Types of furniture modules."""

    BASE_CABINET = "base_cabinet"
    WALL_CABINET = "wall_cabinet"
    TALL_CABINET = "tall_cabinet"
    DRAWER_UNIT = "drawer_unit"
    CORNER_CABINET = "corner_cabinet"
    ISLAND = "island"
    SHELF_UNIT = "shelf_unit"
    OTHER = "other"

    @property
    def is_cabinet(self) -> bool:
        """True for the carcase types that normally carry hinged doors."""
        return self.value.endswith("_cabinet")

    @property
    def has_fronts(self) -> bool:
        """True for module types with opening doors or drawer fronts."""
        return self.is_cabinet or self is ModuleType.DRAWER_UNIT


class ProjectStatus(str, Enum):
    """Lifecycle status of a project."""

    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ARCHIVED = "archived"


Vector3 = tuple[float, float, float]


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Material:
    """A catalog material (board, glass or worktop).

    Attributes:
        id: Catalog identifier.
        code: Manufacturer decor/product code (e.g., "PAL-W980-ST2-18").
        name: Display name.
        type: Material family.
        thickness: Board thickness in millimeters.
        price_per_sqm: Price per square meter.
        paintable: Whether the material accepts painting.
        cantable: Whether the material accepts edge banding.
        manufacturer: Producer name.
        supplier: Supplier name.
        availability: Whether the material can currently be ordered.
        compatible_operations: Processing types this material supports.
    """

    id: str
    code: str
    name: str
    type: MaterialType
    thickness: float
    price_per_sqm: float
    paintable: bool = False
    cantable: bool = False
    manufacturer: str = ""
    supplier: str = "Other"
    availability: bool = True
    compatible_operations: frozenset[ProcessingType] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Material id must not be empty")
        if self.thickness <= 0:
            raise ValueError("Material thickness must be positive")
        if self.price_per_sqm < 0:
            raise ValueError("Material price_per_sqm must be non-negative")
        object.__setattr__(
            self, "compatible_operations", frozenset(self.compatible_operations)
        )

    def supports(self, operation: ProcessingType) -> bool:
        """Check whether a processing operation is allowed on this material."""
        return operation in self.compatible_operations


@dataclass(frozen=True)
class AccessoryItem:
    """A catalog accessory (hinge, slide, handle, ...).

    Attributes:
        id: Catalog identifier.
        code: Manufacturer product code.
        name: Display name.
        type: Accessory category.
        price: Price per unit.
        manufacturer: Producer name.
        compatibility: Module types the accessory may be attached to.
            An empty set means no restriction.
        properties: Free-form attributes such as "soft_close" or "open_angle".
    """

    id: str
    code: str
    name: str
    type: AccessoryType
    price: float
    manufacturer: str = ""
    compatibility: frozenset[ModuleType] = field(default_factory=frozenset)
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Accessory id must not be empty")
        if self.price < 0:
            raise ValueError("Accessory price must be non-negative")
        object.__setattr__(self, "compatibility", frozenset(self.compatibility))
        object.__setattr__(self, "properties", _freeze(self.properties))

    def __hash__(self) -> int:
        return hash((self.id, self.code, self.type))

    def is_compatible_with(self, module_type: ModuleType) -> bool:
        """Check whether the accessory may be attached to a module type."""
        return not self.compatibility or module_type in self.compatibility

    @property
    def is_soft_close(self) -> bool:
        """True when the accessory is a soft-close variant."""
        if self.properties.get("soft_close") is True:
            return True
        label = f"{self.id} {self.code} {self.name}".lower()
        return "soft" in label


@dataclass(frozen=True)
class Processing:
    """A processing operation applied to one of the module's materials.

    Attributes:
        type: Operation type.
        material_id: Catalog id of the material the operation applies to.
        area: Square meters, or a unit count for discrete operations
            (e.g., number of holes for glass drilling).
    """

    type: ProcessingType
    material_id: str
    area: float

    def __post_init__(self) -> None:
        if self.area < 0:
            raise ValueError("Processing area must be non-negative")


@dataclass(frozen=True)
class ModuleMaterial:
    """Assignment of a catalog material to a module part.

    Attributes:
        material_id: Catalog id of the material.
        part: Which part of the module the material is used for.
        quantity: Area in square meters.
    """

    material_id: str
    part: ModulePart
    quantity: float

    def __post_init__(self) -> None:
        if self.quantity < 0:
            raise ValueError("ModuleMaterial quantity must be non-negative")


@dataclass(frozen=True)
class ModuleAccessory:
    """Accessory attached to a module.

    Attributes:
        accessory_item_id: Catalog id of the accessory.
        type: Mirror of the catalog item's type, kept for fast filtering.
        quantity: Number of units, at least one.
    """

    accessory_item_id: str
    type: AccessoryType
    quantity: int = 1

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("ModuleAccessory quantity must be at least 1")


@dataclass(frozen=True)
class RoomDimensions:
    """Room envelope in millimeters."""

    width: float
    length: float
    height: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.length <= 0 or self.height <= 0:
            raise ValueError("Room dimensions must be positive")
