"""Domain entities for furniture modules and projects."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable

from .value_objects import (
    AccessoryType,
    ModuleAccessory,
    ModuleMaterial,
    ModulePart,
    ModuleType,
    Processing,
    ProcessingType,
    ProjectStatus,
    RoomDimensions,
    Vector3,
)

if TYPE_CHECKING:
    from .catalog import Catalog
    from .services.pricing import ModulePrice, PricingEngine

# Fields whose change makes the cached module price stale
PRICED_FIELDS: frozenset[str] = frozenset(
    {"width", "height", "depth", "materials", "accessories", "processing_options"}
)


def _check_dimension(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"Module {name} must be positive, got {value}")


def _check_unique_parts(materials: Iterable[ModuleMaterial]) -> None:
    seen: set[ModulePart] = set()
    for material in materials:
        if material.part in seen:
            raise ValueError(
                f"Module already has a material for part '{material.part.value}'"
            )
        seen.add(material.part)


@dataclass
class FurnitureModule:
    """A single furniture unit with its materials, accessories and processing.

    Collections are stored as tuples, so every structural change goes
    through attribute assignment or one of the mutator methods. Either way
    the cached price is invalidated and stays None until it is recomputed
    with refresh_price() or set explicitly with set_price().

    Attributes:
        id: Module identifier, unique within its project.
        name: Display name.
        type: Module type.
        width: Width in millimeters.
        height: Height in millimeters.
        depth: Depth in millimeters.
        position: Scene position (x, y, z).
        rotation: Scene rotation (x, y, z).
        materials: Material assignments, at most one per part.
        accessories: Attached accessories.
        processing_options: Processing operations.
        price: Last computed total, or None when stale.
    """

    id: str
    name: str
    type: ModuleType
    width: float
    height: float
    depth: float
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Vector3 = (0.0, 0.0, 0.0)
    materials: tuple[ModuleMaterial, ...] = ()
    accessories: tuple[ModuleAccessory, ...] = ()
    processing_options: tuple[Processing, ...] = ()
    price: float | None = field(default=None, compare=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in ("width", "height", "depth"):
            _check_dimension(name, value)
        elif name == "materials":
            value = tuple(value)
            _check_unique_parts(value)
        elif name in ("accessories", "processing_options"):
            value = tuple(value)
        elif name in ("position", "rotation"):
            value = tuple(value)
            if len(value) != 3:
                raise ValueError(f"Module {name} must have three components")
        object.__setattr__(self, name, value)
        if name in PRICED_FIELDS:
            object.__setattr__(self, "price", None)

    @property
    def is_price_stale(self) -> bool:
        """True when the cached price must be recomputed."""
        return self.price is None

    def set_price(self, total: float) -> None:
        """Store a freshly computed total."""
        object.__setattr__(self, "price", total)

    def refresh_price(self, engine: PricingEngine, catalog: Catalog) -> ModulePrice:
        """Recompute the price with the given engine and cache its total.

        Returns:
            The full price breakdown.
        """
        result = engine.calculate_module_price(self, catalog)
        self.set_price(result.total)
        return result

    # --- Dimensions ---

    def set_dimensions(
        self,
        width: float | None = None,
        height: float | None = None,
        depth: float | None = None,
    ) -> None:
        """Update one or more dimensions (millimeters)."""
        if width is not None:
            self.width = width
        if height is not None:
            self.height = height
        if depth is not None:
            self.depth = depth

    # --- Materials ---

    def has_part(self, part: ModulePart) -> bool:
        return any(m.part is part for m in self.materials)

    def material_for_part(self, part: ModulePart) -> ModuleMaterial | None:
        for material in self.materials:
            if material.part is part:
                return material
        return None

    def materials_for_part(self, part: ModulePart) -> list[ModuleMaterial]:
        return [m for m in self.materials if m.part is part]

    def set_material(self, material: ModuleMaterial) -> None:
        """Assign a material to its part, replacing any previous assignment."""
        updated = [m for m in self.materials if m.part is not material.part]
        updated.append(material)
        self.materials = tuple(updated)

    def remove_material(self, part: ModulePart) -> bool:
        """Remove the material assigned to a part.

        Returns:
            True if a material was removed.
        """
        updated = tuple(m for m in self.materials if m.part is not part)
        if len(updated) == len(self.materials):
            return False
        self.materials = updated
        return True

    # --- Accessories ---

    def has_accessory_type(self, accessory_type: AccessoryType) -> bool:
        return any(a.type is accessory_type for a in self.accessories)

    def add_accessory(self, accessory: ModuleAccessory) -> None:
        self.accessories = (*self.accessories, accessory)

    def remove_accessory(self, accessory_item_id: str) -> bool:
        """Remove all attachments of an accessory item.

        Returns:
            True if anything was removed.
        """
        updated = tuple(
            a for a in self.accessories if a.accessory_item_id != accessory_item_id
        )
        if len(updated) == len(self.accessories):
            return False
        self.accessories = updated
        return True

    # --- Processing ---

    def add_processing(self, processing: Processing) -> None:
        self.processing_options = (*self.processing_options, processing)

    def remove_processing(
        self, processing_type: ProcessingType, material_id: str
    ) -> bool:
        """Remove processing entries of a type applied to a material.

        Returns:
            True if anything was removed.
        """
        updated = tuple(
            p
            for p in self.processing_options
            if not (p.type is processing_type and p.material_id == material_id)
        )
        if len(updated) == len(self.processing_options):
            return False
        self.processing_options = updated
        return True

    def processing_for(self, material_id: str) -> list[Processing]:
        return [p for p in self.processing_options if p.material_id == material_id]

    def copy(self) -> FurnitureModule:
        """Return an independent copy, including the cached price."""
        return dataclasses.replace(self)


@dataclass
class Project:
    """A furniture project owning its modules.

    Attributes:
        id: Project identifier.
        name: Display name.
        modules: Modules in the project; ids are unique.
        dimensions: Room envelope, if known.
        status: Lifecycle status.
    """

    id: str
    name: str = ""
    modules: list[FurnitureModule] = field(default_factory=list)
    dimensions: RoomDimensions | None = None
    status: ProjectStatus = ProjectStatus.DRAFT

    def __post_init__(self) -> None:
        ids = [m.id for m in self.modules]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate module ids in project: {', '.join(duplicates)}")

    def add_module(self, module: FurnitureModule) -> None:
        if any(m.id == module.id for m in self.modules):
            raise ValueError(f"Module '{module.id}' already exists in project")
        self.modules.append(module)

    def remove_module(self, module_id: str) -> FurnitureModule:
        """Remove and return a module.

        Raises:
            KeyError: If no module has the given id.
        """
        module = self.get_module(module_id)
        self.modules.remove(module)
        return module

    def get_module(self, module_id: str) -> FurnitureModule:
        for module in self.modules:
            if module.id == module_id:
                return module
        raise KeyError(f"Unknown module: {module_id}")

    def stale_modules(self) -> list[FurnitureModule]:
        """Modules whose cached price needs recomputing."""
        return [m for m in self.modules if m.is_price_stale]

    @property
    def total_price(self) -> float:
        """Sum of the cached module prices.

        Raises:
            ValueError: If any module price is stale.
        """
        stale = self.stale_modules()
        if stale:
            ids = ", ".join(m.id for m in stale)
            raise ValueError(f"Module prices are stale for: {ids}")
        return sum(m.price for m in self.modules)  # type: ignore[misc]
