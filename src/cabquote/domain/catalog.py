"""Reference-data catalog of materials and accessories keyed by id."""

from __future__ import annotations

import logging
from typing import Iterable

from .value_objects import (
    AccessoryItem,
    AccessoryType,
    Material,
    MaterialType,
    ModuleType,
)

logger = logging.getLogger(__name__)

__all__ = [
    "AccessoryNotFoundError",
    "Catalog",
    "CatalogLookupError",
    "MaterialNotFoundError",
]


class CatalogLookupError(KeyError):
    """Raised when a strict catalog lookup does not resolve.

    Attributes:
        item_id: The id that could not be resolved.
    """

    kind = "Item"

    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(item_id)

    def __str__(self) -> str:
        return f"{self.kind} {self.item_id} not found"


class MaterialNotFoundError(CatalogLookupError):
    """Raised when a material id is not in the catalog."""

    kind = "Material"


class AccessoryNotFoundError(CatalogLookupError):
    """Raised when an accessory id is not in the catalog."""

    kind = "Accessory"


def _dedupe(items: Iterable, label: str) -> dict:
    by_id: dict = {}
    for item in items:
        if item.id in by_id:
            logger.debug(f"Replacing duplicate {label} '{item.id}' in catalog")
        by_id[item.id] = item
    return by_id


class Catalog:
    """In-memory materials and accessories, resolved before engine calls.

    Items are deduplicated by id: a later entry replaces an earlier one but
    keeps the earlier position, so list order stays deterministic for
    first-match selection.

    Two lookup styles are offered. ``find_material``/``find_accessory`` return
    None for unknown ids and are used where dangling references are
    tolerated (pricing). ``material``/``accessory`` raise a
    CatalogLookupError subclass and are used where they must be reported
    (validation).
    """

    def __init__(
        self,
        materials: Iterable[Material] = (),
        accessories: Iterable[AccessoryItem] = (),
    ) -> None:
        self._materials: dict[str, Material] = _dedupe(materials, "material")
        self._accessories: dict[str, AccessoryItem] = _dedupe(accessories, "accessory")

    def __repr__(self) -> str:
        return (
            f"Catalog(materials={len(self._materials)}, "
            f"accessories={len(self._accessories)})"
        )

    @property
    def materials(self) -> list[Material]:
        """Materials in catalog order."""
        return list(self._materials.values())

    @property
    def accessories(self) -> list[AccessoryItem]:
        """Accessory items in catalog order."""
        return list(self._accessories.values())

    # --- Tolerant lookups ---

    def find_material(self, material_id: str) -> Material | None:
        """Get a material by id, or None if it is not in the catalog."""
        return self._materials.get(material_id)

    def find_accessory(self, accessory_id: str) -> AccessoryItem | None:
        """Get an accessory item by id, or None if it is not in the catalog."""
        return self._accessories.get(accessory_id)

    # --- Strict lookups ---

    def material(self, material_id: str) -> Material:
        """Resolve a material id.

        Raises:
            MaterialNotFoundError: If the id is not in the catalog.
        """
        try:
            return self._materials[material_id]
        except KeyError:
            raise MaterialNotFoundError(material_id) from None

    def accessory(self, accessory_id: str) -> AccessoryItem:
        """Resolve an accessory id.

        Raises:
            AccessoryNotFoundError: If the id is not in the catalog.
        """
        try:
            return self._accessories[accessory_id]
        except KeyError:
            raise AccessoryNotFoundError(accessory_id) from None

    # --- Filters ---

    def materials_of_type(self, material_type: MaterialType) -> list[Material]:
        """Materials of the given type, in catalog order."""
        return [m for m in self._materials.values() if m.type is material_type]

    def accessories_of_type(self, accessory_type: AccessoryType) -> list[AccessoryItem]:
        """Accessory items of the given type, in catalog order."""
        return [a for a in self._accessories.values() if a.type is accessory_type]

    def accessories_compatible_with(self, module_type: ModuleType) -> list[AccessoryItem]:
        """Accessory items that may be attached to the given module type."""
        return [
            a for a in self._accessories.values() if a.is_compatible_with(module_type)
        ]
