"""Module validation service.

Checks a module's configuration against its catalog references and
manufacturing constraints. Each check is an independent class satisfying
the ModuleCheck protocol; ModuleValidator runs the enabled ones in order
and collects their findings into a single ModuleValidationResult.

Findings come in three severities:

- errors: blocking problems (unresolved references, painting a
  non-paintable material, incompatible processing)
- warnings: likely omissions such as a base cabinet without feet
- suggestions: upgrades and companion accessories

Nothing here raises; every problem is reported in the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from ..catalog import AccessoryNotFoundError, CatalogLookupError
from ..value_objects import (
    AccessoryType,
    MaterialType,
    ModulePart,
    ModuleType,
    ProcessingType,
)

if TYPE_CHECKING:
    from cabquote.contracts.validators import ModuleCheck

    from ..catalog import Catalog
    from ..entities import FurnitureModule
    from ..value_objects import Material, ModuleAccessory

logger = logging.getLogger(__name__)

__all__ = [
    "AccessoryCompatibilityCheck",
    "AccessorySuggestionCheck",
    "AvailabilityCheck",
    "EdgeBandingCheck",
    "ModuleValidationResult",
    "ModuleValidator",
    "PaintabilityCheck",
    "ProcessingCompatibilityCheck",
    "ReferenceCheck",
    "RequiredAccessoriesCheck",
    "default_checks",
    "validate_module",
]


@dataclass
class ModuleValidationResult:
    """Errors, warnings and suggestions found for a module.

    Attributes:
        errors: Blocking problems.
        warnings: Advisory problems.
        suggestions: Recommended improvements.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the module has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        """Check if the module has any warnings."""
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, message: str) -> ModuleValidationResult:
        """Add an error once, keeping first-seen order."""
        if message not in self.errors:
            self.errors.append(message)
        return self

    def add_warning(self, message: str) -> ModuleValidationResult:
        """Add a warning once, keeping first-seen order."""
        if message not in self.warnings:
            self.warnings.append(message)
        return self

    def add_suggestion(self, message: str) -> ModuleValidationResult:
        """Add a suggestion once, keeping first-seen order."""
        if message not in self.suggestions:
            self.suggestions.append(message)
        return self

    def merge(self, other: ModuleValidationResult) -> ModuleValidationResult:
        """Merge another result into this one."""
        for message in other.errors:
            self.add_error(message)
        for message in other.warnings:
            self.add_warning(message)
        for message in other.suggestions:
            self.add_suggestion(message)
        return self

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        return {
            "is_valid": self.is_valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "suggestions": list(self.suggestions),
        }


def _describe(material: Material) -> str:
    return f"{material.name} ({material.type.value})"


def _accessory_types(module: FurnitureModule, catalog: Catalog) -> set[AccessoryType]:
    """Accessory types on the module, preferring the catalog item's type."""
    types: set[AccessoryType] = set()
    for accessory in module.accessories:
        item = catalog.find_accessory(accessory.accessory_item_id)
        types.add(item.type if item is not None else accessory.type)
    return types


def _has_processing(
    module: FurnitureModule, material_id: str, processing_type: ProcessingType
) -> bool:
    return any(
        p.material_id == material_id and p.type is processing_type
        for p in module.processing_options
    )


class ReferenceCheck:
    """Every material and accessory reference must resolve in the catalog."""

    @property
    def name(self) -> str:
        return "references"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add an error for each material or accessory id the catalog cannot resolve."""
        material_ids = [m.material_id for m in module.materials]
        material_ids += [p.material_id for p in module.processing_options]
        for material_id in material_ids:
            try:
                catalog.material(material_id)
            except CatalogLookupError as e:
                result.add_error(str(e))

        for accessory in module.accessories:
            try:
                catalog.accessory(accessory.accessory_item_id)
            except AccessoryNotFoundError as e:
                result.add_error(str(e))


class PaintabilityCheck:
    """Painting is only allowed on paintable materials."""

    @property
    def name(self) -> str:
        return "paintability"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add an error for each assigned material painted despite not being paintable."""
        for module_material in module.materials:
            material = catalog.find_material(module_material.material_id)
            if material is None or material.paintable:
                continue
            if _has_processing(module, material.id, ProcessingType.PAINTING):
                result.add_error(
                    f"{_describe(material)} cannot be painted. "
                    f"Only paintable materials such as standard MDF can be painted."
                )


class EdgeBandingCheck:
    """Edge banding is only allowed on cantable materials."""

    @property
    def name(self) -> str:
        return "edge_banding"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add an error for each assigned material banded despite not being cantable."""
        for module_material in module.materials:
            material = catalog.find_material(module_material.material_id)
            if material is None or material.cantable:
                continue
            if _has_processing(module, material.id, ProcessingType.EDGE_BANDING):
                result.add_error(
                    f"{_describe(material)} cannot have edge banding applied. "
                    f"Only cantable materials such as PAL and MDF-AGT can be banded."
                )


class ProcessingCompatibilityCheck:
    """Each processing operation must be in its material's compatible operations."""

    @property
    def name(self) -> str:
        return "processing_compatibility"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add an error for each operation its material does not support."""
        for processing in module.processing_options:
            material = catalog.find_material(processing.material_id)
            if material is None:
                continue
            if not material.supports(processing.type):
                result.add_error(
                    f"{processing.type.value} processing is not compatible "
                    f"with {_describe(material)}."
                )


class RequiredAccessoriesCheck:
    """Warn about hardware a module of its type normally needs."""

    @property
    def name(self) -> str:
        return "required_accessories"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add a warning for each kind of hardware the module type is missing."""
        types = _accessory_types(module, catalog)

        if module.type is ModuleType.BASE_CABINET and AccessoryType.FOOT not in types:
            result.add_warning(
                "Base cabinets typically require feet. Consider adding them."
            )

        if module.type is ModuleType.DRAWER_UNIT and AccessoryType.SLIDE not in types:
            result.add_warning(
                "Drawer units require slides. Add appropriate slides for each drawer."
            )

        if (
            module.type.is_cabinet
            and module.has_part(ModulePart.DOOR)
            and AccessoryType.HINGE not in types
        ):
            result.add_warning(
                "Cabinets with doors require hinges. Consider adding them."
            )

        if AccessoryType.HANDLE not in types and AccessoryType.PUSH_SYSTEM not in types:
            result.add_warning(
                "No handles found. Consider adding handles or a push system."
            )


class AccessorySuggestionCheck:
    """Suggest companion accessories and upgrades."""

    @property
    def name(self) -> str:
        return "accessory_suggestions"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add suggestions for missing companion accessories and slide upgrades."""
        types = _accessory_types(module, catalog)

        door_materials = [
            catalog.find_material(m.material_id)
            for m in module.materials_for_part(ModulePart.DOOR)
        ]
        has_glass_door = any(
            material is not None and material.type is MaterialType.GLASS
            for material in door_materials
        )
        if has_glass_door and AccessoryType.PROFILE not in types:
            result.add_suggestion(
                "Glass doors require aluminum profiles. Consider adding them."
            )

        if module.type is ModuleType.DRAWER_UNIT and not self._has_soft_close_slide(
            module.accessories, catalog
        ):
            result.add_suggestion(
                "Consider upgrading to soft-close drawer slides for a better user experience."
            )

        if module.has_part(ModulePart.SHELF) and AccessoryType.SHELF_SUPPORT not in types:
            result.add_suggestion(
                "Shelves require shelf supports. Add supports suited to the shelf thickness."
            )

    @staticmethod
    def _has_soft_close_slide(
        accessories: Iterable[ModuleAccessory], catalog: Catalog
    ) -> bool:
        """Check for a soft-close slide; unresolved slides are judged by their id."""
        for accessory in accessories:
            item = catalog.find_accessory(accessory.accessory_item_id)
            if item is not None:
                if item.type is AccessoryType.SLIDE and item.is_soft_close:
                    return True
            elif (
                accessory.type is AccessoryType.SLIDE
                and "soft" in accessory.accessory_item_id.lower()
            ):
                return True
        return False


class AvailabilityCheck:
    """Warn when an assigned material cannot currently be ordered."""

    @property
    def name(self) -> str:
        return "availability"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add a warning for each assigned material that is not available."""
        for module_material in module.materials:
            material = catalog.find_material(module_material.material_id)
            if material is not None and not material.availability:
                result.add_warning(
                    f"{_describe(material)} is currently unavailable."
                )


class AccessoryCompatibilityCheck:
    """Warn when an accessory is not listed as compatible with the module type."""

    @property
    def name(self) -> str:
        return "accessory_compatibility"

    def check(
        self, module: FurnitureModule, catalog: Catalog, result: ModuleValidationResult
    ) -> None:
        """Add a warning for each accessory not meant for the module type."""
        for accessory in module.accessories:
            item = catalog.find_accessory(accessory.accessory_item_id)
            if item is not None and not item.is_compatible_with(module.type):
                result.add_warning(
                    f"{item.name} is not intended for {module.type.value} modules."
                )


def default_checks() -> list[ModuleCheck]:
    """The standard checks in evaluation order."""
    return [
        ReferenceCheck(),
        PaintabilityCheck(),
        EdgeBandingCheck(),
        ProcessingCompatibilityCheck(),
        RequiredAccessoriesCheck(),
        AccessorySuggestionCheck(),
        AvailabilityCheck(),
        AccessoryCompatibilityCheck(),
    ]


class ModuleValidator:
    """Ordered collection of named checks that can be enabled or disabled.

    Example:
        validator = ModuleValidator()
        validator.disable("availability")
        result = validator.validate(module, catalog)
    """

    def __init__(self, checks: Iterable[ModuleCheck] | None = None) -> None:
        self._checks: dict[str, ModuleCheck] = {}
        self._disabled: set[str] = set()
        for check in default_checks() if checks is None else checks:
            self.register(check)

    def register(self, check: ModuleCheck) -> None:
        """Register a check, replacing any check with the same name."""
        if check.name in self._checks:
            logger.warning(f"Overwriting existing check '{check.name}'")
        self._checks[check.name] = check
        logger.debug(f"Registered check '{check.name}': {type(check).__name__}")

    def get(self, name: str) -> ModuleCheck:
        """Get a check by name.

        Raises:
            KeyError: If no check is registered with that name.
        """
        if name not in self._checks:
            available = ", ".join(self.available())
            raise KeyError(
                f"No check registered with name '{name}'. "
                f"Available checks: {available or 'none'}"
            )
        return self._checks[name]

    def available(self) -> list[str]:
        """Registered check names in evaluation order."""
        return list(self._checks)

    def enable(self, name: str) -> None:
        """Enable a registered check.

        Raises:
            KeyError: If no check is registered with that name.
        """
        self.get(name)
        self._disabled.discard(name)

    def disable(self, name: str) -> None:
        """Disable a registered check without unregistering it.

        Raises:
            KeyError: If no check is registered with that name.
        """
        self.get(name)
        self._disabled.add(name)

    def is_enabled(self, name: str) -> bool:
        """Check if a check is registered and enabled."""
        return name in self._checks and name not in self._disabled

    def validate(self, module: FurnitureModule, catalog: Catalog) -> ModuleValidationResult:
        """Run all enabled checks against a module."""
        result = ModuleValidationResult()
        for name, check in self._checks.items():
            if name in self._disabled:
                continue
            check.check(module, catalog, result)
        logger.debug(
            f"Validated module '{module.id}': {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s), {len(result.suggestions)} suggestion(s)"
        )
        return result


def validate_module(module: FurnitureModule, catalog: Catalog) -> ModuleValidationResult:
    """Validate a module with the standard checks."""
    return ModuleValidator().validate(module, catalog)
