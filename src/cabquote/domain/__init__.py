"""Domain layer - furniture model, catalog and engines."""

from .catalog import (
    AccessoryNotFoundError,
    Catalog,
    CatalogLookupError,
    MaterialNotFoundError,
)
from .entities import FurnitureModule, Project
from .services import (
    ComboRuleEngine,
    ModuleValidator,
    PricingEngine,
    PricingRates,
    generate_quote,
    validate_module,
)
from .value_objects import (
    AccessoryItem,
    AccessoryType,
    Material,
    MaterialType,
    ModuleAccessory,
    ModuleMaterial,
    ModulePart,
    ModuleType,
    Processing,
    ProcessingType,
    ProjectStatus,
    RoomDimensions,
)

__all__ = [
    "AccessoryItem",
    "AccessoryNotFoundError",
    "AccessoryType",
    "Catalog",
    "CatalogLookupError",
    "ComboRuleEngine",
    "FurnitureModule",
    "Material",
    "MaterialNotFoundError",
    "MaterialType",
    "ModuleAccessory",
    "ModuleMaterial",
    "ModulePart",
    "ModuleType",
    "ModuleValidator",
    "PricingEngine",
    "PricingRates",
    "Processing",
    "ProcessingType",
    "Project",
    "ProjectStatus",
    "RoomDimensions",
    "generate_quote",
    "validate_module",
]
