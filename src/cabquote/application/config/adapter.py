"""Adapter to convert validated configuration models into domain objects.

The schemas validate shapes and ranges; the domain constructors enforce the
remaining invariants. Any ValueError raised while building domain objects
is reported as a ConfigError with error_type "domain".
"""

from cabquote.application.config.loader import ConfigError
from cabquote.application.config.schema import (
    AccessoryConfig,
    CatalogConfiguration,
    MaterialConfig,
    ModuleConfig,
    ProjectConfiguration,
)
from cabquote.domain.catalog import Catalog
from cabquote.domain.entities import FurnitureModule, Project
from cabquote.domain.services.geometry import part_area_sqm
from cabquote.domain.services.pricing import DEFAULT_RATES, PricingRates
from cabquote.domain.services.quote import DEFAULT_TAX_RATE
from cabquote.domain.value_objects import (
    AccessoryItem,
    Material,
    ModuleAccessory,
    ModuleMaterial,
    Processing,
    RoomDimensions,
)


def config_to_material(config: MaterialConfig) -> Material:
    return Material(
        id=config.id,
        code=config.code,
        name=config.name,
        type=config.type,
        thickness=config.thickness,
        price_per_sqm=config.price_per_sqm,
        paintable=config.paintable,
        cantable=config.cantable,
        manufacturer=config.manufacturer,
        supplier=config.supplier,
        availability=config.availability,
        compatible_operations=frozenset(config.compatible_operations),
    )


def config_to_accessory(config: AccessoryConfig) -> AccessoryItem:
    return AccessoryItem(
        id=config.id,
        code=config.code,
        name=config.name,
        type=config.type,
        price=config.price,
        manufacturer=config.manufacturer,
        compatibility=frozenset(config.compatibility),
        properties=dict(config.properties),
    )


def config_to_catalog(config: CatalogConfiguration) -> Catalog:
    """Build a Catalog from a validated catalog configuration.

    Raises:
        ConfigError: If a domain invariant is violated.
    """
    try:
        return Catalog(
            materials=[config_to_material(m) for m in config.materials],
            accessories=[config_to_accessory(a) for a in config.accessories],
        )
    except ValueError as e:
        raise ConfigError(message=f"Invalid catalog: {e}", error_type="domain")


def config_to_module(config: ModuleConfig) -> FurnitureModule:
    """Build a FurnitureModule from its configuration.

    Material quantities that are omitted are derived from the module
    dimensions with part_area_sqm().
    """
    module = FurnitureModule(
        id=config.id,
        name=config.name or config.id,
        type=config.type,
        width=config.width,
        height=config.height,
        depth=config.depth,
        position=config.position,
        rotation=config.rotation,
    )
    module.materials = [
        ModuleMaterial(
            material_id=m.material_id,
            part=m.part,
            quantity=m.quantity if m.quantity is not None else part_area_sqm(module, m.part),
        )
        for m in config.materials
    ]
    module.accessories = [
        ModuleAccessory(
            accessory_item_id=a.accessory_item_id, type=a.type, quantity=a.quantity
        )
        for a in config.accessories
    ]
    module.processing_options = [
        Processing(type=p.type, material_id=p.material_id, area=p.area)
        for p in config.processing_options
    ]
    return module


def config_to_project(config: ProjectConfiguration) -> Project:
    """Build a Project with all of its modules.

    Module prices start stale; callers refresh them with a pricing engine.

    Raises:
        ConfigError: If a domain invariant is violated.
    """
    try:
        dimensions = None
        if config.dimensions is not None:
            dimensions = RoomDimensions(
                width=config.dimensions.width,
                length=config.dimensions.length,
                height=config.dimensions.height,
            )
        return Project(
            id=config.id,
            name=config.name,
            modules=[config_to_module(m) for m in config.modules],
            dimensions=dimensions,
            status=config.status,
        )
    except ValueError as e:
        raise ConfigError(message=f"Invalid project: {e}", error_type="domain")


def config_to_rates(config: ProjectConfiguration) -> PricingRates:
    """Pricing rates with the project's overrides applied."""
    pricing = config.pricing
    if pricing is None:
        return DEFAULT_RATES

    overrides = {
        name: getattr(pricing, name)
        for name in (
            "edge_banding_price_per_ml",
            "labor_rate_per_cubic_meter",
            "accessory_complexity_factor",
            "processing_complexity_factor",
        )
        if getattr(pricing, name) is not None
    }
    try:
        return PricingRates(processing_prices=dict(pricing.processing_prices), **overrides)
    except ValueError as e:
        raise ConfigError(message=f"Invalid pricing: {e}", error_type="domain")


def config_to_tax_rate(config: ProjectConfiguration) -> float:
    if config.pricing is None or config.pricing.tax_rate is None:
        return DEFAULT_TAX_RATE
    return config.pricing.tax_rate
