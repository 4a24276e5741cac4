"""Module pricing service.

Computes a module price as the sum of four categories:

- materials: board area times unit price, plus edge banding for cantable
  materials on banded parts
- accessories: unit price times quantity
- processing: per-operation unit prices
- labor: module volume scaled by a complexity factor

Dangling material or accessory references are skipped so a price can always
be computed; validation is where they get reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping

from ..value_objects import ProcessingType
from .geometry import EDGE_BANDED_PARTS, edge_length_m, module_volume_m3

if TYPE_CHECKING:
    from ..catalog import Catalog
    from ..entities import FurnitureModule

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_PROCESSING_PRICES",
    "DEFAULT_RATES",
    "EDGE_BANDING_PRICE_PER_ML",
    "ModulePrice",
    "PriceBreakdown",
    "PricingEngine",
    "PricingRates",
    "calculate_module_price",
    "calculate_project_price",
]

EDGE_BANDING_PRICE_PER_ML = 3.5

# Unit prices per m², or per piece for discrete operations (glass_cut, glass_drill).
# Edge banding is priced inside the materials category.
DEFAULT_PROCESSING_PRICES: Mapping[ProcessingType, float] = MappingProxyType(
    {
        ProcessingType.CNC_CLASSIC: 60.0,
        ProcessingType.CNC_RIFLED: 68.0,
        ProcessingType.GLASS_CUT: 0.0,
        ProcessingType.GLASS_SANDBLAST: 18.0,
        ProcessingType.GLASS_DRILL: 5.0,
        ProcessingType.GLASS_CNC: 50.0,
        ProcessingType.PAINTING: 45.0,
        ProcessingType.EDGE_BANDING: 0.0,
        ProcessingType.OTHER: 15.0,
    }
)


@dataclass(frozen=True)
class PricingRates:
    """Price constants used by the pricing engine.

    Attributes:
        edge_banding_price_per_ml: Edge banding price per linear meter.
        processing_prices: Unit price per processing type.
        labor_rate_per_cubic_meter: Labor price per m³ of module volume.
        accessory_complexity_factor: Complexity added per accessory entry.
        processing_complexity_factor: Complexity added per processing entry.
    """

    edge_banding_price_per_ml: float = EDGE_BANDING_PRICE_PER_ML
    processing_prices: Mapping[ProcessingType, float] = field(
        default_factory=lambda: DEFAULT_PROCESSING_PRICES
    )
    labor_rate_per_cubic_meter: float = 100.0
    accessory_complexity_factor: float = 0.1
    processing_complexity_factor: float = 0.2

    def __post_init__(self) -> None:
        prices = dict(DEFAULT_PROCESSING_PRICES)
        prices.update(self.processing_prices)
        for processing_type, price in prices.items():
            if price < 0:
                raise ValueError(
                    f"Processing price for {processing_type.value} must be non-negative"
                )
        if self.edge_banding_price_per_ml < 0:
            raise ValueError("Edge banding price must be non-negative")
        if self.labor_rate_per_cubic_meter < 0:
            raise ValueError("Labor rate must be non-negative")
        if self.accessory_complexity_factor < 0:
            raise ValueError("Accessory complexity factor must be non-negative")
        if self.processing_complexity_factor < 0:
            raise ValueError("Processing complexity factor must be non-negative")
        object.__setattr__(self, "processing_prices", MappingProxyType(prices))

    def __hash__(self) -> int:
        return hash(
            (
                self.edge_banding_price_per_ml,
                tuple(sorted((k.value, v) for k, v in self.processing_prices.items())),
                self.labor_rate_per_cubic_meter,
                self.accessory_complexity_factor,
                self.processing_complexity_factor,
            )
        )

    def unit_price(self, processing_type: ProcessingType) -> float:
        """Unit price for a processing type, falling back to OTHER."""
        return self.processing_prices.get(
            processing_type, self.processing_prices[ProcessingType.OTHER]
        )


DEFAULT_RATES = PricingRates()


@dataclass(frozen=True)
class PriceBreakdown:
    """Cost per category for one module or an aggregate."""

    materials: float = 0.0
    accessories: float = 0.0
    processing: float = 0.0
    labor: float = 0.0

    @property
    def total(self) -> float:
        return self.materials + self.accessories + self.processing + self.labor

    def __add__(self, other: PriceBreakdown) -> PriceBreakdown:
        return PriceBreakdown(
            materials=self.materials + other.materials,
            accessories=self.accessories + other.accessories,
            processing=self.processing + other.processing,
            labor=self.labor + other.labor,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "materials": self.materials,
            "accessories": self.accessories,
            "processing": self.processing,
            "labor": self.labor,
        }


@dataclass(frozen=True)
class ModulePrice:
    """Result of pricing a module."""

    total: float
    breakdown: PriceBreakdown

    def to_dict(self) -> dict:
        return {"total": self.total, "breakdown": self.breakdown.to_dict()}


class PricingEngine:
    """Computes module and project prices from a catalog."""

    def __init__(self, rates: PricingRates = DEFAULT_RATES) -> None:
        self.rates = rates

    def calculate_module_price(
        self, module: FurnitureModule, catalog: Catalog
    ) -> ModulePrice:
        """Price a module.

        Args:
            module: The module to price.
            catalog: Materials and accessories to resolve references against.

        Returns:
            ModulePrice with the total and the per-category breakdown.
        """
        breakdown = PriceBreakdown(
            materials=self.calculate_materials_cost(module, catalog),
            accessories=self.calculate_accessories_cost(module, catalog),
            processing=self.calculate_processing_cost(module),
            labor=self.calculate_labor_cost(module),
        )
        return ModulePrice(total=breakdown.total, breakdown=breakdown)

    def calculate_materials_cost(self, module: FurnitureModule, catalog: Catalog) -> float:
        cost = 0.0
        for module_material in module.materials:
            material = catalog.find_material(module_material.material_id)
            if material is None:
                logger.debug(
                    f"Skipping unknown material '{module_material.material_id}' "
                    f"on module '{module.id}'"
                )
                continue
            cost += material.price_per_sqm * module_material.quantity
            if material.cantable and module_material.part in EDGE_BANDED_PARTS:
                edge_length = edge_length_m(module, module_material.part)
                cost += edge_length * self.rates.edge_banding_price_per_ml
        return cost

    def calculate_accessories_cost(
        self, module: FurnitureModule, catalog: Catalog
    ) -> float:
        cost = 0.0
        for module_accessory in module.accessories:
            item = catalog.find_accessory(module_accessory.accessory_item_id)
            if item is None:
                logger.debug(
                    f"Skipping unknown accessory '{module_accessory.accessory_item_id}' "
                    f"on module '{module.id}'"
                )
                continue
            cost += item.price * module_accessory.quantity
        return cost

    def calculate_processing_cost(self, module: FurnitureModule) -> float:
        return sum(
            (p.area * self.rates.unit_price(p.type) for p in module.processing_options),
            0.0,
        )

    def calculate_labor_cost(self, module: FurnitureModule) -> float:
        """Volume-based labor estimate.

        ``volume_m3 * rate * (1 + 0.1 * accessories + 0.2 * processing)``
        """
        complexity = (
            1
            + self.rates.accessory_complexity_factor * len(module.accessories)
            + self.rates.processing_complexity_factor * len(module.processing_options)
        )
        return module_volume_m3(module) * self.rates.labor_rate_per_cubic_meter * complexity

    def calculate_project_breakdown(
        self, modules: Iterable[FurnitureModule], catalog: Catalog
    ) -> PriceBreakdown:
        """Sum of the category breakdowns of all modules."""
        total = PriceBreakdown()
        for module in modules:
            total = total + self.calculate_module_price(module, catalog).breakdown
        return total

    def calculate_project_price(
        self, modules: Iterable[FurnitureModule], catalog: Catalog
    ) -> float:
        return sum(
            (self.calculate_module_price(m, catalog).total for m in modules), 0.0
        )


def calculate_module_price(
    module: FurnitureModule, catalog: Catalog, rates: PricingRates = DEFAULT_RATES
) -> ModulePrice:
    """Price a module with the given rates."""
    return PricingEngine(rates).calculate_module_price(module, catalog)


def calculate_project_price(
    modules: Iterable[FurnitureModule],
    catalog: Catalog,
    rates: PricingRates = DEFAULT_RATES,
) -> float:
    """Total price across modules with the given rates."""
    return PricingEngine(rates).calculate_project_price(modules, catalog)
