"""Unit tests for configuration adapter functions.

These tests verify:
- Catalog and project models convert to the domain objects they describe
- Omitted material quantities are derived from module geometry
- Pricing overrides produce PricingRates and the quote tax rate
- Domain invariant violations surface as ConfigError("domain")
"""

from pathlib import Path

import pytest

from cabquote.application.config import (
    ConfigError,
    ModuleConfig,
    ProjectConfiguration,
    config_to_catalog,
    config_to_module,
    config_to_project,
    config_to_rates,
    config_to_tax_rate,
    load_catalog,
    load_catalog_from_dict,
    load_project,
    load_project_from_dict,
)
from cabquote.domain.entities import FurnitureModule, Project
from cabquote.domain.services.geometry import part_area_sqm
from cabquote.domain.services.pricing import DEFAULT_RATES
from cabquote.domain.value_objects import (
    AccessoryType,
    ModulePart,
    ModuleType,
    ProcessingType,
    ProjectStatus,
    RoomDimensions,
)

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"


class TestConfigToCatalog:
    """Tests for config_to_catalog()."""

    def test_converts_fixture_catalog(self) -> None:
        """The fixture catalog should convert to domain items with their flags."""
        catalog = config_to_catalog(load_catalog(FIXTURES_PATH / "catalog.json"))

        hinge = catalog.accessory("hinge-blum")
        assert hinge.type is AccessoryType.HINGE
        assert hinge.is_compatible_with(ModuleType.WALL_CABINET)
        assert not hinge.is_compatible_with(ModuleType.DRAWER_UNIT)
        assert hinge.is_soft_close

        mdf = catalog.material("mdf-paint")
        assert mdf.paintable and mdf.cantable
        assert mdf.supports(ProcessingType.CNC_RIFLED)
        assert catalog.material("pfl-back").supplier == "Other"

    def test_duplicate_ids_keep_last_definition(self) -> None:
        """A repeated id should keep the last definition at the first position."""
        config = load_catalog_from_dict(
            {
                "accessories": [
                    {"id": "h", "name": "Old", "type": "handle", "price": 1},
                    {"id": "f", "name": "Foot", "type": "foot", "price": 2},
                    {"id": "h", "name": "New", "type": "handle", "price": 3},
                ]
            }
        )
        catalog = config_to_catalog(config)
        assert [a.id for a in catalog.accessories] == ["h", "f"]
        assert catalog.accessory("h").name == "New"


class TestConfigToProject:
    """Tests for config_to_project() and config_to_module()."""

    def test_converts_valid_project(self) -> None:
        """A valid project should convert with its room, modules and parts."""
        project = config_to_project(load_project(FIXTURES_PATH / "project_valid.json"))

        assert isinstance(project, Project)
        assert project.id == "kitchen-1"
        assert project.status is ProjectStatus.IN_PROGRESS
        assert project.dimensions == RoomDimensions(width=3600, length=3000, height=2600)
        assert [m.id for m in project.modules] == ["base-60", "wall-60"]

        base = project.get_module("base-60")
        assert base.type is ModuleType.BASE_CABINET
        assert base.material_for_part(ModulePart.DOOR).quantity == 0.43
        assert [a.quantity for a in base.accessories] == [2, 1, 4]
        assert base.processing_options[0].type is ProcessingType.PAINTING

    def test_prices_start_stale(self) -> None:
        """Converted modules should have no cached price."""
        project = config_to_project(load_project(FIXTURES_PATH / "project_valid.json"))
        assert all(m.is_price_stale for m in project.modules)

    def test_omitted_quantity_is_derived(self) -> None:
        """An omitted quantity should be derived from the part's board area."""
        project = config_to_project(load_project(FIXTURES_PATH / "project_valid.json"))
        wall = project.get_module("wall-60")

        for part in (ModulePart.BODY, ModulePart.DOOR):
            assert wall.material_for_part(part).quantity == pytest.approx(
                part_area_sqm(wall, part)
            )
        assert wall.material_for_part(ModulePart.DOOR).quantity == pytest.approx(0.6 * 0.72)

    def test_name_defaults_to_id(self) -> None:
        """A module without a name should be named after its id."""
        config = load_project_from_dict(
            {
                "id": "p1",
                "modules": [
                    {"id": "m1", "type": "other", "width": 1, "height": 1, "depth": 1}
                ],
            }
        )
        module = config_to_module(config.modules[0])
        assert isinstance(module, FurnitureModule)
        assert module.name == "m1"

    def test_project_without_dimensions(self) -> None:
        """A project without room dimensions should convert with none."""
        project = config_to_project(load_project_from_dict({"id": "p1"}))
        assert project.dimensions is None
        assert project.modules == []


class TestConfigToRates:
    """Tests for config_to_rates() and config_to_tax_rate()."""

    def test_defaults_without_pricing_block(self) -> None:
        """Without a pricing block the default rates and VAT should apply."""
        config = load_project_from_dict({"id": "p1"})
        assert config_to_rates(config) is DEFAULT_RATES
        assert config_to_tax_rate(config) == 19.0

    def test_overrides(self) -> None:
        """Pricing overrides should merge with the default rates."""
        config = load_project_from_dict(
            {
                "schema_version": "1.1",
                "id": "p1",
                "pricing": {
                    "edge_banding_price_per_ml": 4,
                    "labor_rate_per_cubic_meter": 0,
                    "processing_prices": {"painting": 60},
                    "tax_rate": 9,
                },
            }
        )
        rates = config_to_rates(config)

        assert rates.edge_banding_price_per_ml == 4
        assert rates.labor_rate_per_cubic_meter == 0
        assert rates.unit_price(ProcessingType.PAINTING) == 60
        assert rates.unit_price(ProcessingType.CNC_CLASSIC) == 60
        assert rates.unit_price(ProcessingType.CNC_RIFLED) == 68
        assert rates.accessory_complexity_factor == DEFAULT_RATES.accessory_complexity_factor
        assert config_to_tax_rate(config) == 9

    def test_pricing_without_tax_rate(self) -> None:
        """A pricing block without tax_rate should keep the default VAT."""
        config = load_project_from_dict({"id": "p1", "pricing": {"labor_rate_per_cubic_meter": 80}})
        assert config_to_tax_rate(config) == 19.0
        assert config_to_rates(config).labor_rate_per_cubic_meter == 80


class TestDomainErrors:
    """Domain invariants not covered by the schema surface as ConfigError."""

    def test_invalid_module_dimension(self) -> None:
        """A dimension that bypassed the schema should raise a domain ConfigError."""
        module = ModuleConfig.model_construct(
            id="m1", type=ModuleType.OTHER, width=-5, height=1, depth=1
        )
        config = ProjectConfiguration.model_construct(id="p1", modules=[module])

        with pytest.raises(ConfigError) as exc_info:
            config_to_project(config)

        error = exc_info.value
        assert error.error_type == "domain"
        assert "width must be positive" in error.message
