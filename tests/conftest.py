"""Pytest configuration and shared fixtures for cabquote tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from cabquote.domain.catalog import Catalog
from cabquote.domain.entities import FurnitureModule
from cabquote.domain.value_objects import (
    AccessoryItem,
    AccessoryType,
    Material,
    MaterialType,
    ModuleAccessory,
    ModuleMaterial,
    ModulePart,
    ModuleType,
    ProcessingType,
)

FIXTURES_PATH = Path(__file__).parent / "fixtures"


# =============================================================================
# Catalog fixtures
# =============================================================================


@pytest.fixture
def pal_white() -> Material:
    """Cantable, non-paintable melamine chipboard."""
    return Material(
        id="pal-white",
        code="PAL-W980-18",
        name="PAL White",
        type=MaterialType.PAL,
        thickness=18,
        price_per_sqm=38.5,
        cantable=True,
        manufacturer="Egger",
        compatible_operations=frozenset(
            {ProcessingType.CNC_CLASSIC, ProcessingType.EDGE_BANDING}
        ),
    )


@pytest.fixture
def mdf_paint() -> Material:
    """Paintable, cantable MDF."""
    return Material(
        id="mdf-paint",
        code="MDF-RAW-19",
        name="MDF Raw",
        type=MaterialType.MDF,
        thickness=19,
        price_per_sqm=55.0,
        paintable=True,
        cantable=True,
        manufacturer="Kronospan",
        compatible_operations=frozenset(
            {
                ProcessingType.PAINTING,
                ProcessingType.CNC_CLASSIC,
                ProcessingType.CNC_RIFLED,
                ProcessingType.EDGE_BANDING,
            }
        ),
    )


@pytest.fixture
def glass_clear() -> Material:
    """Glass panel; neither paintable nor cantable."""
    return Material(
        id="glass-clear",
        code="GL-4",
        name="Clear Glass",
        type=MaterialType.GLASS,
        thickness=4,
        price_per_sqm=120.0,
        compatible_operations=frozenset(
            {
                ProcessingType.GLASS_CUT,
                ProcessingType.GLASS_SANDBLAST,
                ProcessingType.GLASS_DRILL,
                ProcessingType.GLASS_CNC,
            }
        ),
    )


@pytest.fixture
def pfl_back() -> Material:
    return Material(
        id="pfl-back",
        code="PFL-3",
        name="PFL Back Panel",
        type=MaterialType.PFL,
        thickness=3,
        price_per_sqm=12.0,
    )


@pytest.fixture
def accessories() -> list[AccessoryItem]:
    """Accessory catalog entries, in catalog order."""
    cabinets = frozenset(
        {
            ModuleType.BASE_CABINET,
            ModuleType.WALL_CABINET,
            ModuleType.TALL_CABINET,
            ModuleType.CORNER_CABINET,
        }
    )
    return [
        AccessoryItem(
            id="hinge-blum",
            code="71B3550",
            name="Blum Clip Top Hinge",
            type=AccessoryType.HINGE,
            price=12.5,
            manufacturer="Blum",
            compatibility=cabinets,
            properties={"soft_close": True, "open_angle": 110},
        ),
        AccessoryItem(
            id="slide-basic",
            code="KA-270",
            name="Ball Bearing Slide",
            type=AccessoryType.SLIDE,
            price=25.0,
            manufacturer="Hettich",
        ),
        AccessoryItem(
            id="slide-tandem",
            code="560H5000B",
            name="Tandembox Slide",
            type=AccessoryType.SLIDE,
            price=45.0,
            manufacturer="Blum",
            properties={"soft_close": True},
        ),
        AccessoryItem(
            id="handle-bar",
            code="H-128",
            name="Bar Handle 128",
            type=AccessoryType.HANDLE,
            price=15.0,
        ),
        AccessoryItem(
            id="foot-adj",
            code="F-100",
            name="Adjustable Foot",
            type=AccessoryType.FOOT,
            price=3.0,
            compatibility=frozenset(
                {ModuleType.BASE_CABINET, ModuleType.TALL_CABINET, ModuleType.ISLAND}
            ),
        ),
        AccessoryItem(
            id="push-tip",
            code="956.1004",
            name="Tip-On Push",
            type=AccessoryType.PUSH_SYSTEM,
            price=9.0,
            manufacturer="Blum",
        ),
        AccessoryItem(
            id="profile-alu",
            code="AL-20",
            name="Aluminum Door Profile",
            type=AccessoryType.PROFILE,
            price=35.0,
        ),
        AccessoryItem(
            id="shelf-pin",
            code="SP-5",
            name="Shelf Pin",
            type=AccessoryType.SHELF_SUPPORT,
            price=0.5,
        ),
    ]


@pytest.fixture
def catalog(
    pal_white: Material,
    mdf_paint: Material,
    glass_clear: Material,
    pfl_back: Material,
    accessories: list[AccessoryItem],
) -> Catalog:
    return Catalog(
        materials=[pal_white, mdf_paint, glass_clear, pfl_back],
        accessories=accessories,
    )


# =============================================================================
# Module fixtures
# =============================================================================


def make_module(**overrides: Any) -> FurnitureModule:
    """Build a bare 600x720x560 base cabinet, with field overrides."""
    fields: dict[str, Any] = {
        "id": "m1",
        "name": "Base 60",
        "type": ModuleType.BASE_CABINET,
        "width": 600,
        "height": 720,
        "depth": 560,
    }
    fields.update(overrides)
    return FurnitureModule(**fields)


@pytest.fixture
def base_cabinet() -> FurnitureModule:
    """A complete base cabinet: PAL body, MDF door, hinges, handle and feet."""
    return make_module(
        materials=[
            ModuleMaterial("pal-white", ModulePart.BODY, 2.0),
            ModuleMaterial("mdf-paint", ModulePart.DOOR, 0.43),
        ],
        accessories=[
            ModuleAccessory("hinge-blum", AccessoryType.HINGE, 2),
            ModuleAccessory("handle-bar", AccessoryType.HANDLE, 1),
            ModuleAccessory("foot-adj", AccessoryType.FOOT, 4),
        ],
    )


@pytest.fixture
def drawer_unit() -> FurnitureModule:
    """A drawer unit with a PAL body and MDF fronts but no hardware."""
    return make_module(
        id="d1",
        name="Drawers 60",
        type=ModuleType.DRAWER_UNIT,
        materials=[
            ModuleMaterial("pal-white", ModulePart.BODY, 2.0),
            ModuleMaterial("mdf-paint", ModulePart.DRAWER_FRONT, 0.43),
        ],
    )


@pytest.fixture
def module_factory():
    """Factory for bare modules; see make_module()."""
    return make_module
