"""Geometric derivations from module dimensions.

Module dimensions are stored in millimeters; everything returned here is in
meters, square meters or cubic meters.

The edge-length formulas are empirical approximations used for pricing
parity, not an exact cut-list calculation:

- body: both side panels banded all round, ``2 * (height + depth) * 2``
- door / drawer_front: front perimeter, ``2 * (width + height)``
- shelf: front edge only, ``width``
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..value_objects import ModulePart

if TYPE_CHECKING:
    from ..entities import FurnitureModule

__all__ = [
    "EDGE_BANDED_PARTS",
    "edge_length_m",
    "mm_to_m",
    "module_volume_m3",
    "part_area_sqm",
]

MM_PER_M = 1000.0
MM3_PER_M3 = 1e9

# Parts whose edges receive banding when the material is cantable
EDGE_BANDED_PARTS: frozenset[ModulePart] = frozenset(
    {ModulePart.BODY, ModulePart.DOOR, ModulePart.DRAWER_FRONT, ModulePart.SHELF}
)


def mm_to_m(value: float) -> float:
    return value / MM_PER_M


def module_volume_m3(module: FurnitureModule) -> float:
    """Bounding volume of the module in cubic meters."""
    return module.width * module.height * module.depth / MM3_PER_M3


def edge_length_m(module: FurnitureModule, part: ModulePart) -> float:
    """Edge banding length in meters for a part of the module.

    Parts outside EDGE_BANDED_PARTS have no banding and return 0.
    """
    width = mm_to_m(module.width)
    height = mm_to_m(module.height)
    depth = mm_to_m(module.depth)

    if part is ModulePart.BODY:
        return 2 * (height + depth) * 2
    if part in (ModulePart.DOOR, ModulePart.DRAWER_FRONT):
        return 2 * (width + height)
    if part is ModulePart.SHELF:
        return width
    return 0.0


def part_area_sqm(module: FurnitureModule, part: ModulePart) -> float:
    """Board area in square meters a part needs, derived from the module size.

    The body is two sides (height x depth) plus top and bottom
    (width x depth). Fronts and the back panel cover width x height;
    shelves and countertops cover width x depth.
    """
    width = mm_to_m(module.width)
    height = mm_to_m(module.height)
    depth = mm_to_m(module.depth)

    if part is ModulePart.BODY:
        return 2 * height * depth + 2 * width * depth
    if part in (ModulePart.DOOR, ModulePart.DRAWER_FRONT, ModulePart.BACK_PANEL):
        return width * height
    if part in (ModulePart.SHELF, ModulePart.COUNTERTOP):
        return width * depth
    return 0.0
