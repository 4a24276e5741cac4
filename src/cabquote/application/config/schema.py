"""Configuration schemas for catalog and project files.

Two kinds of JSON documents are read:

- a catalog: ``{"materials": [...], "accessories": [...]}``
- a project: ``{"id", "name", "status", "dimensions", "modules": [...],
  "pricing": {...}}``

The models mirror the domain records and reuse the domain enums, which are
``(str, Enum)`` so their JSON values validate directly.
"""

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from cabquote.domain.value_objects import (
    AccessoryType,
    MaterialType,
    ModulePart,
    ModuleType,
    ProcessingType,
    ProjectStatus,
)

# Version 1.0: Initial catalog and project schema
# Version 1.1: Added the optional pricing block on projects
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})


def _check_version(v: str) -> str:
    if v in SUPPORTED_VERSIONS:
        return v

    # Newer minor versions of a supported major version are accepted
    major_version = int(v.split(".")[0])
    supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
    if major_version in supported_majors:
        return v

    raise ValueError(
        f"Unsupported schema version '{v}'. "
        f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
    )


# =============================================================================
# Catalog
# =============================================================================


class MaterialConfig(BaseModel):
    """Catalog material entry.

    Attributes:
        id: Unique material identifier.
        code: Supplier product code.
        name: Display name.
        type: Material family (PAL, MDF, MDF-AGT, PFL, GLASS, COUNTERTOP).
        thickness: Board thickness in mm.
        price_per_sqm: Price per square meter.
        paintable: Whether the board can be painted.
        cantable: Whether the board edges can be banded.
        manufacturer: Manufacturer name.
        supplier: Supplier name.
        availability: Whether the material can currently be ordered.
        compatible_operations: Processing types the material supports.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    code: str = ""
    name: str = Field(..., min_length=1)
    type: MaterialType
    thickness: float = Field(..., gt=0)
    price_per_sqm: float = Field(..., ge=0)
    paintable: bool = False
    cantable: bool = False
    manufacturer: str = ""
    supplier: str = "Other"
    availability: bool = True
    compatible_operations: list[ProcessingType] = Field(default_factory=list)


class AccessoryConfig(BaseModel):
    """Catalog accessory entry.

    An empty ``compatibility`` list means the accessory fits any module type.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    code: str = ""
    name: str = Field(..., min_length=1)
    type: AccessoryType
    price: float = Field(..., ge=0)
    manufacturer: str = ""
    compatibility: list[ModuleType] = Field(default_factory=list)
    properties: dict[str, Any] = Field(default_factory=dict)


class CatalogConfiguration(BaseModel):
    """Root model of a catalog file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    materials: list[MaterialConfig] = Field(default_factory=list)
    accessories: list[AccessoryConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        return _check_version(v)


# =============================================================================
# Project
# =============================================================================


class ModuleMaterialConfig(BaseModel):
    """Material assignment for a module part.

    When ``quantity`` is omitted the board area is derived from the module
    dimensions and the part.
    """

    model_config = ConfigDict(extra="forbid")

    material_id: str = Field(..., min_length=1)
    part: ModulePart
    quantity: float | None = Field(default=None, ge=0)


class ModuleAccessoryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    accessory_item_id: str = Field(..., min_length=1)
    type: AccessoryType
    quantity: int = Field(default=1, ge=1)


class ProcessingConfig(BaseModel):
    """Processing operation. ``area`` is m², or a count for discrete operations."""

    model_config = ConfigDict(extra="forbid")

    type: ProcessingType
    material_id: str = Field(..., min_length=1)
    area: float = Field(..., ge=0)


class ModuleConfig(BaseModel):
    """Furniture module configuration.

    Attributes:
        id: Module identifier, unique within the project.
        name: Display name.
        type: Module type.
        width: Width in mm.
        height: Height in mm.
        depth: Depth in mm.
        position: Scene position (x, y, z).
        rotation: Scene rotation (x, y, z).
        materials: Material assignments, at most one per part.
        accessories: Attached accessories.
        processing_options: Processing operations.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    type: ModuleType
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    materials: list[ModuleMaterialConfig] = Field(default_factory=list)
    accessories: list[ModuleAccessoryConfig] = Field(default_factory=list)
    processing_options: list[ProcessingConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_parts(self) -> "ModuleConfig":
        """A part may only be assigned one material."""
        parts = [m.part for m in self.materials]
        duplicates = sorted({p.value for p in parts if parts.count(p) > 1})
        if duplicates:
            raise ValueError(
                f"Module '{self.id}' assigns more than one material to: "
                f"{', '.join(duplicates)}"
            )
        return self


class RoomDimensionsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0)
    length: float = Field(..., gt=0)
    height: float = Field(..., gt=0)


class PricingConfig(BaseModel):
    """Overrides for the pricing rates and the quote tax rate.

    Omitted fields keep their default values; ``processing_prices`` is
    merged over the default unit prices.
    """

    model_config = ConfigDict(extra="forbid")

    edge_banding_price_per_ml: float | None = Field(default=None, ge=0)
    processing_prices: dict[ProcessingType, float] = Field(default_factory=dict)
    labor_rate_per_cubic_meter: float | None = Field(default=None, ge=0)
    accessory_complexity_factor: float | None = Field(default=None, ge=0)
    processing_complexity_factor: float | None = Field(default=None, ge=0)
    tax_rate: float | None = Field(default=None, ge=0, le=100)

    @field_validator("processing_prices")
    @classmethod
    def validate_prices_non_negative(
        cls, v: dict[ProcessingType, float]
    ) -> dict[ProcessingType, float]:
        for processing_type, price in v.items():
            if price < 0:
                raise ValueError(
                    f"Price for '{processing_type.value}' must be non-negative"
                )
        return v


class ProjectConfiguration(BaseModel):
    """Root model of a project file.

    Example:
        >>> config = ProjectConfiguration(
        ...     id="proj-1",
        ...     modules=[ModuleConfig(id="m1", type="base_cabinet",
        ...                           width=600, height=720, depth=560)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    id: str = Field(..., min_length=1)
    name: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    dimensions: RoomDimensionsConfig | None = None
    modules: list[ModuleConfig] = Field(default_factory=list)
    pricing: PricingConfig | None = Field(
        default=None, description="Pricing overrides (optional, v1.1+)"
    )

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        return _check_version(v)

    @model_validator(mode="after")
    def validate_unique_module_ids(self) -> "ProjectConfiguration":
        ids = [m.id for m in self.modules]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate module ids: {', '.join(duplicates)}")
        return self
