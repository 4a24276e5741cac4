"""Configuration schema and loading system for catalogs and projects.

This package provides JSON-based loading and validation of the catalog and
project files, and the adapter that turns validated models into domain
objects.

Public API:
    - CatalogConfiguration: Root model of a catalog file
    - ProjectConfiguration: Root model of a project file
    - MaterialConfig, AccessoryConfig: Catalog entries
    - ModuleConfig, ModuleMaterialConfig, ModuleAccessoryConfig,
      ProcessingConfig: Module configuration models
    - RoomDimensionsConfig: Room envelope
    - PricingConfig: Pricing rate and tax overrides
    - load_catalog, load_project: Load from a JSON file
    - load_catalog_from_dict, load_project_from_dict: Load from a dictionary
    - ConfigError: Exception for configuration errors
    - config_to_catalog, config_to_project, config_to_rates,
      config_to_tax_rate: Convert configuration to domain objects

Example:
    >>> from pathlib import Path
    >>> from cabquote.application.config import load_project, ConfigError
    >>>
    >>> try:
    ...     config = load_project(Path("kitchen.json"))
    ...     print(f"{len(config.modules)} modules")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from cabquote.application.config.adapter import (
    config_to_accessory,
    config_to_catalog,
    config_to_material,
    config_to_module,
    config_to_project,
    config_to_rates,
    config_to_tax_rate,
)
from cabquote.application.config.loader import (
    ConfigError,
    load_catalog,
    load_catalog_from_dict,
    load_project,
    load_project_from_dict,
)
from cabquote.application.config.schema import (
    SUPPORTED_VERSIONS,
    AccessoryConfig,
    CatalogConfiguration,
    MaterialConfig,
    ModuleAccessoryConfig,
    ModuleConfig,
    ModuleMaterialConfig,
    PricingConfig,
    ProcessingConfig,
    ProjectConfiguration,
    RoomDimensionsConfig,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "AccessoryConfig",
    "CatalogConfiguration",
    "ConfigError",
    "MaterialConfig",
    "ModuleAccessoryConfig",
    "ModuleConfig",
    "ModuleMaterialConfig",
    "PricingConfig",
    "ProcessingConfig",
    "ProjectConfiguration",
    "RoomDimensionsConfig",
    "config_to_accessory",
    "config_to_catalog",
    "config_to_material",
    "config_to_module",
    "config_to_project",
    "config_to_rates",
    "config_to_tax_rate",
    "load_catalog",
    "load_catalog_from_dict",
    "load_project",
    "load_project_from_dict",
]
