"""Shared input loading for CLI commands.

Every command takes a project file and a catalog file. This module loads
both, converts them to domain objects and reports configuration errors on
stderr in a uniform way.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from cabquote.application.config import (
    ConfigError,
    ProjectConfiguration,
    config_to_catalog,
    config_to_project,
    config_to_rates,
    config_to_tax_rate,
    load_catalog,
    load_project,
)
from cabquote.domain.catalog import Catalog
from cabquote.domain.entities import Project
from cabquote.domain.services.pricing import PricingRates

ProjectArgument = Annotated[
    Path,
    typer.Argument(help="Path to the JSON project file"),
]
CatalogOption = Annotated[
    Path,
    typer.Option("--catalog", "-c", help="Path to the JSON catalog file"),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Print machine-readable JSON"),
]


@dataclass
class LoadedInputs:
    """Project and catalog ready for the engines."""

    config: ProjectConfiguration
    project: Project
    catalog: Catalog
    rates: PricingRates
    tax_rate: float


def load_inputs(project_file: Path, catalog_file: Path) -> LoadedInputs:
    """Load and convert a project and a catalog.

    Raises:
        ConfigError: If either file cannot be loaded or converted.
    """
    catalog = config_to_catalog(load_catalog(catalog_file))
    config = load_project(project_file)
    return LoadedInputs(
        config=config,
        project=config_to_project(config),
        catalog=catalog,
        rates=config_to_rates(config),
        tax_rate=config_to_tax_rate(config),
    )


def load_or_exit(project_file: Path, catalog_file: Path) -> LoadedInputs:
    """Load inputs, or print the error and exit with code 1."""
    try:
        return load_inputs(project_file, catalog_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def display_load_error(error: ConfigError) -> None:
    """Print a configuration error on stderr."""
    typer.echo("Errors:", err=True)
    for line in _describe_load_error(error):
        typer.echo(f"  {line}", err=True)


def _describe_load_error(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"File not found: {error.path}"]

    if error.error_type == "json_parse":
        lines = [f"Invalid JSON syntax in {error.path}"]
        lines += [
            f"  Line {d.get('line', '?')}, Column {d.get('column', '?')}: {d.get('message')}"
            for d in error.details
        ]
        return lines

    if error.error_type == "validation":
        lines = [f"In {error.path}:"] if error.path is not None else []
        for detail in error.details:
            lines.append(f"{detail.get('path') or '<root>'}: {detail.get('message')}")
            value = detail.get("value")
            if value is not None and not isinstance(value, (dict, list)):
                lines.append(f"  Value: {value!r}")
        return lines

    return [error.message]
