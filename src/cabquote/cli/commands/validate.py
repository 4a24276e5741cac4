"""Validate command for checking project modules.

This module provides the `validate` command that runs the module checks
against every module of a project and reports errors, warnings and
suggestions.
"""

import typer

from cabquote.domain.services.validation import ModuleValidationResult, ModuleValidator
from cabquote.cli.commands.loading import CatalogOption, ProjectArgument, load_or_exit


def validate_command(project_file: ProjectArgument, catalog: CatalogOption) -> None:
    """Validate the modules of a project against a catalog.

    Checks every module for:
    - Unresolved material and accessory references
    - Painting, edge banding and processing compatibility
    - Missing accessories (feet, slides, hinges, handles)
    - Suggested companion accessories and upgrades

    Exit codes:
        0 - All modules are valid with no warnings
        1 - At least one module has errors
        2 - All modules are valid but there are warnings

    Example:
        cabquote validate kitchen.json --catalog catalog.json
    """
    typer.echo(f"Validating {project_file}...")
    typer.echo()

    inputs = load_or_exit(project_file, catalog)

    validator = ModuleValidator()
    overall = ModuleValidationResult()
    for module in inputs.project.modules:
        result = validator.validate(module, inputs.catalog)
        _display_module_result(module.id, module.name, result)
        overall.merge(result)

    _display_summary(overall)
    raise typer.Exit(code=overall.exit_code)


def _display_module_result(
    module_id: str, name: str, result: ModuleValidationResult
) -> None:
    typer.echo(f"Module {module_id} ({name}):")
    if result.errors:
        typer.echo("  Errors:", err=True)
        for error in result.errors:
            typer.echo(f"    - {error}", err=True)
    if result.warnings:
        typer.echo("  Warnings:")
        for warning in result.warnings:
            typer.echo(f"    - {warning}")
    if result.suggestions:
        typer.echo("  Suggestions:")
        for suggestion in result.suggestions:
            typer.echo(f"    - {suggestion}")
    if not (result.errors or result.warnings or result.suggestions):
        typer.echo("  OK")
    typer.echo()


def _display_summary(result: ModuleValidationResult) -> None:
    if result.errors:
        typer.echo(
            f"Validation failed: {len(result.errors)} error(s), "
            f"{len(result.warnings)} warning(s)",
            err=True,
        )
    elif result.warnings:
        typer.echo(f"Validation passed with {len(result.warnings)} warning(s)")
    else:
        typer.echo("Validation passed. Project is valid.")
