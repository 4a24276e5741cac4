"""Rules command for combo rule suggestions and blocked options."""

import json
from typing import Annotated

import typer

from cabquote.domain.services.combo_rules import ComboResult, ComboRuleEngine
from cabquote.cli.commands.loading import (
    CatalogOption,
    JsonOption,
    ProjectArgument,
    load_or_exit,
)


def rules_command(
    project_file: ProjectArgument,
    catalog: CatalogOption,
    apply: Annotated[
        bool,
        typer.Option("--apply", help="Show the defaults that would be auto-applied"),
    ] = False,
    json_output: JsonOption = False,
) -> None:
    """Evaluate the combo rules against every module of a project.

    Shows suggestions, warnings, errors and blocked options per module.
    With --apply, also lists the accessories the engine adds as safe
    defaults. The project files are never modified.

    Exit codes:
        0 - No rule reported an error
        1 - At least one rule reported an error

    Example:
        cabquote rules kitchen.json --catalog catalog.json --apply
    """
    inputs = load_or_exit(project_file, catalog)
    engine = ComboRuleEngine()

    failed = False
    output = []
    for module in inputs.project.modules:
        result = engine.evaluate(module, inputs.catalog)
        failed = failed or bool(result.errors)
        entry = {"id": module.id, "name": module.name, **result.to_dict()}
        if apply:
            applied = engine.apply_defaults(module, inputs.catalog)
            entry["applied"] = {
                "messages": list(applied.messages),
                "added": [a.accessory_item_id for a in applied.added],
            }
        output.append(entry)

        if not json_output:
            _display_module(module.id, module.name, result)
            if apply:
                _display_applied(entry["applied"])

    if json_output:
        typer.echo(json.dumps({"project_id": inputs.project.id, "modules": output}, indent=2))

    if failed:
        raise typer.Exit(code=1)


def _display_module(module_id: str, name: str, result: ComboResult) -> None:
    typer.echo(f"Module {module_id} ({name}):")
    for suggestion in result.suggestions:
        typer.echo(
            f"  Suggest {suggestion.type} {suggestion.name} [{suggestion.id}]: "
            f"{suggestion.reason}"
        )
    for warning in result.warnings:
        typer.echo(f"  Warning: {warning}")
    for error in result.errors:
        typer.echo(f"  Error: {error}", err=True)
    if result.blocked_options:
        typer.echo(f"  Blocked: {', '.join(result.blocked_options)}")
    if not (result.suggestions or result.warnings or result.errors or result.blocked_options):
        typer.echo("  No rules fired")


def _display_applied(applied: dict) -> None:
    if not applied["added"]:
        typer.echo("  Nothing to auto-apply")
        return
    for message in applied["messages"]:
        typer.echo(f"  Applied: {message}")
    typer.echo(f"  Added accessories: {', '.join(applied['added'])}")
