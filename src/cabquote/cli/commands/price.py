"""Price command for module and project cost breakdowns."""

import json

import typer

from cabquote.domain.services.pricing import PriceBreakdown, PricingEngine
from cabquote.domain.services.quote import format_currency
from cabquote.cli.commands.loading import (
    CatalogOption,
    JsonOption,
    ProjectArgument,
    load_or_exit,
)


def price_command(
    project_file: ProjectArgument,
    catalog: CatalogOption,
    json_output: JsonOption = False,
) -> None:
    """Show the cost breakdown of every module and the project total.

    Example:
        cabquote price kitchen.json --catalog catalog.json
        cabquote price kitchen.json --catalog catalog.json --json
    """
    inputs = load_or_exit(project_file, catalog)
    engine = PricingEngine(inputs.rates)

    modules = []
    totals = PriceBreakdown()
    for module in inputs.project.modules:
        price = module.refresh_price(engine, inputs.catalog)
        totals = totals + price.breakdown
        modules.append((module, price))

    if json_output:
        output = {
            "project_id": inputs.project.id,
            "modules": [
                {"id": module.id, "name": module.name, **price.to_dict()}
                for module, price in modules
            ],
            "breakdown": totals.to_dict(),
            "total": inputs.project.total_price,
        }
        typer.echo(json.dumps(output, indent=2))
        return

    for module, price in modules:
        typer.echo(f"{module.id} ({module.name}): {format_currency(price.total)}")
        for category, amount in price.breakdown.to_dict().items():
            typer.echo(f"  {category:<12} {format_currency(amount)}")
    typer.echo()
    typer.echo(f"Project total: {format_currency(inputs.project.total_price)}")
