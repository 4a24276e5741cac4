"""Quote command for generating client quotes."""

import json
from typing import Annotated

import typer

from cabquote.application import GenerateQuoteCommand
from cabquote.domain.services.pricing import PricingEngine
from cabquote.domain.services.quote import ClientDetails, Quote, format_currency
from cabquote.cli.commands.loading import (
    CatalogOption,
    JsonOption,
    ProjectArgument,
    load_or_exit,
)


def quote_command(
    project_file: ProjectArgument,
    catalog: CatalogOption,
    client: Annotated[
        str,
        typer.Option("--client", help="Client name"),
    ],
    email: Annotated[
        str,
        typer.Option("--email", help="Client email"),
    ] = "",
    phone: Annotated[
        str,
        typer.Option("--phone", help="Client phone number"),
    ] = "",
    discount: Annotated[
        float,
        typer.Option("--discount", help="Discount on the subtotal in percent (0-100)"),
    ] = 0.0,
    notes: Annotated[
        str | None,
        typer.Option("--notes", help="Notes printed on the quote"),
    ] = None,
    json_output: JsonOption = False,
) -> None:
    """Generate a draft quote for a project.

    The quote applies the discount to the subtotal and adds VAT on the
    discounted amount. The VAT rate comes from the project's pricing block,
    19% by default.

    Example:
        cabquote quote kitchen.json --catalog catalog.json --client "Ana Pop" --discount 10
    """
    inputs = load_or_exit(project_file, catalog)
    command = GenerateQuoteCommand(
        pricing_engine=PricingEngine(inputs.rates), tax_rate=inputs.tax_rate
    )

    try:
        quote = command.execute(
            inputs.project,
            inputs.catalog,
            ClientDetails(name=client, email=email, phone=phone),
            discount_percent=discount,
            notes=notes,
        )
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if json_output:
        typer.echo(json.dumps(quote.to_dict(), indent=2))
    else:
        _display_quote(quote)


def _display_quote(quote: Quote) -> None:
    b = quote.breakdown
    typer.echo(f"Quote {quote.id} ({quote.status.value})")
    typer.echo(f"Client: {quote.client_name}")
    if quote.client_email:
        typer.echo(f"Email: {quote.client_email}")
    if quote.client_phone:
        typer.echo(f"Phone: {quote.client_phone}")
    typer.echo(f"Valid until: {quote.valid_until:%Y-%m-%d}")
    typer.echo()

    rows = [
        ("Materials", b.materials_cost),
        ("Accessories", b.accessories_cost),
        ("Processing", b.processing_cost),
        ("Labor", b.labor_cost),
        ("Subtotal", b.subtotal),
    ]
    if b.discount:
        rows.append(("Discount", -b.discount))
    rows.append((f"VAT ({b.tax_rate:g}%)", b.tax_amount))
    rows.append(("Total", b.total_price))
    for label, amount in rows:
        typer.echo(f"  {label:<12} {format_currency(amount):>16}")

    if quote.notes:
        typer.echo()
        typer.echo(f"Notes: {quote.notes}")
