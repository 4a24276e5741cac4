"""Typer CLI for furniture pricing and quoting."""

import logging
from typing import Annotated

import typer

from cabquote.cli.commands import (
    price_command,
    quote_command,
    rules_command,
    validate_command,
)

app = typer.Typer(
    name="cabquote",
    help="Price, validate and quote parametric furniture modules.",
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging"),
    ] = False,
) -> None:
    """Price, validate and quote parametric furniture modules."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


app.command(name="validate")(validate_command)
app.command(name="price")(price_command)
app.command(name="rules")(rules_command)
app.command(name="quote")(quote_command)


if __name__ == "__main__":
    app()
