"""CLI command implementations for the cabquote application.

This package contains the commands of the cabquote CLI:
- validate: Check project modules against a catalog
- price: Show module and project cost breakdowns
- rules: Evaluate combo rules and preview auto-applied defaults
- quote: Generate a client quote
"""

from cabquote.cli.commands.price import price_command
from cabquote.cli.commands.quote import quote_command
from cabquote.cli.commands.rules import rules_command
from cabquote.cli.commands.validate import validate_command

__all__ = ["price_command", "quote_command", "rules_command", "validate_command"]
