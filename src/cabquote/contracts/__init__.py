"""Contracts module - protocols shared between layers.

By depending on protocols rather than concrete engines, the application
layer stays loosely coupled and testable.

Example:
    ```python
    from cabquote.contracts import ModuleCheck, PricingEngineProtocol

    def price_all(engine: PricingEngineProtocol, modules, catalog) -> float:
        ...
    ```
"""

# Engine protocols
from .protocols import (
    ComboRuleEngineProtocol as ComboRuleEngineProtocol,
    ModuleValidatorProtocol as ModuleValidatorProtocol,
    PricingEngineProtocol as PricingEngineProtocol,
)

# Check protocol
from .validators import ModuleCheck as ModuleCheck

# All imported names are automatically available for direct import.
