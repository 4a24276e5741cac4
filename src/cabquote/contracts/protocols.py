"""Engine protocols for dependency injection.

The application layer depends on these protocols rather than on the
concrete engines, so a pipeline can be run with custom rates, checks or
rule sets, or with test doubles.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cabquote.domain.catalog import Catalog
    from cabquote.domain.entities import FurnitureModule
    from cabquote.domain.services.combo_rules import AppliedDefaults, ComboResult
    from cabquote.domain.services.pricing import ModulePrice, PriceBreakdown
    from cabquote.domain.services.validation import ModuleValidationResult


@runtime_checkable
class PricingEngineProtocol(Protocol):
    """Protocol for module and project pricing.

    Example:
        ```python
        class FlatRateEngine:
            def calculate_module_price(self, module, catalog) -> ModulePrice:
                breakdown = PriceBreakdown(labor=100.0)
                return ModulePrice(total=breakdown.total, breakdown=breakdown)
            ...
        ```
    """

    def calculate_module_price(
        self, module: FurnitureModule, catalog: Catalog
    ) -> ModulePrice:
        """Price a single module.

        Args:
            module: The module to price.
            catalog: Reference data to resolve material and accessory ids.

        Returns:
            ModulePrice with total and per-category breakdown.
        """
        ...

    def calculate_project_breakdown(
        self, modules: Iterable[FurnitureModule], catalog: Catalog
    ) -> PriceBreakdown:
        """Sum the category breakdowns of several modules."""
        ...


@runtime_checkable
class ModuleValidatorProtocol(Protocol):
    """Protocol for module validation."""

    def validate(
        self, module: FurnitureModule, catalog: Catalog
    ) -> ModuleValidationResult:
        """Run checks against a module.

        Returns:
            ModuleValidationResult with errors, warnings and suggestions.
        """
        ...


@runtime_checkable
class ComboRuleEngineProtocol(Protocol):
    """Protocol for combo rule evaluation."""

    def evaluate(self, module: FurnitureModule, catalog: Catalog) -> ComboResult:
        """Evaluate rules against a module without changing it."""
        ...

    def apply_defaults(
        self, module: FurnitureModule, catalog: Catalog
    ) -> AppliedDefaults:
        """Return an updated copy of the module with safe defaults applied."""
        ...
