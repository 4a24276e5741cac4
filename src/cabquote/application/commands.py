"""Application commands (use cases) for furniture projects."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from cabquote.domain.services import (
    DEFAULT_TAX_RATE,
    ClientDetails,
    ComboRuleEngine,
    ModuleValidator,
    PricingEngine,
    Quote,
    generate_quote,
)

from .dtos import ModuleReport, ProjectReport

if TYPE_CHECKING:
    from cabquote.contracts import (
        ComboRuleEngineProtocol,
        ModuleValidatorProtocol,
        PricingEngineProtocol,
    )
    from cabquote.domain.catalog import Catalog
    from cabquote.domain.entities import FurnitureModule, Project


class EvaluateProjectCommand:
    """Run every module through validation, combo rules and pricing.

    Each module's cached price is refreshed as a side effect. With
    apply_defaults the rule engine's safe defaults are applied first; the
    reports then describe the updated copies and the project keeps its
    original modules.
    """

    def __init__(
        self,
        validator: ModuleValidatorProtocol | None = None,
        rule_engine: ComboRuleEngineProtocol | None = None,
        pricing_engine: PricingEngineProtocol | None = None,
    ) -> None:
        self.validator = validator or ModuleValidator()
        self.rule_engine = rule_engine or ComboRuleEngine()
        self.pricing_engine = pricing_engine or PricingEngine()

    def execute_module(
        self,
        module: FurnitureModule,
        catalog: Catalog,
        apply_defaults: bool = False,
    ) -> ModuleReport:
        """Evaluate a single module and refresh its cached price.

        With apply_defaults the report describes the updated copy returned by
        the rule engine, whose price is set instead of the input module's.
        """
        applied = None
        if apply_defaults:
            applied = self.rule_engine.apply_defaults(module, catalog)
            module = applied.module

        validation = self.validator.validate(module, catalog)
        rules = self.rule_engine.evaluate(module, catalog)
        price = self.pricing_engine.calculate_module_price(module, catalog)
        module.set_price(price.total)
        return ModuleReport(
            module=module,
            validation=validation,
            rules=rules,
            price=price,
            applied=applied,
        )

    def execute(
        self,
        project: Project,
        catalog: Catalog,
        apply_defaults: bool = False,
    ) -> ProjectReport:
        """Evaluate all modules of a project.

        Args:
            project: Project whose modules are evaluated.
            catalog: Reference data.
            apply_defaults: Apply auto-apply combo rules before evaluating.

        Returns:
            ProjectReport with one ModuleReport per module, in project order.
        """
        return ProjectReport(
            project_id=project.id,
            modules=[
                self.execute_module(m, catalog, apply_defaults) for m in project.modules
            ],
        )


class GenerateQuoteCommand:
    """Command to generate a client quote for a project."""

    def __init__(
        self,
        pricing_engine: PricingEngine | None = None,
        tax_rate: float = DEFAULT_TAX_RATE,
    ) -> None:
        self.pricing_engine = pricing_engine or PricingEngine()
        self.tax_rate = tax_rate

    def execute(
        self,
        project: Project,
        catalog: Catalog,
        client: ClientDetails,
        discount_percent: float = 0.0,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> Quote:
        """Price the project and create a draft quote.

        Raises:
            ValueError: If the discount is outside 0..100.
        """
        for module in project.stale_modules():
            module.refresh_price(self.pricing_engine, catalog)
        return generate_quote(
            project,
            catalog,
            client,
            discount_percent=discount_percent,
            notes=notes,
            now=now,
            engine=self.pricing_engine,
            tax_rate=self.tax_rate,
        )
