"""Unit tests for the application commands and report DTOs."""

from __future__ import annotations

from datetime import datetime

import pytest

from cabquote.application import (
    EvaluateProjectCommand,
    GenerateQuoteCommand,
    ModuleReport,
    ProjectReport,
)
from cabquote.contracts import (
    ComboRuleEngineProtocol,
    ModuleValidatorProtocol,
    PricingEngineProtocol,
)
from cabquote.domain.catalog import Catalog
from cabquote.domain.entities import FurnitureModule, Project
from cabquote.domain.services import (
    ClientDetails,
    ComboRule,
    ComboRuleEngine,
    Fail,
    ModuleValidator,
    PricingEngine,
    PricingRates,
)


@pytest.fixture
def project(base_cabinet: FurnitureModule, drawer_unit: FurnitureModule) -> Project:
    return Project(id="kitchen-1", name="Kitchen", modules=[base_cabinet, drawer_unit])


class TestProtocols:
    """The default engines satisfy the application's protocols."""

    def test_engines_match_protocols(self) -> None:
        """The default engines should satisfy the application protocols."""
        assert isinstance(PricingEngine(), PricingEngineProtocol)
        assert isinstance(ModuleValidator(), ModuleValidatorProtocol)
        assert isinstance(ComboRuleEngine(), ComboRuleEngineProtocol)


class TestEvaluateProjectCommand:
    """Tests for EvaluateProjectCommand."""

    def test_reports_every_module_in_order(self, project: Project, catalog: Catalog) -> None:
        """There should be one report per module, in project order."""
        report = EvaluateProjectCommand().execute(project, catalog)

        assert isinstance(report, ProjectReport)
        assert report.project_id == "kitchen-1"
        assert [m.module.id for m in report.modules] == ["m1", "d1"]
        assert all(isinstance(m, ModuleReport) for m in report.modules)

    def test_refreshes_cached_prices(self, project: Project, catalog: Catalog) -> None:
        """Evaluation should refresh every module's cached price."""
        report = EvaluateProjectCommand().execute(project, catalog)

        assert project.stale_modules() == []
        assert project.total_price == pytest.approx(report.total)
        assert report.total == pytest.approx(
            PricingEngine().calculate_project_price(project.modules, catalog)
        )
        assert report.breakdown.total == pytest.approx(report.total)

    def test_warnings_give_exit_code_two(self, project: Project, catalog: Catalog) -> None:
        """The bare drawer unit has warnings but no errors."""
        report = EvaluateProjectCommand().execute(project, catalog)

        assert report.is_valid
        assert report.has_warnings
        assert report.exit_code == 2
        drawer = report.modules[1]
        assert "slide-basic" in [s.id for s in drawer.rules.suggestions]

    def test_clean_project_exit_code_zero(
        self, base_cabinet: FurnitureModule, catalog: Catalog
    ) -> None:
        """A project of complete cabinets should exit with code 0."""
        report = EvaluateProjectCommand().execute(Project(id="p1", modules=[base_cabinet]), catalog)
        assert report.exit_code == 0

    def test_rule_errors_invalidate_module(self, project: Project, catalog: Catalog) -> None:
        """A rule error should make the module invalid even if validation passed."""
        engine = ComboRuleEngine([ComboRule(id="never", name="Never", consequences=(Fail("No"),))])
        report = EvaluateProjectCommand(rule_engine=engine).execute(project, catalog)

        assert not report.modules[0].is_valid
        assert report.modules[0].validation.is_valid
        assert report.exit_code == 1

    def test_apply_defaults_reports_updated_copies(
        self, project: Project, catalog: Catalog
    ) -> None:
        """With defaults applied, reports should describe the updated copies."""
        report = EvaluateProjectCommand().execute(project, catalog, apply_defaults=True)
        drawer = report.modules[1]

        assert drawer.applied is not None
        assert [a.accessory_item_id for a in drawer.applied.added] == ["slide-basic", "push-tip"]
        assert drawer.module is not project.modules[1]
        assert project.modules[1].accessories == ()
        assert drawer.validation.warnings == []
        assert drawer.price.breakdown.accessories == pytest.approx(34.0)

    def test_custom_pricing_engine(self, project: Project, catalog: Catalog) -> None:
        """An injected pricing engine should be used for every module."""
        engine = PricingEngine(PricingRates(labor_rate_per_cubic_meter=0))
        report = EvaluateProjectCommand(pricing_engine=engine).execute(project, catalog)
        assert report.breakdown.labor == 0

    def test_to_dict(self, project: Project, catalog: Catalog) -> None:
        """The report dictionary should include modules, validity and breakdown."""
        data = EvaluateProjectCommand().execute(project, catalog, apply_defaults=True).to_dict()

        assert data["project_id"] == "kitchen-1"
        assert data["is_valid"] is True
        assert [m["id"] for m in data["modules"]] == ["m1", "d1"]
        assert data["modules"][1]["applied"]["added"] == ["slide-basic", "push-tip"]
        assert set(data["breakdown"]) == {"materials", "accessories", "processing", "labor"}

    def test_empty_project(self, catalog: Catalog) -> None:
        """An empty project should total zero and exit with code 0."""
        report = EvaluateProjectCommand().execute(Project(id="empty"), catalog)
        assert report.total == 0
        assert report.exit_code == 0


class TestGenerateQuoteCommand:
    """Tests for GenerateQuoteCommand."""

    def test_quote_matches_project_price(self, project: Project, catalog: Catalog) -> None:
        """The quote subtotal should match the refreshed project total."""
        quote = GenerateQuoteCommand().execute(
            project,
            catalog,
            ClientDetails(name="Ana Pop"),
            discount_percent=10,
            now=datetime(2024, 3, 1),
        )

        assert project.stale_modules() == []
        b = quote.breakdown
        assert b.subtotal == pytest.approx(project.total_price)
        assert b.discount == pytest.approx(b.subtotal * 0.1)
        assert b.tax_amount == pytest.approx((b.subtotal - b.discount) * 0.19)
        assert quote.id.startswith("Q-kitc-")

    def test_tax_rate(self, project: Project, catalog: Catalog) -> None:
        """A zero tax rate should make the total equal the subtotal."""
        quote = GenerateQuoteCommand(tax_rate=0).execute(
            project, catalog, ClientDetails(name="Ana Pop")
        )
        assert quote.breakdown.total_price == pytest.approx(quote.breakdown.subtotal)

    def test_invalid_discount(self, project: Project, catalog: Catalog) -> None:
        """A discount above 100 should raise ValueError."""
        with pytest.raises(ValueError):
            GenerateQuoteCommand().execute(
                project, catalog, ClientDetails(name="Ana Pop"), discount_percent=150
            )
