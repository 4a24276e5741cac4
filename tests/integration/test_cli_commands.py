"""Integration tests for the cabquote CLI.

These tests verify the commands work end-to-end from JSON files:
- validate reports per-module findings with exit codes 0, 1 and 2
- price prints module and project totals, as text or JSON
- rules prints suggestions and blocked options, and auto-apply previews
- quote prints a discounted, taxed quote
- configuration errors exit with code 1
"""

import json
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from cabquote.cli.main import app

# Get path to test fixtures
FIXTURES_PATH = Path(__file__).parent.parent / "fixtures"
CATALOG = str(FIXTURES_PATH / "catalog.json")


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


def _project(name: str) -> str:
    return str(FIXTURES_PATH / name)


@pytest.fixture
def thousand_files(tmp_path: Path) -> tuple[str, str]:
    """A catalog and a labor-free project whose subtotal is exactly 1000."""
    catalog: dict[str, Any] = {
        "accessories": [
            {"id": "lift", "name": "Aventos Lift", "type": "other", "price": 1000}
        ]
    }
    project: dict[str, Any] = {
        "schema_version": "1.1",
        "id": "kitchen-1",
        "modules": [
            {
                "id": "m1",
                "name": "Lift unit",
                "type": "other",
                "width": 600,
                "height": 400,
                "depth": 300,
                "accessories": [{"accessory_item_id": "lift", "type": "other"}],
            }
        ],
        "pricing": {"labor_rate_per_cubic_meter": 0},
    }
    catalog_path = tmp_path / "catalog.json"
    project_path = tmp_path / "project.json"
    catalog_path.write_text(json.dumps(catalog))
    project_path.write_text(json.dumps(project))
    return str(project_path), str(catalog_path)


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_project(self, runner: CliRunner) -> None:
        """A valid project should pass with exit code 0."""
        result = runner.invoke(
            app, ["validate", _project("project_valid.json"), "--catalog", CATALOG]
        )

        assert result.exit_code == 0
        assert "Module base-60 (Base 60):" in result.output
        assert "Module wall-60 (Wall 60):" in result.output
        assert "Validation passed. Project is valid." in result.output

    def test_project_with_warnings(self, runner: CliRunner) -> None:
        """Warnings and suggestions should be shown with exit code 2."""
        result = runner.invoke(
            app, ["validate", _project("project_warnings.json"), "-c", CATALOG]
        )

        assert result.exit_code == 2
        assert "Drawer units require slides" in result.output
        assert "No handles found" in result.output
        assert "soft-close" in result.output
        assert "Validation passed with 2 warning(s)" in result.output

    def test_project_with_errors(self, runner: CliRunner) -> None:
        """Errors should be listed with exit code 1."""
        result = runner.invoke(
            app, ["validate", _project("project_errors.json"), "-c", CATALOG]
        )

        assert result.exit_code == 1
        assert "Accessory ghost-handle not found" in result.output
        assert "PAL White (PAL) cannot be painted" in result.output
        assert "Validation failed: 3 error(s), 0 warning(s)" in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        """A missing project file should exit with code 1."""
        result = runner.invoke(
            app, ["validate", _project("nonexistent.json"), "-c", CATALOG]
        )

        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "File not found" in result.output

    def test_catalog_not_found(self, runner: CliRunner) -> None:
        """A missing catalog file should be named in the error."""
        result = runner.invoke(
            app,
            ["validate", _project("project_valid.json"), "-c", _project("missing.json")],
        )
        assert result.exit_code == 1
        assert "missing.json" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner) -> None:
        """Malformed JSON should report the line number."""
        result = runner.invoke(
            app, ["validate", _project("invalid_json.json"), "-c", CATALOG]
        )

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Line 4" in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        """An unknown field should be reported by its JSON path."""
        result = runner.invoke(
            app, ["validate", _project("unknown_field.json"), "-c", CATALOG]
        )

        assert result.exit_code == 1
        assert "modules[0].color" in result.output

    def test_catalog_is_required(self, runner: CliRunner) -> None:
        """The catalog option should be mandatory."""
        result = runner.invoke(app, ["validate", _project("project_valid.json")])
        assert result.exit_code != 0


class TestPriceCommand:
    """Tests for the price command."""

    def test_text_output(self, runner: CliRunner) -> None:
        """Text output should list each module and the project total."""
        result = runner.invoke(
            app, ["price", _project("project_valid.json"), "-c", CATALOG]
        )

        assert result.exit_code == 0
        assert "base-60 (Base 60):" in result.output
        assert "Project total:" in result.output
        assert "RON" in result.output

    def test_json_output(self, runner: CliRunner) -> None:
        """JSON output should total the modules and the breakdown."""
        result = runner.invoke(
            app, ["price", _project("project_valid.json"), "-c", CATALOG, "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["project_id"] == "kitchen-1"
        assert [m["id"] for m in data["modules"]] == ["base-60", "wall-60"]
        assert data["total"] == pytest.approx(sum(m["total"] for m in data["modules"]))
        assert data["total"] == pytest.approx(sum(data["breakdown"].values()))

    def test_project_pricing_overrides(
        self, runner: CliRunner, thousand_files: tuple[str, str]
    ) -> None:
        """The project's pricing block should override the labor rate."""
        project, catalog = thousand_files
        result = runner.invoke(app, ["price", project, "-c", catalog, "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["breakdown"]["labor"] == 0
        assert data["total"] == pytest.approx(1000)

    def test_verbose_flag(self, runner: CliRunner) -> None:
        """The verbose flag should not change the exit code."""
        result = runner.invoke(
            app, ["--verbose", "price", _project("project_valid.json"), "-c", CATALOG]
        )
        assert result.exit_code == 0


class TestRulesCommand:
    """Tests for the rules command."""

    def test_suggestions_and_blocked_options(self, runner: CliRunner) -> None:
        """Suggestions and blocked options should be printed per module."""
        result = runner.invoke(
            app, ["rules", _project("project_warnings.json"), "-c", CATALOG]
        )

        assert result.exit_code == 0
        assert "Suggest accessory Ball Bearing Slide [slide-basic]" in result.output
        assert "[push-tip]" in result.output
        assert "Blocked: painting" in result.output

    def test_apply_preview(self, runner: CliRunner) -> None:
        """The apply flag should preview the added accessories."""
        result = runner.invoke(
            app, ["rules", _project("project_warnings.json"), "-c", CATALOG, "--apply"]
        )

        assert result.exit_code == 0
        assert "Applied: Slides have been added to your drawer unit." in result.output
        assert "Added accessories: slide-basic, push-tip" in result.output

    def test_apply_does_not_modify_file(self, runner: CliRunner) -> None:
        """The apply preview should leave the project file untouched."""
        path = FIXTURES_PATH / "project_warnings.json"
        before = path.read_text()
        runner.invoke(app, ["rules", str(path), "-c", CATALOG, "--apply"])
        assert path.read_text() == before

    def test_nothing_to_apply(self, runner: CliRunner) -> None:
        """A complete project should report nothing to apply."""
        result = runner.invoke(
            app, ["rules", _project("project_valid.json"), "-c", CATALOG, "--apply"]
        )

        assert result.exit_code == 0
        assert "Nothing to auto-apply" in result.output

    def test_painting_warning(self, runner: CliRunner) -> None:
        """Painting non-MDF material should be reported as a rule warning."""
        result = runner.invoke(
            app, ["rules", _project("project_errors.json"), "-c", CATALOG]
        )

        assert result.exit_code == 0
        assert "Warning: Painting can only be applied to MDF materials" in result.output

    def test_json_output(self, runner: CliRunner) -> None:
        """JSON output should include suggestions, blocks and applied changes."""
        result = runner.invoke(
            app,
            ["rules", _project("project_warnings.json"), "-c", CATALOG, "--apply", "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        module = data["modules"][0]
        assert module["id"] == "drawers-60"
        assert [s["id"] for s in module["suggestions"]] == ["slide-basic", "push-tip"]
        assert module["blocked_options"] == ["painting"]
        assert module["applied"]["added"] == ["slide-basic", "push-tip"]


class TestQuoteCommand:
    """Tests for the quote command."""

    def test_discounted_quote(
        self, runner: CliRunner, thousand_files: tuple[str, str]
    ) -> None:
        """The quote should show discount, VAT and total in RON."""
        project, catalog = thousand_files
        result = runner.invoke(
            app,
            [
                "quote",
                project,
                "-c",
                catalog,
                "--client",
                "Ana Pop",
                "--discount",
                "10",
                "--notes",
                "Delivery in May",
            ],
        )

        assert result.exit_code == 0
        assert "Quote Q-kitc-" in result.output
        assert "(draft)" in result.output
        assert "Client: Ana Pop" in result.output
        assert "1.000,00 RON" in result.output
        assert "-100,00 RON" in result.output
        assert "VAT (19%)" in result.output
        assert "171,00 RON" in result.output
        assert "1.071,00 RON" in result.output
        assert "Notes: Delivery in May" in result.output

    def test_json_output(
        self, runner: CliRunner, thousand_files: tuple[str, str]
    ) -> None:
        """JSON output should hold the draft quote and its totals."""
        project, catalog = thousand_files
        result = runner.invoke(
            app,
            ["quote", project, "-c", catalog, "--client", "Ana Pop", "--json"],
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status"] == "draft"
        assert data["project_id"] == "kitchen-1"
        assert data["breakdown"]["total_price"] == pytest.approx(1190)

    def test_invalid_discount(
        self, runner: CliRunner, thousand_files: tuple[str, str]
    ) -> None:
        """A discount above 100 should exit with code 1."""
        project, catalog = thousand_files
        result = runner.invoke(
            app,
            ["quote", project, "-c", catalog, "--client", "Ana Pop", "--discount", "120"],
        )

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_blank_client_name(
        self, runner: CliRunner, thousand_files: tuple[str, str]
    ) -> None:
        """A blank client name should exit with code 1."""
        project, catalog = thousand_files
        result = runner.invoke(app, ["quote", project, "-c", catalog, "--client", " "])

        assert result.exit_code == 1
        assert "Client name" in result.output

    def test_client_is_required(self, runner: CliRunner) -> None:
        """The client option should be mandatory."""
        result = runner.invoke(
            app, ["quote", _project("project_valid.json"), "-c", CATALOG]
        )
        assert result.exit_code != 0
