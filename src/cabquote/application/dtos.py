"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from cabquote.domain.entities import FurnitureModule
from cabquote.domain.services.combo_rules import AppliedDefaults, ComboResult
from cabquote.domain.services.pricing import ModulePrice, PriceBreakdown
from cabquote.domain.services.validation import ModuleValidationResult


@dataclass
class ModuleReport:
    """Pipeline output for one module."""

    module: FurnitureModule
    validation: ModuleValidationResult
    rules: ComboResult
    price: ModulePrice
    applied: AppliedDefaults | None = None

    @property
    def is_valid(self) -> bool:
        """Valid when neither the checks nor the rules reported errors."""
        return self.validation.is_valid and not self.rules.errors

    def to_dict(self) -> dict:
        data = {
            "id": self.module.id,
            "name": self.module.name,
            "type": self.module.type.value,
            "is_valid": self.is_valid,
            "validation": self.validation.to_dict(),
            "rules": self.rules.to_dict(),
            "price": self.price.to_dict(),
        }
        if self.applied is not None:
            data["applied"] = {
                "messages": list(self.applied.messages),
                "added": [a.accessory_item_id for a in self.applied.added],
            }
        return data


@dataclass
class ProjectReport:
    """Pipeline output for a whole project."""

    project_id: str
    modules: list[ModuleReport] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum((m.price.total for m in self.modules), 0.0)

    @property
    def breakdown(self) -> PriceBreakdown:
        total = PriceBreakdown()
        for report in self.modules:
            total = total + report.price.breakdown
        return total

    @property
    def is_valid(self) -> bool:
        return all(m.is_valid for m in self.modules)

    @property
    def has_warnings(self) -> bool:
        return any(m.validation.warnings or m.rules.warnings for m in self.modules)

    @property
    def exit_code(self) -> int:
        """0 when clean, 1 on errors, 2 when only warnings were found."""
        if not self.is_valid:
            return 1
        if self.has_warnings:
            return 2
        return 0

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "is_valid": self.is_valid,
            "modules": [m.to_dict() for m in self.modules],
            "breakdown": self.breakdown.to_dict(),
            "total": self.total,
        }
