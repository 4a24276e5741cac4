"""Domain services for furniture configuration.

This package provides the engines that work on furniture modules:
- Geometry derivations (edge length, part area, volume)
- Pricing of modules and projects
- Validation of module configurations
- Combo rules: suggestions, blocked options and auto-applied defaults
- Quote generation with discount and VAT
"""

from .combo_rules import (
    AccessoryAbsent,
    AccessorySelector,
    AppliedDefaults,
    ComboResult,
    ComboRule,
    ComboRuleEngine,
    ComparisonOperator,
    Condition,
    ConditionKind,
    Dimension,
    DimensionCompare,
    Fail,
    MaterialSelector,
    MaterialTypePresent,
    ModuleTypeIs,
    PartPresent,
    Predicate,
    PredicateName,
    ProcessingSelector,
    RuleContext,
    RuleSet,
    Suggest,
    Suggestion,
    Warn,
    default_rule_set,
    evaluate_condition,
)
from .geometry import (
    EDGE_BANDED_PARTS,
    edge_length_m,
    mm_to_m,
    module_volume_m3,
    part_area_sqm,
)
from .pricing import (
    DEFAULT_PROCESSING_PRICES,
    DEFAULT_RATES,
    EDGE_BANDING_PRICE_PER_ML,
    ModulePrice,
    PriceBreakdown,
    PricingEngine,
    PricingRates,
    calculate_module_price,
    calculate_project_price,
)
from .quote import (
    DEFAULT_TAX_RATE,
    DEFAULT_VALIDITY_DAYS,
    ClientDetails,
    Quote,
    QuoteBreakdown,
    QuoteStatus,
    calculate_quote_breakdown,
    format_currency,
    generate_quote,
)
from .validation import (
    AccessoryCompatibilityCheck,
    AccessorySuggestionCheck,
    AvailabilityCheck,
    EdgeBandingCheck,
    ModuleValidationResult,
    ModuleValidator,
    PaintabilityCheck,
    ProcessingCompatibilityCheck,
    ReferenceCheck,
    RequiredAccessoriesCheck,
    default_checks,
    validate_module,
)

__all__ = [
    # Combo rules
    "AccessoryAbsent",
    "AccessorySelector",
    "AppliedDefaults",
    "ComboResult",
    "ComboRule",
    "ComboRuleEngine",
    "ComparisonOperator",
    "Condition",
    "ConditionKind",
    "Dimension",
    "DimensionCompare",
    "Fail",
    "MaterialSelector",
    "MaterialTypePresent",
    "ModuleTypeIs",
    "PartPresent",
    "Predicate",
    "PredicateName",
    "ProcessingSelector",
    "RuleContext",
    "RuleSet",
    "Suggest",
    "Suggestion",
    "Warn",
    "default_rule_set",
    "evaluate_condition",
    # Geometry
    "EDGE_BANDED_PARTS",
    "edge_length_m",
    "mm_to_m",
    "module_volume_m3",
    "part_area_sqm",
    # Pricing
    "DEFAULT_PROCESSING_PRICES",
    "DEFAULT_RATES",
    "EDGE_BANDING_PRICE_PER_ML",
    "ModulePrice",
    "PriceBreakdown",
    "PricingEngine",
    "PricingRates",
    "calculate_module_price",
    "calculate_project_price",
    # Quote
    "DEFAULT_TAX_RATE",
    "DEFAULT_VALIDITY_DAYS",
    "ClientDetails",
    "Quote",
    "QuoteBreakdown",
    "QuoteStatus",
    "calculate_quote_breakdown",
    "format_currency",
    "generate_quote",
    # Validation
    "AccessoryCompatibilityCheck",
    "AccessorySuggestionCheck",
    "AvailabilityCheck",
    "EdgeBandingCheck",
    "ModuleValidationResult",
    "ModuleValidator",
    "PaintabilityCheck",
    "ProcessingCompatibilityCheck",
    "ReferenceCheck",
    "RequiredAccessoriesCheck",
    "default_checks",
    "validate_module",
]
