"""Combo rule engine.

A combo rule maps a set of conditions on a module's configuration to
consequences: suggestions resolved against the catalog, warnings, errors
and blocked configuration options.

Conditions form a closed family of frozen dataclasses, each tagged with a
ConditionKind. evaluate_condition() is the single dispatcher; a rule's
conditions are AND-ed, and a rule without conditions always fires.

Rules are evaluated independently in declaration order. Every rule that
fires contributes to the combined result; there is no short-circuiting.
The engine never changes the module it is given. apply_defaults() works on
a copy and returns it.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar, Iterable, Iterator, Union

from ..value_objects import (
    AccessoryItem,
    AccessoryType,
    Material,
    MaterialType,
    ModuleAccessory,
    ModulePart,
    ModuleType,
    ProcessingType,
)

if TYPE_CHECKING:
    from ..catalog import Catalog
    from ..entities import FurnitureModule

logger = logging.getLogger(__name__)

__all__ = [
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
]


# --- Conditions ---


class ConditionKind(str, Enum):
    """Tags for the condition variants."""

    MODULE_TYPE = "module_type"
    DIMENSION = "dimension"
    MATERIAL_TYPE = "material_type"
    ACCESSORY_ABSENT = "accessory_absent"
    PART_PRESENT = "part_present"
    PREDICATE = "predicate"


class Dimension(str, Enum):
    WIDTH = "width"
    HEIGHT = "height"
    DEPTH = "depth"


class ComparisonOperator(str, Enum):
    EQ = "="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="


_COMPARATORS: dict[ComparisonOperator, Callable[[float, float], bool]] = {
    ComparisonOperator.EQ: lambda a, b: a == b,
    ComparisonOperator.LT: lambda a, b: a < b,
    ComparisonOperator.GT: lambda a, b: a > b,
    ComparisonOperator.LE: lambda a, b: a <= b,
    ComparisonOperator.GE: lambda a, b: a >= b,
}


class PredicateName(str, Enum):
    """Named custom predicates over a module and its resolved references.

    Attributes:
        NO_HANDLE: The module has no handle accessory.
        NO_SLIDE: The module has no slide accessory.
        HAS_DRAWER: The module is a drawer unit or has a drawer front.
        HAS_DOOR: The module has a door part.
        HAS_FRONTS: The module type has opening fronts.
        GLASS_DOOR: A door part uses a GLASS material.
        DOOR_WITHOUT_HINGE: A door part is present but no hinge accessory.
        SHELF_WITHOUT_SUPPORT: A shelf part is present but no shelf support.
        NON_MDF_PAINTED: A painting operation targets a material that is not MDF.
    """

    NO_HANDLE = "no_handle"
    NO_SLIDE = "no_slide"
    HAS_DRAWER = "has_drawer"
    HAS_DOOR = "has_door"
    HAS_FRONTS = "has_fronts"
    GLASS_DOOR = "glass_door"
    DOOR_WITHOUT_HINGE = "door_without_hinge"
    SHELF_WITHOUT_SUPPORT = "shelf_without_support"
    NON_MDF_PAINTED = "non_mdf_painted"


@dataclass(frozen=True)
class ModuleTypeIs:
    """The module is of the given type."""

    module_type: ModuleType
    kind: ClassVar[ConditionKind] = ConditionKind.MODULE_TYPE


@dataclass(frozen=True)
class DimensionCompare:
    """A module dimension (mm) compared against a constant."""

    dimension: Dimension
    operator: ComparisonOperator
    value: float
    kind: ClassVar[ConditionKind] = ConditionKind.DIMENSION


@dataclass(frozen=True)
class MaterialTypePresent:
    """At least one module material resolves to the given type."""

    material_type: MaterialType
    kind: ClassVar[ConditionKind] = ConditionKind.MATERIAL_TYPE


@dataclass(frozen=True)
class AccessoryAbsent:
    """The module has no accessory of the given type."""

    accessory_type: AccessoryType
    kind: ClassVar[ConditionKind] = ConditionKind.ACCESSORY_ABSENT


@dataclass(frozen=True)
class PartPresent:
    """The module has a material assigned to the given part."""

    part: ModulePart
    kind: ClassVar[ConditionKind] = ConditionKind.PART_PRESENT


@dataclass(frozen=True)
class Predicate:
    """A named custom predicate."""

    name: PredicateName
    kind: ClassVar[ConditionKind] = ConditionKind.PREDICATE


Condition = Union[
    ModuleTypeIs,
    DimensionCompare,
    MaterialTypePresent,
    AccessoryAbsent,
    PartPresent,
    Predicate,
]


class RuleContext:
    """A module together with the catalog its references resolve against."""

    def __init__(self, module: FurnitureModule, catalog: Catalog) -> None:
        self.module = module
        self.catalog = catalog
        self._accessory_types: set[AccessoryType] | None = None

    @property
    def accessory_types(self) -> set[AccessoryType]:
        """Accessory types on the module, preferring the catalog item's type."""
        if self._accessory_types is None:
            types: set[AccessoryType] = set()
            for accessory in self.module.accessories:
                item = self.catalog.find_accessory(accessory.accessory_item_id)
                types.add(item.type if item is not None else accessory.type)
            self._accessory_types = types
        return self._accessory_types

    def materials_for_part(self, part: ModulePart) -> list[Material]:
        """Resolved materials assigned to a part; unknown ids are skipped."""
        found = []
        for module_material in self.module.materials_for_part(part):
            material = self.catalog.find_material(module_material.material_id)
            if material is not None:
                found.append(material)
        return found

    def resolved_materials(self) -> list[Material]:
        """All resolved materials of the module, in assignment order."""
        found = []
        for module_material in self.module.materials:
            material = self.catalog.find_material(module_material.material_id)
            if material is not None:
                found.append(material)
        return found


def _non_mdf_painted(context: RuleContext) -> bool:
    for processing in context.module.processing_options:
        if processing.type is not ProcessingType.PAINTING:
            continue
        material = context.catalog.find_material(processing.material_id)
        if material is not None and material.type is not MaterialType.MDF:
            return True
    return False


_PREDICATES: dict[PredicateName, Callable[[RuleContext], bool]] = {
    PredicateName.NO_HANDLE: lambda ctx: AccessoryType.HANDLE not in ctx.accessory_types,
    PredicateName.NO_SLIDE: lambda ctx: AccessoryType.SLIDE not in ctx.accessory_types,
    PredicateName.HAS_DRAWER: lambda ctx: (
        ctx.module.type is ModuleType.DRAWER_UNIT
        or ctx.module.has_part(ModulePart.DRAWER_FRONT)
    ),
    PredicateName.HAS_DOOR: lambda ctx: ctx.module.has_part(ModulePart.DOOR),
    PredicateName.HAS_FRONTS: lambda ctx: ctx.module.type.has_fronts,
    PredicateName.GLASS_DOOR: lambda ctx: any(
        m.type is MaterialType.GLASS for m in ctx.materials_for_part(ModulePart.DOOR)
    ),
    PredicateName.DOOR_WITHOUT_HINGE: lambda ctx: (
        ctx.module.has_part(ModulePart.DOOR)
        and AccessoryType.HINGE not in ctx.accessory_types
    ),
    PredicateName.SHELF_WITHOUT_SUPPORT: lambda ctx: (
        ctx.module.has_part(ModulePart.SHELF)
        and AccessoryType.SHELF_SUPPORT not in ctx.accessory_types
    ),
    PredicateName.NON_MDF_PAINTED: _non_mdf_painted,
}


def _dimension_holds(condition: DimensionCompare, context: RuleContext) -> bool:
    actual = getattr(context.module, condition.dimension.value)
    return _COMPARATORS[condition.operator](actual, condition.value)


_EVALUATORS: dict[ConditionKind, Callable[..., bool]] = {
    ConditionKind.MODULE_TYPE: lambda c, ctx: ctx.module.type is c.module_type,
    ConditionKind.DIMENSION: _dimension_holds,
    ConditionKind.MATERIAL_TYPE: lambda c, ctx: any(
        m.type is c.material_type for m in ctx.resolved_materials()
    ),
    ConditionKind.ACCESSORY_ABSENT: lambda c, ctx: c.accessory_type not in ctx.accessory_types,
    ConditionKind.PART_PRESENT: lambda c, ctx: ctx.module.has_part(c.part),
    ConditionKind.PREDICATE: lambda c, ctx: _PREDICATES[c.name](ctx),
}


def evaluate_condition(condition: Condition, context: RuleContext) -> bool:
    """Evaluate any condition variant against a module context."""
    return _EVALUATORS[condition.kind](condition, context)


# --- Consequences ---


@dataclass(frozen=True)
class AccessorySelector:
    """Selects catalog accessories by type, optionally manufacturer and code."""

    type: AccessoryType
    manufacturer: str | None = None
    code: str | None = None

    def matches(self, item: AccessoryItem) -> bool:
        """Check if a catalog accessory satisfies every set criterion."""
        if item.type is not self.type:
            return False
        if self.manufacturer and item.manufacturer != self.manufacturer:
            return False
        if self.code and item.code != self.code:
            return False
        return True


@dataclass(frozen=True)
class MaterialSelector:
    """Selects catalog materials by type, optionally manufacturer and code."""

    type: MaterialType
    manufacturer: str | None = None
    code: str | None = None

    def matches(self, material: Material) -> bool:
        """Check if a catalog material satisfies every set criterion."""
        if material.type is not self.type:
            return False
        if self.manufacturer and material.manufacturer != self.manufacturer:
            return False
        if self.code and material.code != self.code:
            return False
        return True


@dataclass(frozen=True)
class ProcessingSelector:
    """Proposes a processing operation."""

    type: ProcessingType


Selector = Union[AccessorySelector, MaterialSelector, ProcessingSelector]


@dataclass(frozen=True)
class Suggest:
    """Propose the first catalog entry matching a selector."""

    selector: Selector


@dataclass(frozen=True)
class Warn:
    """Report an advisory message."""

    message: str


@dataclass(frozen=True)
class Fail:
    """Report a blocking error."""

    message: str


Consequence = Union[Suggest, Warn, Fail]


@dataclass(frozen=True)
class ComboRule:
    """A declarative condition -> consequence mapping.

    Attributes:
        id: Rule identifier, unique within a RuleSet.
        name: Short display name.
        description: Explanation, used as the reason of its suggestions.
        conditions: Conditions that must all hold.
        consequences: What the rule produces when it fires.
        blocks: Option identifiers to disable while the rule fires.
        message: Message reported by apply_defaults() when the rule acts.
        auto_apply: Whether apply_defaults() may add the suggested accessory.
        priority: Order for apply_defaults(); lower runs first.
        enabled: Disabled rules are skipped.
    """

    id: str
    name: str
    description: str = ""
    conditions: tuple[Condition, ...] = ()
    consequences: tuple[Consequence, ...] = ()
    blocks: frozenset[str] = field(default_factory=frozenset)
    message: str | None = None
    auto_apply: bool = False
    priority: int = 1
    enabled: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "conditions", tuple(self.conditions))
        object.__setattr__(self, "consequences", tuple(self.consequences))
        object.__setattr__(self, "blocks", frozenset(self.blocks))

    def applies_to(self, context: RuleContext) -> bool:
        """Check if every condition holds; a rule without conditions always applies."""
        return all(evaluate_condition(c, context) for c in self.conditions)


# --- Results ---


@dataclass(frozen=True)
class Suggestion:
    """A proposed change for the caller to accept or ignore.

    Attributes:
        type: "accessory", "material" or "processing".
        id: Catalog id of the proposed item, or the processing type value.
        name: Display name.
        reason: Why the rule proposed it.
    """

    type: str
    id: str
    name: str
    reason: str

    def to_dict(self) -> dict[str, str]:
        """Convert to a JSON-serializable dictionary."""
        return {"type": self.type, "id": self.id, "name": self.name, "reason": self.reason}


@dataclass
class ComboResult:
    """Combined outcome of all rules that fired."""

    suggestions: list[Suggestion] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    blocked_options: list[str] = field(default_factory=list)

    def block(self, option: str) -> None:
        """Record a blocked option once."""
        if option not in self.blocked_options:
            self.blocked_options.append(option)

    def to_dict(self) -> dict:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "blocked_options": list(self.blocked_options),
        }


@dataclass
class AppliedDefaults:
    """Outcome of apply_defaults().

    Attributes:
        module: The updated copy of the module.
        messages: Messages of the rules that acted.
        blocked_options: Options blocked for the updated module.
        added: Accessories that were added.
    """

    module: FurnitureModule
    messages: list[str] = field(default_factory=list)
    blocked_options: list[str] = field(default_factory=list)
    added: list[ModuleAccessory] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        """Check if any accessory was added."""
        return bool(self.added)


# --- Rule management ---


class RuleSet:
    """Ordered, instance-owned collection of combo rules."""

    def __init__(self, rules: Iterable[ComboRule] = ()) -> None:
        self._rules: list[ComboRule] = []
        for rule in rules:
            self.add(rule)

    def __iter__(self) -> Iterator[ComboRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return any(r.id == rule_id for r in self._rules)

    def _next_id(self) -> str:
        n = len(self._rules) + 1
        while f"rule-{n}" in self:
            n += 1
        return f"rule-{n}"

    def add(self, rule: ComboRule) -> ComboRule:
        """Append a rule, generating an id if it has none.

        Raises:
            ValueError: If a rule with the same id already exists.
        """
        if not rule.id:
            rule = dataclasses.replace(rule, id=self._next_id())
        if rule.id in self:
            raise ValueError(f"Rule '{rule.id}' already exists")
        self._rules.append(rule)
        return rule

    def get(self, rule_id: str) -> ComboRule:
        """Get a rule by id.

        Raises:
            KeyError: If the rule does not exist.
        """
        for rule in self._rules:
            if rule.id == rule_id:
                return rule
        raise KeyError(f"Unknown rule: {rule_id}")

    def update(self, rule_id: str, **changes: object) -> ComboRule:
        """Replace fields of a rule in place, keeping its position.

        Raises:
            KeyError: If the rule does not exist.
            ValueError: If the changes would rename the rule.
        """
        if "id" in changes and changes["id"] != rule_id:
            raise ValueError("Rule ids cannot be changed")
        rule = self.get(rule_id)
        updated = dataclasses.replace(rule, **changes)
        self._rules[self._rules.index(rule)] = updated
        return updated

    def remove(self, rule_id: str) -> bool:
        """Remove a rule by id.

        Returns:
            False if the rule does not exist.
        """
        for index, rule in enumerate(self._rules):
            if rule.id == rule_id:
                del self._rules[index]
                return True
        return False

    def toggle(self, rule_id: str) -> bool:
        """Flip a rule's enabled flag.

        Returns:
            False if the rule does not exist.
        """
        if rule_id not in self:
            return False
        rule = self.get(rule_id)
        self.update(rule_id, enabled=not rule.enabled)
        return True

    def enabled_rules(self) -> list[ComboRule]:
        """Enabled rules in declaration order."""
        return [r for r in self._rules if r.enabled]


def default_rule_set() -> RuleSet:
    """The standard furniture combo rules."""
    return RuleSet(
        [
            ComboRule(
                id="drawer-slides",
                name="Drawer Slides",
                description="Drawer units need slides",
                conditions=(
                    ModuleTypeIs(ModuleType.DRAWER_UNIT),
                    Predicate(PredicateName.NO_SLIDE),
                ),
                consequences=(Suggest(AccessorySelector(AccessoryType.SLIDE)),),
                message="Slides have been added to your drawer unit.",
                auto_apply=True,
            ),
            ComboRule(
                id="push-system",
                name="Push System for Handleless",
                description="Add a push system when no handles are selected",
                conditions=(
                    Predicate(PredicateName.HAS_FRONTS),
                    Predicate(PredicateName.NO_HANDLE),
                    AccessoryAbsent(AccessoryType.PUSH_SYSTEM),
                ),
                consequences=(Suggest(AccessorySelector(AccessoryType.PUSH_SYSTEM)),),
                message="A push system has been added to your handleless fronts.",
                auto_apply=True,
            ),
            ComboRule(
                id="base-cabinet-feet",
                name="Base Cabinet Feet",
                description="Add adjustable feet to base cabinets",
                conditions=(
                    ModuleTypeIs(ModuleType.BASE_CABINET),
                    AccessoryAbsent(AccessoryType.FOOT),
                ),
                consequences=(Suggest(AccessorySelector(AccessoryType.FOOT)),),
                message="Adjustable feet have been added to your base cabinet.",
                auto_apply=True,
                priority=2,
            ),
            ComboRule(
                id="tall-cabinet-feet",
                name="Tall Cabinet Feet",
                description="Tall cabinets stand on adjustable feet",
                conditions=(
                    ModuleTypeIs(ModuleType.TALL_CABINET),
                    DimensionCompare(Dimension.HEIGHT, ComparisonOperator.GE, 700),
                    AccessoryAbsent(AccessoryType.FOOT),
                ),
                consequences=(Suggest(AccessorySelector(AccessoryType.FOOT)),),
                message="Adjustable feet have been added to your tall cabinet.",
                auto_apply=True,
                priority=2,
            ),
            ComboRule(
                id="glass-door-profile",
                name="Glass Door Profile",
                description="Add aluminum profile for glass doors",
                conditions=(
                    Predicate(PredicateName.GLASS_DOOR),
                    AccessoryAbsent(AccessoryType.PROFILE),
                ),
                consequences=(Suggest(AccessorySelector(AccessoryType.PROFILE)),),
                message="Aluminum profile has been added for your glass door.",
                auto_apply=True,
                priority=3,
            ),
            ComboRule(
                id="mdf-painting",
                name="MDF Painting Restriction",
                description="Painting is only available for MDF materials",
                conditions=(Predicate(PredicateName.NON_MDF_PAINTED),),
                consequences=(Warn("Painting can only be applied to MDF materials"),),
                blocks=frozenset({ProcessingType.PAINTING.value}),
            ),
            ComboRule(
                id="door-hinges",
                name="Hinges for Cabinets with Doors",
                description="Doors need hinges",
                conditions=(Predicate(PredicateName.DOOR_WITHOUT_HINGE),),
                consequences=(Suggest(AccessorySelector(AccessoryType.HINGE)),),
                message="Hinges have been added to your door.",
                auto_apply=True,
            ),
            ComboRule(
                id="shelf-supports",
                name="Shelf Supports",
                description="Add shelf supports for any shelves",
                conditions=(Predicate(PredicateName.SHELF_WITHOUT_SUPPORT),),
                consequences=(Suggest(AccessorySelector(AccessoryType.SHELF_SUPPORT)),),
                message="Shelf supports have been added for your shelves.",
                auto_apply=True,
                priority=2,
            ),
            ComboRule(
                id="pal-no-paint",
                name="PAL Painting Block",
                description="PAL boards cannot be painted",
                conditions=(MaterialTypePresent(MaterialType.PAL),),
                blocks=frozenset({ProcessingType.PAINTING.value}),
                message="PAL cannot be painted.",
            ),
        ]
    )


# --- Engine ---


class ComboRuleEngine:
    """Evaluates a snapshot of combo rules against modules.

    The engine copies the rules it is given; build a new engine after
    editing a RuleSet.
    """

    def __init__(self, rules: Iterable[ComboRule] | None = None) -> None:
        self.rules: tuple[ComboRule, ...] = tuple(
            default_rule_set() if rules is None else rules
        )

    def evaluate(self, module: FurnitureModule, catalog: Catalog) -> ComboResult:
        """Run every enabled rule against the module.

        Args:
            module: Module to evaluate; it is not modified.
            catalog: Reference data for condition checks and suggestions.

        Returns:
            Combined suggestions, warnings, errors and blocked options.
        """
        context = RuleContext(module, catalog)
        result = ComboResult()
        for rule in self.rules:
            if not rule.enabled or not rule.applies_to(context):
                continue
            logger.debug(f"Rule '{rule.id}' fired for module '{module.id}'")
            for consequence in rule.consequences:
                self._apply_consequence(rule, consequence, catalog, result)
            for option in sorted(rule.blocks):
                result.block(option)
        return result

    def blocked_options(self, module: FurnitureModule, catalog: Catalog) -> list[str]:
        """Options disabled for the module by the rules that fire."""
        return self.evaluate(module, catalog).blocked_options

    def apply_defaults(self, module: FurnitureModule, catalog: Catalog) -> AppliedDefaults:
        """Auto-apply safe accessory defaults to a copy of the module.

        Enabled rules run by ascending priority, ties in declaration order,
        each against the module as updated so far. For auto-apply rules the
        first catalog accessory matching the selector and compatible with the
        module type is added, unless the module already has one of that type.

        Returns:
            AppliedDefaults with the updated copy; the input is unchanged.
        """
        updated = module.copy()
        applied = AppliedDefaults(module=updated)
        rules = sorted(
            (r for r in self.rules if r.enabled), key=lambda r: r.priority
        )
        for rule in rules:
            context = RuleContext(updated, catalog)
            if not rule.applies_to(context):
                continue
            acted = False
            if rule.auto_apply:
                for consequence in rule.consequences:
                    if not (
                        isinstance(consequence, Suggest)
                        and isinstance(consequence.selector, AccessorySelector)
                    ):
                        continue
                    added = self._add_accessory(context, consequence.selector)
                    if added is not None:
                        applied.added.append(added)
                        acted = True
            for option in sorted(rule.blocks):
                if option not in applied.blocked_options:
                    applied.blocked_options.append(option)
                acted = True
            if acted and rule.message and rule.message not in applied.messages:
                applied.messages.append(rule.message)
        return applied

    def _apply_consequence(
        self,
        rule: ComboRule,
        consequence: Consequence,
        catalog: Catalog,
        result: ComboResult,
    ) -> None:
        if isinstance(consequence, Warn):
            result.warnings.append(consequence.message)
        elif isinstance(consequence, Fail):
            result.errors.append(consequence.message)
        elif isinstance(consequence, Suggest):
            suggestion = self._resolve(rule, consequence.selector, catalog)
            if suggestion is not None:
                result.suggestions.append(suggestion)

    def _resolve(
        self, rule: ComboRule, selector: Selector, catalog: Catalog
    ) -> Suggestion | None:
        if isinstance(selector, AccessorySelector):
            for item in catalog.accessories:
                if selector.matches(item):
                    return Suggestion("accessory", item.id, item.name, rule.description)
        elif isinstance(selector, MaterialSelector):
            for material in catalog.materials:
                if selector.matches(material):
                    return Suggestion("material", material.id, material.name, rule.description)
        elif isinstance(selector, ProcessingSelector):
            return Suggestion(
                "processing",
                selector.type.value,
                selector.type.value.replace("_", " "),
                rule.description,
            )
        logger.debug(f"Rule '{rule.id}': no catalog entry matches {selector}")
        return None

    @staticmethod
    def _add_accessory(
        context: RuleContext, selector: AccessorySelector
    ) -> ModuleAccessory | None:
        """Add the first matching compatible catalog accessory to the module.

        An accessory of the selected type counts as present by its catalog
        item's type, falling back to the type stored on the module.
        """
        if selector.type in context.accessory_types:
            return None
        module = context.module
        for item in context.catalog.accessories:
            if selector.matches(item) and item.is_compatible_with(module.type):
                accessory = ModuleAccessory(
                    accessory_item_id=item.id, type=item.type, quantity=1
                )
                module.add_accessory(accessory)
                context.accessory_types.add(item.type)
                return accessory
        return None
