"""Check protocol for module validation.

This module defines the protocol that all module checks must implement,
enabling ModuleValidator to run any combination of them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cabquote.domain.catalog import Catalog
    from cabquote.domain.entities import FurnitureModule
    from cabquote.domain.services.validation import ModuleValidationResult


@runtime_checkable
class ModuleCheck(Protocol):
    """Protocol for module checks.

    A check inspects one aspect of a FurnitureModule and records what it
    finds on the shared ModuleValidationResult.

    Attributes:
        name: Unique identifier for the check (e.g., "paintability").

    Example:
        class MyCheck:
            @property
            def name(self) -> str:
                return "my_check"

            def check(self, module, catalog, result) -> None:
                if problem_found:
                    result.add_error("Description of problem")
    """

    @property
    def name(self) -> str:
        """Return the unique name/identifier for this check."""
        ...

    def check(
        self,
        module: FurnitureModule,
        catalog: Catalog,
        result: ModuleValidationResult,
    ) -> None:
        """Inspect the module and record findings.

        Args:
            module: The module to check.
            catalog: Reference data to resolve material and accessory ids.
            result: Result to add errors, warnings and suggestions to.
        """
        ...
