"""Application layer - use cases and orchestration."""

from .commands import EvaluateProjectCommand, GenerateQuoteCommand
from .dtos import ModuleReport, ProjectReport

__all__ = [
    "EvaluateProjectCommand",
    "GenerateQuoteCommand",
    "ModuleReport",
    "ProjectReport",
]
