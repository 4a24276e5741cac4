"""Loading of catalog and project files.

Both file kinds go through the same steps: read the file, parse it as JSON
and validate it against its pydantic model. A failure at any step is
reported as a ConfigError whose error_type names the step, so the CLI can
print a message suited to it.
"""

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cabquote.application.config.schema import (
    CatalogConfiguration,
    ProjectConfiguration,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic error location as a JSON path.

    Examples:
        >>> _format_json_path(("modules", 0, "width"))
        'modules[0].width'
        >>> _format_json_path(("materials", 2, "compatible_operations", 1))
        'materials[2].compatible_operations[1]'
    """
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


class ConfigError(Exception):
    """A catalog or project could not be turned into a configuration.

    Attributes:
        message: Human-readable summary.
        error_type: What went wrong: file_not_found, permission_denied,
            file_read_error, json_parse, validation or domain.
        path: The offending file, when the input came from a file.
        details: Structured findings. JSON errors carry line and column;
            validation errors carry path, message, value and error_type.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_validation_error(
        cls, error: PydanticValidationError, path: Path | None = None
    ) -> "ConfigError":
        """Build a validation ConfigError listing every failed field."""
        details = [
            {
                "path": _format_json_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in error.errors()
        ]
        source = f" in {path}" if path is not None else ""
        lines = [f"Invalid configuration{source}:"]
        for detail in details:
            line = f"  - {detail['path'] or '<root>'}: {detail['message']}"
            value = detail["value"]
            # Containers are echoed back whole by pydantic; skip them
            if value is not None and not isinstance(value, (dict, list)):
                line += f" (got: {value!r})"
            lines.append(line)
        return cls("\n".join(lines), error_type="validation", path=path, details=details)


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(
            f"Config file not found: {path}", error_type="file_not_found", path=path
        )
    except PermissionError:
        raise ConfigError(
            f"Cannot read {path}: permission denied",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            f"Cannot read {path}: {e.strerror or e}",
            error_type="file_read_error",
            path=path,
        )

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(model: type[ModelT], data: Any, path: Path | None = None) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError.from_validation_error(e, path)


def load_catalog(path: Path) -> CatalogConfiguration:
    """Load and validate a catalog file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated; see
            error_type for which.

    Example:
        >>> try:
        ...     catalog = load_catalog(Path("catalog.json"))
        ... except ConfigError as e:
        ...     for detail in e.details:
        ...         print(f"  {detail['path']}: {detail['message']}")
    """
    return _validate(CatalogConfiguration, _read_json(path), path)


def load_project(path: Path) -> ProjectConfiguration:
    """Load and validate a project file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    return _validate(ProjectConfiguration, _read_json(path), path)


def load_catalog_from_dict(data: dict[str, Any]) -> CatalogConfiguration:
    """Validate catalog data that is already in memory."""
    return _validate(CatalogConfiguration, data)


def load_project_from_dict(data: dict[str, Any]) -> ProjectConfiguration:
    """Validate project data that is already in memory."""
    return _validate(ProjectConfiguration, data)
