"""Configuration classes for markup rendering.

This module provides configuration objects for the rendering engine, document
prologue generation, date formatting and logging.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Any, Dict, List, Optional

_COMPONENT_FIELDS = ("render", "document", "dates", "global_")


class IndentationKind(Enum):
    """Characters used for pretty-printed output."""

    SPACES = auto()
    TABS = auto()


@dataclass(frozen=True)
class Indentation:
    """A single indentation mode for pretty-printed output."""

    kind: IndentationKind = IndentationKind.SPACES
    count: int = 4

    def __post_init__(self) -> None:
        """Validate indentation."""
        if self.count < 0:
            raise ValueError("indentation count must be >= 0")

    @classmethod
    def spaces(cls, count: int = 4) -> "Indentation":
        return cls(IndentationKind.SPACES, count)

    @classmethod
    def tabs(cls, count: int = 1) -> "Indentation":
        return cls(IndentationKind.TABS, count)

    @property
    def unit(self) -> str:
        """The string emitted for one level of depth."""
        character = "\t" if self.kind is IndentationKind.TABS else " "
        return character * self.count


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for the render engine."""

    indentation: Optional[Indentation] = None
    max_depth: int = 500

    def __post_init__(self) -> None:
        """Validate render configuration."""
        if self.max_depth <= 0:
            raise ValueError("max_depth must be > 0")
        if self.indentation is not None and not isinstance(self.indentation, Indentation):
            raise ValueError("indentation must be an Indentation or None")


@dataclass(frozen=True)
class DocumentConfig:
    """Configuration for document prologues."""

    xml_version: str = "1.0"
    encoding: str = "UTF-8"
    include_declaration: bool = True

    def __post_init__(self) -> None:
        """Validate document configuration."""
        if self.xml_version not in ("1.0", "1.1"):
            raise ValueError("xml_version must be '1.0' or '1.1'")
        if not self.encoding:
            raise ValueError("encoding cannot be empty")


@dataclass(frozen=True)
class DateConfig:
    """Configuration for date formatting collaborators."""

    default_time_zone: str = "UTC"

    def __post_init__(self) -> None:
        """Validate date configuration."""
        if not self.default_time_zone:
            raise ValueError("default_time_zone cannot be empty")


@dataclass(frozen=True)
class GlobalConfig:
    """Global configuration settings that apply across all components."""

    logging_level: str = "WARNING"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate global configuration."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging_level not in valid_levels:
            raise ValueError(f"logging_level must be one of {valid_levels}")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class MarkupConfig:
    """Complete configuration for rendering markup documents.

    Immutable along with every component, so one instance can be shared by
    any number of renderers running side by side.
    """

    render: RenderConfig = field(default_factory=RenderConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)
    dates: DateConfig = field(default_factory=DateConfig)
    global_: GlobalConfig = field(default_factory=GlobalConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete configuration."""
        try:
            self.render.__post_init__()
            self.document.__post_init__()
            self.dates.__post_init__()
            self.global_.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        if self.dates.default_time_zone != "UTC":
            # Imported lazily: formatting depends on nothing in config.
            from typed_markup.shared.formatting import resolve_time_zone

            try:
                resolve_time_zone(self.dates.default_time_zone)
            except ValueError as e:
                raise ConfigValidationError(
                    str(e),
                    field_name="dates.default_time_zone",
                    suggestions=["Use an IANA name such as 'Europe/Stockholm'"],
                ) from e

    def override(self, **kwargs: Any) -> "MarkupConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Keyword arguments for configuration fields to override

        Returns:
            New MarkupConfig instance with overrides applied

        Example:
            >>> config = MarkupConfig()
            >>> new_config = config.override(render__max_depth=50)
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENT_FIELDS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=list(_COMPONENT_FIELDS),
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for key, value in nested_overrides.items():
            if key in _COMPONENT_FIELDS and isinstance(value, dict):
                try:
                    new_fields[key] = replace(getattr(self, key), **value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            else:
                new_fields[key] = value

        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple)):
                return [_dataclass_to_dict(item) for item in obj]
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarkupConfig":
        """Create configuration from dictionary.

        Unknown keys raise ``ConfigValidationError`` rather than being dropped.
        """
        component_types = {
            "render": RenderConfig,
            "document": DocumentConfig,
            "dates": DateConfig,
            "global_": GlobalConfig,
        }

        values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_types:
                section = dict(value or {})
                if key == "render" and section.get("indentation") is not None:
                    section["indentation"] = _indentation_from_dict(
                        section["indentation"]
                    )
                try:
                    values[key] = component_types[key](**section)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("name", "description"):
                values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration key: {key}",
                    field_name=key,
                    suggestions=sorted([*component_types, "name", "description"]),
                )

        return cls(**values)

    @classmethod
    def from_json(cls, json_str: str) -> "MarkupConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)

    # Preset factory methods
    @classmethod
    def compact(cls) -> "MarkupConfig":
        """Machine-oriented output with no inter-tag whitespace."""
        return cls(
            render=RenderConfig(indentation=None),
            name="compact",
            description="Compact output for feeds and sitemaps",
        )

    @classmethod
    def pretty(cls, indent: int = 4) -> "MarkupConfig":
        """Human-oriented output indented with spaces."""
        return cls(
            render=RenderConfig(indentation=Indentation.spaces(indent)),
            name="pretty",
            description=f"Pretty-printed output indented by {indent} spaces",
        )


def _indentation_from_dict(data: Any) -> Indentation:
    if isinstance(data, Indentation):
        return data
    if not isinstance(data, dict):
        raise ConfigValidationError(
            "indentation must be an object", field_name="render.indentation"
        )
    kind = data.get("kind", IndentationKind.SPACES.name)
    try:
        kind_value = IndentationKind[kind] if isinstance(kind, str) else kind
        return Indentation(kind=kind_value, count=data.get("count", 4))
    except KeyError as e:
        raise ConfigValidationError(
            f"Unknown indentation kind: {kind}",
            field_name="render.indentation.kind",
            suggestions=[member.name for member in IndentationKind],
        ) from e
    except ValueError as e:
        raise ConfigValidationError(str(e), field_name="render.indentation") from e
