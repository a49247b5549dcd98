"""Shared utilities for markup generation.

This module provides configuration objects, result types, logging and the
date/URL formatting collaborators used across all layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    RenderMetrics,
    RenderResult,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    DateConfig,
    DocumentConfig,
    GlobalConfig,
    Indentation,
    IndentationKind,
    MarkupConfig,
    RenderConfig,
)
from .formatting import (
    TimeZoneLike,
    URLRepresentable,
    format_rss_date,
    format_sitemap_date,
    resolve_time_zone,
    url_string,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
    set_logging_level,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "RenderMetrics",
    "RenderResult",
    "ConfigError",
    "ConfigValidationError",
    "DateConfig",
    "DocumentConfig",
    "GlobalConfig",
    "Indentation",
    "IndentationKind",
    "MarkupConfig",
    "RenderConfig",
    "TimeZoneLike",
    "URLRepresentable",
    "format_rss_date",
    "format_sitemap_date",
    "resolve_time_zone",
    "url_string",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "set_logging_level",
]
