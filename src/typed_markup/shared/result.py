"""Result objects and diagnostic types for markup rendering.

This module defines the result objects returned by the detailed rendering
entry points: the rendered text together with metrics and diagnostics about
the tree that produced it.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()    # Suspicious but valid input (e.g. ignored children)
    ERROR = auto()


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    path: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class RenderMetrics:
    """Counters collected while walking a node tree."""

    processing_time_ms: float = 0.0
    elements_rendered: int = 0
    attributes_rendered: int = 0
    text_nodes_rendered: int = 0
    raw_nodes_rendered: int = 0
    max_depth: int = 0
    output_length: int = 0

    @property
    def elements_per_second(self) -> float:
        """Calculate elements rendered per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.elements_rendered * 1000.0) / self.processing_time_ms

    @property
    def total_nodes(self) -> int:
        return (
            self.elements_rendered
            + self.text_nodes_rendered
            + self.raw_nodes_rendered
        )

    def record_depth(self, depth: int) -> None:
        if depth > self.max_depth:
            self.max_depth = depth


@dataclass
class RenderResult:
    """Rendered output plus everything learned while producing it."""

    output: str
    metrics: RenderMetrics = field(default_factory=RenderMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    correlation_id: Optional[str] = None

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                path=path,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self,
        severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        """Get diagnostics of specific severity level."""
        return [diag for diag in self.diagnostics if diag.severity == severity]

    @property
    def has_warnings(self) -> bool:
        return any(
            diag.severity == DiagnosticSeverity.WARNING for diag in self.diagnostics
        )

    def summary(self) -> Dict[str, Any]:
        """Get a JSON-friendly summary of the render."""
        return {
            "output_length": self.metrics.output_length,
            "processing_time_ms": self.metrics.processing_time_ms,
            "elements": self.metrics.elements_rendered,
            "attributes": self.metrics.attributes_rendered,
            "text_nodes": self.metrics.text_nodes_rendered,
            "raw_nodes": self.metrics.raw_nodes_rendered,
            "max_depth": self.metrics.max_depth,
            "diagnostics": [
                {
                    "severity": diag.severity.name,
                    "message": diag.message,
                    "component": diag.component,
                    "path": diag.path,
                }
                for diag in self.diagnostics
            ],
            "correlation_id": self.correlation_id,
        }
