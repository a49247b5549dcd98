"""Integration adapters for handing rendered markup to other XML libraries.

Each adapter converts a node tree or document into the native object model of
a target library (lxml, BeautifulSoup, the standard library's ElementTree).
Target libraries are imported lazily so they remain optional installs.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Type

from typed_markup.api.renderer import MarkupRenderer, Renderable
from typed_markup.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    MarkupConfig,
    get_logger,
)


class AdapterType(Enum):
    """Types of integration adapters."""

    XML_LIBRARY = auto()     # XML object models (lxml, ElementTree)
    HTML_LIBRARY = auto()    # HTML object models (BeautifulSoup)


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    adapter_type: AdapterType
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    markup: str
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)

    @property
    def is_well_formed(self) -> bool:
        """True when the target library accepted the rendered markup."""
        return self.success and self.converted_data is not None


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters.

    Rendering errors (``MarkupError``) propagate to the caller. Only a target
    library rejecting the rendered text is reported through
    ``ConversionResult.errors``.
    """

    def __init__(
        self,
        config: Optional[MarkupConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.correlation_id = correlation_id
        self._renderer = MarkupRenderer(config, correlation_id)
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library is installed."""

    @abstractmethod
    def _convert(self, markup: str) -> Any:
        """Build the target library's object from rendered markup."""

    def to_target(self, tree: Renderable) -> ConversionResult:
        """Render ``tree`` and convert it into the target object model."""
        start_time = time.time()
        markup = self._renderer.render(tree)

        if not self.is_available():
            return self._create_error_result(
                f"{self.metadata.target_library} is not installed",
                markup,
                start_time,
            )

        try:
            converted = self._convert(markup)
        except (ValueError, SyntaxError) as e:
            # lxml.etree.XMLSyntaxError and ElementTree.ParseError both land here.
            self._logger.warning(
                "Target library rejected rendered markup",
                extra={"error": str(e)},
            )
            return self._create_error_result(
                f"{self.metadata.target_library} rejected markup: {e}",
                markup,
                start_time,
            )

        return ConversionResult(
            success=True,
            converted_data=converted,
            markup=markup,
            conversion_time_ms=(time.time() - start_time) * 1000,
            metadata={"target_library": self.metadata.target_library},
        )

    def _create_error_result(
        self,
        error_message: str,
        markup: str,
        start_time: float
    ) -> ConversionResult:
        return ConversionResult(
            success=False,
            converted_data=None,
            markup=markup,
            conversion_time_ms=(time.time() - start_time) * 1000,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id,
                )
            ],
        )


def _as_bytes(markup: str) -> bytes:
    # Parsers reject str input that carries an encoding declaration.
    return markup.encode("utf-8")


class LxmlAdapter(IntegrationAdapter):
    """Adapter producing ``lxml.etree`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="lxml",
            description="Rendered markup as an lxml.etree element",
        )

    def is_available(self) -> bool:
        try:
            import lxml.etree  # noqa: F401
            return True
        except ImportError:
            return False

    def _convert(self, markup: str) -> Any:
        import lxml.etree as ET

        parser = ET.XMLParser(resolve_entities=False, no_network=True)
        return ET.fromstring(_as_bytes(markup), parser)


class ElementTreeAdapter(IntegrationAdapter):
    """Adapter producing ``xml.etree.ElementTree`` elements."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            adapter_type=AdapterType.XML_LIBRARY,
            target_library="xml.etree.ElementTree",
            description="Rendered markup as a standard library Element",
        )

    def is_available(self) -> bool:
        return True

    def _convert(self, markup: str) -> Any:
        import xml.etree.ElementTree as ET

        return ET.fromstring(_as_bytes(markup))


class BeautifulSoupAdapter(IntegrationAdapter):
    """Adapter producing a ``bs4.BeautifulSoup`` document, suited to HTML."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="beautifulsoup",
            adapter_type=AdapterType.HTML_LIBRARY,
            target_library="beautifulsoup4",
            description="Rendered markup as a BeautifulSoup document",
        )

    def is_available(self) -> bool:
        try:
            from bs4 import BeautifulSoup  # noqa: F401
            return True
        except ImportError:
            return False

    def _convert(self, markup: str) -> Any:
        from bs4 import BeautifulSoup

        return BeautifulSoup(markup, "html.parser")


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, name: str, adapter_class: Type[IntegrationAdapter]) -> None:
        with self._lock:
            self._adapters[name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        config: Optional[MarkupConfig] = None,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get a new adapter instance, or None if unknown or unavailable."""
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(config, correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        with self._lock:
            classes = list(self._adapters.values())
        available = []
        for adapter_class in classes:
            instance = adapter_class()
            if instance.is_available():
                available.append(instance.metadata)
        return available


# Global adapter registry instance
_adapter_registry = AdapterRegistry()
_adapter_registry.register("lxml", LxmlAdapter)
_adapter_registry.register("elementtree", ElementTreeAdapter)
_adapter_registry.register("beautifulsoup", BeautifulSoupAdapter)


def register_adapter(name: str, adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(name, adapter_class)


def get_adapter(
    adapter_name: str,
    config: Optional[MarkupConfig] = None,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance, or None if unavailable."""
    return _adapter_registry.get_adapter(adapter_name, config, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List metadata of all registered adapters whose library is installed."""
    return _adapter_registry.list_available_adapters()
