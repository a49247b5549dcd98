"""Public rendering API and integration adapters.

Progressive API disclosure:
- Level 1: Simple functions - render(), render_nodes(), render_document()
- Level 2: Configured renderer - MarkupRenderer
- Level 3: Adapters - hand rendered documents to lxml, ElementTree or bs4
"""

from .adapters import (
    AdapterMetadata,
    AdapterType,
    BeautifulSoupAdapter,
    ConversionResult,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from .renderer import MarkupRenderer, render, render_document, render_nodes

__all__ = [
    "AdapterMetadata",
    "AdapterType",
    "BeautifulSoupAdapter",
    "ConversionResult",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
    "MarkupRenderer",
    "render",
    "render_document",
    "render_nodes",
]
