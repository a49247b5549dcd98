"""Typed markup generation.

Build documents as immutable trees of typed nodes and render them to
well-formed XML-family markup (RSS feeds, sitemaps, HTML). Context markers
restrict which constructs may be nested where, both for static type checkers
and at construction time.

Progressive API Disclosure:
- Level 1: Simple functions - render(), render_nodes(), render_document()
- Level 2: Configured renderer - MarkupRenderer with MarkupConfig
- Level 3: Integration adapters - lxml, ElementTree, BeautifulSoup
"""

__version__ = "0.1.0"
__author__ = "Typed Markup Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Configured renderer
from .api import MarkupRenderer, render, render_document, render_nodes

# Configuration classes for advanced usage
from .shared.config import Indentation, MarkupConfig, RenderConfig

# Core node model
from .tree import (
    Attribute,
    ClosingMode,
    Context,
    Document,
    Element,
    MarkupError,
    Node,
    SelfClosingContentError,
    StructureViolationError,
    attribute,
    cdata,
    element,
    empty,
    group,
    never_closing,
    raw,
    self_closing,
    text,
)
from .rendering import RenderDepthError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple rendering functions
    "render",
    "render_nodes",
    "render_document",

    # Level 2: Configured renderer
    "MarkupRenderer",

    # Configuration classes
    "Indentation",
    "MarkupConfig",
    "RenderConfig",

    # Node model
    "Attribute",
    "ClosingMode",
    "Context",
    "Document",
    "Element",
    "Node",
    "attribute",
    "cdata",
    "element",
    "empty",
    "group",
    "never_closing",
    "raw",
    "self_closing",
    "text",

    # Errors
    "MarkupError",
    "RenderDepthError",
    "SelfClosingContentError",
    "StructureViolationError",
]
