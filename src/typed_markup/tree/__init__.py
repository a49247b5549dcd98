"""Typed node model for markup documents.

Key Components:
    Node: Base of the six node variants (Element, AttributeNode, TextNode,
        RawNode, GroupNode, EmptyNode)
    Element: Named node with attributes, children and a closing mode
    Attribute: Name/value pair, convertible to a node with ``as_node()``
    Document: Ordered top-level nodes (prologue plus root element)
    Context: Root of the context marker hierarchies used to restrict nesting
"""

from .context import C, Context, describe, is_legal_in
from .nodes import (
    Attribute,
    AttributeNode,
    ClosingMode,
    Document,
    Element,
    EmptyNode,
    GroupNode,
    MarkupError,
    Node,
    RawNode,
    SelfClosingContentError,
    StructureViolationError,
    TextNode,
    attribute,
    cdata,
    document,
    element,
    empty,
    flatten,
    group,
    never_closing,
    raw,
    self_closing,
    text,
    validate_children,
    xml_declaration,
)

__all__ = [
    "C",
    "Context",
    "describe",
    "is_legal_in",
    "Attribute",
    "AttributeNode",
    "ClosingMode",
    "Document",
    "Element",
    "EmptyNode",
    "GroupNode",
    "MarkupError",
    "Node",
    "RawNode",
    "SelfClosingContentError",
    "StructureViolationError",
    "TextNode",
    "attribute",
    "cdata",
    "document",
    "element",
    "empty",
    "flatten",
    "group",
    "never_closing",
    "raw",
    "self_closing",
    "text",
    "validate_children",
    "xml_declaration",
]
