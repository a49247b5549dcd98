"""Core node model for markup generation.

A document is an immutable tree of :class:`Node` values. Nodes come in six
variants: :class:`Element`, :class:`AttributeNode`, :class:`TextNode`,
:class:`RawNode`, :class:`GroupNode` and :class:`EmptyNode`. Each carries an
optional context tag (see :mod:`typed_markup.tree.context`) that restricts
where it may be placed; the tag never influences equality or rendering.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    Union,
)

from typed_markup.tree.context import C, Context, describe, is_legal_in

ContextType = Optional[Type[Context]]

# Code points outside the XML 1.0 Char production
_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class ClosingMode(Enum):
    """How an element's tag is closed."""

    STANDARD = auto()       # <name>children</name>
    SELF_CLOSING = auto()   # <name/>
    NEVER_CLOSING = auto()  # <name> (void element, no close tag)


class MarkupError(Exception):
    """Base exception for markup construction and rendering errors."""


class SelfClosingContentError(MarkupError, ValueError):
    """Raised when content is supplied to a self-closing element."""

    def __init__(self, element_name: str, offending: "Node[Any]") -> None:
        super().__init__(
            f"Self-closing element <{element_name}/> cannot have content, "
            f"got {type(offending).__name__}"
        )
        self.element_name = element_name
        self.offending = offending


class StructureViolationError(MarkupError, TypeError):
    """Raised when a node is placed in a position its context does not allow.

    Vocabularies also raise it for shape rules a context tag cannot express,
    passing their own ``message``; ``offending`` is then the first surplus
    node, or ``None`` when something required is missing.
    """

    def __init__(
        self,
        parent_name: str,
        position: ContextType,
        offending: Optional["Node[Any]"],
        message: Optional[str] = None
    ) -> None:
        if message is None:
            message = (
                f"{_describe_node(offending)} is only legal in "
                f"{describe(offending.context)} and cannot be placed inside "
                f"{parent_name}, which requires {describe(position)}"
            )
        super().__init__(message)
        self.parent_name = parent_name
        self.position = position
        self.offending = offending


@dataclass(frozen=True)
class Attribute:
    """A name/value pair attached to an element."""

    name: str
    value: str

    def __post_init__(self) -> None:
        """Validate attribute types and characters."""
        if not isinstance(self.name, str) or not isinstance(self.value, str):
            raise TypeError("Attribute name and value must be strings")
        if not self.name:
            raise ValueError("Attribute name cannot be empty")
        _check_xml_chars(self.name, "Attribute name")
        _check_xml_chars(self.value, f"Attribute {self.name!r} value")

    def as_node(self, context: ContextType = None) -> "AttributeNode[Any]":
        """Express this attribute as a sibling node in a child list."""
        return AttributeNode(self, context=context)


@dataclass(frozen=True)
class Node(Generic[C]):
    """Base of all node variants."""

    context: ContextType = field(default=None, compare=False, repr=False, kw_only=True)


@dataclass(frozen=True)
class AttributeNode(Node[C]):
    """An attribute placed among an element's children.

    Rendered inside the enclosing element's start tag, after the element's own
    attributes.
    """

    attribute: Attribute


@dataclass(frozen=True)
class TextNode(Node[C]):
    """Text content, escaped on output."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Text node value must be a string")
        _check_xml_chars(self.value, "Text")


@dataclass(frozen=True)
class RawNode(Node[C]):
    """Content emitted verbatim; the caller vouches for its correctness."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeError("Raw node value must be a string")


@dataclass(frozen=True)
class GroupNode(Node[C]):
    """Zero or more sibling nodes treated as one unit."""

    members: Tuple[Node[Any], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", _as_node_tuple(self.members, "Group member"))


@dataclass(frozen=True)
class EmptyNode(Node[C]):
    """Renders to nothing; used for conditional omission."""


@dataclass(frozen=True)
class Element(Node[C]):
    """A named node with attributes, children and a closing mode.

    Attributes and children keep insertion order. Duplicate attribute names are
    preserved and all rendered.
    """

    name: str
    attributes: Tuple[Attribute, ...] = ()
    children: Tuple[Node[Any], ...] = ()
    closing_mode: ClosingMode = ClosingMode.STANDARD
    child_context: ContextType = field(
        default=None, compare=False, repr=False, kw_only=True
    )

    def __post_init__(self) -> None:
        """Normalize sequences and validate structure once, at construction."""
        if not isinstance(self.name, str) or not self.name:
            raise ValueError("Element name cannot be empty")
        if not isinstance(self.closing_mode, ClosingMode):
            raise TypeError("closing_mode must be a ClosingMode")

        attributes = tuple(self.attributes)
        for attribute in attributes:
            if not isinstance(attribute, Attribute):
                raise TypeError("Element attributes must be Attribute instances")
        object.__setattr__(self, "attributes", attributes)
        object.__setattr__(self, "children", _as_node_tuple(self.children, "Child"))

        if self.closing_mode is ClosingMode.SELF_CLOSING:
            for child in flatten(self.children):
                if not isinstance(child, AttributeNode):
                    raise SelfClosingContentError(self.name, child)

        validate_children(f"<{self.name}>", self.child_context, self.children)

    @property
    def all_attributes(self) -> List[Attribute]:
        """Own attributes followed by attribute nodes hoisted from children."""
        hoisted = [
            child.attribute
            for child in flatten(self.children)
            if isinstance(child, AttributeNode)
        ]
        return [*self.attributes, *hoisted]

    @property
    def content(self) -> List[Node[Any]]:
        """Flattened children that render as content (no attributes, no empties)."""
        return [
            child
            for child in flatten(self.children)
            if not isinstance(child, AttributeNode)
        ]

    @property
    def child_elements(self) -> List["Element[Any]"]:
        return [child for child in self.content if isinstance(child, Element)]

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value; the last occurrence wins."""
        value = default
        for attribute in self.all_attributes:
            if attribute.name == name:
                value = attribute.value
        return value

    def find(self, name: str) -> Optional["Element[Any]"]:
        """Find first descendant element with matching name."""
        for child in self.child_elements:
            if child.name == name:
                return child
        for child in self.child_elements:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def find_all(self, name: str) -> List["Element[Any]"]:
        """Find all descendant elements with matching name, in document order."""
        results = []
        for child in self.child_elements:
            if child.name == name:
                results.append(child)
            results.extend(child.find_all(name))
        return results

    @property
    def text_content(self) -> str:
        """Concatenated text of all descendant text nodes (unescaped)."""
        parts = []
        for child in self.content:
            if isinstance(child, TextNode):
                parts.append(child.value)
            elif isinstance(child, Element):
                parts.append(child.text_content)
        return "".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "name": self.name,
            "closing_mode": self.closing_mode.name,
            "attributes": [[a.name, a.value] for a in self.all_attributes],
        }
        children = []
        for child in self.content:
            if isinstance(child, Element):
                children.append(child.to_dict())
            elif isinstance(child, TextNode):
                children.append({"text": child.value})
            elif isinstance(child, RawNode):
                children.append({"raw": child.value})
        if children:
            result["children"] = children
        return result


@dataclass(frozen=True)
class Document(Generic[C]):
    """An ordered sequence of top-level nodes: prologue plus root element."""

    nodes: Tuple[Node[Any], ...] = ()
    context: ContextType = field(default=None, compare=False, repr=False, kw_only=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "nodes", _as_node_tuple(self.nodes, "Document node"))
        validate_children("the document root", self.context, self.nodes)

    @property
    def root(self) -> Optional[Element[Any]]:
        """The first top-level element, if any."""
        for node in flatten(self.nodes):
            if isinstance(node, Element):
                return node
        return None

    def render(self, indentation: Optional[Any] = None) -> str:
        """Render the whole document. See :func:`typed_markup.api.render_document`."""
        from typed_markup.api.renderer import render_document

        return render_document(self, indentation=indentation)


NodeInput = Union[Node[Any], Iterable[Node[Any]]]


def flatten(nodes: Iterable[Node[Any]]) -> Iterator[Node[Any]]:
    """Yield nodes with groups expanded in place and empty nodes dropped."""
    stack: List[Iterator[Node[Any]]] = [iter(nodes)]
    while stack:
        try:
            node = next(stack[-1])
        except StopIteration:
            stack.pop()
            continue
        if isinstance(node, GroupNode):
            stack.append(iter(node.members))
        elif not isinstance(node, EmptyNode):
            yield node


def validate_children(
    parent_name: str,
    position: ContextType,
    children: Sequence[Node[Any]]
) -> None:
    """Reject children whose context does not admit ``position``.

    Groups are checked themselves and then looked through; nested elements
    were already validated when they were built.
    """
    if position is None:
        return
    pending: List[Node[Any]] = list(children)
    while pending:
        child = pending.pop(0)
        if not is_legal_in(position, child.context):
            raise StructureViolationError(parent_name, position, child)
        if isinstance(child, GroupNode):
            pending[0:0] = child.members


def _as_node_tuple(nodes: Iterable[Any], label: str) -> Tuple[Node[Any], ...]:
    result = tuple(nodes)
    for node in result:
        if not isinstance(node, Node):
            raise TypeError(f"{label} must be a Node, got {type(node).__name__}")
    return result


def _check_xml_chars(value: str, label: str) -> None:
    match = _ILLEGAL_XML_CHARS.search(value)
    if match is not None:
        raise ValueError(
            f"{label} contains character U+{ord(match.group()):04X} "
            f"at index {match.start()}, which is not allowed in XML"
        )


def _describe_node(node: Node[Any]) -> str:
    if isinstance(node, Element):
        return f"<{node.name}>"
    if isinstance(node, AttributeNode):
        return f"attribute {node.attribute.name!r}"
    return type(node).__name__


# Constructors

def element(
    name: str,
    *nodes: Node[Any],
    attributes: Iterable[Attribute] = (),
    closing_mode: ClosingMode = ClosingMode.STANDARD,
    context: ContextType = None,
    child_context: ContextType = None
) -> Element[Any]:
    """Build an element from a name, child nodes and optional attributes.

    Args:
        name: Tag name, used verbatim
        *nodes: Children in order; groups are flattened when rendered
        attributes: Attributes rendered before any attribute nodes in ``nodes``
        closing_mode: How the tag is closed
        context: Position(s) this element is legal in
        child_context: Position every child must be legal in

    Raises:
        SelfClosingContentError: content supplied with ``SELF_CLOSING``
        StructureViolationError: a child's context rejects ``child_context``
    """
    return Element(
        name,
        tuple(attributes),
        nodes,
        closing_mode,
        context=context,
        child_context=child_context,
    )


def self_closing(
    name: str,
    *nodes: Node[Any],
    attributes: Iterable[Attribute] = (),
    context: ContextType = None,
    child_context: ContextType = None
) -> Element[Any]:
    """Build a ``<name/>`` element. Only attribute nodes are accepted as children."""
    return element(
        name,
        *nodes,
        attributes=attributes,
        closing_mode=ClosingMode.SELF_CLOSING,
        context=context,
        child_context=child_context,
    )


def never_closing(
    name: str,
    *nodes: Node[Any],
    attributes: Iterable[Attribute] = (),
    context: ContextType = None,
    child_context: ContextType = None
) -> Element[Any]:
    """Build a void ``<name>`` element with no closing tag."""
    return element(
        name,
        *nodes,
        attributes=attributes,
        closing_mode=ClosingMode.NEVER_CLOSING,
        context=context,
        child_context=child_context,
    )


def attribute(name: str, value: str) -> Attribute:
    return Attribute(name, value)


def text(value: str) -> TextNode[Any]:
    return TextNode(value)


def raw(value: str) -> RawNode[Any]:
    return RawNode(value)


def cdata(value: str) -> RawNode[Any]:
    """Wrap ``value`` in a CDATA section, splitting any embedded ``]]>``."""
    return RawNode("<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>")


def group(nodes: Iterable[Node[Any]], context: ContextType = None) -> GroupNode[Any]:
    return GroupNode(tuple(nodes), context=context)


def empty() -> EmptyNode[Any]:
    return EmptyNode()


def xml_declaration(version: str = "1.0", encoding: str = "UTF-8") -> RawNode[Any]:
    """The ``<?xml ...?>`` prologue as a raw node."""
    return RawNode(f'<?xml version="{version}" encoding="{encoding}"?>')


def document(*nodes: Node[Any], context: ContextType = None) -> Document[Any]:
    return Document(nodes, context=context)
