"""Render engine: serializes node trees into markup text.

The engine walks the tree depth-first in document order using an explicit
work stack, so very deep documents are bounded by ``RenderConfig.max_depth``
rather than by the interpreter's recursion limit. Output is accumulated in a
list of string parts and joined once the whole tree has rendered; nothing is
returned for a tree that fails part way.
"""

import time
from typing import Any, List, Optional, Sequence, Tuple, Union

from typed_markup.rendering.escaping import escape_attribute, escape_text
from typed_markup.shared import (
    DiagnosticSeverity,
    RenderConfig,
    RenderResult,
    get_logger,
)
from typed_markup.tree.nodes import (
    Attribute,
    AttributeNode,
    ClosingMode,
    Element,
    EmptyNode,
    GroupNode,
    MarkupError,
    Node,
    RawNode,
    TextNode,
)

# Stack actions
_OPEN = 0
_CLOSE = 1

_WorkItem = Tuple[int, Any, int]


class RenderDepthError(MarkupError, RecursionError):
    """Raised when a tree is nested deeper than the configured maximum."""

    def __init__(self, element_name: str, depth: int, max_depth: int) -> None:
        super().__init__(
            f"Element <{element_name}> at depth {depth} exceeds the maximum "
            f"render depth of {max_depth}"
        )
        self.element_name = element_name
        self.depth = depth
        self.max_depth = max_depth


class RenderEngine:
    """Serializes nodes to text according to a :class:`RenderConfig`.

    One engine may render any number of trees; all per-render state lives in
    locals of :meth:`render`, so an engine can be shared between threads.
    """

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or RenderConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "render_engine")

    def render(self, nodes: Union[Node[Any], Sequence[Node[Any]]]) -> RenderResult:
        """Render a node or an ordered sequence of sibling nodes.

        Args:
            nodes: The tree (or fragment) to render

        Returns:
            RenderResult with the output text, metrics and diagnostics

        Raises:
            RenderDepthError: the tree is nested deeper than ``max_depth``
            TypeError: an object that is not a Node was found in the tree
        """
        start_time = time.time()
        if isinstance(nodes, Node):
            nodes = (nodes,)

        result = RenderResult(output="", correlation_id=self.correlation_id)
        parts: List[str] = []
        # Part counts at which a free attribute fragment was last emitted
        free_attribute_ends: List[int] = []
        indent_unit = (
            self.config.indentation.unit
            if self.config.indentation is not None
            else None
        )

        stack: List[_WorkItem] = [(_OPEN, node, 0) for node in reversed(nodes)]
        try:
            while stack:
                action, item, depth = stack.pop()
                if action == _CLOSE:
                    self._close_element(item, depth, parts, indent_unit)
                    continue
                self._open_node(
                    item, depth, parts, stack, result, indent_unit, free_attribute_ends
                )
        except MarkupError:
            self.logger.error(
                "Render aborted",
                extra={"elements_rendered": result.metrics.elements_rendered},
            )
            raise

        result.output = "".join(parts)
        result.metrics.output_length = len(result.output)
        result.metrics.processing_time_ms = (time.time() - start_time) * 1000

        self.logger.debug(
            "Render completed",
            extra={
                "elements": result.metrics.elements_rendered,
                "output_length": result.metrics.output_length,
                "processing_time_ms": result.metrics.processing_time_ms,
            },
        )
        return result

    def _open_node(
        self,
        node: Any,
        depth: int,
        parts: List[str],
        stack: List[_WorkItem],
        result: RenderResult,
        indent_unit: Optional[str],
        free_attribute_ends: List[int]
    ) -> None:
        metrics = result.metrics
        if isinstance(node, Element):
            self._open_element(node, depth, parts, stack, result, indent_unit)
        elif isinstance(node, TextNode):
            parts.append(escape_text(node.value))
            metrics.text_nodes_rendered += 1
        elif isinstance(node, RawNode):
            parts.append(node.value)
            metrics.raw_nodes_rendered += 1
        elif isinstance(node, GroupNode):
            # Members inherit the group's depth: a group is not a level.
            for member in reversed(node.members):
                stack.append((_OPEN, member, depth))
        elif isinstance(node, EmptyNode):
            pass
        elif isinstance(node, AttributeNode):
            # Outside of any element an attribute is a free-floating fragment;
            # consecutive fragments stay separated by a single space.
            formatted = self._format_attribute(node.attribute)
            if not (free_attribute_ends and free_attribute_ends[-1] == len(parts)):
                formatted = formatted.lstrip()
            parts.append(formatted)
            free_attribute_ends.append(len(parts))
            metrics.attributes_rendered += 1
        else:
            raise TypeError(f"Cannot render object of type {type(node).__name__}")

    def _open_element(
        self,
        node: Element[Any],
        depth: int,
        parts: List[str],
        stack: List[_WorkItem],
        result: RenderResult,
        indent_unit: Optional[str]
    ) -> None:
        if depth >= self.config.max_depth:
            raise RenderDepthError(node.name, depth, self.config.max_depth)

        metrics = result.metrics
        metrics.elements_rendered += 1
        metrics.record_depth(depth)

        attributes = node.all_attributes
        metrics.attributes_rendered += len(attributes)

        if indent_unit is not None and parts:
            parts.append("\n" + indent_unit * depth)
        parts.append("<" + node.name)
        parts.extend(self._format_attribute(attribute) for attribute in attributes)

        if node.closing_mode is ClosingMode.SELF_CLOSING:
            parts.append("/>")
            return

        parts.append(">")
        content = node.content

        if node.closing_mode is ClosingMode.NEVER_CLOSING:
            if content:
                result.add_diagnostic(
                    DiagnosticSeverity.WARNING,
                    f"Content of never-closing element <{node.name}> was not rendered",
                    "render_engine",
                    details={"ignored_children": len(content)},
                )
            return

        is_block = any(isinstance(child, Element) for child in content)
        stack.append((_CLOSE, (node.name, is_block), depth))
        for child in reversed(content):
            stack.append((_OPEN, child, depth + 1))

    @staticmethod
    def _close_element(
        item: Tuple[str, bool],
        depth: int,
        parts: List[str],
        indent_unit: Optional[str]
    ) -> None:
        name, is_block = item
        if indent_unit is not None and is_block:
            parts.append("\n" + indent_unit * depth)
        parts.append(f"</{name}>")

    @staticmethod
    def _format_attribute(attribute: Attribute) -> str:
        return f' {attribute.name}="{escape_attribute(attribute.value)}"'
