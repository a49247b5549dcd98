"""Rendering API with progressive disclosure.

Level 1 is a set of module-level functions (:func:`render`,
:func:`render_nodes`, :func:`render_document`) that return strings. Level 2 is
:class:`MarkupRenderer`, which carries a :class:`MarkupConfig`, a correlation
ID for logging, and can return a full :class:`RenderResult` or write to disk.
"""

import uuid
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, Union

from typed_markup.rendering import RenderEngine
from typed_markup.shared import (
    Indentation,
    MarkupConfig,
    RenderConfig,
    RenderResult,
    get_logger,
    set_logging_level,
)
from typed_markup.tree.nodes import Document, Node

Renderable = Union[Node[Any], Document[Any], Sequence[Node[Any]]]
IndentationLike = Union[Indentation, int, None]


def _coerce_indentation(indentation: IndentationLike) -> Optional[Indentation]:
    if indentation is None or isinstance(indentation, Indentation):
        return indentation
    if isinstance(indentation, bool) or not isinstance(indentation, int):
        raise TypeError("indentation must be an Indentation, an int or None")
    return Indentation.spaces(indentation)


def _engine_for(indentation: IndentationLike) -> RenderEngine:
    return RenderEngine(RenderConfig(indentation=_coerce_indentation(indentation)))


def render(tree: Union[Node[Any], Document[Any]], indentation: IndentationLike = None) -> str:
    """Render a node tree (or a document) to a string.

    Args:
        tree: Root node, typically an ``Element``
        indentation: ``None`` for compact output, an ``int`` for that many
            spaces per level, or an ``Indentation``

    Examples:
        >>> from typed_markup.tree import element, text
        >>> render(element("title", text("A & B")))
        '<title>A &amp; B</title>'
    """
    if isinstance(tree, Document):
        return render_document(tree, indentation=indentation)
    return _engine_for(indentation).render(tree).output


def render_nodes(nodes: Iterable[Node[Any]], indentation: IndentationLike = None) -> str:
    """Render an ordered sequence of sibling nodes as one fragment."""
    return _engine_for(indentation).render(tuple(nodes)).output


def render_document(document: Document[Any], indentation: IndentationLike = None) -> str:
    """Render all top-level nodes of a document."""
    return _engine_for(indentation).render(document.nodes).output


class MarkupRenderer:
    """Configured renderer for repeated use.

    A supplied configuration applies its ``global_.logging_level`` to the
    ``typed_markup`` logger hierarchy.

    Examples:
        >>> renderer = MarkupRenderer(MarkupConfig.pretty(indent=2))
        >>> result = renderer.render_with_result(tree)  # doctest: +SKIP
        >>> result.metrics.elements_rendered  # doctest: +SKIP
        12
    """

    def __init__(
        self,
        config: Optional[MarkupConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        if config is not None:
            # An explicit configuration owns the package logging threshold.
            set_logging_level(config.global_.logging_level)
        self.config = config or MarkupConfig()
        if correlation_id is None and self.config.global_.enable_correlation_tracking:
            correlation_id = uuid.uuid4().hex[:12]
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_renderer")
        self._engine = RenderEngine(self.config.render, correlation_id)

    def render(self, tree: Renderable) -> str:
        """Render a node, a sequence of sibling nodes or a document."""
        return self.render_with_result(tree).output

    def render_nodes(self, nodes: Iterable[Node[Any]]) -> str:
        return self.render_with_result(tuple(nodes)).output

    def render_document(self, document: Document[Any]) -> str:
        return self.render_with_result(document).output

    def render_with_result(self, tree: Renderable) -> RenderResult:
        """Render and return output together with metrics and diagnostics."""
        nodes = tree.nodes if isinstance(tree, Document) else tree
        result = self._engine.render(nodes)
        for diagnostic in result.diagnostics:
            self.logger.warning(
                diagnostic.message,
                extra={"details": diagnostic.details},
            )
        return result

    def render_to_file(
        self,
        tree: Renderable,
        path: Union[str, Path],
        encoding: Optional[str] = None
    ) -> RenderResult:
        """Render ``tree`` and write it to ``path``.

        The file is only written once rendering has fully succeeded.
        """
        result = self.render_with_result(tree)
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            result.output,
            encoding=encoding or self.config.document.encoding,
        )
        self.logger.info(
            "Rendered markup written",
            extra={"path": str(target), "output_length": result.metrics.output_length},
        )
        return result
