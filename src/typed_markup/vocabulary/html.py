"""A compact HTML vocabulary.

Covers what feeds need for embedded content (flow and list elements, links,
images) plus a minimal document shell. Element factories are generated the
way ``lxml.builder.ElementMaker`` exposes tags, one callable per tag name.
"""

from typing import Callable, Optional

from typed_markup.tree import (
    Attribute,
    Context,
    Document,
    Element,
    Node,
    element,
    never_closing,
    raw,
    self_closing,
    text,
)

DOCTYPE = "<!DOCTYPE html>"


class HTMLContext(Context):
    label = "any HTML element"


class HTMLRootContext(Context):
    label = "the top level of an HTML document"


class HTMLDocumentContext(HTMLContext):
    label = "an <html> element"


class HTMLHeadContext(HTMLContext):
    label = "an HTML <head>"


class HTMLBodyContext(HTMLContext):
    label = "HTML flow content"


class HTMLListContext(HTMLContext):
    label = "an HTML <ul> or <ol>"


class HTMLVoidContext(HTMLContext):
    label = "an HTML element that takes attributes only"


FlowFactory = Callable[..., Node[HTMLBodyContext]]


def _flow_element(name: str) -> FlowFactory:
    def build(*nodes: Node[HTMLBodyContext]) -> Node[HTMLBodyContext]:
        return element(
            name,
            *nodes,
            context=HTMLBodyContext,
            child_context=HTMLBodyContext,
        )

    build.__name__ = build.__qualname__ = name
    build.__doc__ = f"The ``<{name}>`` element."
    return build


def _list_element(name: str) -> Callable[..., Node[HTMLBodyContext]]:
    def build(*nodes: Node[HTMLListContext]) -> Node[HTMLBodyContext]:
        return element(
            name,
            *nodes,
            context=HTMLBodyContext,
            child_context=HTMLListContext,
        )

    build.__name__ = build.__qualname__ = name
    build.__doc__ = f"The ``<{name}>`` list; only ``li`` and attributes are accepted."
    return build


div = _flow_element("div")
p = _flow_element("p")
span = _flow_element("span")
a = _flow_element("a")
strong = _flow_element("strong")
em = _flow_element("em")
blockquote = _flow_element("blockquote")
h1 = _flow_element("h1")
h2 = _flow_element("h2")
h3 = _flow_element("h3")
h4 = _flow_element("h4")
h5 = _flow_element("h5")
h6 = _flow_element("h6")
ul = _list_element("ul")
ol = _list_element("ol")


def li(*nodes: Node[HTMLBodyContext]) -> Node[HTMLListContext]:
    return element(
        "li",
        *nodes,
        context=HTMLListContext,
        child_context=HTMLBodyContext,
    )


def img(*nodes: Node[HTMLVoidContext]) -> Node[HTMLBodyContext]:
    """A self-closing ``<img/>``; pass ``src`` and ``alt`` attribute nodes."""
    return self_closing(
        "img",
        *nodes,
        context=HTMLBodyContext,
        child_context=HTMLVoidContext,
    )


def br() -> Node[HTMLBodyContext]:
    return never_closing("br", context=HTMLBodyContext)


# Attributes, legal on any HTML element

def _attribute(name: str, value: str) -> Node[HTMLContext]:
    return Attribute(name, value).as_node(HTMLContext)


def href(value: str) -> Node[HTMLContext]:
    return _attribute("href", value)


def src(value: str) -> Node[HTMLContext]:
    return _attribute("src", value)


def alt(value: str) -> Node[HTMLContext]:
    return _attribute("alt", value)


def class_(value: str) -> Node[HTMLContext]:
    return _attribute("class", value)


def id_(value: str) -> Node[HTMLContext]:
    return _attribute("id", value)


def charset(value: str = "UTF-8") -> Node[HTMLContext]:
    return _attribute("charset", value)


def name(value: str) -> Node[HTMLContext]:
    return _attribute("name", value)


def content_attr(value: str) -> Node[HTMLContext]:
    """The ``content`` attribute of ``<meta>``."""
    return _attribute("content", value)


def lang(value: str) -> Node[HTMLContext]:
    return _attribute("lang", value)


# Document structure

def html(*nodes: Node[HTMLDocumentContext]) -> Element[HTMLRootContext]:
    return element(
        "html",
        *nodes,
        context=HTMLRootContext,
        child_context=HTMLDocumentContext,
    )


def head(*nodes: Node[HTMLHeadContext]) -> Node[HTMLDocumentContext]:
    return element(
        "head",
        *nodes,
        context=HTMLDocumentContext,
        child_context=HTMLHeadContext,
    )


def body(*nodes: Node[HTMLBodyContext]) -> Node[HTMLDocumentContext]:
    return element(
        "body",
        *nodes,
        context=HTMLDocumentContext,
        child_context=HTMLBodyContext,
    )


def title(value: str) -> Node[HTMLHeadContext]:
    return element("title", text(value), context=HTMLHeadContext)


def meta(*nodes: Node[HTMLVoidContext]) -> Node[HTMLHeadContext]:
    """A void ``<meta>`` element; pass attribute nodes only."""
    return never_closing(
        "meta",
        *nodes,
        context=HTMLHeadContext,
        child_context=HTMLVoidContext,
    )


def document(
    *nodes: Node[HTMLDocumentContext],
    language: Optional[str] = None
) -> Document[HTMLRootContext]:
    """``<!DOCTYPE html>`` followed by an ``<html>`` root."""
    root_nodes = (lang(language), *nodes) if language else nodes
    return Document((raw(DOCTYPE), html(*root_nodes)), context=HTMLRootContext)
