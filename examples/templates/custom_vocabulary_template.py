"""Template for creating a custom markup vocabulary.

A vocabulary is a set of context markers (one per structural position) and
factory functions that build elements tagged with them. Copy this template
and replace the OPML names with your own dialect.
"""

from typing import Optional

from typed_markup.shared import DocumentConfig
from typed_markup.tree import (
    Attribute,
    Context,
    Document,
    Element,
    Node,
    element,
    self_closing,
    text,
    xml_declaration,
)


# One marker per position. Subclass a marker to make its nodes legal there too.
class OPMLRootContext(Context):
    label = "the top level of an OPML document"


class OPMLDocumentContext(Context):
    label = "an <opml> element"


class OPMLHeadContext(Context):
    label = "an OPML <head>"


class OPMLBodyContext(Context):
    label = "an OPML <body> or <outline>"


def opml(*nodes: Node[OPMLDocumentContext]) -> Element[OPMLRootContext]:
    return element(
        "opml",
        Attribute("version", "2.0").as_node(OPMLDocumentContext),
        *nodes,
        context=OPMLRootContext,
        child_context=OPMLDocumentContext,
    )


def head(*nodes: Node[OPMLHeadContext]) -> Node[OPMLDocumentContext]:
    return element(
        "head",
        *nodes,
        context=OPMLDocumentContext,
        child_context=OPMLHeadContext,
    )


def title(value: str) -> Node[OPMLHeadContext]:
    return element("title", text(value), context=OPMLHeadContext)


def body(*nodes: Node[OPMLBodyContext]) -> Node[OPMLDocumentContext]:
    return element(
        "body",
        *nodes,
        context=OPMLDocumentContext,
        child_context=OPMLBodyContext,
    )


def outline(label: str, xml_url: Optional[str] = None) -> Node[OPMLBodyContext]:
    attributes = [Attribute("text", label)]
    if xml_url is not None:
        attributes += [Attribute("type", "rss"), Attribute("xmlUrl", xml_url)]
    return self_closing("outline", attributes=attributes, context=OPMLBodyContext)


def subscriptions(
    *nodes: Node[OPMLDocumentContext],
    config: Optional[DocumentConfig] = None
) -> Document[OPMLRootContext]:
    config = config or DocumentConfig()
    prologue = (xml_declaration(config.xml_version, config.encoding),)
    return Document((*prologue, opml(*nodes)), context=OPMLRootContext)


if __name__ == "__main__":
    doc = subscriptions(
        head(title("Feeds")),
        body(outline("Example", "https://example.com/feed.rss")),
    )
    print(doc.render(indentation=2))
