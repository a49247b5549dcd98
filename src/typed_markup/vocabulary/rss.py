"""RSS 2.0 vocabulary.

A feed is an ``<rss>`` root holding exactly one ``<channel>``, which in turn
holds channel metadata and ``<item>`` entries::

    feed(
        title("My blog"),
        link("https://example.com"),
        atom_link("https://example.com/feed.rss"),
        item(
            title("Hello"),
            guid(text("https://example.com/hello"), is_perma_link(True)),
            pub_date(datetime(2019, 10, 5, tzinfo=timezone.utc)),
            content("<p>Hello, world</p>"),
        ),
    )

Every date constructor applies the time zone it is given; ``None`` means UTC.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from typed_markup.api.renderer import render_nodes
from typed_markup.shared import (
    DocumentConfig,
    TimeZoneLike,
    URLRepresentable,
    format_rss_date,
    url_string,
)
from typed_markup.tree import (
    Attribute,
    Context,
    Document,
    Element,
    Node,
    StructureViolationError,
    cdata,
    element,
    self_closing,
    text,
    validate_children,
    xml_declaration,
)
from typed_markup.vocabulary.html import HTMLBodyContext

ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"
CONTENT_NAMESPACE = "http://purl.org/rss/1.0/modules/content/"
RSS_VERSION = "2.0"


class RSSRootContext(Context):
    label = "the top level of an RSS document"


class RSSFeedContext(Context):
    label = "an <rss> element"


class RSSContentContext(Context):
    label = "an RSS <channel> or <item>"


class RSSChannelContext(RSSContentContext):
    label = "an RSS <channel>"


class RSSItemContext(RSSContentContext):
    label = "an RSS <item>"


class RSSGUIDContext(Context):
    label = "an RSS <guid>"


class Language(Enum):
    """Common channel languages (RFC 1766 codes)."""

    ARABIC = "ar"
    CHINESE = "zh"
    DANISH = "da"
    DUTCH = "nl"
    ENGLISH = "en"
    ENGLISH_UK = "en-gb"
    ENGLISH_US = "en-us"
    FINNISH = "fi"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    JAPANESE = "ja"
    KOREAN = "ko"
    NORWEGIAN = "no"
    POLISH = "pl"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    SPANISH = "es"
    SWEDISH = "sv"
    TURKISH = "tr"


# Top level

def rss(*nodes: Node[RSSFeedContext]) -> Element[RSSRootContext]:
    """The ``<rss>`` root element.

    Raises:
        StructureViolationError: a child is not legal in ``<rss>``, or the
            element does not hold exactly one ``<channel>``
    """
    root = element(
        "rss",
        *nodes,
        context=RSSRootContext,
        child_context=RSSFeedContext,
    )
    channels = [child for child in root.child_elements if child.name == "channel"]
    if len(channels) != 1:
        raise StructureViolationError(
            "<rss>",
            RSSFeedContext,
            channels[1] if channels else None,
            message=f"<rss> must contain exactly one <channel>, got {len(channels)}",
        )
    return root


def version(value: str = RSS_VERSION) -> Node[RSSFeedContext]:
    return Attribute("version", value).as_node(RSSFeedContext)


def namespace(prefix: str, uri: str) -> Node[RSSFeedContext]:
    """An ``xmlns:prefix`` declaration on the ``<rss>`` element."""
    return Attribute(f"xmlns:{prefix}", uri).as_node(RSSFeedContext)


def channel(*nodes: Node[RSSChannelContext]) -> Node[RSSFeedContext]:
    return element(
        "channel",
        *nodes,
        context=RSSFeedContext,
        child_context=RSSChannelContext,
    )


def feed(
    *nodes: Node[RSSChannelContext],
    config: Optional[DocumentConfig] = None
) -> Document[RSSRootContext]:
    """A complete RSS document with the Atom and content namespaces declared."""
    config = config or DocumentConfig()
    prologue = (
        (xml_declaration(config.xml_version, config.encoding),)
        if config.include_declaration
        else ()
    )
    root = rss(
        version(),
        namespace("atom", ATOM_NAMESPACE),
        namespace("content", CONTENT_NAMESPACE),
        channel(*nodes),
    )
    return Document((*prologue, root), context=RSSRootContext)


# Channel

def title(value: str) -> Node[RSSContentContext]:
    """The title of a channel or an item."""
    return element("title", text(value), context=RSSContentContext)


def language(value: Union[Language, str]) -> Node[RSSChannelContext]:
    code = value.value if isinstance(value, Language) else value
    return element("language", text(code), context=RSSChannelContext)


def last_build_date(
    moment: Union[datetime, date],
    time_zone: TimeZoneLike = None
) -> Node[RSSChannelContext]:
    """When the feed was last generated, expressed in ``time_zone``."""
    return element(
        "lastBuildDate",
        text(format_rss_date(moment, time_zone)),
        context=RSSChannelContext,
    )


def ttl(minutes: int) -> Node[RSSChannelContext]:
    """Number of minutes the feed may be cached before refreshing."""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise TypeError("ttl must be an integer number of minutes")
    if minutes < 0:
        raise ValueError("ttl must be >= 0")
    return element("ttl", text(str(minutes)), context=RSSChannelContext)


def atom_link(href: URLRepresentable) -> Node[RSSChannelContext]:
    """A self-referencing ``<atom:link/>`` pointing at the feed's own URL."""
    return self_closing(
        "atom:link",
        attributes=(
            Attribute("href", url_string(href)),
            Attribute("rel", "self"),
            Attribute("type", "application/rss+xml"),
        ),
        context=RSSChannelContext,
    )


def item(*nodes: Node[RSSItemContext]) -> Node[RSSChannelContext]:
    return element(
        "item",
        *nodes,
        context=RSSChannelContext,
        child_context=RSSItemContext,
    )


# Item

def guid(*nodes: Node[RSSGUIDContext]) -> Node[RSSItemContext]:
    """The item's globally unique identifier: text plus optional ``is_perma_link``."""
    return element(
        "guid",
        *nodes,
        context=RSSItemContext,
        child_context=RSSGUIDContext,
    )


def is_perma_link(flag: bool) -> Node[RSSGUIDContext]:
    return Attribute("isPermaLink", "true" if flag else "false").as_node(RSSGUIDContext)


def content(html: str) -> Node[RSSItemContext]:
    """The item's full HTML content, wrapped in CDATA and left unescaped."""
    return element("content:encoded", cdata(html), context=RSSItemContext)


def content_nodes(*nodes: Node[HTMLBodyContext]) -> Node[RSSItemContext]:
    """The item's content built from HTML body nodes, rendered compactly."""
    validate_children("<content:encoded>", HTMLBodyContext, nodes)
    return content(render_nodes(nodes))


# Channel or item

def description(value: str) -> Node[RSSContentContext]:
    return element("description", text(value), context=RSSContentContext)


def description_nodes(*nodes: Node[HTMLBodyContext]) -> Node[RSSContentContext]:
    """A description built from HTML body nodes, embedded as CDATA."""
    validate_children("<description>", HTMLBodyContext, nodes)
    return element(
        "description",
        cdata(render_nodes(nodes)),
        context=RSSContentContext,
    )


def link(location: URLRepresentable) -> Node[RSSContentContext]:
    return element("link", text(url_string(location)), context=RSSContentContext)


def pub_date(
    moment: Union[datetime, date],
    time_zone: TimeZoneLike = None
) -> Node[RSSContentContext]:
    """When the content was published, expressed in ``time_zone``."""
    return element(
        "pubDate",
        text(format_rss_date(moment, time_zone)),
        context=RSSContentContext,
    )
