"""Sitemap vocabulary (sitemaps.org protocol 0.9).

Builds `<urlset>` documents out of `<url>` entries, each carrying a location
and optional change frequency, priority and modification date::

    sitemap(
        url(loc("https://example.com"), changefreq(ChangeFrequency.DAILY)),
        url(loc("https://example.com/about"), priority(0.5)),
    )
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from typed_markup.shared import (
    DocumentConfig,
    TimeZoneLike,
    URLRepresentable,
    format_sitemap_date,
    url_string,
)
from typed_markup.tree import (
    Attribute,
    Context,
    Document,
    Element,
    Node,
    element,
    text,
    xml_declaration,
)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
IMAGE_NAMESPACE = "http://www.google.com/schemas/sitemap-image/1.1"


class SiteMapRootContext(Context):
    label = "the top level of a sitemap document"


class SiteMapURLSetContext(Context):
    label = "a sitemap <urlset>"


class SiteMapURLContext(Context):
    label = "a sitemap <url>"


class ChangeFrequency(Enum):
    """How often the content at a URL is expected to change."""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


def urlset(*nodes: Node[SiteMapURLSetContext]) -> Element[SiteMapRootContext]:
    """The ``<urlset>`` root, always declaring the sitemap and image namespaces first."""
    namespaces = (
        Attribute("xmlns", SITEMAP_NAMESPACE),
        Attribute("xmlns:image", IMAGE_NAMESPACE),
    )
    return element(
        "urlset",
        *(attr.as_node(SiteMapURLSetContext) for attr in namespaces),
        *nodes,
        context=SiteMapRootContext,
        child_context=SiteMapURLSetContext,
    )


def url(*nodes: Node[SiteMapURLContext]) -> Node[SiteMapURLSetContext]:
    return element(
        "url",
        *nodes,
        context=SiteMapURLSetContext,
        child_context=SiteMapURLContext,
    )


def loc(location: URLRepresentable) -> Node[SiteMapURLContext]:
    """The canonical location of the URL."""
    return element("loc", text(url_string(location)), context=SiteMapURLContext)


def changefreq(frequency: Union[ChangeFrequency, str]) -> Node[SiteMapURLContext]:
    frequency = ChangeFrequency(frequency)
    return element("changefreq", text(frequency.value), context=SiteMapURLContext)


def priority(value: float) -> Node[SiteMapURLContext]:
    """Relative indexing priority between 0.0 and 1.0."""
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"Sitemap priority must be between 0.0 and 1.0, got {value}")
    return element("priority", text(str(value)), context=SiteMapURLContext)


def lastmod(
    moment: Union[datetime, date],
    time_zone: TimeZoneLike = None
) -> Node[SiteMapURLContext]:
    """When the content was last modified, as a date in ``time_zone``."""
    return element(
        "lastmod",
        text(format_sitemap_date(moment, time_zone)),
        context=SiteMapURLContext,
    )


def sitemap(
    *nodes: Node[SiteMapURLSetContext],
    config: Optional[DocumentConfig] = None
) -> Document[SiteMapRootContext]:
    """A complete sitemap document: XML declaration plus ``<urlset>``."""
    config = config or DocumentConfig()
    prologue = (
        (xml_declaration(config.xml_version, config.encoding),)
        if config.include_declaration
        else ()
    )
    return Document((*prologue, urlset(*nodes)), context=SiteMapRootContext)
