"""Dialect vocabularies built on the core node model.

Each module defines its own context marker hierarchy and a set of factory
functions producing core nodes with fixed names and parameters:

    html: a compact HTML vocabulary, also used for embedded feed content
    rss: RSS 2.0 feeds
    sitemap: sitemaps.org documents
"""

from . import html, rss, sitemap

__all__ = ["html", "rss", "sitemap"]
