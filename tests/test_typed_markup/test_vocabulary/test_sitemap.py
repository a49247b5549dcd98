"""Tests for the sitemap vocabulary."""

from datetime import date, datetime, timezone
from urllib.parse import urlparse

import pytest

from typed_markup.api import render
from typed_markup.shared import DocumentConfig
from typed_markup.tree import Attribute, StructureViolationError, group, text
from typed_markup.vocabulary import rss
from typed_markup.vocabulary.sitemap import (
    ChangeFrequency,
    SiteMapURLSetContext,
    changefreq,
    lastmod,
    loc,
    priority,
    sitemap,
    url,
    urlset,
)

URLSET_OPEN = (
    '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9" '
    'xmlns:image="http://www.google.com/schemas/sitemap-image/1.1">'
)


class TestURLSet:
    """Test suite for the urlset root."""

    def test_single_url(self):
        tree = urlset(url(loc("https://example.com")))
        assert render(tree) == (
            URLSET_OPEN + "<url><loc>https://example.com</loc></url></urlset>"
        )

    def test_empty(self):
        assert render(urlset()) == URLSET_OPEN + "</urlset>"

    def test_namespaces_precede_caller_attributes(self):
        extra = Attribute("xmlns:video", "urn:video").as_node(SiteMapURLSetContext)
        output = render(urlset(extra, url(loc("/a"))))
        assert output.startswith(URLSET_OPEN[:-1] + ' xmlns:video="urn:video">')

    def test_grouped_urls(self):
        pages = ["/a", "/b"]
        output = render(urlset(group(url(loc(page)) for page in pages)))
        assert output == (
            URLSET_OPEN
            + "<url><loc>/a</loc></url><url><loc>/b</loc></url></urlset>"
        )


class TestURLChildren:
    """Test suite for url entries."""

    def test_full_entry(self):
        entry = url(
            loc("https://example.com/about"),
            lastmod(date(2019, 10, 5)),
            changefreq(ChangeFrequency.MONTHLY),
            priority(0.8),
        )
        assert render(entry) == (
            "<url><loc>https://example.com/about</loc><lastmod>2019-10-05</lastmod>"
            "<changefreq>monthly</changefreq><priority>0.8</priority></url>"
        )

    def test_loc_escapes_query(self):
        assert render(loc("https://example.com/?a=1&b=2")) == (
            "<loc>https://example.com/?a=1&amp;b=2</loc>"
        )

    def test_loc_accepts_parsed_url(self):
        assert render(loc(urlparse("https://example.com/x"))) == (
            "<loc>https://example.com/x</loc>"
        )

    def test_changefreq_from_string(self):
        assert render(changefreq("daily")) == "<changefreq>daily</changefreq>"

    def test_changefreq_unknown(self):
        with pytest.raises(ValueError):
            changefreq("sometimes")

    def test_priority_formatting(self):
        assert render(priority(1)) == "<priority>1.0</priority>"
        assert render(priority(0)) == "<priority>0.0</priority>"

    def test_priority_out_of_range(self):
        with pytest.raises(ValueError, match="between 0.0 and 1.0"):
            priority(1.5)

    def test_lastmod_time_zone(self):
        moment = datetime(2019, 10, 5, 23, 30, tzinfo=timezone.utc)
        assert render(lastmod(moment)) == "<lastmod>2019-10-05</lastmod>"
        assert render(lastmod(moment, "Asia/Tokyo")) == "<lastmod>2019-10-06</lastmod>"


class TestStructure:
    """Test suite for sitemap nesting rules."""

    def test_rss_element_rejected_in_url(self):
        with pytest.raises(StructureViolationError):
            url(rss.title("Not a sitemap element"))

    def test_priority_rejected_in_rss_item(self):
        with pytest.raises(StructureViolationError, match="<item>"):
            rss.item(priority(0.5))

    def test_loc_rejected_directly_in_urlset(self):
        with pytest.raises(StructureViolationError):
            urlset(loc("https://example.com"))

    def test_url_rejected_inside_url(self):
        with pytest.raises(StructureViolationError):
            url(url())

    def test_plain_text_allowed(self):
        assert render(url(text(""))) == "<url></url>"


class TestSitemapDocument:
    """Test suite for complete sitemap documents."""

    def test_declaration_and_root(self):
        doc = sitemap(url(loc("https://example.com")))
        assert doc.render() == (
            '<?xml version="1.0" encoding="UTF-8"?>'
            + URLSET_OPEN
            + "<url><loc>https://example.com</loc></url></urlset>"
        )
        assert doc.root.name == "urlset"

    def test_without_declaration(self):
        doc = sitemap(config=DocumentConfig(include_declaration=False))
        assert doc.render() == URLSET_OPEN + "</urlset>"

    def test_pretty(self):
        doc = sitemap(url(loc("/a")))
        assert doc.render(indentation=2) == (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            + URLSET_OPEN
            + "\n  <url>\n    <loc>/a</loc>\n  </url>\n</urlset>"
        )
