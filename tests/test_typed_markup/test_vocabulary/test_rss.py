"""Tests for the RSS vocabulary."""

from datetime import date, datetime, timezone

import pytest

from typed_markup.api import render
from typed_markup.shared import DocumentConfig
from typed_markup.tree import StructureViolationError, text
from typed_markup.vocabulary import html
from typed_markup.vocabulary.rss import (
    Language,
    atom_link,
    channel,
    content,
    content_nodes,
    description,
    description_nodes,
    feed,
    guid,
    is_perma_link,
    item,
    language,
    last_build_date,
    link,
    pub_date,
    rss,
    title,
    ttl,
    version,
)

RSS_OPEN = (
    '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom" '
    'xmlns:content="http://purl.org/rss/1.0/modules/content/">'
)


class TestChannelElements:
    """Test suite for channel-level constructors."""

    def test_title_escaped(self):
        assert render(item(title("A & B"))) == "<item><title>A &amp; B</title></item>"

    def test_atom_link(self):
        assert render(atom_link("https://example.com/feed")) == (
            '<atom:link href="https://example.com/feed" rel="self" '
            'type="application/rss+xml"/>'
        )

    def test_language(self):
        assert render(language(Language.SWEDISH)) == "<language>sv</language>"
        assert render(language("en-us")) == "<language>en-us</language>"

    def test_ttl(self):
        assert render(ttl(60)) == "<ttl>60</ttl>"
        assert render(ttl(0)) == "<ttl>0</ttl>"

    def test_ttl_validation(self):
        with pytest.raises(TypeError):
            ttl(True)
        with pytest.raises(TypeError):
            ttl("60")
        with pytest.raises(ValueError, match=">= 0"):
            ttl(-1)

    def test_last_build_date(self):
        moment = datetime(2019, 10, 5, 14, 30, tzinfo=timezone.utc)
        assert render(last_build_date(moment)) == (
            "<lastBuildDate>Sat, 5 Oct 2019 14:30:00 +0000</lastBuildDate>"
        )

    def test_link(self):
        assert render(link("https://example.com/?a&b")) == (
            "<link>https://example.com/?a&amp;b</link>"
        )

    def test_description(self):
        assert render(description("1 < 2")) == "<description>1 &lt; 2</description>"


class TestItemElements:
    """Test suite for item-level constructors."""

    def test_content_is_cdata(self):
        assert render(content("<p>hi</p>")) == (
            "<content:encoded><![CDATA[<p>hi</p>]]></content:encoded>"
        )

    def test_content_nodes(self):
        node = content_nodes(html.p(text("a & b")), html.br())
        assert render(node) == (
            "<content:encoded><![CDATA[<p>a &amp; b</p><br>]]></content:encoded>"
        )

    def test_content_nodes_rejects_rss_nodes(self):
        with pytest.raises(StructureViolationError, match="<content:encoded>"):
            content_nodes(title("x"))

    def test_description_nodes(self):
        node = description_nodes(html.strong(text("Bold")))
        assert render(node) == (
            "<description><![CDATA[<strong>Bold</strong>]]></description>"
        )

    def test_guid(self):
        node = guid(text("https://example.com/1"), is_perma_link(False))
        assert render(node) == (
            '<guid isPermaLink="false">https://example.com/1</guid>'
        )

    def test_pub_date_time_zone_applied(self):
        moment = datetime(2019, 10, 5, 14, 30, tzinfo=timezone.utc)
        assert render(pub_date(moment, "Europe/Stockholm")) == (
            "<pubDate>Sat, 5 Oct 2019 16:30:00 +0200</pubDate>"
        )

    def test_pub_date_from_date(self):
        assert render(pub_date(date(2019, 10, 5))) == (
            "<pubDate>Sat, 5 Oct 2019 00:00:00 +0000</pubDate>"
        )


class TestStructure:
    """Test suite for RSS nesting rules."""

    def test_shared_elements_legal_in_channel_and_item(self):
        channel(title("c"), link("/c"), description("c"), item(title("i"), link("/i")))

    def test_channel_only_element_rejected_in_item(self):
        with pytest.raises(StructureViolationError):
            item(language(Language.ENGLISH))

    def test_item_only_element_rejected_in_channel(self):
        with pytest.raises(StructureViolationError):
            channel(guid(text("x")))

    def test_item_rejected_inside_item(self):
        with pytest.raises(StructureViolationError):
            item(item())

    def test_title_rejected_directly_in_rss(self):
        with pytest.raises(StructureViolationError):
            rss(title("x"))

    def test_html_rejected_in_item(self):
        with pytest.raises(StructureViolationError):
            item(html.p(text("x")))


class TestFeed:
    """Test suite for complete feeds."""

    def test_minimal_feed(self):
        doc = feed(title("T"))
        assert doc.render() == (
            '<?xml version="1.0" encoding="UTF-8"?>'
            + RSS_OPEN
            + "<channel><title>T</title></channel></rss>"
        )

    def test_feed_without_declaration(self):
        doc = feed(config=DocumentConfig(include_declaration=False))
        assert doc.render() == RSS_OPEN + "<channel></channel></rss>"

    def test_single_channel_root(self):
        doc = feed(title("T"), item(title("A")), item(title("B")))
        assert doc.root.name == "rss"
        assert [e.name for e in doc.root.child_elements] == ["channel"]
        assert len(doc.root.find_all("item")) == 2

    def test_rss_with_explicit_version(self):
        assert render(rss(version("0.92"), channel())) == (
            '<rss version="0.92"><channel></channel></rss>'
        )

    def test_rss_without_channel_rejected(self):
        with pytest.raises(StructureViolationError, match="exactly one <channel>, got 0") as exc_info:
            rss(version())
        assert exc_info.value.offending is None
        assert exc_info.value.parent_name == "<rss>"

    def test_rss_with_two_channels_rejected(self):
        second = channel(title("B"))
        with pytest.raises(StructureViolationError, match="got 2") as exc_info:
            rss(channel(title("A")), second)
        assert exc_info.value.offending == second
