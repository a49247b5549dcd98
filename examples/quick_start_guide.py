#!/usr/bin/env python3
"""
Quick Start Guide for typed markup generation.

Builds a sitemap, an RSS feed with embedded HTML content and a small HTML
page, then shows what happens when elements are nested where they do not
belong.
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from typed_markup import MarkupConfig, MarkupRenderer, StructureViolationError, text
from typed_markup.vocabulary import html, rss, sitemap


def sitemap_example():
    print("🗺️  Step 1: Sitemap")
    print("-" * 30)

    doc = sitemap.sitemap(
        sitemap.url(
            sitemap.loc("https://example.com"),
            sitemap.changefreq(sitemap.ChangeFrequency.DAILY),
            sitemap.priority(1.0),
        ),
        sitemap.url(
            sitemap.loc("https://example.com/about"),
            sitemap.lastmod(datetime(2019, 10, 5, tzinfo=timezone.utc)),
        ),
    )
    print(doc.render(indentation=2))


def feed_example():
    print("\n📰 Step 2: RSS feed")
    print("-" * 30)

    published = datetime(2019, 10, 5, 14, 30, tzinfo=timezone.utc)
    doc = rss.feed(
        rss.title("Example & Co"),
        rss.link("https://example.com"),
        rss.description("News from Example & Co"),
        rss.language(rss.Language.ENGLISH_US),
        rss.atom_link("https://example.com/feed.rss"),
        rss.item(
            rss.title("Hello, world"),
            rss.guid(text("https://example.com/hello"), rss.is_perma_link(True)),
            rss.pub_date(published, "Europe/Stockholm"),
            rss.content_nodes(
                html.p(text("First post. "), html.a(html.href("/more"), text("More"))),
            ),
        ),
    )

    renderer = MarkupRenderer(MarkupConfig.pretty(indent=2))
    result = renderer.render_with_result(doc)
    print(result.output)
    print(f"\n✅ {result.metrics.elements_rendered} elements, "
          f"{result.metrics.output_length} characters")


def html_example():
    print("\n🌐 Step 3: HTML page")
    print("-" * 30)

    page = html.document(
        html.head(html.meta(html.charset()), html.title("Quick start")),
        html.body(
            html.h1(text("Lists")),
            html.ul(html.li(text("one")), html.li(text("two"))),
        ),
        language="en",
    )
    print(page.render())


def structure_example():
    print("\n🚫 Step 4: Misplaced elements are rejected")
    print("-" * 30)

    try:
        rss.item(sitemap.priority(0.5))
    except StructureViolationError as e:
        print(f"❌ {e}")


if __name__ == "__main__":
    sitemap_example()
    feed_example()
    html_example()
    structure_example()
