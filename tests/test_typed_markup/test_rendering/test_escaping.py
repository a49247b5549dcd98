"""Tests for text and attribute escaping."""

from typed_markup.rendering.escaping import escape_attribute, escape_text


class TestEscapeText:
    """Test suite for escape_text."""

    def test_markup_characters(self):
        assert escape_text("a & <b>") == "a &amp; &lt;b&gt;"

    def test_quotes_left_alone(self):
        assert escape_text('say "hi"') == 'say "hi"'

    def test_existing_entity_escaped_again(self):
        """Test that input is treated as text, never as markup."""
        assert escape_text("&amp;") == "&amp;amp;"

    def test_plain_text_unchanged(self):
        assert escape_text("Hello, world") == "Hello, world"
        assert escape_text("") == ""


class TestEscapeAttribute:
    """Test suite for escape_attribute."""

    def test_quotes_escaped(self):
        assert escape_attribute('a "b" & <c>') == "a &quot;b&quot; &amp; &lt;c&gt;"

    def test_url_with_query(self):
        assert escape_attribute("/search?q=a&page=2") == "/search?q=a&amp;page=2"
