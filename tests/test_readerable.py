"""
Tests for the readerable probe.
"""
import pytest

from pagesift import is_probably_readerable

LONG_PARAGRAPH = "Cats have learned to open doors. " * 9 + "The end is near now."


class TestIsProbablyReaderable:
    """Test the quick article check."""

    def test_article_is_readerable(self, soup):
        doc = soup("<body>" + f"<p>{LONG_PARAGRAPH}</p>" * 3 + "</body>")
        assert len(LONG_PARAGRAPH) == 317
        assert is_probably_readerable(doc)

    @pytest.mark.parametrize("template", [
        '<p class="sidebar">{}</p>',
        "<ul><li><p>{}</p></li></ul>",
        '<p style="display:none">{}</p>',
        "<p>{}</p>",
    ])
    def test_not_readerable(self, soup, template):
        """Unlikely, list, hidden and too few paragraphs do not count."""
        count = 1 if template == "<p>{}</p>" else 3
        doc = soup("<body>" + template.format(LONG_PARAGRAPH) * count + "</body>")
        assert not is_probably_readerable(doc)

    def test_div_with_line_breaks(self, soup):
        doc = soup("<body>" + f"<div>{LONG_PARAGRAPH}<br>more</div>" * 3 + "</body>")
        assert is_probably_readerable(doc)

    def test_custom_thresholds(self, soup):
        doc = soup(f"<body><p>{LONG_PARAGRAPH}</p></body>")
        assert is_probably_readerable(doc, min_content_length=100, min_score=10)

    def test_custom_visibility_checker(self, soup):
        doc = soup("<body>" + f"<p>{LONG_PARAGRAPH}</p>" * 3 + "</body>")
        assert not is_probably_readerable(doc, visibility_checker=lambda node: False)

    def test_document_not_modified(self, soup):
        doc = soup('<body><p class="sidebar">x</p>' + f"<p>{LONG_PARAGRAPH}</p>" * 3 + "</body>")
        before = str(doc)
        is_probably_readerable(doc)
        assert str(doc) == before
