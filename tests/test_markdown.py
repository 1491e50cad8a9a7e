"""
Tests for Markdown rendering and saving.
"""
import os

import pytest

from pagesift import ParseResult
from pagesift.content.markdown import (
    html_to_markdown,
    markdown_filename,
    result_to_markdown,
    save_markdown_file,
)


def _result(**overrides):
    values = dict(
        title="Cats Learn To Open Doors",
        byline="Jane Whisker",
        dir=None,
        lang="en",
        content="<p>Cats <b>really</b> open doors.</p>",
        text_content="Cats really open doors.",
        length=23,
        excerpt=None,
        site_name=None,
        published_time=None,
        node=None,
    )
    values.update(overrides)
    return ParseResult(**values)


class TestHtmlToMarkdown:
    """Test HTML conversion."""

    def test_emphasis(self):
        assert "**world**" in html_to_markdown("<p>Hello <b>world</b></p>")

    def test_url_header(self):
        markdown = html_to_markdown("<p>Hello</p>", "https://example.com/a")
        assert markdown.startswith("# Page from: https://example.com/a\n\n")


class TestResultToMarkdown:
    """Test article rendering."""

    def test_title_and_byline(self):
        markdown = result_to_markdown(_result())
        assert markdown.startswith("# Cats Learn To Open Doors\n\n*Jane Whisker*\n\n")
        assert "**really**" in markdown

    def test_without_header(self):
        markdown = result_to_markdown(_result(title="", byline=None))
        assert markdown == html_to_markdown(_result().content)


class TestMarkdownFiles:
    """Test file naming and saving."""

    @pytest.mark.parametrize("url,expected", [
        ("https://example.com/", "index.md"),
        ("https://example.com", "index.md"),
        ("https://example.com/blog/post/", "_blog_post.md"),
        ("https://example.com/blog/post/?id=3", "_blog_post__id_3.md"),
    ])
    def test_filename(self, url, expected):
        assert markdown_filename(url) == expected

    def test_long_filename_shortened(self):
        filename = markdown_filename("https://example.com/" + "a" * 300)
        assert len(filename) == 253
        assert filename.endswith(".md")

    def test_save(self, tmp_path):
        directory = str(tmp_path / "articles")
        path = save_markdown_file(directory, "https://example.com/blog/post", "# Cats\n")
        assert path == os.path.join(directory, "_blog_post.md")
        with open(path, encoding="utf-8") as f:
            assert f.read() == "# Cats\n"
