"""
End-to-end tests for the Readability parser.
"""
import json

import pytest
from bs4 import BeautifulSoup

from pagesift import DocumentTooLargeError, ParserOptions, Readability, parse

BRIDGE_SENTENCE = "The council voted to rebuild the bridge after the floods. "


def _ld_script(data):
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


class TestParseProperties:
    """Test the behaviour every document must show."""

    def test_short_texts_give_no_article(self):
        """Nothing is scored when every text is under 25 characters."""
        markup = (
            "<html><body><div><p>A short line.</p><p>Another short one.</p></div>"
            "<div><span>Tiny</span></div></body></html>"
        )
        assert parse(markup) is None

    def test_single_container_of_paragraphs(self, paragraphs):
        markup = "<html><body><div>" + "".join(f"<p>{p}</p>" for p in paragraphs) + "</div></body></html>"
        result = parse(markup)
        assert result is not None
        assert result.text_content == "".join(paragraphs)
        assert result.length == len(result.text_content)

    def test_navigation_left_out(self):
        markup = (
            "<body><nav>Home About</nav><article><p>"
            + "word " * 120
            + "</p></article></body>"
        )
        result = parse(markup, char_threshold=500)
        assert result is not None
        assert "Home About" not in result.node.get_text()
        assert result.length >= 500

    def test_single_short_paragraph(self):
        """All three relaxations are tried before giving up."""
        assert parse("<div><p>short</p></div>") is None

    def test_unscored_body_text_wrapped(self):
        """Long text outside any scored element is kept once cleaning is relaxed."""
        markup = "<html><body>" + BRIDGE_SENTENCE * 12 + "</body></html>"
        result = parse(markup)
        assert result is not None
        assert result.text_content == BRIDGE_SENTENCE * 12
        assert 'id="readability-page-1"' in result.content

    def test_unscored_list_wrapped(self):
        items = [f"Item {n} {BRIDGE_SENTENCE}and the repairs are expected to take a year" for n in range(10)]
        markup = "<html><body><ul>" + "".join(f"<li>{item}</li>" for item in items) + "</ul></body></html>"
        result = parse(markup)
        assert result is not None
        assert result.text_content == "".join(items)
        assert len(result.node.find_all("li")) == 10

    def test_short_unscored_text_gives_no_article(self):
        assert parse("<html><body>" + BRIDGE_SENTENCE * 2 + "</body></html>") is None


class TestArticlePage:
    """Test a complete article page."""

    def test_metadata(self, article_html):
        result = parse(article_html)
        assert result.title == "Cats Learn To Open Doors"
        assert result.byline == "By Jane Whisker"
        assert result.excerpt == "How cats figured out door handles."
        assert result.site_name == "The Daily Feline"
        assert result.lang == "en"
        assert result.dir is None
        assert result.published_time is None

    def test_content(self, article_html, paragraphs):
        """Navigation, footer, byline and the title heading are dropped."""
        result = parse(article_html)
        assert result.text_content == "".join(paragraphs)
        assert "Home" not in result.content
        assert "Copyright" not in result.content
        assert "<h1>" not in result.content
        assert 'id="readability-page-1"' in result.content
        assert 'class="page"' in result.content
        assert "article-body" not in result.content

    def test_direction(self, article_html):
        result = parse(article_html.replace("<body>", '<body dir="rtl">'))
        assert result.dir == "rtl"

    def test_excerpt_from_first_paragraph(self, article_html, paragraphs):
        markup = article_html.replace(
            '<meta name="description" content="How cats figured out door handles.">', ""
        )
        assert parse(markup).excerpt == paragraphs[0]

    def test_accepts_soup(self, article_html):
        doc = BeautifulSoup(article_html, "html.parser")
        result = Readability(doc).parse()
        assert result.title == "Cats Learn To Open Doors"

    def test_to_dict(self, article_html):
        data = parse(article_html).to_dict()
        assert "node" not in data
        assert data["title"] == "Cats Learn To Open Doors"
        assert json.loads(json.dumps(data)) == data


class TestParserLifecycle:
    """Test single use and the size limit."""

    def test_parse_only_once(self, article_html):
        reader = Readability(article_html)
        reader.parse()
        with pytest.raises(RuntimeError):
            reader.parse()

    def test_document_too_large(self, article_html):
        """The document is left untouched when the size limit is exceeded."""
        doc = BeautifulSoup(article_html, "html.parser")
        before = str(doc)
        with pytest.raises(DocumentTooLargeError) as exc_info:
            Readability(doc, max_elems_to_parse=3).parse()
        assert exc_info.value.limit == 3
        assert exc_info.value.element_count > 3
        assert str(doc) == before

    def test_limit_not_reached(self, article_html):
        assert Readability(article_html, max_elems_to_parse=1000).parse() is not None


class TestMetadataPrecedence:
    """Test where the title and byline come from."""

    def test_json_ld_wins(self, article_html):
        ld = _ld_script({
            "@context": "https://schema.org",
            "@type": "NewsArticle",
            "headline": "Felines Master Door Handles",
            "author": {"name": "LD Author"},
        })
        result = parse(article_html.replace("</head>", ld + "</head>"))
        assert result.title == "Felines Master Door Handles"
        assert result.byline == "LD Author"

    def test_json_ld_disabled(self, article_html):
        ld = _ld_script({
            "@context": "https://schema.org",
            "@type": "NewsArticle",
            "headline": "Felines Master Door Handles",
        })
        result = parse(article_html.replace("</head>", ld + "</head>"), disable_json_ld=True)
        assert result.title == "Cats Learn To Open Doors"

    def test_meta_author_keeps_byline_paragraph(self, article_html):
        """With a known author the byline paragraph stays in the content."""
        markup = article_html.replace("</head>", '<meta name="author" content="Jane Whisker"></head>')
        result = parse(markup)
        assert result.byline == "Jane Whisker"
        assert "By Jane Whisker" in result.text_content


class TestOutputOptions:
    """Test the options that shape the serialized content."""

    def test_custom_serializer(self, article_html):
        result = parse(article_html, serializer=lambda node: node.name)
        assert result.content == "div"

    def test_keep_classes(self, article_html):
        result = parse(article_html, keep_classes=True)
        assert 'class="article-body"' in result.content

    def test_classes_to_preserve(self, article_html):
        result = parse(article_html, classes_to_preserve=["article-body"])
        assert 'class="article-body"' in result.content

    def test_relative_links_resolved(self, article_html):
        markup = article_html.replace(
            "</div><div class=\"footer\">",
            '<p>Read <a href="/studies/cats">the full study</a> online.</p></div><div class="footer">',
        )
        result = Readability(markup, ParserOptions(url="https://example.com/news/cats.html")).parse()
        assert 'href="https://example.com/studies/cats"' in result.content
