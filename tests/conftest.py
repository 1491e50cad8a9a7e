import pytest
from bs4 import BeautifulSoup

from pagesift.core.context import ParseContext
from pagesift.core.options import ParserOptions


PARAGRAPHS = [
    "Cats in the suburbs have learned to open lever-style door handles, "
    "and owners say the habit spreads quickly once one cat in the street works it out.",
    "Researchers filmed forty households over six months, noting each attempt, "
    "each success, and the moment the owners decided to change the handles.",
    "Most cats jumped, hooked a paw over the lever, and pulled down with their full weight. "
    "A few used their heads instead, which the team had not expected at all.",
    "The study suggests that cats learn by watching people, not each other, "
    "although the authors admit the sample was small and the cats were not chosen at random.",
]


@pytest.fixture
def soup():
    """Parse markup with the builder the engine uses."""
    def _soup(markup):
        return BeautifulSoup(markup, "html.parser")
    return _soup


@pytest.fixture
def make_context(soup):
    """Build a ParseContext for a piece of markup."""
    def _make_context(markup, **options):
        doc = markup if isinstance(markup, BeautifulSoup) else soup(markup)
        return ParseContext(doc=doc, options=ParserOptions(**options))
    return _make_context


@pytest.fixture
def paragraphs():
    """Article paragraphs long enough to be scored."""
    return list(PARAGRAPHS)


@pytest.fixture
def article_html():
    """A complete article page with navigation, byline and footer."""
    body = "".join(f"<p>{text}</p>" for text in PARAGRAPHS)
    return (
        '<html lang="en"><head>'
        "<title>Cats Learn To Open Doors | The Daily Feline</title>"
        '<meta property="og:site_name" content="The Daily Feline">'
        '<meta name="description" content="How cats figured out door handles.">'
        "</head><body>"
        '<div class="header"><a href="/">Home</a><a href="/news">News</a></div>'
        '<div id="main" class="article-body">'
        "<h1>Cats Learn To Open Doors</h1>"
        '<p class="byline">By Jane Whisker</p>'
        f"{body}"
        "</div>"
        '<div class="footer">Copyright 2024 The Daily Feline</div>'
        "</body></html>"
    )


@pytest.fixture
def article_file(tmp_path, article_html):
    """The article page written to a temporary file."""
    path = tmp_path / "article.html"
    path.write_text(article_html, encoding="utf-8")
    return path
