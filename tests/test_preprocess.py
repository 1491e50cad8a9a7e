"""
Tests for document preprocessing.
"""
from pagesift.content.preprocess import (
    prep_document,
    remove_scripts,
    replace_brs,
    unwrap_noscript_images,
)


class TestNoscriptImages:
    """Test lazy image recovery from noscript elements."""

    def test_placeholder_replaced_by_noscript_image(self, soup):
        """The real image takes the placeholder's place and keeps its source."""
        doc = soup(
            '<div><img src="placeholder.gif" class="lazy">'
            '<noscript><img src="real.jpg"></noscript></div>'
        )
        unwrap_noscript_images(doc)
        images = doc.div.find_all("img", recursive=False)
        assert len(images) == 1
        assert images[0]["src"] == "real.jpg"
        assert images[0]["data-old-src"] == "placeholder.gif"

    def test_images_without_source_are_removed(self, soup):
        """Images with no source attribute of any kind never load."""
        doc = soup('<div><img class="spacer"><img data-lazy="cat.png"><img src="a.jpg"></div>')
        unwrap_noscript_images(doc)
        assert len(doc.find_all("img")) == 2
        assert doc.find("img", class_="spacer") is None

    def test_noscript_with_text_is_left_alone(self, soup):
        """Only noscripts holding a single image are unwrapped."""
        doc = soup('<div><img src="a.jpg"><noscript>Enable JavaScript</noscript></div>')
        unwrap_noscript_images(doc)
        assert doc.find("img")["src"] == "a.jpg"
        assert doc.find("noscript") is not None


class TestRemoveScripts:
    """Test script removal."""

    def test_scripts_and_noscripts_removed(self, soup):
        doc = soup("<div><script>var x;</script><noscript>No JS</noscript><p>Text</p></div>")
        remove_scripts(doc)
        assert str(doc) == "<div><p>Text</p></div>"


class TestReplaceBrs:
    """Test line break normalization."""

    def test_double_br_starts_paragraph(self, soup):
        """A run of breaks becomes a paragraph holding the following text."""
        doc = soup("<div>foo<br>bar<br><br>abc</div>")
        replace_brs(doc)
        assert len(doc.find_all("br")) == 1
        assert doc.div.find("p").get_text() == "abc"

    def test_whitespace_between_breaks(self, soup):
        """Whitespace between breaks does not interrupt the run."""
        doc = soup("<div>foo<br> <br> <br>abc <b>def</b></div>")
        replace_brs(doc)
        assert doc.find("br") is None
        assert doc.div.find("p").get_text().strip() == "abc def"

    def test_paragraph_stops_at_block(self, soup):
        """Block-level content ends the new paragraph."""
        doc = soup("<div>foo<br><br>abc<div>block</div></div>")
        replace_brs(doc)
        p = doc.div.find("p")
        assert p.get_text() == "abc"
        assert p.next_sibling.name == "div"

    def test_single_br_is_kept(self, soup):
        doc = soup("<p>one<br>two</p>")
        replace_brs(doc)
        assert str(doc) == "<p>one<br/>two</p>"

    def test_nested_paragraph_parent_becomes_div(self, soup):
        """A paragraph cannot hold a paragraph."""
        doc = soup("<p>foo<br><br>bar</p>")
        replace_brs(doc)
        assert doc.find("div") is not None
        assert doc.div.find("p").get_text() == "bar"


class TestPrepDocument:
    """Test whole-document preparation."""

    def test_styles_removed_and_fonts_retagged(self, soup):
        doc = soup(
            "<html><head><style>p {}</style></head>"
            "<body><font color='red'>Old</font></body></html>"
        )
        font = doc.find("font")
        prep_document(doc)
        assert doc.find("style") is None
        assert doc.find("font") is None
        assert font.name == "span"
        assert font.get_text() == "Old"
