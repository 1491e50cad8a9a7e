"""
Tests for the document tree helpers.
"""
import pytest

from pagesift.utils.dom import (
    ancestors,
    document_element,
    get_attr,
    has_ancestor_tag,
    has_single_tag_inside,
    inner_text,
    is_element_without_content,
    is_phrasing_content,
    is_probably_visible,
    link_density,
    next_node,
    remove_and_get_next,
    remove_nodes,
    text_content,
)


class TestTextAccessors:
    """Test text content helpers."""

    def test_text_content_ignores_comments(self, soup):
        """Comments are strings in BeautifulSoup but not text."""
        doc = soup("<div>Hello <!-- hidden --><b>world</b></div>")
        assert text_content(doc.div) == "Hello world"

    def test_inner_text_normalizes_whitespace(self, soup):
        """Runs of whitespace collapse to one space and the ends are stripped."""
        doc = soup("<p>  one   two\n\n three  </p>")
        assert inner_text(doc.p) == "one two three"
        assert inner_text(doc.p, normalize_spaces=False) == "one   two\n\n three"

    def test_get_attr_joins_class_list(self, soup):
        """Multi-valued attributes come back as one string."""
        doc = soup('<div class="post main" id="story"></div>')
        assert get_attr(doc.div, "class") == "post main"
        assert get_attr(doc.div, "id") == "story"
        assert get_attr(doc.div, "missing") == ""


class TestTraversal:
    """Test the pre-order walk and ancestor lookups."""

    def test_next_node_visits_elements_in_document_order(self, soup):
        """The walk descends first, then moves to siblings, then climbs."""
        doc = soup("<div id='a'><p id='b'><span id='c'></span></p><p id='d'></p></div><div id='e'></div>")
        visited = []
        node = document_element(doc)
        while node is not None:
            visited.append(node["id"])
            node = next_node(node)
        assert visited == ["a", "b", "c", "d", "e"]

    def test_remove_and_get_next_skips_subtree(self, soup):
        """Removing a node continues with its next sibling."""
        doc = soup("<div><p id='x'><span></span></p><p id='y'></p></div>")
        following = remove_and_get_next(doc.find(id="x"))
        assert following["id"] == "y"
        assert doc.find(id="x") is None

    def test_document_element_without_html(self, soup):
        """Fragments parsed without an <html> start at the first element."""
        doc = soup("<body><p>Text</p></body>")
        assert document_element(doc).name == "body"

    def test_ancestors_nearest_first(self, soup):
        """Ancestors stop at the document and respect max_depth."""
        doc = soup("<html><body><div><p>x</p></div></body></html>")
        names = [a.name for a in ancestors(doc.p)]
        assert names == ["div", "body", "html"]
        assert [a.name for a in ancestors(doc.p, 2)] == ["div", "body"]

    def test_has_ancestor_tag_depth(self, soup):
        """Ancestors beyond max_depth are not found unless the depth is unlimited."""
        doc = soup("<table><tr><td><div><div><div><p>x</p></div></div></div></td></tr></table>")
        assert not has_ancestor_tag(doc.p, "table")
        assert has_ancestor_tag(doc.p, "table", max_depth=0)
        assert has_ancestor_tag(doc.p, "div")

    def test_has_ancestor_tag_filter(self, soup):
        """The filter must accept the matching ancestor."""
        doc = soup("<table class='data'><tr><td><p>x</p></td></tr></table>")
        assert has_ancestor_tag(doc.p, "table", -1, lambda t: "data" in get_attr(t, "class"))
        assert not has_ancestor_tag(doc.p, "table", -1, lambda t: False)


class TestNodePredicates:
    """Test structural predicates."""

    def test_has_single_tag_inside(self, soup):
        """Whitespace text is allowed around the single child."""
        doc = soup("<div> <p>x</p> </div><section>text<p>x</p></section>")
        assert has_single_tag_inside(doc.div, "p")
        assert not has_single_tag_inside(doc.section, "p")

    def test_is_element_without_content(self, soup):
        """Only line breaks and rules may remain in an empty element."""
        doc = soup("<div id='a'><br><hr></div><div id='b'><span></span></div><div id='c'>x</div>")
        assert is_element_without_content(doc.find(id="a"))
        assert not is_element_without_content(doc.find(id="b"))
        assert not is_element_without_content(doc.find(id="c"))

    def test_phrasing_content(self, soup):
        """Links count as phrasing content only when their children do."""
        doc = soup("<a id='a'><b>x</b></a><a id='b'><div>x</div></a><span>y</span>")
        assert is_phrasing_content(doc.find(id="a"))
        assert not is_phrasing_content(doc.find(id="b"))
        assert is_phrasing_content(doc.span)
        assert is_phrasing_content(doc.span.contents[0])

    @pytest.mark.parametrize("markup,visible", [
        ("<div>x</div>", True),
        ("<div style='display: none'>x</div>", False),
        ("<div style='color: red; visibility:hidden'>x</div>", False),
        ("<div hidden>x</div>", False),
        ("<div aria-hidden='true'>x</div>", False),
        ("<div aria-hidden='true' class='fallback-image'>x</div>", True),
    ])
    def test_is_probably_visible(self, soup, markup, visible):
        """Inline styles and hiding attributes make a node invisible."""
        assert is_probably_visible(soup(markup).div) is visible


class TestLinkDensity:
    """Test link density computation."""

    def test_link_density(self, soup):
        """Link text over total text."""
        doc = soup("<p><a href='/x'>abcde</a>fghij</p>")
        assert link_density(doc.p) == pytest.approx(0.5)

    def test_hash_links_are_discounted(self, soup):
        """In-page fragment links weigh 0.3."""
        doc = soup("<p><a href='#notes'>abcde</a>fghij</p>")
        assert link_density(doc.p) == pytest.approx(0.15)

    def test_empty_node(self, soup):
        """A node without text has no link density."""
        assert link_density(soup("<p></p>").p) == 0


class TestRemoveNodes:
    """Test bulk removal."""

    def test_remove_nodes_with_filter(self, soup):
        """Only accepted nodes are removed."""
        doc = soup("<div><p class='a'>1</p><p>2</p><p class='a'>3</p></div>")
        remove_nodes(doc.find_all("p"), lambda p: get_attr(p, "class") == "a")
        assert [p.get_text() for p in doc.find_all("p")] == ["2"]

    def test_remove_nested_nodes(self, soup):
        """Nested matches are removed along with their ancestors."""
        doc = soup("<div><div><div>x</div></div></div><p>y</p>")
        remove_nodes(doc.find_all("div"))
        assert str(doc) == "<p>y</p>"
