#!/usr/bin/env python3
"""
Document tree helpers.

This module contains the small set of tree operations the extraction
pipeline needs on top of BeautifulSoup: text content accessors, pre-order
walking, ancestor lookups, retagging and phrasing-content tests.

Nodes are compared by identity throughout. BeautifulSoup's ``Tag.__eq__``
compares markup, so ``==`` and ``in`` must never be used to find a node.
"""

import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from .patterns import (
    DIV_TO_P_ELEMS,
    HASH_URL,
    HAS_CONTENT,
    NORMALIZE,
    PHRASING_ELEMS,
    WHITESPACE,
)


def is_document(node):
    """Return True for the BeautifulSoup object standing in for the document node."""
    return isinstance(node, BeautifulSoup)


def is_element(node):
    """Return True for element nodes (tags that are not the document itself)."""
    return isinstance(node, Tag) and not isinstance(node, BeautifulSoup)


def is_text(node):
    """
    Return True for text nodes.

    Comments, doctypes, CDATA sections and processing instructions are
    strings in BeautifulSoup but are not text.
    """
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_tag(node, *names):
    """Return True if node is an element whose name is one of names."""
    return is_element(node) and node.name in names


def get_attr(node, name, default=""):
    """
    Read an attribute as a single string.

    BeautifulSoup returns multi-valued attributes such as ``class`` as
    lists; these are joined back with spaces.
    """
    if not is_element(node):
        return default
    value = node.attrs.get(name)
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return value


def match_string(node):
    """Return the ``class + " " + id`` string the class/id heuristics match against."""
    return get_attr(node, "class") + " " + get_attr(node, "id")


def text_content(node):
    """Concatenated text of node and all its descendants, like DOM textContent."""
    if node is None:
        return ""
    if isinstance(node, NavigableString):
        return str(node) if is_text(node) else ""
    return "".join(str(s) for s in node.descendants if is_text(s))


def inner_text(node, normalize_spaces=True):
    """Stripped text content, with runs of whitespace collapsed by default."""
    text = text_content(node).strip()
    if normalize_spaces:
        return NORMALIZE.sub(" ", text)
    return text


def char_count(node, separator=","):
    """Number of separator occurrences in the node's normalized text."""
    return len(inner_text(node).split(separator)) - 1


def element_children(node):
    if node is None:
        return []
    return [child for child in node.contents if is_element(child)]


def first_element_child(node):
    for child in node.contents:
        if is_element(child):
            return child
    return None


def previous_element_sibling(node):
    sibling = node.previous_sibling
    while sibling is not None and not is_element(sibling):
        sibling = sibling.previous_sibling
    return sibling


def next_element_sibling(node):
    sibling = node.next_sibling
    while sibling is not None and not is_element(sibling):
        sibling = sibling.next_sibling
    return sibling


def next_node(node, ignore_self_and_kids=False):
    """
    Return the next element of a depth-first, pre-order traversal.

    Descends into the first element child unless ignore_self_and_kids is
    set, otherwise moves to the next element sibling, otherwise climbs
    until an ancestor with a next element sibling is found.

    Args:
        node: Element to advance from
        ignore_self_and_kids: Skip the node's own subtree

    Returns:
        The next element, or None at the end of the tree
    """
    if not ignore_self_and_kids:
        child = first_element_child(node)
        if child is not None:
            return child
    while node is not None:
        sibling = next_element_sibling(node)
        if sibling is not None:
            return sibling
        node = node.parent
    return None


def remove_and_get_next(node):
    """Detach node from the tree and return the node the walk continues with."""
    following = next_node(node, ignore_self_and_kids=True)
    node.extract()
    return following


def next_significant_node(node):
    """Skip forward over whitespace-only text, returning the first other node."""
    while node is not None and not is_element(node) and WHITESPACE.match(str(node)):
        node = node.next_sibling
    return node


def ancestors(node, max_depth=0):
    """
    Return the element ancestors of node, nearest first.

    Args:
        node: Node to start from
        max_depth: Maximum number of ancestors to return (0 for all)

    Returns:
        list: Ancestor elements
    """
    result = []
    parent = node.parent
    while is_element(parent):
        result.append(parent)
        if max_depth and len(result) == max_depth:
            break
        parent = parent.parent
    return result


def has_ancestor_tag(node, tag_name, max_depth=3, filter_fn=None):
    """
    Check whether node has an ancestor with the given tag name.

    Args:
        node: Node to start from
        tag_name: Lowercase tag name to look for
        max_depth: Number of levels to climb; a value <= 0 climbs to the root
        filter_fn: Optional predicate the matching ancestor must satisfy

    Returns:
        bool: True if a matching ancestor was found
    """
    depth = 0
    while node.parent is not None:
        if 0 < max_depth < depth:
            return False
        parent = node.parent
        if is_tag(parent, tag_name) and (filter_fn is None or filter_fn(parent)):
            return True
        node = parent
        depth += 1
    return False


def set_node_tag(node, name):
    """
    Retag an element in place.

    Children, attributes and identity are preserved, so any state keyed by
    the node (scores, table classifications) follows it.
    """
    node.name = name
    return node


def has_single_tag_inside(element, tag_name):
    """True if element has exactly one element child, named tag_name, and no text with content."""
    children = element_children(element)
    if len(children) != 1 or children[0].name != tag_name:
        return False
    return not any(
        is_text(child) and HAS_CONTENT.search(str(child)) for child in element.contents
    )


def is_element_without_content(node):
    """True if node has no text and no children other than line breaks and rules."""
    if not is_element(node) or text_content(node).strip():
        return False
    children = element_children(node)
    return not children or len(children) == len(node.find_all("br")) + len(node.find_all("hr"))


def has_child_block_element(element):
    return any(
        is_element(child)
        and (child.name in DIV_TO_P_ELEMS or has_child_block_element(child))
        for child in element.contents
    )


def is_phrasing_content(node):
    """True for text nodes and inline-level elements that can live inside a paragraph."""
    if is_text(node):
        return True
    if not is_element(node):
        return False
    if node.name in PHRASING_ELEMS:
        return True
    return node.name in ("a", "del", "ins") and all(
        is_phrasing_content(child) for child in node.contents
    )


def is_whitespace(node):
    return (is_text(node) and not str(node).strip()) or is_tag(node, "br")


def is_single_image(node):
    """True if node is an image, or wraps exactly one image with no other text."""
    if is_tag(node, "img"):
        return True
    children = element_children(node)
    if len(children) != 1 or text_content(node).strip():
        return False
    return is_single_image(children[0])


def iter_elements(root):
    """Yield root and every element below it in document order."""
    if is_element(root):
        yield root
    for descendant in root.descendants:
        if is_element(descendant):
            yield descendant


def remove_nodes(nodes, filter_fn=None):
    """
    Detach nodes from the tree, last first.

    Args:
        nodes: Sequence of nodes, typically from ``find_all``
        filter_fn: Optional predicate; only nodes it accepts are removed
    """
    for node in reversed(list(nodes)):
        if node.parent is None:
            continue
        if filter_fn is None or filter_fn(node):
            node.extract()


def count_elements(doc):
    """Number of elements in the document."""
    return len(doc.find_all(True))


def document_element(doc):
    """
    Return the node the scoring walk starts from.

    Builders such as ``html.parser`` do not synthesize ``<html>``; in that
    case the walk starts at the document's first top-level element and
    reaches the remaining ones through their siblings.
    """
    root = doc.find("html")
    if root is not None:
        return root
    return first_element_child(doc)


_STYLE_DISPLAY_NONE = re.compile(r"(?:^|;)\s*display\s*:\s*none\s*(?:!important\s*)?(?:;|$)", re.I)
_STYLE_VISIBILITY_HIDDEN = re.compile(
    r"(?:^|;)\s*visibility\s*:\s*hidden\s*(?:!important\s*)?(?:;|$)", re.I
)


def is_probably_visible(node):
    """
    Guess from inline attributes whether an element is rendered.

    Elements hidden through an inline style, the ``hidden`` attribute or
    ``aria-hidden="true"`` are treated as invisible, except lazy-image
    fallbacks which carry ``aria-hidden`` but still hold the real image.
    """
    style = get_attr(node, "style")
    if style and (_STYLE_DISPLAY_NONE.search(style) or _STYLE_VISIBILITY_HIDDEN.search(style)):
        return False
    if node.has_attr("hidden"):
        return False
    if get_attr(node, "aria-hidden") == "true":
        return "fallback-image" in get_attr(node, "class")
    return True


def link_density(node):
    """
    Fraction of the node's text that sits inside links.

    In-page fragment links count for 0.3 of their text length.
    """
    text_length = len(inner_text(node))
    if text_length == 0:
        return 0
    link_length = 0.0
    for link in node.find_all("a"):
        href = get_attr(link, "href")
        coefficient = 0.3 if href and HASH_URL.match(href) else 1
        link_length += len(inner_text(link)) * coefficient
    return link_length / text_length


def text_density(node, tags):
    """Fraction of the node's text that sits inside descendants with the given tags."""
    text_length = len(inner_text(node))
    if text_length == 0:
        return 0
    children_length = sum(len(inner_text(child)) for child in node.find_all(list(tags)))
    return children_length / text_length
