#!/usr/bin/env python3
"""
Content post-processing module.

This module contains the final passes over the extracted content: link
and media URI resolution, removal of redundant wrapper containers and
class stripping.
"""

from bs4 import NavigableString

from ..utils.dom import (
    element_children,
    first_element_child,
    get_attr,
    has_single_tag_inside,
    is_element_without_content,
    is_text,
    next_node,
    remove_and_get_next,
    text_content,
)
from ..utils.url import get_base_uri, resolve_srcset, to_absolute_uri

MEDIA_TAGS = ("img", "picture", "figure", "video", "audio", "source")


def _unwrap_javascript_link(doc, link):
    """Replace a ``javascript:`` link with its text, or with a span holding its children."""
    if len(link.contents) == 1 and is_text(link.contents[0]):
        link.replace_with(NavigableString(text_content(link)))
        return
    container = doc.new_tag("span")
    for child in list(link.contents):
        container.append(child)
    link.replace_with(container)


def fix_relative_uris(doc, article_content, document_uri):
    """
    Make link and media URIs in the content absolute.

    Args:
        doc: Document the content came from (for ``<base>`` and new nodes)
        article_content: Extracted content, modified in place
        document_uri: URI of the document, or None to leave URIs as they are
    """
    base_uri = get_base_uri(doc, document_uri)

    for link in article_content.find_all("a"):
        href = get_attr(link, "href")
        if not href:
            continue
        if href.startswith("javascript:"):
            _unwrap_javascript_link(doc, link)
        else:
            link["href"] = to_absolute_uri(href, base_uri, document_uri)

    for media in article_content.find_all(list(MEDIA_TAGS)):
        src = get_attr(media, "src")
        poster = get_attr(media, "poster")
        srcset = get_attr(media, "srcset")
        if src:
            media["src"] = to_absolute_uri(src, base_uri, document_uri)
        if poster:
            media["poster"] = to_absolute_uri(poster, base_uri, document_uri)
        if srcset:
            media["srcset"] = resolve_srcset(srcset, base_uri, document_uri)


def simplify_nested_elements(article_content):
    """
    Remove empty ``div``/``section`` wrappers and splice out single-child ones.

    A wrapper holding only another ``div`` or ``section`` is replaced by
    that child, which takes on the wrapper's attributes. The page
    containers (ids starting with ``readability``) are left in place.
    """
    node = article_content
    while node is not None:
        if (
            node.parent is not None
            and node.name in ("div", "section")
            and not get_attr(node, "id").startswith("readability")
        ):
            if is_element_without_content(node):
                node = remove_and_get_next(node)
                continue
            if has_single_tag_inside(node, "div") or has_single_tag_inside(node, "section"):
                child = first_element_child(node)
                for name, value in node.attrs.items():
                    child[name] = value
                node.replace_with(child.extract())
                node = child
                continue
        node = next_node(node)


def clean_classes(node, classes_to_preserve):
    """Strip every class not in classes_to_preserve from node and its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        kept = [cls for cls in get_attr(current, "class").split() if cls in classes_to_preserve]
        if kept:
            current["class"] = kept
        elif "class" in current.attrs:
            del current["class"]
        stack.extend(reversed(element_children(current)))


def post_process_content(doc, article_content, options):
    """
    Run the post-processing passes on the extracted content.

    Args:
        doc: Document the content came from
        article_content: Extracted content, modified in place
        options: ParserOptions of the parse
    """
    fix_relative_uris(doc, article_content, options.url)
    simplify_nested_elements(article_content)
    if not options.keep_classes:
        clean_classes(article_content, options.preserved_classes)
