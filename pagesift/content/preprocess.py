#!/usr/bin/env python3
"""
Document preprocessing module.

This module contains the passes run over the whole document before any
scoring: lazy-image recovery from ``<noscript>``, script and style
removal, line-break normalization and legacy tag rewriting.
"""

import logging

from ..utils.dom import (
    get_attr,
    is_phrasing_content,
    is_single_image,
    is_tag,
    is_whitespace,
    first_element_child,
    next_significant_node,
    previous_element_sibling,
    remove_nodes,
    set_node_tag,
)
from ..utils.patterns import IMAGE_EXTENSION

logger = logging.getLogger(__name__)

IMAGE_SOURCE_ATTRIBUTES = ("src", "srcset", "data-src", "data-srcset")


def _has_image_source(img):
    if any(img.has_attr(name) for name in IMAGE_SOURCE_ATTRIBUTES):
        return True
    return any(IMAGE_EXTENSION.search(get_attr(img, name)) for name in img.attrs)


def unwrap_noscript_images(doc):
    """
    Replace lazy-loading placeholder images with the real image from a noscript.

    Pages that lazy-load images often put a placeholder ``<img>`` in the
    markup followed by a ``<noscript>`` holding the real one. Since scripts
    are removed, the noscript image replaces the placeholder. Attributes
    of the placeholder that look like image sources are carried over,
    renamed to ``data-old-<name>`` when the new image already has them.

    Args:
        doc: Parsed document, modified in place
    """
    # Images with no source of any kind are placeholders that never load
    remove_nodes(doc.find_all("img"), lambda img: not _has_image_source(img))

    for noscript in doc.find_all("noscript"):
        if noscript.parent is None or not is_single_image(noscript):
            continue
        prev = previous_element_sibling(noscript)
        if prev is None or not is_single_image(prev):
            continue

        replacement = first_element_child(noscript)
        prev_img = prev if is_tag(prev, "img") else prev.find("img")
        new_img = noscript.find("img")

        for name in list(prev_img.attrs):
            value = get_attr(prev_img, name)
            if not value:
                continue
            if name in ("src", "srcset") or IMAGE_EXTENSION.search(value):
                if get_attr(new_img, name) == value:
                    continue
                attr_name = f"data-old-{name}" if new_img.has_attr(name) else name
                new_img[attr_name] = value

        logger.debug("Unwrapping noscript image in place of <%s>", prev.name)
        prev.replace_with(replacement.extract())


def remove_scripts(doc):
    """Remove every ``<script>`` and ``<noscript>`` element."""
    remove_nodes(doc.find_all(["script", "noscript"]))


def replace_brs(root):
    """
    Turn runs of two or more ``<br>`` into paragraph boundaries.

    The first ``<br>`` of a run is replaced by a new ``<p>`` which absorbs
    the phrasing content that follows it, up to the next ``<br><br>`` or
    block-level node.

    Args:
        root: Element whose descendants are rewritten
    """
    doc = _owner_document(root)
    for br in root.find_all("br"):
        if br.parent is None:
            continue
        following = br.next_sibling
        replaced = False

        # Remove the <br>s that follow, skipping whitespace between them
        following = next_significant_node(following)
        while is_tag(following, "br"):
            replaced = True
            sibling = following.next_sibling
            following.extract()
            following = next_significant_node(sibling)

        if not replaced:
            continue

        p = doc.new_tag("p")
        br.replace_with(p)

        following = p.next_sibling
        while following is not None:
            # A second <br><br> ends the paragraph
            if is_tag(following, "br"):
                after = next_significant_node(following.next_sibling)
                if is_tag(after, "br"):
                    break
            if not is_phrasing_content(following):
                break
            sibling = following.next_sibling
            p.append(following)
            following = sibling

        while p.contents and is_whitespace(p.contents[-1]):
            p.contents[-1].extract()

        if is_tag(p.parent, "p"):
            set_node_tag(p.parent, "div")


def _owner_document(node):
    while node.parent is not None:
        node = node.parent
    return node


def prep_document(doc):
    """
    Prepare the document for scoring.

    Removes styles, normalizes ``<br>`` runs inside the body and retags
    ``<font>`` elements to ``<span>``.

    Args:
        doc: Parsed document, modified in place
    """
    remove_nodes(doc.find_all("style"))

    body = doc.find("body")
    replace_brs(body if body is not None else doc)

    for font in doc.find_all("font"):
        set_node_tag(font, "span")

