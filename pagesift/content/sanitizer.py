#!/usr/bin/env python3
"""
Article sanitizing module.

This module contains the cleanup applied to the assembled article content:
presentational attributes, layout tables, lazy images, forms, embeds,
share widgets and any block that looks more like boilerplate than prose.
"""

import logging

from ..core.context import Flags
from ..utils.dom import (
    char_count,
    element_children,
    first_element_child,
    get_attr,
    has_ancestor_tag,
    has_single_tag_inside,
    inner_text,
    is_phrasing_content,
    is_tag,
    link_density,
    match_string,
    next_node,
    next_significant_node,
    remove_and_get_next,
    remove_nodes,
    set_node_tag,
    text_content,
    text_density,
)
from ..utils.patterns import (
    AD_WORDS_PATTERN,
    B64_DATA_URL,
    DATA_TABLE_DESCENDANTS,
    DEPRECATED_SIZE_ATTRIBUTE_ELEMS,
    EMBED_TAGS,
    HEADING_TAGS,
    IMAGE_EXTENSION,
    LAZY_SRC,
    LAZY_SRCSET,
    LOADING_WORDS_PATTERN,
    PRESENTATIONAL_ATTRIBUTES,
    SHARE_ELEMENTS,
    TEXTISH_TAGS,
)

logger = logging.getLogger(__name__)

PAGE_ID = "readability-page-1"
PAGE_CLASS = "page"

# Inline base64 images shorter than this are placeholders
MIN_B64_IMAGE_LENGTH = 133


def clean_styles(root):
    """Strip presentational attributes from root and its descendants, leaving SVG alone."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.name == "svg":
            continue
        for name in PRESENTATIONAL_ATTRIBUTES:
            if name in node.attrs:
                del node[name]
        if node.name in DEPRECATED_SIZE_ATTRIBUTE_ELEMS:
            for name in ("width", "height"):
                if name in node.attrs:
                    del node[name]
        stack.extend(reversed(element_children(node)))


def _int_attr(node, name):
    try:
        return int(get_attr(node, name) or 0)
    except ValueError:
        return 0


def get_row_and_column_count(table):
    """Count a table's rows (honoring rowspan) and its widest row (honoring colspan)."""
    rows = 0
    columns = 0
    for tr in table.find_all("tr"):
        rows += _int_attr(tr, "rowspan") or 1
        columns_in_row = sum(_int_attr(td, "colspan") or 1 for td in tr.find_all("td"))
        columns = max(columns, columns_in_row)
    return rows, columns


def is_data_table(table):
    """
    Decide whether a table holds tabular data rather than page layout.

    Args:
        table: ``<table>`` element

    Returns:
        bool: True for data tables
    """
    if get_attr(table, "role") == "presentation":
        return False
    if get_attr(table, "datatable") == "0":
        return False
    if get_attr(table, "summary"):
        return True

    caption = table.find("caption")
    if caption is not None and inner_text(caption):
        return True

    if any(table.find(tag) is not None for tag in DATA_TABLE_DESCENDANTS):
        return True

    # Nested tables indicate a layout table
    if table.find("table") is not None:
        return False

    rows, columns = get_row_and_column_count(table)
    if rows >= 10 or columns > 4:
        return True
    return rows * columns > 10


def mark_data_tables(ctx, root):
    """Classify every table below root and record the result in the context."""
    for table in root.find_all("table"):
        ctx.mark_data_table(table, is_data_table(table))


def fix_lazy_images(ctx, root):
    """
    Promote lazy-loading image attributes to ``src``/``srcset``.

    Tiny inline base64 placeholders are dropped when another attribute
    holds a real image URL. SVG placeholders are kept.
    """
    for elem in root.find_all(["img", "picture", "figure"]):
        src = get_attr(elem, "src")
        match = B64_DATA_URL.match(src) if src else None
        if match:
            if match.group(1) == "image/svg+xml":
                continue
            src_could_be_removed = any(
                name != "src" and IMAGE_EXTENSION.search(get_attr(elem, name))
                for name in elem.attrs
            )
            if src_could_be_removed and len(src) - len(match.group(0)) < MIN_B64_IMAGE_LENGTH:
                del elem["src"]

        srcset = get_attr(elem, "srcset")
        if (get_attr(elem, "src") or (srcset and srcset != "null")) and "lazy" not in get_attr(
            elem, "class"
        ).lower():
            continue

        for name in list(elem.attrs):
            if name in ("src", "srcset", "alt"):
                continue
            value = get_attr(elem, name)
            copy_to = None
            if LAZY_SRCSET.search(value):
                copy_to = "srcset"
            elif LAZY_SRC.search(value):
                copy_to = "src"
            if copy_to is None:
                continue

            if elem.name in ("img", "picture"):
                elem[copy_to] = value
            elif elem.name == "figure" and elem.find(["img", "picture"]) is None:
                img = ctx.new_element("img")
                img[copy_to] = value
                elem.append(img)


def _is_allowed_embed(ctx, node):
    pattern = ctx.options.allowed_video_regex
    if any(pattern.search(get_attr(node, name)) for name in node.attrs):
        return True
    return node.name == "object" and pattern.search(node.decode_contents()) is not None


def clean(ctx, root, tag):
    """Remove every ``tag`` element below root, keeping embeds from allowed video providers."""
    is_embed = tag in EMBED_TAGS
    remove_nodes(
        root.find_all(tag),
        lambda node: not (is_embed and _is_allowed_embed(ctx, node)),
    )


def clean_matched_nodes(root, filter_fn):
    """Remove descendants of root for which filter_fn(node, match_string) is true."""
    end_of_search = next_node(root, ignore_self_and_kids=True)
    node = next_node(root)
    while node is not None and node is not end_of_search:
        if filter_fn(node, match_string(node)):
            node = remove_and_get_next(node)
        else:
            node = next_node(node)


def clean_share_elements(ctx, article_content):
    threshold = ctx.options.char_threshold
    for child in element_children(article_content):
        clean_matched_nodes(
            child,
            lambda node, match_str: (
                SHARE_ELEMENTS.search(match_str) is not None
                and len(text_content(node)) < threshold
            ),
        )


def clean_headers(ctx, root):
    """Remove ``<h1>``/``<h2>`` headings with a negative class weight."""
    remove_nodes(root.find_all(["h1", "h2"]), lambda node: ctx.class_weight(node) < 0)


def _embed_count(ctx, node):
    return sum(1 for embed in node.find_all(list(EMBED_TAGS)) if not _is_allowed_embed(ctx, embed))


def should_clean_conditionally(ctx, node, tag):
    """
    Decide whether a form, table, list or div is boilerplate.

    Data tables, their contents and code are always kept. A negative
    class weight, or an ad or loading placeholder text, always removes the
    node. Nodes with ten or more commas are kept. Otherwise the node is
    removed if any of the content heuristics flags it, except for lists of
    images.

    Args:
        ctx: ParseContext of the current attempt
        node: Element under consideration
        tag: Tag name being cleaned

    Returns:
        bool: True if the node should be removed
    """
    text = inner_text(node)
    content_length = len(text)

    is_list = tag in ("ul", "ol")
    if not is_list and content_length:
        list_length = sum(len(inner_text(lst)) for lst in node.find_all(["ul", "ol"]))
        is_list = list_length / content_length > 0.9

    if tag == "table" and ctx.is_data_table(node):
        return False
    if has_ancestor_tag(node, "table", -1, ctx.is_data_table):
        return False
    if has_ancestor_tag(node, "code"):
        return False
    if any(ctx.is_data_table(table) for table in node.find_all("table")):
        return False

    weight = ctx.class_weight(node)
    if weight < 0:
        return True

    if char_count(node, ",") >= 10:
        return False

    p = len(node.find_all("p"))
    img = len(node.find_all("img"))
    li = len(node.find_all("li")) - 100
    inputs = len(node.find_all("input"))
    heading_density = text_density(node, HEADING_TAGS)
    embed_count = _embed_count(ctx, node)

    if AD_WORDS_PATTERN.match(text) or LOADING_WORDS_PATTERN.match(text):
        return True

    density = link_density(node)
    textish_density = text_density(node, TEXTISH_TAGS)
    is_figure_child = has_ancestor_tag(node, "figure")
    modifier = ctx.options.link_density_modifier

    errors = []
    if not is_figure_child and img > 1 and p / img < 0.5:
        errors.append("Bad p to img ratio")
    if not is_list and li > p:
        errors.append("Too many li's outside of a list")
    if inputs > p // 3:
        errors.append("Too many inputs")
    if (
        not is_list
        and not is_figure_child
        and heading_density < 0.9
        and content_length < 25
        and (img == 0 or img > 2)
        and density > 0
    ):
        errors.append("Suspiciously short")
    if not is_list and weight < 25 and density > 0.2 + modifier:
        errors.append("Low weight and linky")
    if weight >= 25 and density > 0.5 + modifier:
        errors.append("High weight and linky")
    if (embed_count == 1 and content_length < 75) or embed_count > 1:
        errors.append("Suspicious embed")
    if img == 0 and textish_density == 0:
        errors.append("No useful content")

    if not errors:
        return False

    # Lists whose items each hold one image are galleries
    if is_list:
        if all(len(element_children(child)) <= 1 for child in element_children(node)):
            if img == len(node.find_all("li")):
                return False

    logger.debug("Cleaning conditionally <%s>: %s", node.name, ", ".join(errors))
    return True


def clean_conditionally(ctx, root, tag):
    """Remove ``tag`` elements below root that look like boilerplate."""
    if not ctx.flag_is_active(Flags.CLEAN_CONDITIONALLY):
        return
    remove_nodes(root.find_all(tag), lambda node: should_clean_conditionally(ctx, node, tag))


def collapse_single_cell_tables(root):
    """Replace tables made of a single cell with that cell, as a ``<p>`` or ``<div>``."""
    for table in root.find_all("table"):
        if table.parent is None:
            continue
        tbody = first_element_child(table) if has_single_tag_inside(table, "tbody") else table
        if not has_single_tag_inside(tbody, "tr"):
            continue
        row = first_element_child(tbody)
        if not has_single_tag_inside(row, "td"):
            continue
        cell = first_element_child(row)
        set_node_tag(cell, "p" if all(is_phrasing_content(c) for c in cell.contents) else "div")
        table.replace_with(cell.extract())


def remove_empty_paragraphs(root):
    remove_nodes(
        root.find_all("p"),
        lambda p: p.find(["img", "embed", "object", "iframe"]) is None
        and not inner_text(p, normalize_spaces=False),
    )


def remove_breaks_before_paragraphs(root):
    for br in root.find_all("br"):
        following = next_significant_node(br.next_sibling)
        if is_tag(following, "p"):
            br.extract()


def wrap_in_page(ctx, article_content, top, needed_to_create):
    """
    Wrap the article content in the page container.

    A top candidate created to hold the whole page becomes the container
    itself; otherwise a new one is created around the content.
    """
    if needed_to_create:
        top["id"] = PAGE_ID
        top["class"] = [PAGE_CLASS]
        return
    page = ctx.new_element("div", id=PAGE_ID)
    page["class"] = [PAGE_CLASS]
    for child in list(article_content.contents):
        page.append(child)
    article_content.append(page)


def prep_article(ctx, article_content):
    """
    Clean the assembled article content in place.

    Args:
        ctx: ParseContext of the current attempt
        article_content: Container built by the sibling aggregation
    """
    clean_styles(article_content)
    mark_data_tables(ctx, article_content)
    fix_lazy_images(ctx, article_content)

    clean_conditionally(ctx, article_content, "form")
    clean_conditionally(ctx, article_content, "fieldset")
    clean_share_elements(ctx, article_content)

    for tag in (
        "object", "embed", "footer", "link", "aside",
        "iframe", "input", "textarea", "select", "button",
    ):
        clean(ctx, article_content, tag)

    clean_headers(ctx, article_content)

    clean_conditionally(ctx, article_content, "table")
    clean_conditionally(ctx, article_content, "ul")
    clean_conditionally(ctx, article_content, "div")

    collapse_single_cell_tables(article_content)
    remove_empty_paragraphs(article_content)
    remove_breaks_before_paragraphs(article_content)

    for h1 in article_content.find_all("h1"):
        set_node_tag(h1, "h2")
