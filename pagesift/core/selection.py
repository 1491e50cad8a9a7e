#!/usr/bin/env python3
"""
Top candidate selection module.

This module contains the choice of the node that best represents the
article among the ranked candidates, and the assembly of that node and
its related siblings into a new content container.
"""

import logging

from ..utils.dom import (
    ancestors,
    element_children,
    get_attr,
    inner_text,
    is_element,
    is_tag,
    link_density,
    set_node_tag,
)
from ..utils.patterns import ALTER_TO_DIV_EXCEPTIONS, SENTENCE_END

logger = logging.getLogger(__name__)

MINIMUM_TOP_CANDIDATES = 3
# Candidates scoring at least this share of the best one are alternatives
ALTERNATIVE_SCORE_RATIO = 0.75


def _is_climb_boundary(node):
    return node is None or not is_element(node) or is_tag(node, "body")


def _promote_to_common_ancestor(top, top_candidates):
    """
    Promote top to an ancestor shared with the other strong candidates.

    When content is split over several columns, three or more candidates
    score close to the best. The first ancestor of the best candidate that
    also contains three of them wraps the whole article.
    """
    top_score = top_candidates[0].score
    alternative_ancestors = []
    for candidate in top_candidates[1:]:
        if top_score and candidate.score / top_score >= ALTERNATIVE_SCORE_RATIO:
            alternative_ancestors.append({id(a) for a in ancestors(candidate.node)})

    if len(alternative_ancestors) < MINIMUM_TOP_CANDIDATES:
        return top

    parent = top.parent
    while not _is_climb_boundary(parent):
        containing = sum(1 for chain in alternative_ancestors if id(parent) in chain)
        if containing >= MINIMUM_TOP_CANDIDATES:
            logger.debug("Promoting top candidate to shared ancestor <%s>", parent.name)
            return parent
        parent = parent.parent
    return top


def _climb_for_bonus(ctx, top):
    """Promote top to a scored ancestor that outscores it, stopping at weak ones."""
    last_score = ctx.scores.get(top)
    threshold = last_score / 3

    parent = top.parent
    while not _is_climb_boundary(parent):
        if parent not in ctx.scores:
            parent = parent.parent
            continue
        parent_score = ctx.scores.get(parent)
        if parent_score < threshold:
            break
        if parent_score > last_score:
            return parent
        last_score = parent_score
        parent = parent.parent
    return top


def select_top_candidate(ctx, top_candidates, page):
    """
    Choose the node the article is built around.

    With no candidate, or when the best candidate is the body, every child
    of the page is moved into a new div appended to the page. Otherwise the
    best candidate may be promoted to an ancestor shared by other strong
    candidates, to an outscoring ancestor, and past single-child wrappers.

    Args:
        ctx: ParseContext of the current attempt
        top_candidates: Ranked Candidate tuples, best first
        page: Search root (the body, or the document without one)

    Returns:
        tuple: (top candidate node, whether it had to be created)
    """
    if not top_candidates or is_tag(top_candidates[0].node, "body"):
        top = ctx.new_element("div")
        for child in list(page.contents):
            top.append(child)
        page.append(top)
        ctx.initialize_node(top)
        logger.debug("No usable candidate, wrapping the whole page")
        return top, True

    top = _promote_to_common_ancestor(top_candidates[0].node, top_candidates)
    if top not in ctx.scores:
        ctx.initialize_node(top)

    top = _climb_for_bonus(ctx, top)

    # Single-child wrappers add nothing
    parent = top.parent
    while not _is_climb_boundary(parent) and len(element_children(parent)) == 1:
        top = parent
        parent = top.parent

    if top not in ctx.scores:
        ctx.initialize_node(top)

    logger.debug("Top candidate: <%s> scored %.2f", top.name, ctx.scores.get(top))
    return top, False


def get_article_direction(top):
    """Text direction from the first of the candidate's parent, itself and ancestors with ``dir``."""
    parent = top.parent
    nodes = [parent, top] + (ancestors(parent) if parent is not None else [])
    for node in nodes:
        direction = get_attr(node, "dir")
        if direction:
            return direction
    return None


def _should_append_sibling(ctx, sibling, top, threshold):
    if sibling is top:
        return True

    top_class = get_attr(top, "class")
    bonus = 0
    if top_class and get_attr(sibling, "class") == top_class:
        bonus = ctx.scores.get(top) * 0.2

    if sibling in ctx.scores and ctx.scores.get(sibling) + bonus >= threshold:
        return True

    if sibling.name == "p":
        density = link_density(sibling)
        content = inner_text(sibling)
        length = len(content)
        if length > 80 and density < 0.25:
            return True
        if 0 < length < 80 and density == 0 and SENTENCE_END.search(content):
            return True
    return False


def aggregate_siblings(ctx, top):
    """
    Collect the top candidate and its related siblings into a new div.

    Args:
        ctx: ParseContext of the current attempt
        top: Top candidate node

    Returns:
        Tag: New ``<div>`` holding the article content
    """
    article_content = ctx.new_element("div")
    threshold = max(10, ctx.scores.get(top) * 0.2)

    parent = top.parent
    siblings = element_children(parent) if parent is not None else [top]

    for sibling in siblings:
        if not _should_append_sibling(ctx, sibling, top, threshold):
            continue
        if sibling.name not in ALTER_TO_DIV_EXCEPTIONS:
            logger.debug("Altering sibling <%s> to div", sibling.name)
            set_node_tag(sibling, "div")
        article_content.append(sibling)

    return article_content
