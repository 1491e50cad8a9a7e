#!/usr/bin/env python3
"""
Candidate scoring module.

This module contains the single forward walk over the document that
removes obviously irrelevant nodes, turns loose inline content into
paragraphs and collects the elements worth scoring, plus the scoring and
ranking of the ancestors those elements vote for.
"""

import logging
from collections import namedtuple

from ..utils.dom import (
    ancestors,
    document_element,
    first_element_child,
    get_attr,
    has_ancestor_tag,
    has_child_block_element,
    has_single_tag_inside,
    inner_text,
    is_element,
    is_element_without_content,
    is_phrasing_content,
    is_probably_visible,
    is_tag,
    is_whitespace,
    link_density,
    match_string,
    next_node,
    remove_and_get_next,
    set_node_tag,
)
from ..utils.patterns import (
    BYLINE,
    COMMAS,
    EMPTY_CONTENT_CANDIDATES,
    OK_MAYBE_ITS_A_CANDIDATE,
    TAGS_TO_SCORE,
    TOKENIZE,
    UNLIKELY_CANDIDATES,
    UNLIKELY_ROLES,
)
from .context import Flags

logger = logging.getLogger(__name__)

Candidate = namedtuple("Candidate", ["node", "score"])

# Similarity above which an <h1>/<h2> is considered a copy of the title
TITLE_SIMILARITY_THRESHOLD = 0.75
MIN_SCORED_TEXT_LENGTH = 25
MAX_SCORED_ANCESTORS = 5


def _tokens(text):
    return [token for token in TOKENIZE.split(text.lower()) if token]


def text_similarity(text_a, text_b):
    """
    Measure how much of text_b is already contained in text_a.

    Args:
        text_a: Reference text
        text_b: Text being compared

    Returns:
        float: 1 minus the share of text_b made of tokens absent from
        text_a, or 0 when either text has no tokens
    """
    tokens_a = _tokens(text_a)
    tokens_b = _tokens(text_b)
    if not tokens_a or not tokens_b:
        return 0
    known = set(tokens_a)
    unique_b = [token for token in tokens_b if token not in known]
    return 1 - len(" ".join(unique_b)) / len(" ".join(tokens_b))


def header_duplicates_title(ctx, node):
    """True if node is an <h1>/<h2> repeating the article title."""
    if not is_tag(node, "h1", "h2"):
        return False
    heading = inner_text(node, normalize_spaces=False)
    return text_similarity(ctx.article_title or "", heading) > TITLE_SIMILARITY_THRESHOLD


def is_valid_byline(node, match_str):
    """True if node looks like an author line short enough to be one."""
    rel = get_attr(node, "rel")
    itemprop = get_attr(node, "itemprop")
    if not (rel == "author" or "author" in itemprop or BYLINE.search(match_str)):
        return False
    length = len(inner_text(node, normalize_spaces=False))
    return 0 < length < 100


def _byline_text(node):
    name_node = node.find(lambda tag: "name" in get_attr(tag, "itemprop"))
    return inner_text(name_node or node, normalize_spaces=False)


def _is_unlikely_candidate(node, match_str):
    return (
        UNLIKELY_CANDIDATES.search(match_str)
        and not OK_MAYBE_ITS_A_CANDIDATE.search(match_str)
        and not has_ancestor_tag(node, "table")
        and not has_ancestor_tag(node, "code")
        and node.name not in ("body", "a")
    )


def _wrap_phrasing_runs(ctx, div):
    """
    Move each run of phrasing children of div into a new <p> at the same position.

    Runs never start with whitespace, and whitespace ending a run is
    dropped once a block-level child closes it.
    """
    p = None
    child = div.contents[0] if div.contents else None
    while child is not None:
        following = child.next_sibling
        if is_phrasing_content(child):
            if p is not None:
                p.append(child)
            elif not is_whitespace(child):
                p = ctx.new_element("p")
                child.replace_with(p)
                p.append(child)
        elif p is not None:
            while p.contents and is_whitespace(p.contents[-1]):
                p.contents[-1].extract()
            p = None
        child = following


def collect_elements_to_score(ctx):
    """
    Walk the whole document and collect the elements worth scoring.

    Hidden nodes, the byline, a heading duplicating the title, unlikely
    candidates (while that flag is active) and empty containers are
    removed along the way. Divs holding only inline content become
    paragraphs.

    Args:
        ctx: ParseContext of the current attempt

    Returns:
        list: Elements to score, in document order
    """
    elements_to_score = []
    should_remove_title_header = True
    strip_unlikely = ctx.flag_is_active(Flags.STRIP_UNLIKELYS)

    node = document_element(ctx.doc)
    while node is not None:
        if node.name == "html":
            ctx.lang = get_attr(node, "lang") or None

        match_str = match_string(node)

        if not is_probably_visible(node):
            logger.debug("Removing hidden node - %s", match_str)
            node = remove_and_get_next(node)
            continue

        if (
            not ctx.byline
            and not (ctx.metadata is not None and ctx.metadata.byline)
            and is_valid_byline(node, match_str)
        ):
            ctx.byline = _byline_text(node)
            logger.debug("Found byline: %s", ctx.byline)
            node = remove_and_get_next(node)
            continue

        if should_remove_title_header and header_duplicates_title(ctx, node):
            logger.debug("Removing header: %s", inner_text(node))
            should_remove_title_header = False
            node = remove_and_get_next(node)
            continue

        if strip_unlikely:
            if _is_unlikely_candidate(node, match_str):
                logger.debug("Removing unlikely candidate - %s", match_str)
                node = remove_and_get_next(node)
                continue
            if get_attr(node, "role") in UNLIKELY_ROLES:
                logger.debug("Removing content with role %s - %s", get_attr(node, "role"), match_str)
                node = remove_and_get_next(node)
                continue

        if node.name in EMPTY_CONTENT_CANDIDATES and is_element_without_content(node):
            node = remove_and_get_next(node)
            continue

        if node.name in TAGS_TO_SCORE:
            elements_to_score.append(node)

        if node.name == "div":
            _wrap_phrasing_runs(ctx, node)

            if has_single_tag_inside(node, "p") and link_density(node) < 0.25:
                new_node = first_element_child(node)
                node.replace_with(new_node.extract())
                node = new_node
                elements_to_score.append(node)
            elif not has_child_block_element(node):
                set_node_tag(node, "p")
                elements_to_score.append(node)

        node = next_node(node)

    return elements_to_score


def score_elements(ctx, elements):
    """
    Score each element and propagate its score to its ancestors.

    Every ancestor touched for the first time is initialized from its tag
    and class weight and becomes a candidate. An element's score reaches
    its parent in full, its grandparent halved and more distant ancestors
    divided by three times their level.

    Args:
        ctx: ParseContext of the current attempt
        elements: Elements collected by ``collect_elements_to_score``

    Returns:
        list: Candidate nodes, in the order they were first touched
    """
    candidates = []
    for element in elements:
        if element.parent is None or not is_element(element.parent):
            continue

        text = inner_text(element)
        if len(text) < MIN_SCORED_TEXT_LENGTH:
            continue

        element_ancestors = ancestors(element, MAX_SCORED_ANCESTORS)
        if not element_ancestors:
            continue

        content_score = 1
        content_score += len(COMMAS.split(text))
        content_score += min(len(text) // 100, 3)

        for level, ancestor in enumerate(element_ancestors):
            if ancestor.parent is None:
                continue
            if ancestor not in ctx.scores:
                ctx.initialize_node(ancestor)
                candidates.append(ancestor)

            if level == 0:
                divider = 1
            elif level == 1:
                divider = 2
            else:
                divider = level * 3
            ctx.scores.add(ancestor, content_score / divider)

    return candidates


def rank_candidates(ctx, candidates):
    """
    Finalize candidate scores and keep the best ones.

    Each score is scaled by ``1 - link density``. Ties keep document order.

    Args:
        ctx: ParseContext of the current attempt
        candidates: Candidate nodes from ``score_elements``

    Returns:
        list: Up to ``nb_top_candidates`` Candidate tuples, best first
    """
    limit = ctx.options.nb_top_candidates
    top_candidates = []
    for node in candidates:
        score = ctx.scores.get(node) * (1 - link_density(node))
        ctx.scores.set(node, score)

        for index in range(limit):
            if index >= len(top_candidates) or score > top_candidates[index].score:
                top_candidates.insert(index, Candidate(node, score))
                if len(top_candidates) > limit:
                    top_candidates.pop()
                break
    return top_candidates


def find_top_candidates(ctx):
    """Run the scoring walk and return the ranked candidates."""
    elements = collect_elements_to_score(ctx)
    candidates = score_elements(ctx, elements)
    return rank_candidates(ctx, candidates)
