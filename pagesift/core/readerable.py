#!/usr/bin/env python3
"""
Readerable probe module.

This module contains a quick, read-only check of whether a document
probably holds an article, cheap enough to run before a full parse.
"""

import math

from ..utils.dom import (
    has_ancestor_tag,
    is_probably_visible,
    is_tag,
    match_string,
    text_content,
)
from ..utils.patterns import OK_MAYBE_ITS_A_CANDIDATE, UNLIKELY_CANDIDATES


def _candidate_nodes(doc):
    nodes = doc.find_all(["p", "pre", "article"])
    seen = {id(node) for node in nodes}
    for br in doc.find_all("br"):
        parent = br.parent
        if is_tag(parent, "div") and id(parent) not in seen:
            seen.add(id(parent))
            nodes.append(parent)
    return nodes


def is_probably_readerable(doc, min_content_length=140, min_score=20, visibility_checker=None):
    """
    Guess whether a document has enough prose to be worth parsing.

    Paragraphs, preformatted blocks, articles and divs holding ``<br>``
    each add the square root of their text length beyond
    min_content_length; the document is readerable once the total exceeds
    min_score. The document is not modified.

    Args:
        doc: Parsed document
        min_content_length: Shortest text that counts towards the score
        min_score: Score the document must exceed
        visibility_checker: Predicate telling visible nodes apart; defaults
            to the inline style and ``hidden``/``aria-hidden`` check

    Returns:
        bool: True if the document probably holds an article
    """
    is_visible = visibility_checker or is_probably_visible
    score = 0.0
    for node in _candidate_nodes(doc):
        if not is_visible(node):
            continue

        match_str = match_string(node)
        if UNLIKELY_CANDIDATES.search(match_str) and not OK_MAYBE_ITS_A_CANDIDATE.search(match_str):
            continue

        if node.name == "p" and has_ancestor_tag(node, "li", max_depth=0):
            continue

        length = len(text_content(node).strip())
        if length < min_content_length:
            continue

        score += math.sqrt(length - min_content_length)
        if score > min_score:
            return True
    return False
