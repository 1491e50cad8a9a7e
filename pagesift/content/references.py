#!/usr/bin/env python3
"""
Page context module.

This module contains the builder that turns a page into the context fed
to a summarization prompt: reference-tagged lines of the extracted
article when one is found, and the cleaned plain text of the page body
otherwise.
"""

import copy
import logging
import re
from collections import namedtuple

from bs4 import BeautifulSoup

from ..core.parser import Readability
from ..utils.dom import inner_text, is_probably_visible, remove_nodes

logger = logging.getLogger(__name__)

PageContext = namedtuple("PageContext", ["has_article", "context", "highlight_map"])

REFERENCE_TAGS = ("p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "blockquote", "pre")
FALLBACK_REMOVED_TAGS = (
    "script", "style", "noscript", "iframe", "object", "embed", "svg",
    "canvas", "video", "audio", "map", "picture", "source",
)
TRUNCATION_MARKER = "...(content truncated)"


def _as_document(document):
    if isinstance(document, BeautifulSoup):
        return copy.copy(document)
    return BeautifulSoup(document, "html.parser")


def build_reference_lines(node, min_element_length=10):
    """
    Tag the key text blocks of the extracted content with reference ids.

    Args:
        node: Extracted content node
        min_element_length: Blocks with this many characters or fewer are skipped

    Returns:
        tuple: (``[REF<n>] text`` lines joined with newlines, map of
        ``str(n)`` to text); repeated texts reuse their first id
    """
    lines = []
    highlight_map = {}
    ids_by_text = {}
    for element in node.find_all(list(REFERENCE_TAGS)):
        text = inner_text(element)
        if len(text) <= min_element_length:
            continue
        ref_id = ids_by_text.get(text)
        if ref_id is None:
            ref_id = str(len(ids_by_text))
            ids_by_text[text] = ref_id
            highlight_map[ref_id] = text
        lines.append(f"[REF{ref_id}] {text}")
    context = "\n".join(lines) + "\n" if lines else ""
    return context, highlight_map


def build_fallback_text(doc, max_length=50000):
    """
    Reduce a page to readable plain text.

    Scripts, media and hidden elements are dropped and images become
    ``[Image: alt]`` markers. The text is truncated to max_length.

    Args:
        doc: Parsed document, left unmodified
        max_length: Maximum number of characters kept

    Returns:
        str: Cleaned page text
    """
    body = doc.find("body")
    root = copy.copy(body if body is not None else doc)

    remove_nodes(root.find_all(list(FALLBACK_REMOVED_TAGS)))
    remove_nodes(root.find_all(True), lambda node: not is_probably_visible(node))

    for img in root.find_all("img"):
        alt = (img.get("alt") or "").strip()
        if alt:
            img.replace_with(f"[Image: {alt}]")
        else:
            img.extract()

    text = root.get_text("\n")
    text = "\n".join(line.strip() for line in text.splitlines())
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text).strip()

    if len(text) > max_length:
        text = text[:max_length] + "\n" + TRUNCATION_MARKER
    return text


def build_page_context(
    doc, options=None, min_article_length=200, min_element_length=10, max_fallback_length=50000
):
    """
    Build the page context for a summarization prompt.

    A copy of the document is parsed; when the extracted article is long
    enough its key blocks become reference-tagged lines. Otherwise the
    cleaned text of the whole page is used.

    Args:
        doc: BeautifulSoup document or markup; never modified
        options: ParserOptions for the parse, or None for the defaults
        min_article_length: Shortest article text accepted as an article
        min_element_length: Passed to ``build_reference_lines``
        max_fallback_length: Passed to ``build_fallback_text``

    Returns:
        PageContext: (has_article, context, highlight_map)
    """
    if not isinstance(doc, BeautifulSoup):
        doc = BeautifulSoup(doc, "html.parser")

    result = Readability(_as_document(doc), options).parse()
    if result is not None and len(result.text_content) > min_article_length:
        context, highlight_map = build_reference_lines(result.node, min_element_length)
        if context:
            return PageContext(True, context, highlight_map)

    logger.debug("No article found, falling back to the page text")
    return PageContext(False, build_fallback_text(doc, max_fallback_length), {})


def format_prompt(question, page_context, language_prompt=""):
    """
    Build the user prompt for a question about the page.

    Args:
        question: The user's question or instruction
        page_context: PageContext from ``build_page_context``
        language_prompt: Optional instruction about the answer language

    Returns:
        str: Prompt text
    """
    heading = "Page article content:" if page_context.has_article else "Page HTML content:"
    prompt = f"{question}\n\n{heading}\n{page_context.context}"
    if language_prompt:
        prompt = f"{prompt}\n\n{language_prompt}"
    return prompt
