#!/usr/bin/env python3
"""
Article metadata extraction module.

This module contains functions for deriving the title, byline, excerpt,
site name and publication time of a page from its JSON-LD blocks, its
meta tags and, for the title, a cleanup pass over the ``<title>`` text.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ..utils.dom import inner_text, text_content
from ..utils.patterns import (
    CDATA_WRAPPER,
    JSON_LD_ARTICLE_TYPES,
    META_NAME,
    META_PROPERTY,
    NORMALIZE,
    TITLE_HIERARCHICAL_SEPARATOR,
    TITLE_SEPARATOR,
    TITLE_SEPARATORS,
)

logger = logging.getLogger(__name__)

_LEADING_SEGMENT = re.compile(r"^[^" + TITLE_SEPARATORS + r"]*[" + TITLE_SEPARATORS + r"]")
_SEPARATOR_CHARS = re.compile(r"[" + TITLE_SEPARATORS + r"]+")


@dataclass
class ArticleMetadata:
    """Metadata resolved for one document."""
    title: str = ""
    byline: Optional[str] = None
    excerpt: Optional[str] = None
    site_name: Optional[str] = None
    published_time: Optional[str] = None
    # Raw values collected from meta tags, keyed by normalized name
    meta: dict = field(default_factory=dict, repr=False)


def _is_article_type(value):
    return isinstance(value, str) and JSON_LD_ARTICLE_TYPES.search(value) is not None


def _string_field(value):
    return value.strip() if isinstance(value, str) else None


def _author_name(author):
    if isinstance(author, dict):
        return _string_field(author.get("name"))
    if isinstance(author, list):
        names = [_author_name(a) for a in author]
        names = [name for name in names if name]
        return ", ".join(names) if names else None
    return None


def get_json_ld(doc):
    """
    Read article metadata from schema.org JSON-LD blocks.

    Only objects whose ``@type`` is one of the article types are used. The
    first valid block wins; malformed blocks are skipped.

    Args:
        doc: Parsed document (scripts must not have been removed yet)

    Returns:
        dict: Any of ``title``, ``byline``, ``excerpt``, ``site_name`` and
        ``published_time``; empty when no usable block exists
    """
    for script in doc.find_all("script", attrs={"type": "application/ld+json"}):
        content = CDATA_WRAPPER.sub("", text_content(script))
        try:
            parsed = json.loads(content)
        except ValueError as e:
            logger.debug("Ignoring malformed JSON-LD block: %s", e)
            continue

        if isinstance(parsed, list):
            parsed = next(
                (item for item in parsed
                 if isinstance(item, dict) and _is_article_type(item.get("@type"))),
                None,
            )
        if not isinstance(parsed, dict):
            continue
        if not parsed.get("@context") or not _is_article_type(parsed.get("@type")):
            continue

        metadata = {}
        title = _string_field(parsed.get("name"))
        if title is None:
            title = _string_field(parsed.get("headline"))
        if title is not None:
            metadata["title"] = title

        byline = _author_name(parsed.get("author"))
        if byline:
            metadata["byline"] = byline

        excerpt = _string_field(parsed.get("description"))
        if excerpt is not None:
            metadata["excerpt"] = excerpt

        publisher = parsed.get("publisher")
        if isinstance(publisher, dict):
            site_name = _string_field(publisher.get("name"))
            if site_name is not None:
                metadata["site_name"] = site_name

        published = _string_field(parsed.get("datePublished"))
        if published is not None:
            metadata["published_time"] = published

        return metadata
    return {}


def get_meta_values(doc):
    """
    Collect whitelisted article/dc/og/twitter meta tags.

    Args:
        doc: Parsed document

    Returns:
        dict: Stripped content values keyed by lowercased name, e.g.
        ``og:title`` or ``description``
    """
    values = {}
    for meta in doc.find_all("meta"):
        content = meta.get("content")
        if not content:
            continue
        name = None
        prop = meta.get("property")
        if prop:
            match = META_PROPERTY.search(prop)
            if match:
                name = re.sub(r"\s", "", match.group(0).lower())
        if name is None and meta.get("name"):
            match = META_NAME.match(meta["name"])
            if match:
                name = re.sub(r"\s", "", match.group(0).lower()).replace(".", ":")
        if name:
            values[name] = content.strip()
    return values


def _word_count(text):
    return len(re.split(r"\s+", text))


def _heading_spans(title, doc):
    """Character ranges of the title covered by the text of an h1/h2."""
    spans = []
    for heading in doc.find_all(["h1", "h2"]):
        heading_text = inner_text(heading)
        if not heading_text:
            continue
        start = title.find(heading_text)
        while start != -1:
            spans.append((start, start + len(heading_text)))
            start = title.find(heading_text, start + 1)
    return spans


def get_article_title(doc):
    """
    Derive a clean article title from the document's ``<title>``.

    Site names joined with separators such as ``|`` or ``-`` and
    ``Section: Title`` prefixes are trimmed, and a lone ``<h1>`` replaces
    titles that are unusually long or short. The result falls back to the
    full title whenever trimming leaves too few words.

    Args:
        doc: Parsed document

    Returns:
        str: Title, or ``""`` when the document has none
    """
    title_node = doc.find("title")
    orig_title = NORMALIZE.sub(" ", text_content(title_node).strip()) if title_node else ""
    cur_title = orig_title
    had_hierarchical_separators = False

    # Separators that belong to the page's own heading are not site separators
    spans = _heading_spans(orig_title, doc)
    separators = [
        m for m in TITLE_SEPARATOR.finditer(orig_title)
        if not any(start <= m.start() and m.end() <= end for start, end in spans)
    ]

    if separators:
        had_hierarchical_separators = TITLE_HIERARCHICAL_SEPARATOR.search(orig_title) is not None
        cur_title = orig_title[:separators[-1].start()]
        if _word_count(cur_title) < 3:
            cur_title = _LEADING_SEGMENT.sub("", orig_title, count=1)
    elif ": " in cur_title:
        trimmed = cur_title.strip()
        headings = doc.find_all(["h1", "h2"])
        if not any(text_content(h).strip() == trimmed for h in headings):
            cur_title = orig_title[orig_title.rfind(":") + 1:]
            if _word_count(cur_title) < 3:
                cur_title = orig_title[orig_title.find(":") + 1:]
            elif _word_count(orig_title[:orig_title.find(":")]) > 5:
                cur_title = orig_title
    elif len(cur_title) > 150 or len(cur_title) < 15:
        h_ones = doc.find_all("h1")
        if len(h_ones) == 1:
            cur_title = inner_text(h_ones[0])

    cur_title = NORMALIZE.sub(" ", cur_title.strip())
    word_count = _word_count(cur_title)
    if word_count <= 4 and (
        not had_hierarchical_separators
        or word_count != _word_count(_SEPARATOR_CHARS.sub("", orig_title)) - 1
    ):
        cur_title = orig_title

    return cur_title


def get_article_metadata(doc, json_ld=None):
    """
    Resolve the article metadata of a document.

    Each field takes the first available of the JSON-LD value and the
    matching meta tags; the title falls back to ``get_article_title``.

    Args:
        doc: Parsed document
        json_ld: Result of ``get_json_ld``, or None to skip structured data

    Returns:
        ArticleMetadata: Resolved metadata
    """
    json_ld = json_ld or {}
    values = get_meta_values(doc)

    title = (
        json_ld.get("title")
        or values.get("og:title")
        or values.get("twitter:title")
        or values.get("dc:title")
        or get_article_title(doc)
    )
    byline = json_ld.get("byline") or values.get("dc:creator") or values.get("author")
    excerpt = (
        json_ld.get("excerpt")
        or values.get("og:description")
        or values.get("description")
        or values.get("twitter:description")
    )
    site_name = json_ld.get("site_name") or values.get("og:site_name")
    published_time = json_ld.get("published_time") or values.get("article:published_time")

    return ArticleMetadata(
        title=title,
        byline=byline,
        excerpt=excerpt,
        site_name=site_name,
        published_time=published_time,
        meta=values,
    )
