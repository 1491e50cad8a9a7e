#!/usr/bin/env python3
"""
Readability parser module.

This module contains the Readability class, the entry point of the
extraction engine, and the ParseResult it produces.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Optional

from bs4 import BeautifulSoup

from ..content.metadata import get_article_metadata, get_json_ld
from ..content.postprocess import post_process_content
from ..content.preprocess import prep_document, remove_scripts, unwrap_noscript_images
from ..utils.dom import count_elements, text_content
from .context import ALL_FLAGS, ParseContext
from .options import ParserOptions
from .retry import RetryController

logger = logging.getLogger(__name__)


class DocumentTooLargeError(ValueError):
    """Raised when a document has more elements than ``max_elems_to_parse`` allows."""

    def __init__(self, element_count, limit):
        self.element_count = element_count
        self.limit = limit
        super().__init__(
            f"Aborting parsing document; {element_count} elements found (limit {limit})"
        )


@dataclass(frozen=True)
class ParseResult:
    """The article extracted from a document."""
    title: str
    byline: Optional[str]
    dir: Optional[str]
    lang: Optional[str]
    content: str
    text_content: str
    length: int
    excerpt: Optional[str]
    site_name: Optional[str]
    published_time: Optional[str]
    node: Any = field(repr=False, compare=False)

    def to_dict(self):
        """
        Convert the result to a JSON-serializable dictionary.

        Returns:
            dict: Every field except the extracted node
        """
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name != "node"}


def _as_document(document):
    if isinstance(document, BeautifulSoup):
        return document
    return BeautifulSoup(document, "html.parser")


class Readability:
    """
    Extracts the main readable content of a document.

    The document is rewritten in place while parsing, so an instance can
    only be used once. Pass a copy of the document to keep the original.

    Args:
        document: BeautifulSoup document, or markup to parse
        options: ParserOptions, or None for the defaults
        **kwargs: Individual ParserOptions fields, applied over options
    """

    def __init__(self, document, options=None, **kwargs):
        options = options or ParserOptions()
        if kwargs:
            options = options.replace(**kwargs)
        self.doc = _as_document(document)
        self.options = options
        self._consumed = False

    def _check_size(self):
        limit = self.options.max_elems_to_parse
        if limit > 0:
            element_count = count_elements(self.doc)
            if element_count > limit:
                raise DocumentTooLargeError(element_count, limit)

    def parse(self):
        """
        Extract the article.

        Returns:
            ParseResult: The extracted article, or None when no content
            was found

        Raises:
            DocumentTooLargeError: If the document exceeds ``max_elems_to_parse``
            RuntimeError: If this instance has already parsed its document
        """
        if self._consumed:
            raise RuntimeError("Readability instances can only parse once")
        self._check_size()
        self._consumed = True

        doc = self.doc
        unwrap_noscript_images(doc)
        json_ld = {} if self.options.disable_json_ld else get_json_ld(doc)
        remove_scripts(doc)
        prep_document(doc)

        metadata = get_article_metadata(doc, json_ld)
        ctx = ParseContext(
            doc=doc,
            options=self.options,
            metadata=metadata,
            article_title=metadata.title,
        )

        if doc.find(True) is None:
            logger.debug("No elements to search, aborting")
            return None

        body = doc.find("body")
        page = body if body is not None else doc
        article_content = RetryController(ctx, page).run(ALL_FLAGS)
        if article_content is None:
            return None

        post_process_content(doc, article_content, self.options)

        excerpt = metadata.excerpt
        if not excerpt:
            first_paragraph = article_content.find("p")
            if first_paragraph is not None:
                excerpt = text_content(first_paragraph).strip()

        text = text_content(article_content)
        return ParseResult(
            title=metadata.title or "",
            byline=metadata.byline or ctx.byline,
            dir=ctx.dir,
            lang=ctx.lang,
            content=self.options.serializer(article_content),
            text_content=text,
            length=len(text),
            excerpt=excerpt or None,
            site_name=metadata.site_name,
            published_time=metadata.published_time,
            node=article_content,
        )


def parse(document, **options):
    """
    Extract the article from a document in one call.

    Args:
        document: BeautifulSoup document, or markup to parse
        **options: ParserOptions fields

    Returns:
        ParseResult: The extracted article, or None
    """
    return Readability(document, ParserOptions(**options)).parse()
