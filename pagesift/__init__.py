"""
Pagesift readable content extraction package.

This package extracts the main article of an HTML page (title, byline,
excerpt, site metadata and a cleaned content tree) and builds
reference-tagged page context for summarization prompts.
"""

__version__ = "1.0.0"

from .core.options import ParserOptions
from .core.parser import DocumentTooLargeError, ParseResult, Readability, parse
from .core.readerable import is_probably_readerable
from .content.references import PageContext, build_page_context, format_prompt

__all__ = [
    "Readability",
    "ParseResult",
    "ParserOptions",
    "DocumentTooLargeError",
    "parse",
    "is_probably_readerable",
    "PageContext",
    "build_page_context",
    "format_prompt",
]
