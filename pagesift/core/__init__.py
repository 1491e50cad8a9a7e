"""
Core module containing the extraction engine.

This package contains the Readability parser, its options, the per-parse
context and the scoring, selection and retry stages.
"""

from .options import ParserOptions
from .context import Flags, ParseContext, ScoreTable
from .scoring import Candidate, text_similarity
from .selection import aggregate_siblings, select_top_candidate
from .retry import RetryController
from .parser import DocumentTooLargeError, ParseResult, Readability, parse
from .readerable import is_probably_readerable

__all__ = [
    "Readability",
    "ParseResult",
    "DocumentTooLargeError",
    "ParserOptions",
    "parse",
    "is_probably_readerable",
    "Flags",
    "ParseContext",
    "ScoreTable",
    "Candidate",
    "RetryController",
    "text_similarity",
    "select_top_candidate",
    "aggregate_siblings",
]
