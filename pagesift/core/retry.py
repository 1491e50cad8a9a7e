#!/usr/bin/env python3
"""
Retry controller module.

This module contains the staged relaxation loop around one extraction
attempt. Each failed attempt is recorded, the search root is restored to
its original markup and the next heuristic flag is cleared; once every
flag is cleared the longest attempt wins.
"""

import copy
import logging
from collections import namedtuple

from ..content.sanitizer import prep_article, wrap_in_page
from ..utils.dom import inner_text
from .context import ALL_FLAGS, RETRY_ORDER, Flags
from .scoring import find_top_candidates
from .selection import aggregate_siblings, get_article_direction, select_top_candidate

logger = logging.getLogger(__name__)

Attempt = namedtuple("Attempt", ["content", "text_length", "dir"])


def run_attempt(ctx, page):
    """
    Run one pass of scoring, selection, aggregation and sanitizing.

    When no element was long enough to be scored the whole page is
    wrapped instead. Such an attempt only counts when its text reaches
    ``char_threshold``; otherwise its text length is recorded as 0.

    Args:
        ctx: ParseContext, already started for this attempt's flags
        page: Search root

    Returns:
        Attempt: The assembled content, its text length and its text direction
    """
    top_candidates = find_top_candidates(ctx)
    top, needed_to_create = select_top_candidate(ctx, top_candidates, page)
    direction = get_article_direction(top)

    article_content = aggregate_siblings(ctx, top)
    prep_article(ctx, article_content)
    wrap_in_page(ctx, article_content, top, needed_to_create)

    text_length = len(inner_text(article_content))
    if not top_candidates and text_length < ctx.options.char_threshold:
        text_length = 0
    return Attempt(article_content, text_length, direction)


def next_flags(flags):
    """
    Clear the next flag in retry order.

    Args:
        flags: Flags of the attempt that just failed

    Returns:
        Flags: Relaxed flags, or None when every flag is already cleared
    """
    for flag in RETRY_ORDER:
        if flags & flag:
            return flags & ~flag
    return None


class RetryController:
    """
    Run attempts with progressively relaxed heuristics.

    The children of the search root are snapshotted before the first
    attempt so that every retry starts from the original markup.
    """

    def __init__(self, ctx, page):
        self.ctx = ctx
        self.page = page
        self.attempts = []
        self._snapshot = [copy.copy(child) for child in page.contents]

    def _restore_page(self):
        self.page.clear()
        for child in self._snapshot:
            self.page.append(copy.copy(child))

    def run(self, flags=ALL_FLAGS):
        """
        Extract the article content.

        Args:
            flags: Flags of the first attempt

        Returns:
            Tag: Article content, or None when no attempt found any text
        """
        flags = Flags(flags)
        threshold = self.ctx.options.char_threshold

        while True:
            self.ctx.start_attempt(flags)
            attempt = run_attempt(self.ctx, self.page)
            logger.debug(
                "Attempt with flags %s produced %d characters", flags, attempt.text_length
            )
            if attempt.text_length >= threshold:
                self.ctx.dir = attempt.dir
                return attempt.content

            attempt.content.extract()
            self._restore_page()
            self.attempts.append(attempt)

            flags = next_flags(flags)
            if flags is None:
                break
            logger.debug("Retrying with flags %s", flags)

        best = max(self.attempts, key=lambda a: a.text_length)
        if not best.text_length:
            logger.debug("No attempt produced any content")
            return None
        logger.debug("Returning longest attempt with %d characters", best.text_length)
        self.ctx.dir = best.dir
        return best.content
