#!/usr/bin/env python3
"""
Parse context module.

This module contains the state threaded through every stage of one
extraction: the retry flags, the identity-keyed score table and the
ParseContext value that carries the document, options and metadata.
"""

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..utils.dom import get_attr
from ..utils.patterns import NEGATIVE, POSITIVE, TAG_SCORES
from .options import ParserOptions


class Flags(enum.IntFlag):
    """Heuristics that are relaxed one at a time when an attempt fails."""
    STRIP_UNLIKELYS = 0x1
    WEIGHT_CLASSES = 0x2
    CLEAN_CONDITIONALLY = 0x4


ALL_FLAGS = Flags.STRIP_UNLIKELYS | Flags.WEIGHT_CLASSES | Flags.CLEAN_CONDITIONALLY

# Order in which failed attempts clear flags, most permissive last
RETRY_ORDER = (Flags.STRIP_UNLIKELYS, Flags.WEIGHT_CLASSES, Flags.CLEAN_CONDITIONALLY)


class ScoreTable:
    """
    Content scores keyed by node identity.

    Scores are never stored on the nodes themselves. The table holds a
    reference to every node it scores so identities stay valid for its
    lifetime.
    """

    def __init__(self):
        self._entries = {}

    def __contains__(self, node):
        return id(node) in self._entries

    def __len__(self):
        return len(self._entries)

    def get(self, node, default=None):
        entry = self._entries.get(id(node))
        return entry[1] if entry is not None else default

    def set(self, node, score):
        self._entries[id(node)] = (node, score)

    def add(self, node, amount):
        self.set(node, self.get(node, 0.0) + amount)

    def nodes(self):
        """Scored nodes in the order they were first scored."""
        return [node for node, _ in self._entries.values()]


@dataclass
class ParseContext:
    """
    Per-parse state shared by the pipeline stages.

    One context is created per ``parse()`` call. Fields that belong to a
    single attempt (flags, scores, data-table marks) are reset by
    ``start_attempt``; byline and language survive across attempts.
    """
    doc: Any
    options: ParserOptions
    metadata: Any = None
    article_title: str = ""
    byline: Optional[str] = None
    lang: Optional[str] = None
    dir: Optional[str] = None
    flags: Flags = ALL_FLAGS
    scores: ScoreTable = field(default_factory=ScoreTable)
    data_tables: Dict[int, bool] = field(default_factory=dict)
    # Keeps classified tables alive so their ids stay unique
    _table_refs: list = field(default_factory=list, repr=False)

    def start_attempt(self, flags):
        """Reset the attempt-scoped state for a new pass with the given flags."""
        self.flags = Flags(flags)
        self.scores = ScoreTable()
        self.data_tables = {}
        self._table_refs = []

    def flag_is_active(self, flag):
        return bool(self.flags & flag)

    def new_element(self, name, **attrs):
        """Create a detached element owned by the document."""
        return self.doc.new_tag(name, attrs=attrs)

    def class_weight(self, node):
        """
        Weight a node by its class and id.

        Each of class and id contributes -25 when it matches the negative
        pattern and +25 when it matches the positive one. Always 0 once
        class weighting has been relaxed.
        """
        if not self.flag_is_active(Flags.WEIGHT_CLASSES):
            return 0
        weight = 0
        for value in (get_attr(node, "class"), get_attr(node, "id")):
            if not value:
                continue
            if NEGATIVE.search(value):
                weight -= 25
            if POSITIVE.search(value):
                weight += 25
        return weight

    def initialize_node(self, node):
        """Give a node its starting score from its tag and class weight."""
        self.scores.set(node, TAG_SCORES.get(node.name, 0) + self.class_weight(node))

    def mark_data_table(self, table, is_data):
        self.data_tables[id(table)] = is_data
        self._table_refs.append(table)

    def is_data_table(self, table):
        return self.data_tables.get(id(table), False)
