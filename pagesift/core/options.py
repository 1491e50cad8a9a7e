#!/usr/bin/env python3
"""
Parser options module.

This module holds the options recognized by the extraction engine and
their validation.
"""

import dataclasses
import re
from dataclasses import dataclass, field, fields
from typing import Callable, List, Optional, Union

from ..utils.patterns import CLASSES_TO_PRESERVE, VIDEOS

DEFAULT_MAX_ELEMS_TO_PARSE = 0
DEFAULT_N_TOP_CANDIDATES = 5
DEFAULT_CHAR_THRESHOLD = 500


def inner_markup(node):
    """Default serializer: the node's inner markup."""
    return node.decode_contents()


@dataclass
class ParserOptions:
    """
    Options for a single extraction.

    The JSON-representable options can be saved and loaded with
    ``to_dict``/``from_dict``; ``serializer`` is runtime-only.
    """
    # Size and scoring
    max_elems_to_parse: int = DEFAULT_MAX_ELEMS_TO_PARSE  # 0 = unlimited
    nb_top_candidates: int = DEFAULT_N_TOP_CANDIDATES
    char_threshold: int = DEFAULT_CHAR_THRESHOLD

    # Output cleanup
    classes_to_preserve: List[str] = field(default_factory=list)
    keep_classes: bool = False

    # Heuristics
    disable_json_ld: bool = False
    allowed_video_regex: Union[str, re.Pattern] = VIDEOS
    link_density_modifier: float = 0.0

    # Document URI used to resolve relative links
    url: Optional[str] = None

    serializer: Callable = inner_markup

    def __post_init__(self):
        """Validate options after initialization."""
        if self.max_elems_to_parse < 0:
            raise ValueError(f"max_elems_to_parse must be >= 0, got {self.max_elems_to_parse}")
        if self.nb_top_candidates < 1:
            raise ValueError(f"nb_top_candidates must be >= 1, got {self.nb_top_candidates}")
        if self.char_threshold < 0:
            raise ValueError(f"char_threshold must be >= 0, got {self.char_threshold}")

        if isinstance(self.allowed_video_regex, str):
            try:
                self.allowed_video_regex = re.compile(self.allowed_video_regex, re.I)
            except re.error as e:
                raise ValueError(f"Invalid allowed_video_regex: {e}")

        if isinstance(self.classes_to_preserve, str):
            self.classes_to_preserve = [
                c.strip() for c in self.classes_to_preserve.split(",") if c.strip()
            ]
        else:
            self.classes_to_preserve = list(self.classes_to_preserve)

        if self.serializer is None:
            self.serializer = inner_markup

    @property
    def preserved_classes(self):
        """The always-preserved classes plus any caller-supplied ones."""
        return frozenset(CLASSES_TO_PRESERVE) | frozenset(self.classes_to_preserve)

    def to_dict(self):
        """
        Convert the options to a JSON-serializable dictionary.

        Returns:
            dict: Dictionary representation of the options
        """
        options = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "serializer"}
        options["allowed_video_regex"] = self.allowed_video_regex.pattern
        return options

    @classmethod
    def from_dict(cls, options_dict):
        """
        Create a ParserOptions instance from a dictionary.

        Unknown keys are ignored so that configuration files can carry
        settings for other tools.

        Args:
            options_dict: Dictionary containing option values

        Returns:
            ParserOptions: Options instance
        """
        known = {f.name for f in fields(cls)} - {"serializer"}
        return cls(**{k: v for k, v in options_dict.items() if k in known})

    def replace(self, **changes):
        """Return a copy of these options with some values changed."""
        return dataclasses.replace(self, **changes)
