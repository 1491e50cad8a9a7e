"""
Utility modules for document tree handling and URL resolution.

This package contains the BeautifulSoup tree helpers used by every
extraction stage, the heuristic pattern tables and the URL helpers.
"""

from .dom import inner_text, is_probably_visible, link_density, text_content
from .url import get_base_uri, resolve_srcset, to_absolute_uri

__all__ = [
    "inner_text",
    "text_content",
    "link_density",
    "is_probably_visible",
    "get_base_uri",
    "to_absolute_uri",
    "resolve_srcset",
]
