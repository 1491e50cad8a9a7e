#!/usr/bin/env python3
"""
URL resolution module.

This module contains functions for resolving relative links found in
extracted content against the document's base URI.
"""

from urllib.parse import urljoin

from .patterns import SRCSET_URL


def get_base_uri(doc, document_uri):
    """
    Determine the base URI links in the document resolve against.

    Args:
        doc: Parsed document
        document_uri: URI the document was loaded from, or None

    Returns:
        str: The document URI joined with the first ``<base href>``, the
        document URI when there is no base element, or None when no
        document URI is known
    """
    if not document_uri:
        return None
    base = doc.find("base", href=True)
    if base is None:
        return document_uri
    try:
        return urljoin(document_uri, base["href"].strip())
    except ValueError:
        return document_uri


def to_absolute_uri(uri, base_uri, document_uri):
    """
    Resolve a possibly relative URI.

    In-page fragment links are left alone when the base URI is the
    document URI, so they keep working in the extracted content.

    Args:
        uri: URI to resolve
        base_uri: Base URI from ``get_base_uri``
        document_uri: URI of the document

    Returns:
        str: Absolute URI, or the input unchanged when it cannot be resolved
    """
    if not base_uri:
        return uri
    if base_uri == document_uri and uri.startswith("#"):
        return uri
    try:
        return urljoin(base_uri, uri)
    except ValueError:
        return uri


def resolve_srcset(srcset, base_uri, document_uri):
    """Resolve every candidate URL of a ``srcset`` value, keeping its descriptor."""
    if not base_uri:
        return srcset

    def _replace(match):
        descriptor = match.group(2) or ""
        return to_absolute_uri(match.group(1), base_uri, document_uri) + descriptor + match.group(3)

    return SRCSET_URL.sub(_replace, srcset)
