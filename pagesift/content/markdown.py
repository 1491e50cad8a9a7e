#!/usr/bin/env python3
"""
HTML to Markdown conversion module.

This module contains functions for rendering extracted articles as
Markdown and saving them to files.
"""

import hashlib
import os
import re
from urllib.parse import urlparse

import html2text


def html_to_markdown(html_content, url=""):
    """
    Convert HTML content to markdown format.

    Args:
        html_content: HTML content to convert
        url: URL of the page (for reference)

    Returns:
        str: Markdown formatted content
    """
    h = html2text.HTML2Text(baseurl=url or "")
    h.ignore_links = False
    h.ignore_images = False
    h.ignore_tables = False
    h.ignore_emphasis = False
    h.body_width = 0  # Don't wrap lines

    markdown_content = h.handle(html_content)

    if url:
        markdown_content = f"# Page from: {url}\n\n{markdown_content}"

    return markdown_content


def result_to_markdown(result, url=""):
    """
    Render a ParseResult as a Markdown document.

    The title becomes a heading and the byline, when known, an emphasized
    line above the article body.

    Args:
        result: ParseResult to render
        url: URL of the page (for reference)

    Returns:
        str: Markdown document
    """
    header = []
    if result.title:
        header.append(f"# {result.title}")
    if result.byline:
        header.append(f"*{result.byline}*")

    body = html_to_markdown(result.content, url)
    if not header:
        return body
    return "\n\n".join(header) + "\n\n" + body


def markdown_filename(url):
    """
    Create a file name from the URL path.

    Args:
        url: URL of the page

    Returns:
        str: File name ending in ``.md``
    """
    parsed_url = urlparse(url)
    path = parsed_url.path

    if not path or path == "/":
        return "index.md"

    path = path.rstrip("/")
    path = re.sub(r"[^a-zA-Z0-9_-]", "_", path)

    if parsed_url.query:
        query_str = re.sub(r"[^a-zA-Z0-9_-]", "_", parsed_url.query)
        path = f"{path}__{query_str}"

    filename = f"{path}.md"

    # Ensure filename is not too long
    if len(filename) > 250:
        filename = filename[:240] + hashlib.md5(filename.encode()).hexdigest()[:10] + ".md"

    return filename


def save_markdown_file(directory, url, markdown_content):
    """
    Save markdown content to a file in the given directory.

    Args:
        directory: Directory to write to, created if missing
        url: URL of the page (used to create filename)
        markdown_content: Content to save

    Returns:
        str: Path to the saved file
    """
    if not os.path.exists(directory):
        os.makedirs(directory)

    file_path = os.path.join(directory, markdown_filename(url or ""))

    with open(file_path, "w", encoding="utf-8") as f:
        f.write(markdown_content)

    return file_path
