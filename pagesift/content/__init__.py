"""
Content processing module for preparing, cleaning and converting documents.

This package contains the document preprocessing passes, metadata
extraction, article sanitizing and post-processing, and Markdown
conversion.
"""

from .markdown import html_to_markdown, result_to_markdown, save_markdown_file
from .metadata import ArticleMetadata, get_article_metadata, get_article_title, get_json_ld
from .postprocess import post_process_content
from .preprocess import prep_document, remove_scripts, unwrap_noscript_images
from .sanitizer import is_data_table, prep_article

__all__ = [
    "ArticleMetadata",
    "get_article_metadata",
    "get_article_title",
    "get_json_ld",
    "unwrap_noscript_images",
    "remove_scripts",
    "prep_document",
    "prep_article",
    "is_data_table",
    "post_process_content",
    "html_to_markdown",
    "result_to_markdown",
    "save_markdown_file",
]
