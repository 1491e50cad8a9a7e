#!/usr/bin/env python3
"""
Command-line argument parsing module.

This module provides functions for setting up and parsing command-line
arguments for the extractor.
"""

import argparse
from urllib.parse import urlparse

from ..core.options import (
    DEFAULT_CHAR_THRESHOLD,
    DEFAULT_MAX_ELEMS_TO_PARSE,
    DEFAULT_N_TOP_CANDIDATES,
)


def create_parser():
    """
    Create the command-line argument parser.

    Returns:
        argparse.ArgumentParser: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog='pagesift',
        description='Extract the main readable article from an HTML page'
    )

    # Input
    parser.add_argument('source', type=str, nargs='?', default=None,
                        help='HTML file to read, or - for stdin')
    parser.add_argument('--url', type=str, default=None,
                        help='URL the page was fetched from, used to resolve relative links')

    # Output options
    output_group = parser.add_argument_group('Output Options')
    output_group.add_argument('--format', type=str, default='json',
                        choices=['json', 'html', 'text', 'markdown'],
                        help='Output format (default: json)')
    output_group.add_argument('--output', type=str, default=None,
                        help='Write the output to this file instead of stdout')
    output_group.add_argument('--markdown-dir', type=str, default=None,
                        help='Also save the article as a .md file in this directory')

    # Parser options
    parser_group = parser.add_argument_group('Parser Options')
    parser_group.add_argument('--char-threshold', type=int, default=DEFAULT_CHAR_THRESHOLD,
                        help=f'Characters an article needs before retries stop '
                             f'(default: {DEFAULT_CHAR_THRESHOLD})')
    parser_group.add_argument('--nb-top-candidates', type=int, default=DEFAULT_N_TOP_CANDIDATES,
                        help=f'Number of top candidates to compare '
                             f'(default: {DEFAULT_N_TOP_CANDIDATES})')
    parser_group.add_argument('--max-elems', type=int, default=DEFAULT_MAX_ELEMS_TO_PARSE,
                        help='Refuse documents with more elements than this (default: unlimited)')
    parser_group.add_argument('--keep-classes', action='store_true',
                        help='Keep class attributes in the output (default: strip them)')
    parser_group.add_argument('--classes-to-preserve', type=str, default="",
                        help='Comma-separated list of classes to keep when stripping classes')
    parser_group.add_argument('--disable-json-ld', action='store_true',
                        help='Ignore JSON-LD metadata')
    parser_group.add_argument('--link-density-modifier', type=float, default=0.0,
                        help='Added to the link density limits of conditional cleaning (default: 0.0)')
    parser_group.add_argument('--check-readerable', action='store_true',
                        help='Skip documents that do not look like articles')

    # Configuration file options
    config_group = parser.add_argument_group('Configuration Options')
    config_group.add_argument('--config', type=str, default=None,
                        help='Path to configuration file (JSON)')
    config_group.add_argument('--save-config', type=str, default=None,
                        help='Save current settings to configuration file')
    config_group.add_argument('--verbose', action='store_true',
                        help='Log debug details of the extraction to stderr')

    return parser


def parse_args(args=None):
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments to parse (uses sys.argv if None)

    Returns:
        argparse.Namespace: Parsed arguments

    Raises:
        SystemExit: If required arguments are missing or invalid
    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if parsed_args.source is None and not parsed_args.config:
        parser.error("No input given. Please provide an HTML file, - for stdin, or --config.")

    if parsed_args.url:
        parsed_url = urlparse(parsed_args.url)
        if not parsed_url.scheme or not parsed_url.netloc:
            parser.error("Invalid URL. Please provide a valid URL (e.g., https://example.com/article)")

    if parsed_args.char_threshold < 0:
        parser.error("--char-threshold must not be negative")
    if parsed_args.nb_top_candidates < 1:
        parser.error("--nb-top-candidates must be at least 1")
    if parsed_args.max_elems < 0:
        parser.error("--max-elems must not be negative")

    return parsed_args
