#!/usr/bin/env python3
"""
Main entry point for the extractor.

This module provides the main entry point for extracting an article
from the command line.
"""

import json
import logging
import sys
import traceback

from bs4 import BeautifulSoup

from .cli.argument_parser import parse_args
from .cli.config import load_config_from_args, save_config
from .content.markdown import result_to_markdown, save_markdown_file
from .core.parser import DocumentTooLargeError, Readability
from .core.readerable import is_probably_readerable

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_ARTICLE = 2
EXIT_TOO_LARGE = 3


def read_source(source):
    """
    Read the raw markup of a page.

    Args:
        source: Path to an HTML file, or ``-`` for stdin

    Returns:
        bytes: Page markup; BeautifulSoup detects its encoding
    """
    if source == "-":
        return sys.stdin.buffer.read()
    with open(source, "rb") as f:
        return f.read()


def render(result, output_format, url=""):
    """
    Render a ParseResult in the requested output format.

    Args:
        result: ParseResult to render
        output_format: One of json, html, text or markdown
        url: URL of the page (for reference)

    Returns:
        str: Rendered output
    """
    if output_format == "json":
        return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output_format == "html":
        return result.content
    if output_format == "markdown":
        return result_to_markdown(result, url)
    return result.text_content


def main(args=None):
    """Main entry point for the extractor."""
    args = parse_args(args)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        try:
            config = load_config_from_args(args)
        except (OSError, KeyError, ValueError) as e:
            print(f"Error loading configuration: {e}", file=sys.stderr)
            return EXIT_ERROR

        if args.save_config:
            save_config(config, args.save_config)

        if args.verbose:
            config.print_summary()

        try:
            markup = read_source(config.source)
        except OSError as e:
            print(f"Error reading {config.source}: {e}", file=sys.stderr)
            return EXIT_ERROR

        doc = BeautifulSoup(markup, "html.parser")

        if config.check_readerable and not is_probably_readerable(doc):
            print("Document does not look like an article, skipping", file=sys.stderr)
            return EXIT_NO_ARTICLE

        try:
            result = Readability(doc, config.options).parse()
        except DocumentTooLargeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_TOO_LARGE

        if result is None:
            print("No article found", file=sys.stderr)
            return EXIT_NO_ARTICLE

        output = render(result, config.output_format, config.url or "")

        if config.output_file:
            with open(config.output_file, "w", encoding="utf-8") as f:
                f.write(output)
            print(f"Article saved to {config.output_file}", file=sys.stderr)
        else:
            sys.stdout.write(output)
            if not output.endswith("\n"):
                sys.stdout.write("\n")

        if config.markdown_dir:
            name_source = config.url or ("" if config.source == "-" else config.source)
            file_path = save_markdown_file(
                config.markdown_dir, name_source, result_to_markdown(result, config.url or "")
            )
            print(f"Markdown saved to {file_path}", file=sys.stderr)

        return EXIT_OK

    except KeyboardInterrupt:
        print("\nExtraction interrupted by user.", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    except Exception as e:
        print(f"\nError: {e}", file=sys.stderr)
        traceback.print_exc()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
