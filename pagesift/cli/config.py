#!/usr/bin/env python3
"""
Configuration management module.

This module provides functionality for loading and saving configuration
files, and for managing the command-line extraction settings.
"""

import json
import os
import sys
from dataclasses import dataclass, field, fields
from typing import Optional
from urllib.parse import urlparse

from ..core.options import ParserOptions
from .argument_parser import create_parser

OUTPUT_FORMATS = ("json", "html", "text", "markdown")

# Command-line argument name -> ParserOptions field
OPTION_ARGUMENTS = {
    "char_threshold": "char_threshold",
    "nb_top_candidates": "nb_top_candidates",
    "max_elems": "max_elems_to_parse",
    "keep_classes": "keep_classes",
    "classes_to_preserve": "classes_to_preserve",
    "disable_json_ld": "disable_json_ld",
    "link_density_modifier": "link_density_modifier",
}


@dataclass
class Configuration:
    """
    Configuration class for the command-line extractor.

    This dataclass holds the input, output and engine settings of one run,
    allowing for easy serialization and deserialization.
    """
    # Input
    source: str = "-"
    url: Optional[str] = None

    # Output
    output_file: Optional[str] = None
    output_format: str = "json"
    markdown_dir: Optional[str] = None

    # Extraction
    check_readerable: bool = False
    options: ParserOptions = field(default_factory=ParserOptions)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.output_format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Invalid output format: {self.output_format} "
                f"(expected one of {', '.join(OUTPUT_FORMATS)})"
            )

        if isinstance(self.options, dict):
            self.options = ParserOptions.from_dict(self.options)

        if self.url:
            parsed_url = urlparse(self.url)
            if not parsed_url.scheme or not parsed_url.netloc:
                raise ValueError(f"Invalid URL: {self.url}")
            if self.options.url != self.url:
                self.options = self.options.replace(url=self.url)

    @classmethod
    def from_args(cls, args):
        """
        Create a Configuration instance from parsed command-line arguments.

        Args:
            args: Parsed command-line arguments

        Returns:
            Configuration: Configuration instance
        """
        options = ParserOptions(
            **{name: getattr(args, arg) for arg, name in OPTION_ARGUMENTS.items()}
        )
        return cls(
            source=args.source,
            url=args.url,
            output_file=args.output,
            output_format=args.format,
            markdown_dir=args.markdown_dir,
            check_readerable=args.check_readerable,
            options=options,
        )

    def to_dict(self):
        """
        Convert configuration to a dictionary.

        Returns:
            dict: Dictionary representation of the configuration
        """
        config_dict = {f.name: getattr(self, f.name) for f in fields(self)}
        config_dict["options"] = self.options.to_dict()
        return config_dict

    @classmethod
    def from_dict(cls, config_dict):
        """
        Create a Configuration instance from a dictionary.

        Args:
            config_dict: Dictionary containing configuration parameters

        Returns:
            Configuration: Configuration instance
        """
        # Make a copy to avoid modifying the original
        config = config_dict.copy()

        if "options" in config and isinstance(config["options"], dict):
            config["options"] = ParserOptions.from_dict(config["options"])

        return cls(**config)

    def print_summary(self, file=sys.stderr):
        """Print a summary of the configuration."""
        options = self.options
        print("\nExtraction configuration:", file=file)
        print(f"- Source: {'stdin' if self.source == '-' else self.source}", file=file)
        if self.url:
            print(f"- Document URL: {self.url}", file=file)
        print(f"- Output: {self.output_file or 'stdout'} ({self.output_format})", file=file)
        if self.markdown_dir:
            print(f"- Markdown directory: {self.markdown_dir}", file=file)
        print(f"- Readerable check: {'Yes' if self.check_readerable else 'No'}", file=file)
        print("- Parser options:", file=file)
        print(f"  - Character threshold: {options.char_threshold}", file=file)
        print(f"  - Top candidates: {options.nb_top_candidates}", file=file)
        print(
            f"  - Max elements: "
            f"{'Unlimited' if not options.max_elems_to_parse else options.max_elems_to_parse}",
            file=file,
        )
        print(f"  - Keep classes: {options.keep_classes}", file=file)
        if options.classes_to_preserve:
            print(f"  - Preserved classes: {', '.join(options.classes_to_preserve)}", file=file)
        print(f"  - JSON-LD: {'Disabled' if options.disable_json_ld else 'Enabled'}", file=file)
        if options.link_density_modifier:
            print(f"  - Link density modifier: {options.link_density_modifier}", file=file)
        print(file=file)


def load_config(config_file: str) -> Configuration:
    """
    Load configuration from a JSON file.

    Args:
        config_file: Path to the configuration file

    Returns:
        Configuration: Configuration instance

    Raises:
        FileNotFoundError: If the configuration file does not exist
        json.JSONDecodeError: If the configuration file is not valid JSON
        KeyError: If the configuration file is missing required fields
    """
    if not os.path.exists(config_file):
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config_dict = json.load(f)

        # Check for required fields
        required_fields = ["source"]
        for name in required_fields:
            if name not in config_dict:
                raise KeyError(f"Missing required field in configuration: {name}")

        return Configuration.from_dict(config_dict)

    except json.JSONDecodeError as e:
        raise json.JSONDecodeError(f"Invalid JSON in configuration file: {e.msg}", e.doc, e.pos)


def save_config(config: Configuration, config_file: str) -> None:
    """
    Save configuration to a JSON file.

    Args:
        config: Configuration instance
        config_file: Path to the configuration file

    Raises:
        IOError: If the configuration file cannot be written
    """
    try:
        config_dict = config.to_dict()

        # Create directory if it doesn't exist
        directory = os.path.dirname(os.path.abspath(config_file))
        if directory and not os.path.exists(directory):
            os.makedirs(directory)

        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(config_dict, f, indent=2)

        print(f"Configuration saved to {config_file}", file=sys.stderr)

    except IOError as e:
        raise IOError(f"Error saving configuration: {e}")


def load_config_from_args(args):
    """
    Load configuration from command-line arguments or a config file.

    Settings given explicitly on the command line win over the file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Configuration: Configuration instance

    Raises:
        FileNotFoundError: If the configuration file does not exist
        KeyError: If the configuration file is missing required fields
        ValueError: If the configuration file holds invalid JSON or values
    """
    if args.config:
        config = load_config(args.config)
        print(f"Loaded configuration from {args.config}", file=sys.stderr)
        return _override_config_from_args(config, args)

    return Configuration.from_args(args)


def _override_config_from_args(config, args):
    """
    Override configuration with explicitly specified command-line arguments.

    Args:
        config: Existing configuration
        args: Parsed command-line arguments

    Returns:
        Configuration: Updated configuration
    """
    defaults = vars(create_parser().parse_args([]))

    for key, value in vars(args).items():
        # Skip if the value is the same as the default
        if value == defaults.get(key):
            continue

        if key in OPTION_ARGUMENTS:
            config.options = config.options.replace(**{OPTION_ARGUMENTS[key]: value})
        elif key == "url":
            config.url = value
            config.options = config.options.replace(url=value)
        elif key == "output":
            config.output_file = value
        elif key == "format":
            config.output_format = value
        elif hasattr(config, key):
            setattr(config, key, value)

    return config
