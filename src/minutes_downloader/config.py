"""Configuration handling using dataclasses, environment variables and CLI arguments."""

import os
from argparse import ArgumentParser
from argparse import Namespace as ArgNamespace
from dataclasses import dataclass, replace
from typing import List, Optional

from .attachment_extractor import DEFAULT_ATTACHMENT_HOST
from .filenames import DEFAULT_CATEGORY
from .transport import DEFAULT_TIMEOUT

DEFAULT_FEED_URL = "http://town.plattekill.ny.us/category/minutes/feed/"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def get_env_str(key: str, default: str) -> str:
    """Get a string environment variable."""
    value = os.environ.get(key)
    if value is None:
        return default
    return value


def get_env_float(key: str, default: float) -> float:
    """Get a float environment variable."""
    value_str = os.environ.get(key)
    if value_str is None:
        return default
    try:
        value = float(value_str)
    except ValueError as e:
        raise ValueError(f"Environment variable {key} must be a number.") from e
    if value <= 0:
        raise ValueError(f"Environment variable {key} must be positive.")
    return value


def get_env_bool(key: str, default: bool) -> bool:
    """Get a boolean environment variable (1/0, true/false, yes/no, on/off)."""
    value_str = os.environ.get(key)
    if value_str is None:
        return default
    normalized = value_str.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Environment variable {key} must be a boolean.")


@dataclass(frozen=True)
class DownloaderConfig:
    """Configuration settings for a download run."""

    feed_url: str = DEFAULT_FEED_URL
    output_dir: str = ""  # Empty means the current directory
    request_timeout: float = DEFAULT_TIMEOUT
    zero_pad_timestamps: bool = False
    attachment_host: str = DEFAULT_ATTACHMENT_HOST
    default_category: str = DEFAULT_CATEGORY
    lenient_dates: bool = False

    @classmethod
    def from_environment(cls) -> "DownloaderConfig":
        """Load configuration from environment variables."""
        return cls(
            feed_url=get_env_str("MINUTES_FEED_URL", DEFAULT_FEED_URL),
            output_dir=get_env_str("MINUTES_OUTPUT_DIR", ""),
            request_timeout=get_env_float("MINUTES_REQUEST_TIMEOUT", DEFAULT_TIMEOUT),
            zero_pad_timestamps=get_env_bool("MINUTES_ZERO_PAD", False),
            attachment_host=get_env_str("MINUTES_ATTACHMENT_HOST", DEFAULT_ATTACHMENT_HOST),
            default_category=get_env_str("MINUTES_DEFAULT_CATEGORY", DEFAULT_CATEGORY),
            lenient_dates=get_env_bool("MINUTES_LENIENT_DATES", False),
        )


def build_arg_parser() -> ArgumentParser:
    """Build the command line parser."""
    parser = ArgumentParser(
        description="Download the PDF attachments of a WordPress minutes feed."
    )
    parser.add_argument(
        "-f", "--feed-url",
        type=str,
        help="The WordPress RSS feed URL to parse.",
    )
    parser.add_argument(
        "-o", "--output-dir",
        type=str,
        help="The directory to save the attachments to.",
    )
    parser.add_argument(
        "-t", "--timeout",
        type=float,
        help="Timeout in seconds for each HTTP request.",
    )
    parser.add_argument(
        "--zero-pad",
        action="store_true",
        default=None,
        help="Use fixed-width timestamps (YYYYMMDD-HHMMSS) in file names.",
    )
    parser.add_argument(
        "--attachment-host",
        type=str,
        help="Host the attachment PDFs are uploaded to.",
    )
    parser.add_argument(
        "--default-category",
        type=str,
        help="Category that is not used to prefix file names.",
    )
    parser.add_argument(
        "--lenient-dates",
        action="store_true",
        default=None,
        help="Accept publication dates that are not RFC 1123.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def parse_cli_arguments(argv: Optional[List[str]] = None) -> ArgNamespace:
    """Parse the command line arguments."""
    return build_arg_parser().parse_args(argv)


def load_config(cli_args: Optional[ArgNamespace] = None) -> DownloaderConfig:
    """Load the configuration from the environment, overridden by CLI arguments.

    Raises:
        ValueError: If a setting has an invalid value.
    """
    config = DownloaderConfig.from_environment()
    if cli_args is None:
        return config

    overrides = {
        "feed_url": cli_args.feed_url,
        "output_dir": cli_args.output_dir,
        "request_timeout": cli_args.timeout,
        "zero_pad_timestamps": cli_args.zero_pad,
        "attachment_host": cli_args.attachment_host,
        "default_category": cli_args.default_category,
        "lenient_dates": cli_args.lenient_dates,
    }
    config = replace(
        config, **{key: value for key, value in overrides.items() if value is not None}
    )

    if config.request_timeout <= 0:
        raise ValueError("The request timeout must be positive.")
    return config
