"""Shared utilities for the patent dashboard."""

# Pattern definitions
from utils.patterns import PUBLICATION_DATE, IPC_CODE, URL_SCHEME

# String utilities
from utils.strings import clean_field, casefold_or_empty

# Source fetching
from utils.http import SourceFetcher, SourceUnavailable, is_url

# Output formatting
from utils.formatting import (
    PALETTE,
    chart_palette,
    code_label,
    percent_of,
    truncate_text,
    CountTable,
)

# Configuration
from utils.config import Config, AppConfig

__all__ = [
    # Patterns
    "PUBLICATION_DATE",
    "IPC_CODE",
    "URL_SCHEME",
    # Strings
    "clean_field",
    "casefold_or_empty",
    # HTTP
    "SourceFetcher",
    "SourceUnavailable",
    "is_url",
    # Formatting
    "PALETTE",
    "chart_palette",
    "code_label",
    "percent_of",
    "truncate_text",
    "CountTable",
    # Config
    "Config",
    "AppConfig",
]
