"""
Core Utilities Package

Shared building blocks used across the notification, ledger and enrichment packages.

This package provides:
- Currency handling with integer satang arithmetic
- Date primitives and zoned timestamp parsing
- Configuration management for environment-specific settings
- Error types and best-effort error telemetry
"""

from .config import (
    Config,
    EnrichmentConfig,
    Environment,
    MemoStyle,
    NeedsReviewPolicy,
    PocketsmithConfig,
    TelemetryConfig,
    get_config,
    reload_config,
)
from .dates import FinancialDate, parse_local_timestamp
from .errors import (
    ConfigurationError,
    InvalidRecordError,
    PocketsmithError,
    SlipmatchError,
    SourceError,
)
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "EnrichmentConfig",
    "Environment",
    "MemoStyle",
    "NeedsReviewPolicy",
    "PocketsmithConfig",
    "TelemetryConfig",
    "get_config",
    "reload_config",
    # Primitives
    "FinancialDate",
    "Money",
    "parse_local_timestamp",
    # Errors
    "ConfigurationError",
    "InvalidRecordError",
    "PocketsmithError",
    "SlipmatchError",
    "SourceError",
]
