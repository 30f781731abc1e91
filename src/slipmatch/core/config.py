#!/usr/bin/env python3
"""
Configuration Management for slipmatch

Handles environment-based configuration with secure defaults and validation.
Values come from the process environment (optionally seeded from a .env file)
and may be overridden per run by command-line options.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

DEFAULT_TRANSFER_PHRASES = [
    "PromptPay Transfer/Top Up eWallet",
    "Payment for Goods /Services",
    "Interbank Transfer",
]


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class NeedsReviewPolicy(Enum):
    """How the needs-review flag is set on enriched transactions."""

    FORCE = "force"
    PRESERVE = "preserve"


class MemoStyle(Enum):
    """What the memo of an enriched transaction records."""

    TXREF = "txref"
    FULL = "full"


@dataclass
class PocketsmithConfig:
    """PocketSmith API configuration."""

    api_token: str | None = None
    transaction_account_id: int = 0
    base_url: str = "https://api.pocketsmith.com/v2"
    timeout: int = 30


@dataclass
class EnrichmentConfig:
    """Settings for the reconciliation loop."""

    meta_file: str | None = None
    timezone: str = "Asia/Bangkok"
    transfer_phrases: list = field(default_factory=lambda: list(DEFAULT_TRANSFER_PHRASES))
    require_transfer_phrase: bool = True
    max_consecutive_enriched: int = 10
    needs_review: NeedsReviewPolicy = NeedsReviewPolicy.FORCE
    memo_style: MemoStyle = MemoStyle.TXREF
    assign_attachments: bool = True
    infer_categories: bool = True
    strict_timestamps: bool = False
    dry_run: bool = False


@dataclass
class TelemetryConfig:
    """Error reporting configuration."""

    sentry_dsn: str | None = None
    traces_sample_rate: float = 1.0


@dataclass
class Config:
    """
    Main configuration class for slipmatch.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment

    # Component configurations
    pocketsmith: PocketsmithConfig
    enrichment: EnrichmentConfig
    telemetry: TelemetryConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("SLIPMATCH_ENV", "production"))

        pocketsmith = PocketsmithConfig(
            api_token=os.getenv("POCKETSMITH_TOKEN") or None,
            transaction_account_id=_parse_int(os.getenv("POCKETSMITH_TRANSACTION_ACCOUNT", "")),
            base_url=os.getenv("POCKETSMITH_BASE_URL", "https://api.pocketsmith.com/v2"),
            timeout=int(os.getenv("POCKETSMITH_TIMEOUT", "30")),
        )

        phrases = _parse_list(os.getenv("SLIPMATCH_TRANSFER_PHRASES", ""))
        enrichment = EnrichmentConfig(
            meta_file=os.getenv("POCKETSMITH_META_FILE") or None,
            timezone=os.getenv("SLIPMATCH_TIMEZONE", "Asia/Bangkok"),
            transfer_phrases=phrases or list(DEFAULT_TRANSFER_PHRASES),
            require_transfer_phrase=_parse_bool(os.getenv("SLIPMATCH_REQUIRE_TRANSFER_PHRASE", "true")),
            max_consecutive_enriched=int(os.getenv("SLIPMATCH_MAX_CONSECUTIVE_ENRICHED", "10")),
            needs_review=NeedsReviewPolicy(os.getenv("SLIPMATCH_NEEDS_REVIEW", "force").lower()),
            memo_style=MemoStyle(os.getenv("SLIPMATCH_MEMO_STYLE", "txref").lower()),
            strict_timestamps=_parse_bool(os.getenv("SLIPMATCH_STRICT_TIMESTAMPS", "false")),
        )

        telemetry = TelemetryConfig(
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "1.0")),
        )

        return cls(
            environment=env,
            pocketsmith=pocketsmith,
            enrichment=enrichment,
            telemetry=telemetry,
            debug=_parse_bool(os.getenv("DEBUG", "false")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate general settings and return list of errors."""
        errors = []

        if self.pocketsmith.timeout <= 0:
            errors.append("PocketSmith timeout must be positive")
        if self.enrichment.max_consecutive_enriched < 0:
            errors.append("Consecutive already-enriched limit must be non-negative")
        if self.enrichment.require_transfer_phrase and not self.enrichment.transfer_phrases:
            errors.append("At least one transfer phrase is required when phrase filtering is enabled")
        if not 0.0 <= self.telemetry.traces_sample_rate <= 1.0:
            errors.append("Sentry traces sample rate must be between 0 and 1")
        try:
            ZoneInfo(self.enrichment.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            errors.append(f"Unknown timezone: {self.enrichment.timezone}")

        return errors

    def validate_for_run(self) -> list:
        """Check the values an enrichment run cannot start without."""
        errors = []

        if not self.pocketsmith.api_token:
            errors.append(
                "Pocketsmith token is required. "
                "Set via --pocketsmith-token flag or POCKETSMITH_TOKEN environment variable"
            )
        if not self.pocketsmith.transaction_account_id:
            errors.append(
                "Pocketsmith transaction account is required. "
                "Set via --pocketsmith-transaction-account flag or "
                "POCKETSMITH_TRANSACTION_ACCOUNT environment variable"
            )
        if not self.enrichment.meta_file:
            errors.append(
                "Transaction meta path is required. "
                "Set via --transaction-meta-file flag or POCKETSMITH_META_FILE environment variable"
            )

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        # Reduce noise from external libraries in production
        if self.environment == Environment.PRODUCTION:
            logging.getLogger("httpx").setLevel(logging.WARNING)
            logging.getLogger("httpcore").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "pocketsmith.api_token",
            "telemetry.sentry_dsn",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                # Nested dataclass
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if (
                        not include_sensitive
                        and full_field_name in self.get_sensitive_fields()
                        and nested_value
                    ):
                        nested_dict[nested_name] = "***REDACTED***"
                    elif isinstance(nested_value, Enum):
                        nested_dict[nested_name] = nested_value.value
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


def _parse_list(value: str, delimiter: str = ",") -> list:
    """Parse comma-separated string into list, handling empty values."""
    if not value:
        return []
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_int(value: str) -> int:
    """Parse an integer setting, treating blank or malformed values as unset (0)."""
    try:
        return int(value)
    except ValueError:
        return 0


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        # Validate configuration
        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()

