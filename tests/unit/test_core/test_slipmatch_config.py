#!/usr/bin/env python3
"""Tests for configuration loading and validation."""

import pytest

from slipmatch.core.config import (
    DEFAULT_TRANSFER_PHRASES,
    Config,
    Environment,
    MemoStyle,
    NeedsReviewPolicy,
    get_config,
    reload_config,
)


@pytest.mark.unit
class TestConfigFromEnvironment:
    """Test Config.from_environment."""

    def test_defaults(self):
        config = Config.from_environment()

        assert config.environment == Environment.TEST
        assert config.pocketsmith.api_token is None
        assert config.pocketsmith.transaction_account_id == 0
        assert config.pocketsmith.base_url == "https://api.pocketsmith.com/v2"
        assert config.enrichment.meta_file is None
        assert config.enrichment.timezone == "Asia/Bangkok"
        assert config.enrichment.transfer_phrases == DEFAULT_TRANSFER_PHRASES
        assert config.enrichment.require_transfer_phrase is True
        assert config.enrichment.max_consecutive_enriched == 10
        assert config.enrichment.needs_review == NeedsReviewPolicy.FORCE
        assert config.enrichment.memo_style == MemoStyle.TXREF
        assert config.enrichment.strict_timestamps is False
        assert config.telemetry.sentry_dsn is None

    def test_reads_required_values(self, monkeypatch):
        monkeypatch.setenv("POCKETSMITH_TOKEN", "secret-token")
        monkeypatch.setenv("POCKETSMITH_TRANSACTION_ACCOUNT", "12345")
        monkeypatch.setenv("POCKETSMITH_META_FILE", "https://example.com/slips.txt")

        config = Config.from_environment()

        assert config.pocketsmith.api_token == "secret-token"
        assert config.pocketsmith.transaction_account_id == 12345
        assert config.enrichment.meta_file == "https://example.com/slips.txt"
        assert config.validate_for_run() == []

    def test_malformed_account_is_treated_as_missing(self, monkeypatch):
        monkeypatch.setenv("POCKETSMITH_TRANSACTION_ACCOUNT", "not-a-number")

        assert Config.from_environment().pocketsmith.transaction_account_id == 0

    def test_reads_matching_policies(self, monkeypatch):
        monkeypatch.setenv("SLIPMATCH_TRANSFER_PHRASES", "Interbank Transfer, Bill Payment ,")
        monkeypatch.setenv("SLIPMATCH_REQUIRE_TRANSFER_PHRASE", "false")
        monkeypatch.setenv("SLIPMATCH_MAX_CONSECUTIVE_ENRICHED", "0")
        monkeypatch.setenv("SLIPMATCH_NEEDS_REVIEW", "preserve")
        monkeypatch.setenv("SLIPMATCH_MEMO_STYLE", "FULL")
        monkeypatch.setenv("SLIPMATCH_STRICT_TIMESTAMPS", "yes")

        enrichment = Config.from_environment().enrichment

        assert enrichment.transfer_phrases == ["Interbank Transfer", "Bill Payment"]
        assert enrichment.require_transfer_phrase is False
        assert enrichment.max_consecutive_enriched == 0
        assert enrichment.needs_review == NeedsReviewPolicy.PRESERVE
        assert enrichment.memo_style == MemoStyle.FULL
        assert enrichment.strict_timestamps is True


@pytest.mark.unit
class TestConfigValidation:
    """Test validation helpers."""

    def test_validate_for_run_lists_every_missing_value(self):
        errors = Config.from_environment().validate_for_run()

        assert len(errors) == 3
        assert any("Pocketsmith token is required" in e for e in errors)
        assert any("Pocketsmith transaction account is required" in e for e in errors)
        assert any("Transaction meta path is required" in e for e in errors)

    def test_validate_rejects_negative_limit(self, monkeypatch):
        monkeypatch.setenv("SLIPMATCH_MAX_CONSECUTIVE_ENRICHED", "-1")

        errors = Config.from_environment().validate()

        assert any("non-negative" in e for e in errors)

    def test_validate_rejects_unknown_timezone(self, monkeypatch):
        monkeypatch.setenv("SLIPMATCH_TIMEZONE", "Mars/Olympus_Mons")

        errors = Config.from_environment().validate()

        assert errors == ["Unknown timezone: Mars/Olympus_Mons"]

    def test_get_config_raises_on_invalid_settings(self, monkeypatch):
        monkeypatch.setenv("POCKETSMITH_TIMEOUT", "0")

        with pytest.raises(ValueError, match="Configuration validation failed"):
            get_config()

    def test_get_config_is_cached_until_reload(self, monkeypatch):
        first = get_config()
        assert get_config() is first

        monkeypatch.setenv("POCKETSMITH_TOKEN", "new-token")
        reloaded = reload_config()

        assert reloaded is not first
        assert reloaded.pocketsmith.api_token == "new-token"
        assert reloaded.environment == Environment.TEST


@pytest.mark.unit
class TestConfigToDict:
    """Test serialization with redaction."""

    def test_secrets_are_redacted(self, monkeypatch):
        monkeypatch.setenv("POCKETSMITH_TOKEN", "secret-token")
        monkeypatch.setenv("SENTRY_DSN", "https://key@sentry.example.com/1")

        data = Config.from_environment().to_dict()

        assert data["pocketsmith"]["api_token"] == "***REDACTED***"
        assert data["telemetry"]["sentry_dsn"] == "***REDACTED***"
        assert data["environment"] == "test"
        assert data["enrichment"]["needs_review"] == "force"

    def test_include_sensitive(self, monkeypatch):
        monkeypatch.setenv("POCKETSMITH_TOKEN", "secret-token")

        data = Config.from_environment().to_dict(include_sensitive=True)

        assert data["pocketsmith"]["api_token"] == "secret-token"
