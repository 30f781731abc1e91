#!/usr/bin/env python3
"""Tests for wiring one enrichment run."""

import dataclasses
from unittest.mock import MagicMock

import pytest

from slipmatch.core.config import Config, EnrichmentConfig, Environment, PocketsmithConfig, TelemetryConfig
from slipmatch.core.errors import ConfigurationError, PocketsmithError, SourceError
from slipmatch.enrichment import load_category_rules, run_enrichment
from tests.fixtures.ledger import FakeLedger, make_rule_dict, make_transaction_dict

SLIPS = (
    "filename=r2.jpg;to=Bob;amountTHB=50.00 THB;date=2024-03-01;time=18:00;bankref=B2;txref=T2\n"
    "\n"
    "filename=r1.jpg;to=Jane;amountTHB=50.00 THB;date=2024-03-01;time=09:00;bankref=B1;txref=T1\n"
)


@pytest.fixture
def slips_file(tmp_path):
    path = tmp_path / "slips.txt"
    path.write_text(SLIPS, encoding="utf-8")
    return path


@pytest.fixture
def run_config(slips_file):
    return Config(
        environment=Environment.TEST,
        telemetry=TelemetryConfig(),
        pocketsmith=PocketsmithConfig(api_token="token", transaction_account_id=555),
        enrichment=EnrichmentConfig(meta_file=str(slips_file)),
    )


@pytest.mark.enrichment
class TestRunEnrichment:
    """Test run_enrichment."""

    def test_processes_source_newest_first(self, run_config):
        ledger = FakeLedger(
            transactions=[make_transaction_dict(1001), make_transaction_dict(1002)],
            attachments=[{"id": 9, "title": "r1.jpg"}],
        )

        summary = run_enrichment(run_config, ledger)

        assert summary.total_records == 2
        assert summary.updated == 2
        # Last line in the file (Jane) is handled first
        assert [(tx_id, u.payee) for tx_id, u in ledger.updates] == [(1001, "Jane"), (1002, "Bob")]
        assert ledger.assignments == [(1001, 9)]
        assert all(call[0] == 555 for call in ledger.search_calls)

    def test_current_user_failure_aborts(self, run_config):
        ledger = FakeLedger(transactions=[make_transaction_dict(1001)])
        ledger.fail_user = True
        reporter = MagicMock()

        with pytest.raises(PocketsmithError) as exc_info:
            run_enrichment(run_config, ledger, reporter=reporter)

        assert str(exc_info.value) == "Error getting current user: GET /me failed (HTTP 401)"
        assert exc_info.value.status_code == 401
        assert ledger.search_calls == []
        reporter.capture_exception.assert_called_once()

    def test_missing_source_raises_source_error(self, run_config, tmp_path):
        config = dataclasses.replace(
            run_config,
            enrichment=dataclasses.replace(run_config.enrichment, meta_file=str(tmp_path / "missing.txt")),
        )

        with pytest.raises(SourceError, match="Error reading file"):
            run_enrichment(config, FakeLedger())

    def test_missing_meta_file_is_configuration_error(self, run_config):
        config = dataclasses.replace(run_config, enrichment=EnrichmentConfig(meta_file=None))

        with pytest.raises(ConfigurationError):
            run_enrichment(config, FakeLedger())

    def test_rules_are_applied(self, run_config):
        ledger = FakeLedger(
            transactions=[make_transaction_dict(1001), make_transaction_dict(1002)],
            rules=[make_rule_dict(1, "Bank Transfer", 77, "Transfers")],
        )

        run_enrichment(run_config, ledger)

        assert {u.category_id for _, u in ledger.updates} == {77}

    def test_on_result_receives_progress(self, run_config):
        seen = []

        run_enrichment(run_config, FakeLedger(), on_result=seen.append)

        assert [r.index for r in seen] == [1, 2]


@pytest.mark.enrichment
class TestLoadCategoryRules:
    """Test load_category_rules."""

    def test_returns_rules(self):
        ledger = FakeLedger(rules=[make_rule_dict(1, "Grab", 30, "Transport")])

        rules = load_category_rules(ledger, 42)

        assert [r.id for r in rules] == [1]

    def test_failure_falls_back_to_no_rules(self):
        ledger = FakeLedger(rules=[make_rule_dict(1, "Grab", 30, "Transport")])
        ledger.fail_rules = True

        assert load_category_rules(ledger, 42) == []
