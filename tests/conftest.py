"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

import pytest

import slipmatch.core.config as config_module
from slipmatch.core.config import EnrichmentConfig
from tests.fixtures.ledger import FakeLedger, make_transaction_dict


@pytest.fixture
def sample_line() -> str:
    """A complete notification line."""
    return "filename=r1.jpg;to=Jane;amountTHB=120.00 THB;date=2024-01-02;time=09:30;bankref=B1;txref=T1"


@pytest.fixture
def enrichment_config() -> EnrichmentConfig:
    """Enrichment settings as a default run uses them."""
    return EnrichmentConfig(meta_file="slips.txt")


@pytest.fixture
def ledger() -> FakeLedger:
    """Ledger with a single transfer of 50.00 on 2024-03-01."""
    return FakeLedger(transactions=[make_transaction_dict(1001, date="2024-03-01", amount=-50.0)])


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("SLIPMATCH_ENV", "test")

    # Never talk to real services from tests
    for name in (
        "POCKETSMITH_TOKEN",
        "POCKETSMITH_TRANSACTION_ACCOUNT",
        "POCKETSMITH_META_FILE",
        "POCKETSMITH_BASE_URL",
        "POCKETSMITH_TIMEOUT",
        "SENTRY_DSN",
        "SENTRY_TRACES_SAMPLE_RATE",
        "SLIPMATCH_TIMEZONE",
        "SLIPMATCH_TRANSFER_PHRASES",
        "SLIPMATCH_REQUIRE_TRANSFER_PHRASE",
        "SLIPMATCH_MAX_CONSECUTIVE_ENRICHED",
        "SLIPMATCH_NEEDS_REVIEW",
        "SLIPMATCH_MEMO_STYLE",
        "SLIPMATCH_STRICT_TIMESTAMPS",
        "LOG_LEVEL",
        "DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)

    # Drop the cached global config between tests
    monkeypatch.setattr(config_module, "_config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "notifications: Tests for notification record parsing and loading")
    config.addinivalue_line("markers", "pocketsmith: Tests for the PocketSmith API client and models")
    config.addinivalue_line("markers", "enrichment: Tests for matching and the reconciliation loop")
