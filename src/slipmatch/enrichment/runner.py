#!/usr/bin/env python3
"""
Enrichment Run

Wires one enrichment run together: resolve the PocketSmith user, fetch the
category rules, load the notification source and drive TransactionEnricher.
"""

import logging
from collections.abc import Callable

from ..core.config import Config
from ..core.errors import ConfigurationError, PocketsmithError
from ..core.telemetry import ErrorReporter
from ..notifications.loader import load_notification_lines
from ..pocketsmith.client import PocketsmithClient
from ..pocketsmith.models import CategoryRule
from .enricher import TransactionEnricher
from .models import EnrichmentSummary, RecordResult

logger = logging.getLogger(__name__)


def load_category_rules(ledger: PocketsmithClient, user_id: int) -> list[CategoryRule]:
    """Fetch category rules once per run; a failure means running without rules."""
    try:
        rules = ledger.list_category_rules(user_id)
    except PocketsmithError as e:
        logger.warning("Error getting category rules: %s", e)
        return []

    logger.info("Loaded %d category rules", len(rules))
    return rules


def run_enrichment(
    config: Config,
    ledger: PocketsmithClient,
    reporter: ErrorReporter | None = None,
    on_result: Callable[[RecordResult], None] | None = None,
) -> EnrichmentSummary:
    """
    Run one enrichment pass against the configured account.

    Args:
        config: Validated configuration (token, account and meta file present)
        ledger: Open PocketSmith client
        reporter: Optional error telemetry
        on_result: Per-record progress callback

    Returns:
        EnrichmentSummary

    Raises:
        PocketsmithError: If the current user cannot be fetched
        SourceError: If the notification source cannot be read
        InvalidRecordError: With strict timestamps, on a malformed record
    """
    try:
        user = ledger.get_current_user()
    except PocketsmithError as e:
        logger.error("Error getting current user: %s", e)
        if reporter is not None:
            reporter.capture_exception(e)
        raise PocketsmithError(
            f"Error getting current user: {e.message}", status_code=e.status_code, response_text=e.response_text
        ) from e

    enrichment = config.enrichment
    rules = load_category_rules(ledger, user.id) if enrichment.infer_categories else []

    if not enrichment.meta_file:
        raise ConfigurationError("Transaction meta path is required")
    lines = load_notification_lines(enrichment.meta_file, timeout=config.pocketsmith.timeout)
    logger.info("Loaded %d notification records", len(lines))

    enricher = TransactionEnricher(
        ledger,
        account_id=config.pocketsmith.transaction_account_id,
        config=enrichment,
        user_id=user.id,
        category_rules=rules,
        reporter=reporter,
        on_result=on_result,
    )
    return enricher.run(lines)
