#!/usr/bin/env python3
"""
Transaction Enrichment

The reconciliation loop: for each notification record, newest first, find
the ledger transaction it describes and rewrite that transaction's payee,
memo and category from the notification, attaching the uploaded slip image
when one is waiting.

Per-record failures are logged, reported and skipped; the run continues.
"""

import logging
from collections.abc import Callable
from typing import Any

from ..core.config import EnrichmentConfig, MemoStyle, NeedsReviewPolicy
from ..core.errors import InvalidRecordError, PocketsmithError
from ..core.money import Money
from ..core.telemetry import ErrorReporter
from ..notifications.models import NotificationRecord
from ..pocketsmith.client import PocketsmithClient
from ..pocketsmith.models import Attachment, CategoryRule, PocketsmithTransaction, TransactionUpdate
from .categorizer import infer_category
from .matcher import CandidateSelector, ProcessedReferenceSet, is_already_enriched
from .models import EnrichmentOutcome, EnrichmentSummary, RecordResult

logger = logging.getLogger(__name__)


def build_memo(record: NotificationRecord, style: MemoStyle = MemoStyle.TXREF) -> str:
    """Memo recorded on an enriched transaction; always contains the txref."""
    if style == MemoStyle.FULL:
        return record.raw
    return f"txref={record.txref}"


def build_update(
    record: NotificationRecord,
    transaction: PocketsmithTransaction,
    category_id: int | None,
    config: EnrichmentConfig,
) -> TransactionUpdate:
    """
    Build the update for a matched transaction.

    Payee and memo come from the notification; amount, date, transfer flag
    and note are carried over unchanged.
    """
    if config.needs_review == NeedsReviewPolicy.FORCE:
        needs_review = True
    else:
        needs_review = transaction.needs_review

    return TransactionUpdate(
        payee=record.to,
        memo=build_memo(record, config.memo_style),
        amount=transaction.amount,
        date=transaction.date,
        is_transfer=transaction.is_transfer,
        needs_review=needs_review,
        note=transaction.note,
        category_id=category_id,
    )


class TransactionEnricher:
    """
    Match notification records to ledger transactions and enrich them.

    One instance handles one run: the processed-reference set and the
    already-enriched streak live on the instance.
    """

    def __init__(
        self,
        ledger: PocketsmithClient,
        account_id: int,
        config: EnrichmentConfig,
        user_id: int,
        category_rules: list[CategoryRule] | None = None,
        reporter: ErrorReporter | None = None,
        on_result: Callable[[RecordResult], None] | None = None,
    ):
        """
        Initialize the enricher.

        Args:
            ledger: PocketSmith client (or anything with the same methods)
            account_id: Transaction account the notifications belong to
            config: Enrichment settings
            user_id: Owner of the attachments and category rules
            category_rules: Rules fetched once for the run
            reporter: Optional error telemetry
            on_result: Called after each record, e.g. to print progress
        """
        self.ledger = ledger
        self.account_id = account_id
        self.config = config
        self.user_id = user_id
        self.category_rules = category_rules or []
        self.reporter = reporter
        self.on_result = on_result

        self.selector = CandidateSelector(config.transfer_phrases, config.require_transfer_phrase)
        self.processed = ProcessedReferenceSet()
        self.consecutive_already_enriched = 0

    def _report(self, error: BaseException, **context: object) -> None:
        if self.reporter is not None:
            self.reporter.capture_exception(error, context=dict(context))

    def _should_stop(self) -> bool:
        limit = self.config.max_consecutive_enriched
        return limit > 0 and self.consecutive_already_enriched >= limit

    def run(self, lines: list[str]) -> EnrichmentSummary:
        """
        Process notification lines, which must already be newest first.

        Args:
            lines: Non-empty notification lines

        Returns:
            EnrichmentSummary

        Raises:
            InvalidRecordError: Only with strict timestamps, on the first malformed record
        """
        summary = EnrichmentSummary(total_records=len(lines))

        for index, line in enumerate(lines, start=1):
            if self._should_stop():
                logger.info(
                    "Stopping after %d consecutive already enriched transactions",
                    self.consecutive_already_enriched,
                )
                summary.stopped_early = True
                break

            result = self.process_line(line, index, len(lines))

            if result.outcome == EnrichmentOutcome.ALREADY_ENRICHED:
                self.consecutive_already_enriched += 1
            else:
                self.consecutive_already_enriched = 0

            summary.add(result)
            if self.on_result is not None:
                self.on_result(result)

        logger.info("Done. Processed %d transactions, %d new", summary.total_records, summary.updated)
        return summary

    def process_line(self, line: str, index: int, total: int) -> RecordResult:
        """Parse and process one notification line."""
        try:
            record = NotificationRecord.parse(line, timezone=self.config.timezone)
            amount = record.amount_money
        except InvalidRecordError as e:
            if self.config.strict_timestamps:
                raise
            logger.warning("[%d/%d] Skipping invalid record: %s", index, total, e)
            self._report(e, line=line)
            return RecordResult(index, total, line, EnrichmentOutcome.INVALID_RECORD, message=str(e))
        except ValueError as e:
            logger.warning("[%d/%d] Skipping record with invalid amount: %s", index, total, e)
            return RecordResult(index, total, line, EnrichmentOutcome.INVALID_RECORD, message=str(e))

        return self.process_record(record, amount, index, total)

    def process_record(self, record: NotificationRecord, amount: Money, index: int, total: int) -> RecordResult:
        """Match one parsed record and enrich its transaction."""
        logger.info("[%d/%d] Processing: %s from %s", index, total, record.txref, record.to)

        def result(outcome: EnrichmentOutcome, **kwargs: Any) -> RecordResult:
            return RecordResult(index, total, record.raw, outcome, record=record, **kwargs)

        try:
            candidates = self.ledger.search_transactions(
                self.account_id, record.date, record.date, record.amount
            )
        except PocketsmithError as e:
            logger.warning("Could not find transaction: %s", e)
            self._report(e, txref=record.txref)
            return result(EnrichmentOutcome.SEARCH_FAILED, message=str(e))

        candidates = self.selector.filter_exact(candidates, record.date, amount)
        if not candidates:
            logger.info("No transactions found for %s on %s (%s)", record.txref, record.date, amount)
            return result(EnrichmentOutcome.UNMATCHED, message="no transactions with this date and amount")

        transaction = self.selector.select(candidates, self.processed)
        if transaction is None:
            logger.info("No unclaimed transaction found for receipt: %s", record.to)
            return result(EnrichmentOutcome.UNMATCHED, message="all candidates claimed or filtered")

        if is_already_enriched(transaction, record.txref):
            logger.info("Transaction already enriched: %s", transaction.memo)
            return result(EnrichmentOutcome.ALREADY_ENRICHED, transaction_id=transaction.id)

        category_id = transaction.category_id
        if self.config.infer_categories:
            category_id = infer_category(transaction, self.category_rules)

        update = build_update(record, transaction, category_id, self.config)

        if self.config.dry_run:
            logger.info(
                "Dry run: would enrich transaction %d: %s -> %s", transaction.id, transaction.payee, record.to
            )
            return result(
                EnrichmentOutcome.WOULD_UPDATE,
                transaction_id=transaction.id,
                previous_payee=transaction.payee,
                category_id=category_id,
            )

        attachment_id = None
        if self.config.assign_attachments:
            attachment_id = self.attach_receipt(record, transaction)

        logger.info("Enriching transaction: %d: %s -> %s", transaction.id, transaction.payee, record.to)
        try:
            self.ledger.update_transaction(transaction.id, update)
        except PocketsmithError as e:
            logger.error("Could not update transaction %d: %s", transaction.id, e)
            self._report(e, transaction_id=transaction.id, txref=record.txref)
            return result(
                EnrichmentOutcome.UPDATE_FAILED,
                transaction_id=transaction.id,
                previous_payee=transaction.payee,
                attachment_id=attachment_id,
                message=str(e),
            )

        return result(
            EnrichmentOutcome.UPDATED,
            transaction_id=transaction.id,
            previous_payee=transaction.payee,
            category_id=category_id,
            attachment_id=attachment_id,
        )

    def find_unassigned_attachment(self, title: str) -> Attachment | None:
        """Return the first unassigned attachment with this title, or None (also on lookup failure)."""
        try:
            attachments = self.ledger.list_attachments(self.user_id, unassigned_only=True)
        except PocketsmithError as e:
            logger.warning("Error getting attachments: %s", e)
            self._report(e, title=title)
            return None

        for attachment in attachments:
            if attachment.title == title:
                return attachment
        return None

    def attach_receipt(self, record: NotificationRecord, transaction: PocketsmithTransaction) -> int | None:
        """
        Assign the record's slip image to the transaction if it is waiting unassigned.

        Returns:
            Attachment id when assigned, else None. Failures never propagate.
        """
        if not record.filename:
            return None

        attachment = self.find_unassigned_attachment(record.filename)
        if attachment is None:
            return None

        logger.info("Found unassigned attachment: %s", attachment.title)
        try:
            self.ledger.assign_attachment(transaction.id, attachment.id)
        except PocketsmithError as e:
            logger.warning("Could not attach file to transaction %d: %s", transaction.id, e)
            self._report(e, transaction_id=transaction.id, attachment_id=attachment.id)
            return None

        return attachment.id
