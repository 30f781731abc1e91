#!/usr/bin/env python3
"""
Enrichment Result Models

Per-record outcomes and the run summary produced by the reconciliation loop.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..notifications.models import NotificationRecord


class EnrichmentOutcome(Enum):
    """What happened to one notification record."""

    UPDATED = "updated"
    WOULD_UPDATE = "would_update"  # dry run
    ALREADY_ENRICHED = "already_enriched"
    UNMATCHED = "unmatched"
    SEARCH_FAILED = "search_failed"
    UPDATE_FAILED = "update_failed"
    INVALID_RECORD = "invalid_record"


@dataclass
class RecordResult:
    """Result of processing a single notification line."""

    index: int  # 1-based position in newest-first order
    total: int
    line: str
    outcome: EnrichmentOutcome
    record: NotificationRecord | None = None
    transaction_id: int | None = None
    previous_payee: str | None = None
    category_id: int | None = None
    attachment_id: int | None = None
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "index": self.index,
            "outcome": self.outcome.value,
            "record": self.record.to_dict() if self.record else {"raw": self.line},
            "transaction_id": self.transaction_id,
            "previous_payee": self.previous_payee,
            "category_id": self.category_id,
            "attachment_id": self.attachment_id,
            "message": self.message,
        }


@dataclass
class EnrichmentSummary:
    """Aggregate result of one enrichment run."""

    total_records: int = 0
    updated: int = 0
    stopped_early: bool = False
    results: list[RecordResult] = field(default_factory=list)

    def add(self, result: RecordResult) -> None:
        self.results.append(result)
        if result.outcome == EnrichmentOutcome.UPDATED:
            self.updated += 1

    @property
    def processed(self) -> int:
        """Number of records actually looked at (less than total after an early stop)."""
        return len(self.results)

    def count(self, outcome: EnrichmentOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    def outcome_counts(self) -> dict[str, int]:
        return {outcome.value: self.count(outcome) for outcome in EnrichmentOutcome}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": {
                "total_records": self.total_records,
                "processed": self.processed,
                "updated": self.updated,
                "stopped_early": self.stopped_early,
                "outcomes": self.outcome_counts(),
            },
            "results": [r.to_dict() for r in self.results],
        }
