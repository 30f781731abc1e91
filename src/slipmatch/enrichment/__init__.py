"""
Transaction Enrichment Package

Matches bank-transfer notifications to PocketSmith transactions and enriches them.

Key Components:
- CandidateSelector / ProcessedReferenceSet: pick one unclaimed candidate per record
- infer_category: apply category rules, first match wins
- TransactionEnricher: the newest-first reconciliation loop
- run_enrichment: one complete run against the configured account
"""

from .categorizer import find_matching_rule, infer_category
from .enricher import TransactionEnricher, build_memo, build_update
from .matcher import CandidateSelector, ProcessedReferenceSet, contains_transfer_phrase, is_already_enriched
from .models import EnrichmentOutcome, EnrichmentSummary, RecordResult
from .runner import load_category_rules, run_enrichment

__all__ = [
    "CandidateSelector",
    "EnrichmentOutcome",
    "EnrichmentSummary",
    "ProcessedReferenceSet",
    "RecordResult",
    "TransactionEnricher",
    "build_memo",
    "build_update",
    "contains_transfer_phrase",
    "find_matching_rule",
    "infer_category",
    "is_already_enriched",
    "load_category_rules",
    "run_enrichment",
]
