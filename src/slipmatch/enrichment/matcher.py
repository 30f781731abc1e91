#!/usr/bin/env python3
"""
Candidate Transaction Matching

Picks the ledger transaction a notification record belongs to.

Several ledger transactions can share a date and amount (two transfers of the
same size on one day). Candidates are taken in the order the ledger returned
them; the first one that has not been claimed earlier in the run, and whose
original payee looks like a bank transfer when phrase filtering is on, wins.
"""

import logging
from collections.abc import Iterable, Iterator

from ..core.money import Money
from ..pocketsmith.models import PocketsmithTransaction

logger = logging.getLogger(__name__)


class ProcessedReferenceSet:
    """Transaction ids already claimed during the current run. Only ever grows."""

    def __init__(self) -> None:
        self._ids: set[int] = set()

    def add(self, transaction_id: int) -> None:
        self._ids.add(transaction_id)

    def __contains__(self, transaction_id: object) -> bool:
        return transaction_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)


def contains_transfer_phrase(text: str | None, phrases: Iterable[str]) -> bool:
    """Check whether text contains any of the transfer phrases (case-sensitive)."""
    if not text:
        return False
    return any(phrase in text for phrase in phrases)


def is_already_enriched(transaction: PocketsmithTransaction, txref: str) -> bool:
    """A transaction whose memo already carries the record's txref was enriched by an earlier run."""
    return txref in (transaction.memo or "")


class CandidateSelector:
    """Select at most one unclaimed candidate for a notification record."""

    def __init__(self, transfer_phrases: Iterable[str] = (), require_transfer_phrase: bool = True):
        """
        Initialize the selector.

        Args:
            transfer_phrases: Original-payee fragments that identify a bank transfer
            require_transfer_phrase: Only accept candidates whose original payee has one of the phrases
        """
        self.transfer_phrases = list(transfer_phrases)
        self.require_transfer_phrase = require_transfer_phrase

    def filter_exact(
        self, candidates: list[PocketsmithTransaction], date: str, amount: Money
    ) -> list[PocketsmithTransaction]:
        """
        Keep candidates on exactly this date with exactly this absolute amount.

        The ledger search is a text search on the amount, so it can return
        near misses such as 1120.00 for 120.00.
        """
        wanted = amount.abs()
        return [tx for tx in candidates if tx.date.to_iso_string() == date and tx.amount.abs() == wanted]

    def is_eligible(self, candidate: PocketsmithTransaction, processed: ProcessedReferenceSet) -> bool:
        if self.require_transfer_phrase and not contains_transfer_phrase(
            candidate.original_payee, self.transfer_phrases
        ):
            return False
        return candidate.id not in processed

    def select(
        self, candidates: list[PocketsmithTransaction], processed: ProcessedReferenceSet
    ) -> PocketsmithTransaction | None:
        """
        Return the first eligible candidate and claim it, or None.

        The winner is added to processed immediately so a later record cannot
        claim it even if updating it fails.
        """
        for candidate in candidates:
            logger.debug(
                "Candidate %s: payee=%s; original_payee=%s",
                candidate.id,
                candidate.payee,
                candidate.original_payee,
            )
            if not self.is_eligible(candidate, processed):
                continue

            logger.info(
                "Using transaction: payee=%s; original_payee=%s", candidate.payee, candidate.original_payee
            )
            processed.add(candidate.id)
            return candidate

        return None
