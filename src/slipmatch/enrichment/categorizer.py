#!/usr/bin/env python3
"""
Category Inference

Applies the user's PocketSmith category rules to a matched transaction.
"""

import logging

from ..pocketsmith.models import CategoryRule, PocketsmithTransaction

logger = logging.getLogger(__name__)


def find_matching_rule(payee: str | None, rules: list[CategoryRule]) -> CategoryRule | None:
    """Return the first rule (in list order) that matches the payee."""
    for rule in rules:
        if rule.matches(payee):
            return rule
    return None


def infer_category(transaction: PocketsmithTransaction, rules: list[CategoryRule]) -> int | None:
    """
    Pick the category for an enriched transaction.

    Starts from the transaction's current category; the first rule matching
    its current payee overrides it.

    Args:
        transaction: Matched ledger transaction
        rules: Category rules in the order PocketSmith returned them

    Returns:
        Category id, or None when the transaction stays uncategorized
    """
    rule = find_matching_rule(transaction.payee, rules)
    if rule is None:
        return transaction.category_id

    logger.info("Found a better category: %s", rule.category.title)
    return rule.category.id
