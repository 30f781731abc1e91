#!/usr/bin/env python3
"""
PocketSmith Domain Models

Type-safe models representing PocketSmith API data structures.
These models are true to the PocketSmith API format and use Money/FinancialDate primitives.
"""

from dataclasses import dataclass
from typing import Any

from ..core.dates import FinancialDate
from ..core.money import Money


@dataclass
class PocketsmithUser:
    """PocketSmith user from GET /me."""

    id: int
    login: str | None = None
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithUser":
        return cls(id=data["id"], login=data.get("login"), name=data.get("name"))


@dataclass
class PocketsmithCategory:
    """
    PocketSmith category.

    Only the fields the enrichment run reads are kept.
    """

    id: int
    title: str
    parent_id: int | None = None
    is_transfer: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithCategory":
        return cls(
            id=data["id"],
            title=data.get("title") or "",
            parent_id=data.get("parent_id"),
            is_transfer=data.get("is_transfer", False),
        )


@dataclass
class CategoryRule:
    """
    PocketSmith category rule.

    A rule assigns its category to any transaction whose payee contains the
    rule's payee_matches text (case-insensitive).
    """

    id: int
    payee_matches: str
    category: PocketsmithCategory

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CategoryRule":
        return cls(
            id=data["id"],
            payee_matches=data.get("payee_matches") or "",
            category=PocketsmithCategory.from_dict(data["category"]),
        )

    def matches(self, payee: str | None) -> bool:
        """Check whether this rule applies to a payee."""
        if not self.payee_matches or not payee:
            return False
        return self.payee_matches.casefold() in payee.casefold()


@dataclass
class Attachment:
    """PocketSmith attachment (an uploaded receipt file)."""

    id: int
    title: str | None
    file_name: str | None = None
    content_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attachment":
        return cls(
            id=data["id"],
            title=data.get("title"),
            file_name=data.get("file_name"),
            content_type=data.get("content_type"),
        )


@dataclass
class PocketsmithTransaction:
    """
    PocketSmith transaction from API.

    Represents a ledger transaction considered for enrichment.
    """

    id: int
    date: FinancialDate
    amount: Money
    payee: str | None
    original_payee: str | None
    memo: str | None
    note: str | None
    is_transfer: bool
    needs_review: bool
    category: PocketsmithCategory | None = None
    status: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PocketsmithTransaction":
        """
        Create PocketsmithTransaction from API dict.

        Args:
            data: Transaction object from the PocketSmith API

        Returns:
            PocketsmithTransaction instance
        """
        category = data.get("category")
        return cls(
            id=data["id"],
            date=FinancialDate.from_string(data["date"]),
            amount=Money.from_number(data["amount"]),
            payee=data.get("payee"),
            original_payee=data.get("original_payee"),
            memo=data.get("memo"),
            note=data.get("note"),
            is_transfer=bool(data.get("is_transfer", False)),
            needs_review=bool(data.get("needs_review", False)),
            category=PocketsmithCategory.from_dict(category) if category else None,
            status=data.get("status"),
        )

    @property
    def category_id(self) -> int | None:
        """Id of the current category, or None when uncategorized."""
        return self.category.id if self.category else None


@dataclass
class TransactionUpdate:
    """Fields submitted with PUT /transactions/{id}."""

    payee: str
    memo: str
    amount: Money
    date: FinancialDate
    is_transfer: bool
    needs_review: bool
    note: str | None = None
    category_id: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the request body.

        category_id is omitted when there is no category so the update leaves
        the transaction uncategorized rather than failing validation.
        """
        body: dict[str, Any] = {
            "payee": self.payee,
            "memo": self.memo,
            "amount": self.amount.to_number(),
            "date": self.date.to_iso_string(),
            "is_transfer": self.is_transfer,
            "needs_review": self.needs_review,
            "note": self.note or "",
        }
        if self.category_id is not None:
            body["category_id"] = self.category_id
        return body
