#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer satang internally.
Prevents floating-point errors when comparing notification and ledger amounts.
"""

from dataclasses import dataclass

from .currency import number_to_satang, parse_baht_to_satang, satang_to_baht_str


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in satang (THB).

    Supports both positive (inflows) and negative (outflows) amounts.

    Examples:
        >>> transfer = Money.from_baht("120.00 THB")
        >>> str(transfer)
        '120.00 THB'

        >>> ledger = Money.from_number(-120.0)
        >>> ledger.abs() == transfer
        True
    """

    satang: int

    @classmethod
    def from_satang(cls, satang: int) -> "Money":
        """Create Money from satang."""
        return cls(satang=satang)

    @classmethod
    def from_baht(cls, baht: str) -> "Money":
        """
        Parse from a baht string like '1,250.00' or '1,250.00 THB'.

        Raises:
            ValueError: If the string is not a number
        """
        return cls(satang=parse_baht_to_satang(baht))

    @classmethod
    def from_number(cls, value: float | int | str) -> "Money":
        """Create Money from a PocketSmith JSON amount (baht as a number)."""
        return cls(satang=number_to_satang(value))

    def to_satang(self) -> int:
        """Get value in satang."""
        return self.satang

    def to_baht_str(self) -> str:
        """Get plain baht string, e.g. '-45.99'."""
        return satang_to_baht_str(self.satang)

    def to_number(self) -> float:
        """Get value as a JSON number for the PocketSmith API."""
        return self.satang / 100

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(satang=abs(self.satang))

    def __str__(self) -> str:
        """Format as baht string."""
        return f"{self.to_baht_str()} THB"

    def __repr__(self) -> str:
        return f"Money(satang={self.satang})"
