#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for ledger operations,
plus the zoned timestamp parsing used for notification records.
"""

from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD (the format PocketSmith expects)."""
        return self.date.isoformat()

    def __str__(self) -> str:
        return self.to_iso_string()

    def __repr__(self) -> str:
        return f"FinancialDate(date={self.date!r})"


def parse_local_timestamp(date_str: str, time_str: str, timezone: str = "Asia/Bangkok") -> datetime:
    """
    Combine a date and a time into an aware datetime in the given zone.

    Args:
        date_str: Date in YYYY-MM-DD
        time_str: Time in HH:MM
        timezone: IANA zone name

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the combined string is not exactly "YYYY-MM-DD HH:MM"
    """
    combined = f"{date_str} {time_str}"
    naive = datetime.strptime(combined, TIMESTAMP_FORMAT)
    # strptime also accepts unpadded fields such as "2024-3-1 9:5"
    if naive.strftime(TIMESTAMP_FORMAT) != combined:
        raise ValueError(f"timestamp {combined!r} does not match format {TIMESTAMP_FORMAT!r}")
    return naive.replace(tzinfo=ZoneInfo(timezone))
