#!/usr/bin/env python3
"""
Notification Record Models

A notification record is one line of the transfer-slip export: fields are
separated by ";" and each field is "key=value".

Example line:
    filename=r1.jpg;to=Jane;amountTHB=120.00 THB;date=2024-01-02;time=09:30;bankref=B1;txref=T1
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from ..core.currency import strip_unit_suffix
from ..core.dates import parse_local_timestamp
from ..core.errors import InvalidRecordError
from ..core.money import Money

FIELD_SEPARATOR = ";"
RECORD_KEYS = ("filename", "to", "from", "amountTHB", "date", "time", "bankref", "txref")


def split_fields(line: str) -> list[str]:
    """Split a notification line into its raw key=value tokens."""
    return line.split(FIELD_SEPARATOR)


def find_field(fields: list[str], key: str) -> str:
    """
    Return the value of the first token starting with "key=", or "" if absent.

    Args:
        fields: Raw tokens from split_fields
        key: Field name

    Returns:
        Field value (may itself be empty)
    """
    needle = f"{key}="
    for part in fields:
        if part.startswith(needle):
            return part[len(needle):]
    return ""


@dataclass(frozen=True)
class NotificationRecord:
    """One parsed bank-transfer notification."""

    raw: str
    filename: str
    to: str
    from_: str
    amount_thb: str
    date: str
    time: str
    bankref: str
    txref: str
    timestamp: datetime

    @classmethod
    def parse(cls, line: str, timezone: str = "Asia/Bangkok") -> "NotificationRecord":
        """
        Parse a notification line.

        Args:
            line: One non-empty line of the notification source
            timezone: Zone the date and time fields are expressed in

        Returns:
            NotificationRecord

        Raises:
            InvalidRecordError: If date and time do not form a "YYYY-MM-DD HH:MM" timestamp
        """
        fields = split_fields(line)
        values = {key: find_field(fields, key) for key in RECORD_KEYS}

        try:
            timestamp = parse_local_timestamp(values["date"], values["time"], timezone)
        except ValueError as e:
            raise InvalidRecordError(
                f"Invalid date/time {values['date']!r} {values['time']!r}: {e}", line=line
            ) from e

        return cls(
            raw=line,
            filename=values["filename"],
            to=values["to"],
            from_=values["from"],
            amount_thb=values["amountTHB"],
            date=values["date"],
            time=values["time"],
            bankref=values["bankref"],
            txref=values["txref"],
            timestamp=timestamp,
        )

    @property
    def amount(self) -> str:
        """Amount string with the " THB" unit suffix removed, e.g. "120.00"."""
        return strip_unit_suffix(self.amount_thb)

    @property
    def amount_money(self) -> Money:
        """
        Amount as Money.

        Raises:
            ValueError: If the amount is not numeric
        """
        return Money.from_baht(self.amount)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "filename": self.filename,
            "to": self.to,
            "from": self.from_,
            "amount": self.amount,
            "date": self.date,
            "time": self.time,
            "timestamp": self.timestamp.isoformat(),
            "bankref": self.bankref,
            "txref": self.txref,
        }
