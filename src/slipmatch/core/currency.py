#!/usr/bin/env python3
"""
Currency Conversion and Handling Utilities

All amount comparisons use integer satang (1/100 THB) to avoid floating-point errors.

Currency Systems:
- Notification records carry amounts as strings like "1,250.00 THB"
- PocketSmith returns amounts as JSON numbers like -1250.0
- Internal comparisons use satang: 100 satang = 1.00 THB
"""

from decimal import Decimal, InvalidOperation

THB_SUFFIX = " THB"


def strip_unit_suffix(amount_str: str, suffix: str = THB_SUFFIX) -> str:
    """
    Remove every occurrence of the unit suffix from a notification amount.

    Example:
        strip_unit_suffix("120.00 THB") -> "120.00"
    """
    return amount_str.replace(suffix, "")


def parse_baht_to_satang(baht_str: str) -> int:
    """
    Parse a baht string to satang using integer arithmetic only.

    Args:
        baht_str: String representation of a baht amount

    Returns:
        Amount in satang

    Raises:
        ValueError: If the string is not a number

    Examples:
        parse_baht_to_satang("12.34") -> 1234
        parse_baht_to_satang("1,234.56") -> 123456
        parse_baht_to_satang("12.5") -> 1250
        parse_baht_to_satang("-7") -> -700
    """
    clean = strip_unit_suffix(baht_str).replace(",", "").strip()

    if not clean:
        return 0

    is_negative = clean.startswith("-")
    if is_negative:
        clean = clean[1:]

    if "." in clean:
        whole, _, fraction = clean.partition(".")
        baht = int(whole) if whole else 0
        # Pad to 2 digits, truncate beyond 2
        satang = int(fraction.ljust(2, "0")[:2])
        total = baht * 100 + satang
    else:
        total = int(clean) * 100

    return -total if is_negative else total


def number_to_satang(value: float | int | str) -> int:
    """
    Convert a JSON number from the ledger API to satang.

    Floats are routed through their shortest string form so -45.99 becomes -4599.
    """
    try:
        return int((Decimal(str(value)) * 100).to_integral_value())
    except InvalidOperation as e:
        raise ValueError(f"Not a numeric amount: {value!r}") from e


def satang_to_baht_str(satang: int) -> str:
    """
    Convert satang to a plain baht string.

    Example:
        satang_to_baht_str(-4599) -> "-45.99"
    """
    sign = "-" if satang < 0 else ""
    whole, remainder = divmod(abs(int(satang)), 100)
    return f"{sign}{whole}.{remainder:02d}"
