#!/usr/bin/env python3
"""Tests for date primitives and zoned timestamp parsing."""

from datetime import timedelta

import pytest

from slipmatch.core.dates import FinancialDate, parse_local_timestamp


@pytest.mark.unit
class TestFinancialDate:
    """Test FinancialDate."""

    def test_iso_round_trip(self):
        leap_day = FinancialDate.from_string("2024-02-29")

        assert str(leap_day) == "2024-02-29"
        assert leap_day == FinancialDate.from_string(leap_day.to_iso_string())

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            FinancialDate.from_string("2024-02-30")


@pytest.mark.unit
class TestParseLocalTimestamp:
    """Test parse_local_timestamp."""

    def test_bangkok_offset(self):
        ts = parse_local_timestamp("2024-01-02", "09:30")

        assert ts.utcoffset() == timedelta(hours=7)
        assert (ts.hour, ts.minute) == (9, 30)

    def test_other_zone(self):
        ts = parse_local_timestamp("2024-07-01", "12:00", timezone="Europe/Berlin")

        assert ts.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize(
        "date_str,time_str",
        [("2024-01-02", "9.30"), ("02/01/2024", "09:30"), ("", ""), ("2024-1-2", "09:30"), ("2024-01-02", "9:30")],
    )
    def test_malformed_raises(self, date_str, time_str):
        with pytest.raises(ValueError):
            parse_local_timestamp(date_str, time_str)
