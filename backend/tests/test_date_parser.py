"""Tests for stateless multi-format date parsing."""
import sys
from datetime import datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from countme.processors.text.date_parser import (
    DEFAULT_DATE_FORMATS,
    normalize_date_string,
    parse_date,
)


def test_slash_day_first():
    assert parse_date("17/03/2025 13:27") == datetime(2025, 3, 17, 13, 27)


def test_month_name():
    assert parse_date("17 Mar 2025 13:27:05") == datetime(2025, 3, 17, 13, 27, 5)


def test_indonesian_month_name():
    assert parse_date("17 Maret 2025 13:27") == datetime(2025, 3, 17, 13, 27)
    assert parse_date("5 Agustus 2024") == datetime(2024, 8, 5)


def test_iso():
    assert parse_date("2025-03-17 13:27:05") == datetime(2025, 3, 17, 13, 27, 5)
    assert parse_date("2025-03-17") == datetime(2025, 3, 17)


def test_comma_and_timezone_suffix():
    assert parse_date("17 Mar 2025, 13:27 WIB") == datetime(2025, 3, 17, 13, 27)


def test_month_abbreviation_period():
    assert parse_date("17 Mar. 2025") == datetime(2025, 3, 17)
    assert parse_date("5 Agt. 2024 09:15") == datetime(2024, 8, 5, 9, 15)


def test_unparseable_returns_none():
    assert parse_date("not a date") is None
    assert parse_date("") is None
    assert parse_date(None) is None


def test_custom_formats():
    assert parse_date("03/17/2025", formats=["%m/%d/%Y"]) == datetime(2025, 3, 17)
    assert parse_date("17/03/2025", formats=["%m/%d/%Y"]) is None


def test_deterministic():
    for candidate in ("17/03/2025 13:27", "garbage", "17 Mar 2025"):
        results = {parse_date(candidate) for _ in range(5)}
        assert len(results) == 1


def test_default_formats_start_with_month_names():
    assert DEFAULT_DATE_FORMATS[0].startswith("%d %b")


def test_normalize_date_string():
    assert normalize_date_string("17 Maret 2025 pukul 13:27") == "17 Mar 2025 13:27"
