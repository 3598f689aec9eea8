"""
Date Parser: Multi-format date parsing for receipts and payment proofs.

Handles cases like:
- "17 Mar 2025 13:27:05" / "17 Maret 2025 13:27" (Indonesian month names)
- "17/03/2025 13:27" -> day first
- "2025-03-17 13:27:05"
- "17 Mar 2025, 13:27 WIB" (comma and time zone suffix)

Formats are tried in order and the first successful parse wins. Unambiguous
month-name layouts come before numeric ones so a numeric template never
silently reorders day and month of a differently laid out date.
"""
import re
import logging
from datetime import datetime
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_DATE_FORMATS = (
    "%d %b %Y %H:%M:%S",
    "%d %b %Y %H:%M",
    "%d %b %Y %H.%M",
    "%d %b %Y",
    "%d %b %y %H:%M:%S",
    "%d %b %y %H:%M",
    "%d %b %y",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%y %H:%M:%S",
    "%d/%m/%y %H:%M",
    "%m/%d/%Y %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d %H:%M",
    "%d/%m/%Y",
    "%d/%m/%y",
    "%Y/%m/%d",
    "%d-%m-%Y %H:%M:%S",
    "%d-%m-%Y %H:%M",
    "%d-%m-%y %H:%M",
    "%d-%m-%Y",
    "%d-%m-%y",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
)

# Indonesian (and long English) month names -> English abbreviations for %b
MONTH_ALIASES = {
    "januari": "Jan", "january": "Jan",
    "februari": "Feb", "pebruari": "Feb", "peb": "Feb", "february": "Feb",
    "maret": "Mar", "march": "Mar",
    "april": "Apr",
    "mei": "May",
    "juni": "Jun", "june": "Jun",
    "juli": "Jul", "july": "Jul",
    "agustus": "Aug", "agu": "Aug", "agt": "Aug", "agst": "Aug", "august": "Aug",
    "september": "Sep", "sept": "Sep",
    "oktober": "Oct", "okt": "Oct", "october": "Oct",
    "november": "Nov", "nop": "Nov",
    "desember": "Dec", "des": "Dec", "december": "Dec",
}

# A word with an optional abbreviation period: "Mar.", "Agt."
_WORD_PATTERN = re.compile(r'[A-Za-z]+\.?')
_TIMEZONE_SUFFIX_PATTERN = re.compile(r'\s*\b(?:WIB|WITA|WIT|GMT|UTC)(?:[+-]\d{1,2}(?::?\d{2})?)?\s*$', re.IGNORECASE)


def normalize_date_string(date_str: str) -> str:
    """
    Normalize a date candidate before template matching.

    Collapses whitespace, drops commas, "pukul"/"jam" time markers and a
    trailing time zone, and rewrites month names (with or without an
    abbreviation period) to English abbreviations.
    """
    text = date_str.replace("\n", " ").replace(",", " ")
    text = re.sub(r'\b(?:pukul|jam|at)\b', ' ', text, flags=re.IGNORECASE)
    text = _TIMEZONE_SUFFIX_PATTERN.sub("", text)
    text = re.sub(r'\s+', ' ', text).strip()

    def _month(match: "re.Match[str]") -> str:
        word = match.group(0).rstrip(".")
        return MONTH_ALIASES.get(word.lower(), word)

    return _WORD_PATTERN.sub(_month, text)


def parse_date(
    date_str: Optional[str],
    formats: Sequence[str] = DEFAULT_DATE_FORMATS,
) -> Optional[datetime]:
    """
    Parse a date candidate against an ordered list of strptime templates.

    Args:
        date_str: Candidate substring (already isolated from the line)
        formats: Templates tried in order; first success wins

    Returns:
        datetime, or None when every template fails
    """
    if not date_str:
        return None

    candidate = normalize_date_string(date_str)
    if not candidate:
        return None

    for fmt in formats:
        try:
            return datetime.strptime(candidate, fmt)
        except ValueError:
            continue

    logger.debug(f"Could not parse date: {date_str!r}")
    return None
