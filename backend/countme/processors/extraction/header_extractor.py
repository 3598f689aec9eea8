"""
Header Extractor: Merchant name, transaction date and order number.
"""
from datetime import datetime
from typing import List, Optional
import logging

from .rules import (
    DATE_RULES,
    ORDER_NUMBER_RULES,
    ORDER_NUMBER_LINE_LABELS,
    MIN_ORDER_NUMBER_LENGTH,
    HEADER_STOP_KEYWORDS,
    HEADER_STOP_MARKERS,
    apply_rules,
)
from ..text.date_parser import parse_date

logger = logging.getLogger(__name__)


def extract_value_after(line: str, separator: str = ":") -> str:
    """Text after the first separator, trimmed; empty if there is none."""
    _, found, value = line.partition(separator)
    return value.strip() if found else ""


def is_header_stop_line(line: str) -> bool:
    """A line carrying metadata ("Date :", "Order Number", "=====") ends the header."""
    line_lower = line.lower()
    return (
        any(keyword in line_lower for keyword in HEADER_STOP_KEYWORDS)
        or any(marker in line for marker in HEADER_STOP_MARKERS)
    )


def extract_restaurant_name(lines: List[str]) -> str:
    """
    Merchant name: consecutive lines from the top until the first metadata line.

    Multi-line names ("Mama Djempol" + "Binong") are joined with spaces.
    """
    name_lines = []
    for line in lines:
        if is_header_stop_line(line):
            break
        name_lines.append(line)
    return " ".join(name_lines).strip()


def _accept_order_number(value: str) -> Optional[str]:
    value = value.strip()
    return value if len(value) >= MIN_ORDER_NUMBER_LENGTH else None


def extract_date(lines: List[str]) -> Optional[datetime]:
    """
    Transaction date.

    The whole text is searched with the date rule table first; if that fails,
    lines labeled "date" are parsed after their colon, other lines as a whole.
    """
    result = apply_rules(DATE_RULES, "\n".join(lines), parse_date)
    if result:
        return result[0]

    for line in lines:
        if "date" in line.lower():
            date = parse_date(extract_value_after(line))
        else:
            date = parse_date(line)
        if date:
            logger.debug(f"Found date via line fallback: {line!r}")
            return date
    return None


def extract_order_number(lines: List[str]) -> str:
    """
    Order number after an "Order Number" / "No." label.

    Captures shorter than MIN_ORDER_NUMBER_LENGTH are rejected. Falls back to a
    per-line scan taking the value after the colon of a labeled line.
    """
    result = apply_rules(ORDER_NUMBER_RULES, "\n".join(lines), _accept_order_number)
    if result:
        return result[0]

    for line in lines:
        line_lower = line.lower()
        if any(label in line_lower for label in ORDER_NUMBER_LINE_LABELS):
            value = _accept_order_number(extract_value_after(line))
            if value:
                logger.debug(f"Found order number via line fallback: {line!r}")
                return value
    return ""
