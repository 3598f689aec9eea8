"""
Totals Extractor: Receipt total and payment method.
"""
from decimal import Decimal
from typing import List, Optional
import logging

from .rules import (
    TOTAL_KEYWORD,
    TOTAL_EXCLUDE_KEYWORDS,
    PAYMENT_LABEL_KEYWORDS,
    PAYMENT_SKIP_KEYWORDS,
    PAYMENT_LOOKAHEAD_LINES,
    PAYMENT_TAIL_LINES,
    STANDALONE_NUMBER_PATTERN,
    TRAILING_AMOUNT_PATTERN,
)
from ..text.price_parser import extract_price
from ..enrichment.payment_types import contains_payment_keyword

logger = logging.getLogger(__name__)


def _is_total_line(line: str) -> bool:
    line_lower = line.lower()
    return TOTAL_KEYWORD in line_lower and not any(k in line_lower for k in TOTAL_EXCLUDE_KEYWORDS)


def extract_total(lines: List[str]) -> Decimal:
    """
    Total price from the first "total" line that yields an amount.

    "Total Item 3" is never a total. When the total line has no figure
    (split by layout reconstruction), the amount is read from the next line.

    Returns:
        Total amount, Decimal 0 when not found
    """
    for i, line in enumerate(lines):
        if not _is_total_line(line):
            continue

        price = extract_price(line)
        if price is not None:
            logger.info(f"Found TOTAL: {price} at line {i}")
            return price

        if i + 1 < len(lines):
            price = extract_price(lines[i + 1])
            if price is not None:
                logger.info(f"Found TOTAL (next line fallback): {price} at line {i + 1}")
                return price

    logger.debug("TOTAL line/amount not found")
    return Decimal("0")


def _strip_amount(line: str) -> str:
    return TRAILING_AMOUNT_PATTERN.sub("", line).strip()


def _method_after_label(lines: List[str], label_index: int) -> Optional[str]:
    """First usable line after a Tender/Payment label, trailing amount removed."""
    for line in lines[label_index + 1:label_index + 1 + PAYMENT_LOOKAHEAD_LINES]:
        if any(k in line.lower() for k in PAYMENT_SKIP_KEYWORDS):
            continue
        if STANDALONE_NUMBER_PATTERN.match(line.strip()):
            continue
        method = _strip_amount(line)
        if method:
            return method
    return None


def extract_payment_method(lines: List[str]) -> str:
    """
    Payment method.

    Looks below a "Tender"/"Payment" label first. Only when no such label exists,
    the last lines of the receipt are searched for a known payment keyword
    (cash, card, qris, gopay, ...), skipping total and change lines.

    Returns:
        Payment method text, empty string when not found
    """
    label_found = False
    for i, line in enumerate(lines):
        if not any(k in line.lower() for k in PAYMENT_LABEL_KEYWORDS):
            continue
        label_found = True
        method = _method_after_label(lines, i)
        if method:
            logger.info(f"Found payment method: {method!r}")
            return method

    if label_found:
        return ""

    for line in lines[-PAYMENT_TAIL_LINES:]:
        line_lower = line.lower()
        if TOTAL_KEYWORD in line_lower or any(k in line_lower for k in PAYMENT_SKIP_KEYWORDS):
            continue
        if contains_payment_keyword(line):
            method = _strip_amount(line)
            logger.info(f"Found payment method (keyword fallback): {method!r}")
            return method

    return ""
