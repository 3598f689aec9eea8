"""
Proof Extractor: Payment date, paid amount and bank from a payment proof.

A proof (transfer receipt, e-wallet screenshot) carries exactly one
authoritative amount, so the first confident amount wins and scanning stops
once both a date and a nonzero amount are known.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
import logging

from .rules import (
    DATE_RULES,
    DATE_LABEL_RULES,
    AMOUNT_RULES,
    AMOUNT_SIGNAL_PATTERN,
    apply_rules,
)
from .receipt_extractor import split_lines
from ..text.date_parser import parse_date
from ..text.price_parser import parse_price
from ..enrichment.bank_names import detect_bank_name
from ...models import ParsedProof

logger = logging.getLogger(__name__)


def _parse_labeled_date(value: str) -> Optional[datetime]:
    """Date after a label: the whole value, else a date pattern inside it."""
    date = parse_date(value)
    if date:
        return date
    result = apply_rules(DATE_RULES, value, parse_date)
    return result[0] if result else None


def _nonzero_price(value: str) -> Optional[Decimal]:
    price = parse_price(value)
    if price is None or price <= 0:
        return None
    return price


def find_date(line: str) -> Optional[datetime]:
    """Date on one proof line: date patterns first, then labeled values."""
    result = apply_rules(DATE_RULES, line, parse_date)
    if result is None:
        result = apply_rules(DATE_LABEL_RULES, line, _parse_labeled_date)
    return result[0] if result else None


def find_amount(line: str) -> Optional[Decimal]:
    """Nonzero paid amount on one proof line, or None."""
    if not AMOUNT_SIGNAL_PATTERN.search(line):
        return None
    result = apply_rules(AMOUNT_RULES, line, _nonzero_price)
    if result:
        logger.debug(f"Amount {result[0]} via rule '{result[1]}' in line: {line!r}")
        return result[0]
    return None


def extract_proof(text: str) -> ParsedProof:
    """
    Extract a structured payment proof from OCR text.

    Args:
        text: Reconstructed (or raw) OCR text of the proof

    Returns:
        ParsedProof; missing fields keep their defaults
    """
    lines = split_lines(text)

    date_time: Optional[datetime] = None
    total_payment: Optional[Decimal] = None

    for line in lines:
        if date_time is None:
            date_time = find_date(line)
        if total_payment is None:
            total_payment = find_amount(line)
        if date_time is not None and total_payment is not None:
            break

    proof = ParsedProof(
        date_time=date_time,
        total_payment=total_payment if total_payment is not None else Decimal("0"),
        bank_name=detect_bank_name(lines),
        raw_text=text or "",
    )

    logger.info(
        f"Extracted proof: date={proof.date_time}, amount={proof.total_payment}, bank={proof.bank_name}"
    )
    return proof
