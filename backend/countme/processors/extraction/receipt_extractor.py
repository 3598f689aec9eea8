"""
Receipt Extractor: Structured receipt fields from OCR text.

Pipeline (single pass over trimmed, non-empty lines):
1. Merchant name (header lines)
2. Date and order number
3. Line items (item section)
4. Total
5. Payment method

Every field falls back to its empty default; extraction never fails as a whole,
so a reviewer can complete the record by hand.
"""
from typing import List
import logging

from .header_extractor import extract_restaurant_name, extract_date, extract_order_number
from .item_extractor import extract_line_items
from .totals_extractor import extract_total, extract_payment_method
from ...models import ParsedReceipt

logger = logging.getLogger(__name__)


def split_lines(text: str) -> List[str]:
    """Trimmed lines with blank lines removed."""
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def extract_receipt(text: str) -> ParsedReceipt:
    """
    Extract a structured receipt from reading-order OCR text.

    Args:
        text: Reconstructed (or raw) OCR text

    Returns:
        ParsedReceipt; raw_text is the input unchanged
    """
    lines = split_lines(text)
    if not lines:
        logger.debug("Empty receipt text")
        return ParsedReceipt(raw_text=text or "")

    receipt = ParsedReceipt(
        restaurant_name=extract_restaurant_name(lines),
        order_number=extract_order_number(lines),
        date_time=extract_date(lines),
        line_items=extract_line_items(lines),
        total_price=extract_total(lines),
        payment_method=extract_payment_method(lines),
        raw_text=text,
    )

    logger.info(
        f"Extracted receipt: merchant={receipt.restaurant_name!r}, order={receipt.order_number!r}, "
        f"items={len(receipt.line_items)}, total={receipt.total_price}"
    )
    return receipt
