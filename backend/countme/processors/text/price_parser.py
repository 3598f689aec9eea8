"""
Price Parser: Locale-aware currency amount parsing.

Resolves the thousands-separator ambiguity between Indonesian ("25.000" = 25000)
and US ("38,000.00" = 38000) notation with a fixed disambiguation order:

1. "0" is always zero.
2. Both "," and "." present: "," groups thousands and is stripped, "." is the
   decimal point ("38,000.00" -> 38000.00).
3. Only "." present and the string ends in exactly three digits after the last
   "." or ends in "000": "." groups thousands ("25.000" -> 25000).
4. Several "," and no ".": "," groups thousands ("1,000,000" -> 1000000).
5. Otherwise "," is a decimal comma ("9,50" -> 9.50).
"""
import re
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

logger = logging.getLogger(__name__)

# A number with optional "." / "," groups, e.g. 25.000, 38,000.00, 9,50, 16000
NUMBER_TOKEN_PATTERN = re.compile(r'\d+(?:[.,]\d+)*')

_NON_NUMERIC_PATTERN = re.compile(r'[^0-9.,]')
_THREE_DIGIT_SUFFIX_PATTERN = re.compile(r'\.\d{3}$')


def parse_price(price_str: Optional[str]) -> Optional[Decimal]:
    """
    Parse a currency amount string into a Decimal.

    Currency markers ("Rp", "IDR") and whitespace are ignored.

    Args:
        price_str: Raw amount string, e.g. "Rp. 38,000.00", "25.000", "9,50"

    Returns:
        Decimal amount, or None when no number can be read
    """
    if price_str is None:
        return None

    if price_str.strip() == "0":
        return Decimal("0.0")

    cleaned = _NON_NUMERIC_PATTERN.sub("", price_str).strip(".,")
    if not cleaned or not any(ch.isdigit() for ch in cleaned):
        return None

    if "," in cleaned and "." in cleaned:
        normalized = cleaned.replace(",", "")
    elif "." in cleaned:
        if _THREE_DIGIT_SUFFIX_PATTERN.search(cleaned) or cleaned.endswith("000"):
            normalized = cleaned.replace(".", "")
        else:
            normalized = cleaned
    elif cleaned.count(",") > 1:
        normalized = cleaned.replace(",", "")
    else:
        normalized = cleaned.replace(",", ".")

    try:
        return Decimal(normalized)
    except InvalidOperation:
        logger.debug(f"Could not parse price: {price_str!r}")
        return None


def find_number_tokens(text: str) -> List[str]:
    """All number-like tokens in text, left to right."""
    if not text:
        return []
    return NUMBER_TOKEN_PATTERN.findall(text)


def extract_price(text: str) -> Optional[Decimal]:
    """
    Read the rightmost amount on a line.

    Receipt lines carry their figure at the end ("Total 25.000",
    "Qris Mandiri 25.000"), so the last number token wins.
    """
    for token in reversed(find_number_tokens(text)):
        amount = parse_price(token)
        if amount is not None:
            return amount
    return None
