"""
Payment Types: Defines payment method categories and receipt payment keywords.

Raw payment methods read from receipts ("Qris Mandiri", "DEBIT BCA", "Tunai")
are normalized to one of VALID_PAYMENT_TYPES for filtering and reporting.
"""
import re
from typing import List, Dict, Optional
import logging

from rapidfuzz import fuzz, process

logger = logging.getLogger(__name__)

# Keywords that identify a payment line near the end of a receipt
PAYMENT_KEYWORDS = ["cash", "card", "credit", "debit", "visa", "master", "qris", "gopay", "ovo", "dana"]

# Valid payment type categories
VALID_PAYMENT_TYPES = [
    "QRIS",
    "Cash",
    "Debit Card",
    "Credit Card",
    "Visa",
    "Master",
    "GoPay",
    "OVO",
    "DANA",
    "ShopeePay",
    "Bank Transfer",
    "Others",
    "Unknown"
]

# Payment type mapping: keywords -> normalized type (checked in insertion order)
PAYMENT_TYPE_MAPPING: Dict[str, str] = {
    # QR payments
    "qris": "QRIS",
    "qr code": "QRIS",

    # E-wallets
    "gopay": "GoPay",
    "go pay": "GoPay",
    "ovo": "OVO",
    "dana": "DANA",
    "shopeepay": "ShopeePay",
    "shopee pay": "ShopeePay",

    # Card networks
    "visa": "Visa",
    "mastercard": "Master",
    "master card": "Master",
    "master": "Master",

    # Cards
    "debit": "Debit Card",
    "edc": "Debit Card",
    "credit": "Credit Card",
    "kredit": "Credit Card",

    # Transfers
    "transfer": "Bank Transfer",
    "virtual account": "Bank Transfer",

    # Cash
    "cash": "Cash",
    "tunai": "Cash",
}

# Keywords matched as whole words so "dana" does not fire inside "Danamon"
PAYMENT_TYPE_PATTERNS = [
    (re.compile(r"\b" + re.escape(keyword) + r"\b"), normalized_type)
    for keyword, normalized_type in PAYMENT_TYPE_MAPPING.items()
]

# Fuzzy fallback threshold (rapidfuzz 0-100 scale)
FUZZY_MATCH_THRESHOLD = 75


def normalize_payment_type(payment_method: Optional[str]) -> str:
    """
    Normalize payment method to one of the valid categories.

    Args:
        payment_method: Raw payment method string from receipt

    Returns:
        Normalized payment type (one of VALID_PAYMENT_TYPES)
    """
    if not payment_method:
        return "Unknown"

    payment_lower = payment_method.lower().strip()

    # Try exact match first
    if payment_lower in PAYMENT_TYPE_MAPPING:
        return PAYMENT_TYPE_MAPPING[payment_lower]

    # Try keyword match (any keyword as a whole word in the payment method)
    for pattern, normalized_type in PAYMENT_TYPE_PATTERNS:
        if pattern.search(payment_lower):
            return normalized_type

    # OCR-garbled methods ("QRlS", "G0PAY", "TUNAl"): fuzzy match each word
    for word in payment_lower.split():
        if len(word) < 4:
            continue
        match = process.extractOne(
            word,
            list(PAYMENT_TYPE_MAPPING.keys()),
            scorer=fuzz.ratio,
            score_cutoff=FUZZY_MATCH_THRESHOLD
        )
        if match:
            keyword, score, _ = match
            logger.debug(f"Fuzzy payment match: '{word}' -> '{keyword}' (score={score:.0f})")
            return PAYMENT_TYPE_MAPPING[keyword]

    return "Others"


def contains_payment_keyword(line: str) -> bool:
    """Check whether a line mentions a known payment method keyword."""
    line_lower = line.lower()
    return any(keyword in line_lower for keyword in PAYMENT_KEYWORDS)


def is_valid_payment_type(payment_type: str) -> bool:
    """
    Check if a payment type is valid.

    Args:
        payment_type: Payment type to validate

    Returns:
        True if valid, False otherwise
    """
    return payment_type in VALID_PAYMENT_TYPES


def get_all_payment_types() -> List[str]:
    """
    Get list of all valid payment types.

    Returns:
        List of valid payment type strings
    """
    return VALID_PAYMENT_TYPES.copy()
