"""
Bank Names: Detect the issuing bank or e-wallet on a payment proof.
"""
import re
import logging
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# (pattern, canonical name); multi-word and longer names first
BANK_PATTERNS: List[Tuple[re.Pattern, str]] = [
    (re.compile(r'\bCIMB(?:\s*NIAGA)?\b', re.IGNORECASE), "CIMB Niaga"),
    (re.compile(r'\bBANK\s+SYARIAH\s+INDONESIA\b|\bBSI\b', re.IGNORECASE), "BSI"),
    (re.compile(r'\bSEA\s?BANK\b', re.IGNORECASE), "SeaBank"),
    (re.compile(r'\bBANK\s+JAGO\b|\bJAGO\b', re.IGNORECASE), "Jago"),
    (re.compile(r'\bPERMATA\b', re.IGNORECASE), "Permata"),
    (re.compile(r'\bDANAMON\b', re.IGNORECASE), "Danamon"),
    (re.compile(r'\bMANDIRI\b|\bLIVIN\b', re.IGNORECASE), "Mandiri"),
    (re.compile(r'\bOCBC\b', re.IGNORECASE), "OCBC"),
    (re.compile(r'\bBCA\b|\bKLIKBCA\b', re.IGNORECASE), "BCA"),
    (re.compile(r'\bBNI\b', re.IGNORECASE), "BNI"),
    (re.compile(r'\bBRI\b|\bBRIMO\b', re.IGNORECASE), "BRI"),
    (re.compile(r'\bBTN\b', re.IGNORECASE), "BTN"),
    (re.compile(r'\bSHOPEE\s?PAY\b', re.IGNORECASE), "ShopeePay"),
    (re.compile(r'\bGO\s?PAY\b', re.IGNORECASE), "GoPay"),
    (re.compile(r'\bOVO\b', re.IGNORECASE), "OVO"),
    (re.compile(r'\bDANA\b', re.IGNORECASE), "DANA"),
]


def detect_bank_name(lines: Iterable[str]) -> Optional[str]:
    """
    Find the first known bank or e-wallet mentioned on a proof.

    Lines are scanned top to bottom; within a line the pattern table order
    decides ("CIMB Niaga" before shorter names).

    Args:
        lines: Proof text lines

    Returns:
        Canonical bank name, or None if no known issuer is found
    """
    for line in lines:
        for pattern, name in BANK_PATTERNS:
            if pattern.search(line):
                logger.debug(f"Found bank name '{name}' in line: {line!r}")
                return name
    return None
