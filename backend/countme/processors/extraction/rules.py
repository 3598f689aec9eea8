"""
Extraction Rules: Ordered regex/keyword rule tables.

Every field is extracted by walking a prioritized rule table where the first
rule that yields an accepted value wins. New document formats are supported by
adding rules to these tables, not by new extractor code.
"""
import re
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Time suffix shared by date rules: 13:27, ", 13:27:05", "pukul 13:27"
_TIME = r'(?:,?[ \t]+(?:(?:[Pp]ukul|[Jj]am|at)[ \t]+)?\d{1,2}:\d{2}(?::\d{2})?)?'


@dataclass(frozen=True)
class Rule:
    """A named regex; `group` selects the captured value (0 = whole match)."""
    name: str
    pattern: re.Pattern
    group: int = 0


def apply_rules(
    rules: Sequence[Rule],
    text: str,
    convert: Callable[[str], Optional[T]],
) -> Optional[Tuple[T, str]]:
    """
    Evaluate rules in order and return the first converted value.

    Each rule is tried on all of its matches left to right; a match whose
    converted value is None is skipped.

    Args:
        rules: Prioritized rule table
        text: Text to search
        convert: Maps a captured string to a value, or None to reject it

    Returns:
        (value, rule name) of the first success, or None
    """
    if not text:
        return None
    for rule in rules:
        for match in rule.pattern.finditer(text):
            captured = match.group(rule.group)
            if captured is None:
                continue
            value = convert(captured.strip())
            if value is not None:
                logger.debug(f"Rule '{rule.name}' matched {captured!r}")
                return value, rule.name
    return None


# ==================== Dates ====================

DATE_RULES = (
    Rule("month_name", re.compile(r'\b\d{1,2}[ \t]+[A-Za-z]{3,9}\.?[ \t]+\d{2,4}' + _TIME)),
    Rule("slash", re.compile(r'\b\d{1,4}/\d{1,2}/\d{2,4}' + _TIME)),
    Rule("iso", re.compile(r'\b\d{4}-\d{1,2}-\d{1,2}(?:[ T]\d{1,2}:\d{2}(?::\d{2})?)?')),
    Rule("dash", re.compile(r'\b\d{1,2}-\d{1,2}-\d{2,4}' + _TIME)),
)

# Labels after which a proof carries its transaction date
DATE_LABEL_RULES = (
    Rule("transaction_date_label", re.compile(r'Transaction\s+Date\s*:\s*(.+)', re.IGNORECASE), 1),
    Rule("date_label", re.compile(r'\bDate\s*:\s*(.+)', re.IGNORECASE), 1),
    Rule("tanggal_label", re.compile(r'\bTanggal(?:\s+Transaksi)?\s*:\s*(.+)', re.IGNORECASE), 1),
    Rule("waktu_label", re.compile(r'\bWaktu(?:\s+Transaksi)?\s*:\s*(.+)', re.IGNORECASE), 1),
    Rule("time_label", re.compile(r'\bTime\s*:\s*(.+)', re.IGNORECASE), 1),
)


# ==================== Receipt Metadata ====================

ORDER_NUMBER_RULES = (
    Rule(
        "order_number_label",
        re.compile(r'\b(?:Order[ \t]*(?:Number|No\.?)|No(?:\.|\b))[ \t]*[:•.\-]?[ \t]*([\w\-]+)', re.IGNORECASE),
        1,
    ),
)

# Per-line fallback labels for the order number (value follows a colon)
ORDER_NUMBER_LINE_LABELS = ("order number", "order no", "no.")

# Minimum accepted order number length (rejects accidental "No. 1" matches)
MIN_ORDER_NUMBER_LENGTH = 3

# Lines that end the merchant header
HEADER_STOP_KEYWORDS = ("date", "order")
HEADER_STOP_MARKERS = (":", "==")


# ==================== Receipt Items ====================

# "<quantity> x <unit price>", e.g. "1x 16.000", "2 x 5.000"
QUANTITY_PATTERN = re.compile(r'\b(\d+)[ \t]*[xX][ \t]*(\d+(?:[.,]\d+)*)')

# Case-sensitive markers that open the item section
ITEM_SECTION_START_MARKERS = ("REPRINT BILL", "==", "ITEM", "QTY")

# Lower-case markers that close the item section
ITEM_SECTION_END_MARKERS = ("total item", "sub total", "subtotal")

# Tokens removed from item names
ITEM_NAME_NOISE = ("**", "*", "REPRINT", "BILL", "===")

# Lines never taken as part of an item name
ITEM_NAME_SKIP_WORDS = ("BILL", "RECEIPT", "INVOICE")

# A line that is only a number: "25.000", "0"
STANDALONE_NUMBER_PATTERN = re.compile(r'^\d+(?:[.,]\d+)*$')

# Trailing amount on a line: "Qris Mandiri 25.000" -> "Qris Mandiri"
TRAILING_AMOUNT_PATTERN = re.compile(r'\s+\d+(?:[.,]\d+)*$')


# ==================== Totals & Payment ====================

TOTAL_KEYWORD = "total"
TOTAL_EXCLUDE_KEYWORDS = ("total item",)
PAYMENT_LABEL_KEYWORDS = ("tender", "payment")
PAYMENT_SKIP_KEYWORDS = ("change",)
PAYMENT_LOOKAHEAD_LINES = 3
PAYMENT_TAIL_LINES = 10


# ==================== Proof Amounts ====================

# Cheap pre-filter: a line without any of these cannot carry the paid amount
AMOUNT_SIGNAL_PATTERN = re.compile(r'rp|idr|total|amount|jumlah|nominal|\d[.,]\d', re.IGNORECASE)

_AMOUNT = r'(\d+(?:[.,]\d+)*)'

AMOUNT_RULES = (
    Rule("currency_prefix", re.compile(r'(?:\bRp\.?|\bIDR)[ \t]*' + _AMOUNT, re.IGNORECASE), 1),
    Rule("currency_suffix", re.compile(_AMOUNT + r'[ \t]*(?:Rp|IDR)\b', re.IGNORECASE), 1),
    Rule(
        "keyword_prefix",
        re.compile(
            r'\b(?:Total(?:\s+Bayar|\s+Pembayaran|\s+Transfer)?|Amount|Jumlah|Nominal|Pembayaran)'
            r'\s*:?\s*(?:Rp\.?|IDR)?\s*' + _AMOUNT,
            re.IGNORECASE,
        ),
        1,
    ),
    Rule("thousands_group", re.compile(r'\b(\d{1,3}(?:[.,]\d{3})+(?:[.,]\d{2})?)\b'), 1),
    Rule("thousands_suffix", re.compile(r'\b(\d+000)\b'), 1),
)
