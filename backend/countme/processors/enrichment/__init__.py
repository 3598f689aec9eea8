from .payment_types import normalize_payment_type, contains_payment_keyword, PAYMENT_KEYWORDS
from .bank_names import detect_bank_name

__all__ = ["normalize_payment_type", "contains_payment_keyword", "PAYMENT_KEYWORDS", "detect_bank_name"]
