from .price_parser import parse_price, extract_price, find_number_tokens
from .date_parser import parse_date, DEFAULT_DATE_FORMATS

__all__ = ["parse_price", "extract_price", "find_number_tokens", "parse_date", "DEFAULT_DATE_FORMATS"]
