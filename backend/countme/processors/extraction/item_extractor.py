"""
Item Extractor: Line items from the receipt item section.

The item section runs from the first start marker ("REPRINT BILL", "==",
"ITEM", "QTY") to the first totals line. Every quantity line
("1x 16.000 16.000") inside it is one item. The item name is either the text
before the quantity pattern on the same line, or the lines directly above it,
collected bottom-up by ItemNameScanner so OCR-wrapped names
("Daging Sapi lada" + "Hitam") are joined back together.
"""
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple
import logging

from .rules import (
    QUANTITY_PATTERN,
    ITEM_SECTION_START_MARKERS,
    ITEM_SECTION_END_MARKERS,
    ITEM_NAME_NOISE,
    ITEM_NAME_SKIP_WORDS,
    TRAILING_AMOUNT_PATTERN,
    TOTAL_KEYWORD,
)
from ..text.price_parser import parse_price, find_number_tokens
from ...models import LineItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuantityLine:
    """A "<qty> x <unit price>" line and the price read from it."""
    index: int
    price: Decimal
    name_prefix: str


class ScanState(Enum):
    COLLECTING = "collecting"
    STOPPED = "stopped"


class StopReason(Enum):
    QUANTITY_LINE = "quantity_line"
    METADATA_LINE = "metadata_line"
    SECTION_BOUNDARY = "section_boundary"


# ==================== Line Predicates ====================

def is_quantity_line(line: str) -> bool:
    return QUANTITY_PATTERN.search(line) is not None


def is_marker_line(line: str) -> bool:
    return any(marker in line for marker in ITEM_SECTION_START_MARKERS)


def is_metadata_line(line: str) -> bool:
    line_lower = line.lower()
    return ":" in line or "date" in line_lower or "order" in line_lower


def is_section_end_line(line: str) -> bool:
    """Totals line closing the item section ("Total Item 3", "Sub Total", "Total 25.000")."""
    line_lower = line.lower()
    if any(marker in line_lower for marker in ITEM_SECTION_END_MARKERS):
        return True
    return TOTAL_KEYWORD in line_lower and not is_quantity_line(line)


# ==================== Name Cleaning ====================

def strip_trailing_amount(line: str) -> str:
    return TRAILING_AMOUNT_PATTERN.sub("", line).strip()


def clean_item_name(name: str) -> str:
    """Remove leading stray digits and noise tokens ("**", "REPRINT", "BILL")."""
    cleaned = re.sub(r'^\d+\s+', '', name.strip())
    for noise in ITEM_NAME_NOISE:
        cleaned = cleaned.replace(noise, "")
    return re.sub(r'\s+', ' ', cleaned).strip()


class ItemNameScanner:
    """
    Collects an item name from the lines above a quantity line.

    Walks upward from the line before the quantity line. Marker lines are
    passed over; a quantity line, a metadata line or the lower bound stops the
    scan. Collected lines keep their original top-to-bottom order.
    """

    def __init__(self, lines: List[str], lower_bound: int):
        self.lines = lines
        self.lower_bound = lower_bound
        self.state = ScanState.COLLECTING
        self.stop_reason: Optional[StopReason] = None
        self.parts: List[str] = []

    def _stop(self, reason: StopReason) -> None:
        self.state = ScanState.STOPPED
        self.stop_reason = reason

    def scan(self, quantity_index: int) -> str:
        index = quantity_index - 1
        while self.state is ScanState.COLLECTING:
            if index < self.lower_bound:
                self._stop(StopReason.SECTION_BOUNDARY)
                break

            line = self.lines[index]
            index -= 1

            if is_marker_line(line):
                continue
            if is_quantity_line(line):
                self._stop(StopReason.QUANTITY_LINE)
            elif is_metadata_line(line):
                self._stop(StopReason.METADATA_LINE)
            else:
                self._collect(line)

        return " ".join(self.parts)

    def _collect(self, line: str) -> None:
        cleaned = strip_trailing_amount(line)
        if cleaned and not any(word in cleaned for word in ITEM_NAME_SKIP_WORDS):
            self.parts.insert(0, cleaned)


# ==================== Section & Quantity Lines ====================

def find_item_section(lines: List[str]) -> Tuple[int, int]:
    """
    Item section as a half-open index range [start, end).

    Starts after the first start-marker line (or at 0 without one) and ends at
    the first totals line after it (or at the end of the text).
    """
    start = 0
    for i, line in enumerate(lines):
        if is_marker_line(line):
            start = i + 1
            break

    end = len(lines)
    for i in range(start, len(lines)):
        if is_section_end_line(lines[i]):
            end = i
            break

    return start, end


def _quantity_line_price(line: str, match: "re.Match[str]") -> Optional[Decimal]:
    """Rightmost figure after the quantity pattern, else the unit price inside it."""
    for token in reversed(find_number_tokens(line[match.end():])):
        price = parse_price(token)
        if price is not None:
            return price
    return parse_price(match.group(2))


def find_quantity_lines(lines: List[str], start: int, end: int) -> List[QuantityLine]:
    """All quantity lines in [start, end) that carry a readable price."""
    quantity_lines = []
    for i in range(start, end):
        match = QUANTITY_PATTERN.search(lines[i])
        if not match:
            continue
        price = _quantity_line_price(lines[i], match)
        if price is None:
            continue
        quantity_lines.append(QuantityLine(
            index=i,
            price=price,
            name_prefix=lines[i][:match.start()].strip(),
        ))
    return quantity_lines


# ==================== Items ====================

def extract_line_items(lines: List[str]) -> List[LineItem]:
    """
    Extract line items in order of appearance.

    Args:
        lines: Non-empty, trimmed receipt lines

    Returns:
        List of LineItem; items whose name cleans to empty are dropped
    """
    start, end = find_item_section(lines)
    if start >= end:
        return []

    items = []
    quantity_lines = find_quantity_lines(lines, start, end)
    for position, qline in enumerate(quantity_lines):
        name = clean_item_name(qline.name_prefix)

        if not name:
            lower_bound = quantity_lines[position - 1].index + 1 if position > 0 else start
            scanner = ItemNameScanner(lines, lower_bound)
            name = clean_item_name(scanner.scan(qline.index))
            logger.debug(f"Item name scan for line {qline.index} stopped: {scanner.stop_reason}")

        if not name:
            # Name-less quantity line: whatever text is left besides the figures
            remainder = QUANTITY_PATTERN.sub("", lines[qline.index])
            name = clean_item_name(re.sub(r'\d+(?:[.,]\d+)*', '', remainder))

        if not name:
            logger.debug(f"Dropping unnamed item at line {qline.index}")
            continue

        items.append(LineItem(name=name, price=qline.price))

    logger.info(f"Extracted {len(items)} line items")
    return items
