"""
Row Reconstruction: Rebuild reading order from unordered OCR text fragments.

Fragments are clustered into rows top to bottom, then ordered left to right
within each row.
"""
from typing import Iterable, List, Optional
import logging

from ..core.structures import TextFragment, TextRow
from ...config import settings

logger = logging.getLogger(__name__)


def compute_row_tolerance(
    fragments: List[TextFragment],
    ratio: Optional[float] = None,
    min_tolerance: Optional[float] = None,
) -> float:
    """
    Vertical tolerance for grouping fragments into one row.

    Half the mean fragment height by default; never below min_tolerance so
    zero-height fragments still cluster on identical centers.
    """
    if ratio is None:
        ratio = settings.row_tolerance_ratio
    if min_tolerance is None:
        min_tolerance = settings.min_row_tolerance
    if not fragments:
        return min_tolerance

    avg_height = sum(f.height for f in fragments) / len(fragments)
    return max(avg_height * ratio, min_tolerance)


def build_rows(
    fragments: Iterable[TextFragment],
    tolerance: Optional[float] = None,
) -> List[TextRow]:
    """
    Group fragments into rows by vertical center.

    A fragment joins the current row when its center is within tolerance of the
    previous fragment's center (sorted by center_y); otherwise it opens a new row.

    Args:
        fragments: TextFragment objects in any order
        tolerance: Y tolerance; if None, derived from the mean fragment height

    Returns:
        List of TextRow objects, top to bottom
    """
    fragments = list(fragments)
    if not fragments:
        return []

    if tolerance is None:
        tolerance = compute_row_tolerance(fragments)

    fragments_sorted = sorted(fragments, key=lambda f: f.center_y)

    groups: List[List[TextFragment]] = []
    current: List[TextFragment] = [fragments_sorted[0]]
    previous_y = fragments_sorted[0].center_y

    for fragment in fragments_sorted[1:]:
        if abs(fragment.center_y - previous_y) <= tolerance:
            current.append(fragment)
        else:
            groups.append(current)
            current = [fragment]
        previous_y = fragment.center_y
    groups.append(current)

    rows = [_make_row(group, row_id) for row_id, group in enumerate(groups)]
    logger.debug(f"Built {len(rows)} rows from {len(fragments)} fragments (tolerance={tolerance:.5f})")
    return rows


def _make_row(fragments_in_row: List[TextFragment], row_id: int) -> TextRow:
    """Create a TextRow with fragments sorted by x (left to right)."""
    ordered = sorted(fragments_in_row, key=lambda f: f.x)
    y_center = sum(f.center_y for f in ordered) / len(ordered)
    return TextRow(row_id=row_id, fragments=ordered, y_center=y_center)


def reconstruct_lines(
    fragments: Iterable[TextFragment],
    tolerance: Optional[float] = None,
) -> List[str]:
    """Reading-order lines, one string per row."""
    return [row.text for row in build_rows(fragments, tolerance=tolerance)]


def reconstruct_text(
    fragments: Iterable[TextFragment],
    tolerance: Optional[float] = None,
) -> str:
    """
    Linearize fragments into reading-order text.

    Fragment texts are joined with a single space within a row and rows are
    joined with newlines. An empty input yields an empty string.
    """
    return "\n".join(reconstruct_lines(fragments, tolerance=tolerance))
