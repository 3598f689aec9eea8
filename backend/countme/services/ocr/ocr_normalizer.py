"""
OCR Normalizer: Turn an OCR result into reading-order text.

Records with bounding boxes go through the layout reconstructor; engines that
only return plain text skip that step and their text is used as is.
"""
from typing import List, Optional
import logging

from .base import OcrResult
from ...config import settings
from ...processors.core.structures import TextFragment
from ...processors.layout.row_reconstructor import reconstruct_text

logger = logging.getLogger(__name__)


def ocr_result_to_fragments(
    result: OcrResult,
    min_confidence: Optional[float] = None,
) -> List[TextFragment]:
    """
    Layout fragments from OCR records.

    Records without geometry or text, or below min_confidence, are dropped.
    Records without a confidence are kept.
    """
    if min_confidence is None:
        min_confidence = settings.ocr_min_confidence

    fragments = []
    dropped = 0
    for record in result.records:
        if not record.text or record.bounding_box is None:
            continue
        if record.confidence is not None and record.confidence < min_confidence:
            dropped += 1
            continue
        fragments.append(TextFragment(
            text=record.text,
            bounding_box=record.bounding_box,
            confidence=record.confidence,
        ))

    if dropped:
        logger.debug(f"Dropped {dropped} OCR records below confidence {min_confidence}")
    return fragments


def ocr_result_to_text(
    result: OcrResult,
    min_confidence: Optional[float] = None,
) -> str:
    """
    Reading-order text for one OCR result.

    Args:
        result: OCR engine output
        min_confidence: Confidence floor for records; defaults to settings.ocr_min_confidence

    Returns:
        Reconstructed text, or the engine's plain text when it returned no positioned records
    """
    if any(r.bounding_box is not None and r.text for r in result.records):
        fragments = ocr_result_to_fragments(result, min_confidence=min_confidence)
        return reconstruct_text(fragments)

    logger.debug("No positioned OCR records; using plain OCR text")
    return result.text or ""
