"""
Google Cloud Vision OCR engine.

Word annotations (pixel vertices) are converted to OcrRecords with normalized,
top-down bounding boxes; the full-text annotation is kept as plain-text fallback.
"""
from typing import Any, List, Optional, Tuple
import logging

from google.cloud import vision
from google.oauth2 import service_account

from .base import OcrEngine, OcrRecord, OcrResult
from ...config import settings
from ...processors.core.structures import BoundingBox

logger = logging.getLogger(__name__)

# Initialize the Vision client lazily
_client = None


def _get_client():
    """Get or create the Vision API client."""
    global _client
    if _client is None:
        if not settings.gcp_credentials_path:
            raise ValueError(
                "GOOGLE_APPLICATION_CREDENTIALS environment variable must be set"
            )

        credentials = service_account.Credentials.from_service_account_file(
            settings.gcp_credentials_path
        )
        _client = vision.ImageAnnotatorClient(credentials=credentials)
        logger.info("Google Cloud Vision client initialized")

    return _client


def _normalized_box(vertices: Any, page_width: float, page_height: float) -> Optional[BoundingBox]:
    """Axis-aligned normalized box around pixel vertices; None for degenerate pages."""
    if page_width <= 0 or page_height <= 0:
        return None
    xs = [v.x or 0 for v in vertices]
    ys = [v.y or 0 for v in vertices]
    if not xs or not ys:
        return None
    return BoundingBox(
        x=min(xs) / page_width,
        y=min(ys) / page_height,
        width=(max(xs) - min(xs)) / page_width,
        height=(max(ys) - min(ys)) / page_height,
    )


def _page_size(page: Any) -> Tuple[float, float]:
    return float(page.width or 0), float(page.height or 0)


def records_from_annotation(full_text_annotation: Any) -> List[OcrRecord]:
    """
    Word-level OcrRecords from a Vision full_text_annotation.

    Args:
        full_text_annotation: response.full_text_annotation (pages/blocks/paragraphs/words)

    Returns:
        One record per word, in Vision's order (layout reconstruction re-orders them)
    """
    records = []
    for page in full_text_annotation.pages:
        page_width, page_height = _page_size(page)
        for block in page.blocks:
            for paragraph in block.paragraphs:
                for word in paragraph.words:
                    text = "".join(symbol.text for symbol in word.symbols).strip()
                    if not text:
                        continue
                    box = _normalized_box(word.bounding_box.vertices, page_width, page_height)
                    if box is None:
                        continue
                    records.append(OcrRecord(
                        text=text,
                        confidence=word.confidence,
                        bounding_box=box,
                    ))
    return records


class VisionOcrEngine(OcrEngine):
    """OCR engine backed by Google Cloud Vision document text detection."""

    def recognize(self, image: bytes) -> OcrResult:
        """
        Perform OCR document text detection on image bytes.

        Raises:
            ValueError: If credentials are not configured
            RuntimeError: If the Vision API returns an error
        """
        client = _get_client()
        response = client.document_text_detection(image=vision.Image(content=image))

        if response.error.message:
            raise RuntimeError(f"Vision API error: {response.error.message}")

        annotation = response.full_text_annotation
        if not annotation:
            return OcrResult()

        records = records_from_annotation(annotation)
        logger.info(f"Vision OCR returned {len(records)} words")
        return OcrResult(records=records, text=annotation.text or "")
