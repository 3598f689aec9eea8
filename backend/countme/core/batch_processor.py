"""
Batch Processor: Sequential OCR and extraction over a batch of images.

Images are processed one at a time (one OCR call in flight) so peak memory
stays bounded and progress is reported strictly in order. The progress
callback fires with the index of the image about to be processed, before its
OCR starts. A batch has no side effects; callers that abandon it simply drop
the results.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Union

from ..models import ParsedProof, ParsedReceipt
from ..pipelines.base import DocumentPipeline
from ..pipelines.document_pipeline import ProofPipeline, ReceiptPipeline
from ..services.ocr.base import OcrEngine

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class DocumentKind(str, Enum):
    RECEIPT = "receipt"
    PROOF = "proof"


@dataclass
class BatchItemResult:
    """Result for one image of a batch."""
    index: int
    raw_text: str
    record: Union[ParsedReceipt, ParsedProof]
    errors: List[str] = field(default_factory=list)


def _pipeline_for(kind: DocumentKind, ocr_engine: OcrEngine) -> DocumentPipeline:
    if kind == DocumentKind.PROOF:
        return ProofPipeline(ocr_engine)
    return ReceiptPipeline(ocr_engine)


def process_batch(
    images: Sequence[bytes],
    ocr_engine: OcrEngine,
    kind: DocumentKind = DocumentKind.RECEIPT,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[BatchItemResult]:
    """
    Run OCR, layout reconstruction and extraction for each image in order.

    Args:
        images: Encoded image bytes
        ocr_engine: OCR collaborator
        kind: Receipt (new order) or proof (verifying an existing order)
        progress_callback: Called as (index, total) before each image

    Returns:
        One BatchItemResult per image, in input order
    """
    pipeline = _pipeline_for(DocumentKind(kind), ocr_engine)
    total = len(images)
    results: List[BatchItemResult] = []

    logger.info(f"Processing batch of {total} {DocumentKind(kind).value} image(s)")

    for index, image in enumerate(images):
        if progress_callback is not None:
            progress_callback(index, total)

        data = pipeline.execute({"image": image})
        errors = data.get("errors", [])
        if errors:
            logger.warning(f"Image {index + 1}/{total} processed with errors: {errors}")

        results.append(BatchItemResult(
            index=index,
            raw_text=data.get("raw_text", ""),
            record=data["record"],
            errors=errors,
        ))
        logger.info(f"Processed image {index + 1}/{total}")

    return results
