"""
Receipt and proof pipelines.

Stages:
1. OCR (image -> OcrResult), skipped when the data already carries raw text
2. Layout reconstruction (OcrResult -> reading-order text)
3. Field extraction (text -> ParsedReceipt / ParsedProof)
"""
from typing import Any, Callable, Dict, List, Optional

from .base import DocumentPipeline, PipelineStage
from ..services.ocr.base import OcrEngine, OcrResult
from ..services.ocr.ocr_normalizer import ocr_result_to_text
from ..processors.extraction.receipt_extractor import extract_receipt
from ..processors.extraction.proof_extractor import extract_proof


class _ExtractionPipeline(DocumentPipeline):
    """Shared OCR and layout stages; subclasses pick the extractor."""

    extractor: Callable[[str], Any]

    def __init__(self, ocr_engine: Optional[OcrEngine] = None):
        super().__init__()
        self.ocr_engine = ocr_engine

    def run_ocr(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if "raw_text" in data or "ocr_result" in data:
            return data
        if self.ocr_engine is None:
            raise ValueError("No OCR engine configured for image input")
        data["ocr_result"] = self.ocr_engine.recognize(data["image"])
        return data

    def reconstruct_layout(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if "raw_text" not in data:
            data["raw_text"] = ocr_result_to_text(data.get("ocr_result") or OcrResult())
        return data

    def extract_fields(self, data: Dict[str, Any]) -> Dict[str, Any]:
        data["record"] = self.extractor(data.get("raw_text", ""))
        return data

    def build_stages(self) -> List[PipelineStage]:
        return [
            PipelineStage(
                name="ocr",
                processor=self.run_ocr,
                required=False,
                skip_on_error=True
            ),
            PipelineStage(
                name="layout_reconstruction",
                processor=self.reconstruct_layout,
                required=True
            ),
            PipelineStage(
                name="field_extraction",
                processor=self.extract_fields,
                required=True
            ),
        ]


class ReceiptPipeline(_ExtractionPipeline):
    """Image or text -> ParsedReceipt."""
    extractor = staticmethod(extract_receipt)


class ProofPipeline(_ExtractionPipeline):
    """Image or text -> ParsedProof."""
    extractor = staticmethod(extract_proof)
