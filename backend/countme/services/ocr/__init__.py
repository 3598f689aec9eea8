from .base import OcrEngine, OcrRecord, OcrResult
from .ocr_normalizer import ocr_result_to_fragments, ocr_result_to_text

__all__ = ["OcrEngine", "OcrRecord", "OcrResult", "ocr_result_to_fragments", "ocr_result_to_text"]
