"""
OCR collaborator contract.

An OCR engine turns an image into zero or more records (text, confidence,
normalized bounding box) in arbitrary order, or into plain text when the
engine provides no geometry.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ...processors.core.structures import BoundingBox


@dataclass(frozen=True)
class OcrRecord:
    """One recognized span as reported by the OCR engine."""
    text: str
    confidence: Optional[float] = None
    bounding_box: Optional[BoundingBox] = None

    @classmethod
    def from_dict(cls, record_dict: Dict[str, Any]) -> "OcrRecord":
        box = record_dict.get("bounding_box") or record_dict.get("boundingBox")
        return cls(
            text=(record_dict.get("text") or "").strip(),
            confidence=record_dict.get("confidence"),
            bounding_box=BoundingBox.from_dict(box) if box else None,
        )


@dataclass(frozen=True)
class OcrResult:
    """OCR output for one image: records with geometry and/or plain text."""
    records: List[OcrRecord] = field(default_factory=list)
    text: str = ""


class OcrEngine(ABC):
    """Base class for OCR engines used by the document pipelines."""

    @abstractmethod
    def recognize(self, image: bytes) -> OcrResult:
        """
        Recognize text in one image.

        Args:
            image: Encoded image bytes (JPEG/PNG)

        Returns:
            OcrResult for the image
        """
        pass
