"""
Layout Data Structures.

Immutable records for OCR text fragments and the rows rebuilt from them.
Coordinates are normalized to the image (0-1), y measured downward from the top.
"""
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


@dataclass(frozen=True)
class BoundingBox:
    """Normalized rectangle of one OCR span."""
    x: float
    y: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2.0

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2.0

    @classmethod
    def from_dict(cls, box_dict: Dict[str, Any]) -> "BoundingBox":
        """Create BoundingBox from a dictionary with x/y/width/height keys."""
        return cls(
            x=float(box_dict.get("x") or 0.0),
            y=float(box_dict.get("y") or 0.0),
            width=float(box_dict.get("width") or 0.0),
            height=float(box_dict.get("height") or 0.0),
        )


@dataclass(frozen=True)
class TextFragment:
    """Represents a single recognized text span from OCR."""
    text: str
    bounding_box: BoundingBox
    confidence: Optional[float] = None

    @property
    def center_y(self) -> float:
        return self.bounding_box.center_y

    @property
    def x(self) -> float:
        return self.bounding_box.x

    @property
    def height(self) -> float:
        return self.bounding_box.height

    @classmethod
    def from_dict(cls, fragment_dict: Dict[str, Any]) -> "TextFragment":
        """
        Create TextFragment from an OCR record dictionary.

        Accepts either a nested "bounding_box" (or "boundingBox") mapping or
        flat x/y/width/height keys.
        """
        box = fragment_dict.get("bounding_box") or fragment_dict.get("boundingBox")
        if box is None:
            box = fragment_dict
        return cls(
            text=(fragment_dict.get("text") or "").strip(),
            bounding_box=BoundingBox.from_dict(box),
            confidence=fragment_dict.get("confidence"),
        )


@dataclass(frozen=True)
class TextRow:
    """Represents one reconstructed visual line, fragments ordered left to right."""
    row_id: int
    fragments: List[TextFragment] = field(default_factory=list)
    y_center: float = 0.0

    @property
    def text(self) -> str:
        return " ".join(f.text for f in self.fragments if f.text)
