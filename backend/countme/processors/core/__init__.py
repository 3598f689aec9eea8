"""
Processors Core: Shared layout data structures.

Used by the layout reconstructor and the OCR normalizer.
"""
from .structures import BoundingBox, TextFragment, TextRow

__all__ = ["BoundingBox", "TextFragment", "TextRow"]
