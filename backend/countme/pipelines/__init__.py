from .base import DocumentPipeline, PipelineStage
from .document_pipeline import ReceiptPipeline, ProofPipeline

__all__ = ["DocumentPipeline", "PipelineStage", "ReceiptPipeline", "ProofPipeline"]
