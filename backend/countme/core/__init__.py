from .batch_processor import process_batch, BatchItemResult, DocumentKind

__all__ = ["process_batch", "BatchItemResult", "DocumentKind"]
