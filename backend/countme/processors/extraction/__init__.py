"""
Extraction: Rule-table driven field extraction for receipts and payment proofs.
"""
from .receipt_extractor import extract_receipt
from .proof_extractor import extract_proof

__all__ = ["extract_receipt", "extract_proof"]
