"""
CountMe backend: receipt and payment-proof field extraction and order verification.
"""
__version__ = "0.1.0"
