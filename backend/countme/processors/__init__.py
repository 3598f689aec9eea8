"""
Processors: layout reconstruction, text primitives, field extraction,
enrichment and verification. All functions are pure with respect to their input.
"""
