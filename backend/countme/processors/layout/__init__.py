from .row_reconstructor import build_rows, compute_row_tolerance, reconstruct_lines, reconstruct_text

__all__ = ["build_rows", "compute_row_tolerance", "reconstruct_lines", "reconstruct_text"]
