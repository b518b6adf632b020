"""Output generation for availability boards (text, PDF)."""

from crewboard.output.debug_generator import DebugGenerator
from crewboard.output.pdf_generator import PDFGenerator

__all__ = [
    "DebugGenerator",
    "PDFGenerator",
]
