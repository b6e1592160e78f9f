"""
Core backend for PDF tabulation.
Text-layer extraction and fragment models only — no layout heuristics.
"""

from .errors import SourceUnavailableError, TabulationError
from .page import PageTextLayer, TextFragment, filter_fragments

__all__ = [
    "PageTextLayer",
    "TextFragment",
    "filter_fragments",
    "TabulationError",
    "SourceUnavailableError",
]
