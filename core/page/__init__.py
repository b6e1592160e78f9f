"""
Page text extraction for PDF documents.
Positioned fragments only — no rendering, no block structure.
"""

from .models import TextFragment, filter_fragments, is_usable
from .text_layer import PageTextLayer

__all__ = [
    "PageTextLayer",
    "TextFragment",
    "filter_fragments",
    "is_usable",
]
