"""
PDF adapter for the tabulation pipeline.

Wraps fitz (PyMuPDF) so the pipeline sees a document as a page count
plus a per-page fragment feed.  Every open/decode failure surfaces as
:class:`SourceUnavailableError`.
"""

from typing import Dict, List, Protocol

import fitz
from PIL import Image

from core.errors import SourceUnavailableError
from core.page.models import TextFragment
from core.page.text_layer import PageTextLayer


class FragmentSource(Protocol):
    """Anything that can feed positioned fragments page by page."""

    page_count: int

    def fragments(self, page_index: int) -> List[TextFragment]: ...

    def page_height(self, page_index: int) -> float: ...


def open_pdf(pdf_path: str) -> fitz.Document:
    """
    Open a PDF document.

    Raises:
        SourceUnavailableError: If fitz cannot open the file.
    """
    try:
        doc = fitz.open(pdf_path)
    except Exception as e:
        raise SourceUnavailableError(f"Failed to open PDF '{pdf_path}': {e}") from e
    return doc


class PDFAdapter:
    """
    Stateful adapter that keeps the document open across page
    operations.  Satisfies :class:`FragmentSource`.
    """

    def __init__(self, pdf_path: str):
        self.pdf_path = pdf_path
        self.doc = open_pdf(pdf_path)
        self.page_count = self.doc.page_count
        self._heights: Dict[int, float] = {}

    def _load(self, page_index: int) -> fitz.Page:
        if page_index < 0 or page_index >= self.page_count:
            raise IndexError(
                f"Page index {page_index} out of range "
                f"(document has {self.page_count} pages)"
            )
        try:
            return self.doc.load_page(page_index)
        except Exception as e:
            raise SourceUnavailableError(
                f"Failed to load page {page_index} of '{self.pdf_path}': {e}"
            ) from e

    # -- text extraction ----------------------------------------------------

    def fragments(self, page_index: int) -> List[TextFragment]:
        """Return usable fragments for *page_index*."""
        layer = PageTextLayer(self._load(page_index))
        self._heights[page_index] = layer.page_height
        return layer.fragments

    # -- rendering ----------------------------------------------------------

    def render(self, page_index: int, scale: float = 1.5) -> Image.Image:
        """Render *page_index* to a PIL RGB image."""
        page = self._load(page_index)
        mat = fitz.Matrix(scale, scale)
        pix = page.get_pixmap(matrix=mat, alpha=False)
        return Image.frombytes("RGB", [pix.width, pix.height], pix.samples)

    # -- geometry -----------------------------------------------------------

    def page_height(self, page_index: int) -> float:
        """Page height in PDF points; cached once the page has been read."""
        if page_index not in self._heights:
            self._heights[page_index] = self._load(page_index).rect.height
        return self._heights[page_index]

    # -- lifecycle ----------------------------------------------------------

    def close(self):
        if self.doc:
            self.doc.close()
            self.doc = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def __repr__(self):
        return f"PDFAdapter('{self.pdf_path}', pages={self.page_count})"
