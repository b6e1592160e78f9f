"""
Span-level text extraction for PDF pages.

Produces the flat fragment feed consumed by the tabulation pipeline.
"""

from typing import List

import fitz

from core.errors import SourceUnavailableError

from .models import TextFragment, filter_fragments

# PyMuPDF "dict" defaults without image payloads; keeps mediabox clipping
_TEXT_FLAGS = fitz.TEXTFLAGS_DICT & ~fitz.TEXT_PRESERVE_IMAGES


class PageTextLayer:
    """
    Extracts positioned text fragments from a PDF page.

    Each PyMuPDF span becomes one :class:`TextFragment`.  PyMuPDF reports
    coordinates with a top-left origin; fragments are flipped so that a
    larger ``y`` means higher on the page.
    """

    def __init__(self, page: fitz.Page):
        self.page = page
        self.page_height: float = page.rect.height
        self.fragments: List[TextFragment] = []

        self._extract_fragments()

    def _extract_fragments(self):
        """Walk blocks → lines → spans and collect usable fragments."""
        try:
            text_dict = self.page.get_text("dict", flags=_TEXT_FLAGS)
        except Exception as e:
            raise SourceUnavailableError(
                f"Failed to extract text from page {self.page.number}: {e}"
            ) from e

        raw: List[TextFragment] = []

        for block_data in text_dict.get("blocks", []):
            # Skip image blocks
            if block_data.get("type") != 0:
                continue

            for line_data in block_data.get("lines", []):
                # Vertical writing modes are not tabulated
                if line_data.get("wmode", 0) != 0:
                    continue

                for span_data in line_data.get("spans", []):
                    fragment = self._span_to_fragment(span_data)
                    if fragment is not None:
                        raw.append(fragment)

        self.fragments = filter_fragments(raw)

    def _span_to_fragment(self, span_data: dict):
        text = span_data.get("text", "")
        if not text.strip():
            return None

        x0, y0, x1, y1 = span_data.get("bbox", (0, 0, 0, 0))
        origin_x, origin_y = span_data.get("origin", (x0, y1))

        return TextFragment(
            text=text.strip(),
            x=float(origin_x),
            y=float(self.page_height - origin_y),
            width=float(x1 - x0),
            height=float(y1 - y0),
        )
