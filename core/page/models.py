"""
Positioned text data models for PDF pages.

A page's text layer is reduced to flat, immutable fragments: one run of
text with its baseline origin and bounding metrics.  Coordinates use the
"larger y = higher on page" convention, so reading order is descending y.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class TextFragment:
    """One atomic positioned run of text extracted from a page."""

    text: str
    x: float  # baseline origin, left edge
    y: float  # baseline origin, larger = higher on page
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge of the fragment (``x + width``)."""
        return self.x + self.width

    def __repr__(self) -> str:
        return (
            f"TextFragment('{self.text[:30]}', "
            f"x={self.x:.1f}, y={self.y:.1f}, "
            f"w={self.width:.1f}, h={self.height:.1f})"
        )


def is_usable(fragment: TextFragment) -> bool:
    """True for fragments with visible text and a positive height."""
    return bool(fragment.text and fragment.text.strip()) and fragment.height > 0


def filter_fragments(fragments: Iterable[TextFragment]) -> List[TextFragment]:
    """Drop whitespace-only and zero-height fragments."""
    return [f for f in fragments if is_usable(f)]
