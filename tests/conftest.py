"""Shared fixtures: in-memory fragment sources and fragment builders."""

from typing import Dict, List, Optional

import pytest

from core.errors import SourceUnavailableError
from core.page.models import TextFragment


def frag(text, x, y, width=None, height=10.0):
    """Fragment with a width derived from text length when not given."""
    if width is None:
        width = 6.0 * len(text)
    return TextFragment(text=text, x=float(x), y=float(y), width=float(width), height=float(height))


class InMemorySource:
    """Fragment source backed by a list of pages."""

    def __init__(self, pages: List[List[TextFragment]], fail_on: Optional[int] = None):
        self.pages = pages
        self.page_count = len(pages)
        self.fail_on = fail_on
        self.requested: List[int] = []

    def fragments(self, page_index: int) -> List[TextFragment]:
        self.requested.append(page_index)
        if page_index == self.fail_on:
            raise SourceUnavailableError(f"page {page_index} is corrupt")
        return list(self.pages[page_index])

    def page_height(self, page_index: int) -> float:
        return 842.0


@pytest.fixture
def make_source():
    return InMemorySource


@pytest.fixture
def station_page() -> List[TextFragment]:
    """A small titled table, fragments deliberately out of order."""
    return [
        frag("12", 320, 665),
        frag("Name", 50, 680),
        frag("Station Summary", 50, 700),
        frag("Beta", 50, 650),
        frag("Count", 300, 680),
        frag("Alpha", 50, 665),
        frag("7", 325, 650),
    ]
