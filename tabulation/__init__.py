"""
PDF tabulation pipeline.

Row grouping, cell splitting, document-wide column alignment and grid
assembly for turning a PDF's positioned text into spreadsheet rows.
"""

from .pipeline import (
    TabulationConfig,
    TabulationPipeline,
    TabulationResult,
    tabulate,
)

__all__ = [
    "TabulationConfig",
    "TabulationPipeline",
    "TabulationResult",
    "tabulate",
]
