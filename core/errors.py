"""Exceptions raised by the PDF text backend."""


class TabulationError(Exception):
    """Base class for errors raised while tabulating a document."""


class SourceUnavailableError(TabulationError):
    """
    The fragment source could not produce a page's text (missing file,
    corrupt document, undecodable page).  Aborts the whole conversion.
    """
