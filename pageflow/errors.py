"""Typed exceptions for reading, laying out and writing documents."""


class PageflowError(Exception):
    """Base class for pageflow errors."""


class SourceUnavailable(PageflowError, OSError):
    """Raised when the input text cannot be opened or read."""


class DestinationUnwritable(PageflowError, OSError):
    """Raised when the paginated output cannot be created or written."""


class LayoutError(PageflowError, ValueError):
    """Raised when a page layout has invalid limits."""
