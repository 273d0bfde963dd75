"""Pageflow - Reflow plain text into fixed-width, fixed-height pages."""

from .errors import DestinationUnwritable, LayoutError, PageflowError, SourceUnavailable
from .model import Document, Page, PageLayout
from .paginator import Paginator, iter_words, paginate
from .reader import read_lines
from .writer import TextWriter, render_document

__all__ = [
    'Document',
    'Page',
    'PageLayout',
    'Paginator',
    'paginate',
    'iter_words',
    'read_lines',
    'TextWriter',
    'render_document',
    'PageflowError',
    'SourceUnavailable',
    'DestinationUnwritable',
    'LayoutError',
]
