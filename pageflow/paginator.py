"""Greedy word-wrap and page-breaking.

Words are taken from the input in order, ignoring where the original line
breaks fell, and packed into lines of at most ``max_chars_per_line``
characters. Lines are packed into pages of ``max_lines_per_page`` lines.
A word that is longer than a whole line is kept intact on a line of its own.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List, Optional

from .model import Document, Page, PageLayout

logger = logging.getLogger(__name__)


def iter_words(lines: Iterable[str]) -> Iterator[str]:
    """Yield the whitespace-separated words of each line, in order."""
    for line in lines:
        yield from line.split()


class _DocumentBuilder:
    """Mutable pagination state for a single run.

    Holds the sealed pages, the lines of the page being filled, and the
    line buffer. Only ``Paginator.paginate`` creates one, so the state
    never outlives a call.
    """

    def __init__(self, layout: PageLayout):
        self.layout = layout
        self.pages: List[Page] = []
        self.page_lines: List[str] = []
        self.page_number = 1
        self.buffer = ""
        self.word_count = 0

    def place_word(self, word: str) -> None:
        limit = self.layout.max_chars_per_line
        self.word_count += 1

        if self.buffer:
            prospective = len(self.buffer) + 1 + len(word)
        else:
            prospective = len(word)

        if prospective > limit:
            if self.buffer and self.layout.legacy_overflow and len(self.buffer) + 1 < limit:
                # Historical behaviour: the line runs past the limit
                self.buffer += " " + word
            elif self.buffer:
                self.seal_line()
                self.buffer = word
            else:
                # Oversized word on an empty line, never split
                self.buffer = word
        elif self.buffer:
            self.buffer += " " + word
        else:
            self.buffer = word

        if len(self.buffer) == limit:
            self.seal_line()

    def seal_line(self) -> None:
        """Move the buffer onto the current page, closing the page when full."""
        self.page_lines.append(self.buffer)
        self.buffer = ""
        if len(self.page_lines) == self.layout.max_lines_per_page:
            self.seal_page()

    def seal_page(self) -> None:
        self.pages.append(Page(number=self.page_number, lines=tuple(self.page_lines)))
        self.page_number = len(self.pages) + 1
        self.page_lines = []

    def finish(self) -> Document:
        if self.buffer:
            self.seal_line()
        # An empty in-progress page is dropped
        if self.page_lines:
            self.seal_page()
        return Document(pages=tuple(self.pages))


class Paginator:
    """Reflows raw text lines into a ``Document`` of fixed-size pages."""

    def __init__(self, layout: Optional[PageLayout] = None):
        self.layout = layout or PageLayout()

    def paginate(self, lines: Iterable[str]) -> Document:
        """Paginate ``lines`` and return the finished document.

        Args:
            lines: Raw input lines, consumed lazily and exactly once.

        Returns:
            A new Document. Calling this again with the same input and layout
            gives an equal Document.
        """
        builder = _DocumentBuilder(self.layout)
        for word in iter_words(lines):
            builder.place_word(word)
        document = builder.finish()
        logger.debug(
            f"Paginated {builder.word_count} words into {document.line_count} lines "
            f"on {document.page_count} pages"
        )
        return document


def paginate(lines: Iterable[str], layout: Optional[PageLayout] = None) -> Document:
    """Paginate ``lines`` with ``layout`` (the default layout when omitted)."""
    return Paginator(layout).paginate(lines)
