"""Document model for paginated text.

A ``Document`` is an ordered run of ``Page`` values; each page holds the
wrapped lines that landed on it. Both are frozen once built; the paginator
accumulates into plain lists and seals them into these types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .constants import PaginatorConstants
from .errors import LayoutError


@dataclass(frozen=True)
class PageLayout:
    """Limits that control how text is wrapped and paged.
    
    Attributes:
        max_chars_per_line: Maximum characters per line, inter-word spaces included
        max_lines_per_page: Maximum lines per page
        legacy_overflow: Reproduce the historical overflow tolerance, where a
            word is appended to a line that is still shorter than the limit
            minus one even if the result runs past the limit
    """
    max_chars_per_line: int = PaginatorConstants.MAX_CHARS_PER_LINE
    max_lines_per_page: int = PaginatorConstants.MAX_LINES_PER_PAGE
    legacy_overflow: bool = False
    
    def __post_init__(self):
        for name in ("max_chars_per_line", "max_lines_per_page"):
            value = getattr(self, name)
            # bool is an int subclass but never a sensible limit
            if isinstance(value, bool) or not isinstance(value, int):
                raise LayoutError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise LayoutError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class Page:
    """A numbered page of wrapped lines (numbers start at 1)."""
    number: int
    lines: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)


@dataclass(frozen=True)
class Document:
    """The paginated output: pages in ascending page-number order."""
    pages: Tuple[Page, ...] = ()

    def __iter__(self) -> Iterator[Page]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def line_count(self) -> int:
        return sum(len(page) for page in self.pages)

    def lines(self) -> List[str]:
        """Return every line of every page, in order."""
        return [line for page in self.pages for line in page.lines]
