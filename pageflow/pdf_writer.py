"""Render a paginated document as PDF.

One PDF page (US Letter) is produced per document page: the page header,
then the page's lines, in a built-in monospace font. The point size is the
largest that fits the layout's line width and page length on the sheet.
"""

import io
import os
from typing import Dict, Optional, Union

from reportlab.lib.pagesizes import letter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .constants import PaginatorConstants
from .errors import LayoutError, PageflowError
from .model import Document, PageLayout
from .writer import write_atomically


class FontLoadError(PageflowError):
    """Exception raised when a font cannot be used."""


# Built-in PDF fonts, referenced rather than embedded
MONOSPACE_FONTS: Dict[str, str] = {
    "Courier": "Courier",
    "Courier Bold": "Courier-Bold",
    "Courier Oblique": "Courier-Oblique",
}

CANDIDATE_POINT_SIZES = (12, 11, 10, 9, 8, 7)
LINE_SPACING = 1.2  # Line height as a multiple of the point size
MARGIN_POINTS = 36  # 1/2" on every side
WIDEST_PAGE_NUMBER = 9999  # Header width is sized for up to four digits


class PDFWriter:
    """Generate PDF files from paginated documents."""

    def __init__(self, font_name: str = "Courier", layout: Optional[PageLayout] = None):
        """Initialize PDF writer.

        Args:
            font_name: One of the names in ``MONOSPACE_FONTS``.
            layout: Layout the document was paginated with; sizes the font.

        Raises:
            FontLoadError: If the font is unknown.
            LayoutError: If a full page of the layout cannot fit on the sheet.
        """
        if font_name not in MONOSPACE_FONTS:
            raise FontLoadError(f"Unknown font: {font_name}")
        self.font_name = MONOSPACE_FONTS[font_name]
        self.layout = layout or PageLayout()
        self.page_width, self.page_height = letter
        self.font_size = self._fit_font_size()
        self.line_height = self.font_size * LINE_SPACING

        # Track unprintable characters for warning
        self.unprintable_chars = set()
        self.has_unprintable = False

    def _fit_font_size(self) -> float:
        """Pick the largest candidate size that fits a full page on the sheet.

        Raises:
            LayoutError: If no candidate size fits.
        """
        header = PaginatorConstants.PAGE_HEADER_FORMAT % WIDEST_PAGE_NUMBER
        columns = max(self.layout.max_chars_per_line, len(header.rstrip("\n")))
        rows = self.layout.max_lines_per_page + 1  # Header line
        usable_width = self.page_width - 2 * MARGIN_POINTS
        usable_height = self.page_height - 2 * MARGIN_POINTS
        for size in CANDIDATE_POINT_SIZES:
            width = pdfmetrics.stringWidth("X" * columns, self.font_name, size)
            if width <= usable_width and rows * size * LINE_SPACING <= usable_height:
                return size
        raise LayoutError(
            f"A {self.layout.max_chars_per_line}x{self.layout.max_lines_per_page} layout "
            f"does not fit on a PDF page even at {CANDIDATE_POINT_SIZES[-1]}pt"
        )

    def generate_pdf(self, document: Document) -> bytes:
        """Generate PDF from a paginated document.

        Returns:
            Complete PDF document as bytes.
        """
        # Reset unprintable tracking for this generation
        self.unprintable_chars = set()
        self.has_unprintable = False
        pdf_buffer = io.BytesIO()

        c = canvas.Canvas(pdf_buffer, pagesize=letter)
        c.setTitle("Paginated document")

        for page in document:
            c.setFont(self.font_name, self.font_size)
            y_position = self.page_height - MARGIN_POINTS - self.font_size
            header = (PaginatorConstants.PAGE_HEADER_FORMAT % page.number).rstrip("\n")
            for line in (header, *page.lines):
                c.drawString(MARGIN_POINTS, y_position, self._make_pdf_safe(line))
                y_position -= self.line_height
            c.showPage()

        c.save()
        return pdf_buffer.getvalue()

    def save(self, document: Document, path: Union[str, os.PathLike]) -> None:
        """Write the PDF for ``document`` to ``path`` atomically."""
        write_atomically(path, self.generate_pdf(document))

    def _make_pdf_safe(self, text: str) -> str:
        """Replace characters the built-in fonts cannot show with '?'.

        The built-in Courier fonts cover Windows-1252.
        """
        result = []
        for char in text:
            try:
                char.encode('cp1252')
                result.append(char)
            except UnicodeEncodeError:
                self.unprintable_chars.add(char)
                self.has_unprintable = True
                result.append('?')
        return ''.join(result)

    def get_unprintable_warning(self) -> Optional[str]:
        """Get warning message about unprintable characters.

        Returns:
            Warning message if unprintable chars were found, None otherwise.
        """
        if not self.has_unprintable:
            return None

        char_list = sorted(self.unprintable_chars)

        # Show the code point for control characters
        formatted_chars = []
        for char in char_list[:10]:
            if ord(char) < 32 or ord(char) == 127:
                formatted_chars.append(f"U+{ord(char):04X}")
            else:
                formatted_chars.append(f"'{char}' (U+{ord(char):04X})")

        if len(char_list) > 10:
            formatted_chars.append(f"... and {len(char_list) - 10} more")

        return (f"Warning: {len(self.unprintable_chars)} unique unprintable character(s) "
                f"replaced with '?': {', '.join(formatted_chars)}")
