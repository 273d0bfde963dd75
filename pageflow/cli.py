"""Command-line front end: read a text file, paginate it, write the result."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, Tuple, Union

from .constants import PaginatorConstants
from .errors import LayoutError, PageflowError
from .model import PageLayout
from .paginator import Paginator
from .pdf_writer import PDFWriter
from .reader import read_lines
from .settings import SettingsStore, get_settings_store
from .version import get_version_string
from .writer import TextWriter, write_files_atomically

logger = logging.getLogger(__name__)


class _VersionAction(argparse.Action):
    """Print the version string, looked up only when asked for."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, help=None):
        super().__init__(option_strings=option_strings, dest=dest, default=default,
                         nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None):
        print(get_version_string())
        parser.exit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pageflow",
        description="Reflow plain text into fixed-size pages.",
    )
    parser.add_argument("input", nargs="?", default=PaginatorConstants.DEFAULT_INPUT_FILE,
                        help="text file to paginate (default: %(default)s)")
    parser.add_argument("-o", "--output", default=PaginatorConstants.DEFAULT_OUTPUT_FILE,
                        help="where to write the paginated text (default: %(default)s)")
    parser.add_argument("--width", type=int, metavar="N",
                        help="maximum characters per line")
    parser.add_argument("--lines", type=int, metavar="N",
                        help="maximum lines per page")
    parser.add_argument("--legacy-overflow", action="store_true", default=None,
                        help="let a line run past the width the way older output did")
    parser.add_argument("--pdf", metavar="PATH",
                        help="also write the pages as a PDF")
    parser.add_argument("--save-defaults", action="store_true",
                        help="remember the effective layout for future runs")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log progress to stderr")
    parser.add_argument("-V", "--version", action=_VersionAction,
                        help="show the version and exit")
    return parser


def resolve_layout(args: argparse.Namespace, store: SettingsStore) -> PageLayout:
    """Combine saved defaults with command-line overrides."""
    saved = store.load_layout()
    return PageLayout(
        max_chars_per_line=args.width if args.width is not None else saved.max_chars_per_line,
        max_lines_per_page=args.lines if args.lines is not None else saved.max_lines_per_page,
        legacy_overflow=(args.legacy_overflow if args.legacy_overflow is not None
                         else saved.legacy_overflow),
    )


def run(args: argparse.Namespace, store: SettingsStore) -> None:
    layout = resolve_layout(args, store)
    if args.save_defaults and not store.can_store_layout(layout):
        raise LayoutError(
            f"Cannot save defaults: limits must be between 1 and "
            f"{PaginatorConstants.MAX_LAYOUT_LIMIT}"
        )
    logger.info(f"Paginating {args.input} at {layout.max_chars_per_line}x{layout.max_lines_per_page}")

    # The whole document is built before anything is written
    document = Paginator(layout).paginate(read_lines(args.input))

    outputs: List[Tuple[str, Union[str, bytes]]] = [
        (args.output, TextWriter().render(document)),
    ]
    pdf_writer = None
    if args.pdf:
        pdf_writer = PDFWriter(layout=layout)
        outputs.append((args.pdf, pdf_writer.generate_pdf(document)))

    # Either every output is replaced or none is
    write_files_atomically(outputs)

    if pdf_writer is not None:
        warning = pdf_writer.get_unprintable_warning()
        if warning:
            print(warning, file=sys.stderr)

    if args.save_defaults and not store.save_layout(layout):
        print(f"Warning: could not save defaults to {store.settings_file}", file=sys.stderr)


def main(argv: Optional[List[str]] = None, store: Optional[SettingsStore] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args, store or get_settings_store())
    except PageflowError as e:
        print(PaginatorConstants.ERROR_MESSAGE.format(e), file=sys.stderr)
        return 1

    print(PaginatorConstants.SAVED_MESSAGE.format(args.output))
    return 0
