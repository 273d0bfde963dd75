"""Serialize a paginated document to text.

Each page is written as a header line, the page's lines verbatim, and a
blank separator line::

    --- Page 1 --- 
    first line
    second line

Saving is atomic: every output is first written to a temporary file in its
target directory, and only then are the targets replaced. A failed save
never leaves a partial file or a partial set of files.
"""

from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Optional, Sequence, Tuple, Union

from .constants import PaginatorConstants
from .errors import DestinationUnwritable
from .model import Document

logger = logging.getLogger(__name__)


def render_document(document: Document) -> str:
    """Render every page of ``document`` in page order."""
    parts: List[str] = []
    for page in document:
        parts.append(PaginatorConstants.PAGE_HEADER_FORMAT % page.number)
        for line in page.lines:
            parts.append(line + "\n")
        parts.append("\n")
    return "".join(parts)


PathLike = Union[str, os.PathLike]


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


def _remove_quietly(filename: str) -> None:
    try:
        if os.path.exists(filename):
            os.remove(filename)
    except OSError:
        logger.warning(f"Could not remove temporary file {filename}")


def _stage(filename: str, data: Union[str, bytes]) -> str:
    """Write ``data`` to a temporary file beside ``filename``; return its name."""
    # Temp file in the same directory keeps the rename on one filesystem
    options = dict(
        dir=os.path.dirname(filename) or '.',
        prefix=PaginatorConstants.ATOMIC_SAVE_PREFIX,
        suffix=PaginatorConstants.ATOMIC_SAVE_SUFFIX,
        delete=False,
    )
    if isinstance(data, bytes):
        temp_file = tempfile.NamedTemporaryFile(mode='wb', **options)
    else:
        temp_file = tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', newline='', **options)
    try:
        with temp_file:
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())  # Ensure data is on disk before the rename
        # Temporary files are created 0600; give the output normal permissions
        os.chmod(temp_file.name, 0o666 & ~_current_umask())
    except OSError:
        _remove_quietly(temp_file.name)
        raise
    return temp_file.name


def _read_previous(filename: str) -> Optional[bytes]:
    if not os.path.isfile(filename):
        return None
    with open(filename, 'rb') as f:
        return f.read()


def _restore(replaced: List[Tuple[str, Optional[bytes]]]) -> None:
    """Put back what was at each already replaced target."""
    for filename, previous in reversed(replaced):
        try:
            if previous is None:
                os.remove(filename)
            else:
                os.replace(_stage(filename, previous), filename)
        except OSError as e:
            logger.error(f"Could not restore {filename}: {e}")


def write_files_atomically(outputs: Sequence[Tuple[PathLike, Union[str, bytes]]]) -> None:
    """Write several files so that either all of them are replaced or none is.

    Every file is staged to a temporary file first. Targets are replaced only
    once all of them are staged, and if a later replace fails the earlier
    targets get their previous contents back.

    Raises:
        DestinationUnwritable: If any file cannot be created or written.
    """
    staged: List[Tuple[str, str]] = []
    filename = ""
    try:
        for path, data in outputs:
            filename = os.fspath(path)
            staged.append((filename, _stage(filename, data)))
    except OSError as e:
        for _, temp_filename in staged:
            _remove_quietly(temp_filename)
        raise DestinationUnwritable(f"Cannot write {filename}: {e.strerror or e}") from e

    replaced: List[Tuple[str, Optional[bytes]]] = []
    for index, (filename, temp_filename) in enumerate(staged):
        try:
            previous = _read_previous(filename)
            os.replace(temp_filename, filename)
        except OSError as e:
            for _, pending in staged[index:]:
                _remove_quietly(pending)
            _restore(replaced)
            raise DestinationUnwritable(f"Cannot write {filename}: {e.strerror or e}") from e
        replaced.append((filename, previous))
        logger.debug(f"Wrote {filename}")


def write_atomically(path: PathLike, data: Union[str, bytes]) -> None:
    """Write ``data`` to ``path`` through a temporary file and ``os.replace``.

    Raises:
        DestinationUnwritable: If the file cannot be created or written. The
            previous contents of ``path``, if any, are left untouched.
    """
    write_files_atomically([(path, data)])


class TextWriter:
    """Writes documents in the page-separated text format."""

    def render(self, document: Document) -> str:
        return render_document(document)

    def save(self, document: Document, path: PathLike) -> None:
        """Save ``document`` to ``path``, replacing any existing file.

        An empty document produces an empty file.
        """
        write_atomically(path, self.render(document))
