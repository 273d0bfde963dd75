"""Read source text for pagination."""

from __future__ import annotations

import logging
import os
from typing import Iterator, Union

from .errors import SourceUnavailable

logger = logging.getLogger(__name__)


def read_lines(path: Union[str, os.PathLike], encoding: str = "utf-8") -> Iterator[str]:
    """Lazily yield the lines of a text file without their line endings.

    The file stays open only while the generator is being consumed and is
    closed when it is exhausted, closed or garbage collected.
    Undecodable bytes are replaced rather than treated as errors.

    Raises:
        SourceUnavailable: If the file cannot be opened or a read fails.
    """
    try:
        f = open(path, 'r', encoding=encoding, errors='replace')
    except OSError as e:
        raise SourceUnavailable(f"Cannot open {path}: {e.strerror or e}") from e

    logger.debug(f"Reading source {path}")
    with f:
        try:
            for line in f:
                yield line.rstrip("\r\n")
        except OSError as e:
            raise SourceUnavailable(f"Cannot read {path}: {e.strerror or e}") from e
