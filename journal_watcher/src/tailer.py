"""Incremental reader for the active journal.

Reads only the bytes appended since the recorded offset and reports the last
line that looks like a JSON event carrying the marker token.
"""

import logging
import os
from dataclasses import dataclass

from journal_watcher.src.errors import ReadFailure

logger = logging.getLogger(__name__)

DEFAULT_MARKER = "ColonisationConstructionDepot"


@dataclass(frozen=True)
class TailResult:
    offset: int
    line: str | None = None
    bytes_read: int = 0


def is_match(line: str, marker: str = DEFAULT_MARKER) -> bool:
    """Cheap shape check: marker present, starts with '{', ends with '}'."""
    return marker in line and line.startswith("{") and line.rstrip().endswith("}")


def split_lines(data: bytes) -> list[str]:
    """Split on \\n, \\r\\n and \\r, decoding each line as UTF-8."""
    return [raw.decode("utf-8", errors="replace") for raw in data.splitlines()]


def last_match(lines: list[str], marker: str = DEFAULT_MARKER) -> str | None:
    for line in reversed(lines):
        if is_match(line, marker):
            return line
    return None


def read_new_lines(path: str, offset: int, marker: str = DEFAULT_MARKER) -> TailResult:
    """Read *path* from *offset* to EOF and return the new offset and last match.

    When the file has not grown nothing is read. Raises ReadFailure on any
    stat/open/seek/read error; the caller keeps its offset in that case.
    """
    try:
        size = os.stat(path).st_size
    except OSError as e:
        raise ReadFailure(path, offset, e) from e

    if size == offset:
        return TailResult(offset)

    start = offset
    if size < offset:
        logger.info("File truncation detected for %s (size=%d, offset=%d)", path, size, offset)
        start = 0

    try:
        with open(path, "rb") as f:
            f.seek(start)
            data = f.read()
            new_offset = f.tell()
    except OSError as e:
        raise ReadFailure(path, offset, e) from e

    line = last_match(split_lines(data), marker)
    logger.debug("Read %d bytes from %s (%d -> %d), match=%s",
                  len(data), path, start, new_offset, line is not None)
    return TailResult(new_offset, line, len(data))
