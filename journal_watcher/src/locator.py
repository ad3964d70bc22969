"""Locates the journal file the game is currently writing to.

The whole tree is rescanned on every call: files appear and disappear between
polls, so nothing is cached.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterator

from journal_watcher.src.errors import NoCandidateFound

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    path: str
    mtime: float


@dataclass(frozen=True)
class ScanEntry:
    """Outcome of inspecting one directory entry: a candidate or an error."""
    path: str
    candidate: Candidate | None = None
    error: OSError | None = None


def matches_name(name: str, prefix: str, suffix: str) -> bool:
    return name.startswith(prefix) and name.endswith(suffix)


def _inspect(path: str) -> ScanEntry:
    try:
        st = os.stat(path)
    except OSError as e:
        return ScanEntry(path, error=e)
    return ScanEntry(path, candidate=Candidate(path, st.st_mtime))


def scan_entries(root: str, prefix: str, suffix: str) -> Iterator[ScanEntry]:
    """Yield one ScanEntry per journal-named file under *root*, in walk order.

    Directories that cannot be listed are reported as error entries as well.
    """
    if os.path.isfile(root):
        if matches_name(os.path.basename(root), prefix, suffix):
            yield _inspect(root)
        return

    walk_errors: list[OSError] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=walk_errors.append):
        while walk_errors:
            err = walk_errors.pop(0)
            yield ScanEntry(err.filename or dirpath, error=err)
        for name in filenames:
            if matches_name(name, prefix, suffix):
                yield _inspect(os.path.join(dirpath, name))
    for err in walk_errors:
        yield ScanEntry(err.filename or root, error=err)


def find_latest_file(root: str, prefix: str = "Journal", suffix: str = ".log") -> Candidate:
    """Return the journal under *root* with the newest modification time.

    On equal timestamps the entry seen last in walk order wins. Raises
    NoCandidateFound when no file matches.
    """
    latest: Candidate | None = None
    for entry in scan_entries(root, prefix, suffix):
        if entry.error is not None:
            logger.debug("Skipping %s: %s", entry.path, entry.error)
            continue
        if latest is None or entry.candidate.mtime >= latest.mtime:
            latest = entry.candidate

    if latest is None:
        raise NoCandidateFound(root)
    return latest
