"""Poll loop: locate the active journal, tail it, forward the last match."""

import logging
import threading
from dataclasses import dataclass

from journal_watcher.src.errors import NoCandidateFound, ReadFailure
from journal_watcher.src.forwarder import Sink
from journal_watcher.src.locator import find_latest_file
from journal_watcher.src.stats import WatchStats
from journal_watcher.src.tailer import DEFAULT_MARKER, read_new_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WatchState:
    """The active journal and how many of its bytes have been consumed."""
    path: str | None = None
    offset: int = 0


class JournalWatcher:
    """Drives Locator -> Tailer -> Sink once per poll interval.

    A change of active path is a rotation: the cursor restarts at 0 for the new
    file, whatever offset the previous one reached.
    """

    def __init__(
        self,
        journal_dir: str,
        sink: Sink,
        poll_interval: float = 5.0,
        prefix: str = "Journal",
        suffix: str = ".log",
        marker: str = DEFAULT_MARKER,
        stats: WatchStats | None = None,
    ):
        self._dir = journal_dir
        self._sink = sink
        self._poll_interval = poll_interval
        self._prefix = prefix
        self._suffix = suffix
        self._marker = marker
        self._stats = stats or WatchStats()
        self._state = WatchState()
        self._missing_reported = False

    @property
    def state(self) -> WatchState:
        return self._state

    @property
    def stats(self) -> WatchStats:
        return self._stats

    def poll_once(self) -> str | None:
        """Run one cycle. Returns the forwarded line, if any."""
        self._stats.polls += 1
        line = self._tail_active()
        if line is None:
            self._stats.empty_polls += 1
            return None

        # sinks may return None; only an explicit False counts as a failure
        if self._sink.forward(line) is False:
            self._stats.forward_failures += 1
        else:
            self._stats.lines_forwarded += 1
        return line

    def _tail_active(self) -> str | None:
        try:
            candidate = find_latest_file(self._dir, self._prefix, self._suffix)
        except NoCandidateFound as e:
            if not self._missing_reported:
                logger.info("%s, waiting", e)
                self._missing_reported = True
            else:
                logger.debug("%s", e)
            return None
        self._missing_reported = False

        if candidate.path != self._state.path:
            if self._state.path is not None:
                self._stats.rotations += 1
            logger.info("Now watching: %s", candidate.path)
            self._state = WatchState(candidate.path, 0)

        try:
            result = read_new_lines(self._state.path, self._state.offset, self._marker)
        except ReadFailure as e:
            self._stats.read_errors += 1
            logger.warning("%s", e)
            return None

        self._state = WatchState(self._state.path, result.offset)
        self._stats.bytes_read += result.bytes_read
        return result.line

    def run(self, shutdown_event: threading.Event):
        """Poll until *shutdown_event* is set."""
        logger.info("Watching %s every %.1fs", self._dir, self._poll_interval)
        while not shutdown_event.is_set():
            try:
                self.poll_once()
            except Exception:
                logger.exception("Poll cycle failed")
            shutdown_event.wait(self._poll_interval)
