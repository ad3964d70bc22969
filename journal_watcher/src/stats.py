"""Run counters for the watcher loop."""

import time


class WatchStats:
    """Plain counters; only the poll loop touches them."""

    def __init__(self):
        self._start_time = time.time()
        self.polls = 0
        self.empty_polls = 0
        self.rotations = 0
        self.lines_forwarded = 0
        self.forward_failures = 0
        self.read_errors = 0
        self.bytes_read = 0

    def snapshot(self) -> dict:
        return {
            "polls": self.polls,
            "empty_polls": self.empty_polls,
            "rotations": self.rotations,
            "lines_forwarded": self.lines_forwarded,
            "forward_failures": self.forward_failures,
            "read_errors": self.read_errors,
            "bytes_read": self.bytes_read,
            "uptime_seconds": round(time.time() - self._start_time, 1),
        }
