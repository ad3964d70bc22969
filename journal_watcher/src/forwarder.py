"""Sinks that receive matched journal lines.

The watcher depends only on the ``Sink`` protocol; any object with a
``forward(line)`` method can stand in for the HTTP forwarder.
"""

import logging
from typing import Protocol

import requests

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def forward(self, line: str) -> bool | None:
        ...


class HttpForwarder:
    """POSTs each line, as-is, to the collector endpoint. Never raises."""

    def __init__(self, url: str, content_type: str = "application/json",
                 timeout: float = 10.0):
        self._url = url
        self._content_type = content_type
        self._timeout = timeout

    @property
    def url(self) -> str:
        return self._url

    def forward(self, line: str) -> bool:
        """Send one line. Returns True on HTTP 200."""
        logger.info("Forwarding: %s", line)
        try:
            resp = requests.post(
                self._url,
                data=line.encode("utf-8"),
                headers={"Content-Type": self._content_type},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.warning("Send error to %s: %s", self._url, e)
            return False

        try:
            if resp.status_code != 200:
                logger.warning("Not 200 from %s: %d %s", self._url, resp.status_code, resp.reason)
                return False
            return True
        finally:
            resp.close()


class LogSink:
    """Dry-run sink: logs the line instead of sending it."""

    def forward(self, line: str) -> bool:
        logger.info("[dry-run] %s", line)
        return True
