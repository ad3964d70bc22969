"""Entry point for the journal watcher."""

import logging
import signal
import sys
import threading

from journal_watcher.src.config import load_config
from journal_watcher.src.forwarder import HttpForwarder, LogSink
from journal_watcher.src.watcher import JournalWatcher


def main(argv: list[str] | None = None):
    config = load_config(argv)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    shutdown_event = threading.Event()

    def signal_handler(signum, frame):
        logger.info("Received signal %d, shutting down...", signum)
        shutdown_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if config.dry_run:
        sink = LogSink()
        logger.info("Dry run: matched lines will be logged, not sent")
    else:
        sink = HttpForwarder(config.server_url, config.content_type, config.request_timeout)

    logger.info("Starting journal watcher — dir=%s, prefix=%s, suffix=%s, marker=%s, server=%s",
                config.journal_dir, config.file_prefix, config.file_suffix,
                config.marker, config.server_url)

    watcher = JournalWatcher(
        config.journal_dir,
        sink,
        poll_interval=config.poll_interval,
        prefix=config.file_prefix,
        suffix=config.file_suffix,
        marker=config.marker,
    )
    watcher.run(shutdown_event)

    logger.info("Stats: %s", watcher.stats.snapshot())
    logger.info("Journal watcher stopped.")


if __name__ == "__main__":
    main()
