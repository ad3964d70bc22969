"""Configuration: frozen dataclass built from defaults, YAML, env vars and CLI args."""

import argparse
import logging
import os
import sys
from dataclasses import dataclass, fields

import yaml

from journal_watcher.src.journal_dir import default_journal_dir

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Config:
    journal_dir: str = ""
    server_url: str = "http://localhost:8000/api/save"
    poll_interval: float = 5.0
    file_prefix: str = "Journal"
    file_suffix: str = ".log"
    marker: str = "ColonisationConstructionDepot"
    content_type: str = "application/json"
    request_timeout: float = 10.0
    log_level: str = "INFO"
    dry_run: bool = False

    def __post_init__(self):
        if not self.journal_dir:
            object.__setattr__(self, "journal_dir", default_journal_dir())
        if self.poll_interval <= 0:
            raise ValueError(f"poll_interval must be positive, got {self.poll_interval}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")


_ENV_VARS = {
    "journal_dir": "JOURNAL_DIR",
    "server_url": "SERVER_URL",
    "poll_interval": "POLL_INTERVAL",
    "file_prefix": "FILE_PREFIX",
    "file_suffix": "FILE_SUFFIX",
    "marker": "MARKER",
    "content_type": "CONTENT_TYPE",
    "request_timeout": "REQUEST_TIMEOUT",
    "log_level": "LOG_LEVEL",
    "dry_run": "DRY_RUN",
}

_CONVERTERS = {
    "poll_interval": float,
    "request_timeout": float,
    "dry_run": _parse_bool,
}


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}"
        )
    logger.info("Loaded YAML config from %s", path)
    return data


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Tail the active game journal and forward matching events over HTTP",
    )
    parser.add_argument("--config", default=None, help="Path to a YAML config file")
    parser.add_argument("--journal-dir", help="Directory holding the journal files")
    parser.add_argument("--server-url", help="Collector endpoint receiving matched lines")
    parser.add_argument("--poll-interval", type=float, help="Seconds between polls")
    parser.add_argument("--file-prefix", help="Journal file name prefix")
    parser.add_argument("--file-suffix", help="Journal file name extension")
    parser.add_argument("--marker", help="Token a line must contain to be forwarded")
    parser.add_argument("--content-type", help="Content-Type header of forwarded requests")
    parser.add_argument("--request-timeout", type=float, help="HTTP timeout in seconds")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--dry-run", action="store_true", default=None,
                        help="Log matched lines instead of sending them")
    return parser


def load_config(argv: list[str] | None = None) -> Config:
    """Build Config from defaults <- YAML file <- env vars <- CLI args (highest priority)."""
    if argv is None:
        argv = sys.argv[1:]
    args = build_cli_parser().parse_args(argv)

    names = {f.name for f in fields(Config)}
    yaml_data = load_yaml_config(args.config or os.environ.get("CONFIG_PATH"))
    unknown = set(yaml_data) - names
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    kwargs: dict = {k: v for k, v in yaml_data.items() if k in names}

    for name, env_var in _ENV_VARS.items():
        if env_var in os.environ:
            kwargs[name] = os.environ[env_var]

    for name in names:
        value = getattr(args, name, None)
        if value is not None:
            kwargs[name] = value

    for name, convert in _CONVERTERS.items():
        if name in kwargs:
            kwargs[name] = convert(kwargs[name])

    return Config(**kwargs)
