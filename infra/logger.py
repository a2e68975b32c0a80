from __future__ import annotations

import json as jsonlib
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Union

from infra.paths import LOG_DIR

if TYPE_CHECKING:
    from engine.config import EngineConfig

# Every record carries the session it belongs to, e.g. "seed=7 phase=1.2".
TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(session)s [%(name)s] %(message)s"
DEFAULT_LOGFILE = LOG_DIR / "validator.log"
NO_SESSION = "-"

# The process drives one practice session at a time (the API keeps a single
# global runner), so one label is enough.
_session_label = NO_SESSION


def bind_session(seed: int | None, phase: int, sub_phase: int) -> None:
    """Stamp subsequent records with the session's seed and current sub-phase."""
    global _session_label
    _session_label = f"seed={seed} phase={phase}.{sub_phase}"


class SessionFilter(logging.Filter):
    """Adds record.session so both formatters can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.session = _session_label
        return True


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line; violation text with quotes stays valid JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "session": getattr(record, "session", NO_SESSION),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return jsonlib.dumps(payload, ensure_ascii=True)


def configure_logging(
    level: Union[str, int] = "INFO",
    *,
    json: bool = False,
    logfile: str | Path | None = DEFAULT_LOGFILE,
) -> None:
    """
    Route validator logs to stdout and, optionally, an append-only file.

    Calling it again replaces the previous handlers, so a config reload
    takes effect immediately.

    Args:
        level: Logging level name or int (e.g., "DEBUG", logging.INFO).
        json: Emit JSON lines when True; otherwise the text format.
        logfile: File path to append logs; set to None to disable file output.
    """
    formatter = JsonLineFormatter() if json else logging.Formatter(TEXT_FORMAT)
    session_filter = SessionFilter()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if logfile is not None:
        log_path = Path(logfile)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper() if isinstance(level, str) else level)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(session_filter)
        root.addHandler(handler)

    logging.captureWarnings(True)


def configure_from_config(config: EngineConfig, logfile: str | Path | None = DEFAULT_LOGFILE) -> None:
    """Apply an EngineConfig's log_level and log_json."""
    configure_logging(config.log_level, json=config.log_json, logfile=logfile)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
