"""
Logging setup for the ``drep-scoring`` CLI.

``configure_logging(config)`` is called once per command, before any
snapshot is loaded.  Library modules only ever do
``logger = logging.getLogger(__name__)``.

Console output goes to stderr so that ``score --json`` keeps stdout
machine-readable.  The file handler is added only when ``log_file`` is set.

With ``json_format = true`` each line is one JSON object.  The engine
attaches ``drep_id``, ``score`` and ``scoring_version`` through ``extra=``,
so a batch run can be filtered per DRep::

    {"ts": "2026-10-17T09:00:00Z", "level": "DEBUG", "logger": "drep_scoring.scoring.engine",
     "msg": "Scored drep1... at epoch 540: 72 (...)", "drep_id": "drep1...", "score": 72,
     "scoring_version": "v3"}
"""

from __future__ import annotations

import json
import logging
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from drep_scoring.config import LoggingConfig

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Attributes every LogRecord carries; anything else came in through extra=.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class _JsonFormatter(logging.Formatter):
    """One JSON object per line: ``ts``, ``level``, ``logger``, ``msg``,
    ``exc`` when an exception is attached, then any ``extra=`` fields."""

    converter = time.gmtime

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, LOG_DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        )
        return json.dumps(payload, default=str)


def _attach(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: "LoggingConfig") -> None:
    """Replace the root logger's handlers according to ``config``.

    Args:
        config: ``AppConfig.logging``.
    """
    level = getattr(logging, config.level, logging.INFO)
    formatter = (
        _JsonFormatter()
        if config.json_format
        else logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    )

    handlers = [_attach(logging.StreamHandler(sys.stderr), level, formatter)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            _attach(logging.FileHandler(log_path, encoding="utf-8"), level, formatter)
        )

    logging.basicConfig(level=level, handlers=handlers, force=True)
