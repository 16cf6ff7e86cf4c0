"""Logging setup for photofx.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by ``setup_logging`` from the command-line entry point.
"""

import json
import logging
import sys

from tqdm import tqdm

LOGGER_NAME = "photofx"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record):
        log_record = {
            "timestamp": f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}",
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False)


class TqdmLoggingHandler(logging.Handler):
    """Write records through ``tqdm.write`` so progress bars stay intact."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:  # pragma: no cover
            self.handleError(record)


def setup_logging(level: str = "INFO", log_json: bool = False) -> logging.Logger:
    """Configure the ``photofx`` logger.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"INFO"``.
        log_json: Emit JSON lines instead of plain text.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    if log_json:
        formatter: logging.Formatter = JsonFormatter(datefmt=DATE_FORMAT)
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s",
            datefmt=DATE_FORMAT,
        )

    handler = TqdmLoggingHandler()
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    return logger
