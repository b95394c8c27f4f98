"""Package-local logging utilities.

This package is a library first. By default it emits no logs unless the host
application configures logging. CLI users can opt into logs via
``A11YCORE_LOG_LEVEL``.

Two channels exist: rule modules log through the stdlib ``a11ycore`` logger,
the engine and adapters log through loguru. ``configure_logging`` drives both.
"""

from __future__ import annotations

import logging
import os
import sys

from loguru import logger as _loguru_logger

LOGGER_NAME = "a11ycore"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LOGURU_FORMAT = "{time:YYYY-MM-DD HH:mm:ss,SSS} | {level} | {name} | {message}"

logger = logging.getLogger(LOGGER_NAME)
logger.addHandler(logging.NullHandler())

_loguru_sink_id: int | None = None


def configure_logging(level: str | None = None) -> None:
    """Configure package logging for CLI/runtime diagnostics.

    This is intentionally opt-in. If neither ``level`` nor
    ``A11YCORE_LOG_LEVEL`` is provided, configuration is skipped.
    """
    global _loguru_sink_id

    env_level = os.getenv("A11YCORE_LOG_LEVEL", "")
    raw_level = level if level is not None else (env_level or "")
    resolved_level = raw_level.strip()
    pkg_logger = logging.getLogger(LOGGER_NAME)
    # Always reset handlers to avoid stale stderr streams across repeated CLI calls.
    pkg_logger.handlers = []
    if _loguru_sink_id is not None:
        try:
            _loguru_logger.remove(_loguru_sink_id)
        except ValueError:
            # Host already cleared loguru sinks.
            pass
        _loguru_sink_id = None

    if not resolved_level:
        pkg_logger.addHandler(logging.NullHandler())
        pkg_logger.setLevel(logging.NOTSET)
        pkg_logger.propagate = False
        _loguru_logger.disable(LOGGER_NAME)
        return

    level_name = resolved_level.upper()
    numeric_level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(numeric_level)
    pkg_logger.propagate = False

    # sys.stderr is looked up per record so pytest's capsys sees the output.
    _loguru_sink_id = _loguru_logger.add(
        lambda message: sys.stderr.write(message),
        level=logging.getLevelName(numeric_level),
        format=_LOGURU_FORMAT + "\n",
        filter=LOGGER_NAME,
    )
    _loguru_logger.enable(LOGGER_NAME)
