import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

ROOT_LOGGER = "lms_admin"
HANDLER_NAME = "lms_admin.json-lines"


def configure_logging(level: int | str = logging.INFO, stream: TextIO | None = None) -> logging.Logger:
    """Attach the JSON-line handler to the package logger and set its level.

    Calling it again only updates the level (and the stream, when given).
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    handler = next((item for item in root.handlers if item.get_name() == HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)
    return root


def get_logger(name: str) -> logging.Logger:
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    if not logging.getLogger(ROOT_LOGGER).handlers:
        configure_logging()
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger,
    component: str,
    event: str,
    outcome: str,
    level: int = logging.INFO,
    **details: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "component": component,
                "event": event,
                "outcome": outcome,
                **details,
            },
            ensure_ascii=False,
            default=str,
        ),
    )
