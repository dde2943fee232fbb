from __future__ import annotations

import json
import logging
import sys
import time
from typing import Literal, Optional, Union

from mirror.core.config import get_settings


def _json_formatter(record: logging.LogRecord) -> str:
    payload = {
        "ts": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
        "level": record.levelname,
        "logger": record.name,
        "msg": record.getMessage(),
    }
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, ensure_ascii=False)


class JsonStreamHandler(logging.StreamHandler):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def setup_logging(
    level: Optional[Union[int, str]] = None,
    fmt: Optional[Literal["console", "json"]] = None,
) -> None:
    """
    Configure the root logger. Idempotent.
    Missing arguments fall back to LOG_LEVEL / LOG_FORMAT from settings.
    """
    root = logging.getLogger()
    if getattr(root, "_mirror_logging_inited", False):
        return

    settings = get_settings()
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if fmt is None:
        fmt = "json" if settings.LOG_FORMAT == "json" else "console"

    # clear existing handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    handler: logging.Handler
    if fmt == "json":
        handler = JsonStreamHandler(stream=sys.stdout)
        formatter = logging.Formatter("%(message)s")  # json already formatted
    else:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "[%(levelname)s] %(asctime)s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )
    handler.setFormatter(formatter)

    root.setLevel(level)
    root.addHandler(handler)

    root._mirror_logging_inited = True  # type: ignore[attr-defined]
