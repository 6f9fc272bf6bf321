from __future__ import annotations
import json, logging, sys
from typing import Any, Dict

ROOT_LOGGER = "polychart"

_RESERVED = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname", "filename",
    "module", "exc_info", "exc_text", "stack_info", "lineno", "funcName",
    "created", "msecs", "relativeCreated", "thread", "threadName",
    "processName", "process", "taskName", "message", "asctime",
))


def _jsonable(v: Any) -> Any:
    try:
        json.dumps(v)
        return v
    except (TypeError, ValueError):
        return repr(v)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # chart_type, attribute, ... passed through extra=
        for k, v in getattr(record, "__dict__", {}).items():
            if k not in _RESERVED:
                payload[k] = _jsonable(v)
        return json.dumps(payload, separators=(",", ":"))


def get_logger(name: str = ROOT_LOGGER, level: str = "INFO", structured_json: bool = True) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    handler = logging.StreamHandler(sys.stderr)
    if structured_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def configure_from_cfg(cfg) -> logging.Logger:
    """Install the package handler from a `LoggingCfg` section (first call wins)."""
    return get_logger(ROOT_LOGGER, level=cfg.level, structured_json=cfg.structured_json)
