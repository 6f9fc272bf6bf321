import json
import logging
from polychart.utils.log import JsonFormatter, configure_from_cfg, get_logger
from polychart.config_model.model import LoggingCfg


def test_json_formatter_basic_and_extra():
    logger = logging.getLogger("t-json")
    logger.setLevel(logging.INFO)

    # capture a single record via a proper Handler
    class CapHandler(logging.Handler):
        def __init__(self):
            super().__init__(level=0)
            self.last = None
            self.setFormatter(JsonFormatter())

        def emit(self, record: logging.LogRecord) -> None:
            self.last = self.format(record)

    cap = CapHandler()
    logger.handlers = [cap]
    logger.propagate = False

    logger.warning("invalid JSON in attribute", extra={"attribute": "data", "chart_type": "pie"})
    payload = json.loads(cap.last)
    assert payload["message"] == "invalid JSON in attribute"
    assert payload["level"] == "WARNING"
    assert payload["attribute"] == "data"
    assert payload["chart_type"] == "pie"
    assert "time" in payload

    logger.info("odd extra", extra={"obj": object()})
    assert json.loads(cap.last)["obj"].startswith("<object")


def test_exception_info_is_serialized():
    logger = logging.getLogger("t-json-exc")
    records = []

    class CapHandler(logging.Handler):
        def emit(self, record):
            records.append(JsonFormatter().format(record))

    logger.handlers = [CapHandler()]
    logger.propagate = False
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        logger.exception("failed")
    assert "RuntimeError: boom" in json.loads(records[0])["exc_info"]


def test_get_logger_idempotent_and_plain_mode():
    lg1 = get_logger("poly-test", level="DEBUG", structured_json=True)
    lg2 = get_logger("poly-test", level="INFO", structured_json=True)
    assert lg1 is lg2
    assert lg1.level == logging.DEBUG
    assert isinstance(lg1.handlers[0].formatter, JsonFormatter)
    lg3 = get_logger("poly-plain", level="INFO", structured_json=False)
    assert not isinstance(lg3.handlers[0].formatter, JsonFormatter)


def test_configure_from_cfg_targets_package_logger():
    logger = configure_from_cfg(LoggingCfg(level="WARNING"))
    assert logger.name == "polychart"
    assert logger.handlers
