import logging
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from core.config_loader import settings


class JsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname


def setup_logging() -> None:
    root = logging.getLogger()
    # uvicorn --reload imports main twice
    if any(getattr(h, "_feedback360", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler._feedback360 = True
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter("%(timestamp) %(level) %(name) %(message)"))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper())

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
