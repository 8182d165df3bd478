"""Logging setup shared by the MCP and HTTP entry points."""

import json
import logging
from datetime import datetime, timezone

from docsync.config import Settings, get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(settings: Settings | None = None) -> None:
    """Configure the root logger from LOG_LEVEL and LOG_FORMAT."""
    settings = settings or get_settings()

    handler = logging.StreamHandler()
    if settings.log_format.lower() == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, handlers=[handler], force=True)
