"""Centralized logging configuration."""
import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with a fixed set of optional extras."""

    EXTRA_FIELDS = ("currency", "source", "target", "state", "error")

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for field in self.EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = str(getattr(record, field))

        return json.dumps(log_data)


def _build_handlers(formatter: logging.Formatter, log_file: Optional[str]) -> List[logging.Handler]:
    # stderr keeps log lines out of CLI output on stdout
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_type: str = "json",
    enabled: bool = True
) -> None:
    """Configure the root logger from the ``logging`` config section.

    ``enabled=False`` silences everything; a later enabled call lifts that.
    """
    if not enabled:
        logging.disable(logging.CRITICAL)
        return
    logging.disable(logging.NOTSET)

    formatter = JsonFormatter() if format_type == "json" else logging.Formatter(TEXT_FORMAT)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=_build_handlers(formatter, log_file),
        force=True  # Override existing configuration
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
