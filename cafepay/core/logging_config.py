# cafepay/core/logging_config.py
"""
Logging configuration for cafepay.

The engine only emits records through module loggers. Applications call
setup_logging() once at startup: JSON records to a rotating payroll log in
production, colored console output in development.
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

# Record attributes copied into the JSON payload when a caller sets them
_CONTEXT_FIELDS = ("employee_id", "period_id")


def is_production() -> bool:
    return os.getenv("PRODUCTION", "false").lower() == "true"


def get_log_dir() -> Path:
    return Path(os.getenv("CAFEPAY_LOG_DIR", "logs"))


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record, for log aggregation.

    Structured data goes in ``extra={"extra_fields": {...}}`` and is merged
    into the top level of the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        payload.update(getattr(record, "extra_fields", {}))
        for field in _CONTEXT_FIELDS:
            if hasattr(record, field):
                payload[field] = getattr(record, field)

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Level names in ANSI colors, for the development console."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname)
        if color is None:
            return super().format(record)
        # Color a copy so other handlers see the plain level name
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def setup_logging() -> None:
    """
    Configure the root logger.

    Production (PRODUCTION=true): INFO and above as JSON to
    ``$CAFEPAY_LOG_DIR/payroll.log`` (rotated), warnings also to stdout.

    Development: DEBUG and above, colored, to stdout.
    """
    production = is_production()
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)

    if production:
        root_logger.setLevel(logging.INFO)
        log_dir = get_log_dir()
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "payroll.log",
            maxBytes=10_000_000,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(JSONFormatter())
    else:
        root_logger.setLevel(logging.DEBUG)
        console_handler.setFormatter(
            ColoredFormatter(fmt="%(levelname)-8s %(asctime)s [%(name)s] %(message)s", datefmt="%H:%M:%S")
        )

    root_logger.addHandler(console_handler)

    # SQL echo is too noisy outside debugging
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured (production=%s)",
        production,
        extra={"extra_fields": {"production": production}},
    )
