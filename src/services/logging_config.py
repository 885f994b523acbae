"""
Logging configuration for the form graph.

Provides structured logging with:
- JSON formatting for log aggregation
- Human-readable formatting for development
- Calculation logging that correlates every record of one return
"""

import json
import logging
import sys
import time
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from config.settings import get_settings

# Correlates every record emitted while one return is computed
return_id_var: ContextVar[Optional[str]] = ContextVar('return_id', default=None)


class JsonFormatter(logging.Formatter):
    """
    JSON log formatter for structured logging.

    Outputs logs as JSON objects for easy parsing by log aggregators.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        return_id = return_id_var.get()
        if return_id:
            log_data["return_id"] = return_id

        if hasattr(record, 'extra_data'):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class ReadableFormatter(logging.Formatter):
    """Human-readable log formatter for development."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
        'RESET': '\033[0m',
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS['RESET'])
        reset = self.COLORS['RESET']

        timestamp = datetime.now().strftime('%H:%M:%S.%f')[:-3]
        level = f"{color}{record.levelname:8s}{reset}"

        message = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if hasattr(record, 'extra_data') and record.extra_data:
            extras = ' | '.join(f"{k}={v}" for k, v in record.extra_data.items())
            message += f" | {extras}"

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return message


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that includes context in all log messages."""

    def process(self, msg: str, kwargs: Dict) -> tuple:
        extra = kwargs.get('extra', {})

        if 'extra_data' not in extra:
            extra['extra_data'] = {}
        extra['extra_data'].update({k: v for k, v in self.extra.items() if v is not None})

        return_id = return_id_var.get()
        if return_id:
            extra['extra_data'].setdefault('return_id', return_id)

        kwargs['extra'] = extra
        return msg, kwargs


def configure_logging(
    level: Optional[str] = None,
    json_output: Optional[bool] = None,
    log_file: Optional[Path] = None
) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to FORMGRAPH_LOG_LEVEL
        json_output: If True, output JSON formatted logs; defaults to FORMGRAPH_LOG_JSON
        log_file: Optional file path for log output
    """
    if level is None or json_output is None:
        settings = get_settings()
        level = level or settings.log_level
        json_output = settings.log_json if json_output is None else json_output

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    root_logger.handlers.clear()

    if json_output:
        formatter = JsonFormatter()
    else:
        formatter = ReadableFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JsonFormatter())  # Always JSON for files
        root_logger.addHandler(file_handler)


def get_logger(name: str, **extra) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (typically __name__)
        **extra: Additional context to include in all logs

    Returns:
        ContextLogger instance
    """
    base_logger = logging.getLogger(name)
    return ContextLogger(base_logger, extra)


class CalculationLogger:
    """
    Logger for one return computation.

    Records the start of the pass, the included forms, the summary and any
    graph error, with the elapsed time on the final record.
    """

    def __init__(self, return_id: Optional[str] = None):
        self.logger = get_logger("calculation", return_id=return_id)
        self.return_id = return_id
        self._start_time: Optional[float] = None

    @property
    def elapsed_ms(self) -> int:
        if self._start_time is None:
            return 0
        return int((time.perf_counter() - self._start_time) * 1000)

    def start_calculation(self, tax_year: Optional[int], filing_status: str) -> None:
        self._start_time = time.perf_counter()
        self.logger.info(
            "Starting return computation",
            extra={'extra_data': {
                'tax_year': tax_year,
                'filing_status': filing_status,
            }}
        )

    def log_included_forms(self, tags: Iterable[str]) -> None:
        tags = list(tags)
        self.logger.info(
            f"{len(tags)} forms attached",
            extra={'extra_data': {'forms': tags}}
        )

    def log_summary(self, summary: Dict[str, Any], evaluations: int) -> None:
        """Log final summary values with timing."""
        self.logger.info(
            "Return computation complete",
            extra={'extra_data': {
                **summary,
                'line_evaluations': evaluations,
                'duration_ms': self.elapsed_ms,
            }}
        )

    def log_warning(self, message: str, **data) -> None:
        self.logger.warning(message, extra={'extra_data': data})

    def log_error(self, message: str, **data) -> None:
        self.logger.error(
            message,
            extra={'extra_data': {**data, 'duration_ms': self.elapsed_ms}}
        )
