import logging
import os
import sys
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, Optional

from people_api.core.config import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None, log_dir: Optional[str] = None) -> None:
    """configure structured logging for the service (stdout plus an optional daily file)"""
    level = level or settings.LOG_LEVEL
    log_dir = settings.LOG_DIR if log_dir is None else log_dir

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                os.path.join(log_dir, f'people_api_{datetime.now().strftime("%Y%m%d")}.log'),
                mode='a',
            )
        )

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def get_logger(name: str) -> logging.Logger:
    """get a configured logger instance"""
    return logging.getLogger(name)


def _format_context(context: Optional[dict]) -> str:
    if not context:
        return ""
    return " " + " ".join(f"{key}={value}" for key, value in context.items())


class AppLogger:
    """
    thin wrapper around a stdlib logger with helpers for the messages every route emits:
    context, performance, business errors and audit entries.

    instances are handed to routes through a dependency, never stored globally.
    """

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def info(self, message: str, **context: Any) -> None:
        self.logger.info(f"{message}{_format_context(context)}")

    def warning(self, message: str, **context: Any) -> None:
        self.logger.warning(f"{message}{_format_context(context)}")

    def error(self, message: str, exc: Optional[BaseException] = None, **context: Any) -> None:
        self.logger.error(f"{message}{_format_context(context)}", exc_info=exc)

    def performance(self, operation: str, duration_ms: float, **context: Any) -> None:
        self.logger.info(f"{operation} completed in {duration_ms:.2f}ms{_format_context(context)}")

    def business_error(self, operation: str, error_message: str, **context: Any) -> None:
        self.logger.warning(f"business error in {operation}: {error_message}{_format_context(context)}")

    def audit(self, action: str, user: str = "system", **context: Any) -> None:
        self.logger.info(f"audit: {user} executed {action}{_format_context(context)}")

    @contextmanager
    def timed(self, operation: str, **context: Any) -> Iterator[None]:
        """log the duration of the wrapped block as a performance entry"""
        start = time.perf_counter()
        yield
        self.performance(operation, (time.perf_counter() - start) * 1000, **context)


def get_app_logger() -> AppLogger:
    """fastapi dependency providing the request-scoped application logger"""
    return AppLogger(get_logger("people_api.api"))
