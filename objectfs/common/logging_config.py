"""
Structured JSON logging for storage operations.

Provides:
- JSON format for log aggregation
- Structured metadata attached to records
- Timing of backend calls
"""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Optional


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in JSON format with standardized fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields passed through the extra parameter
        if hasattr(record, "extra_fields"):
            log_data.update(record.extra_fields)

        return json.dumps(log_data, default=str)


class PerformanceTracker:
    """
    Context manager for timing a storage operation.

    Usage:
        with PerformanceTracker("read", logger, bucket="media", key="a.txt"):
            # ... call the backend
            pass
    """

    def __init__(
        self,
        operation: str,
        logger: logging.Logger,
        log_level: int = logging.DEBUG,
        failure_level: int = logging.WARNING,
        **extra_fields,
    ):
        """
        Initialize performance tracker.

        Args:
            operation: Operation name
            logger: Logger instance
            log_level: Log level for completion message
            failure_level: Log level when the operation raises
            **extra_fields: Additional structured fields
        """
        self.operation = operation
        self.logger = logger
        self.log_level = log_level
        self.failure_level = failure_level
        self.extra_fields = extra_fields
        self.start_time: Optional[float] = None

    def __enter__(self):
        """Start timing."""
        self.start_time = time.time()
        self.logger.log(
            logging.DEBUG,
            f"Starting operation: {self.operation}",
            extra={"extra_fields": {"operation": self.operation, **self.extra_fields}},
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Log completion with duration."""
        duration_ms = (time.time() - self.start_time) * 1000
        extra = {
            "operation": self.operation,
            "duration_ms": round(duration_ms, 2),
            **self.extra_fields,
        }

        if exc_type:
            extra["error"] = str(exc_val)
            extra["error_type"] = exc_type.__name__
            self.logger.log(
                self.failure_level,
                f"Operation failed: {self.operation}",
                extra={"extra_fields": extra},
            )
        else:
            self.logger.log(
                self.log_level,
                f"Operation completed: {self.operation}",
                extra={"extra_fields": extra},
            )
        return False


def setup_logging(log_level: str = "INFO", json_format: bool = True):
    """
    Configure application logging.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSON formatting if True, standard format if False
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, log_level.upper()))

    if json_format:
        formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # The AWS SDK is very chatty at DEBUG
    for name in ("boto3", "botocore", "s3transfer", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)
