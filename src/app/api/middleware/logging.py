"""Request logging middleware with PII filtering.

Transaction descriptions are user data and routinely carry document numbers,
card digits or contact details, so every logged message passes through
``filter_pii``. This module provides:
- Unique request IDs for tracing
- Request duration tracking
- A JSON formatter that keeps structured ``extra`` fields
"""

import json
import logging
import re
import sys
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


PII_PATTERNS = [
    # Card numbers (13-19 digits, with or without spaces/dashes)
    (re.compile(r'\b\d{4}[\s-]?\d{4}[\s-]?\d{4}[\s-]?\d{1,7}\b'), '[CARD]'),
    # CNPJ (00.000.000/0000-00)
    (re.compile(r'\b\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}\b'), '[CNPJ]'),
    # CPF (000.000.000-00)
    (re.compile(r'\b\d{3}\.?\d{3}\.?\d{3}-?\d{2}\b'), '[CPF]'),
    # Email addresses
    (re.compile(r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b'), '[EMAIL]'),
    # Phone numbers (+55 11 91234-5678, (11) 91234-5678)
    (re.compile(r'(?:\+\d{1,3}[\s-]?)?\(?\d{2}\)?[\s-]?9?\d{4}-\d{4}\b'), '[PHONE]'),
]

# Attributes every LogRecord has; anything else came from ``extra``.
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def filter_pii(text: str) -> str:
    """Remove PII from text using regex patterns.

    Args:
        text: Input text that may contain PII

    Returns:
        Text with PII replaced by placeholders
    """
    if not text:
        return text

    filtered = text
    for pattern, replacement in PII_PATTERNS:
        filtered = pattern.sub(replacement, filtered)

    return filtered


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests with PII filtering."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()
        path = filter_pii(str(request.url.path))

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "http_method": request.method,
                "path": path,
                "client_ip": request.client.host if request.client else None,
            },
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "http_method": request.method,
                    "path": path,
                    "duration_ms": int((time.perf_counter() - start_time) * 1000),
                    "error": filter_pii(str(exc)),
                },
            )
            raise

        response.headers["X-Request-ID"] = request_id

        # Routing fills path_params in the shared scope; history routes carry the user.
        user_id = request.scope.get("path_params", {}).get("user_id")

        logger.info(
            "Request completed",
            extra={
                "request_id": request_id,
                "user_id": user_id,
                "http_method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )

        return response


class JSONLogFormatter(logging.Formatter):
    """Format log records as JSON, including any ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": filter_pii(record.getMessage()),
        }

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_") or value is None:
                continue
            log_data[key] = filter_pii(value) if isinstance(value, str) else value

        if record.exc_info:
            log_data["exception"] = filter_pii(self.formatException(record.exc_info))

        return json.dumps(log_data, default=str, ensure_ascii=False)


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Log level name ('DEBUG', 'INFO', ...)
        json_format: Emit JSON lines instead of plain text
    """
    handler = logging.StreamHandler(sys.stdout)
    if json_format:
        handler.setFormatter(JSONLogFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
