# 📄 File: app/shared/utils/logging.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a logging system that records what happens in the app in a structured way,
# so we can see which request and which user caused each message when something goes wrong.

# 🧪 Purpose (Technical Summary):
# Structured logging with JSON (python-json-logger) or text output. Every record is enriched
# with the request id and user id held in context variables set by the request middleware.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting
# - logging: Python standard logging
# - contextvars: Request context tracking

# 🔄 Connected Modules / Calls From:
# Used by: app.main (startup), request logging middleware, security (user id binding)

import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Optional
from uuid import uuid4

from pythonjsonlogger.json import JsonFormatter

# Context variables for request tracking
request_id_var: ContextVar[str] = ContextVar('request_id', default='')
user_id_var: ContextVar[str] = ContextVar('user_id', default='')

SERVICE_NAME = 'cv-builder-api'
TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s'
JSON_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'

_logging_configured = False


class ContextFilter(logging.Filter):
    """
    Adds request id, user id and service metadata to every record.

    Attached to handlers so records from third-party loggers are enriched too.
    """

    def __init__(self):
        super().__init__()
        self.hostname = os.uname().nodename if hasattr(os, 'uname') else 'unknown'

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        record.user_id = user_id_var.get()
        record.service = SERVICE_NAME
        record.hostname = self.hostname
        return True


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format.lower() == 'json':
        return JsonFormatter(
            JSON_FORMAT,
            rename_fields={'levelname': 'level', 'name': 'logger', 'asctime': 'timestamp'},
        )
    return logging.Formatter(TEXT_FORMAT)


def setup_logging(
    log_level: str = 'INFO',
    log_format: str = 'json',
    force: bool = False
) -> logging.Logger:
    """
    Setup application logging configuration.

    Args:
        log_level: Root logging level name
        log_format: ``json`` or ``text``
        force: Reconfigure even if logging was already set up

    Returns:
        The startup logger
    """
    global _logging_configured

    if _logging_configured and not force:
        return logging.getLogger("startup")

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(build_formatter(log_format))
    console_handler.addFilter(ContextFilter())
    root_logger.addHandler(console_handler)

    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)

    _logging_configured = True
    return logging.getLogger("startup")


@contextmanager
def log_context(request_id: Optional[str] = None, user_id: Optional[str] = None):
    """
    Context manager for adding contextual information to logs.

    Args:
        request_id: Request identifier, generated when omitted
        user_id: Caller account id
    """
    if request_id is None:
        request_id = str(uuid4())

    request_token = request_id_var.set(request_id)
    user_token = user_id_var.set(user_id or '')

    try:
        yield {'request_id': request_id, 'user_id': user_id}
    finally:
        request_id_var.reset(request_token)
        user_id_var.reset(user_token)


def bind_user(user_id: str) -> None:
    """Attach the authenticated account id to the current request context."""
    user_id_var.set(user_id)
