"""Structured JSON logs and per-request context for the region site API.

Gated routes receive the admin secret as ``?pw=``. Every string this module
writes (messages, exception text, query strings, extra fields) goes through
``redact_secrets`` first.
"""

from __future__ import annotations

import contextvars
import json
import logging
import re
import sys
import time
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

ADMIN_GATE_GRANTED = "granted"
ADMIN_GATE_DENIED = "denied"
ADMIN_GATE_UNCONFIGURED = "unconfigured"

REDACTED = "***"
_SECRET_PARAM_RE = re.compile(r"(?i)(^|[?&])(pw=)[^&#\s'\"]*")
_RESERVED_FIELDS = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

_request_id_var: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)
_logging_configured = False


def get_request_id() -> Optional[str]:
    return _request_id_var.get()


def redact_secrets(text: str) -> str:
    """Mask the value of every ``pw`` query parameter in ``text``."""
    return _SECRET_PARAM_RE.sub(lambda m: f"{m.group(1)}{m.group(2)}{REDACTED}", text)


def record_admin_gate(request: Request, outcome: str) -> None:
    request.state.admin_gate = outcome


def _clean(value: Any) -> Any:
    return redact_secrets(value) if isinstance(value, str) else value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_secrets(record.getMessage()),
        }
        request_id = get_request_id()
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info:
            payload["exc_info"] = redact_secrets(self.formatException(record.exc_info))
            if record.exc_info[1] is not None:
                payload["exc_type"] = type(record.exc_info[1]).__name__
        for key, value in record.__dict__.items():
            if key not in _RESERVED_FIELDS and not key.startswith("_") and key not in payload:
                payload[key] = _clean(value)
        return json.dumps(payload, default=str, separators=(",", ":"))


def configure_logging(level: str = "INFO") -> None:
    """Route every logger through one stdout JSON handler. Runs once per process."""
    global _logging_configured
    if _logging_configured:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).handlers.clear()
        logging.getLogger(name).propagate = True
    for name in ("sqlalchemy.engine", "alembic"):
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True


def access_log_fields(request: Request, status_code: int, duration_ms: float) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "status_code": int(status_code),
        "duration_ms": round(duration_ms, 2),
        "client_ip": getattr(request.client, "host", None) or "",
    }
    query = request.scope.get("query_string", b"").decode("latin-1")
    if query:
        fields["query"] = redact_secrets(query)
    gate = getattr(request.state, "admin_gate", None)
    if gate is not None:
        fields["admin_gate"] = gate
    return fields


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id (echoed in ``header_name``) and writes one access log line."""

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = (request.headers.get(self.header_name) or "").strip() or uuid4().hex
        token = _request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                elapsed = (time.perf_counter() - started) * 1000.0
                logger.exception("http_request_error", extra=access_log_fields(request, 500, elapsed))
                raise
            elapsed = (time.perf_counter() - started) * 1000.0
            response.headers[self.header_name] = request_id
            level = logging.WARNING if response.status_code >= 500 else logging.INFO
            logger.log(level, "http_request", extra=access_log_fields(request, response.status_code, elapsed))
            return response
        finally:
            _request_id_var.reset(token)
