"""Logging setup (stdlib `logging`).

Every `execute` call binds a fresh request id in `request_id_ctx`; the filter
copies it onto each record so the lines of one call can be correlated even
when several calls run concurrently on the same loop.
"""

from __future__ import annotations

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar, Token
from typing import Any

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def bind_request_id() -> Token[str | None]:
    return request_id_ctx.set(uuid.uuid4().hex[:12])


def reset_request_id(token: Token[str | None]) -> None:
    request_id_ctx.reset(token)


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get() or "-"
        return True


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: dict[str, Any] = {
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "time": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)),
            "request_id": getattr(record, "request_id", "-"),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s"


def init_logging(debug: bool = False, json_output: bool = True) -> None:
    """Configure the root logger with a single stderr handler."""

    root = logging.getLogger()
    root.handlers.clear()
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)

    # stderr keeps stdout clean for decoded payloads (`fetch --raw | jq`).
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(JsonFormatter() if json_output else logging.Formatter(_TEXT_FORMAT))
    root.addHandler(handler)
