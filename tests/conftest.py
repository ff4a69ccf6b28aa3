"""Shared fixtures: executors wired to `httpx.MockTransport`."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from adapters.http_client import HttpxRequestExecutor, build_async_client
from core.config import AppSettings


class Recorder:
    """Wraps a handler and keeps every request the transport received."""

    def __init__(self, handler: Callable) -> None:
        self._handler = handler
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self._handler(request)
        if hasattr(response, "__await__"):
            response = await response
        return response


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None)


@pytest.fixture
def make_executor(settings: AppSettings):
    """Factory: `make_executor(handler, timeout=...) -> (executor, recorder)`."""

    def _make(handler: Callable, *, timeout: float | None = None):
        cfg = settings
        if timeout is not None:
            cfg = settings.model_copy(update={"http_timeout_seconds": timeout})
        recorder = Recorder(handler)
        client = build_async_client(cfg, transport=httpx.MockTransport(recorder))
        return HttpxRequestExecutor(cfg, client=client), recorder

    return _make
