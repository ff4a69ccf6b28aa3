"""httpx-backed request executor.

Responsibilities:
- `build_async_client` standardises timeout, headers and redirect policy for
  every client the project creates.
- `HttpxRequestExecutor` validates the URL, sends one request, decodes the
  body with pydantic and classifies every failure into an `ErrorKind`.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from core.config import AppSettings
from core.domain.http import Err, ErrorKind, HTTPMethod, Ok, Request, Result
from core.logging import bind_request_id, reset_request_id

T = TypeVar("T")

logger = logging.getLogger(__name__)

# RFC 3986 unreserved + reserved characters, plus "%" for escapes.
_URL_CHARS_RE = re.compile(r"[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with the project defaults.

    `transport` lets tests plug in `httpx.MockTransport`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers=headers,
        transport=transport,
    )


def parse_url(raw: str) -> httpx.URL | None:
    """Parse `raw` as an absolute URL, or return None if it is not one.

    Rejected: empty strings, any character outside the RFC 3986 set
    (whitespace, control characters, `<>{}|\\^"` and backtick included),
    a `%` not followed by two hex digits, strings `httpx.URL` cannot parse,
    and URLs without a scheme or host.
    """

    if not isinstance(raw, str) or not raw:
        return None
    if not _URL_CHARS_RE.fullmatch(raw) or _BAD_ESCAPE_RE.search(raw):
        return None
    try:
        url = httpx.URL(raw)
    except (httpx.InvalidURL, ValueError, TypeError):
        return None
    if not url.scheme or not url.host:
        return None
    return url


class HttpxRequestExecutor:
    """`RequestExecutor` on top of a shared `httpx.AsyncClient`.

    Ownership:
    - A client passed in is borrowed and never closed here.
    - Without one, a client is built from `settings` and closed by `aclose()`
      (or by leaving `async with`).
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client if client is not None else build_async_client(self._settings)

    @property
    def timeout(self) -> float:
        return self._settings.http_timeout_seconds

    async def __aenter__(self) -> "HttpxRequestExecutor":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def execute(self, url: str, method: HTTPMethod | str, target: type[T]) -> Result[T]:
        """Send one request and decode the body into `target`.

        Returns exactly one `Ok` or `Err`; the classified failures never
        propagate as exceptions.
        """

        token = bind_request_id()
        try:
            result = await self._execute(url, method, target)
        except Exception as exc:
            logger.exception("unclassified failure for %s", url)
            result = Err(ErrorKind.UNKNOWN, f"{type(exc).__name__}: {exc}")
        finally:
            reset_request_id(token)
        return result

    async def _execute(self, url: str, method: HTTPMethod | str, target: type[T]) -> Result[T]:
        method = HTTPMethod(method)

        parsed = parse_url(url)
        if parsed is None:
            logger.warning("%s: %r", ErrorKind.INVALID_URL.value, url)
            return Err(ErrorKind.INVALID_URL, f"cannot parse {url!r} as an absolute URL")

        request = Request(url=str(parsed), method=method)
        outgoing = self._client.build_request(request.method.value, parsed)

        logger.debug("dispatch %s %s", request.method.value, request.url)
        started = time.monotonic()
        try:
            response = await asyncio.wait_for(self._client.send(outgoing), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException):
            logger.warning(
                "%s: %s %s (limit %.1fs)",
                ErrorKind.TIMEOUT.value,
                request.method.value,
                request.url,
                self.timeout,
            )
            return Err(ErrorKind.TIMEOUT, f"no response within {self.timeout}s")
        except httpx.RequestError as exc:
            detail = _describe(exc)
            logger.warning("%s: %s %s (%s)", ErrorKind.REQUEST_FAILED.value, request.method.value, request.url, detail)
            return Err(ErrorKind.REQUEST_FAILED, detail)

        elapsed = time.monotonic() - started
        logger.info(
            "%s %s -> %s (%d bytes, %.3fs)",
            request.method.value,
            request.url,
            response.status_code,
            len(response.content),
            elapsed,
        )
        if response.is_error:
            # The body is still decoded; only the shape decides the outcome.
            logger.warning("non-success status %s for %s", response.status_code, request.url)

        return self._decode(response.content, target)

    def _decode(self, payload: bytes, target: type[T]) -> Result[T]:
        adapter: TypeAdapter[Any] = TypeAdapter(target)
        try:
            value = adapter.validate_json(payload)
        except ValidationError as exc:
            logger.warning(
                "%s: %d error(s) against %s",
                ErrorKind.DECODING_FAILED.value,
                exc.error_count(),
                exc.title,
            )
            return Err(ErrorKind.DECODING_FAILED, str(exc))
        return Ok(value)


def _describe(exc: BaseException) -> str:
    text = str(exc)
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__
