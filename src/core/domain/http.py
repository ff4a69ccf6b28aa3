"""HTTP domain model: methods, requests and the request outcome.

Conventions:
- The domain knows nothing about the transport (`httpx`) or the decoder.
- A request outcome is a closed sum type: `Ok[T] | Err`. Failures are values,
  not exceptions; `NetworkError` only exists for callers that opt in through
  `unwrap()`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, TypeVar, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

T = TypeVar("T")


class HTTPMethod(str, Enum):
    """Methods accepted by the executor."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class ErrorKind(str, Enum):
    """Closed classification of why a call did not produce a value."""

    INVALID_URL = "invalid_url"
    REQUEST_FAILED = "request_failed"
    TIMEOUT = "timeout"
    DECODING_FAILED = "decoding_failed"
    UNKNOWN = "unknown"

    @property
    def description(self) -> str:
        """Human readable message, suitable for direct display."""

        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[ErrorKind, str] = {
    ErrorKind.INVALID_URL: "Invalid URL",
    ErrorKind.REQUEST_FAILED: "Request Failed",
    ErrorKind.DECODING_FAILED: "Error while decoding data",
    ErrorKind.TIMEOUT: "Request timed out",
    ErrorKind.UNKNOWN: "Unknown Error",
}


class Request(BaseModel):
    """A single outbound request. Built fresh per call, immutable."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(
        ...,
        min_length=1,
        description="Absolute URL, already validated by the executor.",
    )
    method: HTTPMethod = Field(
        default=HTTPMethod.GET,
        description="HTTP method. No body or custom headers are sent.",
    )


class NetworkError(Exception):
    """Raised by `Err.unwrap()`; carries the classified kind."""

    def __init__(self, kind: ErrorKind, detail: str | None = None) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(kind.description)


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome. `detail` is diagnostic text for logs, never a value."""

    kind: ErrorKind
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        return self.kind.description

    def unwrap(self) -> NoReturn:
        raise NetworkError(self.kind, self.detail)


Result = Union[Ok[T], Err]
