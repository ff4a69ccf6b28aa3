"""Request executor contract.

Protocol rather than a base class: any object with a matching `execute`
(the httpx adapter, a fake in tests) satisfies it.
"""

from __future__ import annotations

from typing import Protocol, TypeVar, runtime_checkable

from core.domain.http import HTTPMethod, Result

T = TypeVar("T")


@runtime_checkable
class RequestExecutor(Protocol):
    """Performs one request and decodes the body into `target`.

    Rules:
    - `execute` is asynchronous; the only suspension point is the wait for
      the response (or the timeout).
    - Always returns exactly one `Ok` or `Err`, never raises for the
      classified failure kinds.
    """

    async def execute(self, url: str, method: HTTPMethod, target: type[T]) -> Result[T]:
        ...
