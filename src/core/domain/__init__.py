"""Domain model.

Pure data structures (pydantic v2, dataclasses): the domain does not know
about HTTP transports, CLI or decoders.
"""

from core.domain.http import (
    Err,
    ErrorKind,
    HTTPMethod,
    NetworkError,
    Ok,
    Request,
    Result,
)

__all__ = [
    "Err",
    "ErrorKind",
    "HTTPMethod",
    "NetworkError",
    "Ok",
    "Request",
    "Result",
]
