"""Classify and decode responses produced by the dispatcher.

Every response handed to :func:`read_response` is read to end-of-stream and
closed exactly once, whichever way the call ends: success, API error, decode
error, a broken stream, or cancellation.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from detector_api.transport.errors import APIError, DecodeError, RequestTimeout, TransportError

LOGGER = logging.getLogger(__name__)


def classify(response: httpx.Response, expected_status: int) -> None:
    """Raise :class:`APIError` unless ``response`` carries ``expected_status``.

    The body must already have been read.
    """

    if response.status_code == expected_status:
        return
    error = APIError(response.status_code, response.content, expected_status=expected_status)
    LOGGER.warning(
        "%s %s: expected %s, got %s",
        response.request.method,
        response.request.url,
        expected_status,
        response.status_code,
    )
    raise error


def decode_body(response: httpx.Response, shape: Any) -> Any:
    """Validate the body of a classified response against ``shape``.

    ``shape`` is anything pydantic can build a ``TypeAdapter`` for; ``None``
    marks a no-content operation whose body (if any) is ignored.
    """

    if shape is None:
        return None
    body = response.content
    try:
        return _adapter(shape).validate_json(body)
    except ValidationError as exc:
        LOGGER.warning("Undecodable %s body from %s", _shape_name(shape), response.request.url)
        raise DecodeError(f"response body does not match {_shape_name(shape)}: {exc}", body) from exc


async def drain(response: httpx.Response) -> bytes:
    try:
        return await response.aread()
    except httpx.TimeoutException as exc:
        raise RequestTimeout(
            f"timed out reading {response.request.url}",
            method=response.request.method,
            url=str(response.request.url),
        ) from exc
    except httpx.DecodingError as exc:
        LOGGER.warning("Undecodable content encoding from %s", response.request.url)
        raise DecodeError(f"cannot decode body of {response.request.url}: {exc}", b"") from exc
    except httpx.RequestError as exc:
        raise TransportError(
            f"failed reading {response.request.url}: {exc}",
            method=response.request.method,
            url=str(response.request.url),
        ) from exc


async def read_response(response: httpx.Response, expected_status: int, shape: Any = None) -> Any:
    """Drain, classify and decode ``response``, then release it."""

    try:
        await drain(response)
        classify(response, expected_status)
        return decode_body(response, shape)
    finally:
        await response.aclose()


@lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter[Any]:
    return TypeAdapter(shape)


def _shape_name(shape: Any) -> str:
    return getattr(shape, '__name__', None) or repr(shape)


__all__ = ["classify", "decode_body", "drain", "read_response"]
