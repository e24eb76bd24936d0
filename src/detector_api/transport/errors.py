from __future__ import annotations

import json
from typing import Any


class DetectorAPIError(RuntimeError):
    """Base error for every failure raised by the request pipeline."""


class TransportError(DetectorAPIError):
    """No usable response was obtained (DNS, refused connection, broken stream)."""

    def __init__(self, message: str, *, method: str | None = None, url: str | None = None) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


class RequestTimeout(TransportError):
    """The exchange did not finish before its deadline."""


class APIError(DetectorAPIError):
    """The server answered with a status other than the one the operation expects."""

    def __init__(self, status_code: int, body: bytes, *, expected_status: int | None = None) -> None:
        self.status_code = status_code
        self.body = body
        self.expected_status = expected_status
        self.code: Any = None
        self.message: str | None = None
        envelope = _parse_envelope(body)
        if envelope is not None:
            self.code = envelope.get('code')
            message = envelope.get('message')
            self.message = message if isinstance(message, str) else None
        super().__init__(self._describe())

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def _describe(self) -> str:
        detail = self.message if self.message is not None else self.text
        if detail:
            return f"Bad status {self.status_code}: {detail}"
        return f"Bad status {self.status_code}"


class DecodeError(DetectorAPIError):
    """A successful response body did not fit the expected shape."""

    def __init__(self, message: str, body: bytes) -> None:
        super().__init__(message)
        self.body = body


def _parse_envelope(body: bytes) -> dict[str, Any] | None:
    if not body:
        return None
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if isinstance(payload, dict):
        return payload
    return None


__all__ = ["APIError", "DecodeError", "DetectorAPIError", "RequestTimeout", "TransportError"]
